"""Book entity."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass


@dataclass
class Book:
    """A book row. The default instance is the empty book returned for a missed lookup.

    ``id`` is assigned by storage on insert; whatever the caller set beforehand
    is overwritten.
    """

    id: int = 0
    name: str | None = None
    author: str | None = None
    print_year: int = 0
    is_read: bool = False

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> Book:
        """Build a Book from a BOOKS row."""
        return cls(
            id=row["ID"],
            name=row["NAME"],
            author=row["AUTHOR"],
            print_year=row["PRINT_YEAR"],
            is_read=bool(row["IS_READ"]),
        )
