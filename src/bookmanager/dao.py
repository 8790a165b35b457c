"""Book storage accessor: SQL over a session's shared connection."""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, Sequence

from bookmanager.entity import Book
from bookmanager.storage.connection import Session, Transaction, TransactionOutcome

logger = logging.getLogger(__name__)

_INSERT_SQL = "INSERT INTO BOOKS (NAME, AUTHOR, PRINT_YEAR, IS_READ) VALUES (?, ?, ?, ?)"
_UPDATE_SQL = "UPDATE BOOKS SET NAME = ?, AUTHOR = ?, PRINT_YEAR = ?, IS_READ = ? WHERE ID = ?"
_DELETE_SQL = "DELETE FROM BOOKS WHERE ID = ?"
_SELECT_SQL = "SELECT ID, NAME, AUTHOR, PRINT_YEAR, IS_READ FROM BOOKS"


def _insert(tx: Transaction, book: Book) -> None:
    cursor = tx.execute(_INSERT_SQL, (book.name, book.author, book.print_year, book.is_read))
    # The generated id only becomes the book's id once the row is committed.
    tx.on_commit(functools.partial(setattr, book, "id", cursor.lastrowid))


def _update(tx: Transaction, book: Book) -> None:
    tx.execute(_UPDATE_SQL, (book.name, book.author, book.print_year, book.is_read, book.id))


def _delete(tx: Transaction, book: Book) -> None:
    tx.execute(_DELETE_SQL, (book.id,))


class BookDAO:
    """Create, read, update and delete books.

    Writes run inside a transaction with auto-commit off and return the
    :class:`TransactionOutcome`. Pass ``transaction=`` to enlist a write in a
    transaction the caller opened with :meth:`Session.transaction`; the
    accessor then leaves committing to the caller and returns ``None`` unless
    it had to roll back. Generated ids are written back onto added books
    when their transaction commits.

    A ``None`` book, or a ``None`` entry in a batch, rolls back the whole
    transaction without touching stored rows and without raising.

    Reads switch auto-commit back on before querying, so they raise
    RuntimeError while a caller's transaction is still open.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    # --- Writes ---

    def add(
        self, book: Book | None, transaction: Transaction | None = None
    ) -> TransactionOutcome | None:
        return self._write("add", [book], _insert, transaction)

    def add_all(
        self, books: Sequence[Book | None], transaction: Transaction | None = None
    ) -> TransactionOutcome | None:
        return self._write("add", books, _insert, transaction)

    def update(
        self, book: Book | None, transaction: Transaction | None = None
    ) -> TransactionOutcome | None:
        return self._write("update", [book], _update, transaction)

    def update_all(
        self, books: Sequence[Book | None], transaction: Transaction | None = None
    ) -> TransactionOutcome | None:
        return self._write("update", books, _update, transaction)

    def remove(
        self, book: Book | None, transaction: Transaction | None = None
    ) -> TransactionOutcome | None:
        return self._write("remove", [book], _delete, transaction)

    def remove_all(
        self, books: Sequence[Book | None], transaction: Transaction | None = None
    ) -> TransactionOutcome | None:
        return self._write("remove", books, _delete, transaction)

    # --- Reads ---

    def get_by_id(self, book_id: int) -> Book:
        """Return the book with ``book_id``, or an empty Book if there is none."""
        rows = self._query(f"{_SELECT_SQL} WHERE ID = ?", (book_id,))
        return rows[0] if rows else Book()

    def get_by_name(self, name: str) -> list[Book]:
        return self._query(f"{_SELECT_SQL} WHERE NAME = ? ORDER BY ID", (name,))

    def get_by_author(self, author: str) -> list[Book]:
        return self._query(f"{_SELECT_SQL} WHERE AUTHOR = ? ORDER BY ID", (author,))

    def get_by_print_year(self, print_year: int) -> list[Book]:
        return self._query(f"{_SELECT_SQL} WHERE PRINT_YEAR = ? ORDER BY ID", (print_year,))

    def get_by_is_read(self, is_read: bool) -> list[Book]:
        return self._query(f"{_SELECT_SQL} WHERE IS_READ = ? ORDER BY ID", (is_read,))

    def get_all(self) -> list[Book]:
        return self._query(f"{_SELECT_SQL} ORDER BY ID")

    # --- Internals ---

    def _write(
        self,
        action: str,
        books: Sequence[Book | None],
        statement: Callable[[Transaction, Book], None],
        transaction: Transaction | None,
    ) -> TransactionOutcome | None:
        if transaction is not None:
            return self._apply(action, books, statement, transaction)

        with self.session.transaction() as tx:
            self._apply(action, books, statement, tx)
            if tx.active:
                tx.commit()
                logger.info("Committed %s of %d book(s)", action, len(books))
        return tx.outcome

    def _apply(
        self,
        action: str,
        books: Sequence[Book | None],
        statement: Callable[[Transaction, Book], None],
        tx: Transaction,
    ) -> TransactionOutcome | None:
        if books is None or any(book is None for book in books):
            logger.warning("Rolled back %s: batch contains a missing book", action)
            return tx.rollback()
        for book in books:
            statement(tx, book)
        return tx.outcome

    def _query(self, sql: str, params: Sequence[Any] = ()) -> list[Book]:
        self.session.set_auto_commit(True)
        rows = self.session.open_connection().execute(sql, params).fetchall()
        logger.debug("Fetched %d book(s)", len(rows))
        return [Book.from_row(row) for row in rows]
