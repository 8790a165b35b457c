"""Service facade over the book storage accessor."""

from __future__ import annotations

from typing import Sequence

from bookmanager.dao import BookDAO
from bookmanager.entity import Book
from bookmanager.storage.connection import Transaction, TransactionOutcome


class BookService:
    """Forwards every call to ``book_dao`` unchanged and returns its result unchanged.

    ``book_dao`` is a plain attribute so the accessor can be swapped, e.g. for a mock.
    """

    def __init__(self, book_dao: BookDAO) -> None:
        self.book_dao = book_dao

    def add(
        self, book: Book | None, transaction: Transaction | None = None
    ) -> TransactionOutcome | None:
        return self.book_dao.add(book, transaction=transaction)

    def add_all(
        self, books: Sequence[Book | None], transaction: Transaction | None = None
    ) -> TransactionOutcome | None:
        return self.book_dao.add_all(books, transaction=transaction)

    def get_by_id(self, book_id: int) -> Book:
        return self.book_dao.get_by_id(book_id)

    def get_by_name(self, name: str) -> list[Book]:
        return self.book_dao.get_by_name(name)

    def get_by_author(self, author: str) -> list[Book]:
        return self.book_dao.get_by_author(author)

    def get_by_print_year(self, print_year: int) -> list[Book]:
        return self.book_dao.get_by_print_year(print_year)

    def get_by_is_read(self, is_read: bool) -> list[Book]:
        return self.book_dao.get_by_is_read(is_read)

    def get_all(self) -> list[Book]:
        return self.book_dao.get_all()

    def update(
        self, book: Book | None, transaction: Transaction | None = None
    ) -> TransactionOutcome | None:
        return self.book_dao.update(book, transaction=transaction)

    def update_all(
        self, books: Sequence[Book | None], transaction: Transaction | None = None
    ) -> TransactionOutcome | None:
        return self.book_dao.update_all(books, transaction=transaction)

    def remove(
        self, book: Book | None, transaction: Transaction | None = None
    ) -> TransactionOutcome | None:
        return self.book_dao.remove(book, transaction=transaction)

    def remove_all(
        self, books: Sequence[Book | None], transaction: Transaction | None = None
    ) -> TransactionOutcome | None:
        return self.book_dao.remove_all(books, transaction=transaction)
