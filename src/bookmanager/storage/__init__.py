"""Storage layer: SQLite connection, session and schema management."""

from bookmanager.storage.connection import (
    Session,
    Transaction,
    TransactionOutcome,
    get_connection,
)
from bookmanager.storage.schema import init_db, reset_db

__all__ = [
    "Session",
    "Transaction",
    "TransactionOutcome",
    "get_connection",
    "init_db",
    "reset_db",
]
