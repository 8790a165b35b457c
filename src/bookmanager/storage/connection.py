"""SQLite connection management."""

from __future__ import annotations

import enum
import logging
import sqlite3
from contextlib import contextmanager
from typing import Any, Callable, Generator, Sequence

logger = logging.getLogger(__name__)

# isolation_level used while auto-commit is off; sqlite3 opens the
# transaction implicitly before the first INSERT/UPDATE/DELETE.
_MANUAL_COMMIT_LEVEL = "DEFERRED"


@contextmanager
def get_connection(database_path: str) -> Generator[sqlite3.Connection, None, None]:
    """Open a SQLite connection with WAL mode and foreign keys enabled.

    Commits on clean exit, rolls back on exception, and always closes.
    """
    conn = sqlite3.connect(database_path)
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    conn.row_factory = sqlite3.Row
    try:
        yield conn
        conn.commit()
    except BaseException:
        conn.rollback()
        raise
    finally:
        conn.close()


class TransactionOutcome(enum.Enum):
    """How a transaction finished."""

    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class Transaction:
    """Explicit handle on one transaction of a session's connection.

    Statements run through :meth:`execute`. The transaction is finished by
    exactly one call to :meth:`commit` or :meth:`rollback`, both of which
    return the resulting :class:`TransactionOutcome`. Callbacks registered
    with :meth:`on_commit` run only once the commit succeeded.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self._outcome: TransactionOutcome | None = None
        self._on_commit: list[Callable[[], None]] = []

    @property
    def active(self) -> bool:
        return self._outcome is None

    @property
    def outcome(self) -> TransactionOutcome | None:
        """The finishing outcome, or None while the transaction is still open."""
        return self._outcome

    def execute(self, sql: str, params: Sequence[Any] = ()) -> sqlite3.Cursor:
        self._ensure_active()
        return self._conn.execute(sql, params)

    def on_commit(self, callback: Callable[[], None]) -> None:
        self._ensure_active()
        self._on_commit.append(callback)

    def commit(self) -> TransactionOutcome:
        self._ensure_active()
        self._conn.commit()
        self._outcome = TransactionOutcome.COMMITTED
        callbacks, self._on_commit = self._on_commit, []
        for callback in callbacks:
            callback()
        return self._outcome

    def rollback(self) -> TransactionOutcome:
        self._ensure_active()
        self._conn.rollback()
        self._outcome = TransactionOutcome.ROLLED_BACK
        self._on_commit = []
        return self._outcome

    def _ensure_active(self) -> None:
        if self._outcome is not None:
            raise RuntimeError(f"Transaction already finished ({self._outcome.value})")


def _is_open(conn: sqlite3.Connection) -> bool:
    try:
        conn.total_changes
    except sqlite3.ProgrammingError:
        return False
    return True


class Session:
    """Owns the single shared connection to a database file.

    The connection is opened lazily and re-opened on demand once it has been
    closed, whether through :meth:`close_connection` or directly, so callers
    holding a Session never see a closed connection. A fresh connection
    starts with auto-commit on.

    At most one :meth:`transaction` is open at a time; while it is active,
    auto-commit cannot be switched back on.
    """

    def __init__(self, database_path: str) -> None:
        self.database_path = database_path
        self._conn: sqlite3.Connection | None = None
        self._active: Transaction | None = None

    @property
    def is_closed(self) -> bool:
        return self._conn is None or not _is_open(self._conn)

    @property
    def in_transaction(self) -> bool:
        """True while a transaction from :meth:`transaction` is still unfinished."""
        return self._active is not None and self._active.active

    def open_connection(self) -> sqlite3.Connection:
        """Return the shared connection, opening a new one if needed."""
        if self.is_closed:
            conn = sqlite3.connect(self.database_path, isolation_level=None)
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute("PRAGMA foreign_keys=ON")
            conn.row_factory = sqlite3.Row
            self._conn = conn
            logger.debug("Opened connection to %s", self.database_path)
        return self._conn

    def close_connection(self) -> None:
        if self._conn is None:
            return
        self._conn.close()
        self._conn = None
        logger.debug("Closed connection to %s", self.database_path)

    @property
    def auto_commit(self) -> bool:
        return self.open_connection().isolation_level is None

    def set_auto_commit(self, auto_commit: bool) -> None:
        """Toggle auto-commit. Switching it on commits any pending transaction.

        Raises RuntimeError when switching it on while a transaction is open.
        """
        if auto_commit and self.in_transaction:
            raise RuntimeError("Cannot enable auto-commit while a transaction is active")
        conn = self.open_connection()
        conn.isolation_level = None if auto_commit else _MANUAL_COMMIT_LEVEL

    @contextmanager
    def transaction(self) -> Generator[Transaction, None, None]:
        """Turn auto-commit off and yield a Transaction on the shared connection.

        Commits on clean exit unless the caller already finished the
        transaction; rolls back and re-raises on exception. Auto-commit stays
        off afterwards.
        """
        if self.in_transaction:
            raise RuntimeError("A transaction is already active on this session")
        self.set_auto_commit(False)
        tx = Transaction(self.open_connection())
        self._active = tx
        try:
            yield tx
        except BaseException:
            if tx.active:
                try:
                    tx.rollback()
                except sqlite3.Error:
                    logger.exception("Rollback failed on %s", self.database_path)
            raise
        else:
            if tx.active:
                tx.commit()
        finally:
            self._active = None
