"""
SQLite store - shared connection, repositories and savepoint transactions.

One connection serves every repository so that all writes of an operation,
value movements included, commit or roll back together. Transactions nest:
each level is a SAVEPOINT, so an operation that re-enters the store from a
payout hook runs inside the outer operation and sees its writes.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from tierpass.adapters.sqlite.migrator import DEFAULT_MIGRATIONS_DIR, SQLiteMigrator
from tierpass.adapters.sqlite.repos import (
    SQLiteContentRepo,
    SQLiteCreatorApprovalRepo,
    SQLiteEarningsRepo,
    SQLiteEventRepo,
    SQLitePlatformStateRepo,
    SQLiteSubscriptionRepo,
    SQLiteValueTransfer,
    dict_factory,
)

logger = logging.getLogger(__name__)


class SQLiteStore:
    """
    SQLite unit of work.

    Provides transaction management and access to all repositories.
    Uses a single shared connection guarded by a re-entrant lock.
    """

    def __init__(self, db_path: str, migrations_dir: str = DEFAULT_MIGRATIONS_DIR):
        self.db_path = db_path
        self.migrations_dir = migrations_dir
        self._lock = threading.RLock()
        self._depth = 0
        self._conn: sqlite3.Connection | None = sqlite3.connect(
            db_path, check_same_thread=False, isolation_level=None
        )
        self._conn.row_factory = dict_factory
        self._conn.execute("PRAGMA foreign_keys = ON;")

        self.platform_state = SQLitePlatformStateRepo(db_path, self._conn)
        self.approvals = SQLiteCreatorApprovalRepo(db_path, self._conn)
        self.subscriptions = SQLiteSubscriptionRepo(db_path, self._conn)
        self.contents = SQLiteContentRepo(db_path, self._conn)
        self.earnings = SQLiteEarningsRepo(db_path, self._conn)
        self.events = SQLiteEventRepo(db_path, self._conn)

    @property
    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise RuntimeError("Store is closed")
        return self._conn

    def migrate(self) -> list[str]:
        """Apply pending schema migrations."""
        with self._lock:
            migrator = SQLiteMigrator(self.db_path, self.migrations_dir, self.connection)
            return migrator.run_migrations()

    def value_transfer(
        self, on_pay_out: Callable[[str, int], None] | None = None
    ) -> SQLiteValueTransfer:
        """Ledger-backed value transfer sharing this store's transactions."""
        return SQLiteValueTransfer(self.db_path, self.connection, on_pay_out=on_pay_out)

    @contextmanager
    def transaction(self) -> Iterator[SQLiteStore]:
        """
        Run a block atomically.

        The outermost level commits on exit; any exception rolls the current
        level back and propagates.
        """
        with self._lock:
            conn = self.connection
            name = f"sp_{self._depth}"
            self._depth += 1
            conn.execute(f"SAVEPOINT {name}")
            try:
                yield self
            except BaseException:
                conn.execute(f"ROLLBACK TO SAVEPOINT {name}")
                conn.execute(f"RELEASE SAVEPOINT {name}")
                raise
            else:
                conn.execute(f"RELEASE SAVEPOINT {name}")
            finally:
                self._depth -= 1

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
                logger.debug("Closed store %s", self.db_path)

    def __enter__(self) -> SQLiteStore:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
