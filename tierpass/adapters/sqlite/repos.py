"""
SQLite repository adapters.

Each repository either owns short-lived connections (db_path only) or works on
a connection supplied by SQLiteStore, in which case commit/rollback belong to
the store's transaction.
"""

from __future__ import annotations

import builtins
import json
import logging
import sqlite3
from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager, contextmanager, nullcontext
from datetime import datetime
from typing import Any

from tierpass.core.ports.value_transfer import CUSTODY_ACCOUNT, InsufficientCustodyError
from tierpass.domain.entities import Content, Event, EventName, PlatformState, Subscription
from tierpass.domain.errors import PlatformNotInitializedError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Helper functions
# -----------------------------------------------------------------------------


def dict_factory(cursor: sqlite3.Cursor, row: tuple[Any, ...]) -> dict[str, Any]:
    """Convert SQLite row to dictionary."""
    return {col[0]: row[idx] for idx, col in enumerate(cursor.description)}


def parse_dt(s: str) -> datetime:
    """Parse ISO datetime string."""
    return datetime.fromisoformat(s)


# -----------------------------------------------------------------------------
# Base SQLite Repository
# -----------------------------------------------------------------------------


class SQLiteRepoBase:
    """Base class for SQLite repositories."""

    def __init__(self, db_path: str, connection: sqlite3.Connection | None = None):
        self.db_path = db_path
        self._external_conn = connection

    def _get_conn(self) -> sqlite3.Connection:
        """Get database connection (uses external if provided)."""
        if self._external_conn is not None:
            return self._external_conn

        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    def _should_close(self) -> bool:
        """Whether to close connection after use."""
        return self._external_conn is None

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection; commit and close it only if this repo owns it."""
        conn = self._get_conn()
        try:
            yield conn
            if self._should_close():
                conn.commit()
        except Exception:
            if self._should_close():
                conn.rollback()
            raise
        finally:
            if self._should_close():
                conn.close()


# -----------------------------------------------------------------------------
# Platform state (single row)
# -----------------------------------------------------------------------------


class SQLitePlatformStateRepo(SQLiteRepoBase):
    def find(self) -> PlatformState | None:
        with self._connection() as conn:
            row = conn.execute("SELECT * FROM platform_state WHERE id = 1").fetchone()
        return self._map_row(row) if row else None

    def get(self) -> PlatformState:
        state = self.find()
        if state is None:
            raise PlatformNotInitializedError("Platform state has not been initialized")
        return state

    def save(self, state: PlatformState) -> PlatformState:
        with self._connection() as conn:
            conn.execute(
                """
                INSERT INTO platform_state (
                    id, administrator, unit_price, content_counter, paused, updated_at
                ) VALUES (1, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    administrator=excluded.administrator,
                    unit_price=excluded.unit_price,
                    content_counter=excluded.content_counter,
                    paused=excluded.paused,
                    updated_at=excluded.updated_at
                """,
                (
                    state.administrator,
                    state.unit_price,
                    state.content_counter,
                    int(state.paused),
                    state.updated_at.isoformat(),
                ),
            )
        return state

    def _map_row(self, row: dict[str, Any]) -> PlatformState:
        return PlatformState(
            administrator=row["administrator"],
            unit_price=row["unit_price"],
            content_counter=row["content_counter"],
            paused=bool(row["paused"]),
            updated_at=parse_dt(row["updated_at"]),
        )


# -----------------------------------------------------------------------------
# Creator allow-list
# -----------------------------------------------------------------------------


class SQLiteCreatorApprovalRepo(SQLiteRepoBase):
    def is_approved(self, identity: str) -> bool:
        with self._connection() as conn:
            row = conn.execute(
                "SELECT approved FROM creator_approvals WHERE identity = ?", (identity,)
            ).fetchone()
        return bool(row and row["approved"])

    def set_approved(self, identity: str, approved: bool, now: datetime) -> None:
        with self._connection() as conn:
            conn.execute(
                """
                INSERT INTO creator_approvals (identity, approved, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(identity) DO UPDATE SET
                    approved=excluded.approved,
                    updated_at=excluded.updated_at
                """,
                (identity, int(approved), now.isoformat()),
            )

    def list_approved(self) -> builtins.list[str]:
        with self._connection() as conn:
            rows = conn.execute(
                "SELECT identity FROM creator_approvals WHERE approved = 1 ORDER BY identity"
            ).fetchall()
        return [row["identity"] for row in rows]


# -----------------------------------------------------------------------------
# Subscriptions
# -----------------------------------------------------------------------------


class SQLiteSubscriptionRepo(SQLiteRepoBase):
    def get(self, subscriber: str) -> Subscription | None:
        with self._connection() as conn:
            row = conn.execute(
                "SELECT * FROM subscriptions WHERE subscriber = ?", (subscriber,)
            ).fetchone()
        if not row:
            return None
        return Subscription(
            subscriber=row["subscriber"],
            is_active=bool(row["is_active"]),
            expires_at=parse_dt(row["expires_at"]),
            tier=row["tier"],
        )

    def save(self, subscription: Subscription) -> Subscription:
        with self._connection() as conn:
            conn.execute(
                """
                INSERT INTO subscriptions (subscriber, is_active, expires_at, tier)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(subscriber) DO UPDATE SET
                    is_active=excluded.is_active,
                    expires_at=excluded.expires_at,
                    tier=excluded.tier
                """,
                (
                    subscription.subscriber,
                    int(subscription.is_active),
                    subscription.expires_at.isoformat(),
                    subscription.tier,
                ),
            )
        return subscription


# -----------------------------------------------------------------------------
# Content catalog
# -----------------------------------------------------------------------------


class SQLiteContentRepo(SQLiteRepoBase):
    def get(self, content_id: int) -> Content | None:
        with self._connection() as conn:
            row = conn.execute("SELECT * FROM contents WHERE id = ?", (content_id,)).fetchone()
        return self._map_row(row) if row else None

    def save(self, content: Content) -> Content:
        with self._connection() as conn:
            conn.execute(
                """
                INSERT INTO contents (
                    id, title, locator, creator, required_tier, created_at, is_active
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    title=excluded.title,
                    locator=excluded.locator,
                    creator=excluded.creator,
                    required_tier=excluded.required_tier,
                    is_active=excluded.is_active
                """,
                (
                    content.id,
                    content.title,
                    content.locator,
                    content.creator,
                    content.required_tier,
                    content.created_at.isoformat(),
                    int(content.is_active),
                ),
            )
        return content

    def list(
        self,
        *,
        active_only: bool = False,
        creator: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[builtins.list[Content], int]:
        clauses: builtins.list[str] = []
        params: builtins.list[Any] = []
        if active_only:
            clauses.append("is_active = 1")
        if creator is not None:
            clauses.append("creator = ?")
            params.append(creator)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with self._connection() as conn:
            total = conn.execute(
                f"SELECT COUNT(*) AS n FROM contents {where}", params
            ).fetchone()["n"]
            rows = conn.execute(
                f"SELECT * FROM contents {where} ORDER BY id ASC LIMIT ? OFFSET ?",
                [*params, limit, offset],
            ).fetchall()
        return [self._map_row(row) for row in rows], total

    def _map_row(self, row: dict[str, Any]) -> Content:
        return Content(
            id=row["id"],
            title=row["title"],
            locator=row["locator"],
            creator=row["creator"],
            required_tier=row["required_tier"],
            created_at=parse_dt(row["created_at"]),
            is_active=bool(row["is_active"]),
        )


# -----------------------------------------------------------------------------
# Earnings ledger
# -----------------------------------------------------------------------------


class SQLiteEarningsRepo(SQLiteRepoBase):
    def get_balance(self, creator: str) -> int:
        with self._connection() as conn:
            row = conn.execute(
                "SELECT balance FROM earnings_balances WHERE creator = ?", (creator,)
            ).fetchone()
        return row["balance"] if row else 0

    def credit(self, creator: str, amount: int) -> int:
        with self._connection() as conn:
            conn.execute(
                """
                INSERT INTO earnings_balances (creator, balance) VALUES (?, ?)
                ON CONFLICT(creator) DO UPDATE SET balance = balance + excluded.balance
                """,
                (creator, amount),
            )
            row = conn.execute(
                "SELECT balance FROM earnings_balances WHERE creator = ?", (creator,)
            ).fetchone()
        return row["balance"]

    def clear(self, creator: str) -> None:
        with self._connection() as conn:
            conn.execute(
                "UPDATE earnings_balances SET balance = 0 WHERE creator = ?", (creator,)
            )


# -----------------------------------------------------------------------------
# Notification log
# -----------------------------------------------------------------------------


class SQLiteEventRepo(SQLiteRepoBase):
    def append(self, event: Event) -> Event:
        with self._connection() as conn:
            cursor = conn.execute(
                "INSERT INTO events (name, payload_json, created_at) VALUES (?, ?, ?)",
                (event.name, json.dumps(event.payload), event.created_at.isoformat()),
            )
            seq = cursor.lastrowid
        return event.model_copy(update={"seq": seq})

    def list(
        self,
        *,
        name: EventName | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[builtins.list[Event], int]:
        where = "WHERE name = ?" if name else ""
        params: builtins.list[Any] = [name] if name else []

        with self._connection() as conn:
            total = conn.execute(
                f"SELECT COUNT(*) AS n FROM events {where}", params
            ).fetchone()["n"]
            rows = conn.execute(
                f"SELECT * FROM events {where} ORDER BY seq ASC LIMIT ? OFFSET ?",
                [*params, limit, offset],
            ).fetchall()

        return [
            Event(
                seq=row["seq"],
                name=row["name"],
                payload=json.loads(row["payload_json"]),
                created_at=parse_dt(row["created_at"]),
            )
            for row in rows
        ], total


# -----------------------------------------------------------------------------
# Value transfer (accounts table)
# -----------------------------------------------------------------------------


class SQLiteValueTransfer(SQLiteRepoBase):
    """
    Ledger-backed value transfer.

    Custody is the CUSTODY_ACCOUNT row; payouts credit the recipient's row.
    Shares the store connection, so a rolled-back operation also rolls back
    the value it moved.
    """

    def __init__(
        self,
        db_path: str,
        connection: sqlite3.Connection | None = None,
        on_pay_out: Callable[[str, int], None] | None = None,
    ):
        super().__init__(db_path, connection)
        self.on_pay_out = on_pay_out

    def _add(self, conn: sqlite3.Connection, principal: str, amount: int) -> None:
        conn.execute(
            """
            INSERT INTO accounts (principal, balance) VALUES (?, ?)
            ON CONFLICT(principal) DO UPDATE SET balance = balance + excluded.balance
            """,
            (principal, amount),
        )

    def _balance(self, conn: sqlite3.Connection, principal: str) -> int:
        row = conn.execute(
            "SELECT balance FROM accounts WHERE principal = ?", (principal,)
        ).fetchone()
        return row["balance"] if row else 0

    def receive(self, payer: str, amount: int) -> None:
        with self._connection() as conn:
            self._add(conn, CUSTODY_ACCOUNT, amount)
        logger.debug("SQLiteValueTransfer.receive: payer=%s amount=%d", payer, amount)

    def pay_out(self, recipient: str, amount: int) -> None:
        with self._connection() as conn:
            custody = self._balance(conn, CUSTODY_ACCOUNT)
            if amount > custody:
                raise InsufficientCustodyError(
                    f"Custody holds {custody}, cannot pay out {amount}"
                )
            self._add(conn, CUSTODY_ACCOUNT, -amount)
            self._add(conn, recipient, amount)
        logger.debug("SQLiteValueTransfer.pay_out: recipient=%s amount=%d", recipient, amount)

        if self.on_pay_out is not None:
            self.on_pay_out(recipient, amount)

    def custody_balance(self) -> int:
        with self._connection() as conn:
            return self._balance(conn, CUSTODY_ACCOUNT)

    def balance_of(self, principal: str) -> int:
        with self._connection() as conn:
            return self._balance(conn, principal)

    def savepoint(self) -> AbstractContextManager[None]:
        # Rows roll back with the store transaction
        return nullcontext()
