import os
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from typing import Optional, List, Callable

import aiosqlite

from ..core.errors import (
    StoreError,
    DuplicateUsernameError,
    StoreUnavailableError,
    CorruptRecordError,
    AccountNotFoundError,
)
from ..db.registry_schema import REGISTRY_MIGRATIONS
from ..models.account import Account, AccountSummary, AccountStats

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _to_db_time(value: datetime) -> str:
    """Fixed-width UTC ISO-8601 so text order equals time order"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def _from_db_time(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class AccountStore:
    """Owns the account registry database.

    Every operation opens its own connection and commits a single statement,
    so uniqueness and counter updates are enforced by SQLite itself and no
    in-process lock is ever held. Use as an async context manager to get the
    schema applied on entry and the store closed on every exit path.
    """

    def __init__(
        self,
        registry_path: str = "app_data/shared/accounts.db",
        timeout: float = 5.0,
        clock: Callable[[], datetime] = utcnow,
    ):
        if registry_path == ":memory:":
            raise ValueError("AccountStore needs a file path; ':memory:' is private to one connection")
        self.registry_path = registry_path
        self.timeout = timeout
        self._clock = clock
        self._is_open = False

    async def __aenter__(self) -> "AccountStore":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @property
    def is_open(self) -> bool:
        return self._is_open

    def _ensure_directory(self):
        """Ensure the registry directory exists"""
        directory = os.path.dirname(self.registry_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

    @asynccontextmanager
    async def _connect(self, require_open: bool = True):
        if require_open and not self._is_open:
            raise StoreUnavailableError("Account store is closed")
        try:
            async with aiosqlite.connect(self.registry_path, timeout=self.timeout) as db:
                db.row_factory = aiosqlite.Row
                yield db
        except aiosqlite.IntegrityError as e:
            raise StoreError(f"Constraint violation: {e}") from e
        except aiosqlite.OperationalError as e:
            logger.error(f"Account registry unavailable at {self.registry_path}: {e}")
            raise StoreUnavailableError(f"Account store unavailable: {e}") from e
        except aiosqlite.ProgrammingError as e:
            raise StoreError(f"Invalid registry operation: {e}") from e
        except aiosqlite.DatabaseError as e:
            logger.error(f"Account registry at {self.registry_path} is unreadable: {e}")
            raise CorruptRecordError(f"Account registry is corrupt: {e}") from e

    async def initialize(self):
        """Create the registry file and apply pending migrations"""
        self._ensure_directory()

        async with self._connect(require_open=False) as db:
            await db.execute("PRAGMA journal_mode=WAL")
            cursor = await db.execute("PRAGMA user_version")
            row = await cursor.fetchone()
            current_version = row[0] if row else 0

            for version, description, sql in REGISTRY_MIGRATIONS:
                if version <= current_version:
                    continue
                await db.executescript(sql)
                await db.execute(f"PRAGMA user_version = {int(version)}")
                logger.info(f"Applied registry migration {version}: {description}")

            await db.commit()

        self._is_open = True
        logger.info(f"Account store opened at {self.registry_path}")

    async def close(self):
        """Refuse further operations"""
        if self._is_open:
            self._is_open = False
            logger.info(f"Account store closed at {self.registry_path}")

    def _row_to_account(self, row) -> Account:
        try:
            failed_attempts = int(row["failed_attempts"])
            if failed_attempts < 0:
                raise ValueError(f"negative failed_attempts {failed_attempts}")
            return Account(
                id=int(row["id"]),
                username=str(row["username"]),
                credential=str(row["credential"]),
                registered_at=_from_db_time(row["registered_at"]),
                last_login_at=_from_db_time(row["last_login_at"]),
                failed_attempts=failed_attempts,
                is_active=bool(row["is_active"]),
            )
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise CorruptRecordError(f"Cannot decode account row: {e}") from e

    async def create(self, username: str, credential: str) -> int:
        """Insert a new active account; the UNIQUE constraint decides duplicates"""
        registered_at = _to_db_time(self._clock())

        async with self._connect() as db:
            try:
                cursor = await db.execute("""
                    INSERT INTO accounts (
                        username, credential, registered_at,
                        last_login_at, failed_attempts, is_active
                    ) VALUES (?, ?, ?, NULL, 0, 1)
                """, (username, credential, registered_at))
                await db.commit()
            except aiosqlite.IntegrityError as e:
                if "username" in str(e):
                    raise DuplicateUsernameError(username) from e
                raise

            account_id = cursor.lastrowid

        logger.info(f"Created account {account_id} for '{username}'")
        return account_id

    async def find_by_username(self, username: str) -> Optional[Account]:
        """Get account by username, active or not"""
        async with self._connect() as db:
            cursor = await db.execute("""
                SELECT * FROM accounts WHERE username = ?
            """, (username,))
            row = await cursor.fetchone()
        return self._row_to_account(row) if row else None

    async def find_by_id(self, account_id: int) -> Optional[Account]:
        """Get account by ID"""
        async with self._connect() as db:
            cursor = await db.execute("""
                SELECT * FROM accounts WHERE id = ?
            """, (account_id,))
            row = await cursor.fetchone()
        return self._row_to_account(row) if row else None

    async def record_successful_login(self, account_id: int):
        """Stamp last login and reset the failed attempt counter"""
        now = _to_db_time(self._clock())

        async with self._connect() as db:
            cursor = await db.execute("""
                UPDATE accounts
                SET last_login_at = MAX(?, registered_at), failed_attempts = 0
                WHERE id = ?
            """, (now, account_id))
            if cursor.rowcount == 0:
                raise AccountNotFoundError(account_id)
            await db.commit()

    async def record_failed_attempt(self, account_id: int) -> int:
        """Increment failed login attempts and return new count"""
        async with self._connect() as db:
            cursor = await db.execute("""
                UPDATE accounts SET failed_attempts = failed_attempts + 1
                WHERE id = ?
            """, (account_id,))
            if cursor.rowcount == 0:
                raise AccountNotFoundError(account_id)

            # Read inside the same write transaction so the count is ours
            cursor = await db.execute("""
                SELECT failed_attempts FROM accounts WHERE id = ?
            """, (account_id,))
            result = await cursor.fetchone()
            await db.commit()

        return result[0]

    async def update_credential(self, account_id: int, credential: str):
        """Replace the stored credential"""
        async with self._connect() as db:
            cursor = await db.execute("""
                UPDATE accounts SET credential = ? WHERE id = ?
            """, (credential, account_id))
            if cursor.rowcount == 0:
                raise AccountNotFoundError(account_id)
            await db.commit()

    async def set_active(self, account_id: int, is_active: bool):
        """Enable or soft-disable an account"""
        async with self._connect() as db:
            cursor = await db.execute("""
                UPDATE accounts SET is_active = ? WHERE id = ?
            """, (1 if is_active else 0, account_id))
            if cursor.rowcount == 0:
                raise AccountNotFoundError(account_id)
            await db.commit()

        logger.info(f"Account {account_id} {'enabled' if is_active else 'disabled'}")

    async def list_all(self) -> List[AccountSummary]:
        """List every account, most recently registered first"""
        async with self._connect() as db:
            cursor = await db.execute("""
                SELECT * FROM accounts
                ORDER BY registered_at DESC, id DESC
            """)
            rows = await cursor.fetchall()
        return [self._row_to_account(row).summary() for row in rows]

    async def aggregate_stats(self, recent_within: timedelta = timedelta(days=7)) -> AccountStats:
        """Count all accounts, active accounts and accounts with a login inside the window"""
        since = _to_db_time(self._clock() - recent_within)

        async with self._connect() as db:
            cursor = await db.execute("""
                SELECT
                    COUNT(*) AS total,
                    COALESCE(SUM(CASE WHEN is_active = 1 THEN 1 ELSE 0 END), 0) AS active,
                    COALESCE(SUM(CASE WHEN last_login_at >= ? THEN 1 ELSE 0 END), 0) AS recent_logins
                FROM accounts
            """, (since,))
            row = await cursor.fetchone()

        return AccountStats(
            total=row["total"],
            active=row["active"],
            recent_logins=row["recent_logins"],
        )
