import logging
import sqlite3
from typing import Sequence

from .config import DEFAULT_ITEMS, DEFAULT_MANAGER
from .errors import FatalStartup, StorageFailure

logger = logging.getLogger(__name__)


def normalize(value: str | None) -> str | None:
    """trim + casefold; the one normalisation used for category matching"""
    if value is None:
        return None
    return value.strip().casefold()


# database layer
class DatabaseManager:
    """own the single sqlite connection: schema, seed, execute/query primitives"""
    def __init__(self, path: str = "pizzastore.db", seed: bool = True):
        self.path = path
        self.conn: sqlite3.Connection | None = None
        try:
            self.conn = sqlite3.connect(path)
            self.conn.row_factory = sqlite3.Row
            self.conn.autocommit = True
            self.conn.create_function("NORMALIZE", 1, normalize, deterministic=True)
            self._create_schema()
            if seed:
                self._seed_items()
                self._seed_default_manager()
        except sqlite3.Error as e:
            logger.error("unable to connect to database %s: %s", path, e)
            self.close()
            raise FatalStartup(f"unable to connect to database: {e}") from e
        logger.info("connected to %s", path)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False

    def _create_schema(self):
        """create tables if missing"""
        self.conn.executescript(
            """--sql
            CREATE TABLE IF NOT EXISTS users (
                login TEXT PRIMARY KEY,
                password TEXT NOT NULL,
                role TEXT NOT NULL DEFAULT 'customer',
                favoriteItems TEXT,
                phoneNum TEXT
            );
            CREATE TABLE IF NOT EXISTS Items (
                itemName TEXT PRIMARY KEY,
                ingredients TEXT NOT NULL,
                typeOfItem TEXT NOT NULL,
                price REAL NOT NULL CHECK (price >= 0),
                description TEXT
            );
            """
        )

    def _seed_items(self):
        """seed default catalog once"""
        self.conn.executemany(
            """--sql
            INSERT OR IGNORE INTO Items(itemName, ingredients, typeOfItem, price, description)
            VALUES (?, ?, ?, ?, ?);
            """,
            DEFAULT_ITEMS
        )

    def _seed_default_manager(self):
        """create a default manager account if missing"""
        login, password, phone = DEFAULT_MANAGER
        self.conn.execute(
            """--sql
            INSERT OR IGNORE INTO users(login, password, role, favoriteItems, phoneNum)
            VALUES (?, ?, 'manager', NULL, ?);
            """,
            (login, password, phone)
        )

    def _require_conn(self) -> sqlite3.Connection:
        if self.conn is None:
            raise StorageFailure("database connection is closed")
        return self.conn

    # gateway primitives
    def execute(self, statement: str, params: Sequence = ()) -> int:
        """run an insert/update/delete; return affected row count"""
        conn = self._require_conn()
        try:
            return conn.execute(statement, params).rowcount
        except (sqlite3.Error, UnicodeError) as e:
            logger.error("statement failed: %s", e)
            raise StorageFailure() from e

    def query(self, statement: str, params: Sequence = ()) -> list[sqlite3.Row]:
        """run a select; rows are addressable by position and by column name"""
        conn = self._require_conn()
        try:
            return conn.execute(statement, params).fetchall()
        except (sqlite3.Error, UnicodeError) as e:
            logger.error("query failed: %s", e)
            raise StorageFailure() from e

    def user_exists(self, login: str) -> bool:
        """check if a login exists"""
        return bool(self.query("SELECT 1 FROM users WHERE login = ? LIMIT 1;", (login,)))

    @staticmethod
    def columns(rows: Sequence[sqlite3.Row]) -> list[str]:
        """column names of a result set (empty when there are no rows)"""
        return list(rows[0].keys()) if rows else []

    def close(self):
        """release the connection; safe to call more than once"""
        if self.conn is None:
            return
        self.conn.close()
        self.conn = None
        logger.info("disconnected from %s", self.path)
