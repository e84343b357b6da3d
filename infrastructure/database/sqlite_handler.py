import logging
import sqlite3
import threading
from contextlib import contextmanager, nullcontext
from pathlib import Path
from typing import Iterator, Optional

from flask import Flask

from infrastructure.database.ops.metrics import MetricOperations

logger = logging.getLogger(__name__)

MEMORY_DATABASE = ":memory:"
METRIC_TYPES = ("temperature", "humidity", "soil_moisture", "light_level", "co2_level")


class SQLiteDatabaseHandler(MetricOperations):
    """Thread-safe SQLite handler decoupled from Flask globals."""

    def __init__(self, database_path: str, *, cache_size_kb: int = 8_000) -> None:
        self._database_path = database_path
        self._cache_size_kb = cache_size_kb
        self._local = threading.local()
        # ":memory:" is private to the connection that opened it, so every
        # thread shares one connection and writes are serialized on it
        self._shared: Optional[sqlite3.Connection] = None
        self._shared_lock = threading.RLock()

        # Ensure the directory for the database file exists
        if not self.in_memory:
            db_path = Path(database_path)
            if not db_path.parent.exists():
                db_path.parent.mkdir(parents=True, exist_ok=True)
                logger.info("Created database directory: %s", db_path.parent)

    @property
    def database_path(self) -> str:
        return self._database_path

    @property
    def in_memory(self) -> bool:
        return self._database_path == MEMORY_DATABASE

    # --- Lifecycle ------------------------------------------------------------
    def init_app(self, app: Flask | None = None) -> None:
        if app is not None:
            app.teardown_appcontext(self.close_db)
        self.create_tables()

    def get_db(self) -> sqlite3.Connection:
        if self.in_memory:
            with self._shared_lock:
                if self._shared is None:
                    self._shared = self._open_connection()
                return self._shared

        connection: Optional[sqlite3.Connection] = getattr(self._local, "connection", None)
        if connection is None:
            connection = self._open_connection()
            self._local.connection = connection
        return connection

    def _open_connection(self) -> sqlite3.Connection:
        connection = sqlite3.connect(self._database_path, check_same_thread=False)
        try:
            connection.row_factory = sqlite3.Row
            self._configure_connection(connection)
            return connection
        except Exception:
            connection.close()
            raise

    def _configure_connection(self, connection: sqlite3.Connection) -> None:
        """Configure SQLite connection.

        - WAL mode: concurrent readers alongside the writer
        - NORMAL synchronous: safe with WAL
        - Memory temp store: avoids temp file creation
        """
        connection.execute("PRAGMA journal_mode=WAL")
        connection.execute("PRAGMA synchronous=NORMAL")
        connection.execute(f"PRAGMA cache_size=-{int(self._cache_size_kb)}")
        connection.execute("PRAGMA temp_store=MEMORY")
        connection.commit()

    def close_db(self, _e: Optional[BaseException] = None) -> None:
        """Close the calling thread's connection. The shared in-memory connection stays open."""
        connection: Optional[sqlite3.Connection] = getattr(self._local, "connection", None)
        if connection is not None:
            connection.close()
            delattr(self._local, "connection")

    def close(self) -> None:
        """Close the calling thread's connection and the shared in-memory one."""
        self.close_db()
        with self._shared_lock:
            if self._shared is not None:
                self._shared.close()
                self._shared = None

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        with self._shared_lock if self.in_memory else nullcontext():
            conn = self.get_db()
            try:
                yield conn
            finally:
                conn.commit()

    def ping(self) -> bool:
        """Run a trivial query; raises sqlite3.Error when the store is unreachable."""
        self.get_db().execute("SELECT 1").fetchone()
        return True

    # --- Schema ----------------------------------------------------------------
    def create_tables(self) -> None:
        """Creates the necessary tables in the database if they do not already exist."""
        allowed = ", ".join(f"'{metric}'" for metric in METRIC_TYPES)
        try:
            with self.connection() as db:
                db.execute(
                    f"""
                    CREATE TABLE IF NOT EXISTS MetricReadings (
                        reading_id INTEGER PRIMARY KEY AUTOINCREMENT,
                        garden_id INTEGER NOT NULL,
                        metric_type TEXT NOT NULL CHECK (metric_type IN ({allowed})),
                        value REAL NOT NULL,
                        recorded_at TEXT NOT NULL
                    )
                    """
                )
                db.execute(
                    """
                    CREATE INDEX IF NOT EXISTS idx_metric_readings_garden_time
                    ON MetricReadings(garden_id, recorded_at)
                    """
                )
                db.execute(
                    """
                    CREATE INDEX IF NOT EXISTS idx_metric_readings_garden_metric_time
                    ON MetricReadings(garden_id, metric_type, recorded_at)
                    """
                )
            logger.info("Database tables ready at %s", self._database_path)
        except sqlite3.Error as exc:
            logger.error("Failed to create tables: %s", exc)
            raise
