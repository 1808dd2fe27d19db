"""
Client storage backend (SQLite).

One connection is opened per store and kept for the life of the process.
The server owns the store and calls close() on shutdown.
"""
import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from .errors import StoreError
from .schema import Client, Lane
from .seed import SEED_ROWS

logger = logging.getLogger(__name__)


def _connect(db_path: str) -> sqlite3.Connection:
    """Open a connection shared across request threads."""
    conn = sqlite3.connect(db_path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    return conn


class ClientStore:
    """SQLite-backed store for clients."""

    def __init__(self, db_path: str = "./clients.db"):
        """Open the database, create the table and seed it if empty."""
        self.db_path = db_path
        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._conn = _connect(db_path)
        # Serializes read -> rerank -> save sequences (single writer).
        self.lock = threading.RLock()
        self._init_schema()

    def _init_schema(self):
        """Create tables if they don't exist, then seed an empty board."""
        lanes = ", ".join(f"'{value}'" for value in Lane.values())
        with self.transaction() as conn:
            conn.execute(f"""
                CREATE TABLE IF NOT EXISTS clients (
                    id INTEGER PRIMARY KEY,
                    name TEXT NOT NULL,
                    description TEXT,
                    status TEXT NOT NULL CHECK (status IN ({lanes})),
                    priority INTEGER NOT NULL CHECK (priority >= 1)
                )
            """)
            conn.execute("CREATE INDEX IF NOT EXISTS idx_clients_status ON clients(status)")
            count = conn.execute("SELECT COUNT(*) FROM clients").fetchone()[0]
            if count == 0:
                self._insert_seed(conn)
                logger.info(f"Seeded {len(SEED_ROWS)} clients into {self.db_path}")

    @staticmethod
    def _insert_seed(conn: sqlite3.Connection):
        conn.executemany(
            "INSERT INTO clients (id, name, description, status, priority) VALUES (?, ?, ?, ?, ?)",
            SEED_ROWS,
        )

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Run a block atomically: commit on success, roll back on any error."""
        with self.lock:
            try:
                with self._conn:
                    yield self._conn
            except sqlite3.Error as e:
                logger.error(f"Store transaction failed on {self.db_path}: {e}")
                raise StoreError(str(e)) from e

    def reset(self) -> None:
        """Drop every client and restore the seed data."""
        with self.transaction() as conn:
            conn.execute("DELETE FROM clients")
            self._insert_seed(conn)
        logger.info(f"Reset {self.db_path} to seed data")

    def list_all(self) -> List[Client]:
        """List all clients, ordered by id."""
        with self.transaction() as conn:
            rows = conn.execute("SELECT * FROM clients ORDER BY id").fetchall()
        return [Client.from_row(row) for row in rows]

    def list_by_status(self, status: Lane) -> List[Client]:
        """List the clients in one lane, ordered by id."""
        with self.transaction() as conn:
            rows = conn.execute(
                "SELECT * FROM clients WHERE status = ? ORDER BY id",
                (status.value,)
            ).fetchall()
        return [Client.from_row(row) for row in rows]

    def get(self, client_id: int) -> Optional[Client]:
        """Retrieve a client by id."""
        with self.transaction() as conn:
            row = conn.execute(
                "SELECT * FROM clients WHERE id = ? LIMIT 1",
                (client_id,)
            ).fetchone()
        return Client.from_row(row) if row else None

    def save_all(self, clients: List[Client]) -> None:
        """
        Overwrite status and priority for every given client in one transaction.

        Either every row is written or none is. Raises StoreError on failure.
        """
        with self.transaction() as conn:
            conn.executemany(
                "UPDATE clients SET status = ?, priority = ? WHERE id = ?",
                [(c.status.value, c.priority, c.id) for c in clients],
            )

    def close(self) -> None:
        with self.lock:
            self._conn.close()
        logger.info(f"Closed {self.db_path}")
