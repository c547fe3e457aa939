import json
import sqlite3
import logging
import os
import time
from typing import Any, Callable, Dict, List, Optional
from memeradar.config import Config

logger = logging.getLogger(__name__)

class Database:
    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path or Config.DB_PATH
        self._init_db()

    def _init_db(self):
        folder = os.path.dirname(self.db_path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        try:
            conn = sqlite3.connect(self.db_path)
            cursor = conn.cursor()
            cursor.execute('''
                CREATE TABLE IF NOT EXISTS cache (
                    namespace TEXT,
                    key TEXT,
                    value TEXT,
                    expires_at REAL,
                    PRIMARY KEY (namespace, key)
                )
            ''')
            cursor.execute('''
                CREATE TABLE IF NOT EXISTS recent_queries (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    query TEXT,
                    symbol TEXT,
                    chain_id TEXT,
                    queried_at REAL
                )
            ''')
            conn.commit()
            conn.close()
        except Exception as e:
            logger.error(f"Database init failed: {e}")

    def get(self, namespace: str, key: str, now: Optional[float] = None) -> Optional[Any]:
        """Cached value, or None when missing or expired."""
        now = time.time() if now is None else now
        try:
            conn = sqlite3.connect(self.db_path)
            cursor = conn.cursor()
            cursor.execute("SELECT value, expires_at FROM cache WHERE namespace = ? AND key = ?", (namespace, key))
            row = cursor.fetchone()
            conn.close()
        except Exception as e:
            logger.error(f"Cache read failed: {e}")
            return None

        if row is None or row[1] <= now:
            return None
        return json.loads(row[0])

    def set(self, namespace: str, key: str, value: Any, ttl: float, now: Optional[float] = None):
        now = time.time() if now is None else now
        try:
            conn = sqlite3.connect(self.db_path)
            cursor = conn.cursor()
            cursor.execute(
                "INSERT OR REPLACE INTO cache (namespace, key, value, expires_at) VALUES (?, ?, ?, ?)",
                (namespace, key, json.dumps(value), now + ttl)
            )
            conn.commit()
            conn.close()
        except Exception as e:
            logger.error(f"Cache write failed: {e}")

    def delete_expired(self, now: Optional[float] = None) -> int:
        now = time.time() if now is None else now
        try:
            conn = sqlite3.connect(self.db_path)
            cursor = conn.cursor()
            cursor.execute("DELETE FROM cache WHERE expires_at <= ?", (now,))
            removed = cursor.rowcount
            conn.commit()
            conn.close()
            if removed:
                logger.info(f"Database: {removed} expired cache entries removed.")
            return removed
        except Exception as e:
            logger.error(f"Failed to purge cache: {e}")
            return 0

    def save_recent(self, query: str, symbol: str = "", chain_id: str = ""):
        """
        Records a successful lookup, keeping only the last few.
        Re-querying a token moves it back to the top.
        """
        try:
            conn = sqlite3.connect(self.db_path)
            cursor = conn.cursor()
            cursor.execute("DELETE FROM recent_queries WHERE query = ?", (query,))
            cursor.execute(
                "INSERT INTO recent_queries (query, symbol, chain_id, queried_at) VALUES (?, ?, ?, ?)",
                (query, symbol, chain_id, time.time())
            )
            cursor.execute(
                "DELETE FROM recent_queries WHERE id NOT IN "
                "(SELECT id FROM recent_queries ORDER BY id DESC LIMIT ?)",
                (Config.RECENT_LIMIT,)
            )
            conn.commit()
            conn.close()
        except Exception as e:
            logger.error(f"Failed to save recent query: {e}")

    def get_recent(self) -> List[Dict[str, Any]]:
        rows = []
        try:
            conn = sqlite3.connect(self.db_path)
            cursor = conn.cursor()
            cursor.execute(
                "SELECT query, symbol, chain_id, queried_at FROM recent_queries ORDER BY id DESC LIMIT ?",
                (Config.RECENT_LIMIT,)
            )
            rows = cursor.fetchall()
            conn.close()
        except Exception as e:
            logger.error(f"Failed to fetch recent queries: {e}")
        return [{"query": q, "symbol": s, "chain_id": c, "queried_at": t} for q, s, c, t in rows]


class TTLCache:
    """
    A namespaced view over Database's cache table with a fixed time-to-live.
    The clock is injectable so expiry can be tested without sleeping.
    """

    def __init__(self, db: Database, namespace: str, ttl: float, clock: Callable[[], float] = time.time):
        self.db = db
        self.namespace = namespace
        self.ttl = ttl
        self.clock = clock

    def get(self, key: str) -> Optional[Any]:
        return self.db.get(self.namespace, key, now=self.clock())

    def set(self, key: str, value: Any):
        now = self.clock()
        self.db.set(self.namespace, key, value, self.ttl, now=now)
        self.db.delete_expired(now=now)
