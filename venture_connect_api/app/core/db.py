"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``) and applying migrations (``init_db``).  It is
used by ``storage.sqlite.SQLiteStore`` and by the ``seed_db.py``
script.  SQLite is a lightweight embedded database; switching to
another DBMS means replacing the connection logic here and the SQL in
the store.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from .config import settings

logger = logging.getLogger(__name__)


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            email TEXT NOT NULL UNIQUE,
            password TEXT NOT NULL,
            first_name TEXT NOT NULL,
            last_name TEXT NOT NULL,
            role TEXT NOT NULL CHECK (role IN ('investor', 'entrepreneur')),
            avatar TEXT,
            bio TEXT,
            company TEXT,
            title TEXT,
            location TEXT,
            website TEXT,
            linkedin TEXT,
            industries TEXT,
            investment_range TEXT,
            funding_need TEXT,
            portfolio_size INTEGER,
            created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS collaboration_requests (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            from_user_id INTEGER NOT NULL,
            to_user_id INTEGER NOT NULL,
            status TEXT NOT NULL DEFAULT 'pending',
            message TEXT,
            created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(from_user_id) REFERENCES users(id),
            FOREIGN KEY(to_user_id) REFERENCES users(id)
        );

        CREATE TABLE IF NOT EXISTS messages (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            from_user_id INTEGER NOT NULL,
            to_user_id INTEGER NOT NULL,
            content TEXT NOT NULL,
            created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(from_user_id) REFERENCES users(id),
            FOREIGN KEY(to_user_id) REFERENCES users(id)
        );

        CREATE TABLE IF NOT EXISTS connections (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id_1 INTEGER NOT NULL,
            user_id_2 INTEGER NOT NULL,
            created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(user_id_1) REFERENCES users(id),
            FOREIGN KEY(user_id_2) REFERENCES users(id)
        );
        """,
    ),
    # Migration 2: lookup indices and pair uniqueness for connections
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_users_role ON users(role);
        CREATE INDEX IF NOT EXISTS idx_requests_from_user ON collaboration_requests(from_user_id);
        CREATE INDEX IF NOT EXISTS idx_requests_to_user ON collaboration_requests(to_user_id);
        CREATE INDEX IF NOT EXISTS idx_messages_pair ON messages(from_user_id, to_user_id);
        -- A connection is an unordered pair, so (1, 2) and (2, 1) collide.
        CREATE UNIQUE INDEX IF NOT EXISTS idx_connections_pair
            ON connections(min(user_id_1, user_id_2), max(user_id_1, user_id_2));
        """,
    ),
    # Migration 3: plain user id columns (existence is checked by the
    # services) and a CHECK on request status.  SQLite cannot alter
    # constraints in place, so the tables are rebuilt.
    (
        3,
        """
        CREATE TABLE collaboration_requests_new (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            from_user_id INTEGER NOT NULL,
            to_user_id INTEGER NOT NULL,
            status TEXT NOT NULL DEFAULT 'pending'
                CHECK (status IN ('pending', 'accepted', 'rejected')),
            message TEXT,
            created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
        );
        INSERT INTO collaboration_requests_new (id, from_user_id, to_user_id, status, message, created_at)
            SELECT id, from_user_id, to_user_id,
                   CASE WHEN status IN ('pending', 'accepted', 'rejected') THEN status ELSE 'pending' END,
                   message, created_at
            FROM collaboration_requests;
        DROP TABLE collaboration_requests;
        ALTER TABLE collaboration_requests_new RENAME TO collaboration_requests;

        CREATE TABLE messages_new (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            from_user_id INTEGER NOT NULL,
            to_user_id INTEGER NOT NULL,
            content TEXT NOT NULL,
            created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
        );
        INSERT INTO messages_new (id, from_user_id, to_user_id, content, created_at)
            SELECT id, from_user_id, to_user_id, content, created_at FROM messages;
        DROP TABLE messages;
        ALTER TABLE messages_new RENAME TO messages;

        CREATE TABLE connections_new (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id_1 INTEGER NOT NULL,
            user_id_2 INTEGER NOT NULL,
            created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
        );
        INSERT INTO connections_new (id, user_id_1, user_id_2, created_at)
            SELECT id, user_id_1, user_id_2, created_at FROM connections;
        DROP TABLE connections;
        ALTER TABLE connections_new RENAME TO connections;

        CREATE INDEX IF NOT EXISTS idx_requests_from_user ON collaboration_requests(from_user_id);
        CREATE INDEX IF NOT EXISTS idx_requests_to_user ON collaboration_requests(to_user_id);
        CREATE INDEX IF NOT EXISTS idx_messages_pair ON messages(from_user_id, to_user_id);
        CREATE UNIQUE INDEX IF NOT EXISTS idx_connections_pair
            ON connections(min(user_id_1, user_id_2), max(user_id_1, user_id_2));
        """,
    ),
]


def get_database_path(database_url: Optional[str] = None) -> str:
    """Compute the path to the SQLite database file.

    If the configured path is absolute, use it directly.  Otherwise
    resolve it relative to the project root (the directory containing
    the ``venture_connect_api`` package).
    """
    db_url = database_url or settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def get_connection(db_path: str) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be read by
    name.
    """
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor(db_path: str) -> Iterator[sqlite3.Cursor]:
    """Yield a cursor, commit on success and always close the connection."""
    conn = get_connection(db_path)
    try:
        yield conn.cursor()
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db(db_path: str) -> int:
    """Create the database file if needed and apply pending migrations.

    Returns the schema version after migrating.  To change the schema,
    append a new entry to ``MIGRATIONS`` with an incremented version.
    """
    with get_cursor(db_path) as cursor:
        cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
        row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                logger.info("Applied migration %s to %s", version, db_path)
                current_version = version
    return current_version
