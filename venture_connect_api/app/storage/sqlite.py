"""
SQLite-backed store.

Each operation opens a connection, runs one statement (plus a
read-back of the affected row) and closes the connection again.
Rows are validated against their record model before anything is
written, so a rejected value never reaches the database.
Concurrency control is left to SQLite.  Email and connection-pair
uniqueness are enforced by the schema (see ``core.db``), and the
resulting ``IntegrityError`` is translated to ``ConflictError``.
"""

import json
import logging
import sqlite3
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..core.db import get_connection, init_db
from ..schemas.collaboration import CollaborationRequestRecord
from ..schemas.connection import ConnectionRecord
from ..schemas.message import MessageRecord
from ..schemas.user import UserRecord
from .base import USER_FIELDS, USER_OPTIONAL_FIELDS, ConflictError, Store, check_user_columns

logger = logging.getLogger(__name__)

_USER_COLUMNS = "id, " + ", ".join(USER_FIELDS) + ", created_at"
_REQUEST_COLUMNS = "id, from_user_id, to_user_id, status, message, created_at"
_MESSAGE_COLUMNS = "id, from_user_id, to_user_id, content, created_at"
_CONNECTION_COLUMNS = "id, user_id_1, user_id_2, created_at"


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def _is_unique_violation(error: sqlite3.IntegrityError) -> bool:
    return "UNIQUE" in str(error)


def _user_from_row(row: sqlite3.Row) -> UserRecord:
    data = dict(row)
    data["industries"] = json.loads(data["industries"]) if data["industries"] else None
    return UserRecord.model_validate(data)


def _user_params(fields: Dict[str, Any]) -> Dict[str, Any]:
    params = dict(fields)
    if params.get("industries") is not None:
        params["industries"] = json.dumps(params["industries"])
    return params


def _validate(model, data: Dict[str, Any]) -> None:
    """Check a row against its record model before it is written.

    Rows that are not inserted yet get a placeholder id and timestamp.
    Raises ``pydantic.ValidationError`` (a ``ValueError``).
    """
    model.model_validate({"id": 0, "created_at": _timestamp(), **data})


class SQLiteStore(Store):
    """Store persisted in a SQLite database file."""

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path
        version = init_db(db_path)
        logger.info("SQLite store ready at %s (schema version %s)", db_path, version)

    def _connect(self) -> sqlite3.Connection:
        return get_connection(self.db_path)

    def _fetch_one(self, sql: str, params: tuple = ()) -> Optional[sqlite3.Row]:
        conn = self._connect()
        try:
            return conn.execute(sql, params).fetchone()
        finally:
            conn.close()

    def _fetch_all(self, sql: str, params: tuple = ()) -> List[sqlite3.Row]:
        conn = self._connect()
        try:
            return conn.execute(sql, params).fetchall()
        finally:
            conn.close()

    # === Users ===

    def get_user(self, user_id: int) -> Optional[UserRecord]:
        row = self._fetch_one(f"SELECT {_USER_COLUMNS} FROM users WHERE id = ?", (user_id,))
        return _user_from_row(row) if row else None

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        row = self._fetch_one(f"SELECT {_USER_COLUMNS} FROM users WHERE email = ?", (email,))
        return _user_from_row(row) if row else None

    def create_user(self, fields: Dict[str, Any]) -> UserRecord:
        check_user_columns(fields)
        data = {name: None for name in USER_OPTIONAL_FIELDS}
        data.update(fields)
        _validate(UserRecord, data)
        params = _user_params(data)
        params["created_at"] = _timestamp()
        columns = ", ".join(params)
        placeholders = ", ".join(f":{name}" for name in params)
        conn = self._connect()
        try:
            cursor = conn.cursor()
            cursor.execute(f"INSERT INTO users ({columns}) VALUES ({placeholders})", params)
            user_id = cursor.lastrowid
            conn.commit()
            row = cursor.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE id = ?", (user_id,)).fetchone()
        except sqlite3.IntegrityError as e:
            conn.rollback()
            if _is_unique_violation(e):
                raise ConflictError(f"User with email {fields.get('email')} already exists") from e
            raise
        finally:
            conn.close()
        logger.debug("Stored user %s", user_id)
        return _user_from_row(row)

    def update_user(self, user_id: int, updates: Dict[str, Any]) -> Optional[UserRecord]:
        check_user_columns(updates)
        conn = self._connect()
        try:
            cursor = conn.cursor()
            row = cursor.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE id = ?", (user_id,)).fetchone()
            if not row:
                return None
            if updates:
                _validate(UserRecord, {**_user_from_row(row).model_dump(), **updates})
                params = _user_params(updates)
                assignments = ", ".join(f"{name} = :{name}" for name in params)
                params["id"] = user_id
                cursor.execute(f"UPDATE users SET {assignments} WHERE id = :id", params)
                conn.commit()
            row = cursor.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE id = ?", (user_id,)).fetchone()
        except sqlite3.IntegrityError as e:
            conn.rollback()
            if _is_unique_violation(e):
                raise ConflictError(f"User with email {updates.get('email')} already exists") from e
            raise
        finally:
            conn.close()
        return _user_from_row(row)

    def list_users(self) -> List[UserRecord]:
        rows = self._fetch_all(f"SELECT {_USER_COLUMNS} FROM users ORDER BY id")
        return [_user_from_row(row) for row in rows]

    def list_users_by_role(self, role: str) -> List[UserRecord]:
        rows = self._fetch_all(f"SELECT {_USER_COLUMNS} FROM users WHERE role = ? ORDER BY id", (role,))
        return [_user_from_row(row) for row in rows]

    def count_users(self) -> int:
        row = self._fetch_one("SELECT COUNT(*) AS count FROM users")
        return row["count"]

    # === Collaboration requests ===

    def get_collaboration_request(self, request_id: int) -> Optional[CollaborationRequestRecord]:
        row = self._fetch_one(
            f"SELECT {_REQUEST_COLUMNS} FROM collaboration_requests WHERE id = ?", (request_id,)
        )
        return CollaborationRequestRecord.model_validate(dict(row)) if row else None

    def list_collaboration_requests_for_user(self, user_id: int) -> List[CollaborationRequestRecord]:
        rows = self._fetch_all(
            f"SELECT {_REQUEST_COLUMNS} FROM collaboration_requests "
            "WHERE from_user_id = ? OR to_user_id = ? ORDER BY id",
            (user_id, user_id),
        )
        return [CollaborationRequestRecord.model_validate(dict(row)) for row in rows]

    def list_collaboration_requests_between(self, user_id_a: int, user_id_b: int) -> List[CollaborationRequestRecord]:
        rows = self._fetch_all(
            f"SELECT {_REQUEST_COLUMNS} FROM collaboration_requests "
            "WHERE (from_user_id = ? AND to_user_id = ?) OR (from_user_id = ? AND to_user_id = ?) "
            "ORDER BY id",
            (user_id_a, user_id_b, user_id_b, user_id_a),
        )
        return [CollaborationRequestRecord.model_validate(dict(row)) for row in rows]

    def create_collaboration_request(self, fields: Dict[str, Any]) -> CollaborationRequestRecord:
        data = {
            "from_user_id": fields["from_user_id"],
            "to_user_id": fields["to_user_id"],
            "status": fields.get("status") or "pending",
            "message": fields.get("message"),
        }
        _validate(CollaborationRequestRecord, data)
        conn = self._connect()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO collaboration_requests (from_user_id, to_user_id, status, message, created_at) "
                "VALUES (?, ?, ?, ?, ?)",
                (data["from_user_id"], data["to_user_id"], data["status"], data["message"], _timestamp()),
            )
            request_id = cursor.lastrowid
            conn.commit()
            row = cursor.execute(
                f"SELECT {_REQUEST_COLUMNS} FROM collaboration_requests WHERE id = ?", (request_id,)
            ).fetchone()
        finally:
            conn.close()
        return CollaborationRequestRecord.model_validate(dict(row))

    def update_collaboration_request_status(self, request_id: int, status: str) -> Optional[CollaborationRequestRecord]:
        conn = self._connect()
        try:
            cursor = conn.cursor()
            row = cursor.execute(
                f"SELECT {_REQUEST_COLUMNS} FROM collaboration_requests WHERE id = ?", (request_id,)
            ).fetchone()
            if not row:
                return None
            _validate(CollaborationRequestRecord, {**dict(row), "status": status})
            cursor.execute("UPDATE collaboration_requests SET status = ? WHERE id = ?", (status, request_id))
            conn.commit()
            row = cursor.execute(
                f"SELECT {_REQUEST_COLUMNS} FROM collaboration_requests WHERE id = ?", (request_id,)
            ).fetchone()
        finally:
            conn.close()
        return CollaborationRequestRecord.model_validate(dict(row))

    # === Messages ===

    def get_message(self, message_id: int) -> Optional[MessageRecord]:
        row = self._fetch_one(f"SELECT {_MESSAGE_COLUMNS} FROM messages WHERE id = ?", (message_id,))
        return MessageRecord.model_validate(dict(row)) if row else None

    def list_messages_between(self, user_id_a: int, user_id_b: int) -> List[MessageRecord]:
        rows = self._fetch_all(
            f"SELECT {_MESSAGE_COLUMNS} FROM messages "
            "WHERE (from_user_id = ? AND to_user_id = ?) OR (from_user_id = ? AND to_user_id = ?) "
            "ORDER BY created_at ASC, id ASC",
            (user_id_a, user_id_b, user_id_b, user_id_a),
        )
        return [MessageRecord.model_validate(dict(row)) for row in rows]

    def create_message(self, fields: Dict[str, Any]) -> MessageRecord:
        data = {name: fields[name] for name in ("from_user_id", "to_user_id", "content")}
        _validate(MessageRecord, data)
        conn = self._connect()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO messages (from_user_id, to_user_id, content, created_at) VALUES (?, ?, ?, ?)",
                (data["from_user_id"], data["to_user_id"], data["content"], _timestamp()),
            )
            message_id = cursor.lastrowid
            conn.commit()
            row = cursor.execute(f"SELECT {_MESSAGE_COLUMNS} FROM messages WHERE id = ?", (message_id,)).fetchone()
        finally:
            conn.close()
        return MessageRecord.model_validate(dict(row))

    # === Connections ===

    def get_connection(self, connection_id: int) -> Optional[ConnectionRecord]:
        row = self._fetch_one(f"SELECT {_CONNECTION_COLUMNS} FROM connections WHERE id = ?", (connection_id,))
        return ConnectionRecord.model_validate(dict(row)) if row else None

    def list_connections_for_user(self, user_id: int) -> List[ConnectionRecord]:
        rows = self._fetch_all(
            f"SELECT {_CONNECTION_COLUMNS} FROM connections WHERE user_id_1 = ? OR user_id_2 = ? ORDER BY id",
            (user_id, user_id),
        )
        return [ConnectionRecord.model_validate(dict(row)) for row in rows]

    def create_connection(self, user_id_1: int, user_id_2: int) -> ConnectionRecord:
        conn = self._connect()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO connections (user_id_1, user_id_2, created_at) VALUES (?, ?, ?)",
                (user_id_1, user_id_2, _timestamp()),
            )
            connection_id = cursor.lastrowid
            conn.commit()
            row = cursor.execute(
                f"SELECT {_CONNECTION_COLUMNS} FROM connections WHERE id = ?", (connection_id,)
            ).fetchone()
        except sqlite3.IntegrityError as e:
            conn.rollback()
            if _is_unique_violation(e):
                raise ConflictError(f"Users {user_id_1} and {user_id_2} are already connected") from e
            raise
        finally:
            conn.close()
        return ConnectionRecord.model_validate(dict(row))

    def are_connected(self, user_id_a: int, user_id_b: int) -> bool:
        row = self._fetch_one(
            "SELECT 1 FROM connections "
            "WHERE min(user_id_1, user_id_2) = min(?, ?) AND max(user_id_1, user_id_2) = max(?, ?)",
            (user_id_a, user_id_b, user_id_a, user_id_b),
        )
        return row is not None
