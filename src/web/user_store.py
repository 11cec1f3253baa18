"""SQLite user accounts: credentials and password-reset state."""

import os
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import structlog

from db import wal_connect

logger = structlog.get_logger()

_DEFAULT_DB_PATH = (
    Path(os.environ.get("QUIETMIND_HOME", "~/quietmind")).expanduser() / "quietmind.db"
)


class EmailInUseError(ValueError):
    """Signup with an email that already has an account."""


def _get_conn(db_path: Path | None = None) -> sqlite3.Connection:
    return wal_connect(db_path or _DEFAULT_DB_PATH)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def init_db(db_path: Path | None = None) -> None:
    """Create the users table if it doesn't exist."""
    conn = _get_conn(db_path)
    try:
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS users (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                email TEXT NOT NULL UNIQUE,
                password TEXT NOT NULL,
                created_at TEXT NOT NULL,
                reset_token_hash TEXT,
                reset_token_expiry TEXT
            );
            CREATE INDEX IF NOT EXISTS idx_users_reset ON users(reset_token_hash);
        """)
        conn.commit()
    finally:
        conn.close()


def public_user(user: dict[str, Any]) -> dict[str, Any]:
    """Only the fields safe to return to clients."""
    return {"id": user["id"], "email": user["email"], "created_at": user["created_at"]}


def create_user(email: str, password_hash: str, db_path: Path | None = None) -> dict[str, Any]:
    """Insert a user. Raises EmailInUseError on a duplicate email."""
    now = _now().isoformat(timespec="microseconds")
    conn = _get_conn(db_path)
    try:
        cur = conn.execute(
            "INSERT INTO users (email, password, created_at) VALUES (?, ?, ?)",
            (email, password_hash, now),
        )
        conn.commit()
        user_id = cur.lastrowid
    except sqlite3.IntegrityError as e:
        raise EmailInUseError(email) from e
    finally:
        conn.close()
    logger.info("user_store.user_created", user_id=user_id)
    return {"id": user_id, "email": email, "password": password_hash, "created_at": now}


def get_user_by_email(email: str, db_path: Path | None = None) -> dict[str, Any] | None:
    conn = _get_conn(db_path)
    try:
        row = conn.execute("SELECT * FROM users WHERE email = ?", (email,)).fetchone()
        return dict(row) if row else None
    finally:
        conn.close()


def set_reset_token(
    user_id: int,
    token_hash: str,
    expiry: datetime,
    db_path: Path | None = None,
) -> None:
    """Store the hash of a pending reset token. Replaces any earlier one."""
    conn = _get_conn(db_path)
    try:
        conn.execute(
            "UPDATE users SET reset_token_hash = ?, reset_token_expiry = ? WHERE id = ?",
            (token_hash, expiry.astimezone(timezone.utc).isoformat(timespec="microseconds"), user_id),
        )
        conn.commit()
    finally:
        conn.close()


def find_user_by_reset_token(
    token_hash: str,
    now: datetime | None = None,
    db_path: Path | None = None,
) -> dict[str, Any] | None:
    """User holding this reset token, if it hasn't expired."""
    moment = (now or _now()).astimezone(timezone.utc).isoformat(timespec="microseconds")
    conn = _get_conn(db_path)
    try:
        row = conn.execute(
            "SELECT * FROM users WHERE reset_token_hash = ? AND reset_token_expiry > ?",
            (token_hash, moment),
        ).fetchone()
        return dict(row) if row else None
    finally:
        conn.close()


def update_password(user_id: int, password_hash: str, db_path: Path | None = None) -> None:
    """Set a new password hash and consume any reset token."""
    conn = _get_conn(db_path)
    try:
        conn.execute(
            "UPDATE users SET password = ?, reset_token_hash = NULL, reset_token_expiry = NULL "
            "WHERE id = ?",
            (password_hash, user_id),
        )
        conn.commit()
    finally:
        conn.close()
    logger.info("user_store.password_updated", user_id=user_id)
