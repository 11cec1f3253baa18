"""SQLite-backed storage for mood check-ins."""

import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

import structlog

from db import wal_connect

logger = structlog.get_logger()


@dataclass(frozen=True)
class MoodRecord:
    id: int
    user_id: int
    feeling: str
    description: str | None
    tip: str | None
    created_at: datetime  # aware, UTC

    def local_date(self):
        return self.created_at.astimezone().date()


def _as_utc(moment: datetime) -> datetime:
    # naive values are local wall-clock time
    return moment.astimezone(timezone.utc)


def _stamp(moment: datetime) -> str:
    return _as_utc(moment).isoformat(timespec="microseconds")


class MoodStore:
    """Per-user create/query access to the moods table."""

    def __init__(self, db_path: str | Path):
        self.db_path = Path(db_path).expanduser()
        self._init_db()

    def _init_db(self):
        conn = wal_connect(self.db_path)
        try:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS moods (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    user_id INTEGER NOT NULL,
                    feeling TEXT NOT NULL,
                    description TEXT,
                    tip TEXT,
                    created_at TEXT NOT NULL
                )
            """)
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_moods_user_created ON moods(user_id, created_at)"
            )
            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> MoodRecord:
        return MoodRecord(
            id=row["id"],
            user_id=row["user_id"],
            feeling=row["feeling"],
            description=row["description"],
            tip=row["tip"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    def create(
        self,
        user_id: int,
        feeling: str,
        description: str | None = None,
        tip: str | None = None,
        created_at: datetime | None = None,
    ) -> MoodRecord:
        """Insert a check-in. ``created_at`` defaults to now."""
        moment = _as_utc(created_at) if created_at else datetime.now(timezone.utc)
        conn = wal_connect(self.db_path)
        try:
            cur = conn.execute(
                "INSERT INTO moods (user_id, feeling, description, tip, created_at) "
                "VALUES (?, ?, ?, ?, ?)",
                (user_id, feeling, description, tip, _stamp(moment)),
            )
            conn.commit()
            record_id = cur.lastrowid
        finally:
            conn.close()
        logger.info("moods.created", user_id=user_id, mood_id=record_id)
        return MoodRecord(
            id=record_id,
            user_id=user_id,
            feeling=feeling,
            description=description,
            tip=tip,
            created_at=moment,
        )

    def list_for_user(self, user_id: int, limit: int | None = None) -> list[MoodRecord]:
        """All check-ins for a user, newest first."""
        sql = "SELECT * FROM moods WHERE user_id = ? ORDER BY created_at DESC, id DESC"
        params: tuple = (user_id,)
        if limit is not None:
            sql += " LIMIT ?"
            params = (user_id, limit)
        conn = wal_connect(self.db_path)
        try:
            rows = conn.execute(sql, params).fetchall()
        finally:
            conn.close()
        return [self._row_to_record(r) for r in rows]

    def list_between(self, user_id: int, start: datetime, end: datetime) -> list[MoodRecord]:
        """Check-ins with start <= created_at < end, oldest first."""
        conn = wal_connect(self.db_path)
        try:
            rows = conn.execute(
                "SELECT * FROM moods WHERE user_id = ? AND created_at >= ? AND created_at < ? "
                "ORDER BY created_at ASC, id ASC",
                (user_id, _stamp(start), _stamp(end)),
            ).fetchall()
        finally:
            conn.close()
        return [self._row_to_record(r) for r in rows]

    def exists_between(self, user_id: int, start: datetime, end: datetime) -> bool:
        conn = wal_connect(self.db_path)
        try:
            row = conn.execute(
                "SELECT 1 FROM moods WHERE user_id = ? AND created_at >= ? AND created_at < ? LIMIT 1",
                (user_id, _stamp(start), _stamp(end)),
            ).fetchone()
        finally:
            conn.close()
        return row is not None
