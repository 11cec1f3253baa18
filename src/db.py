"""Shared SQLite connection helper."""

import sqlite3
from pathlib import Path


def wal_connect(db_path: str | Path, row_factory: bool = True) -> sqlite3.Connection:
    """Open a SQLite connection with WAL journaling and FK enforcement.

    Args:
        db_path: Path to database file. Parent directories are created.
        row_factory: If True, rows come back as sqlite3.Row.
    """
    path = Path(db_path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    if row_factory:
        conn.row_factory = sqlite3.Row
    return conn
