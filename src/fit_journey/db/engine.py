"""Database engine setup and initialization."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from ..config import get_settings

logger = logging.getLogger(__name__)


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = get_settings().data_dir
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / "fit_journey.db"


def connect(db_path: Path, **kwargs) -> aiosqlite.Connection:
    """Open a connection that waits for the write lock instead of failing."""
    kwargs.setdefault("timeout", get_settings().db_timeout)
    return aiosqlite.connect(db_path, **kwargs)


@asynccontextmanager
async def transaction(db_path: Path) -> AsyncIterator[aiosqlite.Connection]:
    """Run a block inside a ``BEGIN IMMEDIATE`` transaction.

    The write lock is taken up front, so two read-modify-write cycles on
    the same database never interleave. Commits on success, rolls back
    on any exception.
    """
    async with connect(db_path, isolation_level=None) as db:
        db.row_factory = aiosqlite.Row
        await db.execute("BEGIN IMMEDIATE")
        try:
            yield db
        except Exception:
            await db.execute("ROLLBACK")
            raise
        else:
            await db.execute("COMMIT")


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with connect(db_path) as db:
        # Weight goals
        await db.execute("""
            CREATE TABLE IF NOT EXISTS goals (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT NOT NULL,
                goal_type TEXT NOT NULL,
                status TEXT NOT NULL DEFAULT 'active',
                start_date TIMESTAMP NOT NULL,
                target_date TIMESTAMP NOT NULL,
                starting_weight REAL NOT NULL,
                target_weight REAL NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Body-weight measurements (append-only)
        await db.execute("""
            CREATE TABLE IF NOT EXISTS measurements (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT NOT NULL,
                goal_id INTEGER,
                date TIMESTAMP NOT NULL,
                weight REAL NOT NULL,
                notes TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (goal_id) REFERENCES goals(id) ON DELETE SET NULL
            )
        """)

        # One streak row per user
        await db.execute("""
            CREATE TABLE IF NOT EXISTS streaks (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT NOT NULL UNIQUE,
                current_streak INTEGER NOT NULL DEFAULT 0,
                longest_streak INTEGER NOT NULL DEFAULT 0,
                last_workout_date TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Every completed workout, for stats
        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_log (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT NOT NULL,
                completed_at TIMESTAMP NOT NULL
            )
        """)

        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_goals_user_status
            ON goals(user_id, status)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_measurements_user_date
            ON measurements(user_id, date DESC)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workout_log_user
            ON workout_log(user_id, completed_at)
        """)

        await db.commit()

    logger.debug("Database initialized at %s", db_path)
