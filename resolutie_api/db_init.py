from __future__ import annotations

from sqlalchemy import text as sql_text

from resolutie_api.db import get_engine


DREAMS_TABLE = "dreams"
GOALS_TABLE = "goals"
HABITS_TABLE = "habits"
PROGRESS_LOGS_TABLE = "progress_logs"
TODOS_TABLE = "todos"


async def init_db():
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {DREAMS_TABLE} (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    title TEXT NOT NULL,
                    description TEXT,
                    created_at TEXT NOT NULL
                )
                """
            )
        )
        await conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {GOALS_TABLE} (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    dream_id TEXT,
                    title TEXT NOT NULL,
                    specific TEXT,
                    measurable TEXT,
                    achievable TEXT,
                    relevant TEXT,
                    time_bound TEXT NOT NULL,
                    status TEXT NOT NULL DEFAULT 'active',
                    created_at TEXT NOT NULL
                )
                """
            )
        )
        await conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {HABITS_TABLE} (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    goal_id TEXT,
                    title TEXT NOT NULL,
                    label TEXT NOT NULL,
                    frequency TEXT NOT NULL DEFAULT 'daily',
                    created_at TEXT NOT NULL
                )
                """
            )
        )
        await conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {PROGRESS_LOGS_TABLE} (
                    id TEXT PRIMARY KEY,
                    habit_id TEXT NOT NULL,
                    user_id TEXT NOT NULL,
                    completed_at TEXT NOT NULL,
                    date TEXT NOT NULL,
                    notes TEXT
                )
                """
            )
        )
        await conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {TODOS_TABLE} (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    title TEXT NOT NULL,
                    description TEXT,
                    priority TEXT NOT NULL DEFAULT 'medium',
                    due_date TEXT,
                    completed INTEGER DEFAULT 0,
                    completed_at TEXT,
                    created_at TEXT NOT NULL
                )
                """
            )
        )

    async def ensure_index(index_sql: str) -> None:
        async with engine.begin() as conn:
            await conn.execute(sql_text(index_sql))

    for table_name in (DREAMS_TABLE, GOALS_TABLE, HABITS_TABLE, TODOS_TABLE):
        await ensure_index(
            f"CREATE INDEX IF NOT EXISTS idx_{table_name}_user_created "
            f"ON {table_name} (user_id, created_at)"
        )
    await ensure_index(
        f"CREATE INDEX IF NOT EXISTS idx_{PROGRESS_LOGS_TABLE}_user_habit_date "
        f"ON {PROGRESS_LOGS_TABLE} (user_id, habit_id, date)"
    )
