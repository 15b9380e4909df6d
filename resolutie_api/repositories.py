from __future__ import annotations

from sqlalchemy import text as sql_text

from resolutie_api.db import get_sessionmaker

ENTITY_COLUMNS = {
    "dreams": ["id", "user_id", "title", "description", "created_at"],
    "goals": [
        "id",
        "user_id",
        "dream_id",
        "title",
        "specific",
        "measurable",
        "achievable",
        "relevant",
        "time_bound",
        "status",
        "created_at",
    ],
    "habits": ["id", "user_id", "goal_id", "title", "label", "frequency", "created_at"],
    "progress_logs": ["id", "habit_id", "user_id", "completed_at", "date", "notes"],
    "todos": [
        "id",
        "user_id",
        "title",
        "description",
        "priority",
        "due_date",
        "completed",
        "completed_at",
        "created_at",
    ],
}
ORDER_COLUMNS = {
    "dreams": "created_at",
    "goals": "created_at",
    "habits": "created_at",
    "progress_logs": "completed_at",
    "todos": "created_at",
}
BOOLEAN_COLUMNS = {"completed"}


def is_known_kind(kind: str) -> bool:
    return kind in ENTITY_COLUMNS


def _normalize_row(row) -> dict:
    payload = dict(row)
    for key in BOOLEAN_COLUMNS:
        if key in payload:
            payload[key] = bool(payload[key])
    for key, value in list(payload.items()):
        if value is not None and hasattr(value, "isoformat"):
            payload[key] = value.isoformat()
    return payload


def _to_params(kind: str, record: dict) -> dict:
    params = {}
    for column in ENTITY_COLUMNS[kind]:
        value = record.get(column)
        if column in BOOLEAN_COLUMNS:
            value = int(bool(value))
        elif value is not None and hasattr(value, "isoformat"):
            value = value.isoformat()
        params[column] = value
    return params


async def list_entities(user_id: str, kind: str, filters: dict | None = None) -> list[dict]:
    columns = ENTITY_COLUMNS[kind]
    clauses = ["user_id = :user_id"]
    params = {"user_id": user_id}
    for key, value in (filters or {}).items():
        if key not in columns or value is None:
            continue
        clauses.append(f"{key} = :{key}")
        params[key] = value
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        rows = (await session.execute(
            sql_text(
                f"""
                SELECT {', '.join(columns)}
                FROM {kind}
                WHERE {' AND '.join(clauses)}
                ORDER BY {ORDER_COLUMNS[kind]} DESC
                """
            ),
            params,
        )).mappings().all()
    return [_normalize_row(row) for row in rows]


async def get_snapshot(user_id: str) -> dict:
    payload = {"user_id": user_id}
    for kind in ENTITY_COLUMNS:
        payload[kind] = await list_entities(user_id, kind)
    return payload


async def upsert_entity(user_id: str, kind: str, record: dict) -> dict | None:
    params = _to_params(kind, {**record, "user_id": user_id})
    columns = ENTITY_COLUMNS[kind]
    placeholders = ", ".join([f":{col}" for col in columns])
    updates = ", ".join([f"{col}=EXCLUDED.{col}" for col in columns if col != "id"])
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        result = await session.execute(
            sql_text(
                f"""
                INSERT INTO {kind} ({', '.join(columns)})
                VALUES ({placeholders})
                ON CONFLICT(id) DO UPDATE SET {updates}
                WHERE {kind}.user_id = EXCLUDED.user_id
                """
            ),
            params,
        )
        await session.commit()
    # the conflict update is skipped when the id belongs to another owner
    if not result.rowcount:
        return None
    return _normalize_row(params)


async def delete_entity(user_id: str, kind: str, record_id: str) -> int:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        result = await session.execute(
            sql_text(f"DELETE FROM {kind} WHERE user_id = :user_id AND id = :id"),
            {"user_id": user_id, "id": record_id},
        )
        await session.commit()
    return result.rowcount or 0


async def delete_progress_logs(user_id: str, habit_id: str, day_iso: str) -> int:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        result = await session.execute(
            sql_text(
                """
                DELETE FROM progress_logs
                WHERE user_id = :user_id AND habit_id = :habit_id AND date = :date
                """
            ),
            {"user_id": user_id, "habit_id": habit_id, "date": day_iso},
        )
        await session.commit()
    return result.rowcount or 0
