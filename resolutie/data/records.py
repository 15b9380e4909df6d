from __future__ import annotations

from datetime import date, datetime, timezone
from uuid import uuid4

ENTITY_FIELDS = {
    "dreams": {
        "id": None,
        "user_id": None,
        "title": "",
        "description": None,
        "created_at": None,
    },
    "goals": {
        "id": None,
        "user_id": None,
        "dream_id": None,
        "title": "",
        "specific": "",
        "measurable": "",
        "achievable": "",
        "relevant": "",
        "time_bound": None,
        "status": "active",
        "created_at": None,
    },
    "habits": {
        "id": None,
        "user_id": None,
        "goal_id": None,
        "title": "",
        "label": "",
        "frequency": "daily",
        "created_at": None,
    },
    "progress_logs": {
        "id": None,
        "habit_id": None,
        "user_id": None,
        "completed_at": None,
        "date": None,
        "notes": None,
    },
    "todos": {
        "id": None,
        "user_id": None,
        "title": "",
        "description": None,
        "priority": "medium",
        "due_date": None,
        "completed": False,
        "completed_at": None,
        "created_at": None,
    },
}
DAY_FIELDS = {"time_bound", "date", "due_date"}
TIMESTAMP_FIELDS = {"created_at", "completed_at"}


def new_id() -> str:
    return uuid4().hex


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _normalize_day(value):
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)[:10]


def _normalize_timestamp(value):
    if value is None or value == "":
        return None
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def normalize_record(kind: str, record: dict) -> dict:
    fields = ENTITY_FIELDS[kind]
    payload = {}
    for key, default in fields.items():
        value = record.get(key, default)
        if key in DAY_FIELDS:
            value = _normalize_day(value)
        elif key in TIMESTAMP_FIELDS:
            value = _normalize_timestamp(value)
        elif key == "completed":
            value = bool(value)
        elif value == "" and default is None:
            value = None
        payload[key] = value
    return payload
