from __future__ import annotations

import json
import logging
from datetime import date, datetime, timezone
from functools import lru_cache

from sqlalchemy import create_engine, text as sql_text

from resolutie.constants import (
    DEFAULT_SECTION_ORDER,
    DEFAULT_THEME,
    EXPORT_COLLECTIONS,
    LOCAL_STORAGE_TABLE,
    STORAGE_KEYS,
    THEMES,
)
from resolutie.settings import get_settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=8)
def get_engine(database_url):
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            future=True,
        )
    return create_engine(database_url, pool_pre_ping=True, future=True)


def init_local_db(engine):
    with engine.begin() as conn:
        conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {LOCAL_STORAGE_TABLE} (
                    key TEXT PRIMARY KEY,
                    value TEXT
                )
                """
            )
        )


def _json_default(value):
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def collection_key(kind):
    if kind not in EXPORT_COLLECTIONS:
        raise KeyError(f"Unknown collection: {kind}")
    return STORAGE_KEYS[kind]


class LocalStore:
    def __init__(self, database_url=None):
        self.database_url = database_url or get_settings().local_database_url
        self.engine = get_engine(self.database_url)
        init_local_db(self.engine)

    def get_item(self, key, default=None):
        with self.engine.connect() as conn:
            row = conn.execute(
                sql_text(f"SELECT value FROM {LOCAL_STORAGE_TABLE} WHERE key = :key"),
                {"key": key},
            ).fetchone()
        if not row or row[0] is None:
            return default
        try:
            return json.loads(row[0])
        except (TypeError, ValueError):
            logger.debug("Ignoring unreadable local value for %s", key)
            return default

    def set_item(self, key, value):
        payload = json.dumps(value, ensure_ascii=False, default=_json_default)
        with self.engine.begin() as conn:
            conn.execute(
                sql_text(
                    f"INSERT INTO {LOCAL_STORAGE_TABLE} (key, value) VALUES (:key, :value) "
                    "ON CONFLICT(key) DO UPDATE SET value=EXCLUDED.value"
                ),
                {"key": key, "value": payload},
            )

    def remove_item(self, key):
        with self.engine.begin() as conn:
            conn.execute(
                sql_text(f"DELETE FROM {LOCAL_STORAGE_TABLE} WHERE key = :key"),
                {"key": key},
            )

    def list_collection(self, kind):
        payload = self.get_item(collection_key(kind), [])
        if not isinstance(payload, list):
            return []
        return [item for item in payload if isinstance(item, dict)]

    def set_collection(self, kind, items):
        self.set_item(collection_key(kind), list(items))

    def upsert_record(self, kind, record):
        items = self.list_collection(kind)
        for index, item in enumerate(items):
            if item.get("id") == record.get("id"):
                items[index] = dict(record)
                break
        else:
            items.append(dict(record))
        self.set_collection(kind, items)

    def get_record(self, kind, record_id):
        for item in self.list_collection(kind):
            if item.get("id") == record_id:
                return item
        return None

    def delete_record(self, kind, record_id):
        items = self.list_collection(kind)
        remaining = [item for item in items if item.get("id") != record_id]
        self.set_collection(kind, remaining)
        return len(items) - len(remaining)

    def get_user(self):
        payload = self.get_item(STORAGE_KEYS["user"], None)
        return payload if isinstance(payload, dict) else None

    def set_user(self, user):
        self.set_item(STORAGE_KEYS["user"], dict(user))

    def clear_user(self):
        self.remove_item(STORAGE_KEYS["user"])

    def get_settings(self):
        payload = self.get_item(STORAGE_KEYS["settings"], {})
        return payload if isinstance(payload, dict) else {}

    def set_settings(self, settings):
        self.set_item(STORAGE_KEYS["settings"], dict(settings))

    def update_settings(self, updates):
        merged = {**self.get_settings(), **updates}
        self.set_settings(merged)
        return merged

    def get_theme(self):
        theme = self.get_item(STORAGE_KEYS["theme"], DEFAULT_THEME)
        return theme if theme in THEMES else DEFAULT_THEME

    def set_theme(self, theme):
        if theme not in THEMES:
            raise ValueError(f"Unknown theme: {theme}")
        self.set_item(STORAGE_KEYS["theme"], theme)

    def get_section_order(self):
        payload = self.get_item(STORAGE_KEYS["dashboard_order"], None)
        if not isinstance(payload, list) or not payload:
            return list(DEFAULT_SECTION_ORDER)
        return [str(item) for item in payload]

    def set_section_order(self, order):
        self.set_item(STORAGE_KEYS["dashboard_order"], [str(item) for item in order])

    def clear_all(self):
        with self.engine.begin() as conn:
            for key in STORAGE_KEYS.values():
                conn.execute(
                    sql_text(f"DELETE FROM {LOCAL_STORAGE_TABLE} WHERE key = :key"),
                    {"key": key},
                )

    def export_snapshot(self):
        snapshot = {"user": self.get_user()}
        for kind in EXPORT_COLLECTIONS:
            snapshot[kind] = self.list_collection(kind)
        snapshot["settings"] = self.get_settings()
        snapshot["exported_at"] = datetime.now(timezone.utc).isoformat()
        return snapshot

    def import_snapshot(self, snapshot):
        if snapshot.get("user"):
            self.set_user(snapshot["user"])
        for kind in EXPORT_COLLECTIONS:
            if snapshot.get(kind) is not None:
                self.set_collection(kind, snapshot[kind])
        if snapshot.get("settings") is not None:
            self.set_settings(snapshot["settings"])
