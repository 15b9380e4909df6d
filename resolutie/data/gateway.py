from __future__ import annotations

import logging
from dataclasses import dataclass, field

from resolutie import dates
from resolutie.constants import ENTITY_KINDS
from resolutie.context import SessionContext
from resolutie.data.api_client import ApiClient
from resolutie.data.local_store import LocalStore
from resolutie.data.records import new_id, normalize_record, utc_now_iso
from resolutie.data.stores import EntityStore, LocalEntityStore, RemoteEntityStore, RemoteStoreError

logger = logging.getLogger(__name__)


@dataclass
class DashboardData:
    dreams: list = field(default_factory=list)
    goals: list = field(default_factory=list)
    habits: list = field(default_factory=list)
    progress_logs: list = field(default_factory=list)
    todos: list = field(default_factory=list)
    source: str = "local"

    @property
    def habit_ids(self):
        return [habit["id"] for habit in self.habits]


@dataclass(frozen=True)
class ToggleResult:
    completed: bool
    ok: bool
    log: dict | None = None


class PersistenceGateway:
    def __init__(self, session: SessionContext, local: EntityStore, remote: EntityStore | None = None):
        self.session = session
        self.local = local
        self.remote = remote if session.remote_enabled else None

    @classmethod
    def for_session(cls, session: SessionContext, local_store: LocalStore | None = None, client: ApiClient | None = None):
        local = LocalEntityStore(local_store or LocalStore())
        remote = None
        if session.remote_enabled:
            remote = RemoteEntityStore(client or ApiClient(session.user_id))
        return cls(session, local, remote)

    @property
    def user_id(self):
        return self.session.user_id

    @property
    def remote_enabled(self):
        return self.remote is not None

    def _check_kind(self, kind):
        if kind not in ENTITY_KINDS:
            raise KeyError(f"Unknown entity kind: {kind}")

    def fetch_all(self, kind: str) -> list[dict]:
        self._check_kind(kind)
        if self.remote is not None:
            try:
                return self.remote.fetch_all(kind, self.user_id)
            except RemoteStoreError as exc:
                logger.warning("Remote fetch of %s failed, using local data: %s", kind, exc)
        return self.local.fetch_all(kind, self.user_id)

    def load_dashboard(self) -> DashboardData:
        if self.remote is not None:
            try:
                return DashboardData(**self.remote.fetch_snapshot(self.user_id), source="remote")
            except RemoteStoreError as exc:
                logger.warning("Remote snapshot failed, using local data: %s", exc)
        return DashboardData(**self.local.fetch_snapshot(self.user_id), source="local")

    def save(self, kind: str, record: dict) -> bool:
        self._check_kind(kind)
        payload = normalize_record(kind, record)
        ok = True
        if self.remote is not None:
            try:
                self.remote.save(kind, payload)
            except RemoteStoreError as exc:
                logger.warning("Remote save of %s %s failed: %s", kind, payload.get("id"), exc)
                ok = False
        self.local.save(kind, payload)
        return ok

    def delete(self, kind: str, record_id: str) -> bool:
        self._check_kind(kind)
        ok = True
        if self.remote is not None:
            try:
                self.remote.delete(kind, record_id)
            except RemoteStoreError as exc:
                logger.warning("Remote delete of %s %s failed: %s", kind, record_id, exc)
                ok = False
        self.local.delete(kind, record_id)
        return ok

    def _delete_progress_logs(self, habit_id: str, day: str) -> bool:
        ok = True
        if self.remote is not None:
            try:
                self.remote.delete_progress_logs(self.user_id, habit_id, day)
            except RemoteStoreError as exc:
                logger.warning("Remote delete of logs for %s on %s failed: %s", habit_id, day, exc)
                ok = False
        self.local.delete_progress_logs(self.user_id, habit_id, day)
        return ok

    def is_habit_completed(self, habit_id: str, day: str | None = None) -> bool:
        day = day or dates.today()
        if self.remote is not None:
            try:
                return bool(self.remote.find_progress_logs(self.user_id, habit_id, day))
            except RemoteStoreError as exc:
                logger.warning("Remote completion check failed, using local data: %s", exc)
        return bool(self.local.find_progress_logs(self.user_id, habit_id, day))

    def toggle_habit(self, habit_id: str, day: str | None = None, notes: str | None = None) -> ToggleResult:
        day = day or dates.today()
        if self.is_habit_completed(habit_id, day):
            ok = self._delete_progress_logs(habit_id, day)
            return ToggleResult(completed=False, ok=ok)
        log = {
            "id": new_id(),
            "habit_id": habit_id,
            "user_id": self.user_id,
            "completed_at": utc_now_iso(),
            "date": day,
            "notes": notes,
        }
        ok = self.save("progress_logs", log)
        return ToggleResult(completed=True, ok=ok, log=normalize_record("progress_logs", log))

    def sync_local_to_cloud(self, source_user_ids=None) -> tuple[bool, int]:
        if self.remote is None:
            return False, 0
        owners = set(source_user_ids or [self.user_id])
        synced = 0
        for kind in ENTITY_KINDS:
            records = []
            for owner in owners:
                records.extend(self.local.fetch_all(kind, owner))
            for record in records:
                payload = {**record, "user_id": self.user_id}
                try:
                    self.remote.save(kind, payload)
                except RemoteStoreError as exc:
                    logger.warning("Sync of %s %s failed: %s", kind, record.get("id"), exc)
                    continue
                self.local.save(kind, payload)
                synced += 1
        return True, synced
