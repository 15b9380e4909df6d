from __future__ import annotations

from abc import ABC, abstractmethod

from resolutie.constants import ENTITY_KINDS
from resolutie.data.api_client import ApiClient, ApiError
from resolutie.data.local_store import LocalStore
from resolutie.data.records import normalize_record


class RemoteStoreError(RuntimeError):
    pass


class EntityStore(ABC):
    @abstractmethod
    def fetch_all(self, kind: str, user_id: str) -> list[dict]:
        pass

    @abstractmethod
    def fetch_snapshot(self, user_id: str) -> dict[str, list[dict]]:
        """Returns every entity collection owned by user_id, keyed by kind."""
        pass

    @abstractmethod
    def find_progress_logs(self, user_id: str, habit_id: str, day: str) -> list[dict]:
        pass

    @abstractmethod
    def save(self, kind: str, record: dict) -> None:
        pass

    @abstractmethod
    def delete(self, kind: str, record_id: str) -> None:
        pass

    @abstractmethod
    def delete_progress_logs(self, user_id: str, habit_id: str, day: str) -> None:
        pass


class LocalEntityStore(EntityStore):
    def __init__(self, local: LocalStore):
        self.local = local

    def fetch_all(self, kind, user_id):
        return [
            normalize_record(kind, item)
            for item in self.local.list_collection(kind)
            if item.get("user_id") == user_id
        ]

    def fetch_snapshot(self, user_id):
        return {kind: self.fetch_all(kind, user_id) for kind in ENTITY_KINDS}

    def find_progress_logs(self, user_id, habit_id, day):
        return [
            log
            for log in self.fetch_all("progress_logs", user_id)
            if log.get("habit_id") == habit_id and log.get("date") == day
        ]

    def save(self, kind, record):
        self.local.upsert_record(kind, normalize_record(kind, record))

    def delete(self, kind, record_id):
        self.local.delete_record(kind, record_id)

    def delete_progress_logs(self, user_id, habit_id, day):
        logs = self.local.list_collection("progress_logs")
        remaining = [
            log
            for log in logs
            if not (
                log.get("habit_id") == habit_id
                and log.get("date") == day
                and log.get("user_id") == user_id
            )
        ]
        self.local.set_collection("progress_logs", remaining)


class RemoteEntityStore(EntityStore):
    def __init__(self, client: ApiClient):
        self.client = client

    def _call(self, method, path, params=None, json=None):
        try:
            return self.client.request(method, path, params=params, json=json)
        except ApiError as exc:
            raise RemoteStoreError(str(exc)) from exc

    def _read(self, path, params=None) -> dict:
        payload = self._call("GET", path, params=params)
        if not isinstance(payload, dict):
            raise RemoteStoreError(f"Unexpected response body for GET {path}")
        return payload

    def _records(self, kind, payload, key) -> list[dict]:
        items = payload.get(key, [])
        if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
            raise RemoteStoreError(f"Unexpected {key} payload for {kind}")
        return [normalize_record(kind, item) for item in items]

    def fetch_all(self, kind, user_id):
        return self._records(kind, self._read(f"/v1/{kind}"), "items")

    def fetch_snapshot(self, user_id):
        payload = self._read("/v1/snapshot")
        return {kind: self._records(kind, payload, kind) for kind in ENTITY_KINDS}

    def find_progress_logs(self, user_id, habit_id, day):
        payload = self._read("/v1/progress_logs", params={"habit_id": habit_id, "date": day})
        return self._records("progress_logs", payload, "items")

    def save(self, kind, record):
        payload = normalize_record(kind, record)
        self._call("PUT", f"/v1/{kind}/{payload['id']}", json=payload)

    def delete(self, kind, record_id):
        self._call("DELETE", f"/v1/{kind}/{record_id}")

    def delete_progress_logs(self, user_id, habit_id, day):
        self._call("DELETE", "/v1/progress_logs", params={"habit_id": habit_id, "date": day})
