from __future__ import annotations

import copy

import pytest
from fastapi.testclient import TestClient

from resolutie.constants import ENTITY_KINDS
from resolutie.context import SessionContext
from resolutie.data.gateway import PersistenceGateway
from resolutie.data.local_store import LocalStore
from resolutie.data.stores import EntityStore, LocalEntityStore, RemoteStoreError

USER_EMAIL = "ana@example.com"
BACKEND_SECRET = "test-secret"


class FakeRemoteStore(EntityStore):
    def __init__(self):
        self.tables = {kind: {} for kind in ENTITY_KINDS}
        self.fail_reads = False
        self.fail_writes = False
        self.calls = []

    def _read(self, name):
        self.calls.append(name)
        if self.fail_reads:
            raise RemoteStoreError("remote unavailable")

    def _write(self, name):
        self.calls.append(name)
        if self.fail_writes:
            raise RemoteStoreError("remote write rejected")

    def fetch_all(self, kind, user_id):
        self._read("fetch_all")
        return [copy.deepcopy(r) for r in self.tables[kind].values() if r["user_id"] == user_id]

    def fetch_snapshot(self, user_id):
        self._read("fetch_snapshot")
        return {
            kind: [copy.deepcopy(r) for r in self.tables[kind].values() if r["user_id"] == user_id]
            for kind in ENTITY_KINDS
        }

    def find_progress_logs(self, user_id, habit_id, day):
        self._read("find_progress_logs")
        return [
            copy.deepcopy(log)
            for log in self.tables["progress_logs"].values()
            if log["user_id"] == user_id and log["habit_id"] == habit_id and log["date"] == day
        ]

    def save(self, kind, record):
        self._write("save")
        self.tables[kind][record["id"]] = copy.deepcopy(record)

    def delete(self, kind, record_id):
        self._write("delete")
        self.tables[kind].pop(record_id, None)

    def delete_progress_logs(self, user_id, habit_id, day):
        self._write("delete_progress_logs")
        logs = self.tables["progress_logs"]
        for log_id in [
            log_id
            for log_id, log in logs.items()
            if log["user_id"] == user_id and log["habit_id"] == habit_id and log["date"] == day
        ]:
            del logs[log_id]


class FakeResponse:
    def __init__(self, status_code=200, payload=None, reason="OK", text=None):
        self.status_code = status_code
        self.ok = status_code < 400
        self.reason = reason
        self._payload = payload
        self.text = text if text is not None else str(payload)

    def json(self):
        if self._payload is None:
            raise ValueError("Expecting value")
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse(payload={"items": []})
        self.error = error
        self.requests = []

    def request(self, method, url, params=None, json=None, headers=None, timeout=None):
        self.requests.append(
            {"method": method, "url": url, "params": params, "json": json, "headers": headers, "timeout": timeout}
        )
        if self.error:
            raise self.error
        return self.response


@pytest.fixture
def local_store(tmp_path):
    return LocalStore(f"sqlite:///{tmp_path / 'local.db'}")


@pytest.fixture
def offline_gateway(local_store):
    return PersistenceGateway(SessionContext.offline(), LocalEntityStore(local_store))


@pytest.fixture
def remote_session():
    return SessionContext(user_id=USER_EMAIL, authenticated=True, remote_configured=True)


@pytest.fixture
def fake_remote():
    return FakeRemoteStore()


@pytest.fixture
def cloud_gateway(remote_session, local_store, fake_remote):
    return PersistenceGateway(remote_session, LocalEntityStore(local_store), fake_remote)


@pytest.fixture
def api_client(tmp_path, monkeypatch):
    from resolutie_api import db, settings
    from resolutie_api.main import create_app

    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'remote.db'}")
    monkeypatch.setenv("BACKEND_SESSION_SECRET", BACKEND_SECRET)
    monkeypatch.delenv("ALLOWED_EMAILS", raising=False)
    settings.reset_settings()
    monkeypatch.setattr(db, "_engine", None)
    monkeypatch.setattr(db, "_session_factory", None)
    with TestClient(create_app()) as client:
        yield client
    settings.reset_settings()


def auth_headers(email=USER_EMAIL, token=BACKEND_SECRET):
    return {"X-User-Email": email, "X-Backend-Token": token}
