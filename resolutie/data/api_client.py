from __future__ import annotations

import logging
from typing import Any

import requests
from requests.adapters import HTTPAdapter

from resolutie.settings import get_settings

logger = logging.getLogger(__name__)


class ApiError(RuntimeError):
    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


def build_session():
    session = requests.Session()
    adapter = HTTPAdapter(max_retries=0, pool_connections=10, pool_maxsize=10)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class ApiClient:
    def __init__(self, user_email, base_url=None, token=None, timeout=None, session=None):
        settings = get_settings()
        self.user_email = str(user_email or "").strip().lower()
        self.base_url = (base_url if base_url is not None else settings.api_base_url).strip()
        self.token = (token if token is not None else settings.backend_session_secret).strip()
        self.timeout = timeout or settings.request_timeout
        self.session = session or build_session()

    def is_enabled(self):
        return bool(self.base_url and self.token)

    def request(self, method: str, path: str, params: dict | None = None, json: dict | None = None) -> Any:
        base = self.base_url.rstrip("/")
        if not base:
            raise ApiError("API_BASE_URL not configured")
        if not self.token:
            raise ApiError("BACKEND_SESSION_SECRET not configured")
        if not self.user_email:
            raise ApiError("Missing user email for API request")
        headers = {
            "X-User-Email": self.user_email,
            "X-Backend-Token": self.token,
        }
        url = f"{base}{path}"
        try:
            response = self.session.request(
                method, url, params=params, json=json, headers=headers, timeout=self.timeout
            )
        except requests.RequestException as exc:
            raise ApiError(f"API request failed: {method} {path}: {exc}") from exc
        if not response.ok:
            try:
                detail = response.json()
            except ValueError:
                detail = response.text
            raise ApiError(
                f"API error {response.status_code} {response.reason}: {detail}",
                status_code=response.status_code,
            )
        if response.status_code == 204:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(
                f"API returned a non-JSON body for {method} {path}",
                status_code=response.status_code,
            ) from exc
