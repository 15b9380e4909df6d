from __future__ import annotations

from dataclasses import dataclass

from resolutie.constants import LOCAL_USER_ID
from resolutie.settings import Settings, get_settings


@dataclass(frozen=True)
class SessionContext:
    user_id: str
    authenticated: bool
    remote_configured: bool

    @property
    def remote_enabled(self) -> bool:
        return self.remote_configured and self.authenticated

    @classmethod
    def for_user(cls, user_email: str | None, settings: Settings | None = None) -> "SessionContext":
        settings = settings or get_settings()
        email = str(user_email or "").strip().lower()
        return cls(
            user_id=email or LOCAL_USER_ID,
            authenticated=bool(email),
            remote_configured=settings.remote_configured,
        )

    @classmethod
    def offline(cls) -> "SessionContext":
        return cls(user_id=LOCAL_USER_ID, authenticated=False, remote_configured=False)
