from __future__ import annotations

import hmac
import re

from fastapi import Header, HTTPException

from resolutie_api.settings import get_settings

OWNER_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _token_matches(candidate: str | None, secret: str) -> bool:
    if not candidate or not secret:
        return False
    return hmac.compare_digest(candidate.encode("utf-8"), secret.encode("utf-8"))


async def require_owner(
    x_user_email: str | None = Header(default=None, alias="X-User-Email"),
    x_backend_token: str | None = Header(default=None, alias="X-Backend-Token"),
) -> str:
    """Resolves the caller's email, which every table uses as its user_id."""
    settings = get_settings()
    if not _token_matches(x_backend_token, settings.backend_session_secret):
        raise HTTPException(status_code=401, detail="Invalid backend token")
    owner = str(x_user_email or "").strip().lower()
    if not owner:
        raise HTTPException(status_code=401, detail="Missing user email")
    if not OWNER_EMAIL_PATTERN.match(owner):
        raise HTTPException(status_code=401, detail="Invalid user email")
    if settings.allowed_emails and owner not in settings.allowed_emails:
        raise HTTPException(status_code=403, detail="User not allowed")
    return owner
