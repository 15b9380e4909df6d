from __future__ import annotations

import re

from resolutie import dates
from resolutie.constants import API_KEY_MIN_LENGTH, API_KEY_PREFIX, TITLE_MAX_LENGTH

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class ValidationError(ValueError):
    pass


def sanitize_text(raw_value, max_length=None) -> str:
    clean = " ".join(str(raw_value or "").split()).strip()
    return clean[:max_length] if max_length else clean


def optional_text(raw_value):
    clean = str(raw_value or "").strip()
    return clean or None


def require_title(raw_value, label="Title") -> str:
    clean = sanitize_text(raw_value, TITLE_MAX_LENGTH)
    if not clean:
        raise ValidationError(f"{label} cannot be empty")
    return clean


def require_choice(value, choices, label) -> str:
    if value not in choices:
        raise ValidationError(f"Invalid {label}: {value!r}")
    return value


def require_day(value, label="Deadline") -> str:
    if value in (None, ""):
        raise ValidationError(f"{label} is required")
    return parse_day(value, label)


def parse_day(value, label="Date"):
    if value in (None, ""):
        return None
    try:
        return dates.format_date(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{label} must be a YYYY-MM-DD date") from exc


def is_valid_email(email) -> bool:
    return bool(EMAIL_PATTERN.match(str(email or "")))


def is_valid_api_key(key) -> bool:
    key = str(key or "")
    return key.startswith(API_KEY_PREFIX) and len(key) >= API_KEY_MIN_LENGTH


def require_api_key(key):
    clean = str(key or "").strip()
    if clean and not is_valid_api_key(clean):
        raise ValidationError("API key format is invalid")
    return clean or None
