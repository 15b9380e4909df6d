from __future__ import annotations

import logging
from urllib.parse import urlparse, urlunparse, parse_qsl, urlencode

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncEngine

from resolutie_api.settings import get_settings

logger = logging.getLogger(__name__)

ASYNC_DRIVER_PREFIXES = {
    "sqlite:///": "sqlite+aiosqlite:///",
    "postgres://": "postgresql+asyncpg://",
    "postgresql://": "postgresql+asyncpg://",
    "postgresql+psycopg2://": "postgresql+asyncpg://",
}
# asyncpg rejects libpq-only query options
DROPPED_QUERY_KEYS = {"sslmode", "channel_binding", "ssl"}
LOCAL_HOSTS = {"localhost", "127.0.0.1"}


def _normalize_database_url(database_url: str) -> str:
    url = str(database_url or "").strip()
    for prefix, replacement in ASYNC_DRIVER_PREFIXES.items():
        if url.startswith(prefix):
            url = replacement + url[len(prefix) :]
            break
    if not url or is_sqlite_url(url):
        return url
    try:
        parsed = urlparse(url)
    except ValueError:
        return url
    query = parse_qsl(parsed.query, keep_blank_values=True)
    wants_ssl = any(key == "sslmode" for key, _ in query)
    clean = [(key, value) for key, value in query if key not in DROPPED_QUERY_KEYS]
    if wants_ssl:
        clean.append(("ssl", "true"))
    return urlunparse(parsed._replace(query=urlencode(clean)))


def is_sqlite_url(database_url: str) -> bool:
    return str(database_url or "").strip().lower().startswith("sqlite")


_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker | None = None


def _remote_connect_args(db_url: str) -> dict:
    try:
        host = urlparse(db_url).hostname or ""
    except ValueError:
        logger.debug("Could not read host from database URL")
        return {}
    if host and host not in LOCAL_HOSTS:
        return {"ssl": True}
    return {}


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        db_url = _normalize_database_url(get_settings().database_url)
        if is_sqlite_url(db_url):
            _engine = create_async_engine(db_url, future=True)
        else:
            _engine = create_async_engine(
                db_url,
                connect_args=_remote_connect_args(db_url),
                pool_pre_ping=True,
                pool_size=10,
                max_overflow=5,
                future=True,
            )
        logger.info("Database engine ready (%s)", db_url.split(":", 1)[0])
    return _engine


def get_sessionmaker() -> async_sessionmaker:
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(get_engine(), expire_on_commit=False)
    return _session_factory


async def dispose_engine() -> None:
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
