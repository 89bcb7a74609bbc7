# dbcheck/db/engine.py
from __future__ import annotations
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import ArgumentError

from dbcheck.core.config import Settings
from dbcheck.core.errors import FatalConfigurationError

def get_engine(settings: Settings) -> Engine:
    if not settings.DATABASE_URL:
        raise FatalConfigurationError("DATABASE_URL is not configured.")
    try:
        url = make_url(settings.DATABASE_URL)
    except ArgumentError as e:
        raise FatalConfigurationError(f"Invalid DATABASE_URL: {e}") from e

    kwargs = {"future": True, "pool_pre_ping": True}
    if url.get_backend_name() == "sqlite":
        # probes run on worker threads
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs["pool_size"] = settings.POOL_SIZE
    return create_engine(url, **kwargs)
