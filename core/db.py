from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from core.config import get_settings
from core.models import Base

logger = logging.getLogger(__name__)


def _build_engine() -> Engine:
    settings = get_settings()
    url = make_url(settings.database_url)
    timeout = settings.store_timeout_seconds
    backend = url.get_backend_name()

    if backend == "sqlite":
        return create_engine(url, connect_args={"timeout": timeout, "check_same_thread": False})

    connect_args: dict[str, object] = {}
    if backend == "postgresql":
        connect_args = {
            "connect_timeout": max(1, int(timeout)),
            "options": f"-c statement_timeout={int(timeout * 1000)}",
        }
    return create_engine(url, pool_pre_ping=True, pool_timeout=timeout, connect_args=connect_args)


class _EngineHandle:
    """Process-scoped engine + session factory, built once on first use."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._engine: Optional[Engine] = None
        self._factory: Optional[sessionmaker] = None

    def engine(self) -> Engine:
        if self._engine is None:
            with self._lock:
                if self._engine is None:
                    self._engine = _build_engine()
                    self._factory = sessionmaker(bind=self._engine, autoflush=False, autocommit=False, expire_on_commit=False)
                    logger.info("store_engine_initialized", extra={"backend": self._engine.url.get_backend_name()})
        return self._engine

    def session_factory(self) -> sessionmaker:
        self.engine()
        assert self._factory is not None
        return self._factory

    def reset(self) -> None:
        with self._lock:
            if self._engine is not None:
                self._engine.dispose()
            self._engine = None
            self._factory = None


_handle = _EngineHandle()


def get_engine() -> Engine:
    return _handle.engine()


def get_session_factory() -> sessionmaker:
    return _handle.session_factory()


def reset_engine() -> None:
    """Drop the cached engine and session factory (tests, settings changes)."""
    _handle.reset()


def create_schema() -> None:
    Base.metadata.create_all(bind=get_engine())


def ping() -> bool:
    with get_engine().connect() as conn:
        conn.execute(text("select 1"))
    return True


@contextmanager
def session_scope() -> Iterator[Session]:
    session = get_session_factory()()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
