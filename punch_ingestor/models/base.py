"""SQLAlchemy base declarations and session helpers."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from importlib import import_module
from typing import Any

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, close_all_sessions, sessionmaker

from ..utils.config import get_settings

DEFAULT_DATABASE_URL = "sqlite:///./punch_ingestor.db"
MODEL_MODULES = ("punch_ingestor.models.attendance", "punch_ingestor.models.directory")


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""


_ENGINE: Engine | None = None
_SESSION_FACTORY: sessionmaker[Session] | None = None


def _load_models() -> None:
    """Import model modules so metadata knows every mapped table."""

    for module in MODEL_MODULES:
        import_module(module)


def _create_engine() -> Engine:
    """Instantiate the SQLAlchemy engine using the configured database URL."""

    settings = get_settings()
    database_url = settings.database_url or DEFAULT_DATABASE_URL

    connect_args: dict[str, object] = {}
    pool_kwargs: dict[str, Any] = {}
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
    else:
        pool_config = settings.database
        pool_kwargs = {
            "pool_size": pool_config.pool_size,
            "max_overflow": pool_config.max_overflow,
            "pool_timeout": pool_config.timeout,
            "pool_pre_ping": pool_config.pre_ping,
        }
        if pool_config.recycle_seconds > 0:
            pool_kwargs["pool_recycle"] = pool_config.recycle_seconds

    return create_engine(
        database_url,
        echo=False,
        connect_args=connect_args,
        **pool_kwargs,
    )


def get_engine() -> Engine:
    """Return (and lazily initialize) the shared engine, creating tables on first use."""

    global _ENGINE
    if _ENGINE is None:
        _ENGINE = _create_engine()
        _load_models()
        Base.metadata.create_all(bind=_ENGINE)
    return _ENGINE


def get_session_factory() -> sessionmaker[Session]:
    """Return the session factory bound to the global engine."""

    global _SESSION_FACTORY
    if _SESSION_FACTORY is None:
        _SESSION_FACTORY = sessionmaker(
            bind=get_engine(),
            autoflush=False,
            expire_on_commit=False,
        )
    return _SESSION_FACTORY


@contextmanager
def session_scope(factory: sessionmaker[Session] | None = None) -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""

    session = (factory or get_session_factory())()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def reset_engine() -> None:
    """Dispose the cached engine and session factory (used by tests)."""

    global _ENGINE, _SESSION_FACTORY
    if _SESSION_FACTORY is not None:
        close_all_sessions()
    if _ENGINE is not None:
        _ENGINE.dispose()
    _ENGINE = None
    _SESSION_FACTORY = None
