"""Database and extension wiring for the Flask app."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, ContextManager, Optional

from flask import Flask, current_app
from sqlmodel import Session, SQLModel, create_engine

from . import models  # noqa: F401  # registers plan_snapshot with SQLModel metadata
from .config import BaseConfig
from .infra.repositories.snapshot import SQLModelSnapshotRepository

_EXTENSION_KEY = "payoffplanner.db"

SessionFactory = Callable[[], ContextManager[Session]]


def _session_factory(engine) -> SessionFactory:
    """Sessions that commit on success and keep loaded snapshots readable after close."""

    @contextmanager
    def factory():
        session = Session(engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return factory


def init_db(app: Flask) -> None:
    """Create the engine and snapshot table, then register a session factory on ``app``."""

    config: BaseConfig = app.config["PAYOFF_CONFIG"]
    engine = create_engine(config.DATABASE_URL, **config.sqlalchemy_engine_options())

    with engine.begin() as connection:
        SQLModel.metadata.create_all(connection)

    app.extensions[_EXTENSION_KEY] = {"engine": engine, "session_factory": _session_factory(engine)}


def get_session_factory(app: Optional[Flask] = None) -> SessionFactory:
    """Return the session factory registered on ``app`` (or the current app)."""

    target = app or current_app
    state = target.extensions.get(_EXTENSION_KEY)
    if state is None:
        raise RuntimeError("Database engine not initialized")
    return state["session_factory"]


def get_snapshot_repository(app: Optional[Flask] = None) -> SQLModelSnapshotRepository:
    return SQLModelSnapshotRepository(get_session_factory(app))
