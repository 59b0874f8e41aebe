"""SQLAlchemy engine/session plumbing for the device store."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker

LOGGER = logging.getLogger(__name__)

# ``Base`` is the parent class for every SQLAlchemy model defined in models/.
Base = declarative_base()


def build_engine(url: str) -> Engine:
    """Create an engine, making sure an SQLite file has a folder to live in."""

    parsed = make_url(url)
    connect_args = {}
    if parsed.get_backend_name() == "sqlite":
        # FastAPI runs sync handlers in a threadpool, so the SQLite connection
        # must be usable from threads other than the one that opened it.
        connect_args["check_same_thread"] = False
        if parsed.database and parsed.database != ":memory:":
            Path(parsed.database).expanduser().parent.mkdir(parents=True, exist_ok=True)
    return create_engine(url, connect_args=connect_args)


class Database:
    """Process-scoped owner of the engine and session factory.

    Built once by the application factory. ``init`` opens storage and makes
    sure the schema exists; ``teardown`` releases pooled connections.
    """

    def __init__(self, url: str, *, seed_sample_data: bool = False) -> None:
        self.url = url
        self.seed_sample_data = seed_sample_data
        self.engine = build_engine(url)
        self.session_factory = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)

    def init(self) -> None:
        # Importing the models registers them with ``Base.metadata``.
        from ..models import device as _device  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        LOGGER.info("database.ready", extra={"extra_data": {"url": self.engine.url.render_as_string(hide_password=True)}})
        if self.seed_sample_data:
            from .seed import insert_sample_devices

            with self.session_factory() as session:
                insert_sample_devices(session)

    def teardown(self) -> None:
        self.engine.dispose()
        LOGGER.info("database.closed")

    def session(self) -> Session:
        return self.session_factory()


def get_db(request: Request) -> Iterator[Session]:
    """FastAPI dependency that yields a session and guarantees cleanup."""

    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
