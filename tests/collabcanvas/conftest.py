from __future__ import annotations

from collections.abc import Iterator

import pytest
from collabcanvas.api.dependencies import get_db_session
from collabcanvas.core.database import create_db_and_tables, create_db_engine
from collabcanvas.main import create_app
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session


@pytest.fixture()
def engine() -> Iterator[Engine]:
    # One shared in-memory connection so the TestClient thread sees the same data.
    eng = create_db_engine("sqlite://", poolclass=StaticPool)
    create_db_and_tables(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def session(engine: Engine) -> Iterator[Session]:
    with Session(engine) as s:
        yield s


@pytest.fixture()
def app(engine: Engine) -> FastAPI:
    application = create_app()

    def _override() -> Iterator[Session]:
        with Session(engine, expire_on_commit=False) as s:
            yield s

    application.dependency_overrides[get_db_session] = _override
    return application


@pytest.fixture()
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
