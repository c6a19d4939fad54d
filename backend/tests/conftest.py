import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from app import main
from app.storage.db import get_session
from app.storage.models import Recipe

USER_ID = "user-1"


@pytest.fixture(name="engine")
def engine_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    return engine


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(engine):
    def _get_session_override():
        with Session(engine) as session:
            yield session

    main.app.dependency_overrides[get_session] = _get_session_override
    client = TestClient(main.app, headers={"X-User-Id": USER_ID})
    yield client
    main.app.dependency_overrides.clear()


@pytest.fixture(name="anon_client")
def anon_client_fixture(client):
    return TestClient(main.app)


@pytest.fixture(name="make_recipe")
def make_recipe_fixture(session):
    def _make(title: str, average_rating: float | None = None, **kwargs) -> Recipe:
        recipe = Recipe(title=title, average_rating=average_rating, **kwargs)
        session.add(recipe)
        session.commit()
        session.refresh(recipe)
        return recipe

    return _make


@pytest.fixture(name="fixed_now")
def fixed_now_fixture():
    return datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)
