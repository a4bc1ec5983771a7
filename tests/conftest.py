import json
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import attendai.models  # noqa: F401
from attendai.crud.user import create_user
from attendai.dependencies import get_db, get_extraction_service
from attendai.services.auth_service import issue_token
from attendai.services.extraction_service import ScheduleExtractionService
from main import app


class FakeModels:
    """Stands in for ``genai.Client().models``."""

    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.calls = []

    def generate_content(self, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.text)


def fake_genai_client(items=None, text=None, error=None):
    if text is None and items is not None:
        text = json.dumps(items)
    return SimpleNamespace(models=FakeModels(text=text, error=error))


EXTRACTED_ITEMS = [
    {"day": "Monday", "startTime": "10:00 AM", "endTime": "11:00 AM", "subject": "Physics", "room": "B2"},
    {"day": "Monday", "startTime": "9:00 AM", "endTime": "10:00 AM", "subject": "Math"},
]


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def extraction_service():
    return ScheduleExtractionService(
        api_key="test-key", client=fake_genai_client(EXTRACTED_ITEMS)
    )


@pytest.fixture
def client(engine, extraction_service):
    def override_get_db():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_extraction_service] = lambda: extraction_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user(session):
    return create_user(session, name="Ada", email="ada@example.com", password="secret123")


@pytest.fixture
def auth_headers(user):
    return {"Authorization": f"Bearer {issue_token(user)}"}
