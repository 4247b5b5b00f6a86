from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

# Ensure the project root (which exposes the ``backend`` package) is on ``sys.path``
PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("RUN_MIGRATIONS", "0")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("EMAIL_PROVIDER", "console")
os.environ.setdefault("MEDIA_PROVIDER", "memory")

from backend.app.database import Database, get_database
from backend.app.main import API_PREFIX, app
from backend.app.services import (
    ConsoleNotificationClient,
    InMemoryMediaClient,
    Mailer,
    get_mailer,
    get_media_client,
)

ADMIN_EMAIL = "admin@biomed.test"


class RecordingMediaClient(InMemoryMediaClient):
    """Placeholder host that also keeps payloads and deletions for assertions."""

    def __init__(self) -> None:
        self.assets: dict[str, bytes] = {}
        self.destroyed: list[str] = []

    def upload(self, content, *, filename, folder):
        uploaded = super().upload(content, filename=filename, folder=folder)
        self.assets[uploaded.public_id] = content
        return uploaded

    def destroy(self, public_id):
        super().destroy(public_id)
        self.assets.pop(public_id, None)
        self.destroyed.append(public_id)


@pytest.fixture
def database() -> Generator[Database, None, None]:
    db = Database(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    db.create_schema()
    try:
        yield db
    finally:
        db.drop_schema()
        db.dispose()


@pytest.fixture
def notification_client() -> ConsoleNotificationClient:
    return ConsoleNotificationClient()


@pytest.fixture
def mailer(notification_client: ConsoleNotificationClient) -> Mailer:
    return Mailer(
        notification_client,
        admin_email=ADMIN_EMAIL,
        support_email="support@biomed.test",
        support_phone="+1 555 0100",
    )


@pytest.fixture
def media_client() -> RecordingMediaClient:
    return RecordingMediaClient()


@pytest.fixture
def client(
    database: Database, mailer: Mailer, media_client: RecordingMediaClient
) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_database] = lambda: database
    app.dependency_overrides[get_mailer] = lambda: mailer
    app.dependency_overrides[get_media_client] = lambda: media_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def api() -> Callable[[str], str]:
    """Prefix a resource path with the versioned API root."""

    def build(path: str) -> str:
        return f"{API_PREFIX}{path}"

    return build


@pytest.fixture
def create_user(client: TestClient, api) -> Callable[..., dict]:
    counter = {"value": 0}

    def factory(**overrides) -> dict:
        counter["value"] += 1
        number = counter["value"]
        payload = {
            "first_name": "Ada",
            "last_name": f"Lovelace{number}",
            "email": f"user{number}@biomed.test",
            "phone": f"+1555000{number:04d}",
            "password": "s3cret-pass",
        }
        payload.update(overrides)
        response = client.post(api("/users"), json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return factory


@pytest.fixture
def create_blog(client: TestClient, api) -> Callable[..., dict]:
    counter = {"value": 0}

    def factory(**overrides) -> dict:
        counter["value"] += 1
        number = counter["value"]
        payload = {
            "title": f"Post {number}",
            "slug": f"post-{number}",
            "category_id": 1,
            "author_id": 1,
            "content": "Body text",
        }
        payload.update(overrides)
        response = client.post(api("/blogs"), json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return factory


@pytest.fixture
def create_course(client: TestClient, api) -> Callable[..., dict]:
    counter = {"value": 0}

    def factory(**overrides) -> dict:
        counter["value"] += 1
        payload = {"title": f"Course {counter['value']}"}
        payload.update(overrides)
        response = client.post(api("/courses"), json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return factory
