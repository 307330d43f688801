"""Shared test fixtures for the asset garage backend test suite.

Every test gets a fresh in-memory store seeded with the default user, so
ids start at 1 in each test and nothing leaks between tests. Uploaded
files go to a temporary directory created for the session.
"""

import os
import tempfile

# Point uploads at a scratch dir and use the memory store before any app imports.
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="garage-uploads-")
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["ENVIRONMENT"] = "development"
os.environ["LOG_FORMAT"] = "text"

import pytest
from fastapi.testclient import TestClient

from garage.core.config import settings
from garage.core.seeder import seed_default_user
from garage.main import app
from garage.storage import MemStorage, get_storage


@pytest.fixture()
def storage():
    """Fresh store holding only the seeded default user (id 1)."""
    store = MemStorage()
    seed_default_user(store, settings)
    return store


@pytest.fixture()
def client(storage):
    """FastAPI TestClient with the storage dependency overridden to the test store."""
    app.dependency_overrides[get_storage] = lambda: storage
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def upload_dir() -> str:
    return settings.upload_dir


def make_toolkit(name: str = "Brand Kit", **overrides) -> dict:
    """Factory for toolkit creation payloads."""
    payload = {"name": name, "description": "Logos and colours"}
    payload.update(overrides)
    return payload


def make_asset(
    name: str = "logo.png",
    toolkit_id: int = 1,
    user_id: int = 1,
    **overrides,
) -> dict:
    """Factory for asset rows as the upload handler would insert them."""
    payload = {
        "name": name,
        "originalName": name,
        "fileType": "image",
        "mimeType": "image/png",
        "size": 1024,
        "filePath": f"uploads/{name}",
        "toolkitId": toolkit_id,
        "userId": user_id,
        "tags": [],
        "status": "",
    }
    payload.update(overrides)
    return payload
