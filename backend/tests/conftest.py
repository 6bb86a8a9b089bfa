"""Shared test fixtures for the catalog backend test suite.

All tests run against an in-memory SQLite database (one shared connection).
Tables are dropped and recreated before each test, so every test starts
from an empty catalog.

External services are replaced by in-memory fakes: FakeNamespace stands in
for Cloudinary and FakeDocumentStore for Supabase Storage.
"""

import json
import os

# Use the in-memory database and plain logs before any catalog imports.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_FORMAT"] = "text"
os.environ["ENVIRONMENT"] = "development"

import pytest
from fastapi.testclient import TestClient

from catalog.database import Base, get_db, engine, SessionLocal
from catalog.main import app
from catalog.api.deps import get_namespace_client, get_settings, get_storage_client
from catalog.clients.cloudinary_client import Asset, AssetPage
from catalog.clients.storage_client import DocumentNotFoundError
from catalog.core.config import Settings
from catalog.exceptions import ExternalUnavailableError


@pytest.fixture(autouse=True)
def _reset_tables():
    """Recreate every table before each test for isolation."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture()
def db():
    """Per-test database session."""
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture()
def namespace():
    return FakeNamespace()


@pytest.fixture()
def storage():
    return FakeDocumentStore()


@pytest.fixture()
def test_settings():
    return make_settings()


@pytest.fixture()
def client(db, namespace, storage, test_settings):
    """FastAPI TestClient with the DB session, settings and external clients overridden."""

    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_namespace_client] = lambda: namespace
    app.dependency_overrides[get_storage_client] = lambda: storage
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Factories and fakes
# ---------------------------------------------------------------------------

def make_settings(**overrides) -> Settings:
    """Settings with both sync sources configured, ignoring any .env file."""
    values = {
        "cloudinary_cloud_name": "demo",
        "cloudinary_api_key": "key",
        "cloudinary_api_secret": "secret",
        "cloudinary_root_folders": "Studio",
        "supabase_url": "https://example.supabase.co",
        "supabase_service_key": "service-key",
        "supabase_storage_bucket": "content",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_asset(
    asset_id: str,
    display_name: str = None,
    context: dict = None,
    **overrides,
) -> Asset:
    """Factory for Cloudinary assets."""
    values = {
        "asset_id": asset_id,
        "filename": f"{asset_id}_file",
        "display_name": display_name or asset_id,
        "format": "jpg",
        "created_at": "2024-05-01T10:00:00Z",
        "url": f"https://res.cloudinary.com/demo/image/upload/{asset_id}.jpg",
        "context": context or {},
    }
    values.update(overrides)
    return Asset(**values)


class FakeNamespace:
    """In-memory Cloudinary stand-in.

    ``tree`` maps a folder path to its child paths, ``assets`` maps a path to
    its assets. Assets are served in pages of ``page_size`` with integer
    offsets as cursors.
    """

    def __init__(self, tree=None, assets=None, page_size=100):
        self.tree = dict(tree or {})
        self.assets = dict(assets or {})
        self.page_size = page_size
        self.unreadable_folders = set()
        self.failing_asset_folders = set()
        self.subfolder_calls = []
        self.asset_calls = []

    def list_subfolders(self, path):
        self.subfolder_calls.append(path)
        if path in self.unreadable_folders:
            # The real client logs and degrades to "no children".
            return []
        return list(self.tree.get(path, []))

    def list_assets(self, path, cursor=None):
        self.asset_calls.append((path, cursor))
        if path in self.failing_asset_folders:
            raise ExternalUnavailableError("cloudinary", f"Asset search failed for folder '{path}'")
        items = self.assets.get(path, [])
        start = int(cursor or 0)
        end = start + self.page_size
        return AssetPage(assets=items[start:end], next_cursor=str(end) if end < len(items) else None)


class FakeDocumentStore:
    """In-memory Supabase Storage stand-in keyed by document name.

    A stored exception is raised on download instead of returning bytes.
    """

    def __init__(self, documents=None):
        self.documents = {}
        self.downloads = []
        for name, value in (documents or {}).items():
            self.put(name, value)

    def put(self, name, value):
        if isinstance(value, (list, dict)):
            value = json.dumps(value).encode()
        elif isinstance(value, str):
            value = value.encode()
        self.documents[name] = value

    def download(self, bucket, name):
        self.downloads.append((bucket, name))
        value = self.documents.get(name)
        if value is None:
            raise DocumentNotFoundError(f"Object not found: {bucket}/{name}", 404)
        if isinstance(value, Exception):
            raise value
        return value
