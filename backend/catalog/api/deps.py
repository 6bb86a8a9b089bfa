"""Shared FastAPI dependencies: settings, external clients, sync service.

Clients are built once per process from the frozen settings object and
shared by every request. Tests swap them out via ``app.dependency_overrides``.
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from ..clients import CloudinaryClient, SupabaseStorageClient
from ..core.config import Settings, settings
from ..database import get_db
from ..services.sync_service import SyncService


def get_settings() -> Settings:
    return settings


@lru_cache(maxsize=1)
def _cloudinary_client() -> CloudinaryClient:
    return CloudinaryClient.from_settings(settings)


@lru_cache(maxsize=1)
def _storage_client() -> SupabaseStorageClient:
    return SupabaseStorageClient.from_settings(settings)


def get_namespace_client():
    return _cloudinary_client()


def get_storage_client():
    return _storage_client()


def get_sync_service(
    db: Session = Depends(get_db),
    app_settings: Settings = Depends(get_settings),
    namespace=Depends(get_namespace_client),
    storage=Depends(get_storage_client),
) -> SyncService:
    return SyncService(db, app_settings, namespace, storage)
