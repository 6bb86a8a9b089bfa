"""Clients for the external services the sync engine reads from."""

from .cloudinary_client import Asset, AssetPage, CloudinaryClient, NamespaceClient
from .storage_client import (
    DocumentAccessDeniedError,
    DocumentNotFoundError,
    DocumentStoreClient,
    DocumentStoreError,
    SupabaseStorageClient,
)

__all__ = [
    "Asset",
    "AssetPage",
    "CloudinaryClient",
    "NamespaceClient",
    "DocumentStoreClient",
    "DocumentStoreError",
    "DocumentNotFoundError",
    "DocumentAccessDeniedError",
    "SupabaseStorageClient",
]
