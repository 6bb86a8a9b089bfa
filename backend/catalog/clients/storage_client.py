"""Supabase Storage client for downloading the catalog's JSON documents."""

import logging
from typing import Optional, Protocol
from urllib.parse import quote

import requests

from ..exceptions import ConfigurationMissingError
from .retry import request_with_retry

logger = logging.getLogger(__name__)


class DocumentStoreError(Exception):
    """Raised when a document cannot be downloaded for an unknown reason."""

    def __init__(self, message: str, status_code: int = 0):
        super().__init__(message)
        self.status_code = status_code


class DocumentNotFoundError(DocumentStoreError):
    """The bucket or object does not exist."""


class DocumentAccessDeniedError(DocumentStoreError):
    """The service key is not allowed to read the object."""


class DocumentStoreClient(Protocol):
    """Operations the importers need from object storage."""

    def download(self, bucket: str, name: str) -> bytes:
        ...


class SupabaseStorageClient:
    """Reads objects through Supabase Storage's REST endpoint.

    Args:
        url: Supabase project URL, e.g. ``https://xyz.supabase.co``.
        service_key: Service role key, sent as bearer token and ``apikey``.
        timeout: Per-request deadline in seconds.
        max_retries: Attempts per request for transient failures.
    """

    def __init__(
        self,
        url: str,
        service_key: str,
        timeout: float = 30.0,
        max_retries: int = 3,
        session: Optional[requests.Session] = None,
    ):
        self.url = url.rstrip("/")
        self.service_key = service_key
        self.timeout = timeout
        self.max_retries = max_retries
        self._session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings) -> "SupabaseStorageClient":
        return cls(
            url=settings.supabase_url,
            service_key=settings.supabase_service_key,
            timeout=settings.external_timeout_seconds,
            max_retries=settings.external_max_retries,
        )

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.service_key}",
            "apikey": self.service_key,
        }

    def download(self, bucket: str, name: str) -> bytes:
        """Return the raw bytes of ``bucket/name``.

        Raises:
            ConfigurationMissingError: SUPABASE_URL / SUPABASE_SERVICE_KEY unset.
            DocumentNotFoundError: 404, or Supabase's 400 "not_found" variant.
            DocumentAccessDeniedError: 401 / 403.
            DocumentStoreError: anything else, including exhausted retries.
        """
        if not (self.url and self.service_key):
            raise ConfigurationMissingError(
                "SUPABASE_URL",
                "Supabase storage is not configured (SUPABASE_URL, SUPABASE_SERVICE_KEY)",
            )

        endpoint = f"{self.url}/storage/v1/object/{quote(bucket)}/{quote(name)}"
        try:
            resp = request_with_retry(
                self._session,
                "GET",
                endpoint,
                timeout=self.timeout,
                max_retries=self.max_retries,
                label="supabase-storage",
                headers=self._headers(),
            )
        except requests.RequestException as exc:
            raise DocumentStoreError(f"Download of {bucket}/{name} failed: {exc}") from exc

        status = resp.status_code
        if status == 200:
            logger.debug("Downloaded %s/%s (%d bytes)", bucket, name, len(resp.content))
            return resp.content
        if status == 404 or (status == 400 and "not_found" in resp.text.lower()):
            raise DocumentNotFoundError(f"Object not found: {bucket}/{name}", status)
        if status in (401, 403):
            raise DocumentAccessDeniedError(f"Access denied to {bucket}/{name}", status)
        raise DocumentStoreError(f"Download of {bucket}/{name} returned HTTP {status}", status)
