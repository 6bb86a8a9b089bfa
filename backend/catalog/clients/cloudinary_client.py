"""Cloudinary client: folder listing and asset search over the REST API.

Deep module: callers ask for sub-folders or a page of assets and get plain
dataclasses back. Credentials, retries, timeouts and response parsing are
handled internally. The client holds its configuration from construction
on; nothing configures it globally.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol
from urllib.parse import quote

import requests

from ..exceptions import ConfigurationMissingError, ExternalUnavailableError
from .retry import request_with_retry

logger = logging.getLogger(__name__)

# Cloudinary's search API caps max_results at 500; the sync pages by 100.
ASSET_PAGE_SIZE = 100
SUBFOLDER_PAGE_SIZE = 500


@dataclass(frozen=True)
class Asset:
    """One Cloudinary asset as the sync engine needs it."""
    asset_id: str
    filename: str
    display_name: Optional[str]
    format: Optional[str]
    created_at: Optional[str]
    url: str
    context: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_resource(cls, resource: Dict[str, Any]) -> "Asset":
        """Build an Asset from a search API resource dict."""
        context = resource.get("context") or {}
        # The Admin API nests custom context under "custom"; search does not.
        if isinstance(context.get("custom"), dict):
            context = context["custom"]

        public_id = resource.get("public_id") or ""
        return cls(
            asset_id=resource["asset_id"],
            filename=resource.get("filename") or public_id.rsplit("/", 1)[-1],
            display_name=resource.get("display_name"),
            format=resource.get("format"),
            created_at=resource.get("created_at"),
            url=resource.get("secure_url") or resource.get("url") or "",
            context={str(k): str(v) for k, v in context.items() if v is not None},
        )


@dataclass(frozen=True)
class AssetPage:
    assets: List[Asset]
    next_cursor: Optional[str] = None


class NamespaceClient(Protocol):
    """Operations the reconciler needs from the media host."""

    def list_subfolders(self, path: str) -> List[str]:
        ...

    def list_assets(self, path: str, cursor: Optional[str] = None) -> AssetPage:
        ...


class CloudinaryClient:
    """Client for Cloudinary's Admin and Search APIs.

    Args:
        cloud_name: Cloudinary cloud name.
        api_key / api_secret: API credentials (HTTP basic auth).
        api_base: REST base URL, ``https://api.cloudinary.com/v1_1`` by default.
        timeout: Per-request deadline in seconds.
        max_retries: Attempts per request for transient failures.
    """

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        api_base: str = "https://api.cloudinary.com/v1_1",
        timeout: float = 30.0,
        max_retries: int = 3,
        session: Optional[requests.Session] = None,
    ):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self._session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings) -> "CloudinaryClient":
        return cls(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
            api_base=settings.cloudinary_api_base,
            timeout=settings.external_timeout_seconds,
            max_retries=settings.external_max_retries,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    def _url(self, suffix: str) -> str:
        return f"{self.api_base}/{self.cloud_name}/{suffix}"

    def _request(self, method: str, suffix: str, **kwargs: Any) -> Dict[str, Any]:
        if not self.is_configured:
            raise ConfigurationMissingError(
                "CLOUDINARY_CLOUD_NAME",
                "Cloudinary credentials are not configured "
                "(CLOUDINARY_CLOUD_NAME, CLOUDINARY_API_KEY, CLOUDINARY_API_SECRET)",
            )
        resp = request_with_retry(
            self._session,
            method,
            self._url(suffix),
            timeout=self.timeout,
            max_retries=self.max_retries,
            label="cloudinary",
            auth=(self.api_key, self.api_secret),
            **kwargs,
        )
        resp.raise_for_status()
        return resp.json()

    # ----- folders -----------------------------------------------------------

    def list_subfolders(self, path: str) -> List[str]:
        """Immediate sub-folder paths of *path*.

        Best effort: any failure is logged and reported as "no children" so
        one unreadable folder never aborts the tree walk.
        """
        paths: List[str] = []
        cursor: Optional[str] = None
        try:
            while True:
                params: Dict[str, Any] = {"max_results": SUBFOLDER_PAGE_SIZE}
                if cursor:
                    params["next_cursor"] = cursor
                data = self._request("GET", f"folders/{quote(path)}", params=params)
                paths.extend(f["path"] for f in data.get("folders", []))
                cursor = data.get("next_cursor")
                if not cursor:
                    return paths
        except (requests.RequestException, ValueError, KeyError) as exc:
            logger.warning(
                "Listing sub-folders failed; treating as leaf",
                extra={"path": path, "error": str(exc)},
            )
            return []

    # ----- assets ------------------------------------------------------------

    def list_assets(self, path: str, cursor: Optional[str] = None) -> AssetPage:
        """One page of assets directly inside *path*.

        Raises:
            ExternalUnavailableError: the search call failed or returned junk.
        """
        escaped = path.replace('"', '\\"')
        body: Dict[str, Any] = {
            "expression": f'folder:"{escaped}"',
            "with_field": ["context"],
            "max_results": ASSET_PAGE_SIZE,
        }
        if cursor:
            body["next_cursor"] = cursor

        try:
            data = self._request("POST", "resources/search", json=body)
            assets = [Asset.from_resource(r) for r in data.get("resources", [])]
        except (requests.RequestException, ValueError, KeyError) as exc:
            raise ExternalUnavailableError(
                "cloudinary", f"Asset search failed for folder '{path}'", exc
            ) from exc

        return AssetPage(assets=assets, next_cursor=data.get("next_cursor") or None)
