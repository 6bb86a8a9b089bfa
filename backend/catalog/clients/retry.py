"""Retrying HTTP helper shared by the Cloudinary and Supabase clients."""

import logging
import time
from typing import Any

import requests

logger = logging.getLogger(__name__)

# Exponential backoff: 1s, 2s, 4s ...
RETRY_BASE_DELAY = 1.0


def request_with_retry(
    session: requests.Session,
    method: str,
    url: str,
    *,
    timeout: float,
    max_retries: int,
    label: str,
    **kwargs: Any,
) -> requests.Response:
    """Execute an HTTP request, retrying transient failures.

    Connection errors, timeouts, 429 and 5xx responses are retried with
    exponential backoff. Any other response (including 4xx) is returned to
    the caller, which decides what the status means.

    Raises:
        requests.RequestException: the last transient failure once retries
        are exhausted.
    """
    last_exc: Exception | None = None

    for attempt in range(max_retries):
        try:
            resp = session.request(method, url, timeout=timeout, **kwargs)
            if resp.status_code < 500 and resp.status_code != 429:
                return resp
            last_exc = requests.HTTPError(
                f"{label}: server returned {resp.status_code}", response=resp
            )
        except (requests.ConnectionError, requests.Timeout) as exc:
            last_exc = exc

        if attempt < max_retries - 1:
            delay = RETRY_BASE_DELAY * (2 ** attempt)
            logger.warning(
                "%s %s failed (attempt %d/%d), retrying in %.1fs: %s",
                label, method, attempt + 1, max_retries, delay, last_exc,
            )
            time.sleep(delay)

    logger.error("%s %s failed after %d attempts", label, method, max_retries)
    raise last_exc  # type: ignore[misc]
