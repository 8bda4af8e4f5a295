"""Fetch raw HTML from job boards.

Failures come back as a ``FetchResult`` with ``ok=False`` instead of an
exception, so an unreachable board can be treated as "no listings".
"""
from __future__ import annotations

from dataclasses import dataclass

import requests

from applymate.config import USER_AGENT, http_timeout
from applymate.log import get_logger
from applymate.retry import retry

log = get_logger(__name__)

DEFAULT_HEADERS: dict[str, str] = {
    "User-Agent": USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}


@dataclass(frozen=True)
class FetchResult:
    url: str
    ok: bool
    html: str = ""
    status: int | None = None
    error: str | None = None


@retry(
    max_attempts=2,
    base_delay=1.0,
    retryable=(requests.ConnectionError, requests.Timeout),
)
def _get(url: str, headers: dict[str, str], timeout: float) -> requests.Response:
    return requests.get(url, headers=headers, timeout=timeout)


def fetch_page(
    url: str,
    headers: dict[str, str] | None = None,
    timeout: float | None = None,
) -> FetchResult:
    """GET *url* with a browser-like header set."""
    merged = dict(DEFAULT_HEADERS)
    if headers:
        merged.update(headers)
    timeout = timeout if timeout is not None else http_timeout()

    try:
        r = _get(url, merged, timeout)
    except requests.RequestException as exc:
        log.debug("GET %s failed: %s", url, exc)
        return FetchResult(url=url, ok=False, error=f"{type(exc).__name__}: {exc}")

    if not 200 <= r.status_code < 300:
        return FetchResult(url=url, ok=False, status=r.status_code, error=f"HTTP {r.status_code}")
    return FetchResult(url=url, ok=True, html=r.text, status=r.status_code)
