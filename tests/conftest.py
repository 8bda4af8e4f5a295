from __future__ import annotations

import os
import time

os.environ.setdefault("LOG_TO_FILE", "false")

import pytest  # noqa: E402

from applymate import retry as retry_mod  # noqa: E402
from applymate.models import Listing  # noqa: E402
from applymate.sources.base import JobSearchBase, SearchResult  # noqa: E402


class StubSource(JobSearchBase):
    """Adapter returning canned listings, an error, or raising."""

    def __init__(
        self,
        name: str,
        listings: list[Listing] | None = None,
        error: str | None = None,
        exc: Exception | None = None,
        delay: float = 0.0,
        barrier=None,
    ) -> None:
        self.name = name
        self.listings = listings or []
        self.error = error
        self.exc = exc
        self.delay = delay
        self.barrier = barrier
        self.calls: list[tuple] = []

    def run(self, query, location=None, experience=None) -> SearchResult:
        self.calls.append((query, location, experience))
        if self.barrier is not None:
            self.barrier.wait()
        if self.delay:
            time.sleep(self.delay)
        if self.exc is not None:
            raise self.exc
        if self.error is not None:
            return SearchResult(source=self.name, error=self.error)
        return SearchResult(source=self.name, listings=list(self.listings))


def make_listing(title: str, source: str = "Stub", location: str = "Bangalore, India", **kw) -> Listing:
    return Listing(
        title=title,
        company=kw.pop("company", "Acme"),
        location=location,
        salary=kw.pop("salary", "Not specified"),
        link=kw.pop("link", f"https://example.com/{title.lower().replace(' ', '-')}"),
        source=source,
        **kw,
    )


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    for key in ("GEMINI_API_KEY", "GOOGLE_GEMINI_API_KEY", "GEMINI_MODEL", "HTTP_TIMEOUT"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(retry_mod, "_sleep", lambda _s: None)


@pytest.fixture
def stub_source():
    return StubSource


@pytest.fixture
def listing():
    return make_listing
