from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from applymate.log import get_logger
from applymate.models import Listing

log = get_logger(__name__)


@dataclass
class SearchResult:
    """Outcome of one board search: listings, or the reason there are none."""

    source: str
    listings: list[Listing] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def filter_by_location(listings: list[Listing], location: str | None) -> list[Listing]:
    """Keep listings whose location contains *location*, case-insensitively."""
    wanted = (location or "").strip().lower()
    if not wanted:
        return list(listings)
    return [j for j in listings if wanted in j.location.lower()]


class JobSearchBase(ABC):
    name: str = "unknown"

    @abstractmethod
    def run(
        self,
        query: str,
        location: str | None = None,
        experience: str | None = None,
    ) -> SearchResult:
        """Search the board; report failure through ``SearchResult.error``."""

    def search(
        self,
        query: str,
        location: str | None = None,
        experience: str | None = None,
    ) -> list[Listing]:
        """Listings matching the request; never raises."""
        try:
            result = self.run(query, location, experience)
        except Exception as exc:
            log.warning("[%s] search crashed: %s", self.name, exc)
            return []
        if not result.ok:
            log.warning("[%s] no listings: %s", self.name, result.error)
            return []
        kept = filter_by_location(result.listings, location)
        log.info("[%s] %d listing(s), %d after location filter", self.name, len(result.listings), len(kept))
        return kept
