from pathlib import Path

from .base import JobSearchBase, SearchResult, filter_by_location
from .extractor import extract_listings
from .scrape import ScrapeSource
from .sites import SelectorSet, SiteConfig, load_site_configs

from applymate.log import get_logger

log = get_logger(__name__)

__all__ = [
    "JobSearchBase", "SearchResult", "ScrapeSource", "SelectorSet", "SiteConfig",
    "extract_listings", "filter_by_location", "load_site_configs", "get_sources",
]


def get_sources(path: Path | None = None) -> list[JobSearchBase]:
    """One adapter per configured board, in configuration order."""
    sources: list[JobSearchBase] = [ScrapeSource(site) for site in load_site_configs(path)]
    log.debug("Registered sources: %s", ", ".join(s.name for s in sources))
    return sources
