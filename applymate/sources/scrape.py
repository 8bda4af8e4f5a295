"""HTML-scraping adapter driven entirely by a ``SiteConfig``."""
from __future__ import annotations

from typing import Callable

from applymate.fetcher import FetchResult, fetch_page
from applymate.log import get_logger
from applymate.sources.base import JobSearchBase, SearchResult
from applymate.sources.extractor import extract_listings
from applymate.sources.sites import SiteConfig

log = get_logger(__name__)

Fetcher = Callable[[str], FetchResult]


class ScrapeSource(JobSearchBase):
    def __init__(self, site: SiteConfig, fetcher: Fetcher | None = None) -> None:
        self.site = site
        self.name = site.name
        self._fetch = fetcher or fetch_page

    def __repr__(self) -> str:
        return f"ScrapeSource({self.name!r})"

    def run(
        self,
        query: str,
        location: str | None = None,
        experience: str | None = None,
    ) -> SearchResult:
        url = self.site.build_url(query, location, experience)
        log.debug("Scraping %s: %s", self.name, url)

        page = self._fetch(url)
        if not page.ok:
            return SearchResult(source=self.name, error=page.error or "fetch failed")

        return SearchResult(source=self.name, listings=extract_listings(page.html, self.site))
