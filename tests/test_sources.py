from __future__ import annotations

from applymate.fetcher import FetchResult
from applymate.sources import ScrapeSource, load_site_configs
from applymate.sources.base import filter_by_location

LINKEDIN_PAGE = """
<ul>
  <li><div class="base-card relative job-search-card">
    <a class="base-card__full-link" href="https://www.linkedin.com/jobs/view/1"></a>
    <h3 class="base-search-card__title">Software Engineer</h3>
    <h4 class="base-search-card__subtitle">Flipkart</h4>
    <span class="job-search-card__location">Bengaluru, Karnataka</span>
  </div></li>
  <li><div class="base-card relative job-search-card">
    <a class="base-card__full-link" href="https://www.linkedin.com/jobs/view/2"></a>
    <h3 class="base-search-card__title">Software Engineer II</h3>
    <h4 class="base-search-card__subtitle">Swiggy</h4>
    <span class="job-search-card__location">Pune, Maharashtra</span>
  </div></li>
  <li><div class="base-card relative job-search-card">
    <h4 class="base-search-card__subtitle">No Title Inc</h4>
  </div></li>
</ul>
"""


def _linkedin():
    return next(s for s in load_site_configs() if s.name == "LinkedIn")


class RecordingFetcher:
    def __init__(self, result: FetchResult | None = None, exc: Exception | None = None):
        self.result = result
        self.exc = exc
        self.urls: list[str] = []

    def __call__(self, url: str) -> FetchResult:
        self.urls.append(url)
        if self.exc is not None:
            raise self.exc
        return self.result


def test_scrape_source_builds_url_and_extracts():
    fetcher = RecordingFetcher(FetchResult(url="", ok=True, html=LINKEDIN_PAGE, status=200))
    source = ScrapeSource(_linkedin(), fetcher=fetcher)

    jobs = source.search("Software Engineer", experience="1-3 years")

    assert fetcher.urls == ["https://www.linkedin.com/jobs/search/?keywords=software%20engineer&f_E=2"]
    assert [j.company for j in jobs] == ["Flipkart", "Swiggy"]
    assert all(j.salary == "Check on LinkedIn" for j in jobs)
    assert all(j.source == "LinkedIn" for j in jobs)


def test_location_post_filter_is_case_insensitive():
    fetcher = RecordingFetcher(FetchResult(url="", ok=True, html=LINKEDIN_PAGE, status=200))
    jobs = ScrapeSource(_linkedin(), fetcher=fetcher).search("Software Engineer", location="PUNE")
    assert [j.company for j in jobs] == ["Swiggy"]


def test_fetch_failure_collapses_to_empty_list():
    fetcher = RecordingFetcher(FetchResult(url="", ok=False, status=429, error="HTTP 429"))
    source = ScrapeSource(_linkedin(), fetcher=fetcher)

    result = source.run("Software Engineer")
    assert not result.ok
    assert result.error == "HTTP 429"
    assert source.search("Software Engineer") == []


def test_unexpected_exception_never_escapes_search():
    source = ScrapeSource(_linkedin(), fetcher=RecordingFetcher(exc=RuntimeError("boom")))
    assert source.search("Software Engineer") == []


def test_filter_by_location_without_location_keeps_all(listing):
    jobs = [listing("A", location="Pune"), listing("B", location="")]
    assert filter_by_location(jobs, None) == jobs
    assert filter_by_location(jobs, "   ") == jobs
    assert filter_by_location(jobs, "pun") == jobs[:1]
