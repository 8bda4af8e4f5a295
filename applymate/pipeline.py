"""
Job search pipeline.

Runs: fan out to every board in parallel → concatenate → enrich/score
(or fall back to the curated catalog) → ranked listings.
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from applymate.enrich import Generator, enrich
from applymate.fallback import FallbackCatalog
from applymate.log import get_logger
from applymate.models import Listing
from applymate.sources import JobSearchBase, get_sources

log = get_logger(__name__)


def _search_source(
    source: JobSearchBase,
    query: str,
    location: str | None,
    experience: str | None,
) -> list[Listing]:
    """Wrapper for parallel source searching."""
    try:
        return source.search(query, location, experience)
    except Exception as exc:
        # search() already swallows errors; this guards third-party adapters
        log.error("[%s] FAILED: %s", getattr(source, "name", source.__class__.__name__), exc)
        return []


def aggregate(
    query: str,
    location: str | None = None,
    experience: str | None = None,
    sources: list[JobSearchBase] | None = None,
) -> list[Listing]:
    """Search every source at once and concatenate in registration order.

    Results are joined in the order of *sources*, not in the order the
    responses arrive.
    """
    if sources is None:
        sources = get_sources()
    if not sources:
        return []

    log.info("Searching %d source(s) in parallel for %r", len(sources), query)
    with ThreadPoolExecutor(max_workers=len(sources)) as pool:
        futures = [
            pool.submit(_search_source, src, query, location, experience)
            for src in sources
        ]
        per_source = [f.result() for f in futures]

    all_jobs = [job for batch in per_source for job in batch]
    log.info(
        "Aggregated %d listing(s): %s",
        len(all_jobs),
        ", ".join(f"{s.name}={len(b)}" for s, b in zip(sources, per_source)),
    )
    return all_jobs


def search_jobs(
    query: str,
    location: str | None = None,
    experience: str | None = None,
    *,
    sources: list[JobSearchBase] | None = None,
    enrichment_available: bool | None = None,
    generate: Generator | None = None,
    catalog: FallbackCatalog | None = None,
) -> list[Listing]:
    query = (query or "").strip()
    if not query:
        raise ValueError("query must be a non-empty string")
    location = (location or "").strip() or None
    experience = (experience or "").strip() or None

    listings = aggregate(query, location, experience, sources=sources)
    return enrich(
        listings,
        query,
        experience,
        enrichment_available,
        generate=generate,
        catalog=catalog,
    )
