"""Curated listings returned when live aggregation finds nothing."""
from __future__ import annotations

from pathlib import Path
from typing import Any

from applymate.config import FALLBACK_JOBS_PATH, load_yaml
from applymate.experience import is_entry_level, is_senior_level
from applymate.log import get_logger
from applymate.models import Listing

log = get_logger(__name__)


class FallbackCatalog:
    """Static listing table with ``{query}`` placeholders in each title.

    Pass *entries* to swap the table without touching the YAML file.
    """

    def __init__(self, entries: list[dict[str, Any]] | None = None, path: Path | None = None) -> None:
        if entries is None:
            data = load_yaml(path or FALLBACK_JOBS_PATH) or {}
            entries = data.get("jobs", [])
        self.entries = list(entries)

    def _render(self, entry: dict[str, Any], query: str) -> Listing:
        keywords = entry.get("keywords")
        return Listing(
            title=str(entry.get("title", "")).replace("{query}", query),
            company=entry.get("company", ""),
            location=entry.get("location", ""),
            salary=entry.get("salary", ""),
            link=entry.get("link", ""),
            source=entry.get("source", "unknown"),
            match_score=entry.get("match_score"),
            recommendations=entry.get("recommendations"),
            difficulty=entry.get("difficulty"),
            keywords=tuple(keywords) if keywords is not None else None,
        )

    def listings(self, query: str, experience: str | None = None) -> list[Listing]:
        jobs = [self._render(e, query) for e in self.entries]

        if is_entry_level(experience):
            jobs = [
                j for j in jobs
                if "intern" in j.title.lower() or "junior" in j.title.lower() or j.difficulty == "Easy"
            ]
        elif is_senior_level(experience):
            jobs = [j for j in jobs if "senior" in j.title.lower() or j.difficulty == "Hard"]

        log.info("Using %d fallback listing(s) for %r", len(jobs), query)
        return jobs


def fallback(query: str, experience: str | None = None) -> list[Listing]:
    return FallbackCatalog().listings(query, experience)
