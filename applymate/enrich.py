"""Score and annotate listings with the generative model.

Listings go out in batches of ``BATCH_SIZE``. Each batch is enriched on its
own: a failed call or an answer that does not validate leaves that batch
exactly as scraped and has no effect on its siblings.
"""
from __future__ import annotations

import json
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import Any, Callable, Iterator

from applymate import llm
from applymate.fallback import FallbackCatalog
from applymate.log import get_logger
from applymate.models import DIFFICULTIES, Listing

log = get_logger(__name__)

BATCH_SIZE = 5
MAX_WORKERS = 8

DEFAULT_MATCH_SCORE = 75
DEFAULT_DIFFICULTY = "Medium"
DEFAULT_RECOMMENDATION = (
    "Read the full posting on the source site and tailor your resume to the "
    "skills it asks for."
)

_STOP_WORDS = {
    "and", "the", "for", "with", "our", "you", "job", "jobs", "role",
    "work", "from", "home", "new", "all", "per",
}
_WORD_RE = re.compile(r"[a-z][a-z0-9+#.]{2,}")

Generator = Callable[[str], str]

_ENRICH_PROMPT = """\
You are a career advisor reviewing job listings scraped for the search "{query}"{experience_clause}.

Listings (JSON):
{listings_json}

For EACH listing:
1. Identify the important keywords in its title.
2. Give a "match_score" from 0 to 100 for how well it fits "{query}".
3. Write "recommendations": 1-2 sentences of advice for applying.
4. Rate "difficulty" as exactly one of "Easy", "Medium", "Hard".

Return ONLY a JSON array with one object per listing, sorted from best match
to worst match. Each object must look like:
{{"index": <index from the input>, "match_score": <integer>, "recommendations": "<text>", "difficulty": "<Easy|Medium|Hard>", "keywords": ["<keyword>", ...]}}
Do not include Markdown, code fences or any explanation.
"""


class InvalidEnrichment(ValueError):
    """Model output that cannot be trusted for a batch."""


def chunked(items: list[Listing], size: int) -> Iterator[list[Listing]]:
    for start in range(0, len(items), size):
        yield items[start:start + size]


def title_keywords(title: str, limit: int = 6) -> tuple[str, ...]:
    words = [w.rstrip(".") for w in _WORD_RE.findall((title or "").lower())]
    kept = [w for w in words if w not in _STOP_WORDS and len(w) >= 3]
    return tuple(dict.fromkeys(kept))[:limit]


def apply_defaults(listing: Listing) -> Listing:
    return replace(
        listing,
        match_score=DEFAULT_MATCH_SCORE,
        difficulty=DEFAULT_DIFFICULTY,
        recommendations=DEFAULT_RECOMMENDATION,
        keywords=title_keywords(listing.title),
    )


def build_prompt(batch: list[Listing], query: str, experience: str | None = None) -> str:
    payload = [
        {
            "index": i,
            "title": j.title,
            "company": j.company,
            "location": j.location,
            "salary": j.salary,
            "source": j.source,
        }
        for i, j in enumerate(batch)
    ]
    return _ENRICH_PROMPT.format(
        query=query,
        experience_clause=f" with {experience} experience" if experience else "",
        listings_json=json.dumps(payload, ensure_ascii=False, indent=2),
    )


def _coerce_score(value: Any) -> int:
    if isinstance(value, bool):
        raise InvalidEnrichment(f"match_score is a boolean: {value!r}")
    if isinstance(value, int):
        score = value
    elif isinstance(value, float) and value.is_integer():
        score = int(value)
    elif isinstance(value, str) and value.strip().isdigit():
        score = int(value.strip())
    else:
        raise InvalidEnrichment(f"match_score is not an integer: {value!r}")
    return max(0, min(100, score))


def _coerce_difficulty(value: Any) -> str:
    if isinstance(value, str):
        for level in DIFFICULTIES:
            if value.strip().lower() == level.lower():
                return level
    raise InvalidEnrichment(f"unknown difficulty: {value!r}")


def _coerce_keywords(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(k, str) for k in value):
        raise InvalidEnrichment("keywords must be a list of strings")
    return tuple(k.strip() for k in value if k.strip())


def _validate(data: Any, batch: list[Listing]) -> list[Listing]:
    if not isinstance(data, list):
        raise InvalidEnrichment(f"expected a JSON array, got {type(data).__name__}")
    if len(data) != len(batch):
        raise InvalidEnrichment(f"expected {len(batch)} items, got {len(data)}")

    enriched: list[Listing] = []
    seen: set[int] = set()
    for item in data:
        if not isinstance(item, dict):
            raise InvalidEnrichment("array item is not an object")
        idx = item.get("index")
        if isinstance(idx, bool) or not isinstance(idx, int) or not 0 <= idx < len(batch):
            raise InvalidEnrichment(f"bad index: {idx!r}")
        if idx in seen:
            raise InvalidEnrichment(f"duplicate index: {idx}")
        seen.add(idx)

        recs = item.get("recommendations")
        if not isinstance(recs, str) or not recs.strip():
            raise InvalidEnrichment(f"missing recommendations for index {idx}")

        enriched.append(
            replace(
                batch[idx],
                match_score=_coerce_score(item.get("match_score", item.get("matchScore"))),
                recommendations=recs.strip(),
                difficulty=_coerce_difficulty(item.get("difficulty")),
                keywords=_coerce_keywords(item.get("keywords")),
            )
        )

    enriched.sort(key=lambda j: -(j.match_score or 0))
    return enriched


def parse_enrichment(text: str, batch: list[Listing]) -> list[Listing] | None:
    """Enriched copy of *batch* from model text, or None if anything is off."""
    cleaned = llm.strip_code_fences(text)
    try:
        return _validate(json.loads(cleaned), batch)
    except ValueError as exc:
        # json.JSONDecodeError and InvalidEnrichment are both ValueErrors
        log.warning("Discarding enrichment for %d listing(s): %s | %.120r", len(batch), exc, cleaned)
        return None


def _enrich_batch(
    batch: list[Listing],
    query: str,
    experience: str | None,
    generate: Generator,
) -> list[Listing]:
    try:
        text = generate(build_prompt(batch, query, experience))
    except Exception as exc:
        log.warning("Enrichment call failed for %d listing(s): %s", len(batch), exc)
        return batch
    return parse_enrichment(text, batch) or batch


def rank(listings: list[Listing]) -> list[Listing]:
    """Stable best-first order; unscored listings go last."""
    return sorted(listings, key=lambda j: (not j.is_enriched, -(j.match_score or 0)))


def enrich(
    listings: list[Listing],
    query: str,
    experience: str | None = None,
    enrichment_available: bool | None = None,
    *,
    generate: Generator | None = None,
    catalog: FallbackCatalog | None = None,
    batch_size: int = BATCH_SIZE,
    rank_globally: bool = True,
) -> list[Listing]:
    """Return scored listings, or the fallback catalog when there are none.

    *enrichment_available* defaults to whether a Gemini key is configured.
    With ``rank_globally=False`` only each batch is sorted.
    """
    if not listings:
        return (catalog or FallbackCatalog()).listings(query, experience)

    if enrichment_available is None:
        enrichment_available = llm.is_configured()
    if not enrichment_available:
        log.info("Enrichment unavailable, applying default scores to %d listing(s)", len(listings))
        return [apply_defaults(j) for j in listings]

    gen = generate or llm.generate
    batches = list(chunked(listings, batch_size))
    log.info("Enriching %d listing(s) in %d batch(es)", len(listings), len(batches))

    with ThreadPoolExecutor(max_workers=min(len(batches), MAX_WORKERS)) as pool:
        futures = [pool.submit(_enrich_batch, b, query, experience, gen) for b in batches]
        results = [f.result() for f in futures]

    flat = [j for batch in results for j in batch]
    return rank(flat) if rank_globally else flat
