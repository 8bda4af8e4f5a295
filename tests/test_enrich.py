from __future__ import annotations

import json
import re

import pytest

from applymate import enrich as enrich_mod
from applymate.enrich import (
    apply_defaults,
    build_prompt,
    enrich,
    parse_enrichment,
    rank,
    title_keywords,
)
from applymate.fallback import FallbackCatalog


def _batch_from_prompt(prompt: str) -> list[dict]:
    m = re.search(r"Listings \(JSON\):\n(\[[\s\S]*?\n\])\n", prompt)
    assert m, "prompt does not embed the listings"
    return json.loads(m.group(1))


def scoring_model(scores: dict[str, int], broken_titles: set[str] = frozenset()):
    """Fake model: scores by title, answers garbage for batches holding a broken title."""

    def generate(prompt: str) -> str:
        items = _batch_from_prompt(prompt)
        if any(i["title"] in broken_titles for i in items):
            return "Sure! Here are your listings: [{oops"
        answer = [
            {
                "index": i["index"],
                "match_score": scores.get(i["title"], 50),
                "recommendations": f"Apply to {i['title']}.",
                "difficulty": "Hard" if scores.get(i["title"], 50) > 80 else "Easy",
                "keywords": i["title"].lower().split(),
            }
            for i in items
        ]
        return "```json\n" + json.dumps(answer) + "\n```"

    return generate


def test_unavailable_service_applies_documented_defaults(listing):
    jobs = [listing("Python Developer"), listing("Data Engineer")]
    out = enrich(jobs, "python", enrichment_available=False)

    assert [j.title for j in out] == ["Python Developer", "Data Engineer"]
    assert all(j.match_score == 75 and j.difficulty == "Medium" for j in out)
    assert all(j.recommendations for j in out)
    assert out[0].keywords == ("python", "developer")
    # originals untouched
    assert jobs[0].match_score is None


def test_unconfigured_key_means_no_call(listing, monkeypatch):
    def explode(_prompt):
        raise AssertionError("model must not be called")

    out = enrich([listing("QA")], "qa", generate=explode)
    assert out[0].match_score == 75


def test_configured_key_turns_enrichment_on(listing, monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    out = enrich([listing("QA")], "qa", generate=scoring_model({"QA": 90}))
    assert out[0].match_score == 90
    assert out[0].difficulty == "Hard"


def test_empty_listings_use_the_fallback_catalog():
    catalog = FallbackCatalog(entries=[{"title": "{query} Lead", "difficulty": "Hard", "match_score": 70}])
    out = enrich([], "SRE", catalog=catalog, enrichment_available=True)
    assert [j.title for j in out] == ["SRE Lead"]
    assert out[0].match_score == 70


def test_batch_is_resorted_best_first(listing):
    jobs = [listing("Low"), listing("High"), listing("Mid")]
    out = enrich(jobs, "q", enrichment_available=True, generate=scoring_model({"Low": 10, "High": 95, "Mid": 60}))
    assert [(j.title, j.match_score) for j in out] == [("High", 95), ("Mid", 60), ("Low", 10)]
    assert out[0].recommendations == "Apply to High."
    assert out[0].keywords == ("high",)
    assert out[0].link == jobs[1].link


def test_malformed_batch_is_isolated_from_valid_sibling(listing):
    first = [listing(f"Good {i}") for i in range(5)]
    second = [listing("Broken 0", salary="5 LPA"), listing("Broken 1")]
    model = scoring_model({f"Good {i}": 60 + i for i in range(5)}, broken_titles={"Broken 0"})

    out = enrich(first + second, "q", enrichment_available=True, generate=model)

    assert len(out) == 7
    good = [j for j in out if j.title.startswith("Good")]
    broken = [j for j in out if j.title.startswith("Broken")]
    assert all(j.match_score is not None for j in good)
    assert broken == second  # exactly as scraped


def test_model_errors_keep_the_batch(listing):
    def down(_prompt):
        raise TimeoutError("deadline exceeded")

    jobs = [listing("A"), listing("B")]
    assert enrich(jobs, "q", enrichment_available=True, generate=down) == jobs


def test_global_rank_versus_per_batch_order(listing):
    jobs = [listing(f"J{i}") for i in range(7)]
    scores = {"J0": 40, "J1": 30, "J2": 20, "J3": 10, "J4": 5, "J5": 99, "J6": 1}
    model = scoring_model(scores)

    ranked = enrich(jobs, "q", enrichment_available=True, generate=model)
    assert [j.title for j in ranked] == ["J5", "J0", "J1", "J2", "J3", "J4", "J6"]

    per_batch = enrich(jobs, "q", enrichment_available=True, generate=model, rank_globally=False)
    assert [j.title for j in per_batch] == ["J0", "J1", "J2", "J3", "J4", "J5", "J6"]


def test_rank_puts_unscored_last_and_is_stable(listing):
    a, b, c = listing("a", match_score=50), listing("b"), listing("c", match_score=50)
    assert rank([b, a, c]) == [a, c, b]


@pytest.mark.parametrize(
    "payload",
    [
        '{"index": 0}',
        "[]",
        '[{"index": 0, "match_score": 80, "recommendations": "x", "difficulty": "Medium"}]',
        '[{"index": 0, "match_score": 80, "recommendations": "x", "difficulty": "Medium"},'
        ' {"index": 0, "match_score": 70, "recommendations": "y", "difficulty": "Easy"}]',
        '[{"index": 0, "match_score": "high", "recommendations": "x", "difficulty": "Medium"},'
        ' {"index": 1, "match_score": 70, "recommendations": "y", "difficulty": "Easy"}]',
        '[{"index": 0, "match_score": 80, "recommendations": "x", "difficulty": "Trivial"},'
        ' {"index": 1, "match_score": 70, "recommendations": "y", "difficulty": "Easy"}]',
        '[{"index": 0, "match_score": 80, "recommendations": "", "difficulty": "Hard"},'
        ' {"index": 1, "match_score": 70, "recommendations": "y", "difficulty": "Easy"}]',
        '[{"index": 0, "match_score": 80, "recommendations": "x", "difficulty": "Hard", "keywords": "a,b"},'
        ' {"index": 1, "match_score": 70, "recommendations": "y", "difficulty": "Easy"}]',
        "not json at all",
    ],
)
def test_untrusted_output_is_rejected_whole(listing, payload):
    assert parse_enrichment(payload, [listing("A"), listing("B")]) is None


def test_lenient_but_valid_values_are_normalized(listing):
    text = (
        "Here you go:\n```\n"
        '[{"index": 1, "match_score": 130, "recommendations": " Go for it ", "difficulty": "hard"},'
        ' {"index": 0, "matchScore": "42", "recommendations": "Maybe", "difficulty": "EASY", "keywords": null}]'
        "\n```"
    )
    out = parse_enrichment(text, [listing("A"), listing("B")])
    assert [(j.title, j.match_score, j.difficulty) for j in out] == [("B", 100, "Hard"), ("A", 42, "Easy")]
    assert out[0].recommendations == "Go for it"
    assert out[1].keywords == ()


def test_prompt_carries_query_experience_and_indices(listing):
    prompt = build_prompt([listing("A"), listing("B")], "Data Analyst", "fresher")
    assert '"Data Analyst" with fresher experience' in prompt
    assert [i["index"] for i in _batch_from_prompt(prompt)] == [0, 1]


def test_title_keywords_and_defaults(listing):
    assert title_keywords("Senior Python Developer - Work From Home") == ("senior", "python", "developer")
    enriched = apply_defaults(listing("C++ Engineer"))
    assert enriched.keywords == ("c++", "engineer")
    assert enriched.match_score == enrich_mod.DEFAULT_MATCH_SCORE


def test_zero_score_still_ranks_ahead_of_unscored(listing):
    unscored, zero = listing("unscored"), listing("zero", match_score=0)
    assert not unscored.is_enriched and zero.is_enriched
    assert rank([unscored, zero]) == [zero, unscored]
