"""Data models for job listings and skill recommendations."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DIFFICULTIES: tuple[str, ...] = ("Easy", "Medium", "Hard")


@dataclass(frozen=True)
class Listing:
    """One job posting found on one source.

    Enrichment never mutates a listing; it builds a new one with
    ``dataclasses.replace``.
    """

    title: str
    company: str = ""
    location: str = ""
    salary: str = ""
    link: str = ""
    source: str = "unknown"
    match_score: int | None = None
    recommendations: str | None = None
    difficulty: str | None = None
    keywords: tuple[str, ...] | None = None

    @property
    def is_enriched(self) -> bool:
        return self.match_score is not None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "title": self.title,
            "company": self.company,
            "location": self.location,
            "salary": self.salary,
            "link": self.link,
            "source": self.source,
        }
        if self.match_score is not None:
            data["matchScore"] = self.match_score
        if self.recommendations is not None:
            data["recommendations"] = self.recommendations
        if self.difficulty is not None:
            data["difficulty"] = self.difficulty
        if self.keywords is not None:
            data["keywords"] = list(self.keywords)
        return data


@dataclass
class Skill:
    id: str
    name: str
    category: str
    description: str = ""
    demand: int = 5
    difficulty: int = 5
    time_to_learn: str = ""
    keywords: list[str] = field(default_factory=list)
    resources: list[dict] = field(default_factory=list)


@dataclass
class ScoredSkill:
    skill: Skill
    score: float

    def to_dict(self) -> dict[str, Any]:
        s = self.skill
        return {
            "id": s.id,
            "name": s.name,
            "category": s.category,
            "description": s.description,
            "demand": s.demand,
            "difficulty": s.difficulty,
            "timeToLearn": s.time_to_learn,
            "keywords": list(s.keywords),
            "resources": list(s.resources),
            "matchScore": round(self.score, 2),
        }
