"""Recommend skills to learn next from a candidate's skills, interests and resume text."""
from __future__ import annotations

import re
from pathlib import Path

from applymate.config import SKILLS_PATH, load_yaml
from applymate.log import get_logger
from applymate.models import ScoredSkill, Skill

log = get_logger(__name__)

TOP_N = 6


def _normalize(s: str) -> str:
    return (s or "").lower().strip()


TECH_TERMS: list[str] = [
    "javascript", "react", "angular", "vue", "node", "python", "java", "c#", "ruby",
    "php", "go", "rust", "swift", "kotlin", "typescript", "html", "css", "sass",
    "tailwind", "bootstrap", "redux", "graphql", "rest", "docker", "kubernetes",
    "aws", "azure", "gcp", "firebase", "mongodb", "sql", "postgresql", "mysql",
    "oracle", "data science", "machine learning", "ai", "artificial intelligence",
    "nlp", "computer vision", "devops", "ci/cd", "git", "agile", "scrum", "kanban",
    "frontend", "backend", "fullstack", "mobile", "android", "ios", "react native",
    "flutter", "blockchain", "security", "cloud", "networking", "linux", "unix",
    "bash", "powershell",
]

# Matched with word boundaries so "ui" does not fire on "build".
JOB_TITLE_PATTERNS: list[str] = [
    r"software engineer", r"developer", r"programmer", r"architect",
    r"data scientist", r"data analyst", r"product manager", r"project manager",
    r"designer", r"ux", r"ui", r"devops", r"sre", r"reliability", r"qa",
    r"quality assurance", r"tester", r"full[\s-]*stack", r"front[\s-]*end",
    r"back[\s-]*end", r"mobile", r"web", r"cloud", r"security", r"network",
    r"system", r"admin", r"lead", r"senior", r"junior", r"principal", r"staff",
    r"director",
]

DOMAIN_PATTERNS: list[str] = [
    r"financ(?:e|ial)", r"health(?:care)?", r"medical", r"education", r"retail",
    r"e[\s-]*commerce", r"insurance", r"bank(?:ing)?", r"manufacturing",
    r"automotive", r"telecom", r"media", r"entertainment", r"gaming", r"travel",
    r"hospitality", r"real estate", r"energy", r"utilities", r"government",
    r"public sector", r"defense", r"consulting", r"marketing", r"advertising",
    r"non[\s-]*profit", r"sports", r"technology", r"startup", r"aerospace",
    r"aviation",
]

# Domain fragment → skills that pay off in it
DOMAIN_BOOSTS: list[tuple[tuple[str, ...], list[str]]] = [
    (("financ", "bank"), ["python", "sql", "data analysis"]),
    (("health", "medical"), ["python", "data science", "machine learning"]),
    (("ecommerce", "retail"), ["react", "node.js", "javascript"]),
]


def _term_in(term: str, text: str) -> bool:
    return re.search(rf"(?<![a-z0-9]){re.escape(term)}(?![a-z0-9])", text) is not None


def _first_matches(patterns: list[str], text: str) -> list[str]:
    found: list[str] = []
    for pattern in patterns:
        m = re.search(rf"\b{pattern}\b", text)
        if m:
            found.append(m.group(0).strip())
    return list(dict.fromkeys(found))


def analyze_resume_text(raw_text: str = "") -> dict[str, list[str]]:
    """Skills, job titles and industry domains mentioned in free text."""
    low = _normalize(raw_text)
    if not low:
        return {"detected_skills": [], "job_titles": [], "domains": []}
    return {
        "detected_skills": [t for t in TECH_TERMS if _term_in(t, low)],
        "job_titles": _first_matches(JOB_TITLE_PATTERNS, low),
        "domains": _first_matches(DOMAIN_PATTERNS, low),
    }


def load_skill_catalog(path: Path | None = None) -> list[Skill]:
    data = load_yaml(path or SKILLS_PATH) or {}
    return [Skill(**entry) for entry in data.get("skills", [])]


# Served when even the catalog file cannot be read
BUILTIN_DEFAULTS: list[dict[str, str]] = [
    {"id": "react", "name": "React", "category": "Frontend Development",
     "description": "A JavaScript library for building user interfaces."},
    {"id": "node-js", "name": "Node.js", "category": "Backend Development",
     "description": "A JavaScript runtime for building server-side applications."},
    {"id": "python", "name": "Python", "category": "Programming Language",
     "description": "A general-purpose language used for web, data and automation work."},
]


def default_recommendations(limit: int = 3) -> list[dict[str, str]]:
    """First *limit* catalog skills in short form; built-in entries if the catalog is unreadable."""
    try:
        catalog = load_skill_catalog()
    except Exception as exc:
        log.error("Skill catalog unavailable (%s), using built-in defaults", exc)
        return [dict(d) for d in BUILTIN_DEFAULTS[:limit]]
    return [
        {"id": s.id, "name": s.name, "category": s.category, "description": s.description}
        for s in catalog[:limit]
    ]


def _mentions(a: str, b: str) -> bool:
    return bool(a and b) and (a in b or b in a)


def score_skill(
    skill: Skill,
    held: list[str],
    interests: list[str],
    experience: list[str],
    analysis: dict[str, list[str]],
) -> float:
    name = _normalize(skill.name)
    category = _normalize(skill.category)
    keywords = [_normalize(k) for k in skill.keywords]
    score = 0.0

    # Already known skills sink
    has_skill = any(_mentions(_normalize(h), name) for h in held)
    if has_skill:
        score -= 5

    for raw in interests:
        interest = _normalize(raw)
        if any(_mentions(k, interest) for k in keywords):
            score += 3
        if interest and (interest in name or interest in category):
            score += 5

    for raw in experience:
        line = _normalize(raw)
        if any(k in line for k in keywords if k):
            score += 2

    for title in analysis.get("job_titles", []):
        if any(_mentions(title, k) for k in keywords):
            score += 3

    for domain in analysis.get("domains", []):
        compact = re.sub(r"[\s-]", "", domain)
        for fragments, boosted in DOMAIN_BOOSTS:
            if any(f in compact for f in fragments):
                if any(b in name or b in keywords for b in boosted):
                    score += 4
                break

    detected = analysis.get("detected_skills", [])
    if not has_skill and any(_mentions(d, k) for d in detected for k in keywords):
        score += 5

    score += skill.demand * 0.5
    return score


def recommend_skills(
    skills: list[str] | None = None,
    interests: list[str] | None = None,
    experience: list[str] | None = None,
    raw_text: str = "",
    catalog: list[Skill] | None = None,
    limit: int = TOP_N,
) -> tuple[list[ScoredSkill], dict[str, list[str]]]:
    """Top *limit* catalog skills by score, plus the resume-text analysis."""
    catalog = catalog if catalog is not None else load_skill_catalog()
    analysis = analyze_resume_text(raw_text)
    held = list(dict.fromkeys(list(skills or []) + analysis["detected_skills"]))

    scored = [
        ScoredSkill(skill=s, score=score_skill(s, held, list(interests or []), list(experience or []), analysis))
        for s in catalog
    ]
    result = sorted(scored, key=lambda s: -s.score)[:limit]
    log.info("Scored %d skills → top %d: %s", len(catalog), len(result), ", ".join(s.skill.name for s in result))
    return result, analysis
