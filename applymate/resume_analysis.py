"""Pull resume sections out of already-extracted plain text.

Regex and keyword heuristics only; turning PDFs or images into text happens
before this module is called.
"""
from __future__ import annotations

import re
from typing import Any

from applymate.log import get_logger

log = get_logger(__name__)

MIN_TEXT_LENGTH = 50

SAMPLE_PROFILE: dict[str, list[str]] = {
    "skills": ["JavaScript", "React", "Node.js", "Python", "AWS", "Docker"],
    "experience": [
        "Senior Software Engineer at Tech Company (2020-Present)",
        "Full Stack Developer at Web Agency (2018-2020)",
    ],
    "education": ["BS Computer Science, University of Technology (2014-2018)"],
    "certifications": ["AWS Certified Developer", "React Certification"],
    "interests": ["Web Development", "Cloud Computing", "Backend Development", "DevOps"],
}

TECH_SKILLS: list[str] = [
    "JavaScript", "TypeScript", "Python", "Java", "C#", "C++", "Ruby", "Go", "Rust", "PHP",
    "React", "Angular", "Vue", "Svelte", "Node.js", "Express", "Django", "Flask", "Spring",
    "SQL", "MongoDB", "PostgreSQL", "MySQL", "Oracle", "Firebase", "Redis", "Cassandra",
    "AWS", "Azure", "GCP", "Docker", "Kubernetes", "Terraform", "CI/CD", "Git", "GitHub",
    "REST API", "GraphQL", "Microservices", "Serverless", "Linux", "Bash", "PowerShell",
    "HTML", "CSS", "SASS", "Tailwind", "Bootstrap", "Material UI", "Redux",
    "TensorFlow", "PyTorch", "Machine Learning", "AI", "Data Science", "NLP", "Computer Vision",
    "Agile", "Scrum", "Kanban", "Jira", "Confluence", "Project Management",
]

INTEREST_CATEGORIES: list[tuple[str, list[str]]] = [
    ("Web Development", ["web", "react", "javascript", "html", "css", "frontend"]),
    ("Mobile Development", ["mobile", "android", "ios", "swift", "react native", "flutter"]),
    ("DevOps", ["devops", "docker", "kubernetes", "ci/cd", "jenkins", "aws", "cloud"]),
    ("Data Science", ["data", "analytics", "machine learning", "tensorflow", "python"]),
    ("Blockchain", ["blockchain", "crypto", "web3", "smart contract", "ethereum"]),
    ("Game Development", ["game", "unity", "unreal"]),
    ("UI/UX Design", ["design", "ux", "figma", "sketch", "user experience"]),
    ("Cybersecurity", ["security", "cyber", "encryption", "firewall", "penetration"]),
]

_EXPERIENCE_HEADERS = ["work experience", "experience", "employment", "work history"]
_EDUCATION_HEADERS = ["education", "academic background", "academic history", "qualifications"]
_CERT_HEADERS = ["certifications", "certificates", "credentials", "licenses"]
_CERT_KEYWORDS = ("certified", "certification", "certificate")

# Section boundaries: the next header of another kind, or end of text
_STOPS = {
    "experience": r"education|skills|certifications?",
    "education": r"experience|skills|certifications?",
    "certifications": r"experience|education|skills",
    "skills": r"experience|education|certifications?",
}

_ITEM_SPLIT_RE = re.compile(r"[\n\r•]+")


def _section(text: str, headers: list[str], kind: str) -> str:
    for header in headers:
        pattern = rf"(?im)^\s*{re.escape(header)}\s*:?\s*$([\s\S]*?)(?=^\s*(?:{_STOPS[kind]})\s*:?\s*$|\Z)"
        m = re.search(pattern, text)
        if m and m.group(1).strip():
            return m.group(1).strip()
    return ""


def _items(section: str, min_len: int) -> list[str]:
    parts = (p.strip(" \t-•*") for p in _ITEM_SPLIT_RE.split(section))
    return [p for p in parts if len(p) > min_len]


def _has_term(term: str, low: str) -> bool:
    return re.search(rf"(?<![a-z0-9]){re.escape(term.lower())}(?![a-z0-9+#])", low) is not None


def extract_skills(text: str) -> list[str]:
    low = text.lower()
    return [s for s in TECH_SKILLS if _has_term(s, low)][:10]


def extract_experience(text: str) -> list[str]:
    return _items(_section(text, _EXPERIENCE_HEADERS, "experience"), 10)[:5]


def extract_education(text: str) -> list[str]:
    return _items(_section(text, _EDUCATION_HEADERS, "education"), 5)[:3]


def _cert_lines(section: str) -> list[str]:
    return [line for line in _items(section, 5) if any(k in line.lower() for k in _CERT_KEYWORDS)]


def extract_certifications(text: str) -> list[str]:
    section = _section(text, _CERT_HEADERS, "certifications")
    if section:
        return _items(section, 5)[:4]
    # No dedicated section: look for certification mentions in skills, then anywhere
    found = _cert_lines(_section(text, ["skills"], "skills"))
    if not found:
        found = _cert_lines(text)
    return found[:3]


def guess_interests(text: str, skills: list[str]) -> list[str]:
    low = text.lower()
    skill_text = " ".join(s.lower() for s in skills)
    matched = [
        name
        for name, keywords in INTEREST_CATEGORIES
        if any(_has_term(k, low) or _has_term(k, skill_text) for k in keywords)
    ]
    return matched[:5]


def analyze_resume(text: str) -> dict[str, Any]:
    """Sections found in *text*; a sample profile when the text is too short."""
    text = text or ""
    if len(text.strip()) < MIN_TEXT_LENGTH:
        log.info("Resume text too short (%d chars) — returning sample profile", len(text.strip()))
        return {
            "data": {k: list(v) for k, v in SAMPLE_PROFILE.items()},
            "textLength": len(text),
            "note": "Resume text was too short to analyze; showing a sample profile",
        }

    skills = extract_skills(text)
    data = {
        "skills": skills,
        "experience": extract_experience(text),
        "education": extract_education(text),
        "certifications": extract_certifications(text),
        "interests": guess_interests(text, skills),
    }
    log.info(
        "Resume analysis — skills=%d, experience=%d, education=%d",
        len(data["skills"]), len(data["experience"]), len(data["education"]),
    )
    return {"data": data, "textLength": len(text)}
