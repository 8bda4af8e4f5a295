"""Generate ATS-friendly cover letters using Gemini (or fallback template)."""
from __future__ import annotations

from datetime import date
from typing import Any

from applymate import llm
from applymate.log import get_logger

log = get_logger(__name__)

_PROMPT = """\
Generate a professional ATS-friendly cover letter for a {title} position at {company}{location_clause}.

About the candidate:
- Name: {name}
- Email: {email}
- Phone: {phone}
- Skills: {skills}
- Experience: {experience}

The cover letter should:
1. Be properly formatted with date, greeting, and signature
2. Have a strong opening paragraph that mentions the specific job
3. Highlight relevant skills and experience that match the position
4. Close by expressing interest in an interview
5. Be concise (300-400 words) and use plain text, no Markdown

For the signature and contact lines use the placeholders [Your Name],
[Your Email] and [Your Phone] instead of real details.
"""


def normalize_skills(skills: Any, profile: dict | None = None) -> str:
    """Skills as one comma-separated string; accepts a list or free text."""
    if isinstance(skills, list):
        joined = ", ".join(str(s).strip() for s in skills if str(s).strip())
        if joined:
            return joined
    elif isinstance(skills, str) and skills.strip():
        return skills.strip()
    profile_skills = (profile or {}).get("skills")
    if isinstance(profile_skills, str) and profile_skills.strip():
        return profile_skills.strip()
    if isinstance(profile_skills, list) and profile_skills:
        return normalize_skills(profile_skills)
    return "Not provided"


def generate_cover_letter(
    job_title: str,
    company: str = "",
    location: str = "",
    skills: Any = None,
    profile: dict | None = None,
) -> tuple[str, str]:
    """Return ``(letter, generated_by)`` where generated_by is "llm" or "template"."""
    job_title = (job_title or "").strip()
    if not job_title:
        raise ValueError("job_title is required")
    company = (company or "").strip() or "the company"
    location = (location or "").strip()
    profile = profile or {}
    skills_text = normalize_skills(skills, profile)

    if not llm.is_configured():
        log.debug("No Gemini key — using template cover letter")
        return _fallback_letter(job_title, company, skills_text, profile), "template"

    prompt = _PROMPT.format(
        title=job_title,
        company=company,
        location_clause=f" in {location}" if location else "",
        name=profile.get("name") or "Not provided",
        email=profile.get("email") or "Not provided",
        phone=profile.get("phone") or "Not provided",
        skills=skills_text,
        experience=profile.get("experience") or "Not provided",
    )
    try:
        text = llm.generate(prompt, max_tokens=1200)
        if not text:
            raise ValueError("empty response")
        log.info("Cover letter generated for %s @ %s", job_title, company)
        return text, "llm"
    except Exception as exc:
        log.warning("Cover letter generation failed (%s), using template", exc)
        return _fallback_letter(job_title, company, skills_text, profile), "template"


def _fallback_letter(job_title: str, company: str, skills: str, profile: dict) -> str:
    experience = profile.get("experience") or ""
    experience_line = f"\n\n{experience}" if experience else ""
    skills_line = (
        f"My background includes {skills}, which I believe map closely to what this role needs."
        if skills != "Not provided"
        else "I bring a strong foundation and a habit of learning quickly on the job."
    )
    return f"""{date.today().strftime('%B %d, %Y')}

Dear Hiring Manager,

I am writing to apply for the {job_title} position at {company}.{experience_line}

{skills_line} I am particularly interested in contributing to your team's success.

I would welcome the opportunity to discuss how my background can contribute to {company}.

Sincerely,
[Your Name]
[Your Email]
[Your Phone]"""
