"""HTTP API for ApplyMate (Flask)."""
from __future__ import annotations

from typing import Any, Callable

from flask import Flask, jsonify, request

from applymate import llm
from applymate.cover_letter import generate_cover_letter
from applymate.log import get_logger
from applymate.pipeline import search_jobs
from applymate.resume_analysis import analyze_resume
from applymate.skills import default_recommendations, recommend_skills
from applymate.sources import JobSearchBase, get_sources

log = get_logger(__name__)


def _json_body() -> dict[str, Any]:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def _str_field(body: dict[str, Any], key: str) -> str:
    value = body.get(key)
    return value.strip() if isinstance(value, str) else ""


def _list_field(body: dict[str, Any], key: str) -> list[str]:
    value = body.get(key)
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, list):
        return [str(v) for v in value if isinstance(v, (str, int, float)) and str(v).strip()]
    return []


def create_app(
    sources_factory: Callable[[], list[JobSearchBase]] | None = None,
    search_options: dict[str, Any] | None = None,
) -> Flask:
    """Build the app.

    *sources_factory* supplies the job boards per request (defaults to the
    configured boards); *search_options* is passed through to ``search_jobs``.
    """
    app = Flask(__name__)
    app.json.sort_keys = False
    get_request_sources = sources_factory or get_sources
    options = dict(search_options or {})

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({
            "status": "ok",
            "llm": llm.is_configured(),
            "sources": [s.name for s in get_request_sources()],
        })

    @app.route("/jobs-search", methods=["POST"])
    def jobs_search():
        body = _json_body()
        query = _str_field(body, "query")
        if not query:
            return jsonify({"error": "Job query is required"}), 400

        try:
            jobs = search_jobs(
                query,
                _str_field(body, "location") or None,
                _str_field(body, "experience") or None,
                sources=get_request_sources(),
                **options,
            )
        except Exception:
            log.exception("Job search failed for %r", query)
            return jsonify({"error": "Failed to search job listings"}), 500

        return jsonify({"jobs": [j.to_dict() for j in jobs]})

    @app.route("/cover-letter", methods=["POST"])
    def cover_letter():
        body = _json_body()
        job_title = _str_field(body, "jobTitle")
        if not job_title:
            return jsonify({"error": "Job title is required and must be a non-empty string"}), 400

        profile = body.get("userProfile")
        try:
            text, generated_by = generate_cover_letter(
                job_title,
                company=_str_field(body, "company"),
                location=_str_field(body, "location"),
                skills=body.get("skills"),
                profile=profile if isinstance(profile, dict) else {},
            )
        except Exception:
            log.exception("Cover letter failed for %r", job_title)
            return jsonify({"error": "Failed to generate cover letter"}), 500

        return jsonify({"coverLetter": text, "generatedBy": generated_by})

    @app.route("/skill-recommendations", methods=["POST"])
    def skill_recommendations():
        body = _json_body()
        try:
            recommended, analysis = recommend_skills(
                skills=_list_field(body, "skills"),
                interests=_list_field(body, "interests"),
                experience=_list_field(body, "experience"),
                raw_text=_str_field(body, "rawText"),
            )
        except Exception:
            log.exception("Skill recommendation failed; serving defaults")
            return jsonify({
                "success": True,
                "recommendations": default_recommendations(),
                "note": "Using default recommendations due to processing error",
            })

        return jsonify({
            "success": True,
            "recommendations": [s.to_dict() for s in recommended],
            "analysis": {
                "detectedSkills": analysis["detected_skills"],
                "jobTitles": analysis["job_titles"],
                "domains": analysis["domains"],
            },
        })

    @app.route("/resume-analysis", methods=["POST"])
    def resume_analysis():
        body = _json_body()
        if not isinstance(body.get("text"), str):
            return jsonify({"error": "Resume text is required"}), 400
        result = analyze_resume(body["text"])
        return jsonify({"success": True, **result})

    return app
