"""Environment and static-data configuration."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from applymate.log import get_logger

log = get_logger(__name__)

load_dotenv()

ROOT_DIR: Path = Path(__file__).resolve().parent.parent
CONFIG_DIR: Path = ROOT_DIR / "config"
SOURCES_PATH: Path = CONFIG_DIR / "sources.yaml"
FALLBACK_JOBS_PATH: Path = CONFIG_DIR / "fallback_jobs.yaml"
SKILLS_PATH: Path = CONFIG_DIR / "skills.yaml"

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"

# Desktop Chrome; several boards answer bare clients with 403.
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def get_float_env(key: str, default: float) -> float:
    raw = get_env(key)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        log.warning("Ignoring non-numeric %s=%r, using %s", key, raw, default)
        return default


def get_gemini_api_key() -> str:
    """Gemini key, accepting either of the two names the app has used."""
    return get_env("GOOGLE_GEMINI_API_KEY") or get_env("GEMINI_API_KEY")


def get_gemini_model() -> str:
    return get_env("GEMINI_MODEL", "gemini-2.0-flash")


def get_gemini_base_url() -> str:
    return get_env("GEMINI_BASE_URL", GEMINI_OPENAI_BASE_URL)


def http_timeout() -> float:
    return get_float_env("HTTP_TIMEOUT", 15.0)


def llm_timeout() -> float:
    return get_float_env("LLM_TIMEOUT", 30.0)


def load_yaml(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)
