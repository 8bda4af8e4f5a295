#!/usr/bin/env python3
"""Entry point to run the ApplyMate API server."""
from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from applymate import llm
from applymate.config import SOURCES_PATH, get_env
from applymate.log import get_logger

log = get_logger(__name__)


def _check_setup() -> bool:
    """Return True if the board configuration is missing."""
    if not SOURCES_PATH.exists():
        log.error("No job board configuration found at %s", SOURCES_PATH)
        return True
    return False


def main() -> None:
    if _check_setup():
        sys.exit(1)

    from applymate.web import create_app

    if not llm.is_configured():
        log.warning("No Gemini API key found (GEMINI_API_KEY) — listings get default scores")

    host = get_env("HOST", "127.0.0.1")
    port = int(get_env("PORT", "5000") or 5000)
    debug = get_env("FLASK_DEBUG", "false").lower() in ("1", "true", "yes")

    log.info("Starting ApplyMate on http://%s:%d", host, port)
    create_app().run(host=host, port=port, debug=debug)


if __name__ == "__main__":
    main()
