"""Gemini text generation through its OpenAI-compatible endpoint."""
from __future__ import annotations

import re

from applymate.config import (
    get_gemini_api_key,
    get_gemini_base_url,
    get_gemini_model,
    llm_timeout,
)
from applymate.log import get_logger
from applymate.retry import retry

log = get_logger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)


class LLMUnavailable(RuntimeError):
    """No API key configured; callers should take their non-LLM path."""


def is_configured() -> bool:
    return bool(get_gemini_api_key())


def _is_auth_error(exc: BaseException) -> bool:
    from openai import AuthenticationError, PermissionDeniedError

    return isinstance(exc, (AuthenticationError, PermissionDeniedError))


@retry(max_attempts=2, base_delay=2.0, retryable=(Exception,), giveup=_is_auth_error)
def _call_gemini(api_key: str, model: str, prompt: str, max_tokens: int, temperature: float) -> str:
    from openai import OpenAI

    # Retries come from @retry only
    client = OpenAI(
        api_key=api_key,
        base_url=get_gemini_base_url(),
        timeout=llm_timeout(),
        max_retries=0,
    )
    r = client.chat.completions.create(
        model=model,
        messages=[{"role": "user", "content": prompt}],
        max_tokens=max_tokens,
        temperature=temperature,
    )
    return (r.choices[0].message.content or "").strip()


def generate(prompt: str, *, max_tokens: int = 2048, temperature: float = 0.7) -> str:
    api_key = get_gemini_api_key()
    if not api_key:
        raise LLMUnavailable("GEMINI_API_KEY is not set")
    model = get_gemini_model()
    log.debug("Calling %s (%d prompt chars)", model, len(prompt))
    return _call_gemini(api_key, model, prompt, max_tokens, temperature)


def strip_code_fences(text: str) -> str:
    """Drop Markdown code fences the model wraps around JSON."""
    text = (text or "").strip()
    if "```" not in text:
        return text
    m = _FENCE_RE.search(text)
    if m and m.group(1).strip():
        return m.group(1).strip()
    return text.replace("```json", "").replace("```", "").strip()
