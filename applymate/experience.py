"""Map free-text experience answers onto coarse buckets."""
from __future__ import annotations

import re

FRESHER = "fresher"
JUNIOR = "1-3"
MID = "3-5"
SENIOR = "5+"

SENIOR_YEARS = 5

# Ranges must stand alone: "10-15" is not "0-1"
_FRESHER_RE = re.compile(r"fresher|intern|entry|(?<!\d)0-1(?!\d)")
_JUNIOR_RE = re.compile(r"(?<!\d)1-3(?!\d)")
_MID_RE = re.compile(r"(?<!\d)3-5(?!\d)")
_PLUS_RE = re.compile(r"(?<!\d)(\d+)\+")
_RANGE_RE = re.compile(r"(?<!\d)(\d+)-\d+(?!\d)")


def experience_bucket(experience: str | None) -> str | None:
    """Return one of ``fresher``, ``1-3``, ``3-5``, ``5+`` or None."""
    text = (experience or "").lower().replace(" ", "")
    if not text:
        return None
    if _FRESHER_RE.search(text):
        return FRESHER
    if _JUNIOR_RE.search(text):
        return JUNIOR
    if _MID_RE.search(text):
        return MID
    if "senior" in text:
        return SENIOR
    m = _PLUS_RE.search(text) or _RANGE_RE.search(text)
    if m and int(m.group(1)) >= SENIOR_YEARS:
        return SENIOR
    return None


def is_entry_level(experience: str | None) -> bool:
    return experience_bucket(experience) == FRESHER


def is_senior_level(experience: str | None) -> bool:
    return experience_bucket(experience) == SENIOR
