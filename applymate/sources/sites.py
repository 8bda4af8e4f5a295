"""Per-board configuration: URL shape, experience vocabulary and CSS selectors.

Every board is a plain data entry in ``config/sources.yaml``; adding one needs
no new code.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import quote

from applymate.config import SOURCES_PATH, load_yaml
from applymate.experience import experience_bucket


@dataclass(frozen=True)
class SelectorSet:
    card: str
    title: str = ""
    company: str = ""
    location: str = ""
    salary: str = ""
    link: str = ""


@dataclass(frozen=True)
class SiteConfig:
    name: str
    base_url: str
    search_url: str
    selectors: SelectorSet
    separator: str = "-"
    location_param: str | None = None
    experience_param: str | None = None
    experience_map: dict[str, str] = field(default_factory=dict)
    salary_default: str = ""
    require_title: bool = False

    def format_term(self, text: str) -> str:
        """Lower-case, split on whitespace and join with the board's separator."""
        words = (text or "").lower().split()
        return self.separator.join(quote(w, safe="") for w in words)

    def build_url(
        self,
        query: str,
        location: str | None = None,
        experience: str | None = None,
    ) -> str:
        url = self.search_url.format(query=self.format_term(query))
        params: list[str] = []
        if location and self.location_param:
            params.append(f"{self.location_param}={self.format_term(location)}")
        bucket = experience_bucket(experience)
        if bucket and self.experience_param and bucket in self.experience_map:
            params.append(f"{self.experience_param}={self.experience_map[bucket]}")
        if not params:
            return url
        joiner = "&" if "?" in url else "?"
        return url + joiner + "&".join(params)


def _site_from_dict(raw: dict[str, Any]) -> SiteConfig:
    selectors = SelectorSet(**raw["selectors"])
    return SiteConfig(
        name=raw["name"],
        base_url=raw["base_url"].rstrip("/"),
        search_url=raw["search_url"],
        selectors=selectors,
        separator=raw.get("separator", "-"),
        location_param=raw.get("location_param"),
        experience_param=raw.get("experience_param"),
        experience_map={str(k): str(v) for k, v in (raw.get("experience_map") or {}).items()},
        salary_default=raw.get("salary_default", "") or "",
        require_title=bool(raw.get("require_title", False)),
    )


def load_site_configs(path: Path | None = None) -> list[SiteConfig]:
    """Site configs in file order; that order is the aggregation order."""
    data = load_yaml(path or SOURCES_PATH) or {}
    return [_site_from_dict(entry) for entry in data.get("sources", [])]
