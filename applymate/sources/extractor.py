"""Turn a board's result page into ``Listing`` records using CSS selectors."""
from __future__ import annotations

from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

from applymate.log import get_logger
from applymate.models import Listing
from applymate.sources.sites import SiteConfig

log = get_logger(__name__)


def _text(card: Tag, selector: str) -> str:
    if not selector:
        return ""
    node = card.select_one(selector)
    if node is None:
        return ""
    return " ".join(node.get_text(" ", strip=True).split())


def _href(card: Tag, selector: str) -> str:
    if not selector:
        return ""
    node = card.select_one(selector)
    if node is None:
        return ""
    href = node.get("href")
    if isinstance(href, list):
        href = href[0] if href else ""
    return (href or "").strip()


def absolute_link(href: str, base_url: str) -> str:
    """Absolute URL for *href*, or "" when there is nothing to link to."""
    if not href:
        return ""
    if href.startswith("http"):
        return href
    joined = urljoin(base_url + "/", href)
    # javascript:, mailto: and friends survive urljoin untouched
    return joined if joined.startswith("http") else ""


def extract_listings(html: str, site: SiteConfig) -> list[Listing]:
    """Read every listing card on the page; missing fields become ""."""
    if not html:
        return []
    soup = BeautifulSoup(html, "html.parser")
    sel = site.selectors

    listings: list[Listing] = []
    for card in soup.select(sel.card):
        title = _text(card, sel.title)
        if site.require_title and not title:
            continue
        listings.append(
            Listing(
                title=title,
                company=_text(card, sel.company),
                location=_text(card, sel.location),
                salary=_text(card, sel.salary) or site.salary_default,
                link=absolute_link(_href(card, sel.link), site.base_url),
                source=site.name,
            )
        )
    log.debug("%s: %d card(s) extracted", site.name, len(listings))
    return listings
