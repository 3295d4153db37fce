"""Shared HTML extraction strategies for scraping adapters.

Two strategies, tried in this order by each scraping adapter:
  1. Structured metadata — schema.org ``JobPosting`` objects embedded as
     JSON-LD (or inline in arbitrary scripts).
  2. Selector fallback — ordered CSS selector candidates per field.

Nothing in here raises on malformed markup; offending blocks/cards are skipped.
"""

import json
import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from urllib.parse import urljoin, urlparse, urlunparse

from bs4 import BeautifulSoup, Tag
from pydantic import ValidationError

from jobhunt.core.schemas import JobCandidate, SourceTag

logger = logging.getLogger(__name__)

COMPANY_PLACEHOLDER = "Empresa não informada"

_POSTING_TYPE_RE = re.compile(r'"@type"\s*:\s*"JobPosting"')
_MAX_BRACE_ATTEMPTS = 50


@dataclass(frozen=True)
class CardSelectors:
    """Selector candidates for one scraping target.

    Each field is a tuple tried in order; the first candidate with a
    non-empty result wins.
    """

    card: tuple[str, ...]
    title: tuple[str, ...]
    link: tuple[str, ...] = ("a",)
    company: tuple[str, ...] = ()
    location: tuple[str, ...] = ()
    description: tuple[str, ...] = ()
    salary: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    posted_at: tuple[str, ...] = ()


@dataclass
class ScrapedCard:
    """Raw text fields pulled from one card; adapters apply their own defaults."""

    title: str
    link: str = ""
    company: str = ""
    location: str = ""
    description: str = ""
    salary: str = ""
    tags: list[str] = field(default_factory=list)
    posted_at: str = ""


def make_soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


# ---------------------------------------------------------------------------
# URL / text utilities
# ---------------------------------------------------------------------------


def absolute_url(link: str, base_url: str) -> str:
    """Resolve a possibly relative link against the site's base url."""
    link = link.strip()
    if not link:
        return ""
    return urljoin(base_url, link)


def strip_query(url: str) -> str:
    """Drop query string and fragment (tracking params)."""
    parsed = urlparse(url)
    return urlunparse((parsed.scheme, parsed.netloc, parsed.path, "", "", ""))


def strip_html(text: str) -> str:
    """Convert an HTML fragment to collapsed plain text."""
    if not text:
        return ""
    plain = BeautifulSoup(text, "html.parser").get_text(" ")
    return " ".join(plain.split())


def parse_datetime(value: Any) -> datetime | None:
    """Parse ISO-8601 strings (with optional Z) or epoch seconds; None if invalid."""
    if value is None or value == "":
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return None
    return None


# ---------------------------------------------------------------------------
# Strategy 1: structured JobPosting metadata
# ---------------------------------------------------------------------------


def iter_job_posting_nodes(data: Any) -> Iterator[dict[str, Any]]:
    """Yield every JobPosting object in a decoded JSON-LD payload.

    Walks arrays, ``itemListElement`` lists (with ``item`` wrappers) and ``@graph``.
    """
    if isinstance(data, list):
        for item in data:
            yield from iter_job_posting_nodes(item)
        return
    if not isinstance(data, dict):
        return

    types = data.get("@type")
    if types == "JobPosting" or (isinstance(types, list) and "JobPosting" in types):
        yield data
        return

    for key in ("item", "itemListElement", "@graph"):
        if key in data:
            yield from iter_job_posting_nodes(data[key])


def _posting_location(posting: dict[str, Any], fallback: str) -> str:
    job_location = posting.get("jobLocation")
    if isinstance(job_location, list):
        job_location = job_location[0] if job_location else None
    if isinstance(job_location, dict):
        address = job_location.get("address")
        if isinstance(address, dict):
            for key in ("addressLocality", "addressRegion"):
                value = address.get(key)
                if isinstance(value, str) and value.strip():
                    return value.strip()
    if posting.get("jobLocationType") == "TELECOMMUTE":
        return "Remoto"
    return fallback


def _posting_company(posting: dict[str, Any]) -> str:
    org = posting.get("hiringOrganization")
    if isinstance(org, dict):
        name = org.get("name")
        if isinstance(name, str) and name.strip():
            return name.strip()
    if isinstance(org, str) and org.strip():
        return org.strip()
    return COMPANY_PLACEHOLDER


def _posting_identifier(posting: dict[str, Any]) -> str | None:
    identifier = posting.get("identifier")
    if isinstance(identifier, dict):
        identifier = identifier.get("value")
    if identifier in (None, ""):
        return None
    return str(identifier)


def posting_to_candidate(
    posting: dict[str, Any],
    *,
    source: SourceTag,
    base_url: str,
    fallback_location: str,
    fallback_url: str = "",
) -> JobCandidate | None:
    """Map one schema.org JobPosting to a JobCandidate, or None if unusable."""
    title = str(posting.get("title") or "").strip()
    link = absolute_url(str(posting.get("url") or ""), base_url) or fallback_url
    if not link:
        return None
    try:
        return JobCandidate(
            title=title,
            company=_posting_company(posting),
            location=_posting_location(posting, fallback_location),
            description=str(posting.get("description") or ""),
            url=link,
            source=source,
            posted_at=parse_datetime(posting.get("datePosted")),
            external_id=_posting_identifier(posting) or link,
        )
    except ValidationError:
        logger.debug("Skipping invalid JobPosting from %s", source.value, exc_info=True)
        return None


def parse_json_ld_job_postings(
    soup: BeautifulSoup,
    *,
    source: SourceTag,
    base_url: str,
    fallback_location: str,
) -> list[JobCandidate]:
    """Extract JobPosting entries from ``<script type="application/ld+json">`` blocks."""
    jobs: list[JobCandidate] = []
    for script in soup.find_all("script", attrs={"type": "application/ld+json"}):
        raw = script.string or script.get_text()
        if not raw or not raw.strip():
            continue
        try:
            payload = json.loads(raw)
        except ValueError:
            logger.debug("Skipping malformed JSON-LD block from %s", source.value)
            continue
        for posting in iter_job_posting_nodes(payload):
            candidate = posting_to_candidate(
                posting,
                source=source,
                base_url=base_url,
                fallback_location=fallback_location,
            )
            if candidate is not None:
                jobs.append(candidate)
    return jobs


def _iter_inline_postings(content: str) -> Iterator[dict[str, Any]]:
    """Decode the innermost JSON object enclosing each ``"@type": "JobPosting"`` marker."""
    decoder = json.JSONDecoder()
    for match in _POSTING_TYPE_RE.finditer(content):
        start = content.rfind("{", 0, match.start())
        attempts = 0
        while start != -1 and attempts < _MAX_BRACE_ATTEMPTS:
            attempts += 1
            try:
                obj, end = decoder.raw_decode(content, start)
            except ValueError:
                obj, end = None, -1
            if end >= match.end() and isinstance(obj, dict) and obj.get("@type") == "JobPosting":
                yield obj
                break
            start = content.rfind("{", 0, start)


def parse_inline_job_postings(
    soup: BeautifulSoup,
    *,
    source: SourceTag,
    base_url: str,
    fallback_location: str,
    fallback_url: str,
) -> list[JobCandidate]:
    """Scan any ``<script>`` text for inline JobPosting objects.

    For pages that embed postings in application state rather than JSON-LD.
    Objects that do not decode as JSON are skipped.
    """
    jobs: list[JobCandidate] = []
    for script in soup.find_all("script"):
        content = script.string or script.get_text()
        if not content or "JobPosting" not in content:
            continue
        for posting in _iter_inline_postings(content):
            candidate = posting_to_candidate(
                posting,
                source=source,
                base_url=base_url,
                fallback_location=fallback_location,
                fallback_url=fallback_url,
            )
            if candidate is not None:
                jobs.append(candidate)
    return jobs


# ---------------------------------------------------------------------------
# Strategy 2: CSS selector fallback
# ---------------------------------------------------------------------------


def find_cards(soup: BeautifulSoup | Tag, selectors: tuple[str, ...]) -> list[Tag]:
    """Return the elements matched by the first card selector that matches any."""
    for selector in selectors:
        cards = soup.select(selector)
        if cards:
            logger.debug("Found %d cards with selector '%s'", len(cards), selector)
            return cards
    return []


def find_first(parent: Tag, selectors: tuple[str, ...]) -> Tag | None:
    """Return the first element matching any selector, in selector order."""
    for selector in selectors:
        el = parent.select_one(selector)
        if el is not None:
            return el
    return None


def first_text(parent: Tag, selectors: tuple[str, ...]) -> str:
    """First non-empty text among selector candidates, or ""."""
    for selector in selectors:
        el = parent.select_one(selector)
        if el is None:
            continue
        text = " ".join(el.get_text(" ").split())
        if text:
            return text
    return ""


def _first_attr(parent: Tag, selectors: tuple[str, ...], attr: str) -> str:
    el = find_first(parent, selectors)
    if el is None:
        return ""
    value = el.get(attr)
    if isinstance(value, list):
        value = " ".join(value)
    return (value or "").strip()


def parse_cards(soup: BeautifulSoup, selectors: CardSelectors) -> list[ScrapedCard]:
    """Scrape listing cards with ordered selector fallbacks.

    Cards with no title are skipped.
    """
    results: list[ScrapedCard] = []
    for card in find_cards(soup, selectors.card):
        title = first_text(card, selectors.title)
        if not title:
            continue
        tags: list[str] = []
        for selector in selectors.tags:
            tags = [" ".join(t.get_text(" ").split()) for t in card.select(selector)]
            tags = [t for t in tags if t]
            if tags:
                break
        results.append(
            ScrapedCard(
                title=title,
                link=_first_attr(card, selectors.link, "href"),
                company=first_text(card, selectors.company),
                location=first_text(card, selectors.location),
                description=first_text(card, selectors.description),
                salary=first_text(card, selectors.salary),
                tags=tags,
                posted_at=_first_attr(card, selectors.posted_at, "datetime"),
            ),
        )
    return results
