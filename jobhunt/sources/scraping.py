"""Base class for HTML-scraping adapters.

Flow per fetch:
  1. build the listing URL and GET it through the shared session
  2. try structured JobPosting metadata (JSON-LD by default)
  3. if that yields nothing, fall back to the site's CSS selector cards

A missing page, an unparseable page and a page with no cards all give [].
"""

import logging
from abc import abstractmethod

from bs4 import BeautifulSoup

from jobhunt.core.schemas import JobCandidate
from jobhunt.sources.base import SourceAdapter
from jobhunt.sources.html import (
    COMPANY_PLACEHOLDER,
    CardSelectors,
    ScrapedCard,
    absolute_url,
    make_soup,
    parse_cards,
    parse_datetime,
    parse_json_ld_job_postings,
)

logger = logging.getLogger(__name__)


def join_query(keywords: str, location: str) -> str:
    """Keywords and location as one free-text query (location optional)."""
    return " ".join(part for part in (keywords.strip(), location.strip()) if part)


class ScrapingAdapter(SourceAdapter):
    """Structured metadata first, selector cards second."""

    base_url: str = ""
    selectors: CardSelectors

    @abstractmethod
    def build_url(self, keywords: str, location: str) -> str:
        """Listing page URL for this query."""

    async def fetch(self, keywords: str, location: str) -> list[JobCandidate]:
        page_url = self.build_url(keywords, location)
        html = await self._http.get_text(page_url)
        if not html:
            return []

        soup = make_soup(html)
        jobs = self.parse_structured(soup, page_url=page_url, location=location)
        if jobs:
            logger.info(
                "%s: %d jobs from structured data", self.source_tag.label, len(jobs),
            )
            return jobs

        for index, card in enumerate(parse_cards(soup, self.selectors)):
            candidate = self.card_to_candidate(
                card, index=index, page_url=page_url, location=location,
            )
            if candidate is not None:
                jobs.append(candidate)
        logger.info("%s: %d jobs from selector cards", self.source_tag.label, len(jobs))
        return jobs

    def parse_structured(
        self,
        soup: BeautifulSoup,
        *,
        page_url: str,
        location: str,
    ) -> list[JobCandidate]:
        return parse_json_ld_job_postings(
            soup,
            source=self.source_tag,
            base_url=self.base_url,
            fallback_location=location or self.country,
        )

    def card_to_candidate(
        self,
        card: ScrapedCard,
        *,
        index: int,
        page_url: str,
        location: str,
    ) -> JobCandidate | None:
        url = absolute_url(card.link, self.base_url)
        if not url:
            return None
        company = card.company or COMPANY_PLACEHOLDER
        return self._build(
            title=card.title,
            company=company,
            location=card.location or location or self.country,
            description=card.description or f"{card.title} - {company}",
            url=url,
            salary=card.salary or None,
            tags=", ".join(card.tags) if card.tags else None,
            posted_at=parse_datetime(card.posted_at),
        )
