"""LinkedIn guest job-search endpoint (no login, HTML fragment of cards)."""

import logging
import re
from urllib.parse import urlencode

from bs4 import BeautifulSoup

from jobhunt.core.schemas import JobCandidate, SourceTag
from jobhunt.pipeline.normalizer import clean_keywords
from jobhunt.sources import selectors
from jobhunt.sources.html import ScrapedCard, absolute_url, parse_datetime, strip_query
from jobhunt.sources.scraping import ScrapingAdapter

logger = logging.getLogger(__name__)

LINKEDIN_BASE = "https://www.linkedin.com"
GUEST_SEARCH_URL = f"{LINKEDIN_BASE}/jobs-guest/jobs/api/seeMoreJobPostings/search"
PAGE_SIZE = 25
LOCATION_UNKNOWN = "N/A"

_TRAILING_ID_RE = re.compile(r"(\d+)/?$")


def extract_job_id(url: str) -> str | None:
    """Trailing digits of a /jobs/view/... path, e.g. '...-developer-3912345678'."""
    match = _TRAILING_ID_RE.search(strip_query(url))
    return match.group(1) if match else None


class LinkedInAdapter(ScrapingAdapter):
    """Public guest listing; cards only, no structured metadata."""

    base_url = LINKEDIN_BASE
    selectors = selectors.LINKEDIN

    @property
    def source_tag(self) -> SourceTag:
        return SourceTag.LINKEDIN

    def build_url(self, keywords: str, location: str) -> str:
        params = {
            "keywords": clean_keywords(keywords),
            "location": location or self.country,
            "start": 0,
            "count": PAGE_SIZE,
        }
        return f"{GUEST_SEARCH_URL}?{urlencode(params)}"

    def parse_structured(
        self,
        soup: BeautifulSoup,
        *,
        page_url: str,
        location: str,
    ) -> list[JobCandidate]:
        return []

    def card_to_candidate(
        self,
        card: ScrapedCard,
        *,
        index: int,
        page_url: str,
        location: str,
    ) -> JobCandidate | None:
        link = absolute_url(card.link, self.base_url)
        if not link:
            logger.debug("LinkedIn card '%s' has no link — skipping", card.title)
            return None
        url = strip_query(link)
        job_location = card.location or LOCATION_UNKNOWN
        return self._build(
            title=card.title,
            company=card.company,
            location=job_location,
            description=f"{card.title} at {card.company} - {job_location}",
            url=url,
            posted_at=parse_datetime(card.posted_at),
            external_id=extract_job_id(url),
        )
