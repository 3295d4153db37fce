"""Google Jobs results page scraper.

Google inlines JobPosting objects in application-state scripts rather than
JSON-LD, so those are scanned first. Selector cards carry no per-job link;
each gets the search URL plus a fragment derived from title and company.
"""

from urllib.parse import quote, urlencode

from bs4 import BeautifulSoup

from jobhunt.core.schemas import JobCandidate, SourceTag
from jobhunt.sources import selectors
from jobhunt.sources.html import COMPANY_PLACEHOLDER, ScrapedCard, parse_inline_job_postings
from jobhunt.sources.scraping import ScrapingAdapter

GOOGLE_BASE = "https://www.google.com"
GOOGLE_SEARCH_URL = f"{GOOGLE_BASE}/search"


class GoogleJobsAdapter(ScrapingAdapter):
    base_url = GOOGLE_BASE
    selectors = selectors.GOOGLE

    @property
    def source_tag(self) -> SourceTag:
        return SourceTag.GOOGLE

    def build_url(self, keywords: str, location: str) -> str:
        params = {
            "q": f"{keywords} vagas {location or self.country}",
            "ibp": "htl;jobs",
            "hl": "pt-BR",
        }
        return f"{GOOGLE_SEARCH_URL}?{urlencode(params)}"

    def parse_structured(
        self,
        soup: BeautifulSoup,
        *,
        page_url: str,
        location: str,
    ) -> list[JobCandidate]:
        return parse_inline_job_postings(
            soup,
            source=self.source_tag,
            base_url=self.base_url,
            fallback_location=location or self.country,
            fallback_url=page_url,
        )

    def card_to_candidate(
        self,
        card: ScrapedCard,
        *,
        index: int,
        page_url: str,
        location: str,
    ) -> JobCandidate | None:
        company = card.company or COMPANY_PLACEHOLDER
        fragment = quote(f"{card.title}|{company}", safe="")
        return self._build(
            title=card.title,
            company=company,
            location=card.location or location or self.country,
            description=f"{card.title} - {company}",
            url=f"{page_url}#{fragment}",
        )
