"""Glassdoor (Brazil) listing scraper (JSON-LD first, then cards)."""

from urllib.parse import quote

from jobhunt.core.schemas import JobCandidate, SourceTag
from jobhunt.sources import selectors
from jobhunt.sources.html import ScrapedCard, strip_query
from jobhunt.sources.scraping import ScrapingAdapter, join_query

GLASSDOOR_BASE = "https://www.glassdoor.com.br"


def glassdoor_search_path(query: str) -> str:
    """SEO search path; the KO segment marks where the keyword starts and ends."""
    return (
        f"/Vaga/brasil-{quote(query, safe='')}-vagas-"
        f"SRCH_IL.0,6_IN36_KO7,{7 + len(query)}.htm"
    )


class GlassdoorAdapter(ScrapingAdapter):
    base_url = GLASSDOOR_BASE
    selectors = selectors.GLASSDOOR

    @property
    def source_tag(self) -> SourceTag:
        return SourceTag.GLASSDOOR

    def build_url(self, keywords: str, location: str) -> str:
        return GLASSDOOR_BASE + glassdoor_search_path(join_query(keywords, location))

    def card_to_candidate(
        self,
        card: ScrapedCard,
        *,
        index: int,
        page_url: str,
        location: str,
    ) -> JobCandidate | None:
        candidate = super().card_to_candidate(
            card, index=index, page_url=page_url, location=location,
        )
        if candidate is None:
            return None
        return candidate.model_copy(update={"url": strip_query(candidate.url)})
