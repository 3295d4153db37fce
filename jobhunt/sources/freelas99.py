"""99Freelas freelance project board scraper — selector cards only."""

from urllib.parse import urlencode

from bs4 import BeautifulSoup

from jobhunt.core.schemas import JobCandidate, SourceTag
from jobhunt.sources import selectors
from jobhunt.sources.html import ScrapedCard, absolute_url
from jobhunt.sources.scraping import ScrapingAdapter, join_query

FREELAS99_BASE = "https://www.99freelas.com.br"
FREELAS99_COMPANY = "99Freelas (Freelance)"


class Freelas99Adapter(ScrapingAdapter):
    """Projects are remote unless a location was requested."""

    base_url = FREELAS99_BASE
    selectors = selectors.FREELAS99

    @property
    def source_tag(self) -> SourceTag:
        return SourceTag.FREELAS99

    def build_url(self, keywords: str, location: str) -> str:
        params = {"search": join_query(keywords, location)}
        return f"{FREELAS99_BASE}/projects?{urlencode(params)}"

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
        url = absolute_url(card.link, self.base_url)
        if not url:
            return None
        return self._build(
            title=card.title,
            company=FREELAS99_COMPANY,
            location=location or "Remoto",
            description=card.description or card.title,
            url=url,
            salary=card.salary or None,
            tags=", ".join(card.tags) if card.tags else None,
        )
