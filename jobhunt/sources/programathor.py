"""ProgramaThor (Brazilian tech jobs) scraper — selector cards only."""

from urllib.parse import urlencode

from bs4 import BeautifulSoup

from jobhunt.core.schemas import JobCandidate, SourceTag
from jobhunt.sources import selectors
from jobhunt.sources.scraping import ScrapingAdapter, join_query

PROGRAMATHOR_BASE = "https://programathor.com.br"


class ProgramaThorAdapter(ScrapingAdapter):
    base_url = PROGRAMATHOR_BASE
    selectors = selectors.PROGRAMATHOR

    @property
    def source_tag(self) -> SourceTag:
        return SourceTag.PROGRAMATHOR

    def build_url(self, keywords: str, location: str) -> str:
        params = {"search": join_query(keywords, location)}
        return f"{PROGRAMATHOR_BASE}/jobs?{urlencode(params)}"

    def parse_structured(
        self,
        soup: BeautifulSoup,
        *,
        page_url: str,
        location: str,
    ) -> list[JobCandidate]:
        return []
