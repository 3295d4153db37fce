"""Catho listing scraper (JSON-LD first, then cards)."""

from urllib.parse import urlencode

from jobhunt.core.schemas import SourceTag
from jobhunt.sources import selectors
from jobhunt.sources.scraping import ScrapingAdapter, join_query

CATHO_BASE = "https://www.catho.com.br"


class CathoAdapter(ScrapingAdapter):
    base_url = CATHO_BASE
    selectors = selectors.CATHO

    @property
    def source_tag(self) -> SourceTag:
        return SourceTag.CATHO

    def build_url(self, keywords: str, location: str) -> str:
        params = {"q": join_query(keywords, location), "page": 1}
        return f"{CATHO_BASE}/vagas/?{urlencode(params)}"
