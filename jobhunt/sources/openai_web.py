"""LLM web-search source: asks an OpenAI model with the web search tool for postings.

Requires ``OPENAI_API_KEY``. The model is asked for a bare JSON array; fenced
or prose-wrapped JSON is tolerated. Entries without an absolute URL are dropped.
"""

import asyncio
import logging
import os
from typing import Any

import openai

from jobhunt.core.schemas import JobCandidate, SourceTag
from jobhunt.llm.base import parse_json_response
from jobhunt.sources.base import SourceAdapter
from jobhunt.sources.html import COMPANY_PLACEHOLDER, parse_datetime

logger = logging.getLogger(__name__)

ENV_VAR = "OPENAI_API_KEY"
MAX_RESULTS = 15

WEB_SEARCH_PROMPT = """\
Search the web for currently open job postings matching the criteria below.

Keywords: {keywords}
Location: {location}
Country: {country}

Only include postings located in {country} or open to remote candidates there.
Return ONLY a JSON array (no markdown, no commentary) of at most {limit} objects:
[
  {{
    "title": "<job title>",
    "company": "<company name>",
    "location": "<city/state or Remoto>",
    "description": "<two or three sentences about the role>",
    "url": "<direct absolute link to the posting>",
    "salary": "<salary range or null>",
    "posted_at": "<ISO-8601 date or null>"
  }}
]
Return [] if nothing relevant is found."""


class OpenAIWebSearchAdapter(SourceAdapter):
    """Job discovery through the Responses API ``web_search_preview`` tool."""

    @property
    def source_tag(self) -> SourceTag:
        return SourceTag.OPENAI_WEB

    def is_configured(self) -> bool:
        return bool(os.environ.get(ENV_VAR))

    def build_prompt(self, keywords: str, location: str) -> str:
        return WEB_SEARCH_PROMPT.format(
            keywords=keywords,
            location=location or self.country,
            country=self.country,
            limit=MAX_RESULTS,
        )

    async def fetch(self, keywords: str, location: str) -> list[JobCandidate]:
        api_key = os.environ.get(ENV_VAR)
        if not api_key:
            logger.debug("%s not set — skipping web search", ENV_VAR)
            return []

        llm = self._settings.llm
        try:
            text = await asyncio.wait_for(
                self._search(api_key, self.build_prompt(keywords, location)),
                timeout=llm.web_search_timeout_s,
            )
        except asyncio.TimeoutError:
            logger.warning("Web search timed out after %.0fs", llm.web_search_timeout_s)
            return []
        except Exception:
            logger.warning("Web search failed — skipping source", exc_info=True)
            return []

        try:
            payload = parse_json_response(text)
        except ValueError:
            logger.warning("Web search returned no parseable JSON")
            return []

        if isinstance(payload, dict):
            payload = payload.get("jobs", [])
        if not isinstance(payload, list):
            return []

        jobs: list[JobCandidate] = []
        for item in payload:
            if not isinstance(item, dict):
                continue
            candidate = self._to_candidate(item, location)
            if candidate is not None:
                jobs.append(candidate)
        logger.info("Web search: %d jobs for '%s'", len(jobs), keywords)
        return jobs

    async def _search(self, api_key: str, prompt: str) -> str:
        async with openai.AsyncOpenAI(
            api_key=api_key, timeout=self._settings.llm.web_search_timeout_s,
        ) as client:
            response = await client.responses.create(
                model=self._settings.llm.web_search_model,
                tools=[{"type": "web_search_preview"}],
                input=prompt,
            )
        return response.output_text or ""

    def _to_candidate(self, item: dict[str, Any], location: str) -> JobCandidate | None:
        return self._build(
            title=str(item.get("title") or ""),
            company=str(item.get("company") or COMPANY_PLACEHOLDER),
            location=str(item.get("location") or location or self.country),
            description=str(item.get("description") or ""),
            url=str(item.get("url") or ""),
            salary=str(item.get("salary") or "") or None,
            posted_at=parse_datetime(item.get("posted_at")),
        )
