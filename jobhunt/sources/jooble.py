"""Jooble adapter (POST JSON API). Requires ``JOOBLE_API_KEY``."""

import logging
import os
from typing import Any

from jobhunt.core.schemas import JobCandidate, SourceTag
from jobhunt.pipeline.normalizer import clean_keywords
from jobhunt.sources.base import SourceAdapter
from jobhunt.sources.html import COMPANY_PLACEHOLDER, parse_datetime, strip_html

logger = logging.getLogger(__name__)

JOOBLE_URL = "https://jooble.org/api/{api_key}"
ENV_VAR = "JOOBLE_API_KEY"


class JoobleAdapter(SourceAdapter):
    """Keyword + location search over the Jooble REST API."""

    @property
    def source_tag(self) -> SourceTag:
        return SourceTag.JOOBLE

    def is_configured(self) -> bool:
        return bool(os.environ.get(ENV_VAR))

    async def fetch(self, keywords: str, location: str) -> list[JobCandidate]:
        api_key = os.environ.get(ENV_VAR)
        if not api_key:
            logger.debug("%s not set — skipping Jooble", ENV_VAR)
            return []

        payload = {
            "keywords": clean_keywords(keywords),
            "location": location or self.country,
        }
        data = await self._http.post_json(JOOBLE_URL.format(api_key=api_key), payload)
        if not isinstance(data, dict) or not isinstance(data.get("jobs"), list):
            return []

        jobs: list[JobCandidate] = []
        for item in data["jobs"]:
            if not isinstance(item, dict):
                continue
            candidate = self._to_candidate(item, location)
            if candidate is not None:
                jobs.append(candidate)
        logger.info("Jooble: %d jobs for '%s'", len(jobs), payload["keywords"])
        return jobs

    def _to_candidate(self, item: dict[str, Any], location: str) -> JobCandidate | None:
        job_id = item.get("id")
        return self._build(
            title=strip_html(str(item.get("title") or "")),
            company=str(item.get("company") or "").strip() or COMPANY_PLACEHOLDER,
            location=str(item.get("location") or "").strip() or location or self.country,
            description=strip_html(str(item.get("snippet") or "")),
            url=str(item.get("link") or ""),
            salary=str(item.get("salary") or "") or None,
            tags=str(item.get("type") or "") or None,
            posted_at=parse_datetime(item.get("updated")),
            external_id=str(job_id) if job_id not in (None, "") else None,
        )
