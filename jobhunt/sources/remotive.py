"""Remotive and Arbeitnow adapters — free, keyless English-language job boards.

Both boards search better in English, so queries are sent in the original
and translated form (when they differ) and the results merged. Neither has a
country filter; results are country-scoped by location text instead.
"""

import asyncio
import logging
from abc import abstractmethod
from typing import Any

from jobhunt.core.schemas import JobCandidate, SourceTag
from jobhunt.pipeline.normalizer import clean_keywords, keyword_variants, matches_country
from jobhunt.sources.base import SourceAdapter
from jobhunt.sources.html import COMPANY_PLACEHOLDER, parse_datetime

logger = logging.getLogger(__name__)

REMOTIVE_URL = "https://remotive.com/api/remote-jobs"
ARBEITNOW_URL = "https://www.arbeitnow.com/api/job-board-api"


class _TranslatingBoardAdapter(SourceAdapter):
    """Queries every keyword variant concurrently and merges the results."""

    async def fetch(self, keywords: str, location: str) -> list[JobCandidate]:
        variants = keyword_variants(clean_keywords(keywords))
        batches = await asyncio.gather(*(self._fetch_query(q) for q in variants))
        jobs = [job for batch in batches for job in batch]
        scoped = [job for job in jobs if matches_country(job.location)]
        logger.info(
            "%s: %d jobs (%d in country) for %s",
            self.source_tag.label, len(jobs), len(scoped), variants,
        )
        return scoped

    @abstractmethod
    async def _fetch_query(self, query: str) -> list[JobCandidate]:
        """Run one board query and map its items to candidates."""


class RemotiveAdapter(_TranslatingBoardAdapter):
    """Remotive public remote-jobs API."""

    @property
    def source_tag(self) -> SourceTag:
        return SourceTag.REMOTIVE

    async def _fetch_query(self, query: str) -> list[JobCandidate]:
        data = await self._http.get_json(REMOTIVE_URL, params={"search": query, "limit": 50})
        if not isinstance(data, dict) or not isinstance(data.get("jobs"), list):
            return []
        jobs: list[JobCandidate] = []
        for item in data["jobs"]:
            if not isinstance(item, dict):
                continue
            candidate = self._to_candidate(item)
            if candidate is not None:
                jobs.append(candidate)
        return jobs

    def _to_candidate(self, item: dict[str, Any]) -> JobCandidate | None:
        tags = item.get("tags")
        job_id = item.get("id")
        return self._build(
            title=str(item.get("title") or ""),
            company=str(item.get("company_name") or COMPANY_PLACEHOLDER),
            location=str(item.get("candidate_required_location") or "Remote"),
            description=str(item.get("description") or ""),
            url=str(item.get("url") or ""),
            salary=str(item.get("salary") or "") or None,
            tags=", ".join(str(t) for t in tags) if isinstance(tags, list) else None,
            posted_at=parse_datetime(item.get("publication_date")),
            external_id=str(job_id) if job_id is not None else None,
        )


class ArbeitnowAdapter(_TranslatingBoardAdapter):
    """Arbeitnow job-board API."""

    @property
    def source_tag(self) -> SourceTag:
        return SourceTag.ARBEITNOW

    async def _fetch_query(self, query: str) -> list[JobCandidate]:
        data = await self._http.get_json(ARBEITNOW_URL, params={"search": query})
        if not isinstance(data, dict) or not isinstance(data.get("data"), list):
            return []
        jobs: list[JobCandidate] = []
        for item in data["data"]:
            if not isinstance(item, dict):
                continue
            candidate = self._to_candidate(item)
            if candidate is not None:
                jobs.append(candidate)
        return jobs

    def _to_candidate(self, item: dict[str, Any]) -> JobCandidate | None:
        tags = item.get("tags")
        location = str(item.get("location") or "").strip() or "Remote"
        if item.get("remote") and "remot" not in location.lower():
            location = f"{location} (Remote)"
        return self._build(
            title=str(item.get("title") or ""),
            company=str(item.get("company_name") or COMPANY_PLACEHOLDER),
            location=location,
            description=str(item.get("description") or ""),
            url=str(item.get("url") or ""),
            tags=", ".join(str(t) for t in tags) if isinstance(tags, list) else None,
            posted_at=parse_datetime(item.get("created_at")),
            external_id=str(item.get("slug") or "") or None,
        )
