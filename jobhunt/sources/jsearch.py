"""JSearch (RapidAPI) adapter — Google for Jobs aggregate as JSON.

Requires ``RAPIDAPI_KEY``. Without it the adapter returns no results.
"""

import logging
import os
from typing import Any

from jobhunt.core.schemas import JobCandidate, SourceTag
from jobhunt.pipeline.normalizer import clean_keywords
from jobhunt.sources.base import SourceAdapter
from jobhunt.sources.html import COMPANY_PLACEHOLDER, parse_datetime

logger = logging.getLogger(__name__)

JSEARCH_HOST = "jsearch.p.rapidapi.com"
JSEARCH_URL = f"https://{JSEARCH_HOST}/search"
ENV_VAR = "RAPIDAPI_KEY"


def format_amount(value: float) -> str:
    """Format with '.' as thousands separator: 5000 → '5.000'."""
    return f"{int(round(value)):,}".replace(",", ".")


def format_salary(
    min_salary: float | None,
    max_salary: float | None,
    currency: str | None,
) -> str | None:
    """Render a salary range; min-only as 'X+', max-only as 'Até X'."""
    prefix = f"{currency} " if currency else ""
    if min_salary and max_salary:
        return f"{prefix}{format_amount(min_salary)} - {format_amount(max_salary)}"
    if min_salary:
        return f"{prefix}{format_amount(min_salary)}+"
    if max_salary:
        return f"Até {prefix}{format_amount(max_salary)}"
    return None


def _number(value: Any) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value))
    except ValueError:
        return None


class JSearchAdapter(SourceAdapter):
    """Structured JSON search over RapidAPI's JSearch endpoint."""

    @property
    def source_tag(self) -> SourceTag:
        return SourceTag.JSEARCH

    def is_configured(self) -> bool:
        return bool(os.environ.get(ENV_VAR))

    async def fetch(self, keywords: str, location: str) -> list[JobCandidate]:
        api_key = os.environ.get(ENV_VAR)
        if not api_key:
            logger.debug("%s not set — skipping JSearch", ENV_VAR)
            return []

        query = f"{clean_keywords(keywords)} in {location or self.country}"
        data = await self._http.get_json(
            JSEARCH_URL,
            params={
                "query": query,
                "page": 1,
                "num_pages": 1,
                "country": self._settings.country_code,
                "date_posted": "month",
            },
            headers={"x-rapidapi-key": api_key, "x-rapidapi-host": JSEARCH_HOST},
        )
        if not isinstance(data, dict) or not isinstance(data.get("data"), list):
            return []

        jobs: list[JobCandidate] = []
        for item in data["data"]:
            if not isinstance(item, dict):
                continue
            candidate = self._to_candidate(item)
            if candidate is not None:
                jobs.append(candidate)
        logger.info("JSearch: %d jobs for '%s'", len(jobs), query)
        return jobs

    def _to_candidate(self, item: dict[str, Any]) -> JobCandidate | None:
        skills = item.get("job_required_skills")
        tags = ", ".join(str(s) for s in skills) if isinstance(skills, list) else None
        currency = item.get("job_salary_currency") or "BRL"
        return self._build(
            title=str(item.get("job_title") or ""),
            company=str(item.get("employer_name") or COMPANY_PLACEHOLDER),
            location=self._location(item),
            description=str(item.get("job_description") or ""),
            url=str(item.get("job_apply_link") or item.get("job_google_link") or ""),
            salary=format_salary(
                _number(item.get("job_min_salary")),
                _number(item.get("job_max_salary")),
                currency,
            ),
            tags=tags,
            posted_at=parse_datetime(item.get("job_posted_at_datetime_utc")),
            external_id=str(item["job_id"]) if item.get("job_id") else None,
        )

    def _location(self, item: dict[str, Any]) -> str:
        if item.get("job_is_remote"):
            return "Remoto"
        parts = [
            str(item[key]).strip()
            for key in ("job_city", "job_state")
            if item.get(key)
        ]
        return ", ".join(parts) if parts else self.country
