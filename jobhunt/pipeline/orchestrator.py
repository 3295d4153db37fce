"""Orchestrator: fans a query out to the enabled sources and runs the full search.

Data flow of ``run_search``:
  1. Precondition: keywords must be configured
  2. Optional LLM query rewrite
  3. Concurrent fan-out to every enabled adapter, failures discarded
  4. Location filter over the merged list
  5. Upsert by url
  6. Summaries for newly created records
  7. Stamp last_search_at
"""

import asyncio
import logging
from collections.abc import Iterable, Mapping
from datetime import datetime

from jobhunt.core.config import Settings
from jobhunt.core.schemas import JobCandidate, SearchRunResult, SourceTag
from jobhunt.core.store import ConfigStore, JobStore
from jobhunt.llm.base import LLMProvider
from jobhunt.pipeline.enrichment import enhance_search_query, summarize_new_jobs
from jobhunt.pipeline.normalizer import matches_location
from jobhunt.pipeline.reconciler import reconcile
from jobhunt.sources.base import SourceAdapter

logger = logging.getLogger(__name__)


class SearchNotConfiguredError(ValueError):
    """Raised when a search is requested with no keywords configured."""


def resolve_adapters(
    adapters: Mapping[SourceTag, SourceAdapter],
    enabled_sources: Iterable[SourceTag],
) -> list[SourceAdapter]:
    """Enabled subset in registration order; an empty selection means all."""
    enabled = set(enabled_sources)
    if not enabled:
        return list(adapters.values())
    return [adapter for tag, adapter in adapters.items() if tag in enabled]


async def search_jobs(
    keywords: str,
    location: str,
    enabled_sources: Iterable[SourceTag],
    *,
    adapters: Mapping[SourceTag, SourceAdapter],
) -> list[JobCandidate]:
    """Query every enabled adapter concurrently and merge what succeeded.

    Waits for all adapters to settle. A raising adapter is logged and
    dropped; it never fails the search or cancels its siblings.
    """
    selected = resolve_adapters(adapters, enabled_sources)
    if not selected:
        logger.info("No enabled sources — nothing to search")
        return []

    logger.info(
        "Searching '%s' (%s) on %d sources",
        keywords, location or "any location", len(selected),
    )
    results = await asyncio.gather(
        *(adapter.fetch(keywords, location) for adapter in selected),
        return_exceptions=True,
    )

    merged: list[JobCandidate] = []
    for adapter, result in zip(selected, results):
        if isinstance(result, BaseException):
            logger.warning(
                "Source %s failed — skipping", adapter.source_tag.value,
                exc_info=(type(result), result, result.__traceback__),
            )
            continue
        logger.debug("%s returned %d jobs", adapter.source_tag.value, len(result))
        merged.extend(result)

    if location:
        filtered = [job for job in merged if matches_location(job, location)]
        logger.info(
            "Location '%s' kept %d of %d jobs", location, len(filtered), len(merged),
        )
        return filtered
    return merged


async def run_search(
    settings: Settings,
    *,
    config_store: ConfigStore,
    job_store: JobStore,
    adapters: Mapping[SourceTag, SourceAdapter],
    provider: LLMProvider | None = None,
) -> SearchRunResult:
    """Execute one full search run against the persisted SearchConfig.

    Raises:
        SearchNotConfiguredError: If no keywords are configured. Nothing is fetched.
    """
    config = config_store.get()
    if not config.keywords:
        msg = "No search keywords configured — set them with 'settings --keywords'"
        raise SearchNotConfiguredError(msg)

    started_at = datetime.now()
    llm = settings.llm

    query = config.keywords
    if llm.rewrite_query:
        query = await enhance_search_query(
            config.keywords,
            config.location,
            provider,
            country=settings.country,
            timeout_s=llm.rewrite_timeout_s,
        )

    candidates = await search_jobs(
        query, config.location, config.enabled_sources, adapters=adapters,
    )
    reconciled = reconcile(candidates, job_store)

    summarized = 0
    if llm.summarize and reconciled.created_records:
        summarized = await summarize_new_jobs(
            job_store,
            reconciled.created_records,
            provider,
            batch_size=llm.summary_batch_size,
            timeout_s=llm.summary_timeout_s,
        )

    finished_at = datetime.now()
    config_store.upsert(last_search_at=finished_at)

    logger.info(
        "Search '%s': %d found, %d saved, %d new, %d summarized",
        query, len(candidates), reconciled.saved, reconciled.created, summarized,
    )

    return SearchRunResult(
        found=len(candidates),
        saved=reconciled.saved,
        created=reconciled.created,
        summarized=summarized,
        query_rewritten=query != config.keywords,
        original_keywords=config.keywords,
        query=query,
        started_at=started_at,
        finished_at=finished_at,
    )
