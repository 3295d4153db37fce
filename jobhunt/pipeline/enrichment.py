"""Optional LLM enrichment: query rewriting before fan-out, summaries after persistence.

Both steps are capability-gated. With no provider, or a provider whose
credential is missing, they are no-ops that hand back their input. Provider
SDK calls are synchronous, so each one runs in a worker thread under
``asyncio.wait_for``.
"""

import asyncio
import logging
import os
from collections.abc import Iterable

from jobhunt.core.schemas import JobRecord
from jobhunt.core.store import JobStore
from jobhunt.llm.base import LLMProvider, strip_code_fence
from jobhunt.sources.html import strip_html

logger = logging.getLogger(__name__)

MAX_DESCRIPTION_CHARS = 3000
SUMMARY_MAX_TOKENS = 200
REWRITE_MAX_TOKENS = 60

_REWRITE_SYSTEM_PROMPT = (
    "Você otimiza consultas de busca de emprego. "
    "Dado palavras-chave e localização, gere UMA query de busca otimizada "
    "para APIs de emprego, focada em vagas no país {country}. "
    "Retorne APENAS a query, sem explicações. "
    "Inclua termos sinônimos relevantes separados por espaço."
)

_SUMMARY_SYSTEM_PROMPT = (
    "Você resume vagas de emprego. "
    "Gere um resumo conciso em português (máximo 3 frases) incluindo: "
    "principais responsabilidades, requisitos-chave e benefícios destacados. "
    "Seja direto e objetivo. Não use markdown."
)


async def _complete(
    provider: LLMProvider,
    prompt: str,
    *,
    system: str,
    max_tokens: int,
    timeout_s: float,
) -> str:
    return await asyncio.wait_for(
        asyncio.to_thread(
            provider.complete,
            prompt,
            system=system,
            max_tokens=max_tokens,
            timeout=timeout_s,
        ),
        timeout=timeout_s,
    )


def _is_available(provider: LLMProvider | None) -> bool:
    return provider is not None and provider.is_configured()


async def enhance_search_query(
    keywords: str,
    location: str,
    provider: LLMProvider | None,
    *,
    country: str = "Brasil",
    timeout_s: float = 10.0,
) -> str:
    """Rewrite keywords into one optimized query; return ``keywords`` on any failure."""
    if not _is_available(provider):
        return keywords

    prompt = f"Palavras-chave: {keywords}\nLocalização: {location or 'qualquer'}"
    try:
        raw = await _complete(
            provider,
            prompt,
            system=_REWRITE_SYSTEM_PROMPT.format(country=country),
            max_tokens=REWRITE_MAX_TOKENS,
            timeout_s=timeout_s,
        )
    except Exception:
        logger.warning("Query rewrite failed — using original keywords", exc_info=True)
        return keywords

    query = " ".join(strip_code_fence(raw).strip().strip("\"'").split())
    if not query:
        return keywords
    logger.info("Rewrote query '%s' → '%s'", keywords, query)
    return query


async def summarize_job(
    provider: LLMProvider | None,
    title: str,
    company: str,
    description: str,
    *,
    timeout_s: float = 10.0,
) -> str | None:
    """Short Portuguese summary of one posting, or None if unavailable/failed."""
    if not _is_available(provider):
        return None

    clean = strip_html(description)[:MAX_DESCRIPTION_CHARS]
    prompt = f"Vaga: {title} na empresa {company}\n\nDescrição:\n{clean}"
    try:
        raw = await _complete(
            provider,
            prompt,
            system=_SUMMARY_SYSTEM_PROMPT,
            max_tokens=SUMMARY_MAX_TOKENS,
            timeout_s=timeout_s,
        )
    except Exception:
        logger.warning("Summary failed for '%s' (%s)", title, company, exc_info=True)
        return None

    summary = raw.strip()
    return summary or None


def newest_first(records: Iterable[JobRecord]) -> list[JobRecord]:
    return sorted(records, key=lambda r: (r.created_at, r.id), reverse=True)


async def summarize_new_jobs(
    job_store: JobStore,
    records: Iterable[JobRecord],
    provider: LLMProvider | None,
    *,
    batch_size: int = 10,
    timeout_s: float = 10.0,
) -> int:
    """Summarize up to ``batch_size`` of the newest records; return how many succeeded.

    Calls run concurrently and settle independently: a failed summary (or a
    failed write of one) leaves that record's ai_summary unset and does not
    affect the others.
    """
    if not _is_available(provider):
        return 0

    batch = newest_first(records)[:batch_size]
    if not batch:
        return 0

    async def _one(record: JobRecord) -> bool:
        summary = await summarize_job(
            provider,
            record.title,
            record.company,
            record.description,
            timeout_s=timeout_s,
        )
        if summary is None:
            return False
        job_store.update_fields(record.id, {"ai_summary": summary})
        return True

    results = await asyncio.gather(*(_one(r) for r in batch), return_exceptions=True)

    summarized = 0
    for record, result in zip(batch, results):
        if isinstance(result, BaseException):
            logger.warning(
                "Could not store summary for job %d", record.id,
                exc_info=(type(result), result, result.__traceback__),
            )
        elif result:
            summarized += 1
    logger.info("Summarized %d of %d new jobs", summarized, len(batch))
    return summarized


def credential_status(provider: LLMProvider | None = None) -> dict[str, bool]:
    """Capability probes, one per credential-gated integration."""
    return {
        "llm": _is_available(provider),
        "rapidapi": bool(os.environ.get("RAPIDAPI_KEY")),
        "jooble": bool(os.environ.get("JOOBLE_API_KEY")),
        "openai_web": bool(os.environ.get("OPENAI_API_KEY")),
    }
