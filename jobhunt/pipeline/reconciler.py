"""Upsert-by-url reconciliation and user flag toggles.

Re-aggregating a known url refreshes its descriptive fields only; the user's
favorite/submitted flags and the enrichment summary are never passed to the
store on that path.
"""

import logging
import sqlite3
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from jobhunt.core.db import DESCRIPTIVE_FIELDS
from jobhunt.core.schemas import JobCandidate, JobRecord
from jobhunt.core.store import JobStore

logger = logging.getLogger(__name__)


class JobNotFoundError(LookupError):
    """Raised when a flag toggle targets a job id that does not exist."""


@dataclass
class ReconcileResult:
    saved: int = 0
    created_records: list[JobRecord] = field(default_factory=list)

    @property
    def created(self) -> int:
        return len(self.created_records)


def candidate_fields(candidate: JobCandidate) -> dict[str, object]:
    """Descriptive fields plus external_id (which the store writes on create only)."""
    fields: dict[str, object] = {name: getattr(candidate, name) for name in DESCRIPTIVE_FIELDS}
    fields["external_id"] = candidate.external_id
    return fields


def reconcile(candidates: Iterable[JobCandidate], store: JobStore) -> ReconcileResult:
    """Upsert every candidate by url; a store failure skips only that candidate."""
    result = ReconcileResult()
    for candidate in candidates:
        try:
            existing = store.find_by_url(candidate.url)
            record = store.upsert_by_url(candidate.url, candidate_fields(candidate))
        except (sqlite3.Error, ValueError):
            logger.warning("Failed to save job %s — skipping", candidate.url, exc_info=True)
            continue
        result.saved += 1
        if existing is None:
            result.created_records.append(record)
    logger.info("Saved %d jobs (%d new)", result.saved, result.created)
    return result


def _toggle(store: JobStore, job_id: int, flag: str, stamp: str) -> JobRecord:
    record = store.find(job_id)
    if record is None:
        msg = f"Job not found: {job_id}"
        raise JobNotFoundError(msg)
    enabled = not getattr(record, flag)
    return store.update_fields(
        job_id,
        {flag: enabled, stamp: datetime.now() if enabled else None},
    )


def toggle_favorite(store: JobStore, job_id: int) -> JobRecord:
    """Flip is_favorite; favorited_at is set on true and cleared on false."""
    return _toggle(store, job_id, "is_favorite", "favorited_at")


def toggle_submitted(store: JobStore, job_id: int) -> JobRecord:
    """Flip is_submitted; submitted_at is set on true and cleared on false."""
    return _toggle(store, job_id, "is_submitted", "submitted_at")
