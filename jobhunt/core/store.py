"""Store interfaces consumed by the pipeline, with SQLite implementations.

The pipeline only depends on the JobStore / ConfigStore protocols so tests can
substitute in-memory fakes.
"""

import sqlite3
from collections.abc import Iterable, Mapping
from typing import Any, Protocol, runtime_checkable

from jobhunt.core import db
from jobhunt.core.config import SearchConfig
from jobhunt.core.schemas import JobRecord


@runtime_checkable
class JobStore(Protocol):
    """Upsert-by-url record store."""

    def find_by_url(self, url: str) -> JobRecord | None: ...
    def upsert_by_url(self, url: str, fields: Mapping[str, Any]) -> JobRecord: ...
    def find_many(self, ids: Iterable[int]) -> list[JobRecord]: ...
    def find(self, job_id: int) -> JobRecord | None: ...
    def update_fields(self, job_id: int, fields: Mapping[str, Any]) -> JobRecord: ...


@runtime_checkable
class ConfigStore(Protocol):
    """Repository for the singleton SearchConfig."""

    def get(self) -> SearchConfig: ...
    def upsert(self, **fields: Any) -> SearchConfig: ...


class SqliteJobStore:
    """JobStore backed by the ``jobs`` table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def find_by_url(self, url: str) -> JobRecord | None:
        return db.find_job_by_url(self._conn, url)

    def upsert_by_url(self, url: str, fields: Mapping[str, Any]) -> JobRecord:
        return db.upsert_job(self._conn, url, fields)

    def find_many(self, ids: Iterable[int]) -> list[JobRecord]:
        return db.find_jobs(self._conn, ids)

    def find(self, job_id: int) -> JobRecord | None:
        return db.find_job(self._conn, job_id)

    def update_fields(self, job_id: int, fields: Mapping[str, Any]) -> JobRecord:
        return db.update_job_fields(self._conn, job_id, fields)

    def list_jobs(self, job_filter: str = "all") -> list[JobRecord]:
        return db.list_jobs(self._conn, job_filter)


class SqliteConfigStore:
    """ConfigStore backed by the ``search_config`` table.

    ``defaults`` seed the row the first time it is read.
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        defaults: Mapping[str, Any] | None = None,
    ) -> None:
        self._conn = conn
        self._defaults = dict(defaults or {})

    def get(self) -> SearchConfig:
        return db.get_search_config(self._conn, self._defaults)

    def upsert(self, **fields: Any) -> SearchConfig:
        return db.upsert_search_config(self._conn, fields, self._defaults)
