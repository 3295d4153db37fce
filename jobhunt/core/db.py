"""SQLite database layer for job records and the search configuration row."""

import sqlite3
from collections.abc import Iterable, Mapping
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from jobhunt.core.config import DEFAULT_CONFIG_ID, SearchConfig
from jobhunt.core.schemas import JobRecord

_JOBS_TABLE = """
CREATE TABLE IF NOT EXISTS jobs (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    external_id     TEXT,
    title           TEXT    NOT NULL,
    company         TEXT    NOT NULL DEFAULT '',
    location        TEXT    NOT NULL DEFAULT '',
    description     TEXT    NOT NULL DEFAULT '',
    url             TEXT    NOT NULL UNIQUE,
    source          TEXT    NOT NULL,
    salary          TEXT,
    tags            TEXT,
    ai_summary      TEXT,
    posted_at       TEXT,
    created_at      TEXT    NOT NULL,
    updated_at      TEXT    NOT NULL,
    is_favorite     INTEGER NOT NULL DEFAULT 0,
    favorited_at    TEXT,
    is_submitted    INTEGER NOT NULL DEFAULT 0,
    submitted_at    TEXT
);
"""

_SEARCH_CONFIG_TABLE = """
CREATE TABLE IF NOT EXISTS search_config (
    id               TEXT    PRIMARY KEY,
    keywords         TEXT    NOT NULL DEFAULT '',
    location         TEXT    NOT NULL DEFAULT '',
    interval_hours   INTEGER NOT NULL DEFAULT 6,
    enabled_sources  TEXT    NOT NULL DEFAULT '',
    last_search_at   TEXT,
    is_active        INTEGER NOT NULL DEFAULT 1
);
"""

# Refreshed on every re-aggregation of an existing url.
DESCRIPTIVE_FIELDS: tuple[str, ...] = (
    "title",
    "company",
    "location",
    "description",
    "source",
    "salary",
    "tags",
    "posted_at",
)

# Accepted by upsert_job; external_id is written on insert only.
UPSERT_FIELDS: frozenset[str] = frozenset(DESCRIPTIVE_FIELDS) | {"external_id"}

UPDATABLE_FIELDS: frozenset[str] = frozenset(DESCRIPTIVE_FIELDS) | {
    "ai_summary",
    "is_favorite",
    "favorited_at",
    "is_submitted",
    "submitted_at",
}

JOB_FILTERS: tuple[str, ...] = ("all", "favorite", "submitted")


def init_db(path: str | Path) -> sqlite3.Connection:
    """Create the database and tables, returning a connection."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute(_JOBS_TABLE)
    conn.execute(_SEARCH_CONFIG_TABLE)
    conn.commit()
    return conn


def _to_db(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, Enum):
        return value.value
    return value


def _row_to_record(row: sqlite3.Row) -> JobRecord:
    return JobRecord.model_validate(dict(row))


def find_job(conn: sqlite3.Connection, job_id: int) -> JobRecord | None:
    row = conn.execute("SELECT * FROM jobs WHERE id = ?", (job_id,)).fetchone()
    return _row_to_record(row) if row is not None else None


def find_job_by_url(conn: sqlite3.Connection, url: str) -> JobRecord | None:
    row = conn.execute("SELECT * FROM jobs WHERE url = ?", (url,)).fetchone()
    return _row_to_record(row) if row is not None else None


def upsert_job(
    conn: sqlite3.Connection,
    url: str,
    fields: Mapping[str, Any],
) -> JobRecord:
    """Insert a job, or refresh the descriptive fields of the row with this url.

    User state (favorite/submitted flags and timestamps) and ai_summary are
    never touched by the update branch.
    """
    unknown = set(fields) - UPSERT_FIELDS
    if unknown:
        msg = f"upsert_job does not accept fields: {sorted(unknown)}"
        raise ValueError(msg)

    now = datetime.now().isoformat()
    values = {name: _to_db(fields.get(name)) for name in DESCRIPTIVE_FIELDS}
    conn.execute(
        """
        INSERT INTO jobs
            (external_id, title, company, location, description, url, source,
             salary, tags, posted_at, created_at, updated_at)
        VALUES
            (:external_id, :title, :company, :location, :description, :url, :source,
             :salary, :tags, :posted_at, :now, :now)
        ON CONFLICT(url) DO UPDATE SET
            title = excluded.title,
            company = excluded.company,
            location = excluded.location,
            description = excluded.description,
            source = excluded.source,
            salary = excluded.salary,
            tags = excluded.tags,
            posted_at = excluded.posted_at,
            updated_at = excluded.updated_at
        """,
        {
            **values,
            "title": values["title"] or "",
            "company": values["company"] or "",
            "location": values["location"] or "",
            "description": values["description"] or "",
            "external_id": fields.get("external_id"),
            "url": url,
            "now": now,
        },
    )
    conn.commit()
    record = find_job_by_url(conn, url)
    if record is None:
        msg = f"Upserted job vanished: {url}"
        raise sqlite3.DatabaseError(msg)
    return record


def find_jobs(conn: sqlite3.Connection, ids: Iterable[int]) -> list[JobRecord]:
    """Return the records for the given ids, newest first."""
    id_list = list(ids)
    if not id_list:
        return []
    placeholders = ",".join("?" for _ in id_list)
    rows = conn.execute(
        f"SELECT * FROM jobs WHERE id IN ({placeholders}) ORDER BY created_at DESC, id DESC",
        id_list,
    ).fetchall()
    return [_row_to_record(r) for r in rows]


def update_job_fields(
    conn: sqlite3.Connection,
    job_id: int,
    fields: Mapping[str, Any],
) -> JobRecord:
    """Update whitelisted columns of one job. Raises LookupError if id is unknown."""
    if not fields:
        msg = "update_job_fields requires at least one field"
        raise ValueError(msg)
    unknown = set(fields) - UPDATABLE_FIELDS
    if unknown:
        msg = f"update_job_fields does not accept fields: {sorted(unknown)}"
        raise ValueError(msg)

    assignments = ", ".join(f"{name} = :{name}" for name in fields)
    params = {name: _to_db(value) for name, value in fields.items()}
    params["updated_at"] = datetime.now().isoformat()
    params["id"] = job_id
    cursor = conn.execute(
        f"UPDATE jobs SET {assignments}, updated_at = :updated_at WHERE id = :id",
        params,
    )
    conn.commit()
    if cursor.rowcount == 0:
        msg = f"Job not found: {job_id}"
        raise LookupError(msg)
    record = find_job(conn, job_id)
    if record is None:
        msg = f"Updated job vanished: {job_id}"
        raise sqlite3.DatabaseError(msg)
    return record


def list_jobs(conn: sqlite3.Connection, job_filter: str = "all") -> list[JobRecord]:
    """List jobs newest first, optionally only favorites or submitted ones."""
    if job_filter not in JOB_FILTERS:
        msg = f"job filter must be one of {JOB_FILTERS}, got '{job_filter}'"
        raise ValueError(msg)
    where = ""
    if job_filter == "favorite":
        where = "WHERE is_favorite = 1"
    elif job_filter == "submitted":
        where = "WHERE is_submitted = 1"
    rows = conn.execute(
        f"SELECT * FROM jobs {where} ORDER BY created_at DESC, id DESC",
    ).fetchall()
    return [_row_to_record(r) for r in rows]


def get_search_config(
    conn: sqlite3.Connection,
    defaults: Mapping[str, Any] | None = None,
) -> SearchConfig:
    """Return the config row, creating it from defaults when absent."""
    row = conn.execute(
        "SELECT * FROM search_config WHERE id = ?", (DEFAULT_CONFIG_ID,),
    ).fetchone()
    if row is not None:
        return SearchConfig.model_validate(dict(row))

    config = SearchConfig.model_validate(dict(defaults or {}))
    _write_search_config(conn, config)
    return config


def upsert_search_config(
    conn: sqlite3.Connection,
    fields: Mapping[str, Any],
    defaults: Mapping[str, Any] | None = None,
) -> SearchConfig:
    """Merge fields into the config row (created from defaults if needed)."""
    current = get_search_config(conn, defaults)
    merged = SearchConfig.model_validate(
        {**current.model_dump(), **dict(fields), "id": DEFAULT_CONFIG_ID},
    )
    _write_search_config(conn, merged)
    return merged


def _write_search_config(conn: sqlite3.Connection, config: SearchConfig) -> None:
    conn.execute(
        """
        INSERT INTO search_config
            (id, keywords, location, interval_hours, enabled_sources,
             last_search_at, is_active)
        VALUES (?, ?, ?, ?, ?, ?, ?)
        ON CONFLICT(id) DO UPDATE SET
            keywords = excluded.keywords,
            location = excluded.location,
            interval_hours = excluded.interval_hours,
            enabled_sources = excluded.enabled_sources,
            last_search_at = excluded.last_search_at,
            is_active = excluded.is_active
        """,
        (
            config.id,
            config.keywords,
            config.location,
            config.interval_hours,
            config.enabled_sources_csv,
            _to_db(config.last_search_at),
            int(config.is_active),
        ),
    )
    conn.commit()
