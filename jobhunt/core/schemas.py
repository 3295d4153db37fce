"""Core data models for the job aggregator."""

import logging
from collections.abc import Iterable
from datetime import datetime
from enum import Enum
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)


class SourceTag(str, Enum):
    """Closed set of job sources. Declaration order is registration order."""

    JSEARCH = "JSEARCH"
    JOOBLE = "JOOBLE"
    OPENAI_WEB = "OPENAI_WEB"
    REMOTIVE = "REMOTIVE"
    ARBEITNOW = "ARBEITNOW"
    LINKEDIN = "LINKEDIN"
    CATHO = "CATHO"
    GOOGLE = "GOOGLE"
    GLASSDOOR = "GLASSDOOR"
    PROGRAMATHOR = "PROGRAMATHOR"
    FREELAS99 = "FREELAS99"

    @property
    def label(self) -> str:
        return _SOURCE_LABELS[self]


_SOURCE_LABELS: dict[SourceTag, str] = {
    SourceTag.JSEARCH: "JSearch",
    SourceTag.JOOBLE: "Jooble",
    SourceTag.OPENAI_WEB: "OpenAI Web Search",
    SourceTag.REMOTIVE: "Remotive",
    SourceTag.ARBEITNOW: "Arbeitnow",
    SourceTag.LINKEDIN: "LinkedIn",
    SourceTag.CATHO: "Catho",
    SourceTag.GOOGLE: "Google Jobs",
    SourceTag.GLASSDOOR: "Glassdoor",
    SourceTag.PROGRAMATHOR: "ProgramaThor",
    SourceTag.FREELAS99: "99Freelas",
}


def parse_source_tags(values: Iterable[str | SourceTag]) -> list[SourceTag]:
    """Convert raw source keys to SourceTag, dropping blanks and unknown keys."""
    tags: list[SourceTag] = []
    for v in values:
        if isinstance(v, SourceTag):
            key = v.value
        else:
            key = v.strip().upper()
        if not key:
            continue
        try:
            tag = SourceTag(key)
        except ValueError:
            logger.warning("Unknown source '%s' — skipping", v)
            continue
        if tag not in tags:
            tags.append(tag)
    return tags


def is_absolute_url(url: str) -> bool:
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


class JobCandidate(BaseModel):
    """A job posting produced by one source adapter, not yet persisted.

    Frozen — the url is the natural key used for deduplication.
    """

    model_config = ConfigDict(frozen=True)

    title: str = ""
    company: str = ""
    location: str = ""
    description: str = ""
    url: str
    source: SourceTag
    salary: str | None = None
    tags: str | None = None
    posted_at: datetime | None = None
    external_id: str | None = None

    @field_validator("url")
    @classmethod
    def url_is_absolute(cls, v: str) -> str:
        v = v.strip()
        if not is_absolute_url(v):
            msg = f"url must be an absolute http(s) address, got '{v}'"
            raise ValueError(msg)
        return v

    @field_validator("salary", "tags", "external_id")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None


class JobRecord(BaseModel):
    """A persisted job row. Flags and ai_summary are owned by the user/enrichment."""

    id: int
    external_id: str | None = None
    title: str
    company: str
    location: str
    description: str
    url: str
    source: str
    salary: str | None = None
    tags: str | None = None
    ai_summary: str | None = None
    posted_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
    is_favorite: bool = False
    favorited_at: datetime | None = None
    is_submitted: bool = False
    submitted_at: datetime | None = None


class SearchRunResult(BaseModel):
    """Aggregate counters for one full search run."""

    found: int
    saved: int
    created: int
    summarized: int
    query_rewritten: bool
    original_keywords: str
    query: str
    started_at: datetime = Field(default_factory=datetime.now)
    finished_at: datetime = Field(default_factory=datetime.now)
