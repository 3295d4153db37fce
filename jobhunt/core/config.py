"""Configuration models and YAML loader for the job aggregator."""

from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from jobhunt.core.schemas import SourceTag, parse_source_tags

DEFAULT_CONFIG_ID = "default"

SEARCH_INTERVALS: tuple[int, ...] = (3, 6, 9, 12)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36"
)


class SearchConfig(BaseModel):
    """The single persisted search configuration row.

    An empty ``enabled_sources`` list means every registered source is enabled.
    """

    id: str = DEFAULT_CONFIG_ID
    keywords: str = ""
    location: str = ""
    interval_hours: int = Field(default=6, ge=1)
    enabled_sources: list[SourceTag] = Field(default_factory=list)
    is_active: bool = True
    last_search_at: datetime | None = None

    @field_validator("keywords", "location")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    @field_validator("enabled_sources", mode="before")
    @classmethod
    def split_sources(cls, v: Any) -> list[SourceTag]:
        if v is None:
            return []
        if isinstance(v, str):
            return parse_source_tags(v.split(","))
        return parse_source_tags(v)

    @property
    def enabled_sources_csv(self) -> str:
        """Comma-joined source keys, as stored in the database."""
        return ",".join(tag.value for tag in self.enabled_sources)


def is_search_due(config: SearchConfig, now: datetime | None = None) -> bool:
    """Return True if an active, configured search is older than its interval."""
    if not config.is_active or not config.keywords:
        return False
    if config.last_search_at is None:
        return True
    now = now or datetime.now()
    return now - config.last_search_at >= timedelta(hours=config.interval_hours)


class SearchDefaults(BaseModel):
    """Values used to seed the persisted SearchConfig on first run."""

    keywords: str = ""
    location: str = ""
    interval_hours: int = Field(default=6, ge=1)
    enabled_sources: list[str] = Field(default_factory=list)
    is_active: bool = True


class HttpConfig(BaseModel):
    """Outbound HTTP settings shared by every source adapter."""

    timeout_s: float = Field(default=15.0, gt=0)
    user_agent: str = DEFAULT_USER_AGENT
    accept_language: str = "pt-BR,pt;q=0.9,en-US;q=0.8,en;q=0.7"


class LLMConfig(BaseModel):
    """LLM enrichment settings (query rewriting, summaries, web search)."""

    provider: str = "groq"
    model: str | None = None
    rewrite_query: bool = True
    summarize: bool = True
    summary_batch_size: int = Field(default=10, ge=1)
    summary_timeout_s: float = Field(default=10.0, gt=0)
    rewrite_timeout_s: float = Field(default=10.0, gt=0)
    web_search_timeout_s: float = Field(default=90.0, gt=0)
    web_search_model: str = "gpt-4o-mini"


class DatabaseConfig(BaseModel):
    """Database configuration."""

    path: str = "data/jobs.db"


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    search: SearchDefaults = Field(default_factory=SearchDefaults)
    country: str = "Brasil"
    country_code: str = "br"

    @field_validator("country_code")
    @classmethod
    def country_code_two_letters(cls, v: str) -> str:
        v = v.strip().lower()
        if len(v) != 2 or not v.isalpha():
            msg = f"country_code must be a two-letter code, got '{v}'"
            raise ValueError(msg)
        return v

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
