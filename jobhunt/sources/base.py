"""Abstract base class for job source adapters."""

import logging
from abc import ABC, abstractmethod
from typing import Any

from pydantic import ValidationError

from jobhunt.core.config import Settings
from jobhunt.core.schemas import JobCandidate, SourceTag
from jobhunt.http.session import HttpSession

logger = logging.getLogger(__name__)


class SourceAdapter(ABC):
    """Base class that every source adapter must implement.

    ``fetch`` never raises for network or parsing problems: it returns an
    empty list instead, so an outage and an empty result look the same.
    """

    def __init__(self, http: HttpSession, settings: Settings) -> None:
        self._http = http
        self._settings = settings

    @property
    @abstractmethod
    def source_tag(self) -> SourceTag:
        """Unique tag for this source (e.g. SourceTag.REMOTIVE)."""

    @abstractmethod
    async def fetch(self, keywords: str, location: str) -> list[JobCandidate]:
        """Query the source and return normalized candidates."""

    @property
    def country(self) -> str:
        return self._settings.country

    def is_configured(self) -> bool:
        """Whether required credentials are present. Keyless sources return True."""
        return True

    def _build(self, **fields: Any) -> JobCandidate | None:
        """Construct a candidate, skipping (None) items that fail validation."""
        try:
            return JobCandidate(source=self.source_tag, **fields)
        except ValidationError:
            logger.debug(
                "Skipping malformed %s item: %r", self.source_tag.value,
                fields.get("url"), exc_info=True,
            )
            return None
