"""Source adapter registry: one adapter class per SourceTag."""

from jobhunt.core.config import Settings
from jobhunt.core.schemas import SourceTag
from jobhunt.http.session import HttpSession
from jobhunt.sources.base import SourceAdapter
from jobhunt.sources.catho import CathoAdapter
from jobhunt.sources.freelas99 import Freelas99Adapter
from jobhunt.sources.glassdoor import GlassdoorAdapter
from jobhunt.sources.google_jobs import GoogleJobsAdapter
from jobhunt.sources.jooble import JoobleAdapter
from jobhunt.sources.jsearch import JSearchAdapter
from jobhunt.sources.linkedin import LinkedInAdapter
from jobhunt.sources.openai_web import OpenAIWebSearchAdapter
from jobhunt.sources.programathor import ProgramaThorAdapter
from jobhunt.sources.remotive import ArbeitnowAdapter, RemotiveAdapter

ADAPTER_CLASSES: dict[SourceTag, type[SourceAdapter]] = {
    SourceTag.JSEARCH: JSearchAdapter,
    SourceTag.JOOBLE: JoobleAdapter,
    SourceTag.OPENAI_WEB: OpenAIWebSearchAdapter,
    SourceTag.REMOTIVE: RemotiveAdapter,
    SourceTag.ARBEITNOW: ArbeitnowAdapter,
    SourceTag.LINKEDIN: LinkedInAdapter,
    SourceTag.CATHO: CathoAdapter,
    SourceTag.GOOGLE: GoogleJobsAdapter,
    SourceTag.GLASSDOOR: GlassdoorAdapter,
    SourceTag.PROGRAMATHOR: ProgramaThorAdapter,
    SourceTag.FREELAS99: Freelas99Adapter,
}


def build_adapters(
    http: HttpSession,
    settings: Settings,
) -> dict[SourceTag, SourceAdapter]:
    """Instantiate every registered adapter, keyed by tag in registration order.

    Raises:
        RuntimeError: If a SourceTag has no adapter class.
    """
    missing = [tag.value for tag in SourceTag if tag not in ADAPTER_CLASSES]
    if missing:
        msg = f"No adapter registered for: {', '.join(missing)}"
        raise RuntimeError(msg)
    return {tag: ADAPTER_CLASSES[tag](http, settings) for tag in SourceTag}
