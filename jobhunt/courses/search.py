"""In-memory search and ranking over the course catalog."""

import logging
import unicodedata

from jobhunt.courses.catalog import (
    CATALOG,
    COURSE_LEVELS,
    COURSE_MODALITIES,
    Course,
    CourseStats,
)

logger = logging.getLogger(__name__)

ALL = "all"


def collation_key(text: str) -> str:
    """Accent- and case-insensitive sort key (approximates locale collation)."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()


def rank_key(course: Course) -> tuple[bool, int, str, str]:
    """Recife first, then MEC grade descending (unrated as 0), then institution."""
    return (
        not course.is_recife,
        -(course.mec_grade or 0),
        collation_key(course.institution),
        course.institution,
    )


def _validate_filter(name: str, value: str, allowed: tuple[str, ...]) -> None:
    if value != ALL and value not in allowed:
        valid = ", ".join((ALL, *allowed))
        msg = f"{name} must be one of: {valid}; got '{value}'"
        raise ValueError(msg)


def search_courses(
    query: str = "",
    modality: str = ALL,
    level: str = ALL,
) -> list[Course]:
    """Filter by modality/level, AND-match every query term, then rank.

    Raises:
        ValueError: If modality or level is not "all" or a known value.
    """
    _validate_filter("modality", modality, COURSE_MODALITIES)
    _validate_filter("level", level, COURSE_LEVELS)

    results = list(CATALOG)
    if modality != ALL:
        results = [c for c in results if c.modality == modality]
    if level != ALL:
        results = [c for c in results if c.level == level]

    terms = query.lower().split()
    if terms:
        results = [
            c for c in results
            if all(term in c.searchable_text() for term in terms)
        ]

    logger.debug(
        "Course search q=%r modality=%s level=%s → %d results",
        query, modality, level, len(results),
    )
    return sorted(results, key=rank_key)


def get_all_courses() -> list[Course]:
    """The whole catalog in its curated order."""
    return list(CATALOG)


def get_course_stats() -> CourseStats:
    return CourseStats(
        total=len(CATALOG),
        presencial=sum(1 for c in CATALOG if c.modality == "presencial"),
        ead=sum(1 for c in CATALOG if c.modality == "ead"),
        hibrido=sum(1 for c in CATALOG if c.modality == "hibrido"),
        mestrado=sum(1 for c in CATALOG if c.level == "mestrado"),
        pos_graduacao=sum(1 for c in CATALOG if c.level == "pos-graduacao"),
        doutorado=sum(1 for c in CATALOG if c.level == "doutorado"),
        recife=sum(1 for c in CATALOG if c.is_recife),
        com_bolsa=sum(1 for c in CATALOG if c.has_scholarship),
    )
