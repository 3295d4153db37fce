"""Keyword cleanup/translation and location relevance predicates.

Pure functions — no network, no state.
"""

import logging
import re
import unicodedata
from typing import Protocol

logger = logging.getLogger(__name__)

# Free-standing tokens dropped before sources that take location separately.
_NOISE_TOKENS: tuple[str, ...] = (
    "home office",
    "homeoffice",
    "remoto",
    "remota",
    "remote",
    "brasil",
    "brazil",
)

_NOISE_RE = re.compile(
    r"(?<!\w)(?:" + "|".join(re.escape(t) for t in _NOISE_TOKENS) + r")(?!\w)",
    re.IGNORECASE,
)

# Portuguese role words → English, for English-language job boards.
# Keys are accent-free and lowercase.
ROLE_TRANSLATIONS: dict[str, str] = {
    "desenvolvedor": "developer",
    "desenvolvedora": "developer",
    "programador": "programmer",
    "programadora": "programmer",
    "engenheiro": "engineer",
    "engenheira": "engineer",
    "analista": "analyst",
    "cientista": "scientist",
    "arquiteto": "architect",
    "arquiteta": "architect",
    "gerente": "manager",
    "coordenador": "coordinator",
    "coordenadora": "coordinator",
    "lider": "lead",
    "tecnico": "technician",
    "estagiario": "intern",
    "estagiaria": "intern",
    "estagio": "internship",
    "suporte": "support",
    "dados": "data",
    "testes": "testing",
    "qualidade": "quality",
    "seguranca": "security",
    "infraestrutura": "infrastructure",
    "redes": "network",
    "produto": "product",
    "projetos": "projects",
    "junior": "junior",
    "pleno": "mid-level",
    "senior": "senior",
}

_WORD_RE = re.compile(r"[^\W\d_][\w-]*", re.UNICODE)

# Country scoping for sources with no native country filter.
COUNTRY_PATTERN = re.compile(
    r"\b(?:"
    r"brasil|brazil|br|latam|latin america|am[eé]rica latina|south america|"
    r"am[eé]rica do sul|americas|anywhere|worldwide|global|"
    r"remot[eo]|remota|home office|"
    r"s[aã]o paulo|rio de janeiro|recife|pernambuco|belo horizonte|curitiba|"
    r"porto alegre|florian[oó]polis|bras[ií]lia|salvador|fortaleza|campinas|"
    r"goi[aâ]nia|manaus|bel[eé]m"
    r")\b",
    re.IGNORECASE,
)


class HasLocationText(Protocol):
    title: str
    location: str
    description: str


def strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def clean_keywords(keywords: str) -> str:
    """Drop remote/country tokens so they don't pollute keyword-only queries.

    Falls back to the original string if cleaning would leave nothing.
    """
    cleaned = _NOISE_RE.sub(" ", keywords)
    cleaned = " ".join(cleaned.split())
    return cleaned or keywords.strip()


def translate_keywords(keywords: str) -> str:
    """Translate Portuguese role words word-by-word (case/accent-insensitive)."""

    def _replace(match: re.Match[str]) -> str:
        word = match.group(0)
        return ROLE_TRANSLATIONS.get(strip_accents(word).lower(), word)

    return _WORD_RE.sub(_replace, keywords)


def keyword_variants(keywords: str) -> list[str]:
    """Return [keywords] or [keywords, translated] when translation changes it."""
    translated = translate_keywords(keywords)
    if translated.lower() == keywords.lower():
        return [keywords]
    logger.debug("Translated keywords '%s' → '%s'", keywords, translated)
    return [keywords, translated]


def matches_location(job: HasLocationText, location: str) -> bool:
    """True if location is empty or appears in the job's location/title/description."""
    if not location:
        return True
    needle = location.lower()
    return (
        needle in job.location.lower()
        or needle in job.title.lower()
        or needle in job.description.lower()
    )


def matches_country(location: str) -> bool:
    """True if a free-text location is within the target country (or remote)."""
    return bool(COUNTRY_PATTERN.search(location))
