"""Tests for keyword cleanup/translation and the location predicates."""

import pytest

from jobhunt.core.schemas import JobCandidate, SourceTag
from jobhunt.pipeline.normalizer import (
    clean_keywords,
    keyword_variants,
    matches_country,
    matches_location,
    strip_accents,
    translate_keywords,
)


def _job(location: str = "", title: str = "Dev", description: str = "") -> JobCandidate:
    return JobCandidate(
        title=title,
        location=location,
        description=description,
        url="https://example.com/1",
        source=SourceTag.REMOTIVE,
    )


# ---------------------------------------------------------------------------
# TestCleanKeywords
# ---------------------------------------------------------------------------


class TestCleanKeywords:
    def test_strips_remote_and_country(self) -> None:
        assert clean_keywords("Desenvolvedor Python Remoto Brasil") == "Desenvolvedor Python"

    def test_case_insensitive(self) -> None:
        assert clean_keywords("react REMOTE brazil") == "react"

    def test_multiword_token(self) -> None:
        assert clean_keywords("QA home office") == "QA"

    def test_whole_words_only(self) -> None:
        assert clean_keywords("remotely brasileiro") == "remotely brasileiro"

    def test_collapses_whitespace(self) -> None:
        assert clean_keywords("  java   remoto   spring ") == "java spring"

    def test_all_noise_falls_back_to_original(self) -> None:
        assert clean_keywords(" remoto ") == "remoto"


# ---------------------------------------------------------------------------
# TestTranslateKeywords
# ---------------------------------------------------------------------------


class TestTranslateKeywords:
    def test_role_words(self) -> None:
        assert translate_keywords("desenvolvedor python") == "developer python"

    def test_accent_and_case_insensitive(self) -> None:
        assert translate_keywords("Analista de Segurança Sênior") == "analyst de security senior"

    def test_whole_word(self) -> None:
        assert translate_keywords("desenvolvedores") == "desenvolvedores"

    def test_unknown_words_kept(self) -> None:
        assert translate_keywords("React Native") == "React Native"

    def test_strip_accents(self) -> None:
        assert strip_accents("Estágio Sênior") == "Estagio Senior"


class TestKeywordVariants:
    def test_single_when_unchanged(self) -> None:
        assert keyword_variants("python django") == ["python django"]

    def test_both_when_translated(self) -> None:
        assert keyword_variants("engenheiro de dados") == [
            "engenheiro de dados", "engineer de data",
        ]


# ---------------------------------------------------------------------------
# TestMatchesLocation
# ---------------------------------------------------------------------------


class TestMatchesLocation:
    def test_empty_location_matches_everything(self) -> None:
        assert matches_location(_job(location="Berlin"), "") is True

    def test_location_substring(self) -> None:
        assert matches_location(_job(location="Recife, PE"), "recife") is True

    def test_title_substring(self) -> None:
        assert matches_location(_job(title="Dev Java - Recife"), "Recife") is True

    def test_description_substring(self) -> None:
        job = _job(description="Vaga híbrida em RECIFE")
        assert matches_location(job, "recife") is True

    def test_no_match(self) -> None:
        assert matches_location(_job(location="São Paulo"), "Recife") is False

    def test_idempotent_filter(self) -> None:
        jobs = [_job(location="Recife"), _job(location="Remoto"), _job(title="Recife dev")]
        once = [j for j in jobs if matches_location(j, "Recife")]
        twice = [j for j in once if matches_location(j, "Recife")]
        assert once == twice


# ---------------------------------------------------------------------------
# TestMatchesCountry
# ---------------------------------------------------------------------------


class TestMatchesCountry:
    @pytest.mark.parametrize(
        "location",
        [
            "Brazil",
            "Brasil",
            "LATAM",
            "Latin America",
            "Americas",
            "Worldwide",
            "Anywhere",
            "Remote",
            "Remoto",
            "São Paulo, SP",
            "Sao Paulo",
            "Recife",
            "Florianópolis",
        ],
    )
    def test_accepted(self, location: str) -> None:
        assert matches_country(location) is True

    @pytest.mark.parametrize("location", ["Berlin, Germany", "USA Only", "London", ""])
    def test_rejected(self, location: str) -> None:
        assert matches_country(location) is False
