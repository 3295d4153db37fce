"""Tests for core data models."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from jobhunt.core.schemas import (
    JobCandidate,
    SearchRunResult,
    SourceTag,
    is_absolute_url,
    parse_source_tags,
)


class TestSourceTag:
    def test_value_equals_name(self) -> None:
        for tag in SourceTag:
            assert tag.value == tag.name

    def test_registration_order(self) -> None:
        assert list(SourceTag)[:3] == [SourceTag.JSEARCH, SourceTag.JOOBLE, SourceTag.OPENAI_WEB]
        assert list(SourceTag)[-1] is SourceTag.FREELAS99

    def test_every_tag_has_label(self) -> None:
        assert SourceTag.FREELAS99.label == "99Freelas"
        assert all(tag.label for tag in SourceTag)


class TestParseSourceTags:
    def test_case_and_whitespace(self) -> None:
        assert parse_source_tags([" remotive ", "Catho"]) == [SourceTag.REMOTIVE, SourceTag.CATHO]

    def test_deduplicates(self) -> None:
        assert parse_source_tags(["GOOGLE", "google", SourceTag.GOOGLE]) == [SourceTag.GOOGLE]

    def test_unknown_and_blank_skipped(self) -> None:
        assert parse_source_tags(["", "INDEED", "JOOBLE"]) == [SourceTag.JOOBLE]


class TestIsAbsoluteUrl:
    @pytest.mark.parametrize("url", ["https://a.com/x", "http://b.com.br"])
    def test_absolute(self, url: str) -> None:
        assert is_absolute_url(url) is True

    @pytest.mark.parametrize("url", ["", "/vagas/1", "ftp://a.com/x", "www.a.com"])
    def test_not_absolute(self, url: str) -> None:
        assert is_absolute_url(url) is False


class TestJobCandidate:
    def test_minimal(self) -> None:
        c = JobCandidate(url="https://example.com/1", source=SourceTag.REMOTIVE)
        assert c.title == ""
        assert c.company == ""
        assert c.salary is None
        assert c.external_id is None

    def test_source_from_string(self) -> None:
        c = JobCandidate(url="https://example.com/1", source="CATHO")
        assert c.source is SourceTag.CATHO

    def test_relative_url_rejected(self) -> None:
        with pytest.raises(ValidationError, match="absolute"):
            JobCandidate(url="/vagas/123", source=SourceTag.CATHO)

    def test_url_stripped(self) -> None:
        c = JobCandidate(url="  https://example.com/1 ", source=SourceTag.CATHO)
        assert c.url == "https://example.com/1"

    def test_blank_optionals_become_none(self) -> None:
        c = JobCandidate(
            url="https://example.com/1",
            source=SourceTag.JSEARCH,
            salary="  ",
            tags="",
            external_id=" ",
        )
        assert c.salary is None
        assert c.tags is None
        assert c.external_id is None

    def test_frozen(self) -> None:
        c = JobCandidate(url="https://example.com/1", source=SourceTag.JSEARCH)
        with pytest.raises(ValidationError):
            c.title = "changed"  # type: ignore[misc]

    def test_unknown_source_rejected(self) -> None:
        with pytest.raises(ValidationError):
            JobCandidate(url="https://example.com/1", source="MONSTER")


class TestSearchRunResult:
    def test_fields(self) -> None:
        r = SearchRunResult(
            found=3,
            saved=2,
            created=1,
            summarized=1,
            query_rewritten=True,
            original_keywords="dev",
            query="developer",
        )
        assert r.saved == 2
        assert isinstance(r.started_at, datetime)
