"""Tests for HTML extraction helpers: JSON-LD, inline postings, selector cards."""

import json
from datetime import datetime, timezone

from jobhunt.core.schemas import SourceTag
from jobhunt.sources.html import (
    COMPANY_PLACEHOLDER,
    CardSelectors,
    absolute_url,
    iter_job_posting_nodes,
    make_soup,
    parse_cards,
    parse_datetime,
    parse_inline_job_postings,
    parse_json_ld_job_postings,
    strip_html,
    strip_query,
)

BASE = "https://www.catho.com.br"


def _posting(n: int = 1, **kw: object) -> dict[str, object]:
    posting: dict[str, object] = {
        "@context": "https://schema.org",
        "@type": "JobPosting",
        "title": f"Dev {n}",
        "url": f"/vagas/dev-{n}/",
        "description": "<p>Python</p>",
        "datePosted": "2026-02-01T10:00:00Z",
        "hiringOrganization": {"@type": "Organization", "name": "Acme"},
        "jobLocation": {"address": {"addressLocality": "Recife", "addressRegion": "PE"}},
    }
    posting.update(kw)
    return posting


def _ld_page(*payloads: object) -> str:
    scripts = "".join(
        f'<script type="application/ld+json">{p if isinstance(p, str) else json.dumps(p)}</script>'
        for p in payloads
    )
    return f"<html><head>{scripts}</head><body></body></html>"


def _parse_ld(html: str, fallback_location: str = "Brasil"):  # type: ignore[no-untyped-def]
    return parse_json_ld_job_postings(
        make_soup(html), source=SourceTag.CATHO, base_url=BASE,
        fallback_location=fallback_location,
    )


# ---------------------------------------------------------------------------
# Utilities
# ---------------------------------------------------------------------------


class TestUtilities:
    def test_absolute_url_relative(self) -> None:
        assert absolute_url("/vagas/1", BASE) == "https://www.catho.com.br/vagas/1"

    def test_absolute_url_already_absolute(self) -> None:
        assert absolute_url("https://other.com/x", BASE) == "https://other.com/x"

    def test_absolute_url_blank(self) -> None:
        assert absolute_url("  ", BASE) == ""

    def test_strip_query(self) -> None:
        url = "https://br.linkedin.com/jobs/view/dev-123?refId=abc&trk=x#frag"
        assert strip_query(url) == "https://br.linkedin.com/jobs/view/dev-123"

    def test_strip_html(self) -> None:
        assert strip_html("<p>Hello <b>world</b></p>\n<br/>ok") == "Hello world ok"

    def test_strip_html_empty(self) -> None:
        assert strip_html("") == ""

    def test_parse_datetime_iso_z(self) -> None:
        assert parse_datetime("2026-02-01T10:00:00Z") == datetime(
            2026, 2, 1, 10, 0, tzinfo=timezone.utc,
        )

    def test_parse_datetime_date_only(self) -> None:
        assert parse_datetime("2026-02-01") == datetime(2026, 2, 1)

    def test_parse_datetime_epoch(self) -> None:
        assert parse_datetime(0) == datetime.fromtimestamp(0)

    def test_parse_datetime_invalid(self) -> None:
        assert parse_datetime("yesterday") is None
        assert parse_datetime(None) is None
        assert parse_datetime(True) is None


# ---------------------------------------------------------------------------
# JSON-LD walking
# ---------------------------------------------------------------------------


class TestIterJobPostingNodes:
    def test_single_object(self) -> None:
        assert len(list(iter_job_posting_nodes(_posting()))) == 1

    def test_array(self) -> None:
        assert len(list(iter_job_posting_nodes([_posting(1), _posting(2)]))) == 2

    def test_item_list_with_item_wrappers(self) -> None:
        data = {
            "@type": "ItemList",
            "itemListElement": [
                {"@type": "ListItem", "position": 1, "item": _posting(1)},
                {"@type": "ListItem", "position": 2, "item": _posting(2)},
            ],
        }
        titles = [p["title"] for p in iter_job_posting_nodes(data)]
        assert titles == ["Dev 1", "Dev 2"]

    def test_graph(self) -> None:
        data = {"@graph": [{"@type": "WebPage"}, _posting(3)]}
        assert [p["title"] for p in iter_job_posting_nodes(data)] == ["Dev 3"]

    def test_type_list(self) -> None:
        data = _posting(4, **{"@type": ["JobPosting", "Thing"]})
        assert len(list(iter_job_posting_nodes(data))) == 1

    def test_other_types_ignored(self) -> None:
        assert list(iter_job_posting_nodes({"@type": "Organization"})) == []
        assert list(iter_job_posting_nodes("text")) == []


class TestParseJsonLd:
    def test_maps_fields(self) -> None:
        jobs = _parse_ld(_ld_page(_posting(1, identifier={"value": 987})))
        assert len(jobs) == 1
        job = jobs[0]
        assert job.title == "Dev 1"
        assert job.company == "Acme"
        assert job.location == "Recife"
        assert job.url == "https://www.catho.com.br/vagas/dev-1/"
        assert job.source is SourceTag.CATHO
        assert job.external_id == "987"
        assert job.posted_at is not None

    def test_external_id_defaults_to_url(self) -> None:
        job = _parse_ld(_ld_page(_posting()))[0]
        assert job.external_id == job.url

    def test_region_when_no_locality(self) -> None:
        posting = _posting(jobLocation={"address": {"addressRegion": "PE"}})
        assert _parse_ld(_ld_page(posting))[0].location == "PE"

    def test_telecommute_location(self) -> None:
        posting = _posting(jobLocationType="TELECOMMUTE")
        posting.pop("jobLocation")
        assert _parse_ld(_ld_page(posting))[0].location == "Remoto"

    def test_fallback_location_and_company(self) -> None:
        posting = _posting()
        posting.pop("jobLocation")
        posting.pop("hiringOrganization")
        job = _parse_ld(_ld_page(posting), fallback_location="Recife")[0]
        assert job.location == "Recife"
        assert job.company == COMPANY_PLACEHOLDER

    def test_malformed_block_skipped(self) -> None:
        html = _ld_page("{not json", [_posting(1), _posting(2)])
        assert [j.title for j in _parse_ld(html)] == ["Dev 1", "Dev 2"]

    def test_posting_without_url_skipped(self) -> None:
        posting = _posting()
        posting.pop("url")
        assert _parse_ld(_ld_page(posting, _posting(2))) == _parse_ld(_ld_page(_posting(2)))

    def test_non_ld_scripts_ignored(self) -> None:
        html = f"<script>{json.dumps(_posting())}</script>"
        assert _parse_ld(html) == []


class TestParseInline:
    def test_finds_posting_in_app_state(self) -> None:
        posting = json.dumps({"@type": "JobPosting", "title": "Dev", "url": "https://jobs.example/1"})
        html = f"<script>window.__STATE__ = {{\"list\": [{posting}]}};</script>"
        jobs = parse_inline_job_postings(
            make_soup(html),
            source=SourceTag.GOOGLE,
            base_url="https://www.google.com",
            fallback_location="Brasil",
            fallback_url="https://www.google.com/search?q=dev",
        )
        assert len(jobs) == 1
        assert jobs[0].url == "https://jobs.example/1"
        assert jobs[0].location == "Brasil"

    def test_fallback_url_when_posting_has_none(self) -> None:
        html = '<script>var x = {"@type": "JobPosting", "title": "Dev"};</script>'
        jobs = parse_inline_job_postings(
            make_soup(html),
            source=SourceTag.GOOGLE,
            base_url="https://www.google.com",
            fallback_location="Brasil",
            fallback_url="https://www.google.com/search?q=dev",
        )
        assert jobs[0].url == "https://www.google.com/search?q=dev"

    def test_scripts_without_postings_ignored(self) -> None:
        html = "<script>var a = {'b': 1};</script>"
        jobs = parse_inline_job_postings(
            make_soup(html), source=SourceTag.GOOGLE, base_url="https://www.google.com",
            fallback_location="Brasil", fallback_url="https://www.google.com/search",
        )
        assert jobs == []


# ---------------------------------------------------------------------------
# Selector fallback
# ---------------------------------------------------------------------------

SELECTORS = CardSelectors(
    card=(".job-card", "article"),
    title=("[data-testid='job-title']", "h2"),
    link=("a.primary", "a"),
    company=(".company",),
    location=(".location",),
    salary=(".salary",),
    tags=(".skills span",),
    posted_at=("time",),
)


class TestParseCards:
    def test_first_matching_card_selector_wins(self) -> None:
        html = """
        <article><h2>Ignored article</h2></article>
        <div class="job-card"><h2>Dev</h2><a href="/v/1">ver</a></div>
        """
        cards = parse_cards(make_soup(html), SELECTORS)
        assert [c.title for c in cards] == ["Dev"]

    def test_falls_back_to_later_card_selector(self) -> None:
        html = "<article><h2>Dev</h2></article>"
        assert [c.title for c in parse_cards(make_soup(html), SELECTORS)] == ["Dev"]

    def test_field_selector_priority(self) -> None:
        html = """
        <div class="job-card">
          <h2>Fallback title</h2>
          <span data-testid="job-title">Preferred title</span>
          <a href="/other">x</a><a class="primary" href="/v/1">y</a>
        </div>
        """
        card = parse_cards(make_soup(html), SELECTORS)[0]
        assert card.title == "Preferred title"
        assert card.link == "/v/1"

    def test_cards_without_title_skipped(self) -> None:
        html = """
        <div class="job-card"><span class="company">NoTitle</span></div>
        <div class="job-card"><h2>  Dev  </h2></div>
        """
        cards = parse_cards(make_soup(html), SELECTORS)
        assert [c.title for c in cards] == ["Dev"]

    def test_all_fields(self) -> None:
        html = """
        <div class="job-card">
          <h2>Backend   Dev</h2>
          <a href="/v/9">ver</a>
          <span class="company">Acme</span>
          <span class="location">Recife, PE</span>
          <span class="salary">R$ 8.000</span>
          <div class="skills"><span>Python</span><span></span><span>SQL</span></div>
          <time datetime="2026-02-01">1 dia</time>
        </div>
        """
        card = parse_cards(make_soup(html), SELECTORS)[0]
        assert card.title == "Backend Dev"
        assert card.company == "Acme"
        assert card.location == "Recife, PE"
        assert card.salary == "R$ 8.000"
        assert card.tags == ["Python", "SQL"]
        assert card.posted_at == "2026-02-01"

    def test_missing_optional_fields_are_empty(self) -> None:
        card = parse_cards(make_soup('<div class="job-card"><h2>Dev</h2></div>'), SELECTORS)[0]
        assert card.link == ""
        assert card.company == ""
        assert card.tags == []

    def test_no_cards(self) -> None:
        assert parse_cards(make_soup("<p>nothing</p>"), SELECTORS) == []
