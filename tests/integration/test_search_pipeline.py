"""Integration test: full search run over the real adapters with a mocked network."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import httpx
import pytest

from jobhunt.core.config import HttpConfig, LLMConfig, Settings
from jobhunt.core.db import init_db
from jobhunt.core.schemas import SourceTag
from jobhunt.core.store import SqliteConfigStore, SqliteJobStore
from jobhunt.http.session import HttpSession
from jobhunt.llm.base import LLMProvider
from jobhunt.pipeline.orchestrator import run_search
from jobhunt.pipeline.reconciler import toggle_favorite
from jobhunt.sources.registry import build_adapters
from main import main

# ---------------------------------------------------------------------------
# Mock network
# ---------------------------------------------------------------------------

REMOTIVE_PAYLOAD = {
    "jobs": [
        {
            "id": 101,
            "url": "https://remotive.com/remote-jobs/software-dev/python-dev-101",
            "title": "Python Developer",
            "company_name": "Remote Co",
            "candidate_required_location": "Brazil",
            "publication_date": "2026-02-01T10:00:00",
            "tags": ["python"],
            "description": "<p>Remote Python role</p>",
        },
        {
            "id": 102,
            "url": "https://remotive.com/remote-jobs/software-dev/python-dev-102",
            "title": "Python Engineer",
            "company_name": "US Co",
            "candidate_required_location": "USA Only",
        },
    ],
}

CATHO_POSTINGS = [
    {
        "@type": "JobPosting",
        "title": "Desenvolvedor Python",
        "url": "/vagas/desenvolvedor-python/1/",
        "description": "Vaga presencial",
        "hiringOrganization": {"name": "Porto Digital"},
        "jobLocation": {"address": {"addressLocality": "Recife"}},
    },
    {
        "@type": "JobPosting",
        "title": "Analista Python",
        "url": "/vagas/analista-python/2/",
        "hiringOrganization": {"name": "Banco"},
        "jobLocation": {"address": {"addressLocality": "Recife"}},
    },
]

CATHO_HTML = (
    '<html><head><script type="application/ld+json">'
    + json.dumps(CATHO_POSTINGS)
    + "</script></head><body></body></html>"
)


def network(request: httpx.Request) -> httpx.Response:
    host = request.url.host
    if host == "remotive.com":
        return httpx.Response(200, json=REMOTIVE_PAYLOAD)
    if host == "www.catho.com.br":
        return httpx.Response(200, text=CATHO_HTML)
    return httpx.Response(404, text="not found")


def _provider() -> MagicMock:
    provider = MagicMock(spec=LLMProvider)
    provider.is_configured.return_value = True
    provider.complete.return_value = "Resumo da vaga."
    return provider


@pytest.fixture()
def stores(tmp_path: Path) -> tuple[SqliteConfigStore, SqliteJobStore]:
    conn = init_db(tmp_path / "test.db")
    return SqliteConfigStore(conn, {"keywords": "python"}), SqliteJobStore(conn)


async def _run(
    settings: Settings,
    config_store: SqliteConfigStore,
    job_store: SqliteJobStore,
    provider: MagicMock,
):  # type: ignore[no-untyped-def]
    transport = httpx.MockTransport(network)
    async with HttpSession(HttpConfig(), transport=transport) as http:
        return await run_search(
            settings,
            config_store=config_store,
            job_store=job_store,
            adapters=build_adapters(http, settings),
            provider=provider,
        )


# ---------------------------------------------------------------------------
# Full pipeline
# ---------------------------------------------------------------------------


class TestSearchPipeline:
    async def test_full_run(self, stores: tuple[SqliteConfigStore, SqliteJobStore]) -> None:
        config_store, job_store = stores
        settings = Settings(llm=LLMConfig(rewrite_query=False))
        provider = _provider()

        with patch.dict("os.environ", {}, clear=True):
            result = await _run(settings, config_store, job_store, provider)

        assert (result.found, result.saved, result.created, result.summarized) == (3, 3, 3, 3)
        jobs = {job.url: job for job in job_store.list_jobs()}
        assert set(jobs) == {
            "https://remotive.com/remote-jobs/software-dev/python-dev-101",
            "https://www.catho.com.br/vagas/desenvolvedor-python/1/",
            "https://www.catho.com.br/vagas/analista-python/2/",
        }
        assert all(job.ai_summary == "Resumo da vaga." for job in jobs.values())
        assert {job.source for job in jobs.values()} == {"REMOTIVE", "CATHO"}
        assert config_store.get().last_search_at is not None

    async def test_rerun_refreshes_and_keeps_user_state(
        self, stores: tuple[SqliteConfigStore, SqliteJobStore],
    ) -> None:
        config_store, job_store = stores
        settings = Settings(llm=LLMConfig(rewrite_query=False))

        with patch.dict("os.environ", {}, clear=True):
            await _run(settings, config_store, job_store, _provider())
            favorite = job_store.find_by_url("https://www.catho.com.br/vagas/analista-python/2/")
            assert favorite is not None
            toggle_favorite(job_store, favorite.id)

            provider = _provider()
            second = await _run(settings, config_store, job_store, provider)

        assert (second.saved, second.created, second.summarized) == (3, 0, 0)
        provider.complete.assert_not_called()
        assert len(job_store.list_jobs()) == 3
        assert [j.id for j in job_store.list_jobs("favorite")] == [favorite.id]

    async def test_location_and_source_selection(
        self, stores: tuple[SqliteConfigStore, SqliteJobStore],
    ) -> None:
        config_store, job_store = stores
        config_store.upsert(location="Recife", enabled_sources=[SourceTag.REMOTIVE, SourceTag.CATHO])
        settings = Settings(llm=LLMConfig(rewrite_query=False, summarize=False))

        with patch.dict("os.environ", {}, clear=True):
            result = await _run(settings, config_store, job_store, _provider())

        assert result.found == 2
        assert {job.company for job in job_store.list_jobs()} == {"Porto Digital", "Banco"}


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


@pytest.fixture()
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "settings.yaml"
    path.write_text(
        f"database:\n  path: {tmp_path / 'jobs.db'}\n"
        "search:\n  keywords: ''\n",
    )
    return path


class TestCli:
    def test_courses(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["courses", "--query", "stellantis"])
        out = capsys.readouterr().out
        assert "1 of 13 courses" in out
        assert "Stellantis" in out

    def test_settings_update(self, config_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main([
            "settings", "--config", str(config_file),
            "--keywords", "python", "--interval", "3", "--sources", "catho,remotive",
        ])
        out = capsys.readouterr().out
        assert "Keywords:    python" in out
        assert "Interval:    3h" in out
        assert "Sources:     CATHO, REMOTIVE" in out

    def test_search_without_keywords_exits(
        self, config_file: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["search", "--config", str(config_file)])
        assert exc_info.value.code == 1
        assert "No search keywords configured" in capsys.readouterr().err

    def test_toggle_unknown_job_exits(
        self, config_file: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        with pytest.raises(SystemExit):
            main(["favorite", "--config", str(config_file), "42"])
        assert "Job not found: 42" in capsys.readouterr().err

    def test_missing_config_exits(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit):
            main(["jobs", "--config", str(tmp_path / "missing.yaml")])

    def test_status(self, config_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with patch.dict("os.environ", {"RAPIDAPI_KEY": "x"}, clear=True):
            main(["status", "--config", str(config_file)])
        out = capsys.readouterr().out
        assert "rapidapi    configured" in out
        assert "jooble      not configured" in out
