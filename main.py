"""CLI entry point for the job aggregator."""

import argparse
import asyncio
import logging
import sys

from jobhunt.core.config import SEARCH_INTERVALS, Settings, is_search_due
from jobhunt.core.db import JOB_FILTERS, init_db
from jobhunt.core.schemas import SourceTag
from jobhunt.core.store import SqliteConfigStore, SqliteJobStore
from jobhunt.courses.catalog import COURSE_LEVELS, COURSE_MODALITIES
from jobhunt.courses.search import get_course_stats, search_courses
from jobhunt.http.session import HttpSession
from jobhunt.llm import get_provider
from jobhunt.llm.base import LLMProvider
from jobhunt.pipeline.enrichment import credential_status
from jobhunt.pipeline.orchestrator import SearchNotConfiguredError, run_search
from jobhunt.pipeline.reconciler import JobNotFoundError, toggle_favorite, toggle_submitted
from jobhunt.sources.registry import build_adapters

logger = logging.getLogger(__name__)


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default="config/settings.yaml",
        help="Path to settings YAML file (default: config/settings.yaml)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Job aggregator - search many job sources and keep one deduplicated list",
    )
    subparsers = parser.add_subparsers(dest="command")

    # --- search subcommand (default) ---
    search_parser = subparsers.add_parser("search", help="Run the job search")
    _add_common(search_parser)
    search_parser.add_argument(
        "--if-due",
        action="store_true",
        help="Only search if the configured interval has elapsed",
    )

    # --- jobs subcommand ---
    jobs_parser = subparsers.add_parser("jobs", help="List saved jobs")
    _add_common(jobs_parser)
    jobs_parser.add_argument(
        "--filter",
        default="all",
        choices=JOB_FILTERS,
        help="Which jobs to list (default: all)",
    )

    # --- favorite / submit subcommands ---
    for name, help_text in (
        ("favorite", "Toggle the favorite flag of a job"),
        ("submit", "Toggle the submitted flag of a job"),
    ):
        toggle_parser = subparsers.add_parser(name, help=help_text)
        _add_common(toggle_parser)
        toggle_parser.add_argument("job_id", type=int, help="Job id (see 'jobs')")

    # --- settings subcommand ---
    settings_parser = subparsers.add_parser(
        "settings", help="Show or update the search configuration",
    )
    _add_common(settings_parser)
    settings_parser.add_argument("--keywords", help="Search keywords")
    settings_parser.add_argument("--location", help="Location filter ('' for none)")
    settings_parser.add_argument(
        "--interval",
        type=int,
        choices=SEARCH_INTERVALS,
        help="Hours between scheduled searches",
    )
    settings_parser.add_argument(
        "--sources",
        help=(
            "Comma-separated sources ('' for all): "
            + ",".join(tag.value for tag in SourceTag)
        ),
    )
    active = settings_parser.add_mutually_exclusive_group()
    active.add_argument("--active", dest="is_active", action="store_true", default=None)
    active.add_argument("--inactive", dest="is_active", action="store_false")

    # --- status subcommand ---
    status_parser = subparsers.add_parser("status", help="Show which integrations are configured")
    _add_common(status_parser)

    # --- courses subcommand ---
    courses_parser = subparsers.add_parser("courses", help="Search the course catalog")
    _add_common(courses_parser)
    courses_parser.add_argument("--query", "-q", default="", help="Free-text terms (all must match)")
    courses_parser.add_argument(
        "--modality", default="all", choices=("all", *COURSE_MODALITIES),
    )
    courses_parser.add_argument("--level", default="all", choices=("all", *COURSE_LEVELS))

    # --- top-level flags when no subcommand is given ---
    parser.add_argument("--config", default="config/settings.yaml", help=argparse.SUPPRESS)
    parser.add_argument("--verbose", "-v", action="store_true", help=argparse.SUPPRESS)

    args = parser.parse_args(argv)

    # Default to search when no subcommand given
    if args.command is None:
        args.command = "search"
        args.if_due = False

    return args


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def load_provider(settings: Settings) -> LLMProvider | None:
    """The configured LLM provider, or None if the name is unknown."""
    try:
        return get_provider(settings.llm.provider)
    except ValueError as e:
        logger.warning("%s — LLM enrichment disabled", e)
        return None


async def run(settings: Settings, if_due: bool) -> None:
    """Run the full search pipeline against the persisted configuration."""
    conn = init_db(settings.database.path)
    config_store = SqliteConfigStore(conn, settings.search.model_dump())
    job_store = SqliteJobStore(conn)

    try:
        if if_due and not is_search_due(config_store.get()):
            print("Search not due yet.")
            return

        async with HttpSession(settings.http) as http:
            adapters = build_adapters(http, settings)
            result = await run_search(
                settings,
                config_store=config_store,
                job_store=job_store,
                adapters=adapters,
                provider=load_provider(settings),
            )
    finally:
        conn.close()

    if result.query_rewritten:
        print(f"Query rewritten: '{result.original_keywords}' -> '{result.query}'")
    print(f"\nSearch complete: {result.found} found, {result.saved} saved, "
          f"{result.created} new, {result.summarized} summarized.")


def cmd_jobs(settings: Settings, job_filter: str) -> None:
    conn = init_db(settings.database.path)
    jobs = SqliteJobStore(conn).list_jobs(job_filter)
    conn.close()

    print(f"{len(jobs)} jobs ({job_filter})")
    for job in jobs:
        flags = ("*" if job.is_favorite else " ") + ("S" if job.is_submitted else " ")
        print(f"  [{job.id:>4}] {flags} {job.title} — {job.company} ({job.location}) [{job.source}]")
        print(f"         {job.url}")
        if job.salary:
            print(f"         Salário: {job.salary}")
        if job.ai_summary:
            print(f"         {job.ai_summary}")


def cmd_toggle(settings: Settings, command: str, job_id: int) -> None:
    conn = init_db(settings.database.path)
    store = SqliteJobStore(conn)
    try:
        if command == "favorite":
            job = toggle_favorite(store, job_id)
            state = "favorited" if job.is_favorite else "unfavorited"
        else:
            job = toggle_submitted(store, job_id)
            state = "marked submitted" if job.is_submitted else "unmarked submitted"
    finally:
        conn.close()
    print(f"Job {job.id} {state}: {job.title}")


def cmd_settings(settings: Settings, args: argparse.Namespace) -> None:
    conn = init_db(settings.database.path)
    store = SqliteConfigStore(conn, settings.search.model_dump())

    updates: dict[str, object] = {}
    if args.keywords is not None:
        updates["keywords"] = args.keywords
    if args.location is not None:
        updates["location"] = args.location
    if args.interval is not None:
        updates["interval_hours"] = args.interval
    if args.sources is not None:
        updates["enabled_sources"] = args.sources
    if args.is_active is not None:
        updates["is_active"] = args.is_active

    try:
        config = store.upsert(**updates) if updates else store.get()
    finally:
        conn.close()

    sources = ", ".join(tag.value for tag in config.enabled_sources) or "all"
    print(f"Keywords:    {config.keywords or '(not set)'}")
    print(f"Location:    {config.location or '(any)'}")
    print(f"Interval:    {config.interval_hours}h")
    print(f"Sources:     {sources}")
    print(f"Active:      {'yes' if config.is_active else 'no'}")
    print(f"Last search: {config.last_search_at or 'never'}")
    print(f"Search due:  {'yes' if is_search_due(config) else 'no'}")


def cmd_status(settings: Settings) -> None:
    status = credential_status(load_provider(settings))
    print(f"LLM provider: {settings.llm.provider}")
    for name, ok in status.items():
        print(f"  {name:<11} {'configured' if ok else 'not configured'}")


def cmd_courses(query: str, modality: str, level: str) -> None:
    courses = search_courses(query, modality, level)
    stats = get_course_stats()

    print(f"{len(courses)} of {stats.total} courses")
    for course in courses:
        grade = course.mec_grade if course.mec_grade is not None else "-"
        print(f"  {course.program} — {course.institution}")
        print(f"    {course.level}, {course.modality}, {course.city}/{course.state}, "
              f"{course.duration}, nota {grade}, {course.price or 'preço não informado'}")
        print(f"    {course.url}")
    print(
        f"\nCatalog: {stats.presencial} presencial, {stats.ead} EAD, {stats.hibrido} híbrido; "
        f"{stats.mestrado} mestrado, {stats.pos_graduacao} pós, {stats.doutorado} doutorado; "
        f"{stats.recife} em Recife, {stats.com_bolsa} com bolsa",
    )


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    if args.command == "courses":
        cmd_courses(args.query, args.modality, args.level)
        return

    try:
        settings = Settings.from_yaml(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        if args.command == "jobs":
            cmd_jobs(settings, args.filter)
        elif args.command in ("favorite", "submit"):
            cmd_toggle(settings, args.command, args.job_id)
        elif args.command == "settings":
            cmd_settings(settings, args)
        elif args.command == "status":
            cmd_status(settings)
        else:
            # search (default)
            asyncio.run(run(settings, args.if_due))
    except (SearchNotConfiguredError, JobNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
