from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from household_directory.config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from household_directory.excel.reader import DecodeError
from household_directory.logging.init import log_summary, set_level, setup_logging
from household_directory.models.config_models import HighlightConfig
from household_directory.models.search_result import SearchHit
from household_directory.services.details import build_details
from household_directory.services.normalizer import current_date
from household_directory.services.search import highlight
from household_directory.services.session import DirectorySession, SessionError
from household_directory.services.store import JsonRowStore
from household_directory.services.summary import render_summary_body

"""CLI entrypoint.

Commands:
- import FILE   decode a spreadsheet, persist its rows, print a SUMMARY line
- search QUERY  list matching members with the query highlighted
- show QUERY    print the detail view of every matching member

search/show rebuild the directory from the persisted rows on every run, so
birthday and anniversary countdowns are always relative to today.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_NO_DATA = 2

NO_RESULTS = "No results found"


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv (.env values win over the process env)."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="household-directory", description="Searchable household directory")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument(
        "--config", default=str(DEFAULT_CONFIG_PATH), help=f"Config file (default: {DEFAULT_CONFIG_PATH})"
    )
    sub = p.add_subparsers(dest="command", required=True)
    imp = sub.add_parser("import", help="Import a spreadsheet (.xlsx/.xls/.csv)")
    imp.add_argument("file", help="Spreadsheet to import")
    srch = sub.add_parser("search", help="Search members by name, family members or house name")
    srch.add_argument("query", nargs="?", default="", help="Text to search for")
    show = sub.add_parser("show", help="Show details of matching members")
    show.add_argument("query", nargs="?", default="", help="Text to search for")
    return p.parse_args(argv)


def _format_hit(hit: SearchHit, query: str, markers: HighlightConfig) -> str:
    def mark(text: str) -> str:
        return highlight(text, query, markers.open, markers.close, escape=False)

    r = hit.record
    line = mark(r.name)
    if r.family_name:
        line += f" | {mark(r.family_name)}"
    if r.family_members_raw:
        line += f" | {mark(r.family_members_raw)}"
    return line


def _print_details(hit: SearchHit) -> None:
    d = build_details(hit.record)
    print(d.name)
    print(f"  Family / House Name: {d.family_name}")
    print("  Relations:")
    if d.relations:
        for relation, member in d.relations:
            print(f"    {relation}: {member}")
    else:
        print("    No family listed")
    dob = f"{d.dob} ({d.dob_countdown})" if d.dob_countdown else d.dob
    ann = f"{d.anniversary} ({d.anniversary_countdown})" if d.anniversary_countdown else d.anniversary
    print(f"  Birthday: {dob}")
    print(f"  Anniversary: {ann}")
    print(f"  Contact Number: {d.contact}")
    print(f"  Address: {d.address}")
    print(f"  Google Maps Link: {d.map_link}")


def _cmd_import(session: DirectorySession, file: Path, logger) -> int:
    try:
        result = session.ingest(file)
    except DecodeError as e:
        logger.error(f"import: {e}")
        return EXIT_FATAL
    except OSError as e:
        logger.error(f"import: cannot save rows: {e}")
        return EXIT_FATAL
    log_summary(render_summary_body(result))
    return EXIT_SUCCESS


def _cmd_query(session: DirectorySession, command: str, query: str, markers: HighlightConfig, logger) -> int:
    session.restore()
    try:
        session.require_data()
    except SessionError as e:
        logger.error(str(e))
        return EXIT_NO_DATA

    result = session.query(query)
    if result.is_blank_query:
        logger.debug("blank query -> no output")
        return EXIT_SUCCESS
    if not result.has_matches:
        print(NO_RESULTS)
        return EXIT_SUCCESS
    for hit in result.hits:
        if command == "show":
            _print_details(hit)
        else:
            print(_format_hit(hit, result.query, markers))
    logger.debug(f"query={result.query!r} matches={len(result)}")
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # 空リスト [] はそのまま使う (None のときのみ sys.argv を読む)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    try:
        cfg = load_config(Path(args.config))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        set_level("DEBUG")
        logger.debug("debug mode enabled")

    store = JsonRowStore(Path(cfg.store_path))
    session = DirectorySession(store, today=lambda: current_date(cfg.timezone), sheet=cfg.sheet)

    if args.command == "import":
        return _cmd_import(session, Path(args.file), logger)
    return _cmd_query(session, args.command, args.query, cfg.highlight, logger)
