#!/usr/bin/env python3
"""
Command-line front end for the gospel library.

Examples:
    gospel-library parse "Alma 32:27-28"
    gospel-library scripture "D&C 76:22"
    gospel-library talks --speaker "Elder Holland" --conference "Oct 2022"
"""
import argparse
import logging
import sys
from typing import Callable, List, Optional

from .config_loader import load_config_from_env
from .exceptions import GospelLibraryError
from .library_store import SQLiteLibraryStore
from .resolution import parse_reference, resolve_book
from .service import GospelLibraryService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gospel-library",
        description="Resolve scripture references and search the gospel library",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_cmd = subparsers.add_parser("parse", help="Parse a scripture reference (no database needed)")
    parse_cmd.add_argument("reference", help="e.g. 'John 3:16', 'Omni 7', 'D&C 76'")

    book_cmd = subparsers.add_parser("book", help="Resolve a book name or abbreviation (no database needed)")
    book_cmd.add_argument("name", help="e.g. '1 Ne', 'Psalm', 'Levitikus'")

    scripture_cmd = subparsers.add_parser("scripture", help="Fetch a verse or verse range")
    scripture_cmd.add_argument("reference")

    search_cmd = subparsers.add_parser("search", help="Search scripture text by keyword")
    search_cmd.add_argument("query")
    search_cmd.add_argument("--limit", type=int, default=None)

    subparsers.add_parser("random", help="Show a random verse")

    talks_cmd = subparsers.add_parser("talks", help="Search conference talks")
    talks_cmd.add_argument("--id", type=int, default=None, dest="talk_id")
    talks_cmd.add_argument("--query", default=None)
    talks_cmd.add_argument("--speaker", default=None)
    talks_cmd.add_argument("--conference", default=None)
    talks_cmd.add_argument("--limit", type=int, default=None)

    return parser


def run(args: argparse.Namespace, service_factory: Callable[[], GospelLibraryService]) -> List[str]:
    """Execute one parsed command and return the text blocks to print."""
    if args.command == "parse":
        parsed = parse_reference(args.reference)
        return [parsed.citation if parsed else "Could not understand the reference."]

    if args.command == "book":
        book = resolve_book(args.name)
        return [book if book else "Unknown book."]

    service = service_factory()

    if args.command == "scripture":
        return service.get_exact_scripture(args.reference)
    if args.command == "search":
        return service.search_scriptures_by_keyword(args.query, args.limit)
    if args.command == "random":
        return service.get_random_scripture()
    if args.command == "talks":
        return service.search_conference_talks(
            talk_id=args.talk_id,
            query=args.query,
            speaker=args.speaker,
            conference=args.conference,
            limit=args.limit,
        )

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config_from_env()
    except GospelLibraryError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )

    # Opened lazily on first query
    store = SQLiteLibraryStore(config.db_path)
    try:
        blocks = run(args, lambda: GospelLibraryService(store, config))
    except GospelLibraryError as e:
        logger.error(f"{args.command} failed: {e}")
        return 1
    finally:
        store.close()

    print("\n\n".join(blocks))
    return 0


if __name__ == "__main__":
    sys.exit(main())
