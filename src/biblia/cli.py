#!/usr/bin/env python3
"""
CLI for the Biblia API client.

Usage:
    python -m biblia names                            # List bible ids
    python -m biblia passage "John 3:16" "Ps 23"      # Fetch passages in parallel
    python -m biblia --bible kjv search bread --limit 5
    python -m biblia compare "Ge 3:4" "Ge 3:1-10"

The API key is read from --key or the BIBLIA_API_KEY environment variable.
"""

import argparse
import json
import logging
import os
import sys
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Optional

import requests

from .client import Biblia, BIBLE_VERSIONS, PASSAGE_STYLES, DEFAULT_BIBLE
from .models import Passage


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration
# =============================================================================

API_KEY_ENV = "BIBLIA_API_KEY"
BIBLE_ENV = "BIBLIA_BIBLE"
DEFAULT_WORKERS = 5


def print_json(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def fail(message: str) -> int:
    print(f"❌ {message}", file=sys.stderr)
    return 1


# =============================================================================
# Parallel Passage Fetching
# =============================================================================

def fetch_passages(
    client: Biblia,
    passages: list[str],
    options: dict,
    max_workers: int = DEFAULT_WORKERS,
) -> list[tuple[str, Optional[dict], Optional[Exception]]]:
    """
    Fetch several passages concurrently.

    Returns (passage, result, error) tuples in the order the passages were
    given. Exactly one of result and error is set.
    """
    outcomes: dict[int, tuple[str, Optional[dict], Optional[Exception]]] = {}
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(client.get_passage, passage, dict(options)): (i, passage)
            for i, passage in enumerate(passages)
        }

        for future in as_completed(futures):
            i, passage = futures[future]
            try:
                outcomes[i] = (passage, future.result(), None)
            except (requests.RequestException, ValueError) as e:
                logger.debug("passage %s failed: %s", passage, e)
                outcomes[i] = (passage, None, e)

    return [outcomes[i] for i in range(len(passages))]


# =============================================================================
# Commands
# =============================================================================

def cmd_bibles(client: Biblia, args) -> int:
    print_json(client.get_bibles(
        query=args.query, strict_query=args.strict or None, start=args.start, limit=args.limit,
    ))
    return 0


def cmd_names(client: Biblia, args) -> int:
    for name in client.get_bible_names():
        print(name)
    return 0


def cmd_passage(client: Biblia, args) -> int:
    options = {
        "style": args.style,
        "footnotes": args.footnotes or None,
        "citation": args.citation or None,
        "html": args.html or args.plain,
    }
    failed = 0

    for passage, result, error in fetch_passages(client, args.passages, options, args.workers):
        if error is not None:
            failed += 1
            print(f"❌ {passage}: {error}", file=sys.stderr)
            continue

        if args.plain:
            print(f"📖 {passage}")
            print(Passage.from_dict(result).plain_text().strip())
            print()
        else:
            print_json(result)

    return 1 if failed else 0


def cmd_parse(client: Biblia, args) -> int:
    print_json(client.parse_text(args.text, style=args.style))
    return 0


def cmd_scan(client: Biblia, args) -> int:
    options = {"tagChapters": False} if args.no_tag_chapters else None
    print_json(client.scan_text(args.text, options))
    return 0


def cmd_compare(client: Biblia, args) -> int:
    print_json(client.compare(args.first, args.second))
    return 0


def cmd_search(client: Biblia, args) -> int:
    print_json(client.search(
        args.query,
        mode=args.mode,
        limit=args.limit,
        preview=args.preview,
        sort=args.sort,
        passages=args.passages,
        start=args.start,
    ))
    return 0


# =============================================================================
# CLI Entry Point
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="biblia",
        description="Query the Biblia Bible API."
    )
    parser.add_argument(
        "--key", "-k",
        type=str,
        default=os.getenv(API_KEY_ENV),
        help=f"Biblia API key (default: ${API_KEY_ENV})"
    )
    parser.add_argument(
        "--bible", "-b",
        choices=BIBLE_VERSIONS,
        default=os.getenv(BIBLE_ENV, DEFAULT_BIBLE),
        help=f"Translation for passage and search (default: ${BIBLE_ENV} or {DEFAULT_BIBLE})"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log request URLs"
    )

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("bibles", help="List available bibles")
    p.add_argument("--query", "-q", help="Filter bibles by text")
    p.add_argument("--strict", action="store_true", help="Match the query strictly")
    p.add_argument("--start", type=int)
    p.add_argument("--limit", type=int)
    p.set_defaults(func=cmd_bibles)

    p = sub.add_parser("names", help="List bible identifiers")
    p.set_defaults(func=cmd_names)

    p = sub.add_parser("passage", help="Fetch passage content")
    p.add_argument("passages", nargs="+", metavar="PASSAGE")
    p.add_argument("--style", choices=PASSAGE_STYLES)
    p.add_argument("--html", action="store_true", help="Request HTML content")
    p.add_argument("--plain", action="store_true", help="Print HTML content as plain text")
    p.add_argument("--footnotes", action="store_true")
    p.add_argument("--citation", action="store_true")
    p.add_argument(
        "--workers", "-w",
        type=int,
        default=DEFAULT_WORKERS,
        help=f"Number of parallel requests (default: {DEFAULT_WORKERS})"
    )
    p.set_defaults(func=cmd_passage)

    p = sub.add_parser("parse", help="Parse text as Bible references")
    p.add_argument("text")
    p.add_argument("--style", choices=["short", "medium", "long"])
    p.set_defaults(func=cmd_parse)

    p = sub.add_parser("scan", help="Find references in text")
    p.add_argument("text")
    p.add_argument("--no-tag-chapters", action="store_true",
                   help="Ignore chapter references without a verse")
    p.set_defaults(func=cmd_scan)

    p = sub.add_parser("compare", help="Compare two references")
    p.add_argument("first")
    p.add_argument("second")
    p.set_defaults(func=cmd_compare)

    p = sub.add_parser("search", help="Search the current translation")
    p.add_argument("query")
    p.add_argument("--mode", choices=["verse", "fuzzy"])
    p.add_argument("--limit", type=int)
    p.add_argument("--preview", choices=["none", "text", "html"])
    p.add_argument("--sort", choices=["relevance", "passage"])
    p.add_argument("--passages", help='Passages to search in, e.g. "Matthew-John"')
    p.add_argument("--start", type=int)
    p.set_defaults(func=cmd_search)

    return parser


def main(argv: Optional[list[str]] = None, session: Optional[requests.Session] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.key:
        parser.error(f"an API key is required (--key or ${API_KEY_ENV})")

    with Biblia(args.key, args.bible, session=session) as client:
        try:
            return args.func(client, args)
        except (requests.RequestException, ValueError, KeyError) as e:
            return fail(f"{args.command} failed: {e}")


if __name__ == "__main__":
    sys.exit(main())
