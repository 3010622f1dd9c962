"""
wiki-path CLI - find a chain of links between two Wikipedia articles.

Usage:
    wiki-path "Albert Einstein" "Pizza"
    wiki-path -v Cat Dog
    wiki-path -t $TOKEN --max-depth 4 "Python (programming language)" Philosophy

Without a token, requests are limited to 500 per hour (one every 7.2s).
A personal API token raises this to 5000 per hour
(https://api.wikimedia.org/wiki/Authentication#Personal_API_tokens).
"""

from __future__ import annotations

import argparse
import logging
import sys

from wiki_path.config import (
    DEFAULT_FETCH_RETRIES,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_WORKERS,
    LOG_DATE_FORMAT,
    LOG_FORMAT,
)
from wiki_path.errors import WikiPathError
from wiki_path.search import PathFinder, PathNode, SearchConfig
from wiki_path.wikipedia import LinkSource, WikiLinkSource, normalize_title

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="wiki-path",
        description="Find a path of links between two Wikipedia articles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument("start", help="Starting article title")
    parser.add_argument("end", help="Target article title")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Print every article as it is explored, with its depth",
    )
    parser.add_argument(
        "--token",
        "-t",
        type=str,
        default=None,
        help="(Optional) Wikimedia API token to increase the rate limit",
    )
    parser.add_argument(
        "--max-depth",
        "-d",
        type=int,
        default=None,
        metavar="DEPTH",
        help="Do not fetch articles more than DEPTH clicks from the start",
    )
    parser.add_argument(
        "--workers",
        "-w",
        type=int,
        default=DEFAULT_MAX_WORKERS,
        help=f"Concurrent explorer threads (default: {DEFAULT_MAX_WORKERS})",
    )
    parser.add_argument(
        "--external",
        "-e",
        action="store_true",
        help='Also follow links in the "External links" section',
    )
    parser.add_argument(
        "--retries",
        type=int,
        default=DEFAULT_FETCH_RETRIES,
        help=f"Retries for a failed fetch before giving up (default: {DEFAULT_FETCH_RETRIES})",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Give up after this many seconds (default: never)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=DEFAULT_LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {DEFAULT_LOG_LEVEL})",
    )

    return parser.parse_args(argv)


def print_node(node: PathNode) -> None:
    print(f"{node.identifier} {node.depth}", flush=True)


def main(argv: list[str] | None = None, link_source: LinkSource | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )

    start = normalize_title(args.start)
    end = normalize_title(args.end)

    if link_source is None:
        link_source = WikiLinkSource(token=args.token, include_external=args.external)

    try:
        config = SearchConfig(
            request_interval=link_source.request_interval,
            max_workers=args.workers,
            max_depth=args.max_depth,
            fetch_retries=args.retries,
            timeout=args.timeout,
            on_explore=print_node if args.verbose else None,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    logger.debug(f"Using {link_source!r}, {config.request_interval:.2f}s between requests")

    try:
        result = PathFinder(link_source, config).find(start, end)
    except KeyboardInterrupt:
        print("\nSearch interrupted by user", file=sys.stderr)
        return 130
    except WikiPathError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if result is None:
        print(f"No path found from '{start}' to '{end}'", file=sys.stderr)
        return 1

    print(f"Path: {result.path}")
    print(f"Length: {result.length}")
    print(f"Took {result.elapsed:.2f}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
