#!/usr/bin/env python3
"""
gx - interactive front end for everyday git operations
"""

import argparse
import logging
import sys
from pathlib import Path

from gx.commands import checkout, log
from gx.config.settings import Settings
from gx.git_backend.errors import GxError

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        prog="gx",
        description="gx - interactive front end for everyday git operations",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Settings file (default: ~/.config/gx/settings.json)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    log_parser = subparsers.add_parser("log", help="Browse the commit graph")
    log_parser.add_argument(
        "-n",
        "--limit",
        type=int,
        default=None,
        help="Maximum number of commits to load",
    )

    checkout_parser = subparsers.add_parser(
        "checkout",
        aliases=["co"],
        help="Switch to a branch or commit",
    )
    checkout_parser.add_argument(
        "query",
        nargs="?",
        help="Branch, commit, or tag to check out (fuzzy); omit to pick interactively",
    )

    return parser.parse_args(argv)


def setup_logging(settings: Settings) -> None:
    """Log to the configured file so the full-screen UI is left alone"""
    level = getattr(logging, str(settings.get("logging.level", "WARNING")).upper(), logging.WARNING)
    log_file = settings.get("logging.file", "")
    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
    else:
        logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    settings = Settings(args.config)
    setup_logging(settings)

    try:
        if args.command == "log":
            log.run(settings, limit=args.limit)
        else:
            checkout.run(settings, query=args.query)
    except GxError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        if e.help:
            print(f"help: {e.help}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
