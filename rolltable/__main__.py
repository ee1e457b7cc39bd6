"""
rolltable CLI entry point.

Provides command-line access to dice rolling and table draws.
"""

import argparse
import sys
from pathlib import Path

from rolltable import __version__
from rolltable.config.logging import get_logger, setup_logging
from rolltable.config.settings import Settings, load_settings
from rolltable.engine.base import MatchMode, TableBook, TableList, TagSelection
from rolltable.engine.book import BookLoadError, load_book
from rolltable.engine.components import DrawComponents
from rolltable.engine.filters import collect_tags, filter_entries, search_entries


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="rolltable",
        description="Weighted random tables with tag filters, pools and dice notation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"rolltable {__version__}",
    )

    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Path to .env file (default: .env in current directory)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override logging level from config",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Config command
    subparsers.add_parser(
        "config",
        help="Show current configuration",
    )

    # Roll command
    roll_parser = subparsers.add_parser(
        "roll",
        help="Roll the dice notation embedded in a piece of text",
    )
    roll_parser.add_argument(
        "text",
        help='Text containing dice notation, e.g. "Gold: (3d6)x10"',
    )
    roll_parser.add_argument(
        "--clean",
        action="store_true",
        default=None,
        help="Show only the rolled totals, without the notation",
    )

    # Draw command
    draw_parser = subparsers.add_parser(
        "draw",
        help="Draw from a list in a table book",
    )
    draw_parser.add_argument("list_name", metavar="LIST", help="Name of the list to draw from")
    _add_book_argument(draw_parser)
    _add_tag_arguments(draw_parser)
    draw_parser.add_argument(
        "--clean",
        action="store_true",
        default=None,
        help="Show only the rolled totals, without the notation",
    )
    draw_parser.add_argument(
        "--count",
        type=int,
        default=1,
        help="Number of draws (default: 1)",
    )

    # Tags command
    tags_parser = subparsers.add_parser(
        "tags",
        help="List the tags used in a list",
    )
    tags_parser.add_argument("list_name", metavar="LIST", help="Name of the list")
    _add_book_argument(tags_parser)

    # Show command
    show_parser = subparsers.add_parser(
        "show",
        help="Show the entries of a list",
    )
    show_parser.add_argument("list_name", metavar="LIST", help="Name of the list")
    _add_book_argument(show_parser)
    _add_tag_arguments(show_parser)
    show_parser.add_argument(
        "--search",
        default=None,
        help="Only show entries whose name, tags or reference contain this text",
    )

    return parser


def _add_book_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--book",
        type=Path,
        default=None,
        help="JSON table book (default: TABLES_PATH from config)",
    )


def _add_tag_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--tag",
        dest="tags",
        action="append",
        default=[],
        help="Filter by tag; repeat for several tags",
    )
    parser.add_argument(
        "--mode",
        choices=["OR", "AND"],
        type=str.upper,
        default=None,
        help="How several --tag filters combine (default: DRAW__MATCH_MODE from config)",
    )


def _load_table(args, settings: Settings) -> tuple[TableBook, TableList] | None:
    """Load the book named on the command line and look up the requested list."""
    logger = get_logger(__name__)

    book_path = args.book or settings.tables_path
    if book_path is None:
        logger.error("No table book given. Pass --book or set TABLES_PATH in your .env file.")
        return None

    try:
        book = load_book(book_path, default_weight=settings.draw.default_weight)
    except BookLoadError as e:
        logger.error(str(e))
        return None

    table = book.get(args.list_name)
    if table is None:
        logger.error(
            f"List {args.list_name!r} not found. Available lists: "
            f"{', '.join(book.names) or '(none)'}"
        )
        return None
    return book, table


def _selection(args, settings: Settings) -> TagSelection:
    mode = args.mode or settings.draw.match_mode
    return TagSelection(tags=frozenset(args.tags), mode=MatchMode(mode))


def cmd_config(settings: Settings) -> int:
    """Show current configuration."""
    logger = get_logger(__name__)

    logger.info("\n=== rolltable Configuration ===\n")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Log Level: {settings.log_level}")
    logger.info(f"Log File: {settings.log_file or 'None (console only)'}")
    logger.info(f"Table Book: {settings.tables_path or 'None (pass --book)'}")
    logger.info("\nDraw:")
    logger.info(f"  Default Weight: {settings.draw.default_weight}")
    logger.info(f"  Clean Results: {settings.draw.clean_results}")
    logger.info(f"  Match Mode: {settings.draw.match_mode}")
    logger.info(f"  Max Pool Depth: {settings.draw.max_pool_depth}")
    logger.info(f"  Seed: {settings.draw.seed if settings.draw.seed is not None else 'None (random)'}")

    return 0


def cmd_roll(args, settings: Settings) -> int:
    """Evaluate dice notation in free text."""
    evaluator = DrawComponents(settings.draw).create_evaluator()
    clean = settings.draw.clean_results if args.clean is None else args.clean
    print(evaluator.evaluate(args.text, clean_results=clean))
    return 0


def cmd_draw(args, settings: Settings) -> int:
    """
    Draw from a list.

    Args:
        args: Parsed arguments (list_name, book, tags, mode, clean, count)
        settings: Application settings

    Returns:
        Exit code (0 for success, 1 for error)
    """
    logger = get_logger(__name__)

    if args.count < 1:
        logger.error("--count must be at least 1")
        return 1

    loaded = _load_table(args, settings)
    if loaded is None:
        return 1
    book, table = loaded

    engine = DrawComponents(settings.draw).create_engine()
    selection = _selection(args, settings)

    for _ in range(args.count):
        result = engine.draw(table, book.lists, selection=selection, clean_results=args.clean)
        if result is None:
            print(f"Nothing to draw from {table.name!r} with the current filters.")
            return 0

        print(result.text)
        if result.redirects:
            logger.info(f"  via {' -> '.join(result.redirects)} -> {result.list_name}")

    return 0


def cmd_tags(args, settings: Settings) -> int:
    """Print the tag cloud of a list."""
    loaded = _load_table(args, settings)
    if loaded is None:
        return 1
    _, table = loaded

    tags = collect_tags(table.entries)
    if not tags:
        print(f"No tags in {table.name!r}.")
        return 0

    for tag in tags:
        print(tag)
    return 0


def cmd_show(args, settings: Settings) -> int:
    """Print the entries of a list, filtered by tags and search text."""
    loaded = _load_table(args, settings)
    if loaded is None:
        return 1
    _, table = loaded

    selection = _selection(args, settings)
    entries = filter_entries(table.entries, selection.tags, selection.mode)
    entries = search_entries(entries, args.search)

    print(f"\n=== {table.name} ({len(entries)} of {len(table.entries)} entries) ===")
    for entry in entries:
        tags = f"  [{entry.tags}]" if entry.tags else ""
        print(f"{entry.weight:>4}  {entry.display_text}{tags}")
    return 0


def main() -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    # Load settings
    try:
        settings = load_settings(env_file=args.env_file)
    except Exception as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    # Override log level if specified
    if args.log_level:
        settings.log_level = args.log_level

    # Setup logging
    setup_logging(settings)

    # Execute command
    if args.command == "config":
        return cmd_config(settings)
    elif args.command == "roll":
        return cmd_roll(args, settings)
    elif args.command == "draw":
        return cmd_draw(args, settings)
    elif args.command == "tags":
        return cmd_tags(args, settings)
    elif args.command == "show":
        return cmd_show(args, settings)
    else:
        # Default: show help
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
