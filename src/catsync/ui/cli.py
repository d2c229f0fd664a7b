from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from catsync.app import list_article_categories, write_article_categories
from catsync.config import get_category_tree_config
from catsync.domain.errors import CategoryAssignmentError
from catsync.domain.model import CategoryReference

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
    )


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Synchronise article category assignments")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    assign = subparsers.add_parser(
        "assign", help="Replace the category assignments of an article"
    )
    assign.add_argument("article_id", type=int, help="Article to update")
    assign.add_argument(
        "--id",
        dest="category_ids",
        type=int,
        action="append",
        default=[],
        help="Existing category id to assign (repeatable)",
    )
    assign.add_argument(
        "--path",
        dest="category_paths",
        action="append",
        default=[],
        help="Category path such as 'English->Cars->Mazda' (repeatable)",
    )
    assign.add_argument(
        "--separator",
        type=str,
        default=None,
        help="Path segment separator (defaults to config)",
    )
    assign.add_argument(
        "--clear",
        action="store_true",
        help="Allow an empty category list, removing every assignment",
    )

    show = subparsers.add_parser("show", help="List the categories assigned to an article")
    show.add_argument("article_id", type=int, help="Article to inspect")

    return parser.parse_args(list(argv))


def _build_references(args: argparse.Namespace) -> list[CategoryReference]:
    separator = args.separator or get_category_tree_config().path_separator
    references = [CategoryReference.by_id(category_id) for category_id in args.category_ids]
    references.extend(
        CategoryReference.parse(path, separator=separator) for path in args.category_paths
    )
    if not references and not args.clear:
        raise ValueError("No categories given; pass --clear to remove all assignments")
    return references


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args: argparse.Namespace
    references: list[CategoryReference] = []
    try:
        parsed_args = _parse_args(args_list)
        _configure_logging(verbose=parsed_args.verbose)
        if parsed_args.command == "assign":
            references = _build_references(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "assign":
            result = write_article_categories(parsed_args.article_id, references)
            log.info(
                "Article %s: added %s, removed %s, kept %s",
                result.article_id,
                list(result.added),
                list(result.removed),
                list(result.unchanged),
            )
        elif parsed_args.command == "show":
            category_ids = list_article_categories(parsed_args.article_id)
            log.info("Article %s is assigned to %s", parsed_args.article_id, category_ids)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except CategoryAssignmentError:
        log.exception("Could not update categories")
        sys.exit(1)
    except Exception:
        log.exception("Fatal error during category sync")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
