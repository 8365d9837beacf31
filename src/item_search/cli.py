"""CLI entry point for item-search."""

import argparse
import logging
import sys

import item_search.io.logging_setup
import item_search.io.settings
from item_search.app.catalog_source import FileCatalogSource
from item_search.tui.app import ItemSearchApp

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Live fuzzy search over an item catalog")
    parser.add_argument(
        "catalog",
        nargs="?",
        default=None,
        help="Catalog JSON file (default: catalog_path from settings)",
    )
    parser.add_argument(
        "--query",
        type=str,
        default=None,
        help="Seed the search box with this query",
    )
    parser.add_argument(
        "--debounce-ms",
        type=int,
        default=None,
        help="Quiet interval before the query is reported (default: 300)",
    )
    parser.add_argument(
        "--public-url",
        type=str,
        default=None,
        help="Prefix for the placeholder icon path",
    )
    parser.add_argument(
        "--placeholder",
        type=str,
        default=None,
        help="Placeholder text for the search box",
    )
    parser.add_argument(
        "--no-dropdown",
        action="store_true",
        default=False,
        help="Hide the result list (query reporting only)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    runtime = item_search.io.logging_setup.configure(stream=False)

    settings = item_search.io.settings.resolved(
        {
            "catalog_path": args.catalog,
            "debounce_ms": args.debounce_ms,
            "public_url": args.public_url,
            "placeholder": args.placeholder,
        }
    )
    catalog_path = settings["catalog_path"]
    if not catalog_path:
        print("item-search: no catalog given and no catalog_path in settings", file=sys.stderr)
        return 2

    source = FileCatalogSource(catalog_path)
    source.load()
    logger.info("item-search starting (log file: %s)", runtime.file_path)

    app = ItemSearchApp(
        source,
        default_value=args.query,
        placeholder=item_search.io.settings.placeholder(settings),
        show_dropdown=not args.no_dropdown,
        debounce_interval=item_search.io.settings.debounce_seconds(settings),
        public_url=settings["public_url"] or "",
    )
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
