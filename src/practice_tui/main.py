#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

from .app import PracticeApp
from .config import (
    PROGRESS_FILE,
    DatasetCatalog,
    build_catalog,
    load_config,
    setup_logging,
)
from .errors import ParseError
from .fetcher import Fetcher
from .progress import ProgressStore
from .sources.manager import get_cache, get_source
from .storage import JsonFileStorage
from .themes import load_themes
from .widgets import progress_text

logger = logging.getLogger("practice")


def build_parser(themes: List[str]) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Coding practice question browser")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--theme",
        type=str,
        help=f"Set theme for this run. Available: {', '.join(themes)}",
    )
    parser.add_argument(
        "--progress-file",
        default=PROGRESS_FILE,
        help="Where progress is stored (default: %(default)s)",
    )

    commands = parser.add_subparsers(dest="command")
    export = commands.add_parser("export", help="Write progress to a JSON file")
    export.add_argument("path", help="Destination file, '-' for stdout")
    imp = commands.add_parser("import", help="Replace progress with an exported file")
    imp.add_argument("path", help="File produced by 'export'")
    clear = commands.add_parser("clear", help="Reset progress")
    clear.add_argument("dataset", nargs="?", help="Only reset this dataset")
    commands.add_parser("stats", help="Show progress per dataset")
    commands.add_parser("clear-cache", help="Delete cached http datasets")
    return parser


def run_command(
    args: argparse.Namespace,
    progress: ProgressStore,
    catalog: DatasetCatalog,
    config: Optional[Dict[str, Any]] = None,
) -> int:
    if args.command == "export":
        data = progress.export_json()
        if args.path == "-":
            print(data)
        else:
            with open(args.path, "w", encoding="utf-8") as f:
                f.write(data + "\n")
            print(f"Progress exported to {args.path}")
        return 0

    if args.command == "import":
        try:
            with open(args.path, "r", encoding="utf-8") as f:
                progress.import_snapshot(f.read())
        except ParseError as e:
            print(f"Failed to import progress. Please check the file format: {e}", file=sys.stderr)
            return 1
        print(f"Progress imported from {args.path}")
        return 0

    if args.command == "clear":
        if args.dataset and args.dataset not in catalog:
            print(f"Unknown dataset: {args.dataset}", file=sys.stderr)
            return 1
        progress.clear(args.dataset)
        print(f"Progress cleared for {args.dataset or 'all datasets'}")
        return 0

    if args.command == "stats":
        for dataset in catalog:
            stats = progress.get_category_stats(dataset.id, dataset.total)
            print(f"{dataset.label:<24} {progress_text(stats):>18}  ({stats.attempted} attempted)")
        return 0

    if args.command == "clear-cache":
        get_cache(config or {}).clear()
        print("Cache cleared")
        return 0

    raise ValueError(f"Unknown command: {args.command}")


# --- Entrypoint ---
def main(argv: Optional[List[str]] = None) -> int:
    config: Dict[str, Any] = load_config()
    available_themes = load_themes(config)
    args = build_parser(list(available_themes)).parse_args(argv)

    debug_path = setup_logging(args.debug)
    if debug_path:
        print(f"Debug logging enabled: {debug_path}", file=sys.stderr)

    try:
        catalog = build_catalog(config)
    except ValueError as e:
        print(f"Invalid dataset configuration: {e}", file=sys.stderr)
        return 1
    progress = ProgressStore(JsonFileStorage(args.progress_file), catalog)

    if args.command:
        try:
            return run_command(args, progress, catalog, config)
        except OSError as e:
            logger.error("Command %s failed: %s", args.command, e)
            print(f"{args.command} failed: {e}", file=sys.stderr)
            return 1

    theme_name = args.theme or config.get("theme")
    if theme_name and theme_name not in available_themes:
        print(f"Theme '{theme_name}' not found, using the default.", file=sys.stderr)
        theme_name = None
    logger.info("Using theme: %s", theme_name)

    try:
        fetcher = Fetcher(get_source(config), catalog)
        app = PracticeApp(progress, fetcher, catalog, theme=theme_name, config=config)
        app.run()
    except Exception as e:
        logger.exception("Application crashed: %s", e)
        print(f"Application crashed: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
