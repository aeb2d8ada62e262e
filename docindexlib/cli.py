#!/usr/bin/env python
"""
docindex - write a document index of a folder tree
===================================================

Usage:
    docindex ~/Documents                          # local folder -> document-index.xlsx
    docindex FOLDER_URL --source drive --credentials key.json
    docindex listing.json --source json --schema per-level --output index.csv
    docindex --settings settings.xlsx --settings-scope index

Settings from --settings are applied first; explicit flags override them.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import __version__
from . import settings as settings_store
from .config import DEFAULTS, IndexConfig, RenderSchema
from .core.adapter import NodeSource
from .errors import ConfigurationError, DocIndexError
from .planning import IndexPlan
from .writers.base import ReportWriter

logger = logging.getLogger("docindexlib")

SOURCES = ("local", "drive", "json")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docindex",
        description="Index a folder tree into a spreadsheet, one row per file or folder.",
    )
    parser.add_argument("root", nargs="?",
                        help="Root folder: local path, Drive URL/id, or JSON listing file")
    parser.add_argument("--source", choices=SOURCES, default="local",
                        help="Where the tree lives (default: local)")
    parser.add_argument("--credentials",
                        help="Service-account key file (required for --source drive)")
    parser.add_argument("--max-depth", type=int, default=None,
                        help=f"Deepest level to index (default: {DEFAULTS.max_depth})")
    parser.add_argument("--separator", default=None,
                        help=f"Path separator (default: {DEFAULTS.path_separator!r})")
    parser.add_argument("--no-files", dest="include_files", action="store_const", const=False,
                        default=None, help="Leave files out of the index")
    parser.add_argument("--no-folders", dest="include_folders", action="store_const", const=False,
                        default=None, help="Leave folders out of the index")
    parser.add_argument("--schema", choices=[s.value for s in RenderSchema], default=None,
                        help="Column layout (default: delimited)")
    parser.add_argument("--output", default="document-index.xlsx",
                        help="Output .xlsx or .csv file (default: document-index.xlsx)")
    parser.add_argument("--sheet", default=None,
                        help=f"Sheet name for xlsx output (default: {DEFAULTS.output_name!r})")
    parser.add_argument("--link-mode", choices=("hyperlink", "formula"), default="hyperlink",
                        help="How xlsx output stores links")
    parser.add_argument("--settings", help="xlsx workbook holding a key/type/value settings table")
    parser.add_argument("--settings-sheet", help="Sheet of the settings workbook (default: active)")
    parser.add_argument("--settings-scope",
                        help="Only use settings keys under this prefix, e.g. 'index'")
    parser.add_argument("--skip-errors", action="store_true",
                        help="Skip unreadable folders instead of aborting")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="More logging (-v info, -vv debug)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def flag_settings(args: argparse.Namespace) -> Dict[str, Any]:
    """Settings given explicitly on the command line."""
    given = {
        'root-folder-url': args.root,
        'max-depth': args.max_depth,
        'path-separator': args.separator,
        'include-files': args.include_files,
        'include-folders': args.include_folders,
        'output-sheet-name': args.sheet,
        'schema': args.schema,
    }
    return {key: value for key, value in given.items() if value is not None}


def load_config(args: argparse.Namespace) -> IndexConfig:
    """Merge the settings file (if any) under the command-line flags."""
    file_settings: Dict[str, Any] = {}
    if args.settings:
        file_settings = settings_store.from_workbook(args.settings, args.settings_sheet)
        if args.settings_scope:
            file_settings = settings_store.scope(file_settings, args.settings_scope)
    merged = settings_store.merge(file_settings, flag_settings(args))
    config = IndexConfig.from_settings(merged)
    config.skip_errors = args.skip_errors
    return config


def create_source(args: argparse.Namespace, config: IndexConfig) -> NodeSource:
    if args.source == "drive":
        if not args.credentials:
            raise ConfigurationError("credentials", "--credentials is required for --source drive")
        from .adapters.drive import DriveNodeSource, build_drive_service
        return DriveNodeSource(build_drive_service(args.credentials))

    if args.source == "json":
        from .adapters.memory import MemoryNodeSource
        path = Path(config.root)
        try:
            source = MemoryNodeSource.from_dict(json.loads(path.read_text(encoding="utf-8")))
        except (OSError, ValueError, KeyError) as e:
            raise ConfigurationError("root-folder-url", f"Cannot read listing '{path}': {e}") from e
        # The listing's own root replaces the file path as the reference
        config.root = source.roots[0].identifier()
        return source

    from .adapters.filesystem import FileSystemSource
    return FileSystemSource()


def create_writer(args: argparse.Namespace, config: IndexConfig) -> ReportWriter:
    output = Path(args.output)
    if output.suffix.lower() == ".csv":
        from .writers.csv_writer import CsvReportWriter
        return CsvReportWriter(output)
    from .writers.excel import ExcelReportWriter
    return ExcelReportWriter(output, config.output_name, link_mode=args.link_mode)


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = load_config(args)
        source = create_source(args, config)
        plan = IndexPlan(config, source)
        logger.debug("Plan: %s", plan.get_summary())
        with create_writer(args, config) as writer:
            report = plan.execute(writer)
    except DocIndexError as e:
        print(f"docindex: error: {e}", file=sys.stderr)
        return 1

    print(f"Indexed {report.row_count} entries of '{report.root_name}' into {writer.destination}")
    if not report.complete:
        print(f"WARNING: {len(report.skipped_folders)} folders could not be read; the index is incomplete",
              file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
