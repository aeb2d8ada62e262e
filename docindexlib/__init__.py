"""DocIndexLib - Document index generator for folder trees.

DocIndexLib walks a folder tree in a document store (a local directory,
Google Drive, or an in-memory listing) to a bounded depth and writes one
spreadsheet row per file or folder, each with a linked, human-readable path.

Quick start:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from docindexlib import generate_index
    from docindexlib.adapters import FileSystemSource
    from docindexlib.writers import ExcelReportWriter

    with ExcelReportWriter("index.xlsx", "Document Index") as writer:
        generate_index(FileSystemSource(), writer, "~/Documents", max_depth=3)
━━━━━━━━━━━━━━━━━━━━━━━━━━

The pieces (NodeSource, DepthFirstWalker, EntryCollector, RowRenderer,
ReportWriter) can also be used on their own.
"""

__version__ = "0.1.0"

from .errors import ConfigurationError, DestinationError, DocIndexError, TraversalError
from .core import (
    DepthFirstWalker,
    DocumentNode,
    EntryCollector,
    NodeKind,
    NodeSource,
    PathEntry,
    sort_entries,
    walk,
)
from .config import DEFAULTS, FilterConfig, IndexConfig, IndexDefaults, RenderSchema
from .error_policies import ContinueOnErrorsPolicy, ErrorPolicy, FailFastPolicy
from .rendering import (
    Cell,
    DelimitedPathRenderer,
    LinkSpan,
    PerLevelRenderer,
    RowRenderer,
    create_renderer,
    hyperlink_formula,
    render,
)
from .writers import CsvReportWriter, ExcelReportWriter, ReportWriter
from . import settings
from .planning import IndexPlan, IndexReport
from .api import collect, generate_index, render_index, run

__all__ = [
    "__version__",
    # Errors
    "DocIndexError",
    "TraversalError",
    "ConfigurationError",
    "DestinationError",
    # Core
    "DocumentNode",
    "NodeKind",
    "NodeSource",
    "PathEntry",
    "DepthFirstWalker",
    "walk",
    "EntryCollector",
    "sort_entries",
    # Configuration
    "DEFAULTS",
    "IndexDefaults",
    "IndexConfig",
    "FilterConfig",
    "RenderSchema",
    "settings",
    # Error handling
    "ErrorPolicy",
    "FailFastPolicy",
    "ContinueOnErrorsPolicy",
    # Rendering
    "Cell",
    "LinkSpan",
    "RowRenderer",
    "DelimitedPathRenderer",
    "PerLevelRenderer",
    "create_renderer",
    "hyperlink_formula",
    "render",
    # Writers
    "ReportWriter",
    "ExcelReportWriter",
    "CsvReportWriter",
    # Planning and API
    "IndexPlan",
    "IndexReport",
    "collect",
    "generate_index",
    "render_index",
    "run",
]
