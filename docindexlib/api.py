"""High-level API for DocIndexLib.

This module provides simple, functional interfaces for the common cases.
These functions wrap the IndexPlan / EntryCollector / RowRenderer objects
for callers who just want a result.
"""

from typing import List, Optional, Union

from .config import DEFAULTS, FilterConfig, IndexConfig, RenderSchema, parse_schema
from .core.adapter import NodeSource
from .core.collector import EntryCollector
from .core.entry import PathEntry
from .core.node import DocumentNode
from .error_policies import ErrorPolicy
from .planning import IndexPlan, IndexReport
from .rendering import Row, render
from .writers.base import ReportWriter


def collect(source: NodeSource,
            root: DocumentNode,
            max_depth: int = DEFAULTS.max_depth,
            include_files: bool = True,
            include_folders: bool = True,
            error_policy: Optional[ErrorPolicy] = None) -> List[PathEntry]:
    """Collect the sorted entries below ``root``.

    Example:
        >>> source = FileSystemSource()
        >>> root = source.resolve("~/Documents")
        >>> for entry in collect(source, root, max_depth=2):
        ...     print(entry.joined_path(" > "))
    """
    collector = EntryCollector(source, error_policy)
    return collector.collect(root, max_depth, include_files, include_folders)


def render_index(source: NodeSource,
                 root: DocumentNode,
                 max_depth: int = DEFAULTS.max_depth,
                 include_files: bool = True,
                 include_folders: bool = True,
                 path_separator: str = DEFAULTS.path_separator,
                 schema: Union[RenderSchema, str] = RenderSchema.DELIMITED) -> List[Row]:
    """Collect and render in one call, without writing anywhere."""
    entries = collect(source, root, max_depth, include_files, include_folders)
    return render(entries, path_separator, schema)


def generate_index(source: NodeSource,
                   writer: ReportWriter,
                   root: Union[str, DocumentNode],
                   max_depth: int = DEFAULTS.max_depth,
                   path_separator: str = DEFAULTS.path_separator,
                   include_files: bool = True,
                   include_folders: bool = True,
                   schema: Union[RenderSchema, str] = RenderSchema.DELIMITED,
                   skip_errors: bool = False) -> IndexReport:
    """Index ``root`` and write the report through ``writer``.

    ``root`` may be a node or a reference (URL / id / path) the source can
    resolve. The writer is not closed; use it as a context manager.

    Example:
        >>> source = FileSystemSource()
        >>> with ExcelReportWriter("index.xlsx", "Document Index") as writer:
        ...     report = generate_index(source, writer, "~/Documents")
        >>> print(f"{report.row_count} rows")
    """
    reference = root.identifier() if isinstance(root, DocumentNode) else root
    config = IndexConfig(
        root=reference,
        max_depth=max_depth,
        filter=FilterConfig(include_files, include_folders),
        path_separator=path_separator,
        schema=parse_schema(schema),
        skip_errors=skip_errors,
    )
    plan = IndexPlan(config, source)
    return plan.execute(writer, root if isinstance(root, DocumentNode) else None)


def run(config: IndexConfig, source: NodeSource, writer: ReportWriter) -> IndexReport:
    """Execute a prepared IndexConfig."""
    return IndexPlan(config, source).execute(writer)
