"""Execution planning for DocIndexLib.

The IndexPlan validates an IndexConfig, picks the renderer it calls for,
and runs the pipeline against a ReportWriter with a fresh error policy
and collector each time:

    resolve root -> walk + collect + sort -> render -> clear + write

Configuration problems are raised before the source is touched, and the
destination is only cleared once the whole tree has been collected, so a
traversal failure leaves the previous report in place.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .config import IndexConfig
from .core.adapter import NodeSource
from .core.collector import EntryCollector
from .core.entry import PathEntry
from .core.node import DocumentNode
from .error_policies import ErrorPolicy, create_error_policy
from .errors import DestinationError, DocIndexError
from .rendering import Row, RowRenderer, create_renderer
from .writers.base import ReportWriter

logger = logging.getLogger(__name__)


@dataclass
class IndexReport:
    """Outcome of one IndexPlan run."""
    root_name: str
    header: List[str]
    rows: List[Row]
    skipped: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def skipped_folders(self) -> List[str]:
        """Identifiers of folders that could not be read, in failure order.

        A folder appears once even when several of its listings failed.
        """
        return list(dict.fromkeys(error['node_id'] for error in self.skipped))

    @property
    def complete(self) -> bool:
        """False when folders were skipped after enumeration errors."""
        return not self.skipped


class IndexPlan:
    """Validated plan for one index run.

    The IndexPlan is the bridge between what the caller asked for
    (IndexConfig) and execution. A plan can be executed repeatedly; every
    run gets its own error policy and collector.
    """

    def __init__(self, config: IndexConfig, source: NodeSource):
        """Create and validate a plan.

        Args:
            config: Invocation parameters
            source: Node source for the store being indexed

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        config.check()
        self.config = config
        self.source = source
        self.renderer: RowRenderer = create_renderer(config.schema, config.path_separator)

    def resolve_root(self) -> DocumentNode:
        """Resolve the configured root reference through the source."""
        return self.source.resolve(self.config.root)

    def create_error_policy(self) -> ErrorPolicy:
        return create_error_policy(self.config.skip_errors)

    def collect(self,
                root: Optional[DocumentNode] = None,
                error_policy: Optional[ErrorPolicy] = None) -> List[PathEntry]:
        """Walk and return the sorted, filtered entries."""
        if root is None:
            root = self.resolve_root()
        collector = EntryCollector(self.source, error_policy or self.create_error_policy())
        return collector.collect(
            root,
            self.config.max_depth,
            include_files=self.config.include_files,
            include_folders=self.config.include_folders,
        )

    def render(self, entries: List[PathEntry]) -> List[Row]:
        return self.renderer.render(entries)

    def execute(self, writer: ReportWriter, root: Optional[DocumentNode] = None) -> IndexReport:
        """Run the whole pipeline and write the report.

        Raises:
            TraversalError: If the root cannot be resolved or a folder
                cannot be enumerated (unless skip_errors is set)
            DestinationError: If the writer fails
        """
        if root is None:
            root = self.resolve_root()
        logger.info("Indexing '%s' to depth %d", root.name(), self.config.max_depth)

        error_policy = self.create_error_policy()
        entries = self.collect(root, error_policy)
        header = self.renderer.header(entries)
        rows = self.render(entries)
        write_report(writer, header, rows)

        report = IndexReport(root.name(), header, rows, list(error_policy.errors))
        if not report.complete:
            logger.warning("Index of '%s' is incomplete: %d folders could not be read",
                           root.name(), len(report.skipped_folders))
        logger.info("Wrote %d rows to %s", report.row_count, writer.destination or writer)
        return report

    def get_summary(self) -> Dict[str, Any]:
        """Get summary of the plan.

        Useful for debugging and logging.
        """
        return {
            'root': self.config.root,
            'max_depth': self.config.max_depth,
            'path_separator': self.config.path_separator,
            'include_files': self.config.include_files,
            'include_folders': self.config.include_folders,
            'schema': self.config.schema.value,
            'skip_errors': self.config.skip_errors,
            'source': self.source.__class__.__name__,
            'renderer': self.renderer.__class__.__name__,
            'error_policy': self.create_error_policy().__class__.__name__,
        }


def write_report(writer: ReportWriter, header: List[str], rows: List[Row]) -> None:
    """Clear ``writer`` and write the header and every row.

    Non-library exceptions raised by the writer are wrapped in
    DestinationError.
    """
    try:
        writer.clear()
        writer.write_header_row(header)
        for row_index, row in enumerate(rows, start=1):
            writer.write_row(row_index, row)
    except DocIndexError:
        raise
    except Exception as e:
        raise DestinationError(writer.destination or repr(writer), str(e)) from e
