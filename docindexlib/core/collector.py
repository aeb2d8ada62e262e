"""Entry collection and ordering for DocIndexLib.

The EntryCollector drives a walk, turns each visited node into a
PathEntry, drops the kinds of entry the caller does not want, and returns
the survivors sorted by full path.
"""

import logging
from typing import Iterable, List, Optional
from .node import DocumentNode
from .adapter import NodeSource
from .entry import PathEntry
from .traverser import Ancestors, DepthFirstWalker
from ..config import FilterConfig
from ..error_policies import ErrorPolicy

logger = logging.getLogger(__name__)


def sort_entries(entries: Iterable[PathEntry]) -> List[PathEntry]:
    """Return ``entries`` in ascending full-path order.

    Names compare alphabetically, ignoring case and accents first, route
    segment by segment. The sort is stable, so entries with equal
    keys keep the order they were discovered in.
    """
    return sorted(entries, key=lambda entry: entry.sort_key())


class EntryCollector:
    """Collects PathEntry records from a walk.

    Filtering is applied to each visited node, the root included, and
    never affects which folders are walked.
    """

    def __init__(self,
                 source: NodeSource,
                 error_policy: Optional[ErrorPolicy] = None):
        """Initialize collector with a source.

        Args:
            source: NodeSource for enumerating folders
            error_policy: Passed through to the walker
        """
        self.source = source
        self.walker = DepthFirstWalker(source, error_policy)

    def build_entry(self, ancestors: Ancestors, node: DocumentNode) -> PathEntry:
        return PathEntry(node, ancestors)

    def collect(self,
                root: DocumentNode,
                max_depth: int,
                include_files: bool = True,
                include_folders: bool = True) -> List[PathEntry]:
        """Walk ``root`` and return the sorted, filtered entries.

        Args:
            root: Folder to start from
            max_depth: Deepest level to include (>= 1)
            include_files: Keep file entries
            include_folders: Keep folder entries, the root included

        Returns:
            PathEntry list in ascending full-path order
        """
        node_filter = FilterConfig(include_files=include_files, include_folders=include_folders)
        entries = []
        visited = 0
        for ancestors, node in self.walker.walk(root, max_depth):
            visited += 1
            if not node_filter.should_include(node):
                continue
            entries.append(self.build_entry(ancestors, node))

        logger.info("Visited %d nodes below '%s', kept %d entries",
                    visited, root.name(), len(entries))
        return sort_entries(entries)
