"""Core abstractions for DocIndexLib."""

from .node import DocumentNode, NodeKind
from .adapter import NodeSource
from .entry import PathEntry
from .traverser import DepthFirstWalker, walk
from .collector import EntryCollector, sort_entries

__all__ = [
    'DocumentNode',
    'NodeKind',
    'NodeSource',
    'PathEntry',
    'DepthFirstWalker',
    'walk',
    'EntryCollector',
    'sort_entries',
]
