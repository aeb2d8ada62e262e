"""Bounded-depth tree walking for DocIndexLib.

The walker enumerates a folder tree through a NodeSource and reports every
node it discovers together with its ancestor chain. It works with any
NodeSource, so the same walk runs against Drive, a local directory or an
in-memory tree.
"""

import logging
from typing import Callable, Iterator, List, Optional, Sequence, Tuple
from .node import DocumentNode
from .adapter import NodeSource
from ..error_policies import ErrorPolicy, FailFastPolicy

logger = logging.getLogger(__name__)

Ancestors = Tuple[DocumentNode, ...]
Visitor = Callable[[Ancestors, DocumentNode], None]


class DepthFirstWalker:
    """Depth-first, folders-before-files traversal.

    At each folder every sub-folder is visited and recursed into, then
    every file in that folder is visited. The root is visited once, first,
    with an empty ancestor chain.

    Depth is counted rather than tracked by node identity, so the walk
    terminates even if the store links a folder into its own subtree.
    Nothing is memoized: each walk re-queries the source.
    """

    def __init__(self, source: NodeSource, error_policy: Optional[ErrorPolicy] = None):
        """Initialize walker with a source.

        Args:
            source: NodeSource for enumerating folders
            error_policy: What to do when enumeration fails
                (default: FailFastPolicy)
        """
        self.source = source
        self.error_policy = error_policy or FailFastPolicy()

    def walk(self, root: DocumentNode, max_depth: int) -> Iterator[Tuple[Ancestors, DocumentNode]]:
        """Walk the tree below ``root``.

        Args:
            root: Folder to start from
            max_depth: Deepest level to report. 1 reports the root and its
                direct children; N reports nodes up to N levels below root.

        Yields:
            ``(ancestors, node)`` pairs, root first

        Raises:
            ValueError: If max_depth is less than 1
            TraversalError: If a folder cannot be enumerated and the error
                policy does not recover
        """
        if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1:
            raise ValueError(f"max_depth must be an integer >= 1, got {max_depth!r}")

        yield (), root
        if self.source.is_folder(root):
            yield from self._walk_children((), root, 1, max_depth)

    def visit(self, root: DocumentNode, max_depth: int, visitor: Visitor) -> int:
        """Callback form of walk(). Returns the number of nodes visited."""
        count = 0
        for ancestors, node in self.walk(root, max_depth):
            visitor(ancestors, node)
            count += 1
        return count

    def _walk_children(self,
                       parents: Ancestors,
                       folder: DocumentNode,
                       depth: int,
                       max_depth: int) -> Iterator[Tuple[Ancestors, DocumentNode]]:
        # depth is the depth of folder's children
        if depth > max_depth:
            return

        route = parents + (folder,)
        sub_folders = self._enumerate(self.source.child_folders, 'child_folders', folder)
        for sub_folder in sub_folders:
            yield route, sub_folder
            yield from self._walk_children(route, sub_folder, depth + 1, max_depth)

        for file in self._enumerate(self.source.child_files, 'child_files', folder):
            yield route, file

    def _enumerate(self,
                   method: Callable[[DocumentNode], Sequence[DocumentNode]],
                   method_name: str,
                   folder: DocumentNode) -> List[DocumentNode]:
        """Call a source method, routing failures through the error policy.

        The result is materialized so a store that fails mid-iteration is
        still handled before anything below the folder is yielded.
        """
        try:
            children = list(method(folder))
        except Exception as e:
            return list(self.error_policy.handle(e, method_name, folder))
        logger.debug("%s(%s) -> %d entries", method_name, folder.identifier(), len(children))
        return children


def walk(source: NodeSource,
         root: DocumentNode,
         max_depth: int,
         visit: Optional[Visitor] = None,
         error_policy: Optional[ErrorPolicy] = None) -> List[Tuple[Ancestors, DocumentNode]]:
    """Walk ``root`` and return every ``(ancestors, node)`` pair.

    If ``visit`` is given it is called for each pair as it is discovered.
    """
    walker = DepthFirstWalker(source, error_policy)
    visited = []
    for ancestors, node in walker.walk(root, max_depth):
        if visit is not None:
            visit(ancestors, node)
        visited.append((ancestors, node))
    return visited
