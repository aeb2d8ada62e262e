"""Test fixtures for DocIndexLib consumers.

These fixtures stand in for a real document store and a real output
sheet, so a pipeline can be exercised without network or disk access.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Set, Tuple, Union

from ..adapters.memory import MemoryNode, MemoryNodeSource
from ..core.node import NodeKind
from ..errors import DestinationError
from ..rendering import Cell
from ..writers.base import ReportWriter

TreeLayout = Mapping[str, Union[str, 'TreeLayout']]


def build_tree(name: str, layout: TreeLayout) -> MemoryNode:
    """Build an in-memory tree from a compact nested mapping.

    A mapping value is a folder; a string value is a file with that MIME
    type. Insertion order is the order the source will report children in.

    Example:
        root = build_tree("A", {"B": {"C": "text/plain"}, "D": "text/plain"})
    """
    root = MemoryNode(name, name, NodeKind.FOLDER)
    _fill(root, layout)
    return root


def _fill(folder: MemoryNode, layout: TreeLayout) -> None:
    for name, value in layout.items():
        if isinstance(value, str):
            folder.add_file(name, mime_type=value)
        else:
            _fill(folder.add_folder(name), value)


def build_chain(depth: int, files_per_level: int = 1) -> MemoryNode:
    """Build a tree exactly ``depth`` levels deep.

    Level n holds folder ``L{n}`` plus ``files_per_level`` files, so every
    level 1..depth contains at least one node.
    """
    root = MemoryNode("L0", "L0", NodeKind.FOLDER)
    folder = root
    for level in range(1, depth + 1):
        for i in range(files_per_level):
            folder.add_file(f"f{level}-{i}.txt", mime_type="text/plain")
        if level < depth:
            folder = folder.add_folder(f"L{level}")
    return root


class RecordingSource(MemoryNodeSource):
    """MemoryNodeSource that records every enumeration and can fail on demand.

    Args:
        roots: Trees to serve
        fail_on: Identifiers of folders whose enumeration raises ``error``
        error: Exception instance to raise (default: PermissionError)
    """

    def __init__(self, *roots: MemoryNode,
                 fail_on: Optional[Set[str]] = None,
                 error: Optional[Exception] = None):
        super().__init__(*roots)
        self.fail_on = set(fail_on or ())
        self.error = error
        self.calls: List[Tuple[str, str]] = []

    def _check(self, method: str, folder: MemoryNode) -> None:
        self.calls.append((method, folder.identifier()))
        if folder.identifier() in self.fail_on:
            raise self.error or PermissionError(f"Access denied: {folder.identifier()}")

    def child_folders(self, folder: MemoryNode) -> Sequence[MemoryNode]:
        self._check('child_folders', folder)
        return super().child_folders(folder)

    def child_files(self, folder: MemoryNode) -> Sequence[MemoryNode]:
        self._check('child_files', folder)
        return super().child_files(folder)

    @property
    def enumerated(self) -> List[str]:
        """Identifiers of folders enumerated, in order, without repeats."""
        seen: List[str] = []
        for _, node_id in self.calls:
            if node_id not in seen:
                seen.append(node_id)
        return seen


class MemoryReportWriter(ReportWriter):
    """ReportWriter that keeps everything in lists.

    Args:
        fail_on_clear: Raise DestinationError from clear()
        fail_on_row: Raise DestinationError when this row index is written
    """

    def __init__(self, destination: str = "memory",
                 fail_on_clear: bool = False,
                 fail_on_row: Optional[int] = None):
        self.destination = destination
        self.fail_on_clear = fail_on_clear
        self.fail_on_row = fail_on_row
        self.header: List[str] = []
        self.rows: Dict[int, List[Cell]] = {}
        self.clear_count = 0
        self.closed = False
        self.discarded = False

    def clear(self) -> None:
        if self.fail_on_clear:
            raise DestinationError(self.destination, "cannot clear")
        self.clear_count += 1
        self.header = []
        self.rows = {}

    def write_header_row(self, labels: Sequence[str]) -> None:
        self.header = list(labels)

    def write_row(self, row_index: int, cells: Sequence[Cell]) -> None:
        if self.fail_on_row == row_index:
            raise DestinationError(self.destination, f"cannot write row {row_index}")
        self.rows[row_index] = list(cells)

    def close(self) -> None:
        self.closed = True

    def discard(self) -> None:
        self.discarded = True

    def values(self) -> List[List[Any]]:
        """Cell values of every data row, in row order."""
        return [[cell.value for cell in self.rows[i]] for i in sorted(self.rows)]
