"""In-memory document store for DocIndexLib.

Holds a complete tree in memory. Useful for tests, and for indexing a
listing that was exported from a store as nested dictionaries (JSON).
"""

from typing import Any, List, Mapping, Optional, Sequence

from ..core.adapter import NodeSource
from ..core.node import DocumentNode, NodeKind
from ..errors import TraversalError

FOLDER_MIME_TYPE = "inode/directory"


class MemoryNode(DocumentNode):
    """A file or folder held in memory."""

    def __init__(self,
                 node_id: str,
                 name: str,
                 kind: NodeKind,
                 url: Optional[str] = None,
                 mime_type: Optional[str] = None):
        self._id = node_id
        self._name = name
        self._kind = kind
        self._url = url or f"memory://{node_id}"
        self._mime_type = mime_type if kind is NodeKind.FILE else None
        self.folders: List['MemoryNode'] = []
        self.files: List['MemoryNode'] = []

    @property
    def kind(self) -> NodeKind:
        return self._kind

    def identifier(self) -> str:
        return self._id

    def name(self) -> str:
        return self._name

    def url(self) -> str:
        return self._url

    def mime_type(self) -> Optional[str]:
        return self._mime_type

    def add_folder(self, name: str, node_id: Optional[str] = None, url: Optional[str] = None) -> 'MemoryNode':
        """Create a sub-folder and return it."""
        self._require_folder()
        child = MemoryNode(node_id or f"{self._id}/{name}", name, NodeKind.FOLDER, url=url)
        self.folders.append(child)
        return child

    def add_file(self,
                 name: str,
                 mime_type: str = "application/octet-stream",
                 node_id: Optional[str] = None,
                 url: Optional[str] = None) -> 'MemoryNode':
        """Create a file in this folder and return it."""
        self._require_folder()
        child = MemoryNode(node_id or f"{self._id}/{name}", name, NodeKind.FILE, url=url, mime_type=mime_type)
        self.files.append(child)
        return child

    def _require_folder(self) -> None:
        if self._kind is not NodeKind.FOLDER:
            raise ValueError(f"'{self._name}' is a file and cannot hold children")


class MemoryNodeSource(NodeSource):
    """NodeSource over MemoryNode trees."""

    def __init__(self, *roots: MemoryNode):
        self.roots = list(roots)

    def child_folders(self, folder: MemoryNode) -> Sequence[MemoryNode]:
        return list(folder.folders)

    def child_files(self, folder: MemoryNode) -> Sequence[MemoryNode]:
        return list(folder.files)

    def resolve(self, reference: str) -> MemoryNode:
        """Find a node by identifier or URL in any registered root."""
        for root in self.roots:
            found = self._find(root, reference)
            if found is not None:
                return found
        raise TraversalError(reference, f"No node matches '{reference}'")

    def _find(self, node: MemoryNode, reference: str) -> Optional[MemoryNode]:
        stack = [node]
        while stack:
            current = stack.pop()
            if reference in (current.identifier(), current.url()):
                return current
            stack.extend(current.folders)
            stack.extend(current.files)
        return None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'MemoryNodeSource':
        """Build a source from a nested listing.

        Each entry is a mapping with ``name`` and optionally ``id``, ``url``,
        ``mimeType`` and ``children``. An entry is a folder when it has a
        ``children`` key or its ``mimeType`` is a folder type.

        Example:
            >>> source = MemoryNodeSource.from_dict({
            ...     "name": "A",
            ...     "children": [{"name": "B", "children": []},
            ...                  {"name": "D", "mimeType": "text/plain"}],
            ... })
            >>> [n.name() for n in source.roots[0].folders]
            ['B']
        """
        root = _node_from_dict(data, parent_id="")
        if not root.is_folder():
            raise ValueError("The root of a listing must be a folder")
        return cls(root)


def _is_folder_entry(data: Mapping[str, Any]) -> bool:
    return 'children' in data or data.get('mimeType') in (
        FOLDER_MIME_TYPE, "application/vnd.google-apps.folder")


def _node_from_dict(data: Mapping[str, Any], parent_id: str) -> MemoryNode:
    name = data['name']
    node_id = data.get('id') or (f"{parent_id}/{name}" if parent_id else name)
    if not _is_folder_entry(data):
        return MemoryNode(node_id, name, NodeKind.FILE, url=data.get('url'),
                          mime_type=data.get('mimeType', "application/octet-stream"))

    node = MemoryNode(node_id, name, NodeKind.FOLDER, url=data.get('url'))
    for child_data in data.get('children', []):
        child = _node_from_dict(child_data, node_id)
        (node.folders if child.is_folder() else node.files).append(child)
    return node

