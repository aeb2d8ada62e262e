"""Filesystem source for DocIndexLib.

Treats a local directory tree as a document store: directories are
folders, regular files are files, and each node's URL is its ``file://``
URI. Handy for indexing synced drive folders and network shares.
"""

import mimetypes
import os
from pathlib import Path
from typing import List, Optional, Union
from urllib.parse import unquote, urlparse

from ..core.adapter import NodeSource
from ..core.node import DocumentNode, NodeKind
from ..errors import TraversalError

DEFAULT_MIME_TYPE = "application/octet-stream"


class LocalFileNode(DocumentNode):
    """Concrete node implementation for filesystem entries.

    The kind is decided once, at construction, so a node never changes
    from file to folder while a walk is in progress.
    """

    def __init__(self, path: Union[str, Path], kind: Optional[NodeKind] = None):
        """Initialize a filesystem node.

        Args:
            path: Path to the file or directory
            kind: Known kind (skips a stat call when listing a directory)
        """
        self.path = Path(path) if isinstance(path, str) else path
        if kind is None:
            kind = NodeKind.FOLDER if self.path.is_dir() else NodeKind.FILE
        self._kind = kind

    @property
    def kind(self) -> NodeKind:
        return self._kind

    def identifier(self) -> str:
        """Return absolute path as unique identifier."""
        return str(self.path.absolute())

    def name(self) -> str:
        return self.path.name or str(self.path)

    def url(self) -> str:
        return self.path.absolute().as_uri()

    def mime_type(self) -> Optional[str]:
        if self._kind is NodeKind.FOLDER:
            return None
        guessed, _ = mimetypes.guess_type(self.path.name)
        return guessed or DEFAULT_MIME_TYPE

    def __repr__(self) -> str:
        return f"LocalFileNode(path={self.path!r})"


class FileSystemSource(NodeSource):
    """NodeSource for local directory trees.

    Listing errors (permission denied, directory removed mid-walk)
    propagate to the walker, whose error policy decides what happens.
    """

    def __init__(self, follow_symlinks: bool = False, include_hidden: bool = True):
        """Initialize filesystem source.

        Args:
            follow_symlinks: Whether to list symlinked entries
            include_hidden: Whether to include dot-files and dot-directories
        """
        self.follow_symlinks = follow_symlinks
        self.include_hidden = include_hidden

    def _scan(self, folder: LocalFileNode, want_dirs: bool) -> List[LocalFileNode]:
        children = []
        with os.scandir(folder.path) as entries:
            for entry in entries:
                if not self.include_hidden and entry.name.startswith('.'):
                    continue
                if not self.follow_symlinks and entry.is_symlink():
                    continue
                is_dir = entry.is_dir(follow_symlinks=self.follow_symlinks)
                if is_dir != want_dirs:
                    continue
                if not is_dir and not entry.is_file(follow_symlinks=self.follow_symlinks):
                    continue  # sockets, fifos, devices
                kind = NodeKind.FOLDER if is_dir else NodeKind.FILE
                children.append(LocalFileNode(Path(entry.path), kind))
        return children

    def child_folders(self, folder: LocalFileNode) -> List[LocalFileNode]:
        return self._scan(folder, want_dirs=True)

    def child_files(self, folder: LocalFileNode) -> List[LocalFileNode]:
        return self._scan(folder, want_dirs=False)

    def resolve(self, reference: str) -> LocalFileNode:
        """Create a node for a path or ``file://`` URL."""
        if reference.startswith("file://"):
            parsed = urlparse(reference)
            reference = unquote(parsed.path)
        path = Path(reference).expanduser()
        if not path.exists():
            raise TraversalError(reference, f"No such file or directory: '{reference}'")
        return LocalFileNode(path.resolve())
