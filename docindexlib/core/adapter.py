"""NodeSource abstraction for DocIndexLib.

The NodeSource is the only way the core talks to a document store. It
answers two questions about a folder (which sub-folders does it hold, which
files does it hold) and exposes a few read-only accessors. Authentication,
pagination and query syntax stay inside the concrete source.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from .node import DocumentNode


class NodeSource(ABC):
    """Abstract capability interface over a document store.

    Children are returned in whatever order the store produces them. The
    core never relies on that order beyond feeding it into its own sort.
    """

    @abstractmethod
    def child_folders(self, folder: DocumentNode) -> Sequence[DocumentNode]:
        """Return the direct sub-folders of ``folder``.

        Raises:
            Any exception from the underlying store. The walker hands it to
            its error policy.
        """
        pass

    @abstractmethod
    def child_files(self, folder: DocumentNode) -> Sequence[DocumentNode]:
        """Return the files directly inside ``folder``."""
        pass

    def resolve(self, reference: str) -> DocumentNode:
        """Turn a root reference (URL or identifier) into a node.

        Raises:
            TraversalError: If the reference does not name a node
            NotImplementedError: If the source cannot resolve references
        """
        raise NotImplementedError(f"{self.__class__.__name__} cannot resolve references")

    # Accessors. Sources whose nodes carry this data themselves need not
    # override these.

    def is_file(self, node: DocumentNode) -> bool:
        return node.is_file()

    def is_folder(self, node: DocumentNode) -> bool:
        return node.is_folder()

    def display_name(self, node: DocumentNode) -> str:
        return node.name()

    def url(self, node: DocumentNode) -> str:
        return node.url()

    def mime_type(self, node: DocumentNode) -> Optional[str]:
        return node.mime_type() if node.is_file() else None
