"""DocumentNode abstraction for DocIndexLib.

A DocumentNode is a handle to one entry in a document store: either a file
or a folder, never both. Like the rest of the library it is a plain data
container. Enumerating a folder's children is the job of the NodeSource,
which knows how to talk to the specific store.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional


class NodeKind(Enum):
    """The two kinds of entry a document store holds."""
    FILE = "file"
    FOLDER = "folder"


class DocumentNode(ABC):
    """Abstract base class for files and folders in a document store.

    Concrete stores subclass this with their own handle types. The
    ``kind`` tag is fixed at construction, so file-vs-folder checks are a
    comparison rather than a query to the store.
    """

    @property
    @abstractmethod
    def kind(self) -> NodeKind:
        """Return whether this node is a file or a folder."""
        pass

    @abstractmethod
    def identifier(self) -> str:
        """Return a stable identifier, unique within the store.

        Examples:
        - Google Drive: the file id ("1AbC...")
        - Local filesystem: the absolute path
        """
        pass

    @abstractmethod
    def name(self) -> str:
        """Return the display name of this node."""
        pass

    @abstractmethod
    def url(self) -> str:
        """Return a URL that opens this node."""
        pass

    def mime_type(self) -> Optional[str]:
        """Return the MIME type for files, None for folders."""
        return None

    def is_file(self) -> bool:
        return self.kind is NodeKind.FILE

    def is_folder(self) -> bool:
        return self.kind is NodeKind.FOLDER

    def __str__(self) -> str:
        return self.name()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.identifier()!r}, kind={self.kind.value})"

    def __eq__(self, other: object) -> bool:
        """Nodes are equal if they have the same identifier."""
        if not isinstance(other, DocumentNode):
            return NotImplemented
        return self.identifier() == other.identifier()

    def __hash__(self) -> int:
        return hash(self.identifier())
