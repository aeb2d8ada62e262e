"""Node sources for specific document stores.

The Drive source is imported on demand so the Google client libraries are
only loaded when indexing Drive:

    from docindexlib.adapters.drive import DriveNodeSource
"""

from .filesystem import FileSystemSource, LocalFileNode
from .memory import MemoryNode, MemoryNodeSource

__all__ = [
    'FileSystemSource',
    'LocalFileNode',
    'MemoryNode',
    'MemoryNodeSource',
]
