"""Error taxonomy for DocIndexLib.

Every failure raised by the library derives from DocIndexError so callers
can wrap a whole pipeline invocation in a single except clause. Each error
names the input that caused it: a node, a settings key, or a destination.
"""

from typing import Optional


class DocIndexError(Exception):
    """Base class for all DocIndexLib errors."""
    pass


class TraversalError(DocIndexError):
    """Raised when a folder's children cannot be enumerated.

    Also raised when a root reference cannot be resolved to a node.
    The original exception is chained as ``__cause__``.
    """

    def __init__(self, node_id: str, message: Optional[str] = None):
        self.node_id = node_id
        super().__init__(message or f"Failed to enumerate children of '{node_id}'")


class ConfigurationError(DocIndexError):
    """Raised when a settings value or invocation parameter is invalid."""

    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(message)


class DestinationError(DocIndexError):
    """Raised when the output destination cannot be cleared or written."""

    def __init__(self, destination: str, message: str):
        self.destination = destination
        super().__init__(f"{destination}: {message}")
