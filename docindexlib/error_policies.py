"""
Error handling policies for DocIndexLib.

The walker hands every enumeration failure to an ErrorPolicy, so the
caller decides whether a failing folder aborts the run or is skipped.
The default is FailFastPolicy: a partial index is never reported as
complete unless the caller asked for it.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence

from .core.node import DocumentNode
from .errors import TraversalError

logger = logging.getLogger(__name__)


class ErrorPolicy(ABC):
    """
    Base class for error handling policies.

    Subclasses implement different strategies for handling errors raised
    by a NodeSource while listing a folder.
    """

    @abstractmethod
    def handle(self, error: Exception, method_name: str, node: DocumentNode) -> Sequence[DocumentNode]:
        """
        Handle an error raised while enumerating ``node``.

        Args:
            error: The exception that was raised
            method_name: Name of the source method that failed
                (``child_folders`` or ``child_files``)
            node: The folder being enumerated

        Returns:
            The children to use in place of the failed call, or raises to
            stop the walk.
        """
        pass

    @property
    def errors(self) -> List[Dict[str, Any]]:
        """Failures recorded so far. Empty for policies that never record."""
        return []


class FailFastPolicy(ErrorPolicy):
    """
    Policy that aborts the walk on the first failure.

    The store's exception is wrapped in a TraversalError naming the folder
    and chained as its cause.
    """

    def handle(self, error: Exception, method_name: str, node: DocumentNode) -> Sequence[DocumentNode]:
        if isinstance(error, TraversalError):
            raise error
        raise TraversalError(
            node.identifier(),
            f"Failed to enumerate children of '{node.name()}' ({node.identifier()}): {error}"
        ) from error


class ContinueOnErrorsPolicy(ErrorPolicy):
    """
    Policy that logs the failure and treats the folder as empty.

    Failures are recorded so they can be reported at the end of the run.
    """

    def __init__(self):
        self._errors: List[Dict[str, Any]] = []

    @property
    def errors(self) -> List[Dict[str, Any]]:
        return self._errors

    def handle(self, error: Exception, method_name: str, node: DocumentNode) -> Sequence[DocumentNode]:
        self._errors.append({
            'node_id': node.identifier(),
            'name': node.name(),
            'method': method_name,
            'error_type': type(error).__name__,
            'error_message': str(error),
        })
        logger.warning("Skipping children of '%s' (%s) after %s failed: %s",
                       node.name(), node.identifier(), method_name, error)
        return []

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get statistics about errors encountered.

        Returns:
            Dictionary with error counts and details
        """
        return {
            'total_errors': len(self._errors),
            'permission_errors': sum(1 for e in self._errors if e['error_type'] == 'PermissionError'),
            'skipped_folders': sorted({e['node_id'] for e in self._errors}),
            'errors': self._errors,
        }


def create_error_policy(skip_errors: bool = False) -> ErrorPolicy:
    """
    Convenience function to pick a policy from a flag.

    Args:
        skip_errors: If True, use ContinueOnErrorsPolicy; otherwise FailFastPolicy
    """
    if skip_errors:
        return ContinueOnErrorsPolicy()
    return FailFastPolicy()
