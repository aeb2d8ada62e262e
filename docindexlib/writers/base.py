"""ReportWriter abstraction for DocIndexLib.

The core computes every cell of the report; a writer only persists it.
Writers are used as context managers: the destination is committed when
the block exits cleanly and discarded when it raises.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from ..rendering import Cell


class ReportWriter(ABC):
    """Abstract destination for a rendered report.

    Row indexes are 1-based data row numbers; the header is not counted.
    Failures surface as DestinationError naming the destination.
    """

    #: Human-readable name of the destination, used in error messages
    destination: str = ""

    @abstractmethod
    def clear(self) -> None:
        """Remove everything previously written to the destination."""
        pass

    @abstractmethod
    def write_header_row(self, labels: Sequence[str]) -> None:
        """Write the column labels."""
        pass

    @abstractmethod
    def write_row(self, row_index: int, cells: Sequence[Cell]) -> None:
        """Write one data row at ``row_index`` (first data row = 1)."""
        pass

    def close(self) -> None:
        """Commit the written report. Default: nothing to commit."""
        pass

    def discard(self) -> None:
        """Abandon the written report. Default: nothing to roll back."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.close()
        else:
            self.discard()
        return None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.destination!r})"
