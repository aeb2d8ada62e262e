"""CSV report writer.

CSV has no cell formats or link metadata, so linked cells are written as
``HYPERLINK`` formulas that spreadsheet applications evaluate on import.
A formula carries one link, so a File Path cell links only to its last
span (the entry itself).
"""

import csv
import logging
from pathlib import Path
from typing import Dict, List, Sequence, Union

from ..errors import DestinationError
from ..rendering import Cell, hyperlink_formula
from .base import ReportWriter

logger = logging.getLogger(__name__)


def cell_to_text(cell: Cell) -> str:
    """Flatten a rendered cell to the text stored in a CSV field."""
    if cell.link is not None:
        return hyperlink_formula(cell.link, cell.text)
    if cell.link_spans:
        return hyperlink_formula(cell.link_spans[-1].url, cell.text)
    return cell.text


class CsvReportWriter(ReportWriter):
    """Buffers rows and writes them to a CSV file on close()."""

    def __init__(self, path: Union[str, Path], encoding: str = "utf-8-sig"):
        self.path = Path(path)
        self.encoding = encoding
        self.destination = str(self.path)
        self._header: List[str] = []
        self._rows: Dict[int, List[str]] = {}

    def clear(self) -> None:
        self._header = []
        self._rows = {}

    def write_header_row(self, labels: Sequence[str]) -> None:
        self._header = list(labels)

    def write_row(self, row_index: int, cells: Sequence[Cell]) -> None:
        if row_index < 1:
            raise DestinationError(self.destination, f"invalid row index {row_index}")
        self._rows[row_index] = [cell_to_text(cell) for cell in cells]

    def close(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", newline="", encoding=self.encoding) as f:
                writer = csv.writer(f)
                writer.writerow(self._header)
                last = max(self._rows, default=0)
                for row_index in range(1, last + 1):
                    writer.writerow(self._rows.get(row_index, []))
        except OSError as e:
            raise DestinationError(self.destination, f"cannot write file: {e}") from e
        logger.info("Wrote %d rows to %s", len(self._rows), self.destination)
