"""Excel (xlsx) report writer built on openpyxl."""

import logging
from pathlib import Path
from typing import Optional, Sequence, Union

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from ..errors import DestinationError
from ..rendering import Cell, CellFormat, hyperlink_formula
from .base import ReportWriter

logger = logging.getLogger(__name__)

HEADER_FILL = PatternFill(start_color="FFA500", end_color="FFA500", fill_type="solid")
HEADER_FONT = Font(bold=True)
HEADER_ALIGNMENT = Alignment(horizontal="center")
MAX_COLUMN_WIDTH = 80

LINK_MODES = ("hyperlink", "formula")


class ExcelReportWriter(ReportWriter):
    """Writes the report to one sheet of an xlsx workbook.

    The workbook is created if it does not exist; other sheets in an
    existing workbook are left alone. Nothing reaches disk until close().

    Links are written as native cell hyperlinks (``link_mode="hyperlink"``)
    or as ``HYPERLINK`` formulas (``link_mode="formula"``). Either way a
    cell holds at most one link: xlsx has no per-run hyperlinks, so the
    File Path cell links only to its last span (the entry itself) and the
    links of its ancestor segments are not written. The per-level layout
    keeps one link per ancestor column.
    """

    def __init__(self,
                 path: Union[str, Path],
                 sheet_name: str,
                 link_mode: str = "hyperlink"):
        """Open (or start) the workbook.

        Args:
            path: Workbook file to write
            sheet_name: Sheet that receives the report
            link_mode: "hyperlink" or "formula"

        Raises:
            DestinationError: If the workbook exists but cannot be read
            ValueError: If link_mode is unknown
        """
        if link_mode not in LINK_MODES:
            raise ValueError(f"Unknown link_mode: {link_mode}. Choose from: {', '.join(LINK_MODES)}")

        self.path = Path(path)
        self.sheet_name = sheet_name
        self.link_mode = link_mode
        self.destination = f"{self.path}[{sheet_name}]"
        self._created = not self.path.exists()

        try:
            self.workbook = Workbook() if self._created else load_workbook(self.path)
        except Exception as e:
            raise DestinationError(self.destination, f"cannot open workbook: {e}") from e
        self.sheet = None

    def clear(self) -> None:
        """Replace the report sheet with an empty one at the same position."""
        wb = self.workbook
        try:
            if self.sheet_name in wb.sheetnames:
                old = wb[self.sheet_name]
                index = wb.index(old)
                wb.remove(old)
                self.sheet = wb.create_sheet(self.sheet_name, index)
            elif self._created and wb.sheetnames == ["Sheet"]:
                # Fresh workbook: reuse the placeholder sheet
                self.sheet = wb.active
                self.sheet.title = self.sheet_name
            else:
                self.sheet = wb.create_sheet(self.sheet_name)
        except Exception as e:
            raise DestinationError(self.destination, f"cannot clear sheet: {e}") from e

    def write_header_row(self, labels: Sequence[str]) -> None:
        ws = self._require_sheet()
        for column, label in enumerate(labels, start=1):
            cell = ws.cell(row=1, column=column, value=label)
            cell.fill = HEADER_FILL
            cell.font = HEADER_FONT
            cell.alignment = HEADER_ALIGNMENT
        ws.freeze_panes = "A2"

    def write_row(self, row_index: int, cells: Sequence[Cell]) -> None:
        ws = self._require_sheet()
        for column, rendered in enumerate(cells, start=1):
            try:
                self._write_cell(ws.cell(row=row_index + 1, column=column), rendered)
            except Exception as e:
                raise DestinationError(
                    self.destination, f"cannot write row {row_index}, column {column}: {e}"
                ) from e

    def _write_cell(self, cell, rendered: Cell) -> None:
        target = self._link_target(rendered)

        if target is not None and self.link_mode == "formula":
            cell.value = hyperlink_formula(target, rendered.text)
            cell.number_format = rendered.format.value
            return

        cell.value = rendered.value if rendered.format is CellFormat.NUMBER else rendered.text
        if rendered.format is CellFormat.TEXT:
            # Names starting with '=' stay text
            cell.data_type = 's'
        if target is not None:
            cell.hyperlink = target
            cell.style = "Hyperlink"
        cell.number_format = rendered.format.value

    @staticmethod
    def _link_target(rendered: Cell) -> Optional[str]:
        if rendered.link is not None:
            return rendered.link
        if rendered.link_spans:
            return rendered.link_spans[-1].url
        return None

    def _require_sheet(self):
        if self.sheet is None:
            raise DestinationError(self.destination, "clear() must be called before writing")
        return self.sheet

    def autosize_columns(self) -> None:
        """Fit column widths to their longest value, capped at MAX_COLUMN_WIDTH."""
        ws = self._require_sheet()
        for i, column_cells in enumerate(ws.columns, 1):
            max_length = max(len(str(cell.value or "")) for cell in column_cells)
            ws.column_dimensions[get_column_letter(i)].width = min(max_length + 2, MAX_COLUMN_WIDTH)

    def close(self) -> None:
        """Save the workbook."""
        if self.sheet is not None:
            self.autosize_columns()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.workbook.save(self.path)
        except Exception as e:
            raise DestinationError(self.destination, f"cannot save workbook: {e}") from e
        logger.info("Saved %s", self.destination)

    def discard(self) -> None:
        logger.warning("Discarding unsaved changes to %s", self.destination)
