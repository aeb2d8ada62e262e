"""Row rendering for DocIndexLib.

Renderers turn an ordered sequence of PathEntry records into report rows.
A row is a tuple of Cell values that carry their display format and their
links as data; turning a link into a destination-specific form (a cell
hyperlink, a HYPERLINK formula) is left to the writer.

Two column layouts are supported:

    delimited   No. | Type | MIME Type | File Path | File Name
    per-level   No. | Type | MIME Type | Full Path | Path (Level 0) | ... | Path (Level K-1)

In the delimited layout every segment of the File Path text links to its
own folder or file. In the per-level layout each route element gets its
own linked column, and K is the longest route in the run.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .config import DEFAULTS, RenderSchema
from .core.entry import PathEntry

FILE_LABEL = "File"
FOLDER_LABEL = "Directory"


class CellFormat(Enum):
    """How the destination should interpret a cell's value."""
    NUMBER = "0"    # Integer number format
    TEXT = "@"      # Plain text, never parsed as number/date/formula


@dataclass(frozen=True)
class LinkSpan:
    """A hyperlink over ``text[start:end]`` of a cell's value."""
    start: int
    end: int
    url: str


@dataclass(frozen=True)
class Cell:
    """One rendered cell.

    ``link`` targets the whole cell. ``link_spans`` target substrings of
    the value; a cell carries one or the other, never both.
    """
    value: object = ""
    format: CellFormat = CellFormat.TEXT
    link: Optional[str] = None
    link_spans: Tuple[LinkSpan, ...] = ()

    @property
    def text(self) -> str:
        return "" if self.value is None else str(self.value)

    @property
    def has_link(self) -> bool:
        return self.link is not None or bool(self.link_spans)


Row = Tuple[Cell, ...]


def escape_formula_text(text: str) -> str:
    """Double every ``"`` so ``text`` can sit inside a formula string literal."""
    return text.replace('"', '""')


def hyperlink_formula(url: str, text: str) -> str:
    """Build a spreadsheet ``HYPERLINK`` formula for ``text`` linking to ``url``."""
    return f'=HYPERLINK("{escape_formula_text(url)}", "{escape_formula_text(text)}")'


def number_cell(value: int) -> Cell:
    return Cell(value, CellFormat.NUMBER)


def text_cell(value: Optional[str], link: Optional[str] = None) -> Cell:
    return Cell("" if value is None else value, CellFormat.TEXT, link=link)


def path_cell(entry: PathEntry, separator: str) -> Cell:
    """Joined route names, each segment linked to its own node.

    Segment i spans exactly the characters of its name; the next segment
    starts after one separator.
    """
    spans = []
    start = 0
    for node in entry.full_route:
        end = start + len(node.name())
        spans.append(LinkSpan(start, end, node.url()))
        start = end + len(separator)
    return Cell(entry.joined_path(separator), CellFormat.TEXT, link_spans=tuple(spans))


class RowRenderer(ABC):
    """Abstract base class for column layouts."""

    def __init__(self, path_separator: str = DEFAULTS.path_separator):
        self.path_separator = path_separator

    @abstractmethod
    def header(self, entries: Sequence[PathEntry]) -> List[str]:
        """Return column labels for a table holding ``entries``."""
        pass

    @abstractmethod
    def path_columns(self, entry: PathEntry) -> List[Cell]:
        """Return the layout-specific columns for one entry."""
        pass

    def common_columns(self, number: int, entry: PathEntry) -> List[Cell]:
        """No., Type and MIME Type cells."""
        node = entry.node
        if node.is_file():
            return [number_cell(number), text_cell(FILE_LABEL), text_cell(node.mime_type())]
        return [number_cell(number), text_cell(FOLDER_LABEL), text_cell("")]

    def render(self, entries: Sequence[PathEntry]) -> List[Row]:
        """Render ``entries`` in order, numbering rows from 1."""
        self.prepare(entries)
        return [
            tuple(self.common_columns(number, entry) + self.path_columns(entry))
            for number, entry in enumerate(entries, start=1)
        ]

    def prepare(self, entries: Sequence[PathEntry]) -> None:
        """Hook run once before rendering a batch of entries."""
        pass


class DelimitedPathRenderer(RowRenderer):
    """One joined path column with per-segment links, then the leaf name."""

    HEADER = ["No.", "Type", "MIME Type", "File Path", "File Name"]

    def header(self, entries: Sequence[PathEntry]) -> List[str]:
        return list(self.HEADER)

    def path_columns(self, entry: PathEntry) -> List[Cell]:
        node = entry.node
        return [
            path_cell(entry, self.path_separator),
            text_cell(node.name(), link=node.url()),
        ]


class PerLevelRenderer(RowRenderer):
    """A full-path column, then one linked column per route element."""

    COMMON_HEADER = ["No.", "Type", "MIME Type", "Full Path"]

    def __init__(self, path_separator: str = DEFAULTS.path_separator):
        super().__init__(path_separator)
        self._levels = 0

    @staticmethod
    def level_count(entries: Sequence[PathEntry]) -> int:
        """Longest route length across ``entries`` (0 when empty)."""
        return max((len(entry.full_route) for entry in entries), default=0)

    def prepare(self, entries: Sequence[PathEntry]) -> None:
        self._levels = self.level_count(entries)

    def header(self, entries: Sequence[PathEntry]) -> List[str]:
        levels = self.level_count(entries)
        return self.COMMON_HEADER + [f"Path (Level {level})" for level in range(levels)]

    def path_columns(self, entry: PathEntry) -> List[Cell]:
        node = entry.node
        cells = [text_cell(entry.joined_path(self.path_separator), link=node.url())]
        route = entry.full_route
        cells.extend(text_cell(step.name(), link=step.url()) for step in route)
        cells.extend(text_cell("") for _ in range(self._levels - len(route)))
        return cells


def create_renderer(schema, path_separator: str = DEFAULTS.path_separator) -> RowRenderer:
    """Create a renderer by schema.

    Args:
        schema: RenderSchema or its name ("delimited", "per-level")
        path_separator: Separator between route names

    Raises:
        ValueError: If the schema is not recognized
    """
    renderers = {
        RenderSchema.DELIMITED: DelimitedPathRenderer,
        RenderSchema.PER_LEVEL: PerLevelRenderer,
    }
    if isinstance(schema, str):
        by_name = {s.value: s for s in RenderSchema}
        key = schema.strip().lower().replace('_', '-')
        if key not in by_name:
            raise ValueError(
                f"Unknown schema: {schema}. Choose from: {', '.join(by_name)}"
            )
        schema = by_name[key]
    return renderers[schema](path_separator)


def render(entries: Sequence[PathEntry],
           path_separator: str = DEFAULTS.path_separator,
           schema: RenderSchema = RenderSchema.DELIMITED) -> List[Row]:
    """Render ``entries`` under ``schema``."""
    return create_renderer(schema, path_separator).render(entries)
