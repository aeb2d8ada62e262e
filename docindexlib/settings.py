"""Settings tables for DocIndexLib.

Settings live in a two-dimensional table whose first row is a header.
Each data row holds one setting as a (key, type, value) triple:

    key               type      value
    max-depth         number    5
    path-separator    string     >
    include-files     boolean   TRUE

The declared type is checked against the value's actual type when the
table is loaded, so a bad value is reported before any traversal starts.
Keys may be namespaced ("index.max-depth") and several tables can be
merged, later ones overriding earlier ones.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from openpyxl import load_workbook

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

KEY_COLUMN = "key"
TYPE_COLUMN = "type"
VALUE_COLUMN = "value"


def type_name(value: Any) -> str:
    """Name of a value's type in the settings-table vocabulary."""
    if value is None:
        return "undefined"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return "object"


def from_dict_rows(rows: Iterable[Mapping[str, Any]],
                   key_column: str = KEY_COLUMN,
                   type_column: str = TYPE_COLUMN,
                   value_column: str = VALUE_COLUMN) -> Dict[str, Any]:
    """Load settings from rows already keyed by column name.

    Raises:
        ConfigurationError: If a declared type does not match its value
    """
    settings: Dict[str, Any] = {}
    for row in rows:
        key = row.get(key_column)
        if key is None or key == "":
            continue
        declared = row.get(type_column)
        value = row.get(value_column)
        actual = type_name(value)
        if declared != actual:
            raise ConfigurationError(key, f"The {key} must be {declared}, but was {actual}.")
        settings[key] = value
    return settings


def table_to_dict_rows(table: Sequence[Sequence[Any]]) -> List[Dict[str, Any]]:
    """Turn a header-first 2-D table into one dict per data row.

    Rows that are entirely empty are dropped.
    """
    if not table:
        return []
    header = [str(h).strip() if h is not None else "" for h in table[0]]
    rows = []
    for raw in table[1:]:
        if all(cell is None or cell == "" for cell in raw):
            continue
        rows.append({name: raw[i] if i < len(raw) else None
                     for i, name in enumerate(header) if name})
    return rows


def from_table(table: Sequence[Sequence[Any]],
               key_column: str = KEY_COLUMN,
               type_column: str = TYPE_COLUMN,
               value_column: str = VALUE_COLUMN) -> Dict[str, Any]:
    """Load settings from a header-first 2-D table.

    Raises:
        ConfigurationError: If a required column is missing or a declared
            type does not match its value
    """
    if table:
        header = {str(h).strip() for h in table[0] if h is not None}
        for column in (key_column, type_column, value_column):
            if column not in header:
                raise ConfigurationError(column, f"Settings table has no '{column}' column")
    return from_dict_rows(table_to_dict_rows(table), key_column, type_column, value_column)


def from_worksheet(worksheet,
                   key_column: str = KEY_COLUMN,
                   type_column: str = TYPE_COLUMN,
                   value_column: str = VALUE_COLUMN) -> Dict[str, Any]:
    """Load settings from an openpyxl worksheet."""
    table = [list(row) for row in worksheet.iter_rows(values_only=True)]
    return from_table(table, key_column, type_column, value_column)


def from_workbook(path: Union[str, Path],
                  sheet_name: Optional[str] = None,
                  **columns: str) -> Dict[str, Any]:
    """Load settings from a sheet of an xlsx workbook.

    Args:
        path: Workbook file
        sheet_name: Sheet holding the settings (default: the active sheet)
        **columns: key_column / type_column / value_column overrides

    Raises:
        ConfigurationError: If the workbook or sheet cannot be read, or a
            value has the wrong type
    """
    try:
        workbook = load_workbook(path, read_only=True, data_only=True)
    except Exception as e:
        raise ConfigurationError(str(path), f"Cannot read settings workbook '{path}': {e}") from e
    try:
        if sheet_name is None:
            worksheet = workbook.active
        elif sheet_name in workbook.sheetnames:
            worksheet = workbook[sheet_name]
        else:
            raise ConfigurationError(sheet_name, f"Settings workbook '{path}' has no sheet '{sheet_name}'")
        settings = from_worksheet(worksheet, **columns)
    finally:
        workbook.close()
    logger.debug("Loaded %d settings from %s", len(settings), path)
    return settings


def scope(settings: Mapping[str, Any], name: str) -> Dict[str, Any]:
    """Extract the settings under ``name.`` with the prefix removed.

    Example:
        >>> scope({"taro.name": "taro", "jiro.name": "jiro"}, "taro")
        {'name': 'taro'}
    """
    prefix = name + "."
    return {key[len(prefix):]: value for key, value in settings.items() if key.startswith(prefix)}


def merge(*sources: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge settings left to right; later sources override earlier ones.

    Returns an empty dict when called with no arguments.
    """
    merged: Dict[str, Any] = {}
    for source in sources:
        merged.update(source)
    return merged
