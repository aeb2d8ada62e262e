"""Report destinations for DocIndexLib."""

from .base import ReportWriter
from .csv_writer import CsvReportWriter
from .excel import ExcelReportWriter

__all__ = [
    'ReportWriter',
    'CsvReportWriter',
    'ExcelReportWriter',
]
