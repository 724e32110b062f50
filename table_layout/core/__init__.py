"""Paragraph line breaking and cell, row, and table sizing."""

from table_layout.core.cell import Cell
from table_layout.core.paragraph import Paragraph, WrappedLine
from table_layout.core.row import Row
from table_layout.core.styles import HorizontalAlignment, LineStyle, VerticalAlignment
from table_layout.core.table import Table

__all__ = [
    "Cell",
    "HorizontalAlignment",
    "LineStyle",
    "Paragraph",
    "Row",
    "Table",
    "VerticalAlignment",
    "WrappedLine",
]
