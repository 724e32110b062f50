"""Layout reports: build a Table from a request and describe its geometry.

WHY: The layout engine's output is a set of numbers (row heights, cell
widths, fitted font sizes, wrapped lines) that an external drawing or
pagination driver consumes. A plain JSON-compatible dict is the simplest
stable hand-off, and validating it against a schema catches regressions
in its shape before a consumer does.

HOW: build_table() turns a LayoutRequest into core Table/Row/Cell
objects. build_report() walks the table and collects every measurement.
validate_report() checks the result against the bundled JSON schema
(schemas/layout_report.schema.json) with jsonschema.

RULES:
- Row heights are queried once per row, so fixed-height rows fit their
  fonts before cell font sizes are reported
- Border widths are reported as numbers, or null for a cleared border
- Line offsets are the paragraph's horizontal alignment offsets
- The schema file is read once and cached
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema

from table_layout.core.cell import Cell
from table_layout.core.row import Row
from table_layout.core.styles import LineStyle
from table_layout.core.table import Table
from table_layout.fonts import FontContext, FontFamily
from table_layout.models import LayoutRequest

logger = logging.getLogger(__name__)

_SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "layout_report.schema.json"

_CACHED_SCHEMA: Optional[dict] = None


def _get_schema() -> dict:
    """Load and cache the layout report JSON schema."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH) as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def build_table(request: LayoutRequest, context: Optional[FontContext] = None) -> Table:
    """Create the core objects described by ``request``.

    Raises:
        CellWidthError: if a cell is wider than its row.
    """
    table = Table(
        request.width,
        margin=request.margin,
        font_family=FontFamily.standard(request.font),
        context=context,
    )
    for row_request in request.rows:
        row = table.create_row(
            row_request.height,
            header=row_request.header,
            fixed_height=row_request.fixed_height,
        )
        row.line_spacing = row_request.line_spacing
        for cell_request in row_request.cells:
            cell = row.create_cell(
                cell_request.width,
                cell_request.text,
                align=cell_request.align,
                valign=cell_request.valign,
                is_percent=cell_request.percent,
            )
            cell.font_size = cell_request.font_size
            cell.rotated = cell_request.rotated
            cell.height = cell_request.height
            padding = cell_request.padding
            cell.set_padding(padding, padding, padding, padding)
    return table


def _border(style: Optional[LineStyle]) -> Optional[float]:
    return style.width if style is not None else None


def _cell_report(cell: Cell) -> Dict[str, Any]:
    paragraph = cell.paragraph
    lines: List[Dict[str, Any]] = [
        {
            "text": line.text,
            "width": line.width,
            "offset": paragraph.horizontal_offset(index),
        }
        for index, line in enumerate(paragraph.wrapped_lines)
    ]
    return {
        "width": cell.width,
        "height": cell.cell_height,
        "font": cell.font.name,
        "font_size": cell.font_size,
        "rotated": cell.rotated,
        "text_width": cell.text_width,
        "text_height": cell.text_height,
        "horizontal_free_space": cell.horizontal_free_space,
        "vertical_free_space": cell.vertical_free_space,
        "borders": {
            "left": _border(cell.left_border),
            "right": _border(cell.right_border),
            "top": _border(cell.top_border),
            "bottom": _border(cell.bottom_border),
        },
        "lines": lines,
    }


def _row_report(row: Row) -> Dict[str, Any]:
    height = row.height
    return {
        "height": height,
        "header": row.header,
        "fixed_height": row.fixed_height,
        "extra_width": row.last_cell_extra_width,
        "cells": [_cell_report(cell) for cell in row.cells],
    }


def build_report(table: Table) -> Dict[str, Any]:
    """Describe every row and cell of ``table`` as a JSON-compatible dict."""
    rows = [_row_report(row) for row in table.rows]
    report = {
        "width": table.width,
        "margin": table.margin,
        "x_end": table.margin + table.width,
        "height": sum(row["height"] for row in rows),
        "rows": rows,
    }
    logger.debug("Built layout report for %d rows", len(rows))
    return report


def validate_report(report: Dict[str, Any]) -> None:
    """Validate a report against the bundled schema.

    Raises:
        jsonschema.ValidationError: if the report does not match the schema.
    """
    jsonschema.validate(instance=report, schema=_get_schema())


def layout(request: LayoutRequest, context: Optional[FontContext] = None) -> Dict[str, Any]:
    """Build, measure, and validate in one call."""
    report = build_report(build_table(request, context))
    validate_report(report)
    return report
