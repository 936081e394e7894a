"""
Spreadsheet export of alarm rows.

Writes a single ``Alarm Tags`` worksheet with a styled ``Tag`` /
``Description`` header, zebra-striped data rows, a bordered grid and a
frozen header row.
"""

from __future__ import annotations

import logging
import os
from typing import Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from .models import AlarmRow
from .schema import (
    COLUMN_WIDTHS,
    HEADER_BOTTOM_BORDER_COLOR,
    HEADER_FILL_COLOR,
    HEADER_FONT_COLOR,
    HEADER_ROW_HEIGHT,
    HEADERS,
    INSIDE_BORDER_COLOR,
    OUTSIDE_BORDER_COLOR,
    STRIPE_FILL_COLOR,
    WORKSHEET_TITLE,
)

logger = logging.getLogger(__name__)


def _solid(color: str) -> PatternFill:
    return PatternFill(start_color=color, end_color=color, fill_type="solid")


def _grid_border(row: int, col: int, last_row: int, last_col: int) -> Border:
    """Medium outline around the used range, thin lines inside it."""
    outside = Side(style="medium", color=OUTSIDE_BORDER_COLOR)
    inside = Side(style="thin", color=INSIDE_BORDER_COLOR)
    return Border(
        left=outside if col == 1 else inside,
        right=outside if col == last_col else inside,
        top=outside if row == 1 else inside,
        bottom=outside if row == last_row else inside,
    )


def build_workbook(rows: Sequence[AlarmRow]) -> Workbook:
    """Return an in-memory workbook holding *rows*."""
    wb = Workbook()
    ws = wb.active
    ws.title = WORKSHEET_TITLE

    header_font = Font(bold=True, color=HEADER_FONT_COLOR)
    header_fill = _solid(HEADER_FILL_COLOR)
    stripe_fill = _solid(STRIPE_FILL_COLOR)

    for col, header in enumerate(HEADERS, 1):
        cell = ws.cell(row=1, column=col, value=header)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = Alignment(vertical="center")

    for row_idx, row in enumerate(rows, 2):
        for col, value in enumerate((row.tag, row.description), 1):
            cell = ws.cell(row=row_idx, column=col, value=value)
            # Always text; openpyxl would store "=..." as a formula.
            cell.data_type = "s"
        if row_idx % 2 == 0:
            for col in range(1, len(HEADERS) + 1):
                ws.cell(row=row_idx, column=col).fill = stripe_fill

    last_row = max(1, len(rows) + 1)
    last_col = len(HEADERS)
    for r in range(1, last_row + 1):
        for c in range(1, last_col + 1):
            ws.cell(row=r, column=c).border = _grid_border(r, c, last_row, last_col)

    # Header keeps its heavy underline on top of the grid.
    header_bottom = Side(style="thick", color=HEADER_BOTTOM_BORDER_COLOR)
    for c in range(1, last_col + 1):
        cell = ws.cell(row=1, column=c)
        b = cell.border
        cell.border = Border(left=b.left, right=b.right, top=b.top, bottom=header_bottom)

    for letter, width in COLUMN_WIDTHS.items():
        ws.column_dimensions[letter].width = width
    ws.row_dimensions[1].height = HEADER_ROW_HEIGHT
    ws.freeze_panes = "A2"

    return wb


def export_rows(output_path: str, rows: Sequence[AlarmRow]) -> int:
    """Write *rows* to the ``.xlsx`` file *output_path*.

    Missing parent directories are created.

    Returns:
        The number of data rows written.
    """
    directory = os.path.dirname(output_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    wb = build_workbook(rows)
    wb.save(output_path)
    logger.info("Saved %d rows to: %s", len(rows), output_path)
    return len(rows)
