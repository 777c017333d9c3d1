"""
app/services/export_service.py

Pivot table export to an ``.xlsx`` workbook.

Layout
------
    title row   - optional; report title, merged across the table
    filter row  - optional; "Filters: ..." summary, merged, then a blank row
    header row  - row label, one cell per column key, ``TOTAL``
    body rows   - one per pivot row: key, counts, row total
    total row   - ``TOTAL``, column totals, grand total

Header and total rows are bold on a filled background; every written cell
gets a thin border. Column widths are fixed from ExportSettings.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from functools import lru_cache
from io import BytesIO
from typing import Any, Final

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from analytics.pivot import PivotResult
from app.config import ExportSettings, get_export_settings

logger = logging.getLogger(__name__)

TOTAL_LABEL: Final[str] = "TOTAL"
XLSX_MEDIA_TYPE: Final[str] = (
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
)

# title, filter summary, blank
_PREAMBLE_ROWS: Final[int] = 3

HEADER_FILL = PatternFill(start_color="FF0D334D", end_color="FF0D334D", fill_type="solid")
HEADER_FONT = Font(bold=True, color="FFFFFFFF")
_TOTAL_FILL = PatternFill(start_color="FFAFCC3C", end_color="FFAFCC3C", fill_type="solid")
_TOTAL_FONT = Font(bold=True)
_TITLE_FONT = Font(bold=True, size=16)
_FILTER_FONT = Font(italic=True, size=10)
_THIN = Side(style="thin")
BORDER = Border(left=_THIN, right=_THIN, top=_THIN, bottom=_THIN)


def pivot_to_frame(pivot: PivotResult, row_label: str) -> pd.DataFrame:
    """
    Flatten a PivotResult into a DataFrame including the TOTAL column and row.
    """

    columns = [row_label, *pivot.column_keys, TOTAL_LABEL]
    rows = [
        [
            key,
            *(pivot.cell(key, column) for column in pivot.column_keys),
            pivot.row_totals.get(key, 0),
        ]
        for key in pivot.row_keys
    ]
    rows.append(
        [
            TOTAL_LABEL,
            *(pivot.column_totals.get(column, 0) for column in pivot.column_keys),
            pivot.grand_total,
        ]
    )
    return pd.DataFrame(rows, columns=columns)


def filter_summary(filters: Mapping[str, Any]) -> str:
    """
    ``Filters: From: 01 Jan 2026 CS: Ani``; blank and ``all`` values are skipped.
    """

    active = [
        f"{label}: {value}"
        for label, value in filters.items()
        if value is not None and str(value).strip() not in {"", "all"}
    ]
    return "Filters: " + (" ".join(active) if active else "none")


class PivotExportService:
    """
    Renders pivot tables as styled workbooks.
    """

    def __init__(self, settings: ExportSettings) -> None:
        self._settings = settings

    def export(
        self,
        pivot: PivotResult,
        *,
        row_label: str = "Month-Year",
        sheet_name: str = "Report",
        title: str | None = None,
        filters: Mapping[str, Any] | None = None,
    ) -> bytes:
        """
        Return the workbook bytes for *pivot*.

        With a *title* or *filters* the table starts on row 4, below the
        title row, the filter summary row and one blank row.
        """

        frame = pivot_to_frame(pivot, row_label)
        has_preamble = title is not None or filters is not None
        header_row = _PREAMBLE_ROWS + 1 if has_preamble else 1
        columns = len(frame.columns)

        buffer = BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            frame.to_excel(writer, sheet_name=sheet_name, index=False, startrow=header_row - 1)
            sheet = writer.sheets[sheet_name]
            if title is not None:
                self._banner(sheet, 1, title, font=_TITLE_FONT, height=30, columns=columns)
            if filters is not None:
                self._banner(sheet, 2, filter_summary(filters), font=_FILTER_FONT, height=20, columns=columns)
            self._style(sheet, header_row=header_row, last_row=header_row + len(frame), columns=columns)

        logger.info(
            "Pivot exported rows=%s columns=%s grand_total=%s",
            len(pivot.row_keys),
            len(pivot.column_keys),
            pivot.grand_total,
        )
        return buffer.getvalue()

    @staticmethod
    def _banner(sheet: Worksheet, row: int, text: str, *, font: Font, height: int, columns: int) -> None:
        sheet.merge_cells(start_row=row, start_column=1, end_row=row, end_column=columns)
        cell = sheet.cell(row=row, column=1, value=text)
        cell.font = font
        sheet.row_dimensions[row].height = height

    def _style(self, sheet: Worksheet, *, header_row: int, last_row: int, columns: int) -> None:
        for row in sheet.iter_rows(min_row=header_row, max_row=last_row, max_col=columns):
            for cell in row:
                cell.border = BORDER
                if cell.row == header_row:
                    cell.fill = HEADER_FILL
                    cell.font = HEADER_FONT
                    cell.alignment = Alignment(horizontal="center", vertical="center")
                elif cell.row == last_row:
                    cell.fill = _TOTAL_FILL
                    cell.font = _TOTAL_FONT

        sheet.column_dimensions["A"].width = self._settings.row_label_width
        for index in range(2, columns + 1):
            sheet.column_dimensions[get_column_letter(index)].width = self._settings.column_width


@lru_cache(maxsize=1)
def get_pivot_export_service() -> PivotExportService:
    return PivotExportService(get_export_settings())
