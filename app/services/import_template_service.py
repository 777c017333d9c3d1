"""
app/services/import_template_service.py

Blank ``.xlsx`` import template for an importable entity.

Sheets
------
    Data           - header row with the schema fields, then blank rows whose
                     categorical columns carry dropdowns
    Valid Options  - one column per allowed-set feeding those dropdowns
    Instructions   - required / optional columns and the date format

A dropdown is only added when its allowed-set has values; boolean columns
get a fixed TRUE / FALSE list.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Mapping
from functools import lru_cache
from io import BytesIO
from typing import Final

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.datavalidation import DataValidation
from openpyxl.worksheet.worksheet import Worksheet

from app.config import ExportSettings, get_export_settings
from app.domain.records import IMPORTABLE_ENTITIES, RecordSchema, get_schema
from app.services.bulk_import_service import UnknownEntityError
from app.services.export_service import HEADER_FILL, HEADER_FONT

logger = logging.getLogger(__name__)

DATA_SHEET: Final[str] = "Data"
OPTIONS_SHEET: Final[str] = "Valid Options"
INSTRUCTIONS_SHEET: Final[str] = "Instructions"

_OPTIONS_FILL = PatternFill(start_color="FFD3D3D3", end_color="FFD3D3D3", fill_type="solid")
_FLAG_LIST: Final[str] = '"TRUE,FALSE"'
_DATE_EXAMPLE: Final[str] = "01 Jan 2026"


def option_columns(schema: RecordSchema) -> list[str]:
    """
    Allowed-set names used by *schema*, first use first, without repeats.
    """

    seen: list[str] = []
    for set_name in schema.categorical_fields.values():
        if set_name not in seen:
            seen.append(set_name)
    return seen


class ImportTemplateService:
    """
    Builds import templates whose dropdowns match the current master data.
    """

    def __init__(self, settings: ExportSettings) -> None:
        self._settings = settings

    def build(self, entity: str, allowed_sets: Mapping[str, Collection[str]]) -> bytes:
        """
        Return the template workbook bytes for *entity*.

        Raises UnknownEntityError when *entity* does not support bulk import.
        """

        if entity not in IMPORTABLE_ENTITIES:
            raise UnknownEntityError(f"Entity {entity!r} does not support bulk import.")
        schema = get_schema(entity)

        workbook = Workbook()
        data_sheet = workbook.active
        data_sheet.title = DATA_SHEET
        options_sheet = workbook.create_sheet(OPTIONS_SHEET)
        instructions_sheet = workbook.create_sheet(INSTRUCTIONS_SHEET)

        option_column_by_set = self._write_options(options_sheet, schema, allowed_sets)
        self._write_data(data_sheet, schema)
        dropdowns = self._add_dropdowns(data_sheet, schema, allowed_sets, option_column_by_set)
        self._write_instructions(instructions_sheet, schema)

        buffer = BytesIO()
        workbook.save(buffer)
        logger.info(
            "Import template built entity=%s columns=%s dropdowns=%s",
            entity,
            len(schema.fields),
            dropdowns,
        )
        return buffer.getvalue()

    # ------------------------------------------------------------------
    # Sheets
    # ------------------------------------------------------------------

    def _write_data(self, sheet: Worksheet, schema: RecordSchema) -> None:
        sheet.append(list(schema.fields))
        for cell in sheet[1]:
            cell.fill = HEADER_FILL
            cell.font = HEADER_FONT
            cell.alignment = Alignment(horizontal="center", vertical="center")
        for index in range(1, len(schema.fields) + 1):
            sheet.column_dimensions[get_column_letter(index)].width = self._settings.column_width
        sheet.freeze_panes = "A2"

    def _write_options(
        self,
        sheet: Worksheet,
        schema: RecordSchema,
        allowed_sets: Mapping[str, Collection[str]],
    ) -> dict[str, str]:
        column_by_set: dict[str, str] = {}
        for index, set_name in enumerate(option_columns(schema), start=1):
            letter = get_column_letter(index)
            column_by_set[set_name] = letter
            header = sheet.cell(row=1, column=index, value=set_name)
            header.font = Font(bold=True)
            header.fill = _OPTIONS_FILL
            for offset, value in enumerate(allowed_sets.get(set_name) or (), start=2):
                sheet.cell(row=offset, column=index, value=value)
            sheet.column_dimensions[letter].width = self._settings.column_width
        return column_by_set

    def _add_dropdowns(
        self,
        sheet: Worksheet,
        schema: RecordSchema,
        allowed_sets: Mapping[str, Collection[str]],
        option_column_by_set: Mapping[str, str],
    ) -> int:
        last_row = self._settings.template_rows + 1
        added = 0
        for index, field_name in enumerate(schema.fields, start=1):
            letter = get_column_letter(index)
            if field_name in schema.boolean_fields:
                formula = _FLAG_LIST
            elif field_name in schema.categorical_fields:
                set_name = schema.categorical_fields[field_name]
                values = allowed_sets.get(set_name) or ()
                if not values:
                    continue
                column = option_column_by_set[set_name]
                formula = f"'{OPTIONS_SHEET}'!${column}$2:${column}${len(values) + 1}"
            else:
                continue

            validation = DataValidation(type="list", formula1=formula, allow_blank=True)
            validation.add(f"{letter}2:{letter}{last_row}")
            sheet.add_data_validation(validation)
            added += 1
        return added

    def _write_instructions(self, sheet: Worksheet, schema: RecordSchema) -> None:
        required = [
            name for name in schema.fields
            if name in schema.required_fields or name == schema.date_field
        ]
        optional = [name for name in schema.fields if name not in required]

        lines = [
            f"{schema.entity} import template",
            "",
            f"Fill in the '{DATA_SHEET}' sheet starting on row 2; row 1 is the header.",
            f"At most {self._settings.template_rows} rows per upload. Leave a cell empty when there is no data.",
            f"Dropdown values come from the '{OPTIONS_SHEET}' sheet and must match exactly.",
        ]
        if schema.date_field is not None:
            lines.append(f"Date format: {_DATE_EXAMPLE} (DD Mon YYYY).")
        lines += ["", "Required columns:"]
        lines += [f"  {get_column_letter(schema.fields.index(name) + 1)}. {name}" for name in required]
        lines += ["", "Optional columns:"]
        lines += [f"  {get_column_letter(schema.fields.index(name) + 1)}. {name}" for name in optional]

        for text in lines:
            sheet.append([text])
        sheet["A1"].font = Font(bold=True, size=14)
        sheet.column_dimensions["A"].width = 80


@lru_cache(maxsize=1)
def get_import_template_service() -> ImportTemplateService:
    return ImportTemplateService(get_export_settings())
