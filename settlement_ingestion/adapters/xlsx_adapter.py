"""
XLSX source adapter for work-session sheets.

The first non-empty row of the sheet (after skip_rows) is the header.  Date
cells stay ``date``/``datetime`` values and numeric cells stay numbers, so
the ingestion boundary can parse them without a string round-trip.

source_options:
    sheet: 0-based sheet index (int) or sheet name (str).  Default: active sheet.
    skip_rows: rows to skip at the top of the sheet.  Default: 0.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterator

import openpyxl

from settlement_ingestion.adapters.base import normalize_key


def _cell_value(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class XlsxSourceAdapter:
    """Read .xlsx files as one dict per row."""

    def read(self, source_path: Path, options: dict[str, Any]) -> Iterator[dict[str, Any]]:
        wb = openpyxl.load_workbook(source_path, read_only=True, data_only=True)
        try:
            sheet = self._get_sheet(wb, options)
            skip_rows = int(options.get("skip_rows", 0))

            headers: list[str] | None = None
            for values in sheet.iter_rows(min_row=1 + skip_rows, values_only=True):
                cells = [_cell_value(v) for v in values]
                if not any(v is not None for v in cells):
                    continue
                if headers is None:
                    headers = [
                        normalize_key(v) if v is not None else f"column_{i + 1}"
                        for i, v in enumerate(cells)
                    ]
                    continue
                yield dict(zip(headers, cells))
        finally:
            wb.close()

    def _get_sheet(self, wb: Any, options: dict[str, Any]) -> Any:
        sheet_ref = options.get("sheet")
        if sheet_ref is None:
            return wb.active
        if isinstance(sheet_ref, int):
            return wb.worksheets[sheet_ref]
        return wb[sheet_ref]
