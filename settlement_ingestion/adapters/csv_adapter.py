"""
CSV source adapter.

Uses csv.DictReader.  Configurable: delimiter, encoding, skip_rows.  Handles
BOM via utf-8-sig when encoding is utf-8 (spreadsheet exports in Japan often
carry one).  Streams rows.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, Iterator

from settlement_ingestion.adapters.base import normalize_row


def _get_encoding(options: dict[str, Any]) -> str:
    enc = options.get("encoding", "utf-8")
    if enc.lower() == "utf-8":
        return "utf-8-sig"
    return enc


class CsvSourceAdapter:
    """Read CSV files with a header row as one dict per row."""

    def read(self, source_path: Path, options: dict[str, Any]) -> Iterator[dict[str, Any]]:
        encoding = _get_encoding(options)
        delimiter = options.get("delimiter", ",")
        skip_rows = int(options.get("skip_rows", 0))

        with source_path.open("r", encoding=encoding, newline="") as f:
            for _ in range(skip_rows):
                next(f, None)
            for row in csv.DictReader(f, delimiter=delimiter):
                yield normalize_row(row)
