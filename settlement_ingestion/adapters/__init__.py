"""Source adapters for work-session files (file I/O only, no DB)."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterator

from settlement_kernel.exceptions import UnsupportedSourceFormatError
from settlement_ingestion.adapters.base import SourceAdapter, normalize_key, normalize_row
from settlement_ingestion.adapters.csv_adapter import CsvSourceAdapter
from settlement_ingestion.adapters.json_adapter import JsonSourceAdapter
from settlement_ingestion.adapters.xlsx_adapter import XlsxSourceAdapter

# suffix -> (adapter class, default options)
_ADAPTERS: dict[str, tuple[type, dict[str, Any]]] = {
    ".csv": (CsvSourceAdapter, {}),
    ".json": (JsonSourceAdapter, {"format": "array"}),
    ".jsonl": (JsonSourceAdapter, {"format": "jsonl"}),
    ".xlsx": (XlsxSourceAdapter, {}),
}


def adapter_for(source_path: Path) -> tuple[SourceAdapter, dict[str, Any]]:
    """
    Adapter and default options for a file, chosen by suffix.

    Raises:
        UnsupportedSourceFormatError: for any other suffix.
    """
    suffix = source_path.suffix.lower()
    try:
        adapter_cls, defaults = _ADAPTERS[suffix]
    except KeyError:
        raise UnsupportedSourceFormatError(suffix or "<none>") from None
    return adapter_cls(), dict(defaults)


def read_source(
    source_path: Path | str,
    options: dict[str, Any] | None = None,
) -> Iterator[dict[str, Any]]:
    """Yield normalized record dicts from a CSV, JSON, JSON Lines or XLSX file."""
    path = Path(source_path)
    adapter, merged = adapter_for(path)
    merged.update(options or {})
    return adapter.read(path, merged)


__all__ = [
    "SourceAdapter",
    "CsvSourceAdapter",
    "JsonSourceAdapter",
    "XlsxSourceAdapter",
    "adapter_for",
    "normalize_key",
    "normalize_row",
    "read_source",
]
