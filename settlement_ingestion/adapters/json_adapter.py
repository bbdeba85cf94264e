"""
JSON source adapter.

Handles a JSON array (file is [{...}, {...}]) and JSON Lines (one object per
line).  Configurable: json_path for nested arrays (e.g. "data.sessions"),
format "array" | "jsonl".  Non-object items are skipped.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterator

from settlement_ingestion.adapters.base import normalize_row


def _get_nested(data: Any, path: str) -> Any:
    """Follow a dot-separated path into dicts/lists.  None if a key is missing."""
    for key in path.split("."):
        key = key.strip()
        if not key:
            continue
        if isinstance(data, list):
            try:
                data = data[int(key)]
            except (ValueError, IndexError):
                return None
        elif isinstance(data, dict) and key in data:
            data = data[key]
        else:
            return None
    return data


class JsonSourceAdapter:
    """Read JSON array or JSON Lines files as one dict per record."""

    def read(self, source_path: Path, options: dict[str, Any]) -> Iterator[dict[str, Any]]:
        fmt = options.get("format", "array")
        encoding = options.get("encoding", "utf-8")

        if fmt == "jsonl":
            with source_path.open("r", encoding=encoding) as f:
                for line in f:
                    line = line.strip()
                    if not line:
                        continue
                    item = json.loads(line)
                    if isinstance(item, dict):
                        yield normalize_row(item)
            return

        with source_path.open("r", encoding=encoding) as f:
            data = json.load(f)
        json_path = options.get("json_path")
        root = _get_nested(data, json_path) if json_path else data
        if not isinstance(root, list):
            return
        for item in root:
            if isinstance(item, dict):
                yield normalize_row(item)
