"""
Source adapter protocol for work-session files.

Contract:
    SourceAdapter.read() yields one dict per source record (streaming), keyed
    by normalized column names (see ``normalize_key``).

Architecture: settlement_ingestion/adapters.  File I/O only, no DB or kernel
imports.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Iterator, Protocol, runtime_checkable

# Column spellings seen in exports of the field app, mapped to the canonical
# work-session keys.
KEY_ALIASES = {
    "session_id": "id",
    "user_id": "worker_id",
    "user_name": "worker_name",
    "worker": "worker_name",
    "project": "project_name",
    "date": "work_date",
    "hours": "total_hours",
}


def normalize_key(key: Any) -> str:
    """``"Work Date"`` and ``"workDate"`` both become ``"work_date"``."""
    text = str(key).strip()
    text = re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", text)
    text = re.sub(r"[\s\-]+", "_", text).lower()
    return KEY_ALIASES.get(text, text)


def normalize_row(item: dict[Any, Any]) -> dict[str, Any]:
    return {normalize_key(k): v for k, v in item.items() if k is not None}


@runtime_checkable
class SourceAdapter(Protocol):
    """Protocol for reading work-session files into record dicts."""

    def read(self, source_path: Path, options: dict[str, Any]) -> Iterator[dict[str, Any]]:
        """Yield one dict per source record."""
        ...
