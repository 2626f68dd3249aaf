"""File-based persistence for the lookup outputs."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..config import settings

LOCATIONS_FILENAME = "clinics-with-ids.json"
ADDRESS_CHECK_FILENAME = "clinics-address-check.json"
LOOKUP_DIRNAME = "clinics-zip-code-lookup"
COMBINED_LOOKUP_FILENAME = "all.json"


class FileStorage:
    """Thin wrapper around the output root for writing the lookup JSON files."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = (root or settings.output_root).resolve()
        self.lookup_root = self.root / LOOKUP_DIRNAME

    @property
    def locations_path(self) -> Path:
        return self.root / LOCATIONS_FILENAME

    @property
    def address_check_path(self) -> Path:
        return self.root / ADDRESS_CHECK_FILENAME

    @property
    def combined_lookup_path(self) -> Path:
        return self.lookup_root / COMBINED_LOOKUP_FILENAME

    def region_lookup_path(self, code: str) -> Path:
        return self.lookup_root / f"{code}.json"

    def write_json(self, path: Path, data: Any, *, indent: int = 4) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, ensure_ascii=False, indent=indent)
