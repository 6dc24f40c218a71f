# synergy_planner/io/sources.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional


class FileSource:
    """Reads one JSON document from a file on disk."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def load_json(self) -> Any:
        with self.path.open("r", encoding="utf-8") as f:
            return json.load(f)

    def describe(self) -> str:
        return str(self.path)


class DictSource:
    """Wraps JSON that is already in memory (request bodies, test fixtures).

    `label` only shows up in log and error messages.
    """

    def __init__(self, data: Any, label: Optional[str] = None):
        self.data = data
        self.label = label or "<memory>"

    def exists(self) -> bool:
        return self.data is not None

    def load_json(self) -> Any:
        return self.data

    def describe(self) -> str:
        return self.label


class DataDirectory:
    """A dataset folder; hands out FileSources for its well-known files."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def source(self, filename: str) -> FileSource:
        return FileSource(self.root / filename)

    def exists(self) -> bool:
        return self.root.is_dir()
