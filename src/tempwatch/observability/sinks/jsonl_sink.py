"""JSONL file sink: append one JSON object per event."""

from __future__ import annotations

import json
from pathlib import Path


class JsonlSink:
    """Append JSON lines to a file. Opens per write so rotation is safe."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._path

    def write(self, event_dict: dict) -> None:
        line = json.dumps(event_dict, default=str, ensure_ascii=False) + "\n"
        with open(self._path, "a", encoding="utf-8") as f:
            f.write(line)
