from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from markup_overrides.core.merge import merge_overrides
from markup_overrides.core.models import ElementOverride


class OverrideJournal:
    """Persists the raw override history and the latest merged snapshot."""

    def __init__(self, root: str | Path = "artifacts") -> None:
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)
        self.history_path = self.root / "overrides.jsonl"
        self.merged_path = self.root / "merged_overrides.json"

    def write(self, override: ElementOverride) -> None:
        with self.history_path.open("a", encoding="utf-8") as handle:
            handle.write(override.to_json() + "\n")

    def write_many(self, overrides: Iterable[ElementOverride]) -> None:
        with self.history_path.open("a", encoding="utf-8") as handle:
            for override in overrides:
                handle.write(override.to_json() + "\n")

    def read(self) -> list[ElementOverride]:
        if not self.history_path.exists():
            return []
        overrides: list[ElementOverride] = []
        with self.history_path.open("r", encoding="utf-8") as handle:
            for line in handle:
                if line.strip():
                    overrides.append(ElementOverride.from_payload(json.loads(line)))
        return overrides

    def snapshot(self) -> list[ElementOverride]:
        merged = sorted(merge_overrides(self.read()), key=lambda override: override.selector)
        self.merged_path.write_text(
            json.dumps([override.to_payload() for override in merged], indent=2, sort_keys=True),
            encoding="utf-8",
        )
        return merged

    def read_snapshot(self) -> list[ElementOverride]:
        if not self.merged_path.exists():
            return []
        payload = json.loads(self.merged_path.read_text(encoding="utf-8"))
        return [ElementOverride.from_payload(item) for item in payload]

    def reset(self) -> None:
        for path in (self.history_path, self.merged_path):
            if path.exists():
                path.unlink()
