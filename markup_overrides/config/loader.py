from __future__ import annotations

from pathlib import Path

from markup_overrides.config.schema import EngineConfig


class ConfigLoader:
    """Reads and writes the JSON engine configuration."""

    @staticmethod
    def load(path: str | Path | None = None) -> EngineConfig:
        """Validates the file at ``path``; no path means the built-in defaults."""

        if path is None:
            return EngineConfig()
        return ConfigLoader.loads(Path(path).read_text(encoding="utf-8"))

    @staticmethod
    def loads(text: str) -> EngineConfig:
        return EngineConfig.model_validate_json(text)

    @staticmethod
    def save(config: EngineConfig, path: str | Path) -> Path:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(config.model_dump_json(indent=2), encoding="utf-8")
        return target
