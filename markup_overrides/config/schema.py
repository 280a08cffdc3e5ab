from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from markup_overrides.core.models import ViewportSize
from markup_overrides.core.viewport import PRESET_VIEWPORTS

SUPPORTED_PARSERS = {"html.parser", "lxml", "html5lib"}


def default_viewports() -> dict[str, ViewportSize]:
    return dict(PRESET_VIEWPORTS)


class ExportSettings(BaseModel):
    title: str = "Generated Page"
    lang: str = "en"
    indent: int = Field(default=2, ge=0)


class EngineConfig(BaseModel):
    parser_features: str = "html.parser"
    export: ExportSettings = Field(default_factory=ExportSettings)
    viewports: dict[str, ViewportSize] = Field(default_factory=default_viewports)

    @field_validator("parser_features")
    @classmethod
    def validate_parser(cls, value: str) -> str:
        normalized = value.lower()
        if normalized not in SUPPORTED_PARSERS:
            raise ValueError(f"Unsupported parser: {value}")
        return normalized

    @field_validator("viewports")
    @classmethod
    def normalize_viewports(cls, value: dict[str, ViewportSize]) -> dict[str, ViewportSize]:
        normalized = {name.strip().lower(): size for name, size in value.items()}
        invalid = [name for name, size in normalized.items() if size.width <= 0 or size.height <= 0]
        if invalid:
            raise ValueError(f"Viewport dimensions must be positive: {', '.join(invalid)}")
        return normalized
