from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

Number = Union[int, float]
ExportFormat = Literal["single", "separate"]


class Position(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: Number
    y: Number


class BoxSize(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: Number
    height: Number


class ViewportSize(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: Number
    height: Number


Viewport = Union[str, ViewportSize]


class OriginalValues(BaseModel):
    """Pre-edit snapshot carried alongside an override for restoration."""

    model_config = ConfigDict(frozen=True)

    text: str | None = None
    styles: dict[str, str] | None = None
    html: str | None = None
    attributes: dict[str, str] | None = None
    position: Position | None = None
    size: BoxSize | None = None

    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in type(self).model_fields)


class ElementOverride(BaseModel):
    """One recorded edit against the node(s) addressed by ``selector``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    selector: str
    text: str | None = None
    styles: dict[str, str] | None = None
    html: str | None = None
    attributes: dict[str, str] | None = None
    position: Position | None = None
    size: BoxSize | None = None
    timestamp: Number
    ai_generated: bool = Field(default=False, alias="aiGenerated")
    original: OriginalValues | None = None
    viewport: Viewport | None = None

    @field_validator("selector")
    @classmethod
    def validate_selector(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("selector must be a non-empty string")
        return value

    @field_validator("viewport")
    @classmethod
    def normalize_viewport(cls, value: Viewport | None) -> Viewport | None:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        return json.dumps(self.to_payload(), sort_keys=True)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> ElementOverride:
        return cls.model_validate(payload)

    def without_viewport(self) -> ElementOverride:
        return self.model_copy(update={"viewport": None})


@dataclass(slots=True)
class Bounds:
    x: float
    y: float
    width: float
    height: float


@dataclass(slots=True)
class ParsedElement:
    identifier: str
    tag_name: str
    attributes: dict[str, str] = field(default_factory=dict)
    inline_styles: dict[str, str] = field(default_factory=dict)
    selector: str = ""
    text_content: str = ""
    children: list[ParsedElement] = field(default_factory=list)
    parent: ParsedElement | None = field(default=None, repr=False, compare=False)
    bounds: Bounds | None = None

    def iter_tree(self):
        yield self
        for child in self.children:
            yield from child.iter_tree()


@dataclass(slots=True)
class ExternalResources:
    stylesheets: list[str] = field(default_factory=list)
    scripts: list[str] = field(default_factory=list)
    images: list[str] = field(default_factory=list)


@dataclass(slots=True)
class HtmlParseResult:
    root: ParsedElement
    element_map: dict[str, ParsedElement] = field(default_factory=dict)
    styles: str = ""
    scripts: str = ""
    external_resources: ExternalResources = field(default_factory=ExternalResources)


@dataclass(slots=True)
class ModifiedElement:
    selector: str
    changes: ElementOverride


@dataclass(slots=True)
class HtmlDiff:
    added: list[ParsedElement] = field(default_factory=list)
    modified: list[ModifiedElement] = field(default_factory=list)
    removed: list[ParsedElement] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.added or self.modified or self.removed)


@dataclass(slots=True)
class ExportResult:
    html: str
    css: str | None = None
    js: str | None = None
