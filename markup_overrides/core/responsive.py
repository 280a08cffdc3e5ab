from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Sequence

from markup_overrides.core.models import ElementOverride, Number, Viewport, ViewportSize
from markup_overrides.core.style import merge_styles, to_kebab
from markup_overrides.core.viewport import (
    PRESET_VIEWPORTS,
    format_number,
    viewport_dimensions,
    viewport_key,
)


@dataclass(slots=True)
class ViewportGroup:
    viewport: Viewport
    overrides: list[ElementOverride] = field(default_factory=list)


class ResponsiveManager:
    """Tracks the viewport each override was authored in and renders media queries."""

    def __init__(self, presets: Mapping[str, ViewportSize] | None = None) -> None:
        self.presets = dict(presets or PRESET_VIEWPORTS)

    def width_of(self, viewport: Viewport) -> Number:
        return viewport_dimensions(viewport, self.presets).width

    def group_by_viewport(self, overrides: Iterable[ElementOverride]) -> list[ViewportGroup]:
        """Partitions viewport-tagged overrides; untagged overrides belong to no group."""

        groups: dict[str, ViewportGroup] = {}
        for override in overrides:
            if override.viewport is None:
                continue
            key = viewport_key(override.viewport)
            group = groups.setdefault(key, ViewportGroup(viewport=override.viewport))
            group.overrides.append(override.without_viewport())
        return list(groups.values())

    def generate_media_queries(self, overrides: Iterable[ElementOverride]) -> str:
        groups = sorted(
            self.group_by_viewport(overrides),
            key=lambda group: self.width_of(group.viewport),
            reverse=True,
        )
        blocks = []
        for group in groups:
            rules = self.css_rules(group.overrides)
            if rules:
                blocks.append(format_media_query(self.width_of(group.viewport), rules))
        return "\n\n".join(blocks)

    def media_queries_for_viewports(
        self,
        overrides: Sequence[ElementOverride],
        viewports: Sequence[Viewport],
    ) -> str:
        """Falls back to one block per listed viewport when no override is viewport-tagged."""

        if any(override.viewport is not None for override in overrides):
            return self.generate_media_queries(overrides)
        rules = self.css_rules(overrides)
        if not rules:
            return ""
        return "\n\n".join(format_media_query(self.width_of(viewport), rules) for viewport in viewports)

    def css_rules(self, overrides: Iterable[ElementOverride]) -> list[str]:
        rules = []
        for override in overrides:
            declarations = css_declarations(override.styles or {})
            if declarations:
                body = "\n".join(f"    {line}" for line in declarations)
                rules.append(f"  {override.selector} {{\n{body}\n  }}")
        return rules

    def adjust_width(self, current_width: Number, from_viewport: Viewport, to_viewport: Viewport) -> int:
        scale = self.width_of(to_viewport) / self.width_of(from_viewport)
        # Halves round up, never to even.
        return math.floor(current_width * scale + 0.5)

    def filter_by_viewport(
        self,
        overrides: Iterable[ElementOverride],
        viewport: Viewport,
    ) -> list[ElementOverride]:
        key = viewport_key(viewport)
        return [
            override.without_viewport()
            for override in overrides
            if override.viewport is not None and viewport_key(override.viewport) == key
        ]

    def merge_for_viewport(
        self,
        base_overrides: Iterable[ElementOverride],
        viewport_overrides: Iterable[ElementOverride],
        current_viewport: Viewport,
    ) -> list[ElementOverride]:
        """Layers the current viewport's styles over viewport-agnostic overrides."""

        merged = list(base_overrides)
        positions = {override.selector: index for index, override in enumerate(merged)}
        for override in self.filter_by_viewport(viewport_overrides, current_viewport):
            index = positions.get(override.selector)
            if index is None:
                positions[override.selector] = len(merged)
                merged.append(override)
                continue
            existing = merged[index]
            merged[index] = existing.model_copy(
                update={
                    "styles": merge_styles(existing.styles, override.styles),
                    "timestamp": max(existing.timestamp, override.timestamp),
                }
            )
        return merged


def add_viewport_info(override: ElementOverride, viewport: Viewport) -> ElementOverride:
    return ElementOverride.model_validate({**override.model_dump(), "viewport": viewport})


def css_declarations(styles: Mapping[str, str]) -> list[str]:
    return [f"{to_kebab(prop)}: {value};" for prop, value in styles.items() if value and value.strip()]


def format_media_query(max_width: Number, rules: list[str]) -> str:
    return f"@media (max-width: {format_number(max_width)}px) {{\n" + "\n".join(rules) + "\n}"
