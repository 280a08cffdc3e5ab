from __future__ import annotations

import math
from typing import Mapping

from markup_overrides.core.exceptions import ViewportError
from markup_overrides.core.models import Viewport, ViewportSize

PRESET_VIEWPORTS: dict[str, ViewportSize] = {
    "desktop": ViewportSize(width=1920, height=1080),
    "tablet": ViewportSize(width=768, height=1024),
    "mobile": ViewportSize(width=375, height=667),
}

MIN_WIDTH, MAX_WIDTH = 320, 7680
MIN_HEIGHT, MAX_HEIGHT = 240, 4320


def viewport_dimensions(
    viewport: Viewport,
    presets: Mapping[str, ViewportSize] | None = None,
) -> ViewportSize:
    if isinstance(viewport, ViewportSize):
        return viewport
    table = presets or PRESET_VIEWPORTS
    try:
        return table[viewport.lower()]
    except KeyError as exc:
        raise ViewportError(f"Unknown viewport preset: {viewport}") from exc


def viewport_key(viewport: Viewport) -> str:
    if isinstance(viewport, ViewportSize):
        return f"custom-{format_number(viewport.width)}x{format_number(viewport.height)}"
    return viewport


def is_preset_viewport(viewport: Viewport) -> bool:
    return isinstance(viewport, str)


def validate_custom_viewport(width: float, height: float) -> str | None:
    """Returns an error message, or ``None`` when the dimensions are usable."""

    if not _finite(width) or width <= 0:
        return "Width must be a positive number"
    if not _finite(height) or height <= 0:
        return "Height must be a positive number"
    if width < MIN_WIDTH:
        return f"Width must be at least {MIN_WIDTH}px"
    if height < MIN_HEIGHT:
        return f"Height must be at least {MIN_HEIGHT}px"
    if width > MAX_WIDTH:
        return f"Width must not exceed {MAX_WIDTH}px (8K)"
    if height > MAX_HEIGHT:
        return f"Height must not exceed {MAX_HEIGHT}px (8K)"
    return None


def create_custom_viewport(width: float, height: float) -> ViewportSize:
    error = validate_custom_viewport(width, height)
    if error:
        raise ViewportError(error)
    return ViewportSize(width=width, height=height)


def format_viewport_size(viewport: Viewport, presets: Mapping[str, ViewportSize] | None = None) -> str:
    size = viewport_dimensions(viewport, presets)
    return f"{format_number(size.width)} × {format_number(size.height)}"


def viewport_name(viewport: Viewport) -> str:
    if is_preset_viewport(viewport):
        return viewport.capitalize()
    return "Custom"


def viewports_equal(
    left: Viewport,
    right: Viewport,
    presets: Mapping[str, ViewportSize] | None = None,
) -> bool:
    a = viewport_dimensions(left, presets)
    b = viewport_dimensions(right, presets)
    return a.width == b.width and a.height == b.height


def aspect_ratio(viewport: Viewport, presets: Mapping[str, ViewportSize] | None = None) -> float:
    size = viewport_dimensions(viewport, presets)
    return size.width / size.height


def _finite(value: float) -> bool:
    return isinstance(value, (int, float)) and math.isfinite(value)


def format_number(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
