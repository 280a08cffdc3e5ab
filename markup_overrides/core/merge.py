from __future__ import annotations

import logging
from typing import Any, Iterable

from markup_overrides.core.models import ElementOverride, OriginalValues

log = logging.getLogger(__name__)

SCALAR_FIELDS = ("text", "html", "position", "size")
MAP_FIELDS = ("styles", "attributes")


def merge_overrides(overrides: Iterable[ElementOverride]) -> list[ElementOverride]:
    """Collapses an override history into one effective override per selector.

    Within a selector the history is folded in ascending timestamp order:
    scalar fields are replaced by the latest definition while ``styles`` and
    ``attributes`` are shallow-merged so later partial edits keep earlier keys.
    ``original`` values fold under the same rules, independently of the
    top-level fields. Equal timestamps keep their input order.
    """

    groups: dict[str, list[ElementOverride]] = {}
    for override in overrides:
        groups.setdefault(override.selector, []).append(override)
    merged = [merge_group(selector, group) for selector, group in groups.items()]
    log.debug("Merged %d selector groups", len(merged))
    return merged


def merge_group(selector: str, overrides: Iterable[ElementOverride]) -> ElementOverride:
    ordered = sorted(overrides, key=lambda item: item.timestamp)
    if not ordered:
        raise ValueError(f"No overrides to merge for selector {selector!r}")

    values: dict[str, Any] = {}
    original: dict[str, Any] = {}
    viewport = None
    for override in ordered:
        _fold(values, override)
        if override.original is not None:
            _fold(original, override.original)
        if override.viewport is not None:
            viewport = override.viewport

    snapshot = OriginalValues(**original)
    return ElementOverride(
        selector=selector,
        timestamp=ordered[-1].timestamp,
        ai_generated=any(item.ai_generated for item in ordered),
        original=None if snapshot.is_empty() else snapshot,
        viewport=viewport,
        **values,
    )


def _fold(accumulator: dict[str, Any], source: ElementOverride | OriginalValues) -> None:
    for name in SCALAR_FIELDS:
        value = getattr(source, name)
        if value is not None:
            accumulator[name] = value
    for name in MAP_FIELDS:
        value = getattr(source, name)
        if value is not None:
            accumulator[name] = {**accumulator.get(name, {}), **value}
