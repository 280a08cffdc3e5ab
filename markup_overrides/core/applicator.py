from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from markup_overrides.core.exceptions import SelectorError
from markup_overrides.core.host import MarkupHost, SelectorMatcher, SoupHost
from markup_overrides.core.merge import merge_overrides
from markup_overrides.core.models import ElementOverride, Number
from markup_overrides.core.style import decode, update_declarations
from markup_overrides.core.viewport import format_number

log = logging.getLogger(__name__)


class OverrideApplicator:
    """Replays merged overrides onto a fresh parse of the pristine markup."""

    def __init__(self, host: MarkupHost | None = None, matcher: SelectorMatcher | None = None) -> None:
        self.host = host or SoupHost()
        self.matcher = matcher or self.host

    def apply(self, markup: str, overrides: Iterable[ElementOverride]) -> str:
        overrides = list(overrides)
        if not markup or not overrides:
            return markup

        document = self.replay(markup, overrides)
        return self.host.serialize_inner(self.host.body(document))

    def replay(self, markup: str, overrides: Iterable[ElementOverride]) -> Any:
        """Parses ``markup`` and applies the merged overrides to the live tree."""

        document = self.host.parse(markup)
        # Replay order depends on timestamp and selector only, never on input order.
        merged = sorted(merge_overrides(overrides), key=lambda item: (item.timestamp, item.selector))
        for override in merged:
            try:
                nodes = self.matcher.select(document, override.selector)
            except SelectorError as exc:
                log.warning("Skipping override for %r: %s", override.selector, exc)
                continue
            if not nodes:
                log.debug("Selector %r matched nothing", override.selector)
                continue
            try:
                for node in nodes:
                    self.apply_to_node(node, override)
            except Exception as exc:  # noqa: BLE001
                log.warning("Failed to apply override for %r: %s", override.selector, exc)
        return document

    def apply_to_node(self, node: Any, override: ElementOverride) -> None:
        # html replacement discards descendants, so the field order is fixed.
        if override.text is not None:
            self.host.set_text(node, override.text)
        if override.styles:
            self._update_style(node, override.styles)
        if override.html is not None:
            self.host.replace_inner(node, override.html)
        if override.attributes:
            for name, value in override.attributes.items():
                self.host.set_attribute(node, name, value)
        if override.position is not None:
            declarations = {"left": _px(override.position.x), "top": _px(override.position.y)}
            current = decode(self.host.get_attribute(node, "style")).get("position")
            if not current or current == "static":
                declarations["position"] = "absolute"
            self._update_style(node, declarations)
        if override.size is not None:
            self._update_style(
                node,
                {"width": _px(override.size.width), "height": _px(override.size.height)},
            )

    def _update_style(self, node: Any, declarations: Mapping[str, str]) -> None:
        serialized = update_declarations(self.host.get_attribute(node, "style"), declarations)
        if serialized:
            self.host.set_attribute(node, "style", serialized)
        else:
            self.host.remove_attribute(node, "style")


def _px(value: Number) -> str:
    return f"{format_number(value)}px"
