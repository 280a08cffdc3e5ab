from __future__ import annotations

import logging
from typing import Any

import soupsieve

from markup_overrides.core.exceptions import SelectorError, SelectorValidationError
from markup_overrides.core.host import SelectorMatcher
from markup_overrides.core.models import ParsedElement

log = logging.getLogger(__name__)


def generate_selector(element: ParsedElement) -> str:
    """Builds the canonical selector for a parsed node.

    Priority: ``#id``, then ``[data-uuid="..."]``, then tag, classes and
    ``:nth-child`` chained under the parent's selector.
    """

    element_id = element.attributes.get("id")
    if element_id:
        return f"#{soupsieve.escape(element_id)}"
    data_uuid = element.attributes.get("data-uuid")
    if data_uuid:
        return f'[data-uuid="{soupsieve.escape(data_uuid)}"]'

    selector = _tag_with_classes(element)
    if element.parent is not None:
        return f"{generate_selector(element.parent)} > {selector}"
    return selector


def _tag_with_classes(element: ParsedElement) -> str:
    selector = element.tag_name.lower()
    for class_name in element.attributes.get("class", "").split():
        selector += f".{soupsieve.escape(class_name)}"
    if element.parent is not None:
        index = _nth_child(element)
        if index:
            selector += f":nth-child({index})"
    return selector


def _nth_child(element: ParsedElement) -> int:
    siblings = element.parent.children if element.parent is not None else []
    for index, sibling in enumerate(siblings, start=1):
        if sibling is element or sibling.identifier == element.identifier:
            return index
    return 0


def ensure_selector(selector: str) -> str:
    cleaned = (selector or "").strip()
    if not cleaned:
        raise SelectorValidationError("Selector is empty")
    if "\n" in cleaned or "\r" in cleaned:
        raise SelectorValidationError("Selector spans multiple lines")
    return cleaned


def validate_selector(selector: str, root: Any, matcher: SelectorMatcher) -> bool:
    """True when ``selector`` resolves to exactly one node under ``root``."""

    try:
        matches = matcher.select(root, ensure_selector(selector))
    except SelectorError as exc:
        log.warning("Invalid selector %r: %s", selector, exc)
        return False
    return len(matches) == 1


def position_selector(node: Any, root: Any) -> str:
    """Builds a ``tag:nth-child(n)`` path from ``root`` down to a live node."""

    path: list[str] = []
    current = node
    while current is not None and current is not root and current.parent is not None:
        parent = current.parent
        siblings = [child for child in parent.children if getattr(child, "name", None)]
        index = next(i for i, child in enumerate(siblings, start=1) if child is current)
        path.insert(0, f"{current.name}:nth-child({index})")
        current = parent
    if current is root and getattr(root, "name", None) and root.name != "[document]":
        path.insert(0, root.name)
    return " > ".join(path)
