from __future__ import annotations

from typing import Iterable

from markup_overrides.core.merge import merge_overrides
from markup_overrides.core.models import (
    ElementOverride,
    HtmlDiff,
    HtmlParseResult,
    ModifiedElement,
    ParsedElement,
)


def calculate_diff(baseline: HtmlParseResult, overrides: Iterable[ElementOverride]) -> HtmlDiff:
    """Reports which baseline elements the merged override set touches.

    Overrides never insert or delete nodes, so ``added`` and ``removed`` stay
    empty; selectors absent from the baseline are left out of ``modified``.
    """

    diff = HtmlDiff()
    for override in merge_overrides(overrides):
        if find_element(baseline, override.selector) is not None:
            diff.modified.append(ModifiedElement(selector=override.selector, changes=override))
    return diff


def find_element(baseline: HtmlParseResult, selector: str) -> ParsedElement | None:
    for element in baseline.element_map.values():
        if element.selector == selector:
            return element
    return search_tree(baseline.root, selector)


def search_tree(element: ParsedElement, selector: str) -> ParsedElement | None:
    if element.selector == selector:
        return element
    for child in element.children:
        found = search_tree(child, selector)
        if found is not None:
            return found
    return None
