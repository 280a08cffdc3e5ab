from __future__ import annotations

import re
from collections import Counter

from bs4 import BeautifulSoup, Tag

from markup_overrides.core.exceptions import MarkupParseError
from markup_overrides.core.host import SoupHost
from markup_overrides.core.models import ExternalResources, HtmlParseResult, ParsedElement
from markup_overrides.core.selector import generate_selector
from markup_overrides.core.style import decode

VOID_TAGS = frozenset(
    {
        "area", "base", "br", "col", "embed", "hr", "img", "input",
        "link", "meta", "param", "source", "track", "wbr",
    }
)

_OPEN_TAG = re.compile(r"<([a-z][a-z0-9]*)\b[^>]*>", re.IGNORECASE)
_CLOSE_TAG = re.compile(r"</([a-z][a-z0-9]*)\s*>", re.IGNORECASE)


class DocumentParser:
    """Builds the baseline element tree that diffs and exports are computed against."""

    def __init__(self, host: SoupHost | None = None) -> None:
        self.host = host or SoupHost()
        self._counter = 0
        self._used_identifiers: set[str] = set()

    def parse(self, markup: str, css: str | None = None, js: str | None = None) -> HtmlParseResult:
        self._counter = 0
        self._used_identifiers = set()

        errors = self.validate(markup)
        if errors:
            raise MarkupParseError(f"Invalid HTML: {', '.join(errors)}")

        document = self.host.parse(markup)
        styles = css if css else "\n".join(tag.get_text() for tag in document.find_all("style"))
        scripts = js if js else "\n".join(tag.get_text() for tag in document.find_all("script"))

        element_map: dict[str, ParsedElement] = {}
        root = self._build(self.host.body(document), None, element_map)
        return HtmlParseResult(
            root=root,
            element_map=element_map,
            styles=styles,
            scripts=scripts,
            external_resources=self.extract_external_resources(document),
        )

    def validate(self, markup: str) -> list[str]:
        if not markup or not isinstance(markup, str):
            return ["HTML is empty or not a string"]
        if not markup.strip():
            return ["HTML is empty after trimming"]

        opened = Counter(
            name.lower() for name in _OPEN_TAG.findall(markup) if name.lower() not in VOID_TAGS
        )
        closed = Counter(name.lower() for name in _CLOSE_TAG.findall(markup))
        return [
            f"Mismatched tags: <{tag}> opened {count} times but closed {closed.get(tag, 0)} times"
            for tag, count in opened.items()
            if count != closed.get(tag, 0)
        ]

    def extract_external_resources(self, document: BeautifulSoup) -> ExternalResources:
        return ExternalResources(
            stylesheets=[tag["href"] for tag in document.select('link[rel~="stylesheet"][href]')],
            scripts=[tag["src"] for tag in document.select("script[src]")],
            images=[tag["src"] for tag in document.select("img[src]")],
        )

    def _build(
        self,
        node: Tag,
        parent: ParsedElement | None,
        element_map: dict[str, ParsedElement],
    ) -> ParsedElement:
        attributes = {} if isinstance(node, BeautifulSoup) else self.host.attributes(node)
        tag_name = "body" if isinstance(node, BeautifulSoup) else node.name
        element = ParsedElement(
            identifier=self._identifier(tag_name, attributes),
            tag_name=tag_name,
            attributes=attributes,
            inline_styles=decode(attributes.get("style", "")),
            text_content=self.host.direct_text(node).strip(),
            parent=parent,
        )
        if parent is not None:
            parent.children.append(element)
        element.selector = generate_selector(element)
        element_map[element.identifier] = element

        for child in self.host.element_children(node):
            self._build(child, element, element_map)
        return element

    def _identifier(self, tag_name: str, attributes: dict[str, str]) -> str:
        for candidate in (attributes.get("id"), attributes.get("data-uuid")):
            if candidate and candidate not in self._used_identifiers:
                self._used_identifiers.add(candidate)
                return candidate
        while True:
            self._counter += 1
            identifier = f"{tag_name}-{self._counter}"
            if identifier not in self._used_identifiers:
                self._used_identifiers.add(identifier)
                return identifier
