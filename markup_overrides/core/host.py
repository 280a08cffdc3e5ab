from __future__ import annotations

from typing import Any, Protocol

import soupsieve
from bs4 import BeautifulSoup, CData, Comment, Declaration, Doctype, ProcessingInstruction, Tag
from bs4.builder import ParserRejectedMarkup

from markup_overrides.core.exceptions import MarkupParseError, SelectorError

_NON_TEXT = (CData, Comment, Declaration, Doctype, ProcessingInstruction)


class MarkupHost(Protocol):
    """Lenient parser capability the engine reads and mutates trees through."""

    def parse(self, markup: str) -> Any: ...

    def body(self, document: Any) -> Any: ...

    def serialize(self, node: Any) -> str: ...

    def serialize_inner(self, node: Any) -> str: ...

    def remove(self, node: Any) -> None: ...

    def replace_inner(self, node: Any, markup: str) -> None: ...

    def set_text(self, node: Any, text: str) -> None: ...

    def get_attribute(self, node: Any, name: str) -> str | None: ...

    def set_attribute(self, node: Any, name: str, value: str) -> None: ...

    def remove_attribute(self, node: Any, name: str) -> None: ...


class SelectorMatcher(Protocol):
    """Selector capability; invalid syntax surfaces as ``SelectorError``."""

    def select(self, root: Any, selector: str) -> list[Any]: ...


class SoupHost:
    """Binds the host contracts to BeautifulSoup trees and soupsieve matching."""

    def __init__(self, features: str = "html.parser") -> None:
        self.features = features

    def parse(self, markup: str) -> BeautifulSoup:
        return self._soup(markup, self.features)

    def body(self, document: BeautifulSoup) -> Tag:
        return document.body or document

    def serialize(self, node: Tag) -> str:
        return node.decode()

    def remove(self, node: Tag) -> None:
        node.decompose()

    def serialize_inner(self, node: Tag) -> str:
        return node.decode_contents()

    def replace_inner(self, node: Tag, markup: str) -> None:
        # html.parser never wraps a fragment in synthesized <html>/<body> tags.
        fragment = self._soup(markup, "html.parser")
        node.clear()
        for child in list(fragment.contents):
            node.append(child.extract())

    def set_text(self, node: Tag, text: str) -> None:
        node.string = text

    def get_attribute(self, node: Tag, name: str) -> str | None:
        value = node.get(name)
        if isinstance(value, list):
            return " ".join(value)
        return value

    def set_attribute(self, node: Tag, name: str, value: str) -> None:
        node[name] = value

    def remove_attribute(self, node: Tag, name: str) -> None:
        if name in node.attrs:
            del node[name]

    def attributes(self, node: Tag) -> dict[str, str]:
        return {name: self.get_attribute(node, name) or "" for name in node.attrs}

    def element_children(self, node: Tag) -> list[Tag]:
        return [child for child in node.children if isinstance(child, Tag)]

    def direct_text(self, node: Tag) -> str:
        return "".join(
            str(child)
            for child in node.children
            if not isinstance(child, (Tag, *_NON_TEXT))
        )

    def select(self, root: Tag, selector: str) -> list[Tag]:
        try:
            return soupsieve.select(selector, root)
        except (soupsieve.SelectorSyntaxError, NotImplementedError, ValueError) as exc:
            # Pseudo-elements and at-rules surface as NotImplementedError.
            raise SelectorError(f"Invalid selector {selector!r}: {exc}") from exc

    @staticmethod
    def _soup(markup: str, features: str) -> BeautifulSoup:
        try:
            return BeautifulSoup(markup, features)
        except ParserRejectedMarkup as exc:
            raise MarkupParseError(f"Markup could not be parsed: {exc}") from exc
