from __future__ import annotations

import re
from typing import Any, Mapping

_UPPER = re.compile(r"[A-Z]")
_HYPHEN_LOWER = re.compile(r"-([a-z])")


def to_kebab(name: str) -> str:
    return _UPPER.sub(lambda match: f"-{match.group(0).lower()}", name)


def to_camel(name: str) -> str:
    return _HYPHEN_LOWER.sub(lambda match: match.group(1).upper(), name)


def split_declarations(css: Any) -> list[tuple[str, str]]:
    """Splits inline CSS into ``(property, value)`` pairs as written.

    ``;`` only ends a declaration outside quotes and parentheses, so values
    such as ``url(data:image/png;base64,...)`` stay whole.
    """

    declarations: list[tuple[str, str]] = []
    if not css or not isinstance(css, str):
        return declarations
    for chunk in _top_level_chunks(css):
        prop, separator, value = chunk.partition(":")
        prop = prop.strip()
        value = value.strip()
        if separator and prop and value:
            declarations.append((prop, value))
    return declarations


def _top_level_chunks(css: str) -> list[str]:
    chunks: list[str] = []
    current: list[str] = []
    depth = 0
    quote = None
    escaped = False
    for char in css:
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif quote:
            if char == quote:
                quote = None
        elif char in "\"'":
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")" and depth:
            depth -= 1
        elif char == ";" and not depth:
            chunks.append("".join(current))
            current = []
            continue
        current.append(char)
    chunks.append("".join(current))
    return chunks


def decode(css: Any) -> dict[str, str]:
    """Parses ``"color: red; font-size: 16px"`` into ``{"color": "red", "fontSize": "16px"}``."""

    return {to_camel(prop): value for prop, value in split_declarations(css)}


def update_declarations(css: Any, updates: Mapping[str, str | None]) -> str:
    """Rewrites only the properties named in ``updates``.

    Targeted declarations are replaced in place, or dropped when the new value
    is empty; properties not yet present are appended. Every other
    declaration is kept exactly as written.
    """

    targets = {to_camel(name): value for name, value in updates.items()}
    written: set[str] = set()
    rendered = []
    for prop, value in split_declarations(css):
        key = to_camel(prop.lower())
        if key in targets:
            if key in written:
                continue
            written.add(key)
            value = targets[key]
            if not value:
                continue
            prop = to_kebab(key)
        rendered.append(f"{prop}: {value};")
    rendered.extend(
        f"{to_kebab(key)}: {value};" for key, value in targets.items() if key not in written and value
    )
    return " ".join(rendered)


def encode(styles: Mapping[str, Any] | None) -> str:
    """Serializes a property map back into an inline declaration string."""

    if not styles or not isinstance(styles, Mapping):
        return ""
    declarations = [
        f"{to_kebab(prop)}: {value};"
        for prop, value in styles.items()
        if value is not None and value != ""
    ]
    return " ".join(declarations)


def merge_styles(*styles: Mapping[str, str] | None) -> dict[str, str]:
    merged: dict[str, str] = {}
    for style_map in styles:
        if style_map:
            merged.update(style_map)
    return merged


def style_diff(initial: Mapping[str, str], current: Mapping[str, str]) -> dict[str, str]:
    """Returns the entries of ``current`` whose value differs from ``initial``."""

    return {key: value for key, value in current.items() if initial.get(key) != value}
