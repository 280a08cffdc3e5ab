from __future__ import annotations

from html import escape
from typing import Iterable

from markup_overrides.config.schema import ExportSettings
from markup_overrides.core.applicator import OverrideApplicator
from markup_overrides.core.exceptions import ExportError
from markup_overrides.core.models import (
    ElementOverride,
    ExportFormat,
    ExportResult,
    HtmlParseResult,
    ParsedElement,
)
from markup_overrides.core.parser import VOID_TAGS
from markup_overrides.core.style import encode

EMBEDDED_TAGS = frozenset({"style", "script"})
PLACEHOLDER_ATTRIBUTE = "data-export-placeholder"


class ExportAssembler:
    """Turns a baseline plus overrides into downloadable markup."""

    def __init__(
        self,
        applicator: OverrideApplicator | None = None,
        settings: ExportSettings | None = None,
    ) -> None:
        self.applicator = applicator or OverrideApplicator()
        self.settings = settings or ExportSettings()

    def export(
        self,
        baseline: HtmlParseResult,
        overrides: Iterable[ElementOverride],
        format: ExportFormat = "single",
    ) -> ExportResult:
        if format not in ("single", "separate"):
            raise ExportError(f"Unsupported export format: {format}")
        document = self.applicator.replay(self.reconstruct(baseline), overrides)
        host = self.applicator.host
        for placeholder in self.applicator.matcher.select(document, f"[{PLACEHOLDER_ATTRIBUTE}]"):
            host.remove(placeholder)
        if format == "separate":
            return ExportResult(html=host.serialize(document), css=baseline.styles, js=baseline.scripts)
        # The shell supplies its own <body>, so only the root's contents are embedded.
        markup = host.serialize_inner(host.body(document))
        return ExportResult(html=self.single_file(markup, baseline.styles, baseline.scripts))

    def reconstruct(self, baseline: HtmlParseResult) -> str:
        return self.element_to_html(baseline.root)

    def element_to_html(self, element: ParsedElement) -> str:
        tag = element.tag_name.lower()
        parts = [f"<{tag}"]
        for name, value in element.attributes.items():
            if not name or not name.strip() or name == "style":
                continue
            parts.append(f' {name}="{escape(str(value), quote=True)}"')
        inline = encode({key: value for key, value in element.inline_styles.items() if value and value.strip()})
        if inline:
            parts.append(f' style="{escape(inline, quote=True)}"')
        parts.append(">")
        if tag in VOID_TAGS:
            return "".join(parts)

        if element.text_content:
            parts.append(escape(element.text_content, quote=False))
        for child in element.children:
            child_tag = child.tag_name.lower()
            if child_tag in EMBEDDED_TAGS:
                # Empty stand-ins keep :nth-child positions aligned with baseline selectors.
                parts.append(f"<{child_tag} {PLACEHOLDER_ATTRIBUTE}></{child_tag}>")
                continue
            parts.append(self.element_to_html(child))
        parts.append(f"</{tag}>")
        return "".join(parts)

    def single_file(self, markup: str, css: str, js: str) -> str:
        settings = self.settings
        lines = [
            "<!DOCTYPE html>",
            f'<html lang="{escape(settings.lang, quote=True)}">',
            "<head>",
            '  <meta charset="UTF-8">',
            '  <meta name="viewport" content="width=device-width, initial-scale=1.0">',
            f"  <title>{escape(settings.title, quote=False)}</title>",
        ]
        # Styles and scripts are embedded verbatim, not re-indented.
        if css:
            lines.extend(["  <style>", css, "  </style>"])
        lines.extend(["</head>", "<body>", _indent(markup, settings.indent)])
        if js:
            lines.extend(["  <script>", js, "  </script>"])
        lines.extend(["</body>", "</html>"])
        return "\n".join(lines)


def _indent(text: str, spaces: int) -> str:
    prefix = " " * spaces
    return "\n".join(prefix + line if line.strip() else line for line in text.split("\n"))
