from __future__ import annotations

from typing import Iterable, Sequence

from markup_overrides.config.schema import EngineConfig
from markup_overrides.core.applicator import OverrideApplicator
from markup_overrides.core.diff import calculate_diff
from markup_overrides.core.export import ExportAssembler
from markup_overrides.core.host import SoupHost
from markup_overrides.core.merge import merge_overrides
from markup_overrides.core.models import (
    ElementOverride,
    ExportFormat,
    ExportResult,
    HtmlDiff,
    HtmlParseResult,
    Number,
    Viewport,
)
from markup_overrides.core.parser import DocumentParser
from markup_overrides.core.responsive import ResponsiveManager


class OverrideEngine:
    """Wires parsing, merging, application, diffing and export from one config."""

    def __init__(self, config: EngineConfig | None = None, host: SoupHost | None = None) -> None:
        self.config = config or EngineConfig()
        self.host = host or SoupHost(self.config.parser_features)
        self.parser = DocumentParser(self.host)
        self.applicator = OverrideApplicator(self.host)
        self.assembler = ExportAssembler(self.applicator, self.config.export)
        self.responsive = ResponsiveManager(self.config.viewports)

    def parse(self, markup: str, css: str | None = None, js: str | None = None) -> HtmlParseResult:
        return self.parser.parse(markup, css, js)

    def merge(self, overrides: Iterable[ElementOverride]) -> list[ElementOverride]:
        return merge_overrides(overrides)

    def apply(self, markup: str, overrides: Iterable[ElementOverride]) -> str:
        return self.applicator.apply(markup, overrides)

    def diff(self, baseline: HtmlParseResult, overrides: Iterable[ElementOverride]) -> HtmlDiff:
        return calculate_diff(baseline, overrides)

    def export(
        self,
        baseline: HtmlParseResult,
        overrides: Iterable[ElementOverride],
        format: ExportFormat = "single",
    ) -> ExportResult:
        return self.assembler.export(baseline, overrides, format)

    def generate_media_queries(
        self,
        overrides: Sequence[ElementOverride],
        viewports: Sequence[Viewport] | None = None,
    ) -> str:
        if viewports:
            return self.responsive.media_queries_for_viewports(overrides, viewports)
        return self.responsive.generate_media_queries(overrides)

    def adjust_width(self, current_width: Number, from_viewport: Viewport, to_viewport: Viewport) -> int:
        return self.responsive.adjust_width(current_width, from_viewport, to_viewport)
