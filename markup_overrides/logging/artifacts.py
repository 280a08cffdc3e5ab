from __future__ import annotations

import logging
from pathlib import Path

from markup_overrides.core.exceptions import ExportError
from markup_overrides.core.models import ExportResult

log = logging.getLogger(__name__)


class ExportWriter:
    """Writes assembled exports to disk as index/styles/script files."""

    html_name = "index.html"
    css_name = "styles.css"
    js_name = "script.js"

    def __init__(self, root: str | Path = "exports") -> None:
        self.root = Path(root)

    def write(self, result: ExportResult, name: str | None = None) -> list[Path]:
        target = self.root / name if name else self.root
        try:
            target.mkdir(parents=True, exist_ok=True)
            written = [self._write(target / self.html_name, result.html)]
            if result.css is not None:
                written.append(self._write(target / self.css_name, result.css))
            if result.js is not None:
                written.append(self._write(target / self.js_name, result.js))
        except OSError as exc:
            raise ExportError(f"Could not write export to {target}: {exc}") from exc
        log.info("Wrote %d export file(s) to %s", len(written), target)
        return written

    @staticmethod
    def _write(path: Path, content: str) -> Path:
        path.write_text(content, encoding="utf-8")
        return path
