from __future__ import annotations

import json
import logging

import pytest

from markup_overrides.core.exceptions import ExportError
from markup_overrides.core.models import ExportResult
from markup_overrides.logging.artifacts import ExportWriter
from markup_overrides.logging.journal import OverrideJournal
from tests.helpers import override


def test_journal_round_trips_history(tmp_path):
    journal = OverrideJournal(tmp_path / "artifacts")
    history = [
        override(".a", 1, text="First", original={"text": "Orig"}),
        override(".a", 2, styles={"fontSize": "12px"}, viewport="mobile", ai_generated=True),
        override("#b", 3, position={"x": 1.5, "y": 2}, size={"width": 10, "height": 20}),
    ]
    journal.write(history[0])
    journal.write_many(history[1:])

    reloaded = journal.read()
    assert [item.to_json() for item in reloaded] == [item.to_json() for item in history]

    lines = journal.history_path.read_text(encoding="utf-8").splitlines()
    assert json.loads(lines[1])["aiGenerated"] is True


def test_journal_snapshot_stores_merged_overrides(tmp_path):
    journal = OverrideJournal(tmp_path)
    journal.write_many([override(".b", 1, text="x"), override(".a", 2, text="y"), override(".a", 3, text="z")])

    merged = journal.snapshot()
    assert [item.selector for item in merged] == [".a", ".b"]
    assert [item.to_json() for item in journal.read_snapshot()] == [item.to_json() for item in merged]
    assert journal.read_snapshot()[0].text == "z"


def test_journal_reset_and_empty_reads(tmp_path):
    journal = OverrideJournal(tmp_path)
    assert journal.read() == []
    assert journal.read_snapshot() == []
    journal.write(override(".a", 1, text="x"))
    journal.snapshot()
    journal.reset()
    assert not journal.history_path.exists()
    assert not journal.merged_path.exists()


def test_export_writer_writes_separate_files(tmp_path, caplog):
    writer = ExportWriter(tmp_path / "exports")
    with caplog.at_level(logging.INFO, logger="markup_overrides.logging.artifacts"):
        paths = writer.write(ExportResult(html="<body></body>", css="p{}", js="run();"), name="landing")
    assert [path.name for path in paths] == ["index.html", "styles.css", "script.js"]
    assert (tmp_path / "exports" / "landing" / "styles.css").read_text(encoding="utf-8") == "p{}"
    assert "Wrote 3 export file(s)" in caplog.text


def test_export_writer_writes_single_file(tmp_path):
    paths = ExportWriter(tmp_path).write(ExportResult(html="<!DOCTYPE html>"))
    assert [path.name for path in paths] == ["index.html"]


def test_export_writer_reports_io_failures(tmp_path):
    blocker = tmp_path / "blocked"
    blocker.write_text("not a directory", encoding="utf-8")
    with pytest.raises(ExportError):
        ExportWriter(blocker).write(ExportResult(html="x"))
