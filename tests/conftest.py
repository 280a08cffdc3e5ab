from __future__ import annotations

import pytest

from markup_overrides.core.host import SoupHost
from markup_overrides.core.parser import DocumentParser
from markup_overrides.engine import OverrideEngine
from tests.helpers import DOCUMENT_MARKUP, SAMPLE_MARKUP


@pytest.fixture()
def host():
    return SoupHost()


@pytest.fixture()
def engine():
    return OverrideEngine()


@pytest.fixture()
def baseline(host):
    return DocumentParser(host).parse(SAMPLE_MARKUP)


@pytest.fixture()
def document_baseline(host):
    return DocumentParser(host).parse(DOCUMENT_MARKUP)
