from __future__ import annotations

import pytest

from markup_overrides.core.exceptions import MarkupParseError
from markup_overrides.core.parser import DocumentParser
from tests.helpers import DOCUMENT_MARKUP, SAMPLE_MARKUP


def test_fragment_is_wrapped_in_a_body_root(baseline):
    assert baseline.root.tag_name == "body"
    assert baseline.root.selector == "body"
    assert [child.identifier for child in baseline.root.children] == ["app"]


def test_identifiers_prefer_id_then_fall_back_to_counter(baseline):
    assert list(baseline.element_map) == ["body-1", "app", "header-2", "h1-3", "p-4", "b-5", "img-6"]


def test_selectors_chain_tag_classes_and_position(baseline):
    selectors = {key: element.selector for key, element in baseline.element_map.items()}
    assert selectors["app"] == "#app"
    assert selectors["header-2"] == "#app > header.top:nth-child(1)"
    assert selectors["h1-3"] == "#app > header.top:nth-child(1) > h1:nth-child(1)"
    assert selectors["p-4"] == "#app > p.note:nth-child(2)"
    assert selectors["b-5"] == "#app > p.note:nth-child(2) > b:nth-child(1)"
    assert selectors["img-6"] == "#app > img:nth-child(3)"


def test_inline_styles_text_and_parent_links(baseline):
    paragraph = baseline.element_map["p-4"]
    assert paragraph.inline_styles == {"color": "red", "fontSize": "12px"}
    assert paragraph.text_content == "Hello"
    assert paragraph.parent is baseline.element_map["app"]
    assert baseline.element_map["app"].attributes == {"id": "app", "class": "shell"}


def test_element_map_covers_the_whole_tree(baseline):
    assert {element.identifier for element in baseline.root.iter_tree()} == set(baseline.element_map)


def test_document_collects_styles_scripts_and_resources(document_baseline):
    assert document_baseline.root.selector == "body"
    assert ".card { padding: 4px; }" in document_baseline.styles
    assert 'console.log("ready");' in document_baseline.scripts
    resources = document_baseline.external_resources
    assert resources.stylesheets == ["main.css"]
    assert resources.scripts == ["vendor.js"]
    assert resources.images == []


def test_explicit_css_and_js_take_precedence(host):
    result = DocumentParser(host).parse(DOCUMENT_MARKUP, css="p{}", js="run();")
    assert result.styles == "p{}"
    assert result.scripts == "run();"


def test_generated_selectors_resolve_to_one_live_node(host, document_baseline):
    document = host.parse(DOCUMENT_MARKUP)
    for element in document_baseline.element_map.values():
        assert len(host.select(document, element.selector)) == 1, element.selector


def test_duplicate_ids_still_get_unique_identifiers(host):
    result = DocumentParser(host).parse('<div id="x"></div><div id="x"></div>')
    assert list(result.element_map) == ["body-1", "x", "div-2"]


def test_data_uuid_is_used_when_no_id_exists(host):
    result = DocumentParser(host).parse('<span data-uuid="u-1">a</span>')
    element = result.element_map["u-1"]
    assert element.selector == '[data-uuid="u-1"]'


def test_parsing_is_deterministic(host):
    parser = DocumentParser(host)
    first = parser.parse(SAMPLE_MARKUP)
    second = parser.parse(SAMPLE_MARKUP)
    assert list(first.element_map) == list(second.element_map)


@pytest.mark.parametrize("markup", ["", "   ", "<div><span>x</div>", "<section><p>a</p>"])
def test_invalid_markup_is_rejected(host, markup):
    with pytest.raises(MarkupParseError, match="Invalid HTML"):
        DocumentParser(host).parse(markup)


def test_validate_ignores_void_tags(host):
    assert DocumentParser(host).validate('<p>a<br><img src="x.png"><input type="text"></p>') == []
