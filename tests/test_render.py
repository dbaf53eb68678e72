from __future__ import annotations

import pytest

from furi.grammar import parse_annotation, parse_ruby
from furi.model import Annotation, PlainText, RubyElement
from furi.render import render, render_annotation, render_document, render_element, render_segment


def test_render_sample() -> None:
    element = RubyElement(Annotation("同", "どう"), "ぜず。")
    assert render(element) == "<ruby>同<rt>どう</ruby>ぜず。"


def test_render_annotation_inverts_parse_annotation() -> None:
    annotation = Annotation("漢字", "かんじ")
    text = render_annotation(annotation)
    assert text == "漢字<rt>かんじ"
    assert parse_annotation(text) == (annotation, "")


def test_render_element_dispatches_on_both_cases() -> None:
    annotation = Annotation("和", "わ")
    element = RubyElement(annotation, "して")
    assert render_element(annotation) == "和<rt>わ"
    assert render_element(element) == "<ruby>和<rt>わ</ruby>して"
    with pytest.raises(TypeError):
        render_element(PlainText("x"))  # type: ignore[arg-type]


def test_render_segment_and_document() -> None:
    segments = [PlainText("「"), RubyElement(Annotation("同", "どう"), "ぜず。"), PlainText("」")]
    assert render_segment(segments[0]) == "「"
    assert render_document(segments) == "「<ruby>同<rt>どう</ruby>ぜず。」"
    with pytest.raises(TypeError):
        render_segment(Annotation("同", "どう"))  # type: ignore[arg-type]


def test_rendered_markup_reads_as_html_ruby() -> None:
    bs4 = pytest.importorskip("bs4")
    element = RubyElement(Annotation("同", "どう"), "ぜず。")
    soup = bs4.BeautifulSoup(render(element), "html.parser")
    ruby = soup.find("ruby")
    assert ruby is not None
    assert ruby.find("rt").get_text() == "どう"
    assert ruby.contents[0] == "同"
    assert ruby.next_sibling == "ぜず。"
    assert parse_ruby(render(element)) == (element, "")
