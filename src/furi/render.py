from __future__ import annotations

from typing import Iterable

from .grammar import RT_OPEN, RUBY_CLOSE, RUBY_OPEN
from .model import Annotation, Element, PlainText, RubyElement, Segment

__all__ = [
    "render",
    "render_annotation",
    "render_element",
    "render_segment",
    "render_document",
]


def render_annotation(annotation: Annotation) -> str:
    return f"{annotation.base}{RT_OPEN}{annotation.reading}"


def render(element: RubyElement) -> str:
    """
    Render ``element`` back to ``<ruby>KANJI<rt>READING</ruby>TRAILING``.

    This is the exact inverse of a :func:`furi.grammar.parse_ruby` call that
    consumed its whole input.
    """
    return f"{RUBY_OPEN}{render_annotation(element.annotation)}{RUBY_CLOSE}{element.trailing}"


def render_element(element: Element) -> str:
    if isinstance(element, RubyElement):
        return render(element)
    if isinstance(element, Annotation):
        return render_annotation(element)
    raise TypeError(f"Unsupported element type: {type(element).__name__}")


def render_segment(segment: Segment) -> str:
    if isinstance(segment, RubyElement):
        return render(segment)
    if isinstance(segment, PlainText):
        return segment.text
    raise TypeError(f"Unsupported segment type: {type(segment).__name__}")


def render_document(segments: Iterable[Segment]) -> str:
    return "".join(render_segment(segment) for segment in segments)
