from .chars import JAPANESE_RANGES, is_japanese
from .convert import collect_readings, to_base_text, to_reading_text
from .document import iter_document, scan_document, scan_prefix
from .grammar import NoMatch, parse_annotation, parse_ruby, scan_run
from .model import Annotation, Element, PlainText, RubyElement, Segment
from .render import render, render_document

__all__ = [
    "JAPANESE_RANGES",
    "is_japanese",
    "scan_run",
    "parse_annotation",
    "parse_ruby",
    "NoMatch",
    "scan_document",
    "iter_document",
    "scan_prefix",
    "render",
    "render_document",
    "Annotation",
    "RubyElement",
    "PlainText",
    "Element",
    "Segment",
    "to_reading_text",
    "to_base_text",
    "collect_readings",
]
