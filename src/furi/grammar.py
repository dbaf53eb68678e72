from __future__ import annotations

from .chars import JAPANESE_RUN_RE
from .model import Annotation, RubyElement

__all__ = [
    "NoMatch",
    "RUBY_OPEN",
    "RUBY_CLOSE",
    "RT_OPEN",
    "match_literal",
    "match_literal_at",
    "scan_run",
    "scan_run_at",
    "parse_annotation",
    "parse_annotation_at",
    "parse_ruby",
    "parse_ruby_at",
]

RUBY_OPEN = "<ruby>"
RUBY_CLOSE = "</ruby>"
RT_OPEN = "<rt>"

_PREVIEW_CHARS = 16


class NoMatch(ValueError):
    """Raised when a grammar rule does not match at the current position."""

    def __init__(self, rule: str, expected: str, text: str, position: int = 0) -> None:
        self.rule = rule
        self.expected = expected
        self.text = text
        self.position = position
        preview = text[position : position + _PREVIEW_CHARS]
        if len(text) - position > _PREVIEW_CHARS:
            preview += "…"
        super().__init__(f"{rule}: expected {expected} at {preview!r}")

    @property
    def remaining(self) -> str:
        return self.text[self.position :]


# The *_at rules work on offsets into one string so a scan never copies the
# unconsumed input; the plain forms return ``(result, remaining)``.


def match_literal_at(text: str, pos: int, literal: str, rule: str = "literal") -> int:
    if not text.startswith(literal, pos):
        raise NoMatch(rule, repr(literal), text, pos)
    return pos + len(literal)


def scan_run_at(text: str, pos: int, name: str = "run") -> tuple[str, int]:
    match = JAPANESE_RUN_RE.match(text, pos)
    if match is None:
        raise NoMatch(name, "Japanese text", text, pos)
    return match.group(), match.end()


def parse_annotation_at(text: str, pos: int) -> tuple[Annotation, int]:
    base, pos = scan_run_at(text, pos, "kanji")
    pos = match_literal_at(text, pos, RT_OPEN, "annotation")
    reading, pos = scan_run_at(text, pos, "reading")
    return Annotation(base, reading), pos


def parse_ruby_at(text: str, pos: int) -> tuple[RubyElement, int]:
    pos = match_literal_at(text, pos, RUBY_OPEN, "ruby")
    annotation, pos = parse_annotation_at(text, pos)
    pos = match_literal_at(text, pos, RUBY_CLOSE, "ruby")
    trailing, pos = scan_run_at(text, pos, "trailing")
    return RubyElement(annotation, trailing), pos


def match_literal(text: str, literal: str, rule: str = "literal") -> str:
    """Consume ``literal`` from the start of ``text`` and return the rest."""
    return text[match_literal_at(text, 0, literal, rule) :]


def scan_run(text: str, name: str = "run") -> tuple[str, str]:
    """
    Consume the longest non-empty prefix of Japanese-script characters.

    Returns ``(run, remaining)``. A zero-length run is never a match.
    """
    run, end = scan_run_at(text, 0, name)
    return run, text[end:]


def parse_annotation(text: str) -> tuple[Annotation, str]:
    """Parse ``KANJI<rt>READING``."""
    annotation, end = parse_annotation_at(text, 0)
    return annotation, text[end:]


def parse_ruby(text: str) -> tuple[RubyElement, str]:
    """Parse ``<ruby>KANJI<rt>READING</ruby>TRAILING``."""
    element, end = parse_ruby_at(text, 0)
    return element, text[end:]
