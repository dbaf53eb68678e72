from __future__ import annotations

import sys
from typing import Iterator

from .grammar import RUBY_OPEN, NoMatch, parse_ruby_at
from .model import PlainText, RubyElement, Segment

__all__ = [
    "scan_document",
    "iter_document",
    "scan_prefix",
    "set_debug_logging",
]

_DEBUG_LOG = False


def set_debug_logging(enabled: bool) -> None:
    global _DEBUG_LOG
    _DEBUG_LOG = enabled


def _debug_log(message: str) -> None:
    if _DEBUG_LOG:
        print(f"[furi debug] {message}", file=sys.stderr)


def _iter_elements(text: str) -> Iterator[tuple[RubyElement | None, int, NoMatch | None]]:
    # Yields (element, end, None) per match, then (None, stop, error) once.
    pos = 0
    while True:
        try:
            element, pos = parse_ruby_at(text, pos)
        except NoMatch as exc:
            yield None, pos, exc
            return
        yield element, pos, None


def scan_prefix(text: str) -> tuple[list[RubyElement], str]:
    """
    Parse consecutive ruby spans from the start of ``text``.

    Returns the parsed elements together with the unconsumed suffix, which is
    empty only when the whole input was made of ruby spans.
    """
    elements: list[RubyElement] = []
    stop = 0
    for element, stop, error in _iter_elements(text):
        if element is not None:
            elements.append(element)
        elif stop < len(text):
            _debug_log(f"stopped after {len(elements)} element(s): {error}")
    return elements, text[stop:]


def _next_resync_point(text: str, pos: int) -> int:
    index = text.find(RUBY_OPEN, pos + 1)
    return len(text) if index == -1 else index


def _iter_preserving(text: str) -> Iterator[Segment]:
    pos = 0
    plain_start: int | None = None
    while pos < len(text):
        try:
            element, end = parse_ruby_at(text, pos)
        except NoMatch as exc:
            cut = _next_resync_point(text, pos)
            _debug_log(f"kept {cut - pos} unmatched character(s): {exc}")
            if plain_start is None:
                plain_start = pos
            pos = cut
            continue
        if plain_start is not None:
            yield PlainText(text[plain_start:pos])
            plain_start = None
        yield element
        pos = end
    if plain_start is not None:
        yield PlainText(text[plain_start:])


def iter_document(text: str, *, preserve_unmatched: bool = False) -> Iterator[Segment]:
    """
    Lazily yield the ruby elements of ``text`` in source order.

    By default scanning stops silently at the first position where no ruby
    span starts; leading plain text, trailing plain text and malformed markup
    are dropped. With ``preserve_unmatched`` the skipped input is yielded as
    :class:`PlainText` and scanning resumes at the next ``<ruby>`` tag, so the
    rendered segments reproduce ``text`` exactly.
    """
    if preserve_unmatched:
        yield from _iter_preserving(text)
        return
    for element, stop, error in _iter_elements(text):
        if element is None:
            if stop < len(text):
                _debug_log(f"stopped, dropping {len(text) - stop} character(s): {error}")
            return
        yield element


def scan_document(text: str, *, preserve_unmatched: bool = False) -> list[Segment]:
    return list(iter_document(text, preserve_unmatched=preserve_unmatched))
