from __future__ import annotations

from collections import Counter
from typing import Iterable

from .chars import hiragana_to_katakana
from .model import PlainText, RubyElement, Segment

__all__ = [
    "to_reading_text",
    "to_base_text",
    "collect_readings",
]


def _check_segment(segment: object) -> None:
    if not isinstance(segment, (RubyElement, PlainText)):
        raise TypeError(f"Unsupported segment type: {type(segment).__name__}")


def to_reading_text(segments: Iterable[Segment], *, katakana: bool = False) -> str:
    """
    Replace every ruby base with its reading.

    Trailing and plain text are kept as written; with ``katakana`` only the
    readings are converted.
    """
    parts: list[str] = []
    for segment in segments:
        _check_segment(segment)
        if isinstance(segment, PlainText):
            parts.append(segment.text)
            continue
        reading = segment.annotation.reading
        if katakana:
            reading = hiragana_to_katakana(reading)
        parts.append(reading)
        parts.append(segment.trailing)
    return "".join(parts)


def to_base_text(segments: Iterable[Segment]) -> str:
    """Drop the furigana, keeping base, trailing and plain text."""
    parts: list[str] = []
    for segment in segments:
        _check_segment(segment)
        if isinstance(segment, PlainText):
            parts.append(segment.text)
        else:
            parts.append(segment.annotation.base)
            parts.append(segment.trailing)
    return "".join(parts)


def collect_readings(segments: Iterable[Segment]) -> dict[str, Counter[str]]:
    # Bases keep first-seen order; PlainText carries no readings.
    readings: dict[str, Counter[str]] = {}
    for segment in segments:
        _check_segment(segment)
        if isinstance(segment, RubyElement):
            counts = readings.setdefault(segment.annotation.base, Counter())
            counts[segment.annotation.reading] += 1
    return readings
