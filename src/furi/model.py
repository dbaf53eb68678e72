from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Union

from .chars import is_japanese_text

__all__ = [
    "Annotation",
    "RubyElement",
    "PlainText",
    "Element",
    "Segment",
    "serialize_elements",
    "serialize_segments",
    "deserialize_elements",
    "deserialize_segments",
]


@dataclass(frozen=True)
class Annotation:
    """A base span and the reading written above it (``KANJI<rt>READING``)."""

    base: str
    reading: str

    def __post_init__(self) -> None:
        if not is_japanese_text(self.base):
            raise ValueError(f"Annotation base must be non-empty Japanese text: {self.base!r}")
        if not is_japanese_text(self.reading):
            raise ValueError(f"Annotation reading must be non-empty Japanese text: {self.reading!r}")


@dataclass(frozen=True)
class RubyElement:
    """
    One closed ruby span plus the unannotated text bound to it.

    ``trailing`` runs up to the next ruby span or the end of the input, so
    a document is fully described by a sequence of these.
    """

    annotation: Annotation
    trailing: str

    def __post_init__(self) -> None:
        if not isinstance(self.annotation, Annotation):
            raise TypeError(f"RubyElement annotation must be an Annotation: {self.annotation!r}")
        if not is_japanese_text(self.trailing):
            raise ValueError(f"RubyElement trailing text must be non-empty Japanese text: {self.trailing!r}")

    @property
    def base(self) -> str:
        return self.annotation.base

    @property
    def reading(self) -> str:
        return self.annotation.reading


@dataclass(frozen=True)
class PlainText:
    """Input the ruby grammar did not consume."""

    text: str

    def __post_init__(self) -> None:
        if not self.text:
            raise ValueError("PlainText must not be empty.")


Element = Union[Annotation, RubyElement]
Segment = Union[RubyElement, PlainText]


def _element_entry(element: RubyElement) -> dict[str, object]:
    return {
        "base": element.annotation.base,
        "reading": element.annotation.reading,
        "trailing": element.trailing,
    }


def serialize_elements(elements: Iterable[RubyElement]) -> list[dict[str, object]]:
    return [_element_entry(element) for element in elements]


def serialize_segments(segments: Iterable[Segment]) -> list[dict[str, object]]:
    payload: list[dict[str, object]] = []
    for segment in segments:
        if isinstance(segment, RubyElement):
            payload.append(_element_entry(segment))
        elif isinstance(segment, PlainText):
            payload.append({"text": segment.text})
        else:
            raise TypeError(f"Unsupported segment type: {type(segment).__name__}")
    return payload


def _element_from_entry(entry: Mapping[str, object]) -> RubyElement | None:
    base = entry.get("base")
    reading = entry.get("reading")
    trailing = entry.get("trailing")
    if not isinstance(base, str) or not isinstance(reading, str) or not isinstance(trailing, str):
        return None
    return RubyElement(Annotation(base, reading), trailing)


def deserialize_elements(data: Iterable[Mapping[str, object]]) -> list[RubyElement]:
    elements: list[RubyElement] = []
    for entry in data:
        if not isinstance(entry, Mapping):
            continue
        element = _element_from_entry(entry)
        if element is not None:
            elements.append(element)
    return elements


def deserialize_segments(data: Iterable[Mapping[str, object]]) -> list[Segment]:
    segments: list[Segment] = []
    for entry in data:
        if not isinstance(entry, Mapping):
            continue
        text = entry.get("text")
        if isinstance(text, str):
            segments.append(PlainText(text))
            continue
        element = _element_from_entry(entry)
        if element is not None:
            segments.append(element)
    return segments
