from __future__ import annotations

import pytest

from furi.chars import JAPANESE_RANGES, JAPANESE_RUN_RE, hiragana_to_katakana, is_japanese, is_japanese_text


def _range_id(bounds: tuple[int, int]) -> str:
    return f"U+{bounds[0]:04X}-U+{bounds[1]:04X}"


@pytest.mark.parametrize("bounds", JAPANESE_RANGES, ids=_range_id)
def test_range_boundaries_are_inclusive(bounds: tuple[int, int]) -> None:
    low, high = bounds
    assert is_japanese(chr(low))
    assert is_japanese(chr(high))


@pytest.mark.parametrize("bounds", JAPANESE_RANGES, ids=_range_id)
def test_codepoints_just_outside_ranges_are_rejected(bounds: tuple[int, int]) -> None:
    low, high = bounds
    assert not is_japanese(chr(low - 1))
    assert not is_japanese(chr(high + 1))


def test_common_characters() -> None:
    assert is_japanese("同")
    assert is_japanese("ど")
    assert is_japanese("カ")
    assert is_japanese("。")
    assert not is_japanese("a")
    assert not is_japanese("<")
    assert not is_japanese("！")  # fullwidth forms are outside the ranges
    assert not is_japanese("𠀋")  # Extension B


def test_non_single_characters_are_rejected() -> None:
    assert not is_japanese("")
    assert not is_japanese("同じ")


def test_is_japanese_text() -> None:
    assert is_japanese_text("同じ。")
    assert not is_japanese_text("")
    assert not is_japanese_text("同じa")


def test_hiragana_to_katakana() -> None:
    assert hiragana_to_katakana("どう") == "ドウ"
    assert hiragana_to_katakana("ゝゞ") == "ヽヾ"
    assert hiragana_to_katakana("漢字と") == "漢字ト"


@pytest.mark.parametrize("bounds", JAPANESE_RANGES, ids=_range_id)
def test_run_pattern_agrees_with_classifier(bounds: tuple[int, int]) -> None:
    low, high = bounds
    for code in (low - 1, low, high, high + 1):
        ch = chr(code)
        assert (JAPANESE_RUN_RE.fullmatch(ch) is not None) == is_japanese(ch)
