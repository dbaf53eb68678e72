from __future__ import annotations

import re

__all__ = [
    "JAPANESE_RANGES",
    "JAPANESE_RUN_RE",
    "is_japanese",
    "is_japanese_text",
    "hiragana_to_katakana",
]

# Inclusive codepoint ranges accepted as Japanese script.
JAPANESE_RANGES: tuple[tuple[int, int], ...] = (
    (0x3000, 0x303F),  # CJK Symbols and Punctuation
    (0x4E00, 0x9FCB),  # CJK Unified Ideographs
    (0xF900, 0xFAFA),  # Compatibility Ideographs
    (0x3400, 0x4DB5),  # Extension A
    (0x2E80, 0x2FD5),  # Radicals Supplement, Kangxi Radicals
    (0x3041, 0x3096),  # Hiragana
    (0x30A0, 0x30FF),  # Katakana
)

JAPANESE_RUN_RE = re.compile(
    "[" + "".join(f"{re.escape(chr(low))}-{re.escape(chr(high))}" for low, high in JAPANESE_RANGES) + "]+"
)


def is_japanese(ch: str) -> bool:
    if len(ch) != 1:
        return False
    code = ord(ch)
    for low, high in JAPANESE_RANGES:
        if low <= code <= high:
            return True
    return False


def is_japanese_text(text: str) -> bool:
    return JAPANESE_RUN_RE.fullmatch(text) is not None


def hiragana_to_katakana(text: str) -> str:
    result_chars: list[str] = []
    for ch in text:
        code = ord(ch)
        if 0x3041 <= code <= 0x3096:
            result_chars.append(chr(code + 0x60))
        elif ch == "ゝ":
            result_chars.append("ヽ")
        elif ch == "ゞ":
            result_chars.append("ヾ")
        elif ch == "ゟ":
            result_chars.append("ヿ")
        else:
            result_chars.append(ch)
    return "".join(result_chars)
