"""
Japanese character classification.

Code point range checks used to pick kanji out of free-form input.
"""

from __future__ import annotations

KANJI_RANGES = (
    (0x3400, 0x4DBF),  # CJK Unified Ideographs Extension A
    (0x4E00, 0x9FFF),  # CJK Unified Ideographs
    (0xF900, 0xFAFF),  # CJK Compatibility Ideographs
    (0xFF10, 0xFF19),  # Fullwidth digits
    (0x20000, 0x2A6DF),  # CJK Unified Ideographs Extension B
)
HIRAGANA_RANGE = (0x3040, 0x309F)
KATAKANA_RANGE = (0x30A0, 0x30FF)
SYMBOL_RANGES = (
    (0x3000, 0x303F),  # CJK symbols and punctuation
    (0x0370, 0x03FF),  # Greek
    (0x25A0, 0x25FF),  # Geometric shapes
    (0xFF00, 0xFFEF),  # Halfwidth and fullwidth forms
)
SYMBOL_CHARS = frozenset("-々×")
ROMAN_RANGES = (
    (0xFF01, 0xFF5A),  # Fullwidth latin
    (0x2000, 0x206F),  # General punctuation
    (0x20000, 0x2A6DF),
)
ROMAN_CHARS = frozenset("‐−")

SMALL_HIRAGANA = frozenset("ゃゅょ")
SMALL_KATAKANA = frozenset("ャュョ")
PARTICLES = frozenset("をのにとがかはもでへや")


def _in_ranges(char: str, ranges: tuple[tuple[int, int], ...]) -> bool:
    code = ord(char)
    return any(low <= code <= high for low, high in ranges)


# =============================================================================
# Single Characters
# =============================================================================


def is_kanji(char: str) -> bool:
    return _in_ranges(char, KANJI_RANGES)


def is_hiragana(char: str) -> bool:
    return _in_ranges(char, (HIRAGANA_RANGE,))


def is_katakana(char: str) -> bool:
    return _in_ranges(char, (KATAKANA_RANGE,))


def is_kana(char: str) -> bool:
    return is_hiragana(char) or is_katakana(char)


def is_symbol(char: str) -> bool:
    return char in SYMBOL_CHARS or _in_ranges(char, SYMBOL_RANGES)


def is_roman_letter(char: str) -> bool:
    return char in ROMAN_CHARS or _in_ranges(char, ROMAN_RANGES)


def is_small_kana(char: str) -> bool:
    return char in SMALL_HIRAGANA or char in SMALL_KATAKANA


def is_particle(char: str) -> bool:
    return char in PARTICLES


def is_japanese(char: str) -> bool:
    return is_kana(char) or is_kanji(char) or is_symbol(char) or is_roman_letter(char)


# =============================================================================
# Strings
# =============================================================================


def has_kanji(text: str) -> bool:
    """True if ``text`` contains at least one kanji."""
    return any(is_kanji(c) for c in text)


def kanji_count(text: str) -> int:
    return sum(1 for c in text if is_kanji(c))


def extract_kanji(text: str) -> list[str]:
    """Kanji of ``text`` in order of appearance, duplicates dropped."""
    seen: list[str] = []
    for char in text:
        if is_kanji(char) and char not in seen:
            seen.append(char)
    return seen
