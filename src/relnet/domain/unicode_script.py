"""Unicode script and general-category checks used by the name index.

Script membership comes from the `regex` library's Unicode property tables
(\\p{Script=...}); general categories come from unicodedata.
"""

import unicodedata

import regex

_HAN = regex.compile(r"\p{Script=Han}")
_JAPANESE = regex.compile(r"[\p{Script=Han}\p{Script=Hiragana}\p{Script=Katakana}]")
_GRAPHEME = regex.compile(r"\X")


def first_grapheme(text: str) -> str:
    """Return the first extended grapheme cluster of text, or "" if empty."""
    if not text:
        return ""
    match = _GRAPHEME.match(text)
    return match.group() if match else ""


def _base(c: str) -> str:
    return c[:1]


def is_han_character(c: str) -> bool:
    return bool(c) and _HAN.match(_base(c)) is not None


def is_hiragana_or_katakana_or_han(c: str) -> bool:
    return bool(c) and _JAPANESE.match(_base(c)) is not None


def contains_japanese_script(text: str) -> bool:
    """True if any character of text is Han, Hiragana or Katakana."""
    return bool(text) and _JAPANESE.search(text) is not None


def is_decimal_digit(c: str) -> bool:
    return bool(c) and unicodedata.category(_base(c)) == "Nd"


def is_symbol_category(c: str) -> bool:
    """Sm, Sc, Sk or So. ASCII punctuation such as "!" is Po and does not match."""
    return bool(c) and unicodedata.category(_base(c)).startswith("S")


def is_letter_or_number(c: str) -> bool:
    return bool(c) and unicodedata.category(_base(c))[0] in ("L", "N")
