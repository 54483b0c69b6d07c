"""Name index: sort buckets and jump-list sections for persons.

classify() picks the single-character bucket a person is filed under.
Furigana wins over names, names win over the nickname, and anything that
cannot be read phonetically (an un-transliterated kanji, a leading digit or
symbol in a nickname) lands in OTHER_BUCKET.
"""

import string
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TypeVar

import jaconv
import regex

from relnet.domain.unicode_script import (
    first_grapheme,
    is_decimal_digit,
    is_han_character,
    is_letter_or_number,
    is_symbol_category,
)

T = TypeVar("T")

OTHER_BUCKET = "その他"

HIRAGANA_TITLES = ("あ", "か", "さ", "た", "な", "は", "ま", "や", "ら", "わ")
INDEX_TITLES = HIRAGANA_TITLES + tuple(string.ascii_uppercase) + (OTHER_BUCKET,)

_HIRAGANA_ROWS = {
    "あ": "あいうえおぁぃぅぇぉゔ",
    "か": "かきくけこがぎぐげごゕゖ",
    "さ": "さしすせそざじずぜぞ",
    "た": "たちつてとだぢづでどっ",
    "な": "なにぬねの",
    "は": "はひふへほばびぶべぼぱぴぷぺぽ",
    "ま": "まみむめも",
    "や": "やゆよゃゅょ",
    "ら": "らりるれろ",
    "わ": "わゐゑをんゎ",
}
_ROW_BY_KANA = {kana: row for row, chars in _HIRAGANA_ROWS.items() for kana in chars}
_HIRAGANA_ONLY = regex.compile(r"^\p{Script=Hiragana}+$")


@dataclass(frozen=True)
class PersonNameInput:
    """The name fields classify() reads. Every field may be empty."""

    last_name: str = ""
    first_name: str = ""
    nickname: str = ""
    last_name_furigana: str | None = None
    first_name_furigana: str | None = None


def classify(name: PersonNameInput, *, strict_symbols: bool = False) -> str:
    """Return the index bucket for a name. Never raises.

    With strict_symbols, any nickname that does not start with a letter or a
    number is bucketed as OTHER_BUCKET; by default only the Unicode Symbol
    categories are, so ASCII punctuation such as "!" forms its own bucket.
    """
    if name.last_name_furigana:
        return first_grapheme(name.last_name_furigana)
    if name.first_name_furigana:
        return first_grapheme(name.first_name_furigana)

    chosen = name.last_name or name.first_name
    if chosen:
        initial = first_grapheme(chosen)
        if is_han_character(initial):
            return OTHER_BUCKET
        return initial

    if name.nickname:
        initial = first_grapheme(name.nickname)
        if (
            is_han_character(initial)
            or is_decimal_digit(initial)
            or is_symbol_category(initial)
        ):
            return OTHER_BUCKET
        if strict_symbols and not is_letter_or_number(initial):
            return OTHER_BUCKET
        return initial

    return OTHER_BUCKET


def hiragana_category(c: str) -> str:
    """Return the gojuon row ("あ", "か", ...) of a hiragana, or c itself."""
    return _ROW_BY_KANA.get(c, c)


def section_title(bucket: str) -> str:
    """Map a bucket to its jump-list title: kana (half-width included) to its row, ASCII letters upper-cased."""
    if bucket == OTHER_BUCKET or not bucket:
        return OTHER_BUCKET
    hiragana = jaconv.kata2hira(jaconv.h2z(bucket, kana=True, ascii=False, digit=False))
    if hiragana in _ROW_BY_KANA:
        return hiragana_category(hiragana)
    if bucket in string.ascii_letters:
        return bucket.upper()
    return bucket


def index_section(name: PersonNameInput) -> str:
    return section_title(classify(name))


def section_sort_key(title: str) -> tuple[int, str]:
    """Hiragana rows first, then everything else in code-point order, OTHER_BUCKET last."""
    if title == OTHER_BUCKET:
        return (2, "")
    if _HIRAGANA_ONLY.match(title):
        return (0, title)
    return (1, title)


def group_into_sections(
    items: Iterable[T], key: Callable[[T], str]
) -> list[tuple[str, list[T]]]:
    """Group items by section title; sections sorted, item order kept within each."""
    sections: dict[str, list[T]] = {}
    for item in items:
        sections.setdefault(key(item), []).append(item)
    return sorted(sections.items(), key=lambda pair: section_sort_key(pair[0]))
