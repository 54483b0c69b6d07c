"""Tests for Unicode script and category helpers."""

from relnet.domain.unicode_script import (
    contains_japanese_script,
    first_grapheme,
    is_decimal_digit,
    is_han_character,
    is_hiragana_or_katakana_or_han,
    is_symbol_category,
)


def test_han_detection():
    assert is_han_character("田")
    assert is_han_character("々")
    assert is_han_character("\U00020000")  # CJK Extension B
    assert not is_han_character("た")
    assert not is_han_character("タ")
    assert not is_han_character("T")
    assert not is_han_character("")


def test_japanese_script_detection():
    assert is_hiragana_or_katakana_or_han("あ")
    assert is_hiragana_or_katakana_or_han("ア")
    assert is_hiragana_or_katakana_or_han("ｱ")  # half-width katakana
    assert is_hiragana_or_katakana_or_han("山")
    assert not is_hiragana_or_katakana_or_han("a")
    assert not is_hiragana_or_katakana_or_han("1")


def test_contains_japanese_script():
    assert contains_japanese_script("Taro 田中")
    assert contains_japanese_script("abcア")
    assert not contains_japanese_script("Tanaka")
    assert not contains_japanese_script("")


def test_decimal_digit():
    assert is_decimal_digit("1")
    assert is_decimal_digit("１")
    assert is_decimal_digit("٣")  # Arabic-Indic three
    assert not is_decimal_digit("一")
    assert not is_decimal_digit("½")
    assert not is_decimal_digit("a")


def test_symbol_category():
    assert is_symbol_category("$")
    assert is_symbol_category("+")
    assert is_symbol_category("^")
    assert is_symbol_category("😄")
    assert not is_symbol_category("!")
    assert not is_symbol_category("#")
    assert not is_symbol_category("a")


def test_first_grapheme():
    assert first_grapheme("") == ""
    assert first_grapheme("Taro") == "T"
    assert first_grapheme("がん") == "が"
    assert first_grapheme("👍🏽ok") == "👍🏽"
