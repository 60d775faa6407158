"""Tests for text2longimage.utils.charclass."""

import pytest

from text2longimage.utils.charclass import (
    WidthClass,
    char_width,
    is_wide,
    measure_width,
    text_is_wide_script,
    width_class,
)

# ── is_wide ──────────────────────────────────────────────────────────

class TestIsWide:
    @pytest.mark.parametrize("cp", [
        0x3040, 0x3042, 0x309F,  # Hiragana
        0x30A0, 0x30AB, 0x30FF,  # Katakana
        0x3400, 0x4DBF,          # Extension A
        0x4E00, 0x4F60, 0x9FFF,  # Unified ideographs
        0x20000, 0x2A6DF,        # Extension B
    ])
    def test_wide_ranges(self, cp):
        assert is_wide(chr(cp)) is True

    @pytest.mark.parametrize("cp", [
        0x00, 0x41, 0xE9, 0xFF,
        0x303F,   # just below Hiragana
        0x3100,   # Bopomofo, just past Katakana
        0x33FF,   # just below Extension A
        0x4DC0,   # Yijing hexagrams, between Extension A and unified
        0xA000,   # Yi syllables, just past unified
        0xAC00,   # Hangul is not in the wide-script set
        0xFF0C,   # fullwidth comma
        0x1F600,  # emoji
        0x1FFFF,
        0x2A6E0,  # just past Extension B
        0x10FFFF,
    ])
    def test_outside_ranges(self, cp):
        assert is_wide(chr(cp)) is False


# ── char_width ───────────────────────────────────────────────────────

class TestCharWidth:
    @pytest.mark.parametrize("char, expected", [
        ("a", 1),
        (" ", 1),
        ("\t", 1),
        ("ÿ", 1),
        ("Ā", 2),
        ("д", 2),  # non-CJK but outside Latin-1
        ("你", 2),
        ("한", 2),
        ("😀", 2),
    ])
    def test_char_width(self, char, expected):
        assert char_width(char) == expected

    def test_width_class_matches_char_width(self):
        assert width_class("a") is WidthClass.NARROW
        assert width_class("你") is WidthClass.WIDE
        assert int(WidthClass.WIDE) == 2

    def test_width_is_one_iff_latin1(self):
        for cp in (0, 0x7F, 0x80, 0xFF, 0x100, 0x3042, 0x20000):
            assert (char_width(chr(cp)) == 1) == (cp <= 0xFF)


# ── text_is_wide_script / measure_width ──────────────────────────────

class TestTextHelpers:
    @pytest.mark.parametrize("text, expected", [
        ("", False),
        ("plain ascii", False),
        ("Привет", False),
        ("안녕하세요", False),
        ("hello 世界", True),
        ("カタカナ", True),
        ("ひらがな", True),
    ])
    def test_text_is_wide_script(self, text, expected):
        assert text_is_wide_script(text) is expected

    @pytest.mark.parametrize("text, expected", [
        ("", 0),
        ("abc", 3),
        ("你好", 4),
        ("ab你好", 6),
        ("café", 4),
    ])
    def test_measure_width(self, text, expected):
        assert measure_width(text) == expected
