"""Tests for distance - edit distance and normalized change distance."""
import pytest

from velocity_trigger.distance import levenshtein, change_distance


class TestLevenshtein:
    def test_identical_is_zero(self):
        assert levenshtein("prompt", "prompt") == 0

    def test_classic_example(self):
        assert levenshtein("kitten", "sitting") == 3

    def test_symmetric(self):
        assert levenshtein("flaw", "lawn") == levenshtein("lawn", "flaw") == 2

    def test_against_empty_is_length(self):
        assert levenshtein("abc", "") == 3
        assert levenshtein("", "abcd") == 4

    def test_wide_characters_count_once(self):
        assert levenshtein("测试一下", "测验一下") == 1


class TestChangeDistance:
    @pytest.mark.parametrize("text", ["a", "Explain recursion.", "你好世界"])
    def test_same_text_is_unchanged(self, text):
        assert change_distance(text, text) == 0.0

    @pytest.mark.parametrize("text", ["", "a", "Explain recursion."])
    def test_empty_last_sent_is_fully_changed(self, text):
        assert change_distance(text, "") == 1.0

    def test_normalized_by_longer_text(self):
        assert change_distance("kitten", "sitting") == pytest.approx(3 / 7)

    def test_small_edit_of_long_text_is_below_default_floor(self):
        base = "Please summarize the attached report in three bullet points."
        assert change_distance(base + "!", base) < 0.2

    def test_rewrite_is_large(self):
        assert change_distance("abcdef", "uvwxyz") == 1.0

    def test_result_within_unit_interval(self):
        assert 0.0 <= change_distance("short", "a much longer previous text") <= 1.0
