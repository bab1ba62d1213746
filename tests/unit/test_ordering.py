"""
Unit tests for query ordering in playmatch.matching.ordering.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from playmatch.matching import compare_query_names, sort_query_files


def names(paths):
    return [p.name for p in paths]


@pytest.mark.unit
class TestSortQueryFiles:
    """Tests for natural ordering of query files."""

    def test_numeric_names_sort_numerically(self):
        paths = [Path("main/2.mp3"), Path("main/10.mp3"), Path("main/1.mp3")]

        assert names(sort_query_files(paths)) == ["1.mp3", "2.mp3", "10.mp3"]

    def test_alphabetic_names(self):
        paths = [Path("b.mp3"), Path("a.mp3")]

        assert names(sort_query_files(paths)) == ["a.mp3", "b.mp3"]

    def test_extension_ignored_for_numbers(self):
        paths = [Path("3.wav"), Path("20.flac"), Path("100.mp3"), Path("4.ogg")]

        assert names(sort_query_files(paths)) == ["3.wav", "4.ogg", "20.flac", "100.mp3"]

    def test_leading_integer_is_used(self):
        paths = [Path("12 - outro.mp3"), Path("03 - intro.mp3"), Path("7 - middle.mp3")]

        assert names(sort_query_files(paths)) == [
            "03 - intro.mp3",
            "7 - middle.mp3",
            "12 - outro.mp3",
        ]

    def test_sort_is_deterministic_for_equal_stems(self):
        first = sort_query_files([Path("1.wav"), Path("1.mp3")])
        second = sort_query_files([Path("1.mp3"), Path("1.wav")])

        assert names(first) == names(second) == ["1.mp3", "1.wav"]

    def test_returns_new_list(self):
        paths = [Path("2.mp3"), Path("1.mp3")]

        result = sort_query_files(paths)

        assert result is not paths
        assert names(paths) == ["2.mp3", "1.mp3"]

    def test_empty(self):
        assert sort_query_files([]) == []


@pytest.mark.unit
class TestCompareQueryNames:
    """Tests for the pairwise comparison."""

    def test_numeric_comparison(self):
        assert compare_query_names("2.mp3", "10.mp3") < 0
        assert compare_query_names("10.mp3", "2.mp3") > 0

    def test_equal_numbers_fall_back_to_full_name(self):
        assert compare_query_names("01.mp3", "1.mp3") != 0

    def test_identical_names(self):
        assert compare_query_names("5.mp3", "5.mp3") == 0
        assert compare_query_names("song.mp3", "song.mp3") == 0

    def test_string_comparison_when_one_is_not_numeric(self):
        assert compare_query_names("a.mp3", "b.mp3") < 0
        assert compare_query_names("b.mp3", "a.mp3") > 0

    def test_negative_numbers(self):
        assert compare_query_names("-1.mp3", "0.mp3") < 0


def case_insensitive_strcoll(a: str, b: str) -> int:
    return (a.lower() > b.lower()) - (a.lower() < b.lower())


@pytest.mark.unit
class TestLocaleCollation:
    """Tests that non-numeric names follow the locale's collation."""

    def test_collation_differs_from_code_point_order(self):
        paths = [Path("a.mp3"), Path("B.mp3")]

        with patch("playmatch.matching.ordering.locale.strcoll", side_effect=case_insensitive_strcoll):
            result = sort_query_files(paths)

        # Code point order would put "B" before "a"
        assert names(result) == ["a.mp3", "B.mp3"]

    def test_mixed_numeric_and_text_uses_collation(self):
        with patch(
            "playmatch.matching.ordering.locale.strcoll", side_effect=case_insensitive_strcoll
        ) as strcoll:
            result = compare_query_names("intro.mp3", "2.mp3")

        strcoll.assert_called_once_with("intro", "2")
        assert result > 0

    def test_mixed_names_sort_numbers_first(self):
        paths = [Path("intro.mp3"), Path("10.mp3"), Path("2.mp3")]

        assert names(sort_query_files(paths)) == ["2.mp3", "10.mp3", "intro.mp3"]
