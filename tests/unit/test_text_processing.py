"""Tests for text processing utilities."""

from autoorganize.classification.text_processing import (
    normalize,
    normalize_accents,
    normalize_match_string,
)


class TestNormalizeAccents:

    def test_strips_accents(self):
        assert normalize_accents("café") == "cafe"
        assert normalize_accents("Amélie") == "Amelie"

    def test_expands_ligatures(self):
        assert normalize_accents("cœur") == "coeur"

    def test_empty(self):
        assert normalize_accents("") == ""


class TestNormalize:

    def test_colon_becomes_comma(self):
        assert normalize("Title: Subtitle") == "Title, Subtitle"

    def test_question_mark_becomes_ellipsis(self):
        assert normalize("What?") == "What..."

    def test_slashes_become_dashes(self):
        assert normalize("AC/DC") == "AC - DC"

    def test_invalid_characters_dropped(self):
        assert normalize('Say "Hi" <now>') == "Say Hi now"

    def test_collapses_spaces(self):
        assert normalize("  Too   many  ") == "Too many"


class TestNormalizeMatchString:

    def test_punctuation_and_case(self):
        assert normalize_match_string("The.Show!") == "the show"
        assert normalize_match_string("the_show") == "the show"

    def test_accents(self):
        assert normalize_match_string("Amélie") == "amelie"

    def test_empty(self):
        assert normalize_match_string("") == ""
        assert normalize_match_string("...") == ""
