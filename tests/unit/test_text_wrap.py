"""
Unit tests for greedy word-wrapping.

Tests cvforge.contexts.rendering.text_wrap with a fixed-pitch fake measurement,
so widths are easy to reason about: every character is 1 unit wide.
"""

import math

import pytest

from cvforge.contexts.rendering.exceptions import MeasurementError
from cvforge.contexts.rendering.text_wrap import measure, wrap_paragraphs, wrap_text


def fixed_pitch(text, size):
    return float(len(text))


@pytest.mark.unit
class TestWrapText:
    """Tests for wrap_text()."""

    def test_short_paragraph_is_one_line(self):
        assert wrap_text("hello world", fixed_pitch, 10, 40) == ["hello world"]

    def test_breaks_before_the_word_that_overflows(self):
        lines = wrap_text("aa bb cc dd", fixed_pitch, 10, 5)
        assert lines == ["aa bb", "cc dd"]

    def test_exact_fit_stays_on_line(self):
        # "aa bb" is exactly 5 wide; only widths above max_width break
        assert wrap_text("aa bb", fixed_pitch, 10, 5) == ["aa bb"]

    def test_every_line_fits_unless_it_is_a_single_word(self):
        paragraph = "the quick brown fox jumps over the lazy dog " * 20
        for max_width in (8, 13, 21, 40):
            for line in wrap_text(paragraph, fixed_pitch, 10, max_width):
                assert fixed_pitch(line, 10) <= max_width or " " not in line

    def test_words_are_never_split(self):
        paragraph = "alpha beta gamma delta epsilon"
        lines = wrap_text(paragraph, fixed_pitch, 10, 11)
        assert " ".join(lines).split(" ") == paragraph.split(" ")

    def test_long_word_gets_its_own_line(self):
        lines = wrap_text("a supercalifragilistic b", fixed_pitch, 10, 5)
        assert lines == ["a", "supercalifragilistic", "b"]

    def test_lone_long_word_is_kept(self):
        assert wrap_text("supercalifragilistic", fixed_pitch, 10, 5) == ["supercalifragilistic"]

    def test_consecutive_spaces_collapse(self):
        assert wrap_text("a   b  c", fixed_pitch, 10, 100) == ["a b c"]

    def test_blank_paragraph_gives_no_lines(self):
        assert wrap_text("", fixed_pitch, 10, 100) == []
        assert wrap_text("    ", fixed_pitch, 10, 100) == []

    def test_size_is_passed_to_measurement(self):
        sizes = []

        def recording(text, size):
            sizes.append(size)
            return float(len(text))

        wrap_text("one two three", recording, 9.5, 100)
        assert sizes and set(sizes) == {9.5}


@pytest.mark.unit
class TestWrapParagraphs:
    """Tests for wrap_paragraphs()."""

    def test_newlines_are_hard_breaks(self):
        assert wrap_paragraphs("Line one\nLine two", fixed_pitch, 10, 100) == [
            "Line one",
            "Line two",
        ]

    def test_blank_lines_are_kept_as_empty_entries(self):
        assert wrap_paragraphs("first\n\nsecond", fixed_pitch, 10, 100) == ["first", "", "second"]

    def test_carriage_returns_are_stripped(self):
        assert wrap_paragraphs("first\r\nsecond\r", fixed_pitch, 10, 100) == ["first", "second"]

    def test_each_paragraph_wraps_independently(self):
        lines = wrap_paragraphs("aa bb cc\ndd", fixed_pitch, 10, 5)
        assert lines == ["aa bb", "cc", "dd"]


@pytest.mark.unit
class TestMeasure:
    """Tests for measure() failure handling."""

    def test_exception_becomes_measurement_error(self):
        def broken(text, size):
            raise KeyError("no glyph")

        with pytest.raises(MeasurementError) as exc_info:
            wrap_text("some words", broken, 10, 100)

        assert isinstance(exc_info.value.original_error, KeyError)
        assert exc_info.value.text == "some"
        assert exc_info.value.size == 10

    def test_measurement_error_passes_through(self):
        original = MeasurementError("unsupported glyph", text="x")

        def raising(text, size):
            raise original

        with pytest.raises(MeasurementError) as exc_info:
            measure(raising, "x", 10)
        assert exc_info.value is original

    @pytest.mark.parametrize("bad_width", [-1.0, math.inf, math.nan, None, "12", True])
    def test_unusable_width_is_rejected(self, bad_width):
        with pytest.raises(MeasurementError):
            measure(lambda text, size: bad_width, "text", 10)

    def test_integer_width_is_accepted(self):
        assert measure(lambda text, size: 7, "text", 10) == 7.0
