"""Unit tests for the line-breaking optimizers.

WHY: The optimizers are the heart of the reformatter. Their tie-breaking
and boundary handling decide the exact output, so the tests pin known
results rather than only checking that some answer comes back.

HOW: Word lists are built with the make_words fixture and passed to
simple_breaks(), best_fit_target(), normal_breaks() and just_breaks().
Results are checked through Breaks.line_starts().

RULES:
- simple_breaks() is negative exactly when some word exceeds L.
- Justification with a lone word on the counted last line fails.
"""

import pytest

from reflow.breaking import best_fit_target, just_breaks, normal_breaks, simple_breaks
from reflow.errors import CannotJustify, ImpossibleWidth
from reflow.models import Breaks
from reflow.render import longest_line

FOX = ["The", "quick", "brown", "fox"]


class TestSimpleBreaks:
    """simple_breaks() maximin."""

    def test_no_words_returns_width(self):
        assert simple_breaks([], 10) == 10

    def test_word_wider_than_line(self, make_words):
        assert simple_breaks(make_words(["toolong"]), 3) == -1

    def test_shortest_line_is_maximized(self, make_words):
        # "The quick" / "brown fox" beats "The" / "quick brown" / "fox".
        assert simple_breaks(make_words(FOX), 10) == 9

    def test_last_line_counts_with_last(self, make_words):
        assert simple_breaks(make_words(["aaa", "b"]), 3, last=True) == 1
        assert simple_breaks(make_words(["aaa", "b"]), 3) == 3

    @pytest.mark.parametrize("L", range(1, 12))
    def test_negative_exactly_when_a_word_is_too_long(self, make_words, L):
        words = make_words(FOX)
        too_long = any(w.length > L for w in words)
        assert (simple_breaks(words, L) < 0) == too_long


class TestNormalBreaks:
    """normal_breaks() sum of squares."""

    def test_even_lines(self, make_words):
        words = make_words(FOX)
        breaks = normal_breaks(words, 10)

        assert breaks.line_starts() == [0, 2]
        assert longest_line(words, breaks) == 9

    def test_no_words(self):
        assert normal_breaks([], 10) == Breaks()

    def test_word_wider_than_line_is_impossible(self, make_words):
        with pytest.raises(ImpossibleWidth) as excinfo:
            normal_breaks(make_words(["toolong"]), 3)
        assert excinfo.value.code == 1

    def test_shifted_word_costs_a_space(self, make_words):
        plain = normal_breaks(make_words(["aaaa", "bbbb"]), 9)
        shifted = normal_breaks(make_words(["aaaa", "bbbb"], shifted={1}), 9)

        assert plain.line_starts() == [0]
        assert shifted.line_starts() == [0, 1]

    def test_fit_narrows_the_target(self, make_words):
        words = make_words(["aa", "bb", "cc", "dd"])

        assert best_fit_target(words, 10) == 8
        assert normal_breaks(words, 10, fit=True).line_starts() == [0, 3]


class TestJustBreaks:
    """just_breaks() widest gap then evenness."""

    def test_single_line_fits_exactly(self, make_words):
        breaks = just_breaks(make_words(["foo", "bar"]), 7)
        assert breaks.line_starts() == [0]

    def test_lone_word_on_counted_last_line_cannot_justify(self, make_words):
        with pytest.raises(CannotJustify, match="Cannot justify."):
            just_breaks(make_words(["foo"]), 10, last=True)

    def test_lone_word_on_free_last_line_is_fine(self, make_words):
        breaks = just_breaks(make_words(["foo"]), 10)
        assert breaks.line_starts() == [0]

    def test_score_is_sum_of_squared_extra_spaces(self, make_words):
        # Extra spaces of 2 and 1 cost 4 + 1.
        breaks = just_breaks(make_words(["aa", "bb", "cc"]), 11, last=True)
        assert breaks.line_starts() == [0]
        assert breaks.score[0] == 5

    def test_no_words(self):
        assert just_breaks([], 10) == Breaks()
