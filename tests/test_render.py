"""Unit tests for rendering chosen breaks into text.

WHY: The renderer is where affixes come back, gaps get stretched and
segments grow past their input lines. Mistakes show up as misaligned
suffixes or uneven justification.

HOW: Tests go through reflow_text() and format_paragraph() for the
common paths and call render_bodiless() directly for ruler lines.
"""

import re

import pytest

from reflow.config import Options
from reflow.core import format_paragraph, reflow_text
from reflow.errors import ImpossibleWidth
from reflow.models import LineProps
from reflow.render import render_bodiless

SENTENCE = (
    "the quick brown fox jumps over the lazy dog and keeps on running far away"
)


class TestRenderLines:
    """Body segments through the full pipeline."""

    def test_ragged_lines(self):
        assert reflow_text("The quick brown fox\n", width=10) == "The quick\nbrown fox\n"

    def test_suffix_is_padded_to_width(self):
        text = "| aaa bbb |\n| ccc |\n"
        assert reflow_text(text, width=11) == "| aaa bbb |\n| ccc     |\n"

    def test_touch_moves_suffix_left(self):
        text = "| aa |\n| bb |\n"
        assert reflow_text(text, width=20) == "| aa bb" + " " * 11 + " |\n"
        assert reflow_text(text, width=20, touch=True) == "| aa bb |\n"

    def test_justified_last_line(self):
        assert reflow_text("foo bar\n", width=11, just=True, last=True) == "foo     bar\n"

    def test_justified_line_already_full(self):
        assert reflow_text("foo bar\n", width=7, just=True) == "foo bar\n"

    def test_extra_spaces_spread_evenly(self):
        assert reflow_text("aa bb cc\n", width=11, just=True, last=True) == "aa   bb  cc\n"

    def test_justified_lines_have_full_width_and_even_gaps(self):
        out = reflow_text(SENTENCE + "\n", width=20, just=True).splitlines()

        assert len(out) > 1
        for line in out[:-1]:
            assert len(line) == 20
            gaps = [len(g) for g in re.findall(r" +", line)]
            assert max(gaps) - min(gaps) <= 1

    def test_hang_pads_with_fallback_prefix(self):
        options = Options(hang=2, quote=True)
        assert format_paragraph(["> word"], options) == ["> word", "> "]

    def test_hang_line_keeps_its_own_prefix(self):
        text = "* item one\n  continues\n  more\n"
        assert reflow_text(text, hang=1) == "* item one continues more\n"

    def test_reflow_is_stable(self):
        text = "> The quick brown fox jumps\n> over the lazy dog.\n"
        once = reflow_text(text, width=20, bodychars="_A_a.")
        assert once.startswith("> ")
        assert reflow_text(once, width=20, bodychars="_A_a.") == once


class TestRenderBodiless:
    """render_bodiless() for ruler and vacant lines."""

    def test_without_repeat_line_is_kept(self):
        props = LineProps(bodiless=True, repeat_char="=")
        assert render_bodiless("=====   ", props, 20) == "====="

    def test_ruler_is_stretched_to_width(self):
        props = LineProps(bodiless=True, repeat_char="=", prefix_len=2)
        assert render_bodiless("# ====", props, 10, repeat=3) == "# " + "=" * 8

    def test_vacant_line_without_suffix_is_trimmed(self):
        props = LineProps(bodiless=True, repeat_char=" ", prefix_len=1)
        assert render_bodiless(">  ", props, 20, repeat=3) == ">"

    def test_vacant_line_with_suffix_is_stretched(self):
        props = LineProps(bodiless=True, repeat_char=" ", prefix_len=1, suffix_len=1)
        assert render_bodiless("|    |", props, 8, repeat=3) == "|      |"

    def test_width_smaller_than_affixes(self):
        props = LineProps(bodiless=True, repeat_char="=", prefix_len=2)
        with pytest.raises(ImpossibleWidth) as excinfo:
            render_bodiless("# ====", props, 1, repeat=3)
        assert excinfo.value.code == 5
