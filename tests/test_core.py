"""Integration tests for the reflow pipeline.

WHY: Paragraph splitting, protected lines, quote handling and error
propagation only show up when the stages run together.

HOW: reflow_text() and reflow_lines() are fed small inputs with
hand-checked outputs.

RULES:
- Output of a failing paragraph never appears; earlier output does.
"""

import pytest

from reflow.config import Options
from reflow.core import format_paragraph, reflow_lines, reflow_text, reformat, split_input
from reflow.errors import BadArgument, CannotJustify, ImpossibleWidth, WordTooLong
from reflow.segmenter import Affixes


class TestSplitInput:

    def test_final_newline_is_optional(self):
        assert split_input("a\nb\n") == ["a", "b"]
        assert split_input("a\nb") == ["a", "b"]

    def test_empty_text(self):
        assert split_input("") == []

    def test_unterminated_blank_last_line_is_dropped(self):
        assert split_input("a\n  ") == ["a"]
        assert split_input("a\n  \n") == ["a", "  "]
        assert reflow_text("a\n  ") == "a\n"


class TestParagraphs:
    """Blank lines, protected lines and paragraph joins."""

    def test_lines_of_a_paragraph_are_joined(self):
        assert reflow_text("one two\nthree four\n") == "one two three four\n"

    def test_blank_lines_are_kept(self):
        assert reflow_text("a b\n\nc d\n") == "a b\n\nc d\n"

    def test_whitespace_only_line_becomes_empty(self):
        assert reflow_text("a\n   \nb\n") == "a\n\nb\n"

    def test_expel_collapses_blank_runs(self):
        assert reflow_text("\n\na b\n\n\n\nc d\n\n", expel=True) == "a b\n\nc d\n"

    def test_protected_lines_are_copied(self):
        text = "one\ntwo\n# keep   this\nthree\n"
        assert reflow_text(text, protectchars="#") == "one two\n# keep   this\nthree\n"

    def test_empty_input_gives_empty_output(self):
        assert reflow_text("") == ""

    def test_ruler_line_kept_between_blocks(self):
        text = "some text here\n==========\nmore words\n"
        assert reflow_text(text, width=10, repeat=3) == (
            "some text\nhere\n==========\nmore words\n"
        )

    def test_ruler_line_stretched_with_repeat(self):
        text = "alpha\n=====\nbeta\n"
        assert reflow_text(text, width=8, repeat=3) == "alpha\n========\nbeta\n"

    def test_div_keeps_indented_paragraphs_apart(self):
        text = "  First para\ntext\n  Second para\nmore\n"
        assert reflow_text(text, div=True) == "  First para text\n  Second para more\n"
        assert reflow_text(text) == "  First para text Second para more\n"

    def test_guess_keeps_wide_sentence_breaks(self):
        text = "Mr. Smith went home.  He slept.\n"
        assert reflow_text(text, guess=True) == "Mr. Smith went home.  He slept.\n"
        assert reflow_text(text) == "Mr. Smith went home. He slept.\n"


class TestQuotes:
    """Quote-level handling."""

    def test_quote_levels_are_separated(self):
        assert reflow_text("> one\n>> two\n", quote=True) == "> one\n>\n>> two\n"

    def test_invisible_separator_is_hidden(self):
        assert reflow_text("> one\n>> two\n", quote=True, invis=True) == "> one\n>> two\n"

    def test_without_quote_levels_run_together(self):
        assert reflow_text("> one\n>> two\n") == "> one > two\n"

    def test_expel_drops_superfluous_vacant_lines(self):
        lines = [">a", ">", ">", ">b"]
        assert format_paragraph(lines, Options(expel=True)) == [">a", ">", ">b"]
        assert format_paragraph(lines, Options()) == lines


class TestErrors:
    """Errors raised from the pipeline."""

    def test_report_rejects_long_words(self):
        with pytest.raises(WordTooLong):
            reflow_text("a verylongword\n", width=5, report=True)

    def test_long_words_split_without_report(self):
        assert reflow_text("abcdefghij\n", width=4) == "abcd\nefgh\nij\n"

    def test_width_must_exceed_affixes(self):
        with pytest.raises(ImpossibleWidth, match=r"<width> \(2\) <= <prefix> \(2\)"):
            reflow_text("> a\n> b\n", width=2)

    def test_cannot_justify_lone_word(self):
        with pytest.raises(CannotJustify):
            reflow_text("foo\n", width=10, just=True, last=True)

    def test_unknown_option_is_rejected(self):
        with pytest.raises(BadArgument):
            reflow_text("foo\n", colour="red")

    def test_earlier_paragraphs_survive_an_error(self):
        lines = reflow_lines(["ok text", "", "foo"], Options(width=10, just=True, last=True))

        assert next(lines) == "ok    text"
        assert next(lines) == ""
        with pytest.raises(CannotJustify):
            next(lines)

    def test_empty_segment_is_impossible(self):
        with pytest.raises(ImpossibleWidth) as excinfo:
            reformat([], Options(), Affixes(0, 0, 0, 0))
        assert excinfo.value.code == 4
