"""The reflow pipeline: from raw input lines to reformatted output lines.

WHY: The segmenter, word extractor, optimizers and renderer each solve
one part of the problem. This module strings them together at three
levels: one body segment, one paragraph, and a whole input.

HOW:
  1. reflow_lines() splits the input into paragraphs at blank lines and
     protected lines, normalizes each paragraph and reconciles its
     quote levels.
  2. format_paragraph() delimits the paragraph into segments, marks
     superfluous lines, prints bodiless lines and hands each body
     segment to reformat() with its resolved affixes.
  3. reformat() extracts the words of one body segment, chooses breaks
     with the optimizer for the requested policy, and renders them.

RULES:
- Options are passed explicitly; there is no module-level state.
- A paragraph's output is yielded only once the paragraph succeeded.
- Any ReflowError aborts the current paragraph and the rest of the
  input; earlier paragraphs have already been yielded.
- Under expel, runs of blank lines collapse to one, and blank lines at
  the start and end of the input disappear.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional, Sequence

from .breaking import just_breaks, normal_breaks
from .config import Options, options_from_mapping
from .errors import ImpossibleWidth
from .models import BodilessSegment
from .quoting import is_blank, normalize_line, reconcile_quotes
from .render import render_bodiless, render_lines
from .segmenter import (
    Affixes,
    delimit,
    mark_superfluous,
    resolve_affixes,
    split_segments,
)
from .words import prepare_words

logger = logging.getLogger(__name__)


def reformat(lines: Sequence[str], options: Options, affixes: Affixes) -> List[str]:
    """Rewrap one body segment.

    Args:
        lines: Lines of the segment.
        options: Run options.
        affixes: Prefix/suffix lengths from resolve_affixes().

    Returns:
        The output lines of the segment.

    Raises:
        ImpossibleWidth: If width cannot hold the affixes, or no breaks exist.
        CannotJustify: If justification is impossible at this width.
        WordTooLong: If report is on and a word is wider than the line.
        LineTooShort: If a line cannot hold its affixes.
    """
    if not lines:
        raise ImpossibleWidth(4)

    prefix = affixes.prefix
    suffix = affixes.suffix
    width = options.width
    if width <= prefix + suffix:
        raise ImpossibleWidth(
            "<width> ({}) <= <prefix> ({}) + <suffix> ({})".format(width, prefix, suffix)
        )
    L = width - prefix - suffix

    words = prepare_words(
        lines,
        prefix,
        suffix,
        L,
        options.terminalchars,
        cap=options.cap,
        guess=options.guess,
        report=options.report,
    )

    if options.just:
        breaks = just_breaks(words, L, options.last)
    else:
        breaks = normal_breaks(words, L, options.fit, options.last)

    return render_lines(
        lines,
        words,
        breaks,
        L,
        prefix,
        suffix,
        afp=affixes.afp,
        fs=affixes.fs,
        hang=options.hang,
        just=options.just,
        last=options.last,
        touch=options.effective_touch,
    )


def format_paragraph(
    lines: Sequence[str],
    options: Options,
    invisible: Optional[Sequence[bool]] = None,
) -> List[str]:
    """Reformat one paragraph of normalized lines.

    Args:
        lines: The paragraph's lines, already normalized.
        options: Run options.
        invisible: Invisible flags from quote reconciliation, if any.

    Returns:
        The output lines for the paragraph.
    """
    props = delimit(
        lines,
        options.bodychars,
        repeat=options.repeat,
        div=options.div,
        invisible=invisible,
    )
    if options.expel:
        mark_superfluous(lines, props)

    out: List[str] = []
    for segment in split_segments(props):
        if isinstance(segment, BodilessSegment):
            prop = props[segment.index]
            if prop.invisible or (options.expel and prop.superfluous):
                continue
            out.append(render_bodiless(lines[segment.index], prop, options.width, options.repeat))
            continue

        seg_lines = lines[segment.start:segment.end]
        affixes = resolve_affixes(
            seg_lines,
            props[segment.start],
            options.bodychars,
            options.quotechars,
            hang=options.hang,
            quote=options.quote,
            prefix=options.prefix,
            suffix=options.suffix,
        )
        out.extend(reformat(seg_lines, options, affixes))
    return out


def _is_protected(line: str, options: Options) -> bool:
    return bool(line) and line[0] in options.protectchars


def reflow_lines(raw_lines: Iterable[str], options: Options) -> Iterator[str]:
    """Reformat a whole input, one output line at a time.

    WHY: Real input mixes paragraphs with blank lines and with lines the
    user wants left alone (protected by their first character).

    HOW: Lines are consumed in order. Blank lines are copied (or, under
    expel, collapsed). Protected lines are copied verbatim. Any other
    run of lines up to the next blank or protected line is a paragraph:
    normalized, quote reconciled when asked, and formatted.

    Args:
        raw_lines: Input lines without line terminators.
        options: Run options.

    Yields:
        Output lines without line terminators.
    """
    pending = list(raw_lines)
    saw_nonblank = False
    owe_blank = False
    i = 0
    n = len(pending)

    while i < n:
        line = pending[i]
        if not line or (not _is_protected(line, options) and is_blank(line)):
            i += 1
            if options.expel:
                owe_blank = saw_nonblank
            else:
                yield ""
            continue

        if _is_protected(line, options):
            i += 1
            saw_nonblank = True
            if owe_blank:
                yield ""
                owe_blank = False
            yield line
            continue

        paragraph = [normalize_line(line)]
        i += 1
        while i < n and not _is_protected(pending[i], options) and not is_blank(pending[i]):
            paragraph.append(normalize_line(pending[i]))
            i += 1

        invisible = None
        if options.quote:
            paragraph, invisible = reconcile_quotes(paragraph, options.quotechars, options.invis)

        logger.debug("Formatting paragraph of %d lines", len(paragraph))
        formatted = format_paragraph(paragraph, options, invisible)

        saw_nonblank = True
        if owe_blank:
            yield ""
            owe_blank = False
        for out_line in formatted:
            yield out_line


def split_input(text: str) -> List[str]:
    """Split text into lines, ignoring the terminator of the final line.

    An unterminated final line that holds only whitespace is dropped.
    """
    lines = text.split("\n")
    if is_blank(lines[-1]):
        lines.pop()
    return lines


def reflow_text(text: str, options: Optional[Options] = None, **overrides) -> str:
    """Reformat text and return it.

    Args:
        text: Input text; lines end with "\\n".
        options: Run options; defaults to Options().
        **overrides: Option values by name, validated like
                     options_from_mapping(), applied on top of options.

    Returns:
        The reformatted text, each line ending with "\\n".
    """
    if options is None:
        options = Options()
    if overrides:
        options = options_from_mapping(overrides, base=options)

    out = list(reflow_lines(split_input(text), options))
    if not out:
        return ""
    return "\n".join(out) + "\n"
