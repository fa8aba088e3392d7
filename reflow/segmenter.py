"""Paragraph structure analysis: affixes, bodiless lines, segments.

WHY: A paragraph of plain text often carries structure that wrapping
must not destroy: a shared prefix ("> ", "# ", " * "), a shared suffix
(box-drawing " |"), and decorative lines ("-----", blank quote lines)
that separate blocks of prose. Before any word is moved, the paragraph
has to be split into the lines to keep and the blocks to wrap, and each
block needs to know which part of its lines is fixed decoration.

HOW: Four steps, each a plain function:
  1. common_affix_lengths() finds the longest prefix and suffix shared
     by a run of lines, without eating into body characters.
  2. delimit() classifies lines as bodiless or body and recurses into
     each run of body lines with the tighter affixes found so far.
  3. mark_superfluous() flags vacant lines that "expel" may drop.
  4. resolve_affixes() picks the prefix and suffix lengths a body
     segment is wrapped with, plus its fallback affixes.
split_segments() flattens the per-line properties into segments.

RULES:
- delimit() never mutates its input and returns one LineProps per line.
- A bodiless line always forms its own one-line segment.
- A suffix that starts with a run of spaces keeps only one of them.
- Prefix/suffix requests of None or a negative number mean "automatic".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .charset import Charset
from .models import BodilessSegment, BodySegment, LineProps, Segment

logger = logging.getLogger(__name__)


def common_affix_lengths(
    lines: Sequence[str],
    bodychars: Charset,
    pre: int = 0,
    suf: int = 0,
) -> Tuple[int, int]:
    """Return the common prefix and suffix lengths of a run of lines.

    WHY: The shared prefix and suffix of a block are what stays fixed
    while its body is rewrapped.

    HOW: The prefix is grown from pre along the first line up to its
    first body character, then cut back to what every other line shares.
    The suffix is grown backwards from suf, never reaching into the
    prefix, and cut back the same way. A leading run of spaces in the
    suffix is reduced to a single space.

    RULES:
    - lines must not be empty.
    - pre and suf must already be known to be common to all lines.

    Args:
        lines: The lines to examine.
        bodychars: Characters that can never belong to an affix.
        pre: Known common prefix length.
        suf: Known common suffix length.

    Returns:
        (prefix length, suffix length).
    """
    first = lines[0]

    end = pre
    while end < len(first) and first[end] not in bodychars:
        end += 1
    for line in lines[1:]:
        p = pre
        while p < end and p < len(line) and first[p] == line[p]:
            p += 1
        end = p
    prelen = end

    end = len(first)
    start = end - suf
    while start > prelen and first[start - 1] not in bodychars:
        start -= 1
    for line in lines[1:]:
        p1 = end - suf
        p2 = len(line) - suf
        while p1 > start and p2 > prelen and first[p1 - 1] == line[p2 - 1]:
            p1 -= 1
            p2 -= 1
        start = p1
    while end - start >= 2 and first[start] == " " and first[start + 1] == " ":
        start += 1

    return prelen, end - start


def _is_indented(line: str, pre: int) -> bool:
    return pre < len(line) and line[pre] == " "


def _delimit(
    lines: Sequence[str],
    lo: int,
    hi: int,
    bodychars: Charset,
    repeat: int,
    div: bool,
    pre: int,
    suf: int,
    props: List[LineProps],
) -> None:
    if hi == lo:
        return

    if hi == lo + 1:
        props[lo].first = True
        props[lo].prefix_len = pre
        props[lo].suffix_len = suf
        return

    pre, suf = common_affix_lengths(lines[lo:hi], bodychars, pre, suf)

    any_bodiless = False
    for i in range(lo, hi):
        prop = props[i]
        line = lines[i]
        prop.prefix_len = pre
        prop.suffix_len = suf
        end = len(line) - suf
        body = line[pre:end]
        rc = body[0] if body else " "
        if rc != " " and (not repeat or len(body) < repeat):
            prop.bodiless = False
        else:
            prop.bodiless = body.count(rc) == len(body)
        if prop.bodiless:
            any_bodiless = True
            prop.repeat_char = rc

    if any_bodiless:
        i = lo
        while i < hi:
            if props[i].bodiless:
                i += 1
                continue
            j = i + 1
            while j < hi and not props[j].bodiless:
                j += 1
            _delimit(lines, i, j, bodychars, repeat, div, pre, suf, props)
            i = j
        return

    if not div:
        props[lo].first = True
        return

    status = _is_indented(lines[lo], pre)
    for i in range(lo, hi):
        if _is_indented(lines[i], pre) == status:
            props[i].first = True


def delimit(
    lines: Sequence[str],
    bodychars: Charset,
    repeat: int = 0,
    div: bool = False,
    pre: int = 0,
    suf: int = 0,
    invisible: Optional[Sequence[bool]] = None,
) -> List[LineProps]:
    """Classify the lines of a paragraph.

    Args:
        lines: Normalized lines of one paragraph.
        bodychars: Characters that can never belong to an affix.
        repeat: Minimum run length for a non-space repeated character to
                make a bodiless line; 0 disables such lines.
        div: Use indentation changes as segment boundaries.
        pre: Known common prefix length.
        suf: Known common suffix length.
        invisible: Optional invisible flags from quote reconciliation.

    Returns:
        One LineProps per line. The superfluous flag is never set here.
    """
    props = [LineProps() for _ in lines]
    if invisible is not None:
        for prop, flag in zip(props, invisible):
            prop.invisible = flag
    _delimit(lines, 0, len(lines), bodychars, repeat, div, pre, suf, props)
    return props


def split_segments(props: Sequence[LineProps]) -> List[Segment]:
    """Flatten per-line properties into bodiless and body segments."""
    segments: List[Segment] = []
    i = 0
    n = len(props)
    while i < n:
        if props[i].bodiless:
            segments.append(BodilessSegment(i))
            i += 1
            continue
        j = i + 1
        while j < n and not props[j].bodiless and not props[j].first:
            j += 1
        segments.append(BodySegment(i, j))
        i = j
    logger.debug("Split %d lines into %d segments", n, len(segments))
    return segments


def mark_superfluous(lines: Sequence[str], props: Sequence[LineProps]) -> None:
    """Set the superfluous flag on vacant lines that expel may discard.

    Within each run of vacant lines that sits between two non-vacant
    lines, the member with the fewest non-space characters is kept (the
    earliest one on ties). Leading and trailing runs are all superfluous.
    """
    for prop in props:
        if prop.vacant:
            prop.superfluous = True

    in_body = False
    fewest = 0
    keep = None  # type: Optional[LineProps]
    for line, prop in zip(lines, props):
        if prop.vacant:
            count = len(line) - line.count(" ")
            if in_body or count < fewest:
                fewest = count
                keep = prop
            in_body = False
        else:
            if not in_body and keep is not None:
                keep.superfluous = False
            in_body = True


@dataclass(frozen=True)
class Affixes:
    """Affix lengths a body segment is wrapped with.

    Attributes:
        prefix: Prefix length of every output line.
        suffix: Suffix length of every output line.
        afp: Fallback prefix length, used for lines beyond the input.
        fs: Fallback suffix length.
    """

    prefix: int
    suffix: int
    afp: int
    fs: int


def resolve_affixes(
    lines: Sequence[str],
    first_props: LineProps,
    bodychars: Charset,
    quotechars: Charset,
    hang: int = 0,
    quote: bool = False,
    prefix: Optional[int] = None,
    suffix: Optional[int] = None,
) -> Affixes:
    """Pick the prefix and suffix lengths for one body segment.

    WHY: Users usually leave the affix lengths automatic. The right
    values then depend on the lines of the segment itself, skipping the
    first hang lines (a hanging first line has a different prefix).

    HOW: With more than hang + 1 lines, automatic sides come from the
    common affixes of the lines after the hang. Otherwise they fall back
    to the affixes delimit() recorded for the first line, where a lone
    quoted line also treats its trailing quote characters as prefix.

    Args:
        lines: Lines of the body segment.
        first_props: Properties of the segment's first line.
        bodychars: Characters that can never belong to an affix.
        quotechars: Quote characters.
        hang: Number of leading lines to skip.
        quote: Quote reconciliation is on.
        prefix: Requested prefix length, None or negative for automatic.
        suffix: Requested suffix length, None or negative for automatic.

    Returns:
        The resolved Affixes.
    """
    numin = len(lines)
    auto_prefix = prefix is None or prefix < 0
    auto_suffix = suffix is None or suffix < 0
    pre = suf = 0
    if (auto_prefix or auto_suffix) and numin > hang + 1:
        pre, suf = common_affix_lengths(lines[hang:], bodychars, 0, 0)

    first = lines[0]
    p = first_props.prefix_len
    if numin == 1 and quote:
        while p < len(first) and first[p] in quotechars:
            p += 1
    afp = p
    fs = first_props.suffix_len

    if auto_prefix:
        prefix = pre if numin > hang + 1 else afp
    if auto_suffix:
        suffix = suf if numin > hang + 1 else fs

    return Affixes(prefix=prefix, suffix=suffix, afp=afp, fs=fs)
