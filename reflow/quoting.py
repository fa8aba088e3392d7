"""Input line normalization and quote-level reconciliation.

WHY: Quoted mail and news text nests quotation levels ("> " inside
"> > "). When two neighbouring lines sit at different levels, wrapping
them together would smear one level's text into the other. Inserting a
vacant line that carries only the shared quote prefix makes each level
its own block, and the segmenter then treats the vacant line as a
separator.

HOW: normalize_line() cleans one raw line. reconcile_quotes() walks the
paragraph once, comparing each line's leading quote run with the
previous line's, and either truncates a quote-only line or inserts a
separator line between the two.

RULES:
- NUL characters are dropped; every other whitespace becomes a space.
- The quote run of a line excludes trailing spaces.
- A line is quote-only when it holds nothing but quote characters and
  spaces.
- Truncation happens only when invis is off and one of the lines is
  quote-only; otherwise a separator line is inserted.
- Inserted lines are flagged invisible when invis is on.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

from .charset import Charset


def normalize_line(raw: str) -> str:
    """Drop NULs and turn every whitespace character into a space."""
    return "".join(" " if ch.isspace() else ch for ch in raw if ch != "\0")


def is_blank(raw: str) -> bool:
    """True if the line holds only whitespace and NUL characters."""
    return all(ch == "\0" or ch.isspace() for ch in raw)


def _quote_extent(line: str, quotechars: Charset) -> Tuple[int, bool]:
    """Return (end of the leading quote run, quote-only flag) for a line."""
    end = 0
    while end < len(line) and line[end] in quotechars:
        end += 1
    p = end
    while p < len(line) and (line[p] == " " or line[p] in quotechars):
        p += 1
    quote_only = p == len(line)
    while end > 0 and line[end - 1] == " ":
        end -= 1
    return end, quote_only


def reconcile_quotes(
    lines: Iterable[str],
    quotechars: Charset,
    invis: bool = False,
) -> Tuple[List[str], List[bool]]:
    """Make quote-level changes between neighbouring lines explicit.

    Args:
        lines: Normalized lines of one paragraph.
        quotechars: Characters that make up quote markers.
        invis: Flag inserted separator lines as invisible instead of
               truncating quote-only lines.

    Returns:
        The reconciled lines and a parallel list of invisible flags.
    """
    out = []  # type: List[str]
    invisible = []  # type: List[bool]
    old_end = 0
    old_quote_only = False

    for line in lines:
        end, quote_only = _quote_extent(line, quotechars)
        if out:
            old = out[-1]
            p = 0
            while p < end and p < old_end and line[p] == old[p]:
                p += 1
            if not (p == end and p == old_end):
                if not invis and (old_quote_only or quote_only):
                    if old_quote_only:
                        out[-1] = old[:p]
                    if quote_only:
                        line = line[:p]
                        end = p
                else:
                    out.append(line[:p])
                    invisible.append(invis)
        out.append(line)
        invisible.append(False)
        old_end = end
        old_quote_only = quote_only

    return out, invisible
