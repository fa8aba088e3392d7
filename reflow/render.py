"""Turning chosen line breaks back into text.

WHY: The optimizers only decide where lines end. Each output line still
needs its prefix and suffix (copied from the matching input line, or
from a fallback when the segment grew), the words with their spacing,
and, when justifying, extra spaces spread across the gaps.

HOW: render_lines() walks the break chain from the first word, building
one line per break, then keeps going with empty lines until hang lines
have been produced. Extra justification spaces are handed out with a
phase accumulator so that they land evenly. render_bodiless() prints a
bodiless line either as-is or stretched to the full width.

RULES:
- Output line i takes its affixes from input line i while there is one.
- Past the input, a segment with more than hang lines reuses its last
  line's affixes; otherwise the fallback lengths afp/fs are used and
  padded with spaces.
- With a suffix, or on a justified line, the body is padded to L.
- touch shrinks L to the longest line before padding (not when justifying).
"""

from __future__ import annotations

from typing import List, Sequence

from .errors import ImpossibleWidth
from .models import Breaks, LineProps, Word


def longest_line(words: Sequence[Word], breaks: Breaks) -> int:
    """Return the length of the longest line the breaks produce."""
    longest = 0
    for start in breaks.line_starts():
        linelen = words[start].length
        for k in range(start + 1, breaks.next_break[start]):
            linelen += 1 + (1 if words[k].shifted else 0) + words[k].length
        longest = max(longest, linelen)
    return longest


def _affix_text(source: str, length: int, fallback: int) -> str:
    fallback = min(fallback, length)
    return source[:fallback] + " " * (length - fallback)


def render_lines(
    lines: Sequence[str],
    words: Sequence[Word],
    breaks: Breaks,
    L: int,
    prefix: int,
    suffix: int,
    afp: int = 0,
    fs: int = 0,
    hang: int = 0,
    just: bool = False,
    last: bool = False,
    touch: bool = False,
) -> List[str]:
    """Build the output lines of one body segment.

    Args:
        lines: Input lines of the segment.
        words: Words the breaks refer to.
        breaks: Breaks chosen by an optimizer.
        L: Width available between prefix and suffix.
        prefix: Prefix length.
        suffix: Suffix length.
        afp: Fallback prefix length.
        fs: Fallback suffix length.
        hang: Minimum number of output lines.
        just: The breaks were chosen for justification.
        last: The last line is treated like the others.
        touch: Shrink L to the longest line.

    Returns:
        The output lines, without line terminators.
    """
    n = len(words)
    numin = len(lines)
    affix = prefix + suffix
    suffixes = [line[len(line) - suffix:] for line in lines]

    if not just and touch:
        L = longest_line(words, breaks)

    out = []  # type: List[str]
    w1 = 0 if n else None
    numgaps = 0
    extra = 0
    while len(out) < hang or w1 is not None:
        more = False
        if w1 is not None:
            nxt = breaks.next_break[w1]
            more = nxt < n
            numgaps = 0
            extra = L - words[w1].length
            for k in range(w1 + 1, nxt):
                numgaps += 1
                extra -= 1 + (1 if words[k].shifted else 0) + words[k].length

        if suffix or (just and (more or last)):
            linelen = L + affix
        elif w1 is not None:
            linelen = prefix + L - extra
        else:
            linelen = prefix

        numout = len(out) + 1
        if numout <= numin:
            head = lines[numout - 1][:prefix]
            tail = suffixes[numout - 1]
        elif numin > hang:
            head = lines[-1][:prefix]
            tail = suffixes[-1]
        else:
            head = _affix_text(lines[-1], prefix, afp)
            tail = _affix_text(suffixes[-1], suffix, fs)

        body = []  # type: List[str]
        if w1 is not None:
            stretch = just and (more or last)
            phase = numgaps // 2
            body.append(words[w1].text)
            for k in range(w1 + 1, nxt):
                body.append(" ")
                if stretch:
                    phase += extra
                    while phase >= numgaps:
                        body.append(" ")
                        phase -= numgaps
                if words[k].shifted:
                    body.append(" ")
                body.append(words[k].text)
            w1 = nxt if more else None

        out.append(head + "".join(body).ljust(linelen - affix) + tail)

    return out


def render_bodiless(line: str, props: LineProps, width: int, repeat: int = 0) -> str:
    """Print a bodiless line, stretching its repeated character if asked.

    With repeat == 0, or for a vacant line without a suffix, the line is
    kept with its trailing spaces removed. Otherwise the repeated
    character is extended so the line fills width exactly.

    Raises:
        ImpossibleWidth: If width cannot hold the line's affixes.
    """
    if not repeat or (props.repeat_char == " " and not props.suffix_len):
        return line.rstrip(" ")
    fill = width - props.prefix_len - props.suffix_len
    if fill < 0:
        raise ImpossibleWidth(5)
    return (
        line[:props.prefix_len]
        + props.repeat_char * fill
        + line[len(line) - props.suffix_len:]
    )
