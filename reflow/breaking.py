"""Optimal line breaking by dynamic programming.

WHY: Greedy filling leaves one long ragged line after another and a
stub at the end. Looking at every possible set of breaks at once gives
visibly better paragraphs: lines of even length when ragged, evenly
spread gaps when justified.

HOW: All three optimizers walk the word list backwards. For a word i,
the candidates are the lines that start at i and end just before some
later word j; the best choice for i combines that line's own cost with
the already computed best cost from j. The winning j is stored in
next_break[i]; len(words) stands for "this is the last line".

  simple_breaks(): maximize the length of the shortest line.
  normal_breaks(): minimize the sum of squared shortfalls from the
    target width, never going below the best achievable
    shortest line. Used when not justifying.
  just_breaks(): first minimize the widest gap, then minimize the
    sum of squared extra spaces per gap.

RULES:
- Words must all fit in L (see words.prepare_words).
- A shifted word costs one extra space unless it starts a line.
- Ties: each recurrence keeps its own comparison (>= for the maximin,
  <= for the sums of squares, strict < for the widest-gap pass).
- The last line only counts when last=True.
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from .errors import CannotJustify, ImpossibleWidth
from .models import Breaks, Word

logger = logging.getLogger(__name__)


def _widths(words: Sequence[Word]) -> Tuple[List[int], List[int]]:
    return [w.length for w in words], [1 if w.shifted else 0 for w in words]


def simple_breaks(words: Sequence[Word], L: int, last: bool = False) -> int:
    """Choose breaks that maximize the length of the shortest line.

    Args:
        words: The words to break.
        L: Maximum line length.
        last: Count the last line like the others.

    Returns:
        The length of the shortest line, -1 if some word is longer than
        L, or L if there are no words.
    """
    return _simple(words, L, last)[0]


def _simple(words: Sequence[Word], L: int, last: bool) -> Tuple[int, Breaks]:
    n = len(words)
    if not n:
        return L, Breaks()

    length, shift = _widths(words)
    score = [0] * n
    next_break = [n] * n

    # Words that can share the last line with everything after them.
    i = n - 1
    linelen = length[i]
    while i >= 0 and linelen <= L:
        score[i] = linelen if last else L
        next_break[i] = n
        linelen += shift[i]
        i -= 1
        if i >= 0:
            linelen += 1 + length[i]

    while i >= 0:
        score[i] = -1
        linelen = length[i]
        j = i + 1
        while linelen <= L:
            candidate = min(score[j], linelen)
            if candidate >= score[i]:
                next_break[i] = j
                score[i] = candidate
            linelen += 1 + shift[j] + length[j]
            j += 1
        i -= 1

    return score[0], Breaks(next_break=next_break, score=score)


def best_fit_target(words: Sequence[Word], L: int, last: bool = False) -> int:
    """Return the line length that best balances shortest and longest lines.

    Tries every length from L downwards while the words still fit and
    keeps the one where target minus shortest line is smallest; on ties
    the widest such length wins.
    """
    target = L
    best = L + 1
    try_len = L
    while True:
        shortest = simple_breaks(words, try_len, last)
        if shortest < 0:
            break
        if try_len - shortest < best:
            target = try_len
            best = target - shortest
        try_len -= 1
    return target


def normal_breaks(
    words: Sequence[Word],
    L: int,
    fit: bool = False,
    last: bool = False,
) -> Breaks:
    """Choose breaks for ragged-right output.

    WHY: The maximin solution alone tends to pile slack onto some lines.
    Minimizing squared shortfalls spreads it evenly while the maximin
    length acts as a floor.

    HOW: Optionally narrow the target with best_fit_target(), compute
    the maximin floor, then run the sum-of-squares recurrence. The last
    line pays nothing and has no floor unless last is set.

    Args:
        words: The words to break.
        L: Maximum line length.
        fit: Narrow the target width for the best fit.
        last: Treat the last line like the others.

    Returns:
        The chosen Breaks.

    Raises:
        ImpossibleWidth: If no line breaking satisfies the constraints.
    """
    n = len(words)
    if not n:
        return Breaks()

    target = best_fit_target(words, L, last) if fit else L

    shortest = simple_breaks(words, target, last)
    if shortest < 0:
        raise ImpossibleWidth(1)

    length, shift = _widths(words)
    score = [0] * n
    next_break = [n] * n

    for i in range(n - 1, -1, -1):
        score[i] = -1
        linelen = length[i]
        j = i + 1
        while linelen <= target:
            extra = target - linelen
            minlen = shortest
            if j < n:
                candidate = score[j]
            else:
                candidate = 0
                if not last:
                    extra = minlen = 0
            if linelen >= minlen and candidate >= 0:
                candidate += extra * extra
                if score[i] < 0 or candidate <= score[i]:
                    next_break[i] = j
                    score[i] = candidate
            if j == n:
                break
            linelen += 1 + shift[j] + length[j]
            j += 1

    if score[0] < 0:
        raise ImpossibleWidth(2)

    logger.debug("normal_breaks: target=%d shortest=%d score=%d", target, shortest, score[0])
    return Breaks(next_break=next_break, score=score)


def _gap(extra: int, numgaps: int, L: int) -> int:
    return (extra + numgaps - 1) // numgaps if numgaps else L


def just_breaks(words: Sequence[Word], L: int, last: bool = False) -> Breaks:
    """Choose breaks for fully justified output.

    WHY: A justified line stretches its gaps to reach exactly L. The
    most visible flaw is the widest gap, so that is minimized first;
    among the solutions that achieve it, gaps are made as even as
    possible.

    HOW: Two backward passes. The first computes, for each word, the
    smallest achievable largest gap (a lone word on a line counts as a
    gap of L, since it cannot be justified). The second minimizes the
    sum over gaps of the squared number of extra spaces, allowing only
    lines whose gap stays within that bound.

    Args:
        words: The words to break.
        L: Line length every justified line must reach.
        last: Justify the last line too.

    Returns:
        The chosen Breaks.

    Raises:
        CannotJustify: If the widest gap cannot be kept below L.
        ImpossibleWidth: If the second pass finds no solution.
    """
    n = len(words)
    if not n:
        return Breaks()

    length, shift = _widths(words)
    score = [0] * n
    next_break = [n] * n

    for i in range(n - 1, -1, -1):
        score[i] = L
        numgaps = 0
        extra = L - length[i]
        j = i + 1
        while extra >= 0:
            gap = _gap(extra, numgaps, L)
            if j < n:
                candidate = score[j]
            else:
                candidate = 0
                if not last:
                    gap = 0
            if gap > candidate:
                candidate = gap
            if candidate < score[i]:
                next_break[i] = j
                score[i] = candidate
            if j == n:
                break
            numgaps += 1
            extra -= 1 + shift[j] + length[j]
            j += 1

    maxgap = score[0]
    if maxgap >= L:
        raise CannotJustify()

    for i in range(n - 1, -1, -1):
        score[i] = -1
        numgaps = 0
        extra = L - length[i]
        j = i + 1
        while extra >= 0:
            gap = _gap(extra, numgaps, L)
            if j < n:
                candidate = score[j]
            else:
                if not last:
                    next_break[i] = n
                    score[i] = 0
                    break
                candidate = 0
            if gap <= maxgap and candidate >= 0:
                numbiggaps = extra % numgaps
                # Sum over gaps of (extra spaces in the gap) squared, when
                # the extra spaces are split as evenly as possible.
                candidate += (extra // numgaps) * (extra + numbiggaps) + numbiggaps
                if score[i] < 0 or candidate <= score[i]:
                    next_break[i] = j
                    score[i] = candidate
            if j == n:
                break
            numgaps += 1
            extra -= 1 + shift[j] + length[j]
            j += 1

    if score[0] < 0:
        raise ImpossibleWidth(3)

    logger.debug("just_breaks: maxgap=%d score=%d", maxgap, score[0])
    return Breaks(next_break=next_break, score=score)
