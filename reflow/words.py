"""Word extraction and the sentence-break guessing heuristic.

WHY: The optimizers work on words, not lines. Two details of the input
survive the split into words: the indentation of the first line, and
(optionally) the difference between one and two spaces after a period,
which marks a sentence break in typewriter-style text.

HOW: extract_words() cuts the body of each line on spaces. apply_guess()
flags curious and capital words and either merges an abbreviation with
the capitalized word after it ("Mr. Smith") or shifts the capitalized
word so it is printed after two spaces. prepare_words() then deals with
words wider than the line.

RULES:
- The first word of a segment keeps the spaces in front of it.
- Merging only happens across exactly one space on the same input line.
- A merged word inherits capital and shifted from the earlier word.
- Splitting a long word moves capital and shifted to its first chunk.
"""

from __future__ import annotations

from typing import List, Sequence

from .charset import Charset
from .errors import LineTooShort, WordTooLong
from .models import Word


def extract_words(lines: Sequence[str], prefix: int, suffix: int) -> List[Word]:
    """Split the bodies of a segment's lines into words.

    Args:
        lines: Lines of one body segment.
        prefix: Prefix length to skip on every line.
        suffix: Suffix length to skip on every line.

    Returns:
        Words in reading order.

    Raises:
        LineTooShort: If a line cannot hold prefix + suffix characters.
    """
    words = []  # type: List[Word]
    on_first_word = True
    for index, line in enumerate(lines):
        if len(line) < prefix + suffix:
            raise LineTooShort(index + 1, prefix, suffix)
        end = len(line) - suffix
        p1 = prefix
        while True:
            while p1 < end and line[p1] == " ":
                p1 += 1
            if p1 == end:
                break
            p2 = p1
            if on_first_word:
                p1 = prefix
                on_first_word = False
            while p2 < end and line[p2] != " ":
                p2 += 1
            words.append(Word(text=line[p1:p2], line=index, start=p1))
            p1 = p2
    return words


def is_capital(text: str) -> bool:
    """True if the first alphanumeric character of text is not lowercase."""
    for ch in text:
        if ch.isalnum():
            return not ch.islower()
    return False


def is_curious(text: str, terminalchars: Charset) -> bool:
    """True if text ends like a sentence or an abbreviation.

    Scanning back from the end, a terminal character has to appear
    before any alphanumeric one, and some alphanumeric character has to
    appear before that terminal character.
    """
    p = len(text)
    while p > 0:
        ch = text[p - 1]
        if ch.isalnum():
            return False
        if ch in terminalchars:
            break
        p -= 1
    if p <= 1:
        return False
    return any(ch.isalnum() for ch in text[:p - 1])


def _adjacent(earlier: Word, later: Word) -> bool:
    return earlier.line == later.line and earlier.start + earlier.length + 1 == later.start


def apply_guess(words: Sequence[Word], terminalchars: Charset, cap: bool = False) -> List[Word]:
    """Flag curious and capital words, merging or shifting where needed.

    Args:
        words: Words from extract_words().
        terminalchars: Characters that end a sentence.
        cap: Count every word as capitalized.

    Returns:
        A new word list; merged-away words are dropped.
    """
    result = []  # type: List[Word]
    for word in words:
        if is_curious(word.text, terminalchars):
            word.curious = True
        if cap or is_capital(word.text):
            word.capital = True
            prev = result[-1] if result else None
            if prev is not None and prev.curious:
                if _adjacent(prev, word):
                    word.text = prev.text + " " + word.text
                    word.line = prev.line
                    word.start = prev.start
                    word.capital = prev.capital
                    word.shifted = prev.shifted
                    result.pop()
                else:
                    word.shifted = True
        result.append(word)
    return result


def split_long_words(words: Sequence[Word], width: int) -> List[Word]:
    """Cut every word longer than width into width-sized chunks."""
    result = []  # type: List[Word]
    for word in words:
        while word.length > width:
            result.append(Word(
                text=word.text[:width],
                line=word.line,
                start=word.start,
                shifted=word.shifted,
                capital=word.capital,
            ))
            word.text = word.text[width:]
            word.start += width
            word.shifted = False
            word.capital = False
        result.append(word)
    return result


def prepare_words(
    lines: Sequence[str],
    prefix: int,
    suffix: int,
    width: int,
    terminalchars: Charset,
    cap: bool = False,
    guess: bool = False,
    report: bool = False,
) -> List[Word]:
    """Build the final word list for one body segment.

    WHY: The optimizers require every word to fit in the line width L.

    HOW: Extract, optionally guess, then either reject or split the
    words longer than L.

    RULES:
    - width here is L, the room left between prefix and suffix.
    - report=True turns an overlong word into a WordTooLong error.

    Raises:
        LineTooShort: If a line cannot hold its affixes.
        WordTooLong: If report is set and a word is wider than width.
    """
    words = extract_words(lines, prefix, suffix)
    if guess:
        words = apply_guess(words, terminalchars, cap)
    if report:
        for word in words:
            if word.length > width:
                raise WordTooLong(word.text)
        return words
    return split_long_words(words, width)
