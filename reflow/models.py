"""Data models shared by the reflow pipeline.

WHY: The segmenter, word extractor, optimizers and renderer pass a few
small records between them. Keeping them in one module gives every stage
the same vocabulary.

HOW: Plain dataclasses. LineProps describes one input line after
segmentation; BodilessSegment / BodySegment are the two kinds of
segment a paragraph is split into; Word is one word of a body segment;
Breaks is what an optimizer hands to the renderer.

RULES:
- Word.text is never modified by the optimizers; only the guess and
  overlong-word steps build new words.
- Breaks.next_break[i] == len(words) means word i starts the last line.
- Segment ranges are half-open: [start, end).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Union


@dataclass
class LineProps:
    """Properties of one line of a paragraph.

    Attributes:
        prefix_len: Prefix length of a bodiless line, or the fallback prefix
                    length of the body segment containing the line.
        suffix_len: Same, for the suffix.
        bodiless: The line holds nothing but one repeated character
                  between its affixes.
        invisible: The line was inserted by quote reconciliation and must
                   not be printed.
        first: The line opens a new body segment.
        superfluous: The line is a vacant line that "expel" may drop.
        repeat_char: The repeated character of a bodiless line.
    """

    prefix_len: int = 0
    suffix_len: int = 0
    bodiless: bool = False
    invisible: bool = False
    first: bool = False
    superfluous: bool = False
    repeat_char: str = ""

    @property
    def vacant(self) -> bool:
        return self.bodiless and self.repeat_char == " "


@dataclass(frozen=True)
class BodilessSegment:
    """A single bodiless line, reproduced rather than wrapped."""

    index: int


@dataclass(frozen=True)
class BodySegment:
    """A run of lines wrapped together as one block."""

    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start


Segment = Union[BodilessSegment, BodySegment]


@dataclass
class Word:
    """One word of a body segment.

    Attributes:
        text: The characters of the word.
        line: Index (within the segment) of the line the word came from.
        start: Offset of the word within that line.
        shifted: Print an extra space before this word unless it starts a line.
        curious: The word looks like it ends a sentence or abbreviation.
        capital: The word counts as capitalized.
    """

    text: str
    line: int = 0
    start: int = 0
    shifted: bool = False
    curious: bool = False
    capital: bool = False

    @property
    def length(self) -> int:
        return len(self.text)


@dataclass
class Breaks:
    """Line breaks chosen by an optimizer.

    Attributes:
        next_break: For each word, the index of the first word of the
                    following line when this word starts a line.
        score: The optimizer's objective value for each word.
    """

    next_break: List[int] = field(default_factory=list)
    score: List[int] = field(default_factory=list)

    def line_starts(self) -> List[int]:
        """Indices of the words that begin each output line, in order."""
        starts = []  # type: List[int]
        n = len(self.next_break)
        i = 0
        while i < n:
            starts.append(i)
            i = self.next_break[i]
        return starts
