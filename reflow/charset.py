"""Character sets used to classify characters in the input.

WHY: Body, protective, quote and terminal characters are all user
configurable. The segmenter, quote reconciler and word guesser only ever
ask "is this character in the set?", but the configuration layer needs
to build sets from a compact string syntax and add or remove members.

HOW: A Charset keeps explicit member characters, named character classes
(upper, lower, digit) and explicitly excluded characters. Membership
checks exclusions first, then explicit members, then the classes.
parse_charset() turns the escape syntax into a Charset.

RULES:
- Every character stands for itself except "_", which starts an escape:
  __ _s _b _q _Q _A _a _0 _xHH.
- Unknown escapes raise CharsetSyntaxError.
- Charsets are immutable; union() and difference() return new sets.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet

from .errors import CharsetSyntaxError

UPPER = "upper"
LOWER = "lower"
DIGIT = "digit"

_SINGLE_ESCAPES = {
    "_": "_",
    "s": " ",
    "b": "\\",
    "q": "'",
    "Q": '"',
}

_CLASS_ESCAPES = {
    "A": UPPER,
    "a": LOWER,
    "0": DIGIT,
}

_HEX_DIGITS = "0123456789abcdefABCDEF"


def _in_class(ch: str, name: str) -> bool:
    if name == UPPER:
        return ch.isupper()
    if name == LOWER:
        return ch.islower()
    return ch in "0123456789"


@dataclass(frozen=True)
class Charset:
    """An immutable set of characters.

    Attributes:
        chars: Characters that are members.
        classes: Names of whole character classes that are members.
        excluded: Characters that are never members, whatever the classes say.
    """

    chars: FrozenSet[str] = field(default_factory=frozenset)
    classes: FrozenSet[str] = field(default_factory=frozenset)
    excluded: FrozenSet[str] = field(default_factory=frozenset)

    def __contains__(self, ch: object) -> bool:
        if not isinstance(ch, str) or len(ch) != 1:
            return False
        if ch in self.excluded:
            return False
        if ch in self.chars:
            return True
        return any(_in_class(ch, name) for name in self.classes)

    def union(self, other: "Charset") -> "Charset":
        """Return the set of characters in either set."""
        candidates = self.excluded | other.excluded
        excluded = frozenset(ch for ch in candidates if ch not in self and ch not in other)
        return Charset(
            chars=self.chars | other.chars,
            classes=self.classes | other.classes,
            excluded=excluded,
        )

    def difference(self, other: "Charset") -> "Charset":
        """Return the characters in this set that are not in other."""
        classes = self.classes - other.classes
        candidates = self.chars | other.excluded
        chars = frozenset(ch for ch in candidates if ch in self and ch not in other)
        excluded = (self.excluded | other.chars) - chars
        return Charset(chars=chars, classes=classes, excluded=excluded)

    __or__ = union
    __sub__ = difference


def parse_charset(text: str) -> Charset:
    """Build a Charset from its string description.

    Args:
        text: Charset description, e.g. ``"> "`` or ``"_A_a_0"``.

    Returns:
        The described Charset.

    Raises:
        CharsetSyntaxError: On an unknown or truncated escape.
    """
    chars = set()
    classes = set()
    i = 0
    while i < len(text):
        ch = text[i]
        if ch != "_":
            chars.add(ch)
            i += 1
            continue
        if i + 1 >= len(text):
            raise CharsetSyntaxError(text)
        code = text[i + 1]
        if code in _SINGLE_ESCAPES:
            chars.add(_SINGLE_ESCAPES[code])
            i += 2
        elif code in _CLASS_ESCAPES:
            classes.add(_CLASS_ESCAPES[code])
            i += 2
        elif code == "x":
            digits = text[i + 2:i + 4]
            if len(digits) != 2 or any(d not in _HEX_DIGITS for d in digits):
                raise CharsetSyntaxError(text)
            chars.add(chr(int(digits, 16)))
            i += 4
        else:
            raise CharsetSyntaxError(text)
    return Charset(chars=frozenset(chars), classes=frozenset(classes))
