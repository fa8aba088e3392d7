"""Exception types raised while reflowing text.

WHY: A failure while formatting one paragraph must abort that paragraph
and reach the caller with enough detail to print a useful message. The
caller (CLI, library user) decides whether to stop or carry on.

HOW: Every error derives from ReflowError, which is a ValueError so that
callers already catching bad-input errors keep working. Each subclass
builds its own message from the values that describe the problem.

RULES:
- Messages are single lines without a trailing newline.
- Word previews are truncated to WORD_PREVIEW_LIMIT characters.
- MemoryError is never wrapped; it propagates as-is.
"""

from __future__ import annotations

# Longest word preview carried by a WordTooLong message.
WORD_PREVIEW_LIMIT = 146

IMPOSSIBILITY_TEMPLATE = "Impossibility #{} has occurred.  Please report it."


class ReflowError(ValueError):
    """Base class for every error raised by the reflow package."""


class WordTooLong(ReflowError):
    """A word does not fit in the available width and report mode is on."""

    def __init__(self, word: str) -> None:
        self.word = word
        super().__init__("Word too long: {}".format(word[:WORD_PREVIEW_LIMIT]))


class ImpossibleWidth(ReflowError):
    """The width cannot hold the affixes, or a break search came up empty.

    Numbered diagnostics (``code``) point at a precondition that valid
    options should never violate. A plain message is used for the
    user-facing width checks.
    """

    def __init__(self, code: "int | str") -> None:
        if isinstance(code, int):
            self.code = code  # type: int | None
            message = IMPOSSIBILITY_TEMPLATE.format(code)
        else:
            self.code = None
            message = code
        super().__init__(message)


class CannotJustify(ReflowError):
    """Justification was requested but no line breaking satisfies it."""

    def __init__(self) -> None:
        super().__init__("Cannot justify.")


class LineTooShort(ReflowError):
    """An input line is shorter than the prefix plus suffix it must carry."""

    def __init__(self, line_number: int, prefix: int, suffix: int) -> None:
        self.line_number = line_number
        super().__init__(
            "Line {} shorter than <prefix> + <suffix> = {} + {} = {}".format(
                line_number, prefix, suffix, prefix + suffix
            )
        )


class BadArgument(ReflowError):
    """An option argument could not be parsed."""

    def __init__(self, arg: str) -> None:
        self.arg = arg
        super().__init__("Bad argument: {}".format(arg[:147]))


class CharsetSyntaxError(ReflowError):
    """A character set description uses an unknown escape."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__("Bad charset syntax: {}".format(text))
