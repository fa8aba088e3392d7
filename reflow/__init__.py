"""Paragraph reformatter: rewrap text while keeping its structure.

WHY: Plain text (mail, comments, README files) is full of paragraphs
that carry prefixes ("> ", "# "), suffixes, quote levels and ruler
lines. Rewrapping such text by hand is tedious; naive wrapping tools
destroy the decoration and produce ragged, unbalanced lines.

HOW: reflow_text(text, **options) is the public entry point. It splits
the input into paragraphs, infers each paragraph's structure, chooses
optimal line breaks by dynamic programming and renders the result. The
lower-level stages are importable from their modules for callers that
need them.

RULES:
- reflow_text() is the public API for producing reformatted text.
- Options come from an Options object and/or keyword overrides.
- Errors are ReflowError subclasses (ValueError).
- No global state: every call works on its own Options.
- Python 3.9 compatible (no match/case, no X | Y unions at runtime).
"""

from .config import Options, load_options, options_from_mapping
from .core import format_paragraph, reflow_lines, reflow_text, reformat
from .errors import (
    BadArgument,
    CannotJustify,
    CharsetSyntaxError,
    ImpossibleWidth,
    LineTooShort,
    ReflowError,
    WordTooLong,
)

__version__ = "0.1.0"

__all__ = [
    "reflow_text",
    "reflow_lines",
    "format_paragraph",
    "reformat",
    "Options",
    "load_options",
    "options_from_mapping",
    "ReflowError",
    "WordTooLong",
    "ImpossibleWidth",
    "CannotJustify",
    "LineTooShort",
    "BadArgument",
    "CharsetSyntaxError",
]
