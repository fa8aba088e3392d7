"""Options, argument parsing and environment loading.

WHY: Every stage of the pipeline is steered by the same small record of
integers, flags and character sets. Users set them three ways: terse
command-line arguments ("w60 j1 q"), environment variables (PARINIT and
friends, optionally from a .env file), and, from Python, a plain dict.
All three must end up in the same validated Options object.

HOW: python-dotenv loads the .env file on import. Options is a
dataclass with the documented defaults. parse_argument() applies one
argument in the compact syntax; load_options() layers the environment
and the command line on top of the defaults. options_from_mapping()
validates a dict against OPTIONS_SCHEMA with jsonschema.

RULES:
- prefix/suffix of None mean "work it out from the text".
- touch of None means "fit or last".
- Integer arguments are at most 9999.
- Boolean arguments accept only 0 or 1; a bare letter means 1.
- Environment: PARBODY, PARPROTECT, PARQUOTE (charsets), PARINIT
  (arguments), REFLOW_LOG_LEVEL (CLI logging).
"""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import jsonschema
from dotenv import load_dotenv

from .charset import Charset, parse_charset
from .errors import BadArgument

# Load .env from the directory the tool is run from
load_dotenv()

DEFAULT_WIDTH = 72
DEFAULT_QUOTECHARS = "> "
DEFAULT_TERMINALCHARS = ".?!:"
MAX_NUMBER = 9999

LOG_LEVEL = os.getenv("REFLOW_LOG_LEVEL", "WARNING").upper()


@dataclass
class Options:
    """Settings for one reflow run.

    Attributes:
        hang: Lines at the top of a segment skipped when inferring affixes,
              and the minimum number of output lines per segment.
        prefix: Prefix length, or None to infer it.
        repeat: Minimum run for a repeated-character line to be bodiless;
                0 disables such lines.
        suffix: Suffix length, or None to infer it.
        width: Maximum output line length.
        cap: Count every word as capitalized.
        div: Use indentation as a paragraph delimiter.
        err: Send error messages to stderr (CLI).
        expel: Discard superfluous lines.
        fit: Narrow the paragraph for the best fit.
        guess: Preserve wide sentence breaks.
        invis: Hide the lines inserted by quote reconciliation.
        just: Justify paragraphs.
        last: Treat the last line like the others.
        quote: Insert vacant lines between different quote levels.
        report: Fail on words longer than the width instead of splitting.
        touch: Move suffixes left; None means fit or last.
        bodychars: Characters that never belong to a prefix or suffix.
        protectchars: Lines starting with one of these are copied as-is.
        quotechars: Characters that make up quote markers.
        terminalchars: Characters that end a sentence.
    """

    hang: int = 0
    prefix: Optional[int] = None
    repeat: int = 0
    suffix: Optional[int] = None
    width: int = DEFAULT_WIDTH
    cap: bool = False
    div: bool = False
    err: bool = False
    expel: bool = False
    fit: bool = False
    guess: bool = False
    invis: bool = False
    just: bool = False
    last: bool = False
    quote: bool = False
    report: bool = False
    touch: Optional[bool] = None
    bodychars: Charset = field(default_factory=Charset)
    protectchars: Charset = field(default_factory=Charset)
    quotechars: Charset = field(default_factory=lambda: parse_charset(DEFAULT_QUOTECHARS))
    terminalchars: Charset = field(default_factory=lambda: parse_charset(DEFAULT_TERMINALCHARS))

    @property
    def effective_touch(self) -> bool:
        if self.touch is None:
            return self.fit or self.last
        return self.touch


# ---------------------------------------------------------------------------
# Compact argument syntax
# ---------------------------------------------------------------------------

_CHARSET_FIELDS = {
    "B": "bodychars",
    "P": "protectchars",
    "Q": "quotechars",
    "T": "terminalchars",
}

_BOOL_FIELDS = {
    "c": "cap",
    "d": "div",
    "E": "err",
    "e": "expel",
    "f": "fit",
    "g": "guess",
    "i": "invis",
    "j": "just",
    "l": "last",
    "q": "quote",
    "R": "report",
    "t": "touch",
}

HELP = "help"
VERSION = "version"


def _read_number(arg: str, pos: int, original: str) -> Tuple[Optional[int], int]:
    """Read the decimal number at arg[pos:], returning (value or None, end)."""
    end = pos
    while end < len(arg) and arg[end] in "0123456789":
        end += 1
    if end == pos:
        return None, end
    value = int(arg[pos:end])
    if value > MAX_NUMBER:
        raise BadArgument(original)
    return value, end


def parse_argument(arg: str, options: Options) -> Optional[str]:
    """Apply one argument in the compact syntax to options.

    WHY: The compact syntax lets several settings share one word
    ("w60j1"), which keeps PARINIT and shell aliases short.

    HOW: An optional leading "-" is ignored. "help" and "version" are
    returned to the caller. B, P, Q and T followed by =, + or - replace,
    extend or shrink a character set. Otherwise an optional leading
    number sets prefix (up to 8) or width, followed by letter/number
    pairs.

    Args:
        arg: The argument text.
        options: Options to update in place.

    Returns:
        HELP or VERSION when the argument asks for them, else None.

    Raises:
        BadArgument: If the argument cannot be parsed.
        CharsetSyntaxError: If a character set is malformed.
    """
    original = arg
    if arg.startswith("-"):
        arg = arg[1:]

    if arg == HELP:
        return HELP
    if arg == VERSION:
        return VERSION

    if arg[:1] in _CHARSET_FIELDS:
        name = _CHARSET_FIELDS[arg[0]]
        op = arg[1:2]
        if op not in ("=", "+", "-"):
            raise BadArgument(original)
        change = parse_charset(arg[2:])
        current = getattr(options, name)
        if op == "=":
            setattr(options, name, change)
        elif op == "+":
            setattr(options, name, current.union(change))
        else:
            setattr(options, name, current.difference(change))
        return None

    pos = 0
    number, pos = _read_number(arg, 0, original)
    if number is not None:
        if number <= 8:
            options.prefix = number
        else:
            options.width = number

    while pos < len(arg):
        letter = arg[pos]
        number, pos = _read_number(arg, pos + 1, original)
        if letter == "h":
            options.hang = 1 if number is None else number
        elif letter == "w":
            options.width = 79 if number is None else number
        elif letter == "p":
            options.prefix = number
        elif letter == "r":
            options.repeat = 3 if number is None else number
        elif letter == "s":
            options.suffix = number
        elif letter in _BOOL_FIELDS:
            if number is None:
                number = 1
            if number > 1:
                raise BadArgument(original)
            setattr(options, _BOOL_FIELDS[letter], bool(number))
        else:
            raise BadArgument(original)

    return None


def load_options(
    argv: Sequence[str],
    environ: Optional[Mapping[str, str]] = None,
    options: Optional[Options] = None,
) -> Tuple[Options, Optional[str]]:
    """Build Options from the environment and command-line arguments.

    Args:
        argv: Arguments, without the program name.
        environ: Environment to read; defaults to os.environ (which
                 python-dotenv has already populated from .env).
        options: Options to fill in place. When parsing fails, the
                 caller still sees every setting applied before the
                 bad argument (the err flag in particular).

    Returns:
        (options, action) where action is HELP, VERSION or None. Parsing
        stops at the first argument that asks for help or the version.

    Raises:
        BadArgument: On a malformed argument.
        CharsetSyntaxError: On a malformed character set.
    """
    if environ is None:
        environ = os.environ

    if options is None:
        options = Options()
    options.bodychars = parse_charset(environ.get("PARBODY", ""))
    options.protectchars = parse_charset(environ.get("PARPROTECT", ""))
    options.quotechars = parse_charset(environ.get("PARQUOTE", DEFAULT_QUOTECHARS))

    args = []  # type: List[str]
    parinit = environ.get("PARINIT")
    if parinit:
        args.extend(parinit.split())
    args.extend(argv)

    for arg in args:
        action = parse_argument(arg, options)
        if action is not None:
            return options, action

    return options, None


# ---------------------------------------------------------------------------
# Dict-based options (library use)
# ---------------------------------------------------------------------------

_INT_SCHEMA = {"type": "integer", "minimum": 0, "maximum": MAX_NUMBER}
_AFFIX_SCHEMA = {"type": ["integer", "null"], "maximum": MAX_NUMBER}
_BOOL_SCHEMA = {"type": "boolean"}
_CHARSET_SCHEMA = {"type": "string"}

OPTIONS_SCHEMA = {
    "type": "object",
    "properties": {
        "hang": _INT_SCHEMA,
        "prefix": _AFFIX_SCHEMA,
        "repeat": _INT_SCHEMA,
        "suffix": _AFFIX_SCHEMA,
        "width": {"type": "integer", "minimum": 1, "maximum": MAX_NUMBER},
        "cap": _BOOL_SCHEMA,
        "div": _BOOL_SCHEMA,
        "err": _BOOL_SCHEMA,
        "expel": _BOOL_SCHEMA,
        "fit": _BOOL_SCHEMA,
        "guess": _BOOL_SCHEMA,
        "invis": _BOOL_SCHEMA,
        "just": _BOOL_SCHEMA,
        "last": _BOOL_SCHEMA,
        "quote": _BOOL_SCHEMA,
        "report": _BOOL_SCHEMA,
        "touch": {"type": ["boolean", "null"]},
        "bodychars": _CHARSET_SCHEMA,
        "protectchars": _CHARSET_SCHEMA,
        "quotechars": _CHARSET_SCHEMA,
        "terminalchars": _CHARSET_SCHEMA,
    },
    "additionalProperties": False,
}

_CHARSET_NAMES = frozenset(_CHARSET_FIELDS.values())


def options_from_mapping(
    mapping: Mapping[str, Any],
    base: Optional[Options] = None,
) -> Options:
    """Build Options from a dict of option names.

    WHY: Library callers think in keyword arguments, not in "w60j1".

    HOW: The mapping is validated against OPTIONS_SCHEMA, charset
    strings are parsed, and the result replaces the matching fields of
    base (or of the defaults).

    Raises:
        BadArgument: If the mapping does not match the schema.
        CharsetSyntaxError: If a charset string is malformed.
    """
    try:
        jsonschema.validate(instance=dict(mapping), schema=OPTIONS_SCHEMA)
    except jsonschema.ValidationError as e:
        where = ".".join(str(p) for p in e.absolute_path) or "options"
        raise BadArgument("{}: {}".format(where, e.message)) from e

    values: Dict[str, Any] = {}
    for key, value in mapping.items():
        if key in _CHARSET_NAMES:
            value = parse_charset(value)
        values[key] = value
    return dataclasses.replace(base if base is not None else Options(), **values)
