"""Command-line interface for the paragraph reformatter.

WHY: The reformatter is mostly used as a filter: an editor pipes a
selection through it, or a shell pipeline cleans up a file. The CLI
keeps the compact argument syntax so that settings can also live in
PARINIT.

HOW: Builds Options from the environment and argv via
config.load_options(), reads stdin, and streams the output of
core.reflow_lines() to stdout. Errors stop the run and are reported
after whatever output was already produced.

RULES:
- Usage:
    python -m reflow [help] [version] [B<op><set>] [P<op><set>] ...
    echo "text" | reflow w40 j
- Exit codes: 0 = success, 1 = error.
- Error messages, usage and version go to stdout unless E (err) is
  set, then to stderr. An E given before a bad argument still counts.
- Logging goes to stderr; level from REFLOW_LOG_LEVEL.
"""

import logging
import sys
from typing import List, Optional

from . import __version__
from .config import HELP, LOG_LEVEL, VERSION, Options, load_options
from .core import reflow_lines, split_input
from .errors import ReflowError

logger = logging.getLogger(__name__)

HELP_TEXT = """
Usage:

reflow [help] [version] [B<op><set>] [P<op><set>] [Q<op><set>] [T<op><set>]
       [h[<hang>]] [p[<prefix>]] [r[<repeat>]] [s[<suffix>]] [w[<width>]]
       [c[<cap>]] [d[<div>]] [E[<Err>]] [e[<expel>]] [f[<fit>]] [g[<guess>]]
       [i[<invis>]] [j[<just>]] [l[<last>]] [q[<quote>]] [R[<Report>]]
       [t[<touch>]]

help       print usage message         ---------- Boolean parameters: ---------
version    print version number          Option:   If 1:
B<op><set> as <op> is =/+/-,             c<cap>    count all words as capitalized
           replace/augment/diminish      d<div>    use indentation as a delimiter
           body chars by <set>           E<Err>    send messages to stderr
P<op><set> ditto for protective chars    e<expel>  discard superfluous lines
Q<op><set> ditto for quote chars         f<fit>    narrow paragraph for best fit
T<op><set> ditto for terminal chars      g<guess>  preserve wide sentence breaks
-------- Integer parameters: --------    i<invis>  hide lines inserted by <quote>
h<hang>    skip IP's 1st <hang> lines    j<just>   justify paragraphs
           in scan for common affixes    l<last>   treat last lines like others
p<prefix>  prefix length                 q<quote>  supply vacant lines between
r<repeat>  if not 0, force bodiless                different quote nesting levels
           lines to length <width>       R<Report> print error for too-long words
s<suffix>  suffix length                 t<touch>  move suffixes left
w<width>   max output line length

Environment: PARINIT (default arguments), PARBODY, PARPROTECT, PARQUOTE.
"""


def _fail(message: str, to_stderr: bool, show_help: bool = False) -> None:
    """Print an error message (and optionally the usage) and exit with 1."""
    stream = sys.stderr if to_stderr else sys.stdout
    print("reflow error:\n{}".format(message), file=stream)
    if show_help:
        print(HELP_TEXT, file=stream)
    sys.exit(1)


def main(argv: "Optional[List[str]]" = None) -> None:
    """Run the reformatter as a stdin-to-stdout filter.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns normally on success. Help, version and errors end the
    process through sys.exit() with status 0 or 1.
    """
    if argv is None:
        argv = sys.argv[1:]

    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    options = Options()
    try:
        options, action = load_options(argv, options=options)
    except ReflowError as e:
        _fail(str(e), to_stderr=options.err, show_help=True)
        return

    # help and version share the error stream
    stream = sys.stderr if options.err else sys.stdout
    if action == HELP:
        print(HELP_TEXT, file=stream)
        sys.exit(0)
    if action == VERSION:
        print("reflow {}".format(__version__), file=stream)
        sys.exit(0)

    raw = sys.stdin.read()
    logger.debug("Read %d characters from stdin", len(raw))

    try:
        for line in reflow_lines(split_input(raw), options):
            sys.stdout.write(line + "\n")
    except ReflowError as e:
        sys.stdout.flush()
        _fail(str(e), to_stderr=options.err)


if __name__ == "__main__":
    main()
