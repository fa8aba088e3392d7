"""Package entry point for ``python -m reflow``.

WHY: Users run the reformatter as ``python -m reflow w60 < in.txt``
as well as through the installed ``reflow`` script.

HOW: Delegates to the CLI's main() function.
"""

from reflow.cli import main

if __name__ == "__main__":
    main()
