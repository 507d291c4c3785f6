"""Line-oriented REPL for Mankai.

Each input line is lexed, parsed and evaluated in one persistent session.
Results are printed to stdout, errors to stderr; an error never ends the
session.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from mankai.config import get_log_level
from mankai.errors import MankaiError, ScanError, ParseError, MankaiRuntimeError, render_error
from mankai.interpreter import Interpreter

logger = logging.getLogger(__name__)

# Errors reported per line; anything else (e.g. EnvironmentInvariantError) is fatal
RECOVERABLE = (ScanError, ParseError, MankaiRuntimeError)


def run_line(interp: Interpreter, line: str) -> str | None:
    """Evaluate one line and return the text to print, or None for a blank line."""
    value = interp.eval(line)
    if value is None:
        return None
    return value.to_string()


def repl(interp: Interpreter, stdin: TextIO, stdout: TextIO, stderr: TextIO) -> int:
    errors = 0
    for line in stdin:
        try:
            text = run_line(interp, line)
        except RECOVERABLE as err:
            errors += 1
            logger.debug("error on line %r", line, exc_info=True)
            print(render_error(err), file=stderr, flush=True)
            continue
        if text is not None:
            print(text, file=stdout, flush=True)
    return errors


def main(stdin: TextIO | None = None, stdout: TextIO | None = None, stderr: TextIO | None = None) -> int:
    logging.basicConfig(level=get_log_level(), format="%(levelname)s %(name)s: %(message)s")
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    try:
        interp = Interpreter()
    except MankaiError as err:
        logger.error("prelude failed to load: %s", err.message)
        print(f"failed to load prelude: {render_error(err)}", file=stderr)
        return 1
    repl(interp, stdin, stdout, stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
