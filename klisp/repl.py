"""Interactive loop and script runner for klisp.

Usage: klisp [--no-prelude | --prelude PATH] [--log-level LEVEL] [FILE ...]

Without files, reads one line at a time, evaluates every form on it against
the persistent global environment and prints each result. An unbound symbol
ends the session with exit status 1; other errors abort only the current
line. With files, evaluates each file in turn and stops at the first error.
"""

from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence, TextIO

from klisp import __version__
from klisp.config import (
    color_enabled,
    get_log_level,
    get_pprint_options_json,
    get_prompt,
    get_recursion_limit,
)
from klisp.debug_utils.pprint import (
    COLOR_OPTIONS,
    DEFAULT_OPTIONS,
    load_options_from_json,
    pprint_expr,
)
from klisp.errors import KlispError, KlispUnboundSymbol
from klisp.evaluation.evaluator import evaluate
from klisp.interpreter import Interpreter
from klisp.reader.parser import read_all

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1


def _report(ex: BaseException, stderr: TextIO) -> None:
    logger.debug("Evaluation failed", exc_info=ex)
    print(f"error: {ex}", file=stderr)


def repl(
    itp: Interpreter,
    prompt: str,
    stdin: TextIO,
    stdout: TextIO,
    stderr: TextIO,
    options: dict = DEFAULT_OPTIONS,
) -> int:
    while True:
        stdout.write(prompt)
        stdout.flush()
        line = stdin.readline()
        if not line:
            stdout.write("\n")
            return EXIT_OK
        try:
            for expr in read_all(line):
                result = evaluate(expr, itp.env)
                print(pprint_expr(result, options=options), file=stdout)
        except KlispUnboundSymbol as ex:
            _report(ex, stderr)
            return EXIT_ERROR
        except (KlispError, RecursionError) as ex:
            _report(ex, stderr)


def run_files(itp: Interpreter, paths: Sequence[Path], stderr: TextIO) -> int:
    for path in paths:
        try:
            itp.load(path)
        except (KlispError, RecursionError, OSError, UnicodeDecodeError) as ex:
            _report(ex, stderr)
            return EXIT_ERROR
    return EXIT_OK


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="klisp", description="klisp interpreter")
    parser.add_argument("files", nargs="*", type=Path, help="source files to run")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--no-prelude", action="store_true", help="skip the bootstrap library")
    group.add_argument("--prelude", type=Path, help="bootstrap library to load instead of the default")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="logging level (default: KLISP_LOG_LEVEL or WARNING)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def main(
    argv: Sequence[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    args = _parse_args(argv)

    level = args.log_level or get_log_level()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    sys.setrecursionlimit(max(sys.getrecursionlimit(), get_recursion_limit()))

    prelude = None if args.no_prelude else (args.prelude or 'auto')
    try:
        itp = Interpreter(prelude=prelude)
    except (KlispError, OSError, UnicodeDecodeError) as ex:
        print(f"klisp: cannot load prelude: {ex}", file=stderr)
        return EXIT_ERROR

    if args.files:
        return run_files(itp, args.files, stderr)

    # Explicit KLISP_PPRINT_OPTIONS win over TTY colour detection
    user_options = get_pprint_options_json()
    if user_options:
        options = load_options_from_json(user_options)
    elif color_enabled() and stdout.isatty():
        options = {**DEFAULT_OPTIONS, **COLOR_OPTIONS}
    else:
        options = DEFAULT_OPTIONS
    return repl(itp, get_prompt(), stdin, stdout, stderr, options)
