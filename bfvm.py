#!/usr/bin/env python3
"""
bfvm — run a tape-language program on the brainvm StandardVm

Usage:
    python bfvm.py [SOURCE]

With SOURCE, the program is read from that file. Without it, the program
is read from standard input (until EOF). The program itself reads ``,``
input from standard input and writes ``.`` output to standard output.

Diagnostics go to standard error. Exit status is 0 on success and 1 when
the source cannot be read or the program fails (unmatched loop, I/O error).

Examples:
    python bfvm.py hello.bf
    echo '++++++++[>++++++++<-]>+.' | python bfvm.py
"""

import argparse
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from brainvm import __version__
from brainvm.errors import BrainVmError
from brainvm.lexer import parse
from brainvm.translator import translate
from brainvm.vm import StandardVm

log = logging.getLogger("bfvm")


def setup_logging(console_level: int = logging.WARNING) -> logging.Logger:
    """Route brainvm and bfvm log records to a rich handler on stderr."""
    handler = RichHandler(
        level=console_level,
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setLevel(console_level)
    for name in ("bfvm", "brainvm"):
        logger = logging.getLogger(name)
        if not logger.handlers:
            logger.addHandler(handler)
        logger.setLevel(console_level)
    return log


def execute(source_stream) -> None:
    """Lex ``source_stream``, translate it and run it on a default StandardVm."""
    tokens = parse(source_stream)
    program = translate(tokens)
    vm = StandardVm()
    vm.load(program)
    vm.run()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="bfvm",
        description=f"brainvm {__version__} — run a program on the standard VM",
    )
    parser.add_argument("source", nargs="?",
                        help="Program source file (default: read from stdin)")
    args = parser.parse_args(argv)

    setup_logging()

    try:
        if args.source is None:
            execute(sys.stdin.buffer)
        else:
            with open(args.source, "rb") as f:
                execute(f)
    except OSError as e:
        log.error("Cannot read source %s: %s", args.source, e)
        return 1
    except BrainVmError as e:
        log.error("Program execution failed: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
