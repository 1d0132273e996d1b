"""
loxc command line driver

    loxc                 interactive prompt, one expression per line
    loxc script.lox      render the expression in script.lox
    loxc --tokens ...    print the token stream instead of the graph

The rendered graph goes to stdout; diagnostics go to stderr.
"""

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from . import __version__
from .errors import LoxError, LoxIOError
from .lexer import Scanner
from .logging_config import setup_logging
from .parser import parse_tokens
from .printer import DotPrinter

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 64

PROMPT = "loxc> "


def run(source: str, filename: str = "<stdin>", show_tokens: bool = False,
        out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> bool:
    """
    Scan, parse and render one source text.

    Returns True when no lexical or syntax error was reported.
    """
    out = out or sys.stdout
    err = err or sys.stderr
    try:
        tokens = Scanner(source, filename).scan_tokens()
    except LoxError as e:
        print(e, file=err)
        return False

    if show_tokens:
        for token in tokens:
            print(token, file=out)
        return True

    result = parse_tokens(tokens)
    for error in result.errors:
        print(error, file=err)

    out.write(DotPrinter().print(result.ast))
    return not result.has_errors()


def run_file(path: str, show_tokens: bool = False,
             out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> int:
    """Process a whole file; returns the process exit status."""
    err = err or sys.stderr
    logger.info("Reading %s", path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            source = f.read()
    except (OSError, UnicodeDecodeError) as exc:
        print(LoxIOError.from_os_error(exc, path), file=err)
        return EXIT_FAILURE

    if run(source, path, show_tokens, out, err):
        return EXIT_OK
    return EXIT_FAILURE


def run_prompt(show_tokens: bool = False, stdin: Optional[TextIO] = None,
               out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> int:
    """Read-render loop; errors are reported and the loop carries on."""
    stdin = stdin or sys.stdin
    out = out or sys.stdout
    try:
        while True:
            out.write(PROMPT)
            out.flush()

            line = stdin.readline()
            if not line:
                out.write("\n")
                break
            if not line.strip():
                continue

            run(line, "<stdin>", show_tokens, out, err)
    except KeyboardInterrupt:
        out.write("\n")

    return EXIT_OK


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="loxc",
        description="Scan and parse Lox expressions and print their syntax tree as a Graphviz graph",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    loxc                          # Interactive prompt
    loxc expr.lox > expr.dot      # Render a file
    loxc --tokens expr.lox        # Show the token stream
        """
    )

    parser.add_argument('script', nargs='*',
                        help='Source file to process (omit for a prompt)')
    parser.add_argument('--tokens', action='store_true',
                        help='Print tokens instead of the syntax tree')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging on stderr')
    parser.add_argument('--log-file',
                        help='Also write log records to this file')
    parser.add_argument('--version', action='version',
                        version=f'%(prog)s {__version__}')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``loxc`` console script."""
    arg_parser = build_arg_parser()
    args = arg_parser.parse_args(argv)

    if len(args.script) > 1:
        arg_parser.print_usage(sys.stderr)
        return EXIT_USAGE

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, args.log_file)

    if args.script:
        return run_file(args.script[0], args.tokens)
    return run_prompt(args.tokens)


if __name__ == "__main__":
    sys.exit(main())
