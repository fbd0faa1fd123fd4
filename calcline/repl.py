import argparse
import logging
import sys
from typing import Iterable, Iterator, TextIO

from calcline.errors import CalcError
from calcline.evaluator import evaluate

logger = logging.getLogger(__name__)


def read_lines(stdin: TextIO, prompt: str, stdout: TextIO) -> Iterator[str]:
    while True:
        if prompt:
            stdout.write(prompt)
            stdout.flush()
        line = stdin.readline()
        if not line:
            return
        yield line.rstrip("\r\n")


def run_session(lines: Iterable[str], stdout: TextIO) -> int:
    """Evaluates lines until a blank one (or the end of input); returns how many were evaluated"""
    evaluated = 0
    for code in lines:
        if not code.strip():
            break

        try:
            result: object = evaluate(code)
        except CalcError as e:
            logger.debug("line %r failed: %s", code, e.__class__.__name__)
            result = e

        print(result, file=stdout)
        evaluated += 1
    return evaluated


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="calcline", description="evaluate one arithmetic expression per line")
    parser.add_argument("-p", "--prompt", default="", help="text printed before each line is read")
    parser.add_argument("-v", "--verbose", action="store_true", help="log tokens and lookahead shifts to stderr")
    args = parser.parse_args(argv)

    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    evaluated = run_session(read_lines(sys.stdin, args.prompt, sys.stdout), sys.stdout)
    logger.debug("session ended after %d line(s)", evaluated)
    return 0
