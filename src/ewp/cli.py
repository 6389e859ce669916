"""EWP command line harness.

Reads a frame from stdin and writes its canonical re-encoding to stdout::

    printf 'ewp 1.0 GET none none 5 3\\nhelloabc' | ewp request 33

Any :class:`~ewp.core.errors.EWPError` is reported on stderr as
``CODE: message`` and the process exits with status 1.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import BinaryIO, TextIO

from ewp.core.errors import EWPError
from ewp.wire.codec import reencode

logger = logging.getLogger(__name__)

_HANDLER_NAME = "ewp-cli"


def _configure_logging(stream: TextIO, *, verbose: bool) -> None:
    """Route ``ewp`` log records to *stream*, replacing any earlier CLI handler."""
    package_logger = logging.getLogger("ewp")
    for handler in list(package_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            package_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ewp",
        description="Decode an EWP frame from stdin and print its canonical encoding",
    )
    parser.add_argument("kind", help="Message kind: request or response")
    parser.add_argument("length", type=int, help="Number of bytes to read from stdin")
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log decoding details to stderr",
    )
    return parser


def main(
    argv: list[str] | None = None,
    *,
    stdin: BinaryIO | None = None,
    stdout: BinaryIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    args = _build_parser().parse_args(argv)
    stdin = stdin or sys.stdin.buffer
    stdout = stdout or sys.stdout.buffer
    stderr = stderr or sys.stderr

    _configure_logging(stderr, verbose=args.verbose)

    raw = stdin.read(max(args.length, 0))
    if len(raw) < args.length:
        logger.warning("Expected %d bytes on stdin, read %d", args.length, len(raw))

    try:
        output = reencode(raw, args.kind)
    except EWPError as exc:
        print(f"{exc.code}: {exc.message}", file=stderr)
        return 1

    stdout.write(output)
    stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
