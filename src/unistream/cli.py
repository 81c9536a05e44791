"""Command-line interface for unistream."""

from __future__ import annotations

import argparse
import codecs
import logging
import shutil
import sys
from pathlib import Path
from typing import BinaryIO

import unistream
from unistream._utils import LOOKAHEAD_SIZE
from unistream.reader import read_full


def _describe(label: str, data: bytes, content_type: str) -> str:
    result = unistream.determine_encoding(data, content_type)
    certainty = "certain" if result.certain else "guessed"
    return f"{label}: {result.name} ({certainty})"


def _convert(path: Path, args: argparse.Namespace, out: BinaryIO) -> None:
    with unistream.open_reader(
        path, args.content_type, errors=args.errors
    ) as reader:
        if args.output_dir is None:
            shutil.copyfileobj(reader, out)
            return
        target = args.output_dir / f"{path.stem}_UTF8.txt"
        with target.open("wb") as f:
            shutil.copyfileobj(reader, f)


def main(argv: list[str] | None = None) -> None:
    """Run the ``unistream`` command-line tool.

    :param argv: Command-line arguments.  Defaults to ``sys.argv[1:]``.
    """
    parser = argparse.ArgumentParser(
        description="Convert text files of any encoding to UTF-8 without BOM."
    )
    parser.add_argument("files", nargs="*", type=Path, help="Files to convert")
    parser.add_argument(
        "--detect",
        action="store_true",
        help="Only print the resolved encoding of each file",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        default=None,
        help="Write <name>_UTF8.txt files here instead of to stdout",
    )
    parser.add_argument(
        "--content-type", default="", help="Declared content-type of the input"
    )
    parser.add_argument(
        "--errors",
        default="strict",
        help="Codec error handler for undecodable bytes (default: strict)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log detection details"
    )
    parser.add_argument(
        "--version", action="version", version=f"unistream {unistream.__version__}"
    )

    args = parser.parse_args(argv)
    try:
        codecs.lookup_error(args.errors)
    except LookupError:
        parser.error(f"unknown error handler: {args.errors}")

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    if args.output_dir is not None:
        args.output_dir.mkdir(parents=True, exist_ok=True)

    stdout = sys.stdout.buffer
    if not args.files:
        if args.detect:
            data = read_full(sys.stdin.buffer, LOOKAHEAD_SIZE)
            print(_describe("stdin", data, args.content_type))
        else:
            reader = unistream.new_reader(
                sys.stdin.buffer, args.content_type, errors=args.errors
            )
            shutil.copyfileobj(reader, stdout)
        return

    failed = False
    for path in args.files:
        try:
            if args.detect:
                with path.open("rb") as f:
                    data = read_full(f, LOOKAHEAD_SIZE)
                print(_describe(str(path), data, args.content_type))
            else:
                _convert(path, args, stdout)
        except (OSError, UnicodeDecodeError) as e:
            print(f"unistream: {path}: {e}", file=sys.stderr)
            failed = True
    stdout.flush()
    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
