"""Command line interface for formatting SQL sources.

This module provides a command line interface for the
:class:`sqlfront.sql.Formatter`, all the :class:`sqlfront.sql.FormatOptions`
can be provided as command line flags.

The formatted text is printed to the console, the source file
is never modified.
"""

import argparse
import logging
import sys
from typing import Optional

from sqlfront.sql import FormatOptions, Formatter, SQLStructureError
from sqlfront.sql.formatter import CASE_OPTIONS

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Format SQL sources.")
    parser.add_argument(
        "--indent",
        type=int,
        default=4,
        help="Number of spaces for each indentation level.",
    )
    parser.add_argument(
        "--keyword-case",
        choices=CASE_OPTIONS,
        default="preserve",
        help="Case of the keywords.",
    )
    parser.add_argument(
        "--identifier-case",
        choices=CASE_OPTIONS,
        default="preserve",
        help="Case of the identifiers.",
    )
    parser.add_argument(
        "--new-line-lists",
        action="store_true",
        help="Put each element of comma separated lists on its own line.",
    )
    parser.add_argument(
        "--space-between-statements",
        action="store_true",
        help="Add an empty line between statements of different types.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging."
    )
    parser.add_argument(
        "file",
        nargs="?",
        help="The SQL file to format, standard input is read when omitted.",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Parse the command line arguments and format the SQL source."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.file:
        with open(args.file, encoding="utf-8", newline="") as f:
            text = f.read()
    else:
        text = sys.stdin.read()

    try:
        options = FormatOptions(
            indent_width=args.indent,
            keyword_case=args.keyword_case,
            identifier_case=args.identifier_case,
            new_line_lists=args.new_line_lists,
            space_between_statements=args.space_between_statements,
        )
    except ValueError as e:
        print(f"Invalid options, {e}")
        sys.exit(2)

    logger.debug("Formatting %s with %r", args.file or "<stdin>", options)
    try:
        result = Formatter(options).format(text)
    except SQLStructureError as e:
        print(f"Invalid SQL, {e}")
        sys.exit(1)

    print(result)


if __name__ == "__main__":
    main()
