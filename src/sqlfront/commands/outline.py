"""Command line interface listing the objects defined by a SQL source.

The object references of every statement in the source are collected
by :func:`sqlfront.sql.references_table` and printed to the console
in a tabular format using the :mod:`sqlfront.utils.tabulate` module.
"""

import argparse
from typing import Optional

from sqlfront.sql import Document, references_table
from sqlfront.utils import tabulate


def main(argv: Optional[list[str]] = None) -> None:
    """Parse the command line arguments and print the references of the file."""
    parser = argparse.ArgumentParser(
        description="List the objects created or declared by a SQL source."
    )
    parser.add_argument("file", type=str, help="The SQL file to inspect.")
    parser.add_argument(
        "--max-rows",
        type=int,
        default=50,
        help="Maximum number of references to print.",
    )
    args = parser.parse_args(argv)

    with open(args.file, encoding="utf-8") as f:
        document = Document(f.read())

    table = references_table(document)
    print(tabulate.tabulate(table, max_rows=args.max_rows))


if __name__ == "__main__":
    main()
