"""Format tabular data into a text table for print.

the `tabulate` function takes a `pyarrow.RecordBatch` and formats it into a text table.
Each column of the batch becomes a :class:`Column` of text cells, numeric columns
like the ``start`` and ``end`` offsets of object references are right aligned
so that they can be compared at a glance, while text columns are left aligned.
Missing values, like the schema of an unqualified name, are shown as empty cells.

The function is used to display the object references of a SQL source
in the ``sqlfront-outline`` command.

Example:

    >>> import pyarrow as pa
    >>> data = {
    ...     "statement": ["Create", "Declare"],
    ...     "create_type": ["TABLE", "VARIABLE"],
    ...     "name": ["EMPLOYEE", "X"],
    ... }
    >>> table = pa.RecordBatch.from_pydict(data)
    >>> print(tabulate(table))
    statement | create_type | name
    --------- | ----------- | --------
    Create    | TABLE       | EMPLOYEE
    Declare   | VARIABLE    | X
"""

from dataclasses import dataclass
from typing import Any

import pyarrow as pa

MAX_CELL_WIDTH = 30


@dataclass
class Column:
    """The text cells of a column, with the way they are aligned."""

    name: str
    cells: list[str]
    align_right: bool = False

    @classmethod
    def from_array(cls, field: pa.Field, array: pa.Array) -> "Column":
        numeric = pa.types.is_integer(field.type) or pa.types.is_floating(field.type)
        return cls(
            name=field.name,
            cells=[format_value(v) for v in array.to_pylist()],
            align_right=numeric,
        )

    @property
    def width(self) -> int:
        return max([len(self.name)] + [len(cell) for cell in self.cells])

    def justify(self, text: str, fillvalue: str = " ") -> str:
        if self.align_right:
            return text.rjust(self.width, fillvalue)
        return text.ljust(self.width, fillvalue)


def tabulate(recordbatch: pa.RecordBatch, max_rows: int = 20) -> str:
    """Format a RecordBatch into a text table.

    Only the first ``max_rows`` rows are shown, followed by
    a note telling how many rows were left out.
    Will produce a string like::

        statement | create_type | schema | name     | start | end
        --------- | ----------- | ------ | -------- | ----- | ---
        Create    | TABLE       | SAMPLE | EMPLOYEE |     0 |  31
        Create    | PROCEDURE   |        | RAISE    |    33 |  63
    """
    shown = recordbatch.slice(length=max_rows)
    columns = [
        Column.from_array(field, shown.column(idx))
        for idx, field in enumerate(shown.schema)
    ]

    lines = [
        join_cells(column.justify(column.name) for column in columns),
        join_cells(column.justify("", "-") for column in columns),
    ]
    for rowidx in range(shown.num_rows):
        lines.append(
            join_cells(column.justify(column.cells[rowidx]) for column in columns)
        )

    if recordbatch.num_rows > max_rows:
        lines.append(f"... and {recordbatch.num_rows - max_rows} more rows")
    return "\n".join(lines)


def join_cells(cells) -> str:
    return " | ".join(cells).rstrip(" ")


def format_value(v: Any) -> str:
    """Format a value to be printed in the table.

    Missing values are shown as empty cells,
    long strings are truncated.
    """
    if v is None:
        return ""
    elif isinstance(v, bool):
        return "true" if v else "false"

    v = str(v)
    if len(v) > MAX_CELL_WIDTH:
        v = v[: MAX_CELL_WIDTH - 3] + "..."
    return v
