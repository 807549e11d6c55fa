import pyarrow as pa

from sqlfront.utils.tabulate import Column, format_value, tabulate


def test_tabulate():
    table = pa.RecordBatch.from_pydict(
        {"statement": ["Create", "Declare"], "name": ["EMPLOYEE", "X"]}
    )

    assert tabulate(table).splitlines() == [
        "statement | name",
        "--------- | --------",
        "Create    | EMPLOYEE",
        "Declare   | X",
    ]


def test_tabulate_missing_values():
    table = pa.RecordBatch.from_pydict(
        {"schema": [None, "HR"], "name": ["T", None]},
        schema=pa.schema([("schema", pa.string()), ("name", pa.string())]),
    )

    assert tabulate(table).splitlines() == [
        "schema | name",
        "------ | ----",
        "       | T",
        "HR     |",
    ]


def test_tabulate_max_rows():
    table = pa.RecordBatch.from_pydict({"n": list(range(5))})

    lines = tabulate(table, max_rows=2).splitlines()

    assert lines == ["n", "-", "0", "1", "... and 3 more rows"]


def test_format_value():
    assert format_value(None) == ""
    assert format_value(True) == "true"
    assert format_value(12) == "12"
    assert format_value("x" * 40) == "x" * 27 + "..."


def test_tabulate_numbers_right_aligned():
    table = pa.RecordBatch.from_pydict({"name": ["A", "B"], "start": [0, 120]})

    assert tabulate(table).splitlines() == [
        "name | start",
        "---- | -----",
        "A    |     0",
        "B    |   120",
    ]


def test_column_from_array():
    table = pa.RecordBatch.from_pydict({"end": [7, None]})

    column = Column.from_array(table.schema.field(0), table.column(0))

    assert column.cells == ["7", ""]
    assert column.align_right
    assert column.width == 3
    assert column.justify("7") == "  7"
