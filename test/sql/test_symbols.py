import pytest

from sqlfront.sql.document import Document
from sqlfront.sql.symbols import (
    REFERENCES_SCHEMA,
    Symbol,
    changed_object_key,
    changed_objects,
    get_symbols,
    normalize_name,
    references_table,
)

SOURCE = (
    "CREATE PROCEDURE P() BEGIN DECLARE X INT; SET X = 1; END;\n"
    "CREATE TABLE SAMPLE.T (A INT);\n"
    "SELECT * FROM SAMPLE.T;"
)


def test_get_symbols():
    doc = Document(SOURCE)

    symbols = get_symbols(doc)

    assert [(s.name, s.detail, s.kind) for s in symbols] == [
        ("P", "PROCEDURE", "file"),
        ("T", "TABLE", "file"),
    ]
    procedure = symbols[0]
    assert procedure.range == doc.statements[0].range
    assert procedure.children == [
        Symbol(
            name="X",
            detail="VARIABLE",
            kind="variable",
            range=doc.statements[1].range,
        )
    ]
    assert symbols[1].children == []


def test_get_symbols_anonymous_block():
    doc = Document("BEGIN DECLARE X INT; DECLARE C CURSOR FOR SELECT 1; END")

    symbols = get_symbols(doc)

    assert [(s.name, s.detail, s.kind) for s in symbols] == [
        ("X", "VARIABLE", "variable"),
        ("C", "CURSOR", "variable"),
    ]


def test_get_symbols_create_schema():
    symbols = get_symbols(Document("CREATE SCHEMA HR"))

    assert [(s.name, s.detail) for s in symbols] == [("HR", "SCHEMA")]


def test_get_symbols_nothing_defined():
    assert get_symbols(Document("SELECT 1; UPDATE T SET A = 1;")) == []


def test_references_table():
    doc = Document(SOURCE)

    table = references_table(doc)

    assert table.schema == REFERENCES_SCHEMA
    assert table.num_rows == 3
    assert table.column("statement").to_pylist() == ["Create", "Declare", "Create"]
    assert table.column("create_type").to_pylist() == [
        "PROCEDURE",
        "VARIABLE",
        "TABLE",
    ]
    assert table.column("schema").to_pylist() == [None, None, "SAMPLE"]
    assert table.column("name").to_pylist() == ["P", "X", "T"]
    assert table.column("start").to_pylist()[1] == SOURCE.index("DECLARE")


def test_references_table_empty():
    table = references_table(Document("SELECT 1"))

    assert table.num_rows == 0
    assert table.schema == REFERENCES_SCHEMA


@pytest.mark.parametrize(
    "value,expected",
    [
        ("employee", "EMPLOYEE"),
        ("Sample", "SAMPLE"),
        ('"Mixed Case"', "Mixed Case"),
        ('"a""b"', 'a"b'),
    ],
)
def test_normalize_name(value, expected):
    assert normalize_name(value) == expected


def test_changed_objects():
    doc = Document(
        "CREATE TABLE sample.emp (a INT);\n"
        'ALTER TABLE "Mixed" ADD b INT;\n'
        "CREATE SCHEMA hr;\n"
        "CREATE VIEW v AS SELECT 1;\n"
        "DECLARE X INT;\n"
        "SELECT 1;"
    )

    assert changed_objects(doc) == {"SAMPLE.EMP", "Mixed", "HR", "V"}


def test_changed_object_key_ignores_other_statements():
    doc = Document("DROP TABLE T; INSERT INTO T VALUES (1)")

    assert [changed_object_key(s) for s in doc.statements] == [None, None]


def test_changed_objects_if_not_exists():
    doc = Document("create table if not exists s.t (a int)")

    assert changed_objects(doc) == {"S.T"}
    assert [s.name for s in get_symbols(doc)] == ["t"]
