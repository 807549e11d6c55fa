import pytest

from sqlfront.sql.document import Document
from sqlfront.sql.keywords import StatementType
from sqlfront.sql.selection import parse_statement, schema_change
from sqlfront.sql.statement import ObjectRef, QualifiedObject
from sqlfront.sql.tokenize import Range

TEXT = "SELECT 1;\nSELECT 2;"


def test_parse_statement_at_offset():
    info = parse_statement(TEXT, offset=12)

    assert info.qualifier == "statement"
    assert info.content == "SELECT 2"
    assert info.type is StatementType.Select
    assert info.refs == []
    assert info.range == Range(10, 18)


def test_parse_statement_whole_group():
    text = "CREATE PROCEDURE P() BEGIN SET X = 1; END;\nSELECT 2;"

    info = parse_statement(text, offset=text.index("SET"))

    assert info.content == "CREATE PROCEDURE P() BEGIN SET X = 1; END"
    assert info.type is StatementType.Create
    assert info.refs == [
        ObjectRef(StatementType.Create, "PROCEDURE", QualifiedObject(None, "P"))
    ]


def test_parse_statement_selection():
    info = parse_statement(TEXT, offset=12, selection=(0, 9))

    assert info.qualifier == "statement"
    assert info.content == "SELECT 1;"
    assert info.type is None
    assert info.range == Range(0, 9)


def test_parse_statement_blank_selection():
    info = parse_statement(TEXT, offset=12, selection=(9, 10))

    assert info.content == "SELECT 2"


def test_parse_statement_nothing_found():
    info = parse_statement(TEXT, offset=9)

    assert info.qualifier == "statement"
    assert info.content == ""
    assert info.range is None


@pytest.mark.parametrize(
    "text,qualifier,content",
    [
        ("json: SELECT * FROM T", "json", "SELECT * FROM T"),
        ("CSV:SELECT 1", "csv", "SELECT 1"),
        ("cl: WRKACTJOB", "cl", "WRKACTJOB"),
        ("sql: SELECT 1", "sql", "SELECT 1"),
    ],
)
def test_parse_statement_qualifier(text, qualifier, content):
    info = parse_statement(text, offset=0)

    assert info.qualifier == qualifier
    assert info.content == content


@pytest.mark.parametrize(
    "text,expected",
    [
        ("SET SCHEMA sales", "SALES"),
        ("SET CURRENT SCHEMA = sales", "SALES"),
        ("set current_schema hr", "HR"),
        ("SET SCHEMA 'Mixed'", "Mixed"),
        ('SET SCHEMA "Mixed"', "Mixed"),
        ("SET X = 1", None),
        ("SET SCHEMA", None),
        ("SELECT 1", None),
    ],
)
def test_schema_change(text, expected):
    assert schema_change(Document(text).statements[0]) == expected
