import pytest

from sqlfront.sql.tokenize import (
    ClauseToken,
    ColonToken,
    CommaToken,
    CommentToken,
    DotToken,
    EqualToken,
    NumberToken,
    OperatorToken,
    Range,
    SemicolonToken,
    SQLNameToken,
    StatementTypeToken,
    StringToken,
    Tokenizer,
    UnknownToken,
    WordToken,
    tokenize,
)


def test_tokenizer_select_query():
    query = "SELECT a.id FROM users WHERE name = 'John'"
    tokenizer = Tokenizer(query)
    tokens = tokenizer.tokenize()

    expected_tokens = [
        StatementTypeToken("SELECT"),
        WordToken("a"),
        DotToken("."),
        WordToken("id"),
        WordToken("FROM"),
        WordToken("users"),
        ClauseToken("WHERE"),
        WordToken("name"),
        EqualToken("="),
        StringToken("'John'"),
    ]

    assert tokens == expected_tokens


def test_tokenizer_keywords_are_case_insensitive():
    tokens = tokenize("select x from t order by x")

    expected_tokens = [
        StatementTypeToken("select"),
        WordToken("x"),
        WordToken("from"),
        WordToken("t"),
        ClauseToken("order"),
        WordToken("by"),
        WordToken("x"),
    ]

    assert tokens == expected_tokens
    assert tokens[0].matches("statementType", "SELECT")
    assert not tokens[1].matches("statementType")


def test_tokenizer_procedure_body():
    tokens = tokenize("lbl: BEGIN DECLARE x INT; SET x = :v; END lbl;")

    expected_tokens = [
        WordToken("lbl"),
        ColonToken(":"),
        StatementTypeToken("BEGIN"),
        StatementTypeToken("DECLARE"),
        WordToken("x"),
        WordToken("INT"),
        SemicolonToken(";"),
        StatementTypeToken("SET"),
        WordToken("x"),
        EqualToken("="),
        ColonToken(":"),
        WordToken("v"),
        SemicolonToken(";"),
        StatementTypeToken("END"),
        WordToken("lbl"),
        SemicolonToken(";"),
    ]

    assert tokens == expected_tokens


@pytest.mark.parametrize(
    "text,expected",
    [
        ("'it''s'", StringToken("'it''s'")),
        ('"My Table"', SQLNameToken('"My Table"')),
        ('"a""b"', SQLNameToken('"a""b"')),
        ("42", NumberToken("42")),
        ("1.5", NumberToken("1.5")),
        ("1e3", NumberToken("1e3")),
        (".5", NumberToken(".5")),
        ("<>", OperatorToken("<>")),
        (">=", OperatorToken(">=")),
        ("||", OperatorToken("||")),
        ("@var", WordToken("@var")),
        ("-- note", CommentToken("-- note")),
        ("/* multi\nline */", CommentToken("/* multi\nline */")),
        ("\\", UnknownToken("\\")),
        ("x'41'", StringToken("x'41'")),
        ("N'abc'", StringToken("N'abc'")),
        ("G'text'", StringToken("G'text'")),
        ("UX'0041'", StringToken("UX'0041'")),
        ("x", WordToken("x")),
    ],
)
def test_tokenizer_single_token(text, expected):
    tokens = tokenize(text)

    assert tokens == [expected]
    assert tokens[0].type == expected.type


def test_tokenizer_unterminated_tokens():
    assert tokenize("SELECT 'abc") == [
        StatementTypeToken("SELECT"),
        StringToken("'abc"),
    ]
    assert tokenize("/* never closed") == [CommentToken("/* never closed")]


def test_tokenizer_line_comment_stops_at_end_of_line():
    tokens = tokenize("SELECT 1 -- first\r\n, 2")

    expected_tokens = [
        StatementTypeToken("SELECT"),
        NumberToken("1"),
        CommentToken("-- first"),
        CommaToken(","),
        NumberToken("2"),
    ]

    assert tokens == expected_tokens


def test_tokenizer_ranges():
    tokens = tokenize("SELECT  a,\n  b")

    assert [t.range for t in tokens] == [
        Range(0, 6),
        Range(8, 9),
        Range(9, 10),
        Range(13, 14),
    ]


def test_tokenizer_gaps_are_whitespace():
    text = "CREATE TABLE t (\n  id INT, -- key\n  name VARCHAR(10)\n);\t/* end */"
    tokens = tokenize(text)

    previous_end = 0
    for token in tokens:
        assert text[previous_end : token.range.start].strip() == ""
        assert text[token.range.start : token.range.end] == token.value
        previous_end = token.range.end
    assert text[previous_end:].strip() == ""


def test_tokenizer_empty_text():
    assert tokenize("") == []
    assert tokenize("  \n\t ") == []


def test_token_repr():
    assert repr(StatementTypeToken("SELECT")) == "StatementTypeToken('SELECT')"


def test_tokenizer_prefixed_strings():
    tokens = tokenize("SELECT X'41', n'it''s' FROM t")

    expected_tokens = [
        StatementTypeToken("SELECT"),
        StringToken("X'41'"),
        CommaToken(","),
        StringToken("n'it''s'"),
        WordToken("FROM"),
        WordToken("t"),
    ]

    assert tokens == expected_tokens
