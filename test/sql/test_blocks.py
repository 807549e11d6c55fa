import pytest

from sqlfront.sql.blocks import UnbalancedParensError, create_blocks
from sqlfront.sql.tokenize import (
    BlockToken,
    CloseParenToken,
    CommaToken,
    NumberToken,
    OpenParenToken,
    OperatorToken,
    Range,
    StatementTypeToken,
    WordToken,
    tokenize,
)


def test_create_blocks():
    tokens = create_blocks(tokenize("SELECT COUNT(*) FROM t"))

    expected_tokens = [
        StatementTypeToken("SELECT"),
        WordToken("COUNT"),
        BlockToken([OperatorToken("*")]),
        WordToken("FROM"),
        WordToken("t"),
    ]

    assert tokens == expected_tokens


def test_create_blocks_nested():
    tokens = create_blocks(tokenize("IN (1, (2, 3))"))

    expected_tokens = [
        WordToken("IN"),
        BlockToken(
            [
                NumberToken("1"),
                CommaToken(","),
                BlockToken([NumberToken("2"), CommaToken(","), NumberToken("3")]),
            ]
        ),
    ]

    assert tokens == expected_tokens


def test_create_blocks_empty_parens():
    tokens = create_blocks(tokenize("CALL p()"))

    expected_tokens = [
        StatementTypeToken("CALL"),
        WordToken("p"),
        OpenParenToken("("),
        CloseParenToken(")"),
    ]

    assert tokens == expected_tokens


def test_create_blocks_range_covers_parens():
    tokens = create_blocks(tokenize("f(a)"))

    assert tokens[1].range == Range(1, 4)


def test_create_blocks_without_parens():
    tokens = tokenize("SELECT a FROM t")

    assert create_blocks(tokens) == tokens


@pytest.mark.parametrize(
    "text,offset",
    [
        ("SELECT 1)", 8),
        ("SELECT (1", 7),
        ("SELECT ((1)", 7),
        (")", 0),
    ],
)
def test_create_blocks_unbalanced(text, offset):
    with pytest.raises(UnbalancedParensError) as err:
        create_blocks(tokenize(text))

    assert err.value.offset == offset
