"""Split SQL text into a sequence of tokens.

Given a query like ``"SELECT a.id FROM users WHERE name = 'John'"`` the
:class:`Tokenizer` produces a list of tokens like::

    [StatementTypeToken('SELECT'), WordToken('a'), DotToken('.'), WordToken('id'),
     WordToken('FROM'), WordToken('users'), ClauseToken('WHERE'), WordToken('name'),
     EqualToken('='), StringToken("'John'")]

Each token is an instance of a :class:`Token` subclass, the subclass
identifies the kind of token (also available as the ``type`` attribute,
like ``"statementType"`` or ``"comma"``), while the ``value`` attribute
holds the exact source text of the token.
Every token also remembers where it was found in the source text through
its ``range``, so that editors can map it back to the original document.

The tokenizer is regex based: a single regular expression made of one
named group per kind of token is applied repeatedly to the text, and
whatever group matched decides the kind of token.
Whitespace is matched too, but it's thrown away, as it only matters
to separate tokens. Anything that no rule recognizes becomes
an :class:`UnknownToken`, so tokenizing never fails, even on incomplete
or broken text that is being edited.

Parentheses are emitted as :class:`OpenParenToken` and :class:`CloseParenToken`,
collapsing them into :class:`BlockToken` is done in a separate pass
by :func:`sqlfront.sql.blocks.create_blocks`.
"""

import re
from typing import NamedTuple, Optional

from .keywords import StatementType, is_clause_word, statement_type_of


class Range(NamedTuple):
    """Offsets of a piece of text in the source, ``end`` is exclusive."""

    start: int
    end: int


class Token:
    """A token identified within a SQL text.

    Tokens compare equal when they are of the same kind and have
    the same value, regardless of where they were found in the text.
    """

    type = "unknown"

    def __init__(self, value: str, start: int = 0, end: Optional[int] = None) -> None:
        """
        :param value: The source text of the token.
        :param start: Offset of the token in the source text.
        :param end: Offset where the token ends, defaults to ``start + len(value)``.
        """
        self.value = value
        self.range = Range(start, start + len(value) if end is None else end)

    def matches(self, type: str, value: Optional[str] = None) -> bool:
        """Check the kind of the token, and optionally its value.

        The value comparison is case insensitive, ``value`` is expected
        to be provided in uppercase::

            token.matches("statementType", "BEGIN")
        """
        if self.type != type:
            return False
        return value is None or self.value.upper() == value

    def is_keyword(self) -> bool:
        return self.type in ("statementType", "clause")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self.__class__ is other.__class__ and self.value == other.value

    def __hash__(self) -> int:
        return hash((self.__class__, self.value))


class StatementTypeToken(Token):
    """A keyword that can govern a statement, like ``SELECT`` or ``CREATE``."""

    type = "statementType"


class ClauseToken(Token):
    """A keyword introducing a clause, like ``WHERE`` or ``ORDER``."""

    type = "clause"


class WordToken(Token):
    """Any other bare word, identifiers and non structural keywords."""

    type = "word"


class SQLNameToken(Token):
    """A double quoted identifier, its case must be preserved."""

    type = "sqlName"


class StringToken(Token):
    """A string literal, prefixed ones like ``X'41'`` or ``N'text'`` included."""

    type = "string"


class NumberToken(Token):
    type = "number"


class CommentToken(Token):
    type = "comment"


class OperatorToken(Token):
    type = "operator"


class CommaToken(Token):
    type = "comma"


class DotToken(Token):
    type = "dot"


class EqualToken(Token):
    type = "equal"


class ColonToken(Token):
    type = "colon"


class SemicolonToken(Token):
    type = "semicolon"


class OpenParenToken(Token):
    type = "openbracket"


class CloseParenToken(Token):
    type = "closebracket"


class UnknownToken(Token):
    """A character that the tokenizer was not able to recognize."""

    type = "unknown"


class BlockToken(Token):
    """A parenthesized span of tokens.

    Instead of being a flat sequence of tokens, the content
    of the parentheses is stored in the ``block`` attribute
    of the token. The content itself can contain other
    block tokens when parentheses are nested.

    The ``range`` of the token covers the parentheses too.
    """

    type = "block"

    def __init__(self, block: list[Token], start: int = 0, end: int = 0) -> None:
        """
        :param block: The tokens found between the parentheses.
        :param start: Offset of the opening parenthesis.
        :param end: Offset right after the closing parenthesis.
        """
        super().__init__("", start, end)
        self.block = block

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.block!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self.__class__ is other.__class__ and self.block == other.block

    def __hash__(self) -> int:
        return hash((self.__class__, tuple(self.block)))


PUNCTUATION_TOKENS: dict[str, type[Token]] = {
    "(": OpenParenToken,
    ")": CloseParenToken,
    ",": CommaToken,
    ".": DotToken,
    ":": ColonToken,
    "=": EqualToken,
    ";": SemicolonToken,
}


class Tokenizer:
    """Tokenize SQL text into a list of :class:`Token`.

    The rules are tried in order, so that for example
    ``--`` is recognized as a comment before ``-`` can
    be recognized as an operator.
    """

    RULES = (
        ("whitespace", r"\s+"),
        ("comment", r"--[^\r\n]*|/\*.*?(?:\*/|\Z)"),
        ("string", r"'(?:[^']|'')*(?:'|\Z)"),
        ("sqlname", r'"(?:[^"]|"")*(?:"|\Z)'),
        ("prefixed_string", r"(?:[uU][xX]|[xXnNgG])'(?:[^']|'')*(?:'|\Z)"),
        ("number", r"\d+(?:\.\d*)?(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?"),
        ("word", r"(?:[^\W\d]|[@#$])[\w@#$]*"),
        ("operator", r"<>|<=|>=|!=|\|\||::|=>|[-+*/%<>!|&^~?]"),
        ("punctuation", r"[(),.:=;]"),
        ("unknown", r"."),
    )
    PATTERN = re.compile(
        "|".join(f"(?P<{name}>{regex})" for name, regex in RULES), re.DOTALL
    )

    def __init__(self, text: str) -> None:
        """
        :param text: The SQL text to tokenize.
        """
        self.text = text

    def tokenize(self) -> list[Token]:
        """Produce the list of tokens found in the text.

        Whitespace is not part of the returned tokens, everything
        else, comments included, is.
        """
        tokens = []
        for match in self.PATTERN.finditer(self.text):
            kind = match.lastgroup
            if kind == "whitespace":
                continue
            tokens.append(self.make_token(kind, match.group(), match.start()))
        return tokens

    def make_token(self, kind: str, value: str, start: int) -> Token:
        """Build the token for a piece of text matched by the rule ``kind``."""
        if kind == "word":
            if statement_type_of(value) is not StatementType.Unknown:
                return StatementTypeToken(value, start)
            elif is_clause_word(value):
                return ClauseToken(value, start)
            return WordToken(value, start)
        elif kind == "punctuation":
            return PUNCTUATION_TOKENS[value](value, start)
        elif kind == "comment":
            return CommentToken(value, start)
        elif kind in ("string", "prefixed_string"):
            return StringToken(value, start)
        elif kind == "sqlname":
            return SQLNameToken(value, start)
        elif kind == "number":
            return NumberToken(value, start)
        elif kind == "operator":
            return OperatorToken(value, start)
        return UnknownToken(value, start)


def tokenize(text: str) -> list[Token]:
    """Shortcut for ``Tokenizer(text).tokenize()``."""
    return Tokenizer(text).tokenize()
