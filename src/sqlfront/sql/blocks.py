"""Collapse parenthesized spans of tokens into block tokens.

The tokenizer produces a flat list of tokens, where parentheses
are just tokens like any other. For formatting purposes it is
more convenient to deal with a tree, where what is inside
parentheses is a single :class:`sqlfront.sql.tokenize.BlockToken`
that owns the tokens it contains.

Given ``SELECT COUNT(*) FROM (SELECT a FROM t)``
:func:`create_blocks` would produce::

    [StatementTypeToken('SELECT'), WordToken('COUNT'), BlockToken([OperatorToken('*')]),
     WordToken('FROM'), BlockToken([StatementTypeToken('SELECT'), WordToken('a'), ...])]

Nested parentheses lead to nested blocks.
Empty parentheses have nothing to own, so ``()`` is kept
as the original pair of parenthesis tokens.
"""

from .tokenize import BlockToken, Token


class SQLStructureError(Exception):
    """Base class for errors in the structure of the SQL text."""

    pass


class UnbalancedParensError(SQLStructureError):
    """Raised when a parenthesis has no matching counterpart."""

    def __init__(self, message: str, offset: int) -> None:
        """
        :param message: Description of the error.
        :param offset: Offset in the source text of the unmatched parenthesis.
        """
        super().__init__(message)
        self.offset = offset


def create_blocks(tokens: list[Token]) -> list[Token]:
    """Replace every matching pair of parentheses with a block token.

    The scan proceeds left to right keeping a stack of the
    parentheses that were opened and not yet closed, each
    entry in the stack carries the tokens collected since
    that parenthesis was opened.
    When a parenthesis is closed, the collected tokens become
    a :class:`sqlfront.sql.tokenize.BlockToken` that is appended
    to the tokens of the enclosing level.

    :param tokens: A flat list of tokens as produced by the tokenizer.
    :raises UnbalancedParensError: when a parenthesis is not matched.
    """
    result: list[Token] = []
    stack: list[tuple[Token, list[Token]]] = []
    current = result

    for token in tokens:
        if token.type == "openbracket":
            stack.append((token, current))
            current = []
        elif token.type == "closebracket":
            if not stack:
                raise UnbalancedParensError(
                    f"Unexpected ')' at offset {token.range.start}", token.range.start
                )
            opening, enclosing = stack.pop()
            if current:
                enclosing.append(
                    BlockToken(current, opening.range.start, token.range.end)
                )
            else:
                enclosing.extend((opening, token))
            current = enclosing
        else:
            current.append(token)

    if stack:
        opening, _ = stack[-1]
        raise UnbalancedParensError(
            f"Unclosed '(' at offset {opening.range.start}", opening.range.start
        )
    return result
