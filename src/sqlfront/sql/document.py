"""Split SQL text into statements and statement groups.

A :class:`Document` takes the whole text of a SQL source, tokenizes it
and splits the tokens into :class:`sqlfront.sql.statement.Statement`
objects, that are then arranged into :class:`StatementGroup` objects.

Statements end at semicolons, unless the semicolon is within parentheses.
A statement that opens a body ends right after the keyword that opens
the body, so that each statement in the body is a statement on its own::

    CREATE PROCEDURE P() BEGIN   -- Statement 1, opens a compound body
      DECLARE X INT;             -- Statement 2
      IF X = 1 THEN              -- Statement 3, opens a conditional body
        SET X = 2;               -- Statement 4
      END IF;                    -- Statement 5, closes the conditional body
    END                          -- Statement 6, closes the compound body

Groups put together the statements of an object that is made
of multiple statements, in the previous example all the statements would
be part of a single group, as the body opened by the first statement
is only closed by the last one.
Statements that open no body are a group on their own.

Grouping only relies on a nesting counter, and an ``END`` that doesn't
close anything is simply ignored. This is on purpose, editors deal with
snippets of code and code that is being written, so a document must
always be usable even when it's not valid SQL.
"""

import bisect
import logging
from typing import Optional

from .keywords import StatementType, statement_type_of
from .statement import Statement, find_governing_token
from .tokenize import Range, Token, Tokenizer

logger = logging.getLogger(__name__)

THEN_BODY_TYPES = (StatementType.If, StatementType.Elseif)
DO_BODY_TYPES = (StatementType.While, StatementType.For)


class StatementGroup:
    """A sequence of contiguous statements that belong together."""

    def __init__(self, statements: list[Statement]) -> None:
        """
        :param statements: The statements of the group, at least one.
        """
        self.statements = statements
        self.range = Range(statements[0].range.start, statements[-1].range.end)

    def __repr__(self) -> str:
        return f"StatementGroup({self.statements!r})"


class StatementSegmenter:
    """Split a flat list of tokens into statements.

    The segmenter works on the tokens as produced by the tokenizer,
    before parentheses are collapsed into blocks, so it keeps track
    of how deeply nested in parentheses the current token is by itself.

    It also keeps track of ``CASE ... END`` expressions, as
    ``THEN`` and ``ELSE`` within them do not open any body.
    """

    def __init__(self, tokens: list[Token]) -> None:
        """
        :param tokens: The tokens of the whole document.
        """
        self.tokens = tokens
        self.statements: list[Statement] = []
        self.current: list[Token] = []
        self.paren_depth = 0
        self.case_depth = 0
        self.split_at: Optional[int] = None

    def segment(self) -> list[Statement]:
        """Produce the statements found in the tokens."""
        for pos, token in enumerate(self.tokens):
            if token.type == "semicolon" and self.paren_depth == 0:
                self.flush()
                continue

            self.current.append(token)
            if token.type == "openbracket":
                self.paren_depth += 1
            elif token.type == "closebracket":
                self.paren_depth = max(0, self.paren_depth - 1)
            elif self.paren_depth == 0 and token.type in (
                "statementType",
                "clause",
                "word",
            ):
                self.process_keyword(pos, token)

            if self.split_at == pos:
                self.flush()

        self.flush()
        return self.statements

    def process_keyword(self, pos: int, token: Token) -> None:
        """Detect if ``token`` is the last token of a body opening statement."""
        word = token.value.upper()
        if word == "CASE":
            self.case_depth += 1
            return
        if word == "END" and self.case_depth > 0:
            self.case_depth -= 1
            return
        if self.case_depth > 0:
            return

        if word == "BEGIN":
            self.split_at = self.find_atomic(pos) or pos
            return

        governing = find_governing_token(self.current)
        statement_type = statement_type_of(self.current[governing].value)
        is_governing = self.current[governing] is token
        if (
            (word == "THEN" and statement_type in THEN_BODY_TYPES)
            or (word == "DO" and statement_type in DO_BODY_TYPES)
            or (word in ("ELSE", "LOOP", "REPEAT") and is_governing)
        ):
            self.split_at = pos

    def find_atomic(self, pos: int) -> Optional[int]:
        """Position of ``ATOMIC`` in ``BEGIN ATOMIC`` or ``BEGIN NOT ATOMIC``."""
        following = [
            (idx, t)
            for idx, t in enumerate(self.tokens[pos + 1 : pos + 5], start=pos + 1)
            if t.type != "comment"
        ]
        words = [t.value.upper() for _, t in following[:2]]
        if words[:1] == ["ATOMIC"]:
            return following[0][0]
        if words == ["NOT", "ATOMIC"]:
            return following[1][0]
        return None

    def flush(self) -> None:
        """Turn the tokens collected so far into a statement."""
        if self.current:
            self.statements.append(Statement(self.current))
        self.current = []
        self.case_depth = 0
        self.split_at = None


def segment(tokens: list[Token]) -> list[Statement]:
    """Shortcut for ``StatementSegmenter(tokens).segment()``."""
    return StatementSegmenter(tokens).segment()


def group_statements(statements: list[Statement]) -> list[StatementGroup]:
    """Arrange statements into groups.

    A nesting counter is increased by statements that open a body
    and decreased by those that close one, the group is complete
    once the counter goes back to zero.
    Statements that both close and open a body, like ``ELSE``,
    leave the counter unchanged.
    """
    groups = []
    current: list[Statement] = []
    depth = 0
    for statement in statements:
        current.append(statement)
        if statement.is_compound_end() or statement.is_condition_end():
            depth -= 1
        if statement.is_compound_start() or statement.is_condition_start():
            depth += 1

        if depth <= 0:
            if depth < 0:
                logger.debug(
                    "Ignoring unmatched end of body at offset %d",
                    statement.range.start,
                )
            groups.append(StatementGroup(current))
            current = []
            depth = 0

    if current:
        logger.debug("Body opened at offset %d is never closed", current[0].range.start)
        groups.append(StatementGroup(current))
    return groups


class Document:
    """The statements and groups of a SQL text.

    The document is computed once when created and is never updated,
    when the text changes a new document should be created.

    >>> doc = Document("SELECT 1; SELECT 2;")
    >>> [g.statements[0].type.value for g in doc.get_statement_groups()]
    ['Select', 'Select']
    """

    def __init__(self, content: str) -> None:
        """
        :param content: The SQL text.
        """
        self.content = content
        self.eol = "\r\n" if "\r\n" in content else "\n"
        self.tokens = Tokenizer(content).tokenize()
        self.statements = segment(self.tokens)
        self.groups = group_statements(self.statements)
        self._group_starts = [group.range.start for group in self.groups]
        logger.debug(
            "Document of %d characters: %d tokens, %d statements, %d groups",
            len(content),
            len(self.tokens),
            len(self.statements),
            len(self.groups),
        )

    def get_statement_groups(self) -> list[StatementGroup]:
        """All the groups of the document, in source order."""
        return list(self.groups)

    def get_group_by_offset(self, offset: int) -> Optional[StatementGroup]:
        """The group that contains the character at ``offset``, if any.

        Groups cover the text from the beginning of their first statement
        to the end of their last one, semicolon excluded.
        """
        idx = bisect.bisect_right(self._group_starts, offset) - 1
        if idx < 0:
            return None
        group = self.groups[idx]
        if offset < group.range.end:
            return group
        return None

    def get_statement_by_offset(self, offset: int) -> Optional[Statement]:
        """The statement that contains the character at ``offset``, if any."""
        group = self.get_group_by_offset(offset)
        if group is None:
            return None
        for statement in group.statements:
            if statement.range.start <= offset < statement.range.end:
                return statement
        return None
