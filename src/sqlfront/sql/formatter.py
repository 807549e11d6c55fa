"""Format SQL text into normalized, indented SQL text.

The formatter works on the statements of a
:class:`sqlfront.sql.document.Document`, so the formatted text is
only based on the tokens of the source and not on its original layout.
That makes formatting idempotent: formatting text that was already
formatted with the same options produces the same text.

Each statement is rendered independently into a list of lines
by :class:`StatementRenderer`, then the lines of all statements are
indented according to the bodies they belong to and joined together.

Given ``select a, b from t where a = 1 and b in (1, 2, 3)`` and
uppercase keywords and identifiers the formatter would produce::

    SELECT A,B FROM T
    WHERE A = 1 AND B IN(
        1,
        2,
        3
    );

The main rules are:

* Keywords like ``SELECT`` or ``WHERE`` start a new line, unless the statement
  is of a kind that reads better on a single line, like ``SET`` or ``CALL``.
* Parenthesized blocks are kept on the same line when short and simple,
  and expanded one element per line when they hold lists of more
  than two elements, sub queries or other blocks.
* Statements within ``BEGIN ... END`` and ``IF ... END IF`` bodies
  are indented.

The case of keywords and identifiers can be changed through :class:`FormatOptions`,
the source tokens are never modified, only the text emitted for them.
"""

import logging
from typing import Optional

from .blocks import SQLStructureError
from .document import Document
from .keywords import StatementType, statement_type_of
from .statement import find_governing_token
from .tokenize import Token

logger = logging.getLogger(__name__)

CASE_OPTIONS = ("preserve", "upper", "lower")

#: Statements that are always rendered on a single line.
SINGLE_LINE_STATEMENT_TYPES = (
    StatementType.Create,
    StatementType.Declare,
    StatementType.Set,
    StatementType.Delete,
    StatementType.Call,
    StatementType.If,
    StatementType.End,
)

#: Tokens whose text is never re-cased.
UNCASED_TOKEN_TYPES = ("sqlName", "string", "number", "comment")


class MalformedBlockTokenError(SQLStructureError):
    """Raised when a block token has no content to format."""

    pass


class FormatOptions:
    """Options that control how SQL is formatted.

    Options are never modified by the formatter, to format
    with different options create new ones
    or use :meth:`with_changes` to derive them from existing ones.
    """

    def __init__(
        self,
        indent_width: int = 4,
        keyword_case: str = "preserve",
        identifier_case: str = "preserve",
        new_line_lists: bool = False,
        space_between_statements: bool = False,
    ) -> None:
        """
        :param indent_width: How many spaces each indentation level adds.
        :param keyword_case: ``preserve``, ``upper`` or ``lower`` case for keywords.
        :param identifier_case: ``preserve``, ``upper`` or ``lower`` case
                                for identifiers.
        :param new_line_lists: Put each element of comma separated lists
                               on its own line.
        :param space_between_statements: Add an empty line between statements
                                         of different types.
        """
        for name, value in (
            ("keyword_case", keyword_case),
            ("identifier_case", identifier_case),
        ):
            if value not in CASE_OPTIONS:
                raise ValueError(
                    f"Invalid {name} {value!r}, "
                    f"must be one of {', '.join(CASE_OPTIONS)}"
                )
        if indent_width < 0:
            raise ValueError(f"Invalid indent_width {indent_width}, must be positive")

        self.indent_width = indent_width
        self.keyword_case = keyword_case
        self.identifier_case = identifier_case
        self.new_line_lists = new_line_lists
        self.space_between_statements = space_between_statements

    def with_changes(self, **changes) -> "FormatOptions":
        """A copy of the options with some of them changed."""
        options = {
            "indent_width": self.indent_width,
            "keyword_case": self.keyword_case,
            "identifier_case": self.identifier_case,
            "new_line_lists": self.new_line_lists,
            "space_between_statements": self.space_between_statements,
        }
        options.update(changes)
        return FormatOptions(**options)

    def __repr__(self) -> str:
        return (
            f"FormatOptions(indent_width={self.indent_width}, "
            f"keyword_case={self.keyword_case!r}, "
            f"identifier_case={self.identifier_case!r}, "
            f"new_line_lists={self.new_line_lists}, "
            f"space_between_statements={self.space_between_statements})"
        )


def transform_case(value: str, case: str) -> str:
    if case == "upper":
        return value.upper()
    elif case == "lower":
        return value.lower()
    return value


class StatementRenderer:
    """Render a list of tokens, with blocks, into lines of text.

    The renderer keeps the lines produced so far and the current
    indentation, tokens are appended to the last line and
    some of them, like keywords, start a new line.

    Blocks are rendered by a nested renderer, whose lines are
    then appended indented one more level.
    """

    def __init__(self, tokens: list[Token], options: FormatOptions) -> None:
        """
        :param tokens: The tokens to render, with parentheses collapsed into blocks.
        :param options: The formatting options.
        """
        self.tokens = tokens
        self.options = options
        self.indent = options.indent_width
        self.current_indent = 0
        self.lines = [""]
        self.line_comment = False

        self.type_index = find_governing_token(tokens)
        self.statement_type = StatementType.Unknown
        if self.type_index is not None:
            self.statement_type = statement_type_of(tokens[self.type_index].value)
        self.single_line = self.statement_type in SINGLE_LINE_STATEMENT_TYPES

        # Position of the colon in ``mylabel: BEGIN``
        self.label_colon: Optional[int] = None
        if self.type_index is not None and self.type_index >= 2:
            if tokens[self.type_index - 1].type == "colon":
                self.label_colon = self.type_index - 1

    def render(self) -> list[str]:
        """Produce the lines of text for the tokens."""
        for idx, token in enumerate(self.tokens):
            previous = self.tokens[idx - 1] if idx > 0 else None
            if token.type == "block":
                self.render_block(token)
            elif token.type in ("dot", "comma"):
                self.append(token.value)
                if token.type == "comma" and self.options.new_line_lists:
                    self.new_line()
            elif token.type in ("openbracket", "closebracket"):
                # Empty parentheses, they are not blocks.
                self.append(token.value)
            elif token.type == "comment":
                if self.needs_space(idx, previous):
                    self.append(" ")
                self.append(token.value)
                if token.value.startswith("--"):
                    self.line_comment = True
                    self.new_line()
            else:
                self.render_word(idx, token, previous)

        # A line comment must be followed by a new line, anything else
        # can sit right after the last token.
        if not self.line_comment:
            while len(self.lines) > 1 and not self.lines[-1].strip():
                self.lines.pop()
        return self.lines

    def render_word(self, idx: int, token: Token, previous: Optional[Token]) -> None:
        """Render keywords, identifiers, literals and operators."""
        breaks_line = (
            token.is_keyword()
            and not self.single_line
            and self.type_index is not None
            and idx > self.type_index
        )
        if breaks_line:
            self.new_line(-1 if self.options.new_line_lists else 0)
        elif self.needs_space(idx, previous):
            self.append(" ")

        self.append(self.display_text(token))

        if breaks_line and self.options.new_line_lists:
            self.new_line(1)
        elif (
            self.options.new_line_lists
            and token.is_keyword()
            and not self.single_line
            and idx == self.type_index
        ):
            self.new_line(1)

    def render_block(self, token: Token) -> None:
        """Render a parenthesized block, inline or expanded on multiple lines.

        * Blocks with a single token are inline, unless it's a line comment.
        * Blocks that start with a keyword, like sub queries, or that contain
          other blocks are always expanded.
        * Lists of three or more elements, or of two or more elements
          in CREATE statements, are expanded one element per line.
        * Other blocks are inline if they fit on a single line, unless
          they are part of a CREATE statement.
        """
        block = getattr(token, "block", None)
        if not block:
            raise MalformedBlockTokenError(
                f"Block token at offset {token.range.start} has no content"
            )

        single = block[0]
        if (
            len(block) == 1
            and single.type != "block"
            and not (single.type == "comment" and single.value.startswith("--"))
        ):
            self.append(f"({self.display_text(single)})")
            return

        starts_with_keyword = block[0].is_keyword()
        contains_block = any(t.type == "block" for t in block)
        comma_count = sum(1 for t in block if t.type == "comma")
        is_create = self.statement_type is StatementType.Create
        list_style = comma_count >= 2 or (is_create and comma_count >= 1)

        if starts_with_keyword or contains_block or list_style:
            options = self.options
            if list_style:
                options = options.with_changes(new_line_lists=True)
            if starts_with_keyword and not self.at_line_start():
                self.append(" ")
            self.append("(")
            self.add_sublines(StatementRenderer(block, options).render())
            self.append(")")
            return

        sublines = StatementRenderer(
            block, self.options.with_changes(new_line_lists=False)
        ).render()
        if len(sublines) == 1 and not is_create:
            self.append(f"({sublines[0]})")
        else:
            self.append("(")
            self.add_sublines(sublines)
            self.append(")")

    def display_text(self, token: Token) -> str:
        if token.type in UNCASED_TOKEN_TYPES:
            return token.value
        elif token.type == "word":
            return transform_case(token.value, self.options.identifier_case)
        return transform_case(token.value, self.options.keyword_case)

    def needs_space(self, idx: int, previous: Optional[Token]) -> bool:
        """Tell if a space must separate the token at ``idx`` from the previous one."""
        if idx == 0 or self.at_line_start():
            return False
        if self.tokens[idx].type == "colon" and idx == self.label_colon:
            return False
        if previous is not None:
            if previous.type in ("dot", "comma"):
                return False
            if previous.type == "colon" and idx - 1 != self.label_colon:
                # Host variables, like ``:var``
                return False
        return True

    def at_line_start(self) -> bool:
        line = self.lines[-1]
        return not line.strip() or line.endswith(" ")

    def append(self, text: str) -> None:
        self.lines[-1] += text
        self.line_comment = False

    def new_line(self, indent_change: int = 0) -> None:
        """Start a new line, a blank current line is reused."""
        self.current_indent += indent_change * self.indent
        if not self.lines[-1].strip():
            self.lines[-1] = " " * self.current_indent
        else:
            self.lines.append(" " * self.current_indent)

    def add_sublines(self, lines: list[str]) -> None:
        if len(lines) > 1 and not lines[-1].strip():
            # The line left open by a trailing line comment.
            lines = lines[:-1]
        padding = " " * (self.current_indent + self.indent)
        self.lines.extend(padding + line for line in lines)
        self.new_line()


class Formatter:
    """Format SQL text according to :class:`FormatOptions`.

    The formatter is stateless, the same formatter can be used
    to format any number of texts.
    """

    def __init__(self, options: Optional[FormatOptions] = None) -> None:
        """
        :param options: The formatting options, defaults are used if not provided.
        """
        self.options = options or FormatOptions()

    def format(self, text: str) -> str:
        """Format the statements in ``text``.

        The line endings of the text are preserved: when ``\\r\\n`` is
        used anywhere in the text, it's used for the whole formatted text.

        :raises sqlfront.sql.blocks.UnbalancedParensError: if parentheses do not match.
        :raises MalformedBlockTokenError: if a block token has no content.
        """
        document = Document(text)
        result: list[str] = []
        previous_type: Optional[StatementType] = None

        for group in document.get_statement_groups():
            indent = 0
            for statement in group.statements:
                if statement.is_compound_end() or statement.is_condition_end():
                    indent -= self.options.indent_width

                if (
                    self.options.space_between_statements
                    and previous_type is not None
                    and previous_type is not statement.type
                ):
                    result.append("")

                lines = StatementRenderer(statement.blocks, self.options).render()
                if statement.significant_tokens:
                    if not statement.body_opener():
                        lines[-1] += ";"
                else:
                    # Only comments, nothing to terminate.
                    while len(lines) > 1 and not lines[-1].strip():
                        lines.pop()

                padding = " " * max(indent, 0)
                result.extend(padding + line for line in lines)

                if statement.is_compound_start() or statement.is_condition_start():
                    indent += self.options.indent_width
                previous_type = statement.type

        logger.debug("Formatted %d statements", len(document.statements))
        return document.eol.join(line.rstrip() for line in result)


def format_sql(text: str, options: Optional[FormatOptions] = None) -> str:
    """Format SQL text, shortcut for ``Formatter(options).format(text)``.

    >>> format_sql("select a,b from t", FormatOptions(keyword_case="upper"))
    'SELECT a,b from t;'
    """
    return Formatter(options).format(text)
