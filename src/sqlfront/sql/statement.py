"""A single SQL statement, as found by :class:`sqlfront.sql.document.Document`.

A :class:`Statement` is the list of tokens between two statement
boundaries, plus what can be derived from those tokens:

* The statement type, from the governing keyword. The governing
  keyword is the first token that is not a comment, unless the statement
  starts with a label like ``mylabel: BEGIN``, in which case it's
  the token that follows the label.
* If the statement opens or closes a body, like ``BEGIN ... END``
  compound bodies or ``IF ... END IF`` conditional bodies.
* The database objects the statement defines, for ``CREATE``,
  ``DECLARE`` and ``ALTER`` statements.

Statements are built once and never modified, the derived data that is
expensive to compute is computed the first time it is requested and
then remembered.
"""

from dataclasses import dataclass
from typing import Optional

from .blocks import create_blocks
from .keywords import CONDITION_END_WORDS, StatementType, statement_type_of
from .tokenize import Range, Token

NAME_TOKEN_TYPES = ("word", "sqlName", "statementType", "clause")

#: Words that can sit between CREATE/ALTER and the name of the object.
OBJECT_KIND_WORDS = frozenset(
    {
        "OR",
        "REPLACE",
        "ALIAS",
        "DISTINCT",
        "ENCODED",
        "FUNCTION",
        "GLOBAL",
        "INDEX",
        "MASK",
        "MATERIALIZED",
        "PERMISSION",
        "PROCEDURE",
        "QUERY",
        "SCHEMA",
        "SEQUENCE",
        "SPECIFIC",
        "TABLE",
        "TEMPORARY",
        "TRIGGER",
        "TYPE",
        "UNIQUE",
        "VARIABLE",
        "VECTOR",
        "VIEW",
    }
)

HANDLER_WORDS = frozenset({"CONTINUE", "EXIT", "UNDO"})


@dataclass(frozen=True)
class QualifiedObject:
    """A possibly schema qualified object name."""

    schema: Optional[str]
    name: Optional[str]


@dataclass(frozen=True)
class ObjectRef:
    """A reference to a database object defined by a statement.

    ``type`` is the type of the statement that references the object,
    ``create_type`` is the kind of object, like ``TABLE`` or ``PROCEDURE``.
    """

    type: StatementType
    create_type: str
    object: QualifiedObject


def find_governing_token(tokens: list[Token]) -> Optional[int]:
    """Index of the token that decides the type of a statement.

    Leading comments are skipped and so is a ``label:`` prefix.
    Returns ``None`` when there are only comments.
    """
    significant = [idx for idx, token in enumerate(tokens) if token.type != "comment"]
    if not significant:
        return None
    if (
        len(significant) > 2
        and tokens[significant[0]].type == "word"
        and tokens[significant[1]].type == "colon"
    ):
        return significant[2]
    return significant[0]


class Statement:
    """A classified SQL statement.

    ``tokens`` are the flat tokens of the statement, the terminating
    semicolon is not part of them.
    """

    def __init__(self, tokens: list[Token]) -> None:
        """
        :param tokens: The tokens of the statement, at least one.
        """
        self.tokens = tokens
        self.range = Range(tokens[0].range.start, tokens[-1].range.end)
        self._significant = [t for t in tokens if t.type != "comment"]

        self.type = StatementType.Unknown
        self.label: Optional[str] = None
        governing = find_governing_token(tokens)
        if governing is not None:
            self.type = statement_type_of(tokens[governing].value)
            if tokens[governing] is not self._significant[0]:
                self.label = self._significant[0].value

        self._blocks: Optional[list[Token]] = None
        self._references: Optional[list[ObjectRef]] = None

    def __repr__(self) -> str:
        return f"Statement({self.type.value}, {self.range.start}-{self.range.end})"

    @property
    def significant_tokens(self) -> list[Token]:
        """The tokens of the statement that are not comments."""
        return list(self._significant)

    @property
    def blocks(self) -> list[Token]:
        """The tokens of the statement with parentheses collapsed into blocks.

        :raises sqlfront.sql.blocks.UnbalancedParensError: if parentheses do not match.
        """
        if self._blocks is None:
            self._blocks = create_blocks(self.tokens)
        return self._blocks

    def body_opener(self) -> Optional[str]:
        """The keyword with which the statement opens a body, if it does.

        Statements that open a body end right after the keyword
        that introduces the body, ``BEGIN`` for compound bodies,
        ``THEN``, ``ELSE``, ``DO``, ``LOOP`` or ``REPEAT`` for conditional ones.
        """
        if not self._significant:
            return None
        values = [t.value.upper() for t in self._significant]
        last = values[-1]
        if last == "ATOMIC":
            idx = len(values) - 2
            if idx >= 0 and values[idx] == "NOT":
                idx -= 1
            if idx >= 0 and values[idx] == "BEGIN":
                return "BEGIN"
            return None
        if last == "BEGIN":
            return "BEGIN"
        if last == "THEN" and self.type in (StatementType.If, StatementType.Elseif):
            return "THEN"
        if last == "DO" and self.type in (StatementType.While, StatementType.For):
            return "DO"
        if not self._after_governing():
            # ELSE, LOOP and REPEAT open a body only when alone.
            if self.type is StatementType.Else:
                return "ELSE"
            if self.type is StatementType.Loop:
                return "LOOP"
            if self.type is StatementType.Repeat:
                return "REPEAT"
        return None

    def is_compound_start(self) -> bool:
        return self.body_opener() == "BEGIN"

    def is_compound_end(self) -> bool:
        """``END`` or ``END label``, but not ``END IF`` and similar."""
        if self.type is not StatementType.End:
            return False
        following = self._after_governing()
        if not following:
            return True
        word = following[0].value.upper()
        return word not in CONDITION_END_WORDS and word != "CASE"

    def is_condition_start(self) -> bool:
        return self.body_opener() in ("THEN", "ELSE", "DO", "LOOP", "REPEAT")

    def is_condition_end(self) -> bool:
        """``END IF``, ``END WHILE`` and the like.

        ``ELSE`` and ``ELSEIF`` close the previous branch of a condition
        too, so they are both condition ends and condition starts.
        """
        if self.type in (StatementType.Else, StatementType.Elseif):
            return True
        for current, following in zip(self._significant, self._significant[1:]):
            if (
                current.value.upper() == "END"
                and following.value.upper() in CONDITION_END_WORDS
            ):
                return True
        return False

    def get_object_references(self) -> list[ObjectRef]:
        """The objects that the statement creates, declares or alters.

        At most one reference is returned, the object the statement is about.
        """
        if self._references is None:
            reference = self._find_object_reference()
            self._references = [reference] if reference else []
        return list(self._references)

    def _after_governing(self) -> list[Token]:
        skip = 1 if self.label is None else 3
        return self._significant[skip:]

    def _find_object_reference(self) -> Optional[ObjectRef]:
        if self.type not in (
            StatementType.Create,
            StatementType.Declare,
            StatementType.Alter,
        ):
            return None

        tokens = self._after_governing()
        kind_words = []
        pos = 0
        while (
            pos < len(tokens)
            and tokens[pos].type != "sqlName"
            and tokens[pos].value.upper() in OBJECT_KIND_WORDS
        ):
            kind_words.append(tokens[pos].value.upper())
            pos += 1
        kind_words = [w for w in kind_words if w not in ("OR", "REPLACE")]

        if self.type is StatementType.Declare and not kind_words:
            return self._find_declared_reference(tokens)

        pos = skip_existence_check(tokens, pos)
        qualified = read_qualified_name(tokens, pos)
        if qualified is None:
            return None

        create_type = " ".join(kind_words)
        if create_type == "SCHEMA":
            qualified = QualifiedObject(schema=qualified.name, name=None)
        return ObjectRef(type=self.type, create_type=create_type, object=qualified)

    def _find_declared_reference(self, tokens: list[Token]) -> Optional[ObjectRef]:
        """References for ``DECLARE name ...`` statements.

        Handlers have no name, cursors and conditions are told apart
        from variables by the keyword that follows their name.
        """
        if not tokens or tokens[0].value.upper() in HANDLER_WORDS:
            return None
        if tokens[0].type not in NAME_TOKEN_TYPES:
            return None

        create_type = "VARIABLE"
        for token in tokens[1:]:
            word = token.value.upper()
            if word == "FOR":
                break
            if word in ("CURSOR", "CONDITION"):
                create_type = word
                break

        return ObjectRef(
            type=self.type,
            create_type=create_type,
            object=QualifiedObject(schema=None, name=tokens[0].value),
        )


def read_qualified_name(tokens: list[Token], pos: int) -> Optional[QualifiedObject]:
    """Read a ``name``, ``schema.name`` or ``schema/name`` starting at ``pos``."""
    if pos >= len(tokens) or tokens[pos].type not in NAME_TOKEN_TYPES:
        return None
    first = tokens[pos].value
    if pos + 2 < len(tokens):
        separator, second = tokens[pos + 1], tokens[pos + 2]
        if (
            separator.type == "dot" or separator.matches("operator", "/")
        ) and second.type in NAME_TOKEN_TYPES:
            return QualifiedObject(schema=first, name=second.value)
    return QualifiedObject(schema=None, name=first)


def skip_existence_check(tokens: list[Token], pos: int) -> int:
    """Skip an ``IF EXISTS`` or ``IF NOT EXISTS`` found at ``pos``."""
    words = [t.value.upper() for t in tokens[pos : pos + 3]]
    if words == ["IF", "NOT", "EXISTS"]:
        return pos + 3
    if words[:2] == ["IF", "EXISTS"]:
        return pos + 2
    return pos
