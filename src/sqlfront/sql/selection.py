"""Find the statement that the user wants to run.

When running SQL from an editor, what gets executed is either
the selected text, or the statement group under the cursor when
nothing is selected.

The content can start with a qualifier that tells how to run it
or what to do with its results, like ``json: SELECT * FROM T``
to get the results as JSON, or ``cl: WRKACTJOB`` to run it as
a command instead of SQL. The qualifier is removed from the content
and provided separately, ``statement`` being the default.
"""

from dataclasses import dataclass
from typing import Optional

from .document import Document
from .keywords import StatementType
from .statement import ObjectRef, Statement
from .symbols import normalize_name
from .tokenize import Range

QUALIFIERS = ("cl", "json", "csv", "sql")


@dataclass
class StatementInfo:
    """What should be run, and how."""

    qualifier: str
    content: str
    type: Optional[StatementType] = None
    refs: Optional[list[ObjectRef]] = None
    range: Optional[Range] = None


def parse_statement(
    text: str,
    offset: Optional[int] = None,
    selection: Optional[tuple[int, int]] = None,
) -> StatementInfo:
    """Detect the statement to run in ``text``.

    :param text: The whole text of the document.
    :param offset: Position of the cursor, used when nothing is selected.
    :param selection: ``(start, end)`` offsets of the selected text, if any.
    """
    content = ""
    statement_type = None
    refs = None
    content_range = None

    if selection is not None:
        start, end = selection
        if text[start:end].strip():
            content = text[start:end].strip()
            content_range = Range(start, end)

    if not content and offset is not None:
        group = Document(text).get_group_by_offset(offset)
        if group is not None:
            statement_type = group.statements[0].type
            refs = group.statements[0].get_object_references()
            content = text[group.range.start : group.range.end]
            content_range = group.range

    qualifier = "statement"
    for mode in QUALIFIERS:
        if content.lower().startswith(mode + ":"):
            content = content[len(mode) + 1 :].strip()
            qualifier = mode
            break

    return StatementInfo(
        qualifier=qualifier,
        content=content,
        type=statement_type,
        refs=refs,
        range=content_range,
    )


def schema_change(statement: Statement) -> Optional[str]:
    """The schema that a ``SET [CURRENT] SCHEMA [=] name`` statement switches to.

    Returns ``None`` for any other statement.
    """
    if statement.type is not StatementType.Set:
        return None

    tokens = statement.significant_tokens
    pos = 1
    if pos < len(tokens) and tokens[pos].value.upper() == "CURRENT":
        pos += 1
    if pos >= len(tokens) or tokens[pos].value.upper() not in (
        "SCHEMA",
        "CURRENT_SCHEMA",
    ):
        return None
    pos += 1
    if pos < len(tokens) and tokens[pos].type == "equal":
        pos += 1
    if pos >= len(tokens):
        return None

    value = tokens[pos]
    if value.type == "string":
        return value.value[1:-1].replace("''", "'")
    return normalize_name(value.value)
