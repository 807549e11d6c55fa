"""Derive symbols and object references from the statements of a document.

Editors need to know what a SQL source defines, to show an outline
of the document, to jump to definitions and to know when metadata
they might have cached about database objects became stale.

* :func:`get_symbols` provides the outline of a document, one symbol
  for each object created or declared. Statements that are part of the
  body of an object, like the variables declared in a procedure,
  are children of the symbol of the object.
* :func:`references_table` provides all the object references of a document
  as a :class:`pyarrow.RecordBatch`, so that they can be rendered or
  exported like any other tabular data.
* :func:`changed_objects` provides the names of the objects that the
  document creates or alters, those are the objects whose cached
  metadata should be discarded after the document is executed.
"""

from dataclasses import dataclass, field
from typing import Optional

import pyarrow as pa

from .document import Document
from .keywords import StatementType
from .statement import Statement
from .tokenize import Range

SYMBOL_KINDS = {
    StatementType.Create: "file",
    StatementType.Declare: "variable",
}

REFERENCES_SCHEMA = pa.schema(
    [
        pa.field("statement", pa.string()),
        pa.field("create_type", pa.string()),
        pa.field("schema", pa.string()),
        pa.field("name", pa.string()),
        pa.field("start", pa.int64()),
        pa.field("end", pa.int64()),
    ]
)


@dataclass
class Symbol:
    """An entry of the outline of a document."""

    name: str
    detail: str
    kind: str
    range: Range
    children: list["Symbol"] = field(default_factory=list)


def get_symbols(document: Document) -> list[Symbol]:
    """The outline of the document.

    Groups made of multiple statements produce a single symbol, the one
    of their first statement, with the symbols of the other statements
    as its children. When the first statement defines nothing, like
    an anonymous ``BEGIN``, the symbols of the other statements are
    provided at the top level.
    """
    symbols = []
    for group in document.get_statement_groups():
        head = symbols_for_statements(group.statements[:1])
        children = symbols_for_statements(group.statements[1:])
        if head:
            head[0].children = children
            symbols.append(head[0])
        else:
            symbols.extend(children)
    return symbols


def symbols_for_statements(statements: list[Statement]) -> list[Symbol]:
    """One symbol for each statement that creates or declares an object."""
    symbols = []
    for statement in statements:
        kind = SYMBOL_KINDS.get(statement.type)
        references = statement.get_object_references()
        if kind is None or not references:
            continue
        ref = references[0]
        symbols.append(
            Symbol(
                name=ref.object.name or ref.object.schema or statement.type.value,
                detail=ref.create_type,
                kind=kind,
                range=statement.range,
            )
        )
    return symbols


def references_table(document: Document) -> pa.RecordBatch:
    """All the object references of the document, one row each.

    The columns are ``statement``, ``create_type``, ``schema``, ``name``
    and the ``start`` and ``end`` offsets of the statement.
    """
    columns: dict[str, list] = {name: [] for name in REFERENCES_SCHEMA.names}
    for statement in document.statements:
        for ref in statement.get_object_references():
            columns["statement"].append(ref.type.value)
            columns["create_type"].append(ref.create_type)
            columns["schema"].append(ref.object.schema)
            columns["name"].append(ref.object.name)
            columns["start"].append(statement.range.start)
            columns["end"].append(statement.range.end)
    return pa.RecordBatch.from_pydict(columns, schema=REFERENCES_SCHEMA)


def normalize_name(value: str) -> str:
    """The name as the database would store it.

    Ordinary names are folded to uppercase, delimited names lose their
    quotes and keep their case.

    >>> normalize_name("employee")
    'EMPLOYEE'
    >>> normalize_name('"Employee"')
    'Employee'
    """
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1].replace('""', '"')
    return value.upper()


def changed_object_key(statement: Statement) -> Optional[str]:
    """The name of the object created or altered by the statement, if any.

    Creating a schema changes the schema itself, so only the schema name
    is returned, otherwise the name is qualified by its schema when
    the statement provides one, like ``SCHEMA.NAME``.
    """
    if statement.type not in (StatementType.Create, StatementType.Alter):
        return None
    references = statement.get_object_references()
    if not references:
        return None

    ref = references[0]
    if ref.create_type == "SCHEMA":
        return normalize_name(ref.object.schema) if ref.object.schema else None
    if ref.object.name is None:
        return None
    name = normalize_name(ref.object.name)
    if ref.object.schema:
        return f"{normalize_name(ref.object.schema)}.{name}"
    return name


def changed_objects(document: Document) -> set[str]:
    """The names of all objects created or altered by the document."""
    keys = (changed_object_key(statement) for statement in document.statements)
    return {key for key in keys if key}
