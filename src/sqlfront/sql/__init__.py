"""The SQL language front end.

This package understands the structure of SQL sources well enough
to split them into statements, format them and tell what they define.
It doesn't validate SQL, doesn't resolve objects against a catalog
and doesn't execute anything, those are concerns of the database.

The work is done by a pipeline of components, each one only
relying on the previous ones:

1. Tokenizer
2. Block Builder
3. Statement Segmenter (Document)
4. Formatter
5. Symbols and References

To format a SQL text you would typically just use :func:`format_sql`::

    sql = "create table t (id int, name varchar(50))"
    print(format_sql(sql, FormatOptions(keyword_case="upper", identifier_case="upper")))

which would print::

    CREATE TABLE T(
        ID INT,
        NAME VARCHAR(50)
    );

The :class:`sqlfront.sql.tokenize.Tokenizer` converts the text into a
list of tokens, keywords, identifiers, literals, punctuation and comments.
Each token remembers where it was found in the source, so that results
can be mapped back to the text, for example to highlight a statement
in an editor.

The :func:`sqlfront.sql.blocks.create_blocks` function turns the flat
list of tokens into a tree, where each parenthesized span becomes a single
block token that owns the tokens within the parentheses.

The :class:`sqlfront.sql.document.Document` splits the tokens of a whole
text into :class:`sqlfront.sql.statement.Statement` objects and
arranges them into groups, so that for example the statements
that make up the body of a procedure belong to the group of the
``CREATE PROCEDURE`` statement::

    doc = Document(sql)
    group = doc.get_group_by_offset(cursor)
    statement = group.statements[0]
    print(statement.type, statement.get_object_references())

The :class:`sqlfront.sql.formatter.Formatter` re-emits the statements
of a document as indented text, with keywords and identifiers in the
requested case.

The :mod:`sqlfront.sql.symbols` module derives the outline of a document
and the database objects that it creates or changes, while
:mod:`sqlfront.sql.selection` finds the statement to run for a cursor
position or selection.
"""

from .blocks import SQLStructureError, UnbalancedParensError, create_blocks
from .document import Document, StatementGroup
from .formatter import FormatOptions, Formatter, MalformedBlockTokenError, format_sql
from .keywords import StatementType
from .selection import StatementInfo, parse_statement, schema_change
from .statement import ObjectRef, QualifiedObject, Statement
from .symbols import changed_objects, get_symbols, references_table
from .tokenize import Token, Tokenizer, tokenize

__all__ = (
    "Document",
    "FormatOptions",
    "Formatter",
    "MalformedBlockTokenError",
    "ObjectRef",
    "QualifiedObject",
    "SQLStructureError",
    "Statement",
    "StatementGroup",
    "StatementInfo",
    "StatementType",
    "Token",
    "Tokenizer",
    "UnbalancedParensError",
    "changed_objects",
    "create_blocks",
    "format_sql",
    "get_symbols",
    "parse_statement",
    "references_table",
    "schema_change",
    "tokenize",
)
