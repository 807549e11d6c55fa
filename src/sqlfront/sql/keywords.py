"""Keyword tables used to classify words found in SQL text.

The tokenizer decides if a bare word is a generic ``word``, a
``statementType`` keyword (one that can govern a statement, like ``SELECT``
or ``CREATE``) or a ``clause`` keyword (one that introduces a clause inside
a statement, like ``WHERE``).

The lookup is case insensitive, tables are keyed by the uppercase word.
The tables are only read after import, so they can be shared by any
number of tokenizers and documents at the same time.
"""

import enum


class StatementType(enum.Enum):
    """The classification of a statement, derived from its governing keyword."""

    Unknown = "Unknown"
    Create = "Create"
    Insert = "Insert"
    Select = "Select"
    With = "With"
    Update = "Update"
    Delete = "Delete"
    Declare = "Declare"
    Begin = "Begin"
    Drop = "Drop"
    End = "End"
    Else = "Else"
    Elseif = "Elseif"
    Call = "Call"
    Alter = "Alter"
    Fetch = "Fetch"
    For = "For"
    Get = "Get"
    Goto = "Goto"
    If = "If"
    Include = "Include"
    Iterate = "Iterate"
    Leave = "Leave"
    Loop = "Loop"
    Merge = "Merge"
    Open = "Open"
    Close = "Close"
    Pipe = "Pipe"
    Repeat = "Repeat"
    Resignal = "Resignal"
    Return = "Return"
    Signal = "Signal"
    Set = "Set"
    While = "While"
    Values = "Values"
    Grant = "Grant"
    Revoke = "Revoke"
    Commit = "Commit"
    Rollback = "Rollback"
    Rename = "Rename"
    Truncate = "Truncate"


#: Words that can govern a statement, mapped to the statement type they imply.
STATEMENT_TYPE_WORDS: dict[str, StatementType] = {
    statement_type.value.upper(): statement_type
    for statement_type in StatementType
    if statement_type is not StatementType.Unknown
}

#: Words that introduce a clause within a statement.
CLAUSE_WORDS: frozenset[str] = frozenset(
    {
        "WHERE",
        "GROUP",
        "HAVING",
        "ORDER",
        "LIMIT",
        "OFFSET",
        "UNION",
        "INTERSECT",
        "EXCEPT",
    }
)

#: Words closing a conditional body when they follow ``END``.
CONDITION_END_WORDS: frozenset[str] = frozenset(
    {"IF", "WHILE", "FOR", "LOOP", "REPEAT"}
)


def statement_type_of(word: str) -> StatementType:
    """Look up the statement type governed by ``word``.

    >>> statement_type_of("select")
    <StatementType.Select: 'Select'>
    >>> statement_type_of("mytable")
    <StatementType.Unknown: 'Unknown'>
    """
    return STATEMENT_TYPE_WORDS.get(word.upper(), StatementType.Unknown)


def is_clause_word(word: str) -> bool:
    """Tell if ``word`` introduces a clause."""
    return word.upper() in CLAUSE_WORDS
