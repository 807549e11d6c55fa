"""Shell commands exposing SQLFront functionalities.

This module contains the shell commands that can be used to work with SQL sources
from a terminal or from editors that integrate external tools.

Format
======

``sqlfront-format`` formats SQL read from a file, or from the standard input
when no file is provided::

    sqlfront-format --keyword-case upper --identifier-case upper procedure.sql

It can be used as a filter by editors::

    echo "select a,b from t" | sqlfront-format --keyword-case upper

Outline
=======

``sqlfront-outline`` prints the objects created, altered or declared
by a SQL source::

    sqlfront-outline procedure.sql

"""
