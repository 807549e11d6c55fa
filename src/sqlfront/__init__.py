"""SQLFront

The SQL language front end of an editor integration for
remote SQL execution backends.

SQLFront understands enough of SQL to provide editors with what they
need to work with SQL sources: splitting a script into statements,
finding the statement under the cursor, formatting, and telling
which database objects a script defines or changes.
Running statements, rendering their results and talking to the
database are left to the editor integration itself.

The components are:

* The SQL front end, in :mod:`sqlfront.sql`, which tokenizes, segments,
  formats SQL and extracts symbols from it.
* The command line tools, in :mod:`sqlfront.commands`, which expose
  formatting and outlines to the shell.

For the user guide and code documentation of each component, refer to the
component itself.
"""

from . import sql

__all__ = ("sql",)
