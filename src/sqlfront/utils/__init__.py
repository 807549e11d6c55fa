"""Helpers shared by the command line tools.

Utilities that are not about SQL itself, like rendering
tabular data for the terminal, live here so that the
:mod:`sqlfront.sql` package stays focused on the language.
"""

from . import tabulate

__all__ = ("tabulate",)
