"""Stellar Terminal — a simulated Unix-like terminal.

A ``Session`` interprets one line at a time against an in-memory file
system and a table of built-in commands.  Front ends live beside it:
``stellar_term.repl`` for a real terminal and ``stellar_term.web`` for
a browser tab.
"""

__version__ = "1.1.0"
