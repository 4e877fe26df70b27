"""Browser-based web UI for Stellar Terminal.

This package provides a Flask application that puts one terminal
session in a browser tab.  It is an **optional** extra — install with::

    pip install stellar-term[web]

The ``create_app`` factory in ``app.py`` starts a session and serves:

- ``GET /`` — HTML terminal page.
- ``POST /api/execute`` — run a line and return the new scrollback records.
- ``POST /api/complete`` — tab-complete the input line.
- ``POST /api/history`` — up/down arrow navigation.
- ``POST /api/interrupt`` — Ctrl+C at the prompt.
- ``POST /api/clear`` — empty the scrollback (Ctrl+L).
- ``POST /api/theme`` — cycle the colour theme.
- ``GET /api/status`` — running flag, working directory, and theme.
"""
