"""Browser-based web UI for py-term.

This package provides a Flask application that exposes a shell session
through a web browser.  It is an **optional** extra — install with::

    pip install py-term[web]

The ``create_app`` factory in ``app.py`` starts a shell and serves:

- ``GET /`` — HTML terminal page.
- ``POST /api/input`` — raw keystrokes in, terminal output out.
- ``POST /api/execute`` — run a command line and return JSON.
- ``GET /api/status`` — user, working directory and last exit code.
"""
