"""Browser-facing JSON API for py-memfs.

This package provides a Flask application that exposes the file system
shell over HTTP.  It is an **optional** extra — install with::

    pip install py-memfs[web]

The ``create_app`` factory in ``app.py`` creates a file system, wraps
it in a shell, and serves two endpoints:

- ``POST /api/execute`` — execute a shell command and return JSON.
- ``GET /api/status`` — current user and known users.
"""
