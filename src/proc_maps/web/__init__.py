"""Browser-facing web API for proc-maps.

This package provides a Flask application that serves maps files over
HTTP.  It is an **optional** extra — install with::

    pip install proc-maps[web]

The ``create_app`` factory in ``app.py`` serves these endpoints:

- ``GET /api/maps/<pid>`` — parsed regions as JSON.
- ``GET /maps/<pid>`` — the canonical maps text.
- ``POST /api/parse`` — parse posted maps text into regions.
- ``POST /api/format`` — format posted regions into maps text.
- ``GET /api/log`` — file events, filtered by ``min_level``/``source``.
"""
