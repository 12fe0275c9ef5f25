"""JSON web API for py-memsim.

This package provides a Flask application that exposes both engines
over HTTP.  It is an **optional** extra — install with::

    pip install py-memsim[web]

The ``create_app`` factory in ``app.py`` serves:

- ``GET /api/strategies`` — the allocation strategy names.
- ``POST /api/allocation`` — run and compare allocation strategies.
- ``POST /api/page-replacement`` — replay a reference string with FIFO.
- ``GET /api/log`` — the audit log of this app instance.
"""
