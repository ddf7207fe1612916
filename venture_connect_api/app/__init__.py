"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Each domain (users, collaboration requests, messages,
connections) has its own schema module, service and router under
``api/v1/endpoints``.  Persistence lives in ``storage`` behind a
single ``Store`` interface so the in‑memory and SQLite backends are
interchangeable.
"""

from .main import app  # noqa: F401
