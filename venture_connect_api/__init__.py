"""
Top‑level package for the Venture Connect API.

This file makes ``venture_connect_api`` a Python package so that
modules within ``app`` can be imported using fully qualified names
like ``venture_connect_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
