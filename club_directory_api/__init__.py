"""
Top‑level package for the Club Directory API.

This file makes ``club_directory_api`` a Python package so that
modules within ``app`` can be imported using fully qualified names
like ``club_directory_api.app.main``.  The seed dataset shipped with
the service lives in the ``data`` directory next to this file.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
