"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules: configuration and logging live in ``core``, request and
response models in ``schemas``, the member store and query engine in
``services`` and the HTTP routes in ``api/v1/endpoints``.
"""

from .main import app  # noqa: F401
