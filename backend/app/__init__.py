"""FastAPI application package for the sales tracker."""

from __future__ import annotations


def get_app():
    """Return the FastAPI application without importing it eagerly."""

    from .main import app as fastapi_app

    return fastapi_app


__all__ = ["get_app"]
