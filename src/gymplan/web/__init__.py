"""Web interface for gymplan."""

from .app import create_app

__all__ = ["create_app"]
