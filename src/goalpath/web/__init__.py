"""Web interface for goalpath."""

from .app import create_app

__all__ = ["create_app"]
