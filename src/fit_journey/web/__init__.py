"""Web interface for fit-journey."""

from .app import create_app

__all__ = ["create_app"]
