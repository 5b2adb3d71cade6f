"""HTTP API for SheetTrace."""

from .app import create_app

__all__ = ["create_app"]
