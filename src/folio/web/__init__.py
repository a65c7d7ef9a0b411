"""HTTP surface over the content store."""

from .app import create_app

__all__ = ["create_app"]
