"""Session-based user registration, login and account management."""

from .app import create_app

__all__ = ["create_app"]
