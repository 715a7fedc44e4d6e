"""Flask application modules: app factory, routes, error handlers and profile storage."""

from .app_factory import create_app

__all__ = ['create_app']
