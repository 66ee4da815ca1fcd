# flask_app/routes/__init__.py
"""
Application routes package
"""

from .api import register_api_routes


def init_routes(app):
    """Initialize all application routes"""
    register_api_routes(app)
