"""
Application package initializer.

``main`` assembles the FastAPI application; ``core`` holds settings,
logging and access control; ``schemas`` and ``services`` hold the
reference value model and its store; ``api`` holds the routes.
"""

from .main import app, create_app  # noqa: F401
