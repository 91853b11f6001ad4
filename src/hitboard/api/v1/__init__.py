# src/hitboard/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import counters_router

__all__ = ["counters_router"]
