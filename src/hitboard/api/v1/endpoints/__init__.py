# src/hitboard/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .counters import router as counters_router

__all__ = ["counters_router"]
