# src/hitboard/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .counter import (
    CounterRow,
    CountsRequest,
    CountsResponse,
    HitRequest,
    HitResponse,
    ResetRequest,
    ResetResponse,
    TopResponse,
)

__all__ = [
    "CounterRow",
    "CountsRequest", "CountsResponse",
    "HitRequest", "HitResponse",
    "ResetRequest", "ResetResponse",
    "TopResponse",
]
