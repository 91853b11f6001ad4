# src/hitboard/schemas/counter.py
"""Counter-related Pydantic schemas.

Request fields are typed loosely on purpose: values are validated and clamped
by the sanitizer so clients get the documented 400 messages instead of
generic schema errors.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class HitRequest(BaseModel):
    """Schema for recording a single play or download."""

    model_config = ConfigDict(populate_by_name=True)

    kind: Any = Field(None, alias="type", description='"play" or "download"')
    id: Any = Field(None, description="Item identifier")
    title: Any = Field(None, description="Optional display title")
    file_name: Any = Field(None, description="Optional file name")


class CountsRequest(BaseModel):
    """Schema for a bulk count lookup."""

    model_config = ConfigDict(populate_by_name=True)

    kind: Any = Field(None, alias="type", description='"play", "download" or "both"')
    ids: Any = Field(default_factory=list, description="Item identifiers; capped and deduplicated")


class ResetRequest(BaseModel):
    """Schema for an admin reset."""

    mode: Any = Field(None, description='"all" or "id"')
    id: Any = Field(None, description='Item identifier when mode is "id"')


class CounterRow(BaseModel):
    """One counter as seen through a single metric."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str = ""
    file_name: str = ""
    kind: str = Field(..., alias="type")
    count: int
    updated_at: int = Field(..., alias="updatedAt")


class HitResponse(CounterRow):
    """Counter state returned after a hit."""

    ok: bool = True


class CountsResponse(BaseModel):
    """Bulk lookup result."""

    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    kind: str = Field(..., alias="type")
    counts: dict[str, Any]


class TopResponse(BaseModel):
    """One leaderboard page; ``cursor`` is the cursor for the next page."""

    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    kind: str = Field(..., alias="type")
    limit: int
    cursor: str | None = None
    rows: list[CounterRow]


class ResetResponse(BaseModel):
    """Outcome of an admin reset."""

    ok: bool = True
    mode: str
    id: str | None = None
    deleted: int
