# src/hitboard/api/v1/endpoints/counters.py
"""Hit, count, leaderboard and reset endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Header, Query
from sqlalchemy.orm import Session

from hitboard.core.settings import settings
from hitboard.db.session import get_db
from hitboard.schemas.counter import (
    CountsRequest,
    CountsResponse,
    HitRequest,
    HitResponse,
    ResetRequest,
    ResetResponse,
    TopResponse,
)
from hitboard.services.admin_guard import AdminGuard
from hitboard.services.counter_service import CounterService
from hitboard.services.sanitize import normalize_kind

router = APIRouter(tags=["counters"])


def get_admin_guard() -> AdminGuard:
    """Return a guard bound to the configured admin secret."""
    return AdminGuard(settings.admin_token)


SessionDep = Annotated[Session, Depends(get_db)]
AdminGuardDep = Annotated[AdminGuard, Depends(get_admin_guard)]


def get_counter_service(db: SessionDep, guard: AdminGuardDep) -> CounterService:
    """Build the counter façade for the request's session."""
    return CounterService(db, guard=guard)


CounterServiceDep = Annotated[CounterService, Depends(get_counter_service)]


@router.post("/hit", response_model=HitResponse)
async def record_hit(body: HitRequest, service: CounterServiceDep) -> HitResponse:
    """Count one play or download and return the item's new total."""
    row = service.hit(body.kind, body.id, title=body.title, file_name=body.file_name)
    return HitResponse.model_validate(row)


@router.post("/counts", response_model=CountsResponse)
async def bulk_counts(body: CountsRequest, service: CounterServiceDep) -> CountsResponse:
    """Return counts for up to the configured number of ids; unknown ids are 0."""
    kind = normalize_kind(body.kind, allow_both=True)
    ids = body.ids if isinstance(body.ids, list) else []
    counts = service.bulk_counts(kind, ids)
    return CountsResponse(kind=kind, counts=counts)


@router.get("/top", response_model=TopResponse)
async def top_page(
    service: CounterServiceDep,
    metric: Annotated[str | None, Query(alias="type")] = None,
    limit: Annotated[str | None, Query()] = None,
    cursor: Annotated[str | None, Query()] = None,
) -> TopResponse:
    """Return one page of the play or download leaderboard.

    Results reflect the ranking at request time; pages fetched while hits are
    landing may repeat or skip an item at a page boundary.
    """
    page = service.top_page(metric, limit, cursor)
    return TopResponse.model_validate(
        {
            "type": page.metric,
            "limit": page.limit,
            "cursor": page.next_cursor,
            "rows": page.rows,
        }
    )


@router.post("/reset", response_model=ResetResponse)
async def reset_counters(
    service: CounterServiceDep,
    x_admin_token: Annotated[str | None, Header()] = None,
    body: ResetRequest | None = None,
) -> ResetResponse:
    """Delete one counter or every counter. Requires the admin token header."""
    payload = body or ResetRequest()
    result = service.reset(x_admin_token, payload.mode, payload.id)
    return ResetResponse.model_validate(result)
