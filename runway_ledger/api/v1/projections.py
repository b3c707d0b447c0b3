"""Runway, funding-need, balance-series and summary endpoints"""

import time
import logging
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from runway_ledger.api.v1.schemas import (
    BalanceSeriesResponse,
    Channel,
    DailySeriesSchema,
    DayBalanceSchema,
    FundingNeedSchema,
    FundingNeedsResponse,
    PoolSummarySchema,
    ProjectionResponse,
    RunwayOverviewResponse,
    RunwayResponse,
    RunwaySchema,
    SummaryResponse,
)
from runway_ledger.api.dependencies import get_as_of, get_request_id
from runway_ledger.infrastructure.database.session import get_db
from runway_ledger.infrastructure.database.repositories import TransactionRepository
from runway_ledger.infrastructure.observability.metrics import projection_duration_histogram, record_projection
from runway_ledger.infrastructure.observability.logging import log_projection
from runway_ledger.domain.exceptions import DomainException
from runway_ledger.domain.ledger import accumulate_daily_balances
from runway_ledger.domain.models import DECLARED, UNDECLARED, LedgerProjection, Transaction
from runway_ledger.domain.projection import COMBINED, project_all_channels, project_ledger
from runway_ledger.domain.series import build_daily_series
from runway_ledger.domain.summary import summarize_pool

router = APIRouter()


def _load_ledger(db: Session, owner_id: str, request_id: str) -> List[Transaction]:
    try:
        return TransactionRepository(db).load_ledger(owner_id)
    except DomainException as e:
        # Stored rows that no longer satisfy the domain invariants
        logging.error(f"Corrupt ledger for {owner_id}: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))


def _project(
    db: Session,
    owner_id: str,
    channel: Optional[str],
    as_of: date,
    request_id: str,
) -> LedgerProjection:
    """
    Load the owner's ledger and run the engine for one channel filter.

    Flow:
    1. Fetch every transaction for the owner
    2. Project (normalize, walk, runway, funding needs, series)
    3. Record metrics and a structured log line
    """
    start_time = time.perf_counter()

    ledger = _load_ledger(db, owner_id, request_id)
    with projection_duration_histogram.time():
        projection = project_ledger(ledger, channel, as_of)

    _observe(projection, owner_id, request_id, (time.perf_counter() - start_time) * 1000)
    return projection


def _observe(projection: LedgerProjection, owner_id: str, request_id: str, duration_ms: float) -> None:
    record_projection(projection.channel, projection.runway.is_bounded)
    log_projection(
        request_id,
        owner_id,
        projection.channel,
        projection.runway.is_bounded,
        projection.runway.days_remaining,
        duration_ms,
    )


@router.get("/projection", response_model=ProjectionResponse)
def get_projection(
    request: Request,
    owner_id: str = Query(..., min_length=1, description="Ledger owner identifier"),
    channel: Optional[Channel] = Query(None, description="declared, undeclared, or omit for the combined pool"),
    as_of: date = Depends(get_as_of),
    db: Session = Depends(get_db),
):
    """Everything derived from the ledger for one pool in a single call"""
    projection = _project(db, owner_id, channel, as_of, get_request_id(request))

    return ProjectionResponse(
        owner_id=owner_id,
        channel=channel or COMBINED,
        as_of=as_of,
        runway=RunwaySchema.from_domain(projection.runway),
        funding_needs=[FundingNeedSchema.from_domain(n) for n in projection.funding_needs],
        walk=[DayBalanceSchema.from_domain(d) for d in projection.walk],
        series=DailySeriesSchema.from_domain(projection.series),
    )


@router.get("/runway", response_model=RunwayResponse)
def get_runway(
    request: Request,
    owner_id: str = Query(..., min_length=1, description="Ledger owner identifier"),
    channel: Optional[Channel] = Query(None, description="declared, undeclared, or omit for the combined pool"),
    as_of: date = Depends(get_as_of),
    db: Session = Depends(get_db),
):
    """
    Days until the pool's balance first goes negative.

    A negative ``days_remaining`` means the pool ran dry that many days ago.
    An unbounded runway (no exhaustion ever) is a normal 200 response.
    """
    projection = _project(db, owner_id, channel, as_of, get_request_id(request))
    return RunwayResponse(
        owner_id=owner_id,
        channel=channel or COMBINED,
        as_of=as_of,
        runway=RunwaySchema.from_domain(projection.runway),
    )


@router.get("/runway/overview", response_model=RunwayOverviewResponse)
def get_runway_overview(
    request: Request,
    owner_id: str = Query(..., min_length=1, description="Ledger owner identifier"),
    as_of: date = Depends(get_as_of),
    db: Session = Depends(get_db),
):
    """Runway of the combined pool and of each channel on its own"""
    request_id = get_request_id(request)
    start_time = time.perf_counter()

    ledger = _load_ledger(db, owner_id, request_id)
    with projection_duration_histogram.time():
        projections = project_all_channels(ledger, as_of)

    duration_ms = (time.perf_counter() - start_time) * 1000
    for projection in projections.values():
        _observe(projection, owner_id, request_id, duration_ms)

    return RunwayOverviewResponse(
        owner_id=owner_id,
        as_of=as_of,
        combined=RunwaySchema.from_domain(projections[COMBINED].runway),
        declared=RunwaySchema.from_domain(projections[DECLARED].runway),
        undeclared=RunwaySchema.from_domain(projections[UNDECLARED].runway),
    )


@router.get("/funding-needs", response_model=FundingNeedsResponse)
def get_funding_needs(
    request: Request,
    owner_id: str = Query(..., min_length=1, description="Ledger owner identifier"),
    channel: Optional[Channel] = Query(None, description="declared, undeclared, or omit for the combined pool"),
    as_of: date = Depends(get_as_of),
    db: Session = Depends(get_db),
):
    """
    Top-ups needed on each ledger date after the exhaustion date.

    The exhaustion day's own shortfall is in ``runway.amount_short`` and is
    not repeated in ``funding_needs``.
    """
    projection = _project(db, owner_id, channel, as_of, get_request_id(request))
    return FundingNeedsResponse(
        owner_id=owner_id,
        channel=channel or COMBINED,
        as_of=as_of,
        runway=RunwaySchema.from_domain(projection.runway),
        funding_needs=[FundingNeedSchema.from_domain(n) for n in projection.funding_needs],
    )


@router.get("/balance-series", response_model=BalanceSeriesResponse)
def get_balance_series(
    request: Request,
    owner_id: str = Query(..., min_length=1, description="Ledger owner identifier"),
    channel: Optional[Channel] = Query(None, description="declared, undeclared, or omit for the combined pool"),
    db: Session = Depends(get_db),
):
    """
    One balance per calendar day between the first and last transaction.

    Independent of ``as_of``: no runway is computed, so nothing is recorded
    as a projection.
    """
    ledger = _load_ledger(db, owner_id, get_request_id(request))
    series = build_daily_series(accumulate_daily_balances(ledger, channel))
    return BalanceSeriesResponse(
        owner_id=owner_id,
        channel=channel or COMBINED,
        series=DailySeriesSchema.from_domain(series),
    )


@router.get("/summary", response_model=SummaryResponse)
def get_summary(
    request: Request,
    owner_id: str = Query(..., min_length=1, description="Ledger owner identifier"),
    as_of: date = Depends(get_as_of),
    db: Session = Depends(get_db),
):
    """Credits, debits and balances for the combined pool and each channel"""
    ledger = _load_ledger(db, owner_id, get_request_id(request))
    return SummaryResponse(
        owner_id=owner_id,
        as_of=as_of,
        combined=PoolSummarySchema.from_domain(summarize_pool(ledger, None, as_of)),
        declared=PoolSummarySchema.from_domain(summarize_pool(ledger, DECLARED, as_of)),
        undeclared=PoolSummarySchema.from_domain(summarize_pool(ledger, UNDECLARED, as_of)),
    )
