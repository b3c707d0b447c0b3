"""Projection entry points - run the whole engine for one or every channel"""

from datetime import date
from typing import Dict, Iterable, Optional

from runway_ledger.domain.ledger import accumulate_daily_balances
from runway_ledger.domain.models import CHANNELS, LedgerProjection, Transaction
from runway_ledger.domain.runway import calculate_runway, project_funding_needs
from runway_ledger.domain.series import build_daily_series

COMBINED = "combined"


def project_ledger(
    transactions: Iterable[Transaction],
    channel: Optional[str] = None,
    today: date | None = None,
) -> LedgerProjection:
    """
    Main entry point: walk the ledger once and derive runway, needs and series.

    Nothing is cached; every call recomputes from the transactions given.
    """
    if today is None:
        today = date.today()

    walk = accumulate_daily_balances(transactions, channel)
    runway = calculate_runway(walk, today)

    return LedgerProjection(
        channel=channel,
        walk=walk,
        runway=runway,
        funding_needs=project_funding_needs(runway, walk),
        series=build_daily_series(walk),
    )


def project_all_channels(
    transactions: Iterable[Transaction],
    today: date | None = None,
) -> Dict[str, LedgerProjection]:
    """Combined pool plus each channel, every one projected as its own ledger"""
    ledger = list(transactions)
    projections = {COMBINED: project_ledger(ledger, None, today)}
    for channel in CHANNELS:
        projections[channel] = project_ledger(ledger, channel, today)
    return projections
