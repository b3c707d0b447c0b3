"""Runway calculation and post-exhaustion funding needs"""

from datetime import date
from typing import Iterable, List, Optional, Sequence

from runway_ledger.domain.ledger import accumulate_daily_balances
from runway_ledger.domain.models import DayBalance, FundingNeed, RunwayResult, Transaction

UNBOUNDED = RunwayResult(is_bounded=False)


def calculate_runway(walk: Sequence[DayBalance], today: date) -> RunwayResult:
    """
    Find the first day the pool's post-day balance drops below zero.

    Requirements:
    - Empty walk or a walk that never goes negative is unbounded (not an error)
    - Exhaustion is judged on each day's net balance, never mid-day
    - days_remaining counts from ``today``; negative means exhausted in the past

    A ledger without debits can never go negative, so it falls out of the
    scan as unbounded.
    """
    for day in walk:
        if day.balance < 0:
            return RunwayResult(
                is_bounded=True,
                exhaustion_date=day.date,
                days_remaining=(day.date - today).days,
                amount_short=abs(day.balance),
            )

    return UNBOUNDED


def runway_for_ledger(
    transactions: Iterable[Transaction],
    channel: Optional[str],
    today: date,
) -> RunwayResult:
    """Runway of one channel (or both when channel is None) straight from raw transactions"""
    return calculate_runway(accumulate_daily_balances(transactions, channel), today)


def project_funding_needs(runway: RunwayResult, walk: Sequence[DayBalance]) -> List[FundingNeed]:
    """
    Schedule the top-ups needed after the pool first runs dry.

    Only days strictly after the exhaustion date are considered: the
    exhaustion day's shortfall is already ``runway.amount_short``. Each later
    day with a negative balance yields one need of ``abs(balance)``; days that
    recover to zero or above yield nothing.
    """
    if not runway.is_bounded:
        return []

    return [
        FundingNeed(date=day.date, amount_needed=abs(day.balance))
        for day in walk
        if day.date > runway.exhaustion_date and day.balance < 0
    ]
