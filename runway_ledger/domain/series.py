"""Gap-filled daily balance series for charting"""

from datetime import date
from decimal import Decimal
from typing import Dict, Sequence

from runway_ledger.domain.models import DailyBalancePoint, DailySeries, DayBalance
from runway_ledger.utils.date_utils import generate_date_range


def build_daily_series(walk: Sequence[DayBalance]) -> DailySeries:
    """
    Expand the day-walk into one point per calendar day.

    Requirements:
    - Every day from first to last walk date inclusive
    - Days without transactions carry the previous balance forward (no interpolation)
    - Extrema always include zero, the "pool empty" reference line
    """
    if not walk:
        return DailySeries()

    balance_by_date: Dict[date, Decimal] = {day.date: day.balance for day in walk}

    points = []
    last_known_balance = Decimal("0")
    for day in generate_date_range(walk[0].date, walk[-1].date):
        had_activity = day in balance_by_date
        if had_activity:
            last_known_balance = balance_by_date[day]
        points.append(DailyBalancePoint(date=day, balance=last_known_balance, had_activity=had_activity))

    balances = [p.balance for p in points]
    return DailySeries(
        points=points,
        min_balance=min(min(balances), Decimal("0")),
        max_balance=max(max(balances), Decimal("0")),
    )
