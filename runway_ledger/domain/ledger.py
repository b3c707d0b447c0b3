"""Ledger normalization and the running-balance day-walk"""

from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, List, Optional

from runway_ledger.domain.exceptions import InvalidDateError, InvalidTransactionDataError
from runway_ledger.domain.models import CHANNELS, DayBalance, Transaction


def _ordering_date(txn: Transaction) -> date:
    # datetime is a date subclass but does not compare against plain dates
    if not isinstance(txn.date, date) or isinstance(txn.date, datetime):
        raise InvalidDateError(f"Transaction {txn.transaction_id} has unorderable date {txn.date!r}")
    return txn.date


def normalize_ledger(
    transactions: Iterable[Transaction],
    channel: Optional[str] = None,
) -> List[Transaction]:
    """
    Filter by channel and sort chronologically.

    Requirements:
    - Date ascending; same-date entries keep their input order (stable sort)
    - Only the channel filter drops transactions; None means both channels
    - Unorderable dates raise InvalidDateError instead of being skipped
    """
    if channel is not None and channel not in CHANNELS:
        raise InvalidTransactionDataError(f"Unknown channel filter: {channel!r}")

    selected = [t for t in transactions if channel is None or t.channel == channel]
    return sorted(selected, key=_ordering_date)


def accumulate_daily_balances(
    transactions: Iterable[Transaction],
    channel: Optional[str] = None,
) -> List[DayBalance]:
    """
    Build the day-walk: one cumulative balance per distinct transaction date.

    Starting balance is zero. All of a day's transactions are applied before
    the balance is recorded, so a day never yields intermediate entries.
    """
    walk: List[DayBalance] = []
    balance = Decimal("0")
    current_date: Optional[date] = None
    day_change = Decimal("0")
    day_count = 0

    for txn in normalize_ledger(transactions, channel):
        if txn.date != current_date:
            if current_date is not None:
                walk.append(DayBalance(current_date, balance, day_change, day_count))
            current_date = txn.date
            day_change = Decimal("0")
            day_count = 0

        balance += txn.signed_amount
        day_change += txn.signed_amount
        day_count += 1

    if current_date is not None:
        walk.append(DayBalance(current_date, balance, day_change, day_count))

    return walk
