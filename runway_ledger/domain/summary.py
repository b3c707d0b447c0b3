"""Pool totals and partner contribution breakdowns"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from runway_ledger.domain.ledger import normalize_ledger
from runway_ledger.domain.models import (
    CREDIT,
    DEBIT,
    DECLARED,
    PartnerContribution,
    PoolSummary,
    Transaction,
)


def summarize_pool(
    transactions: Iterable[Transaction],
    channel: Optional[str] = None,
    today: date | None = None,
) -> PoolSummary:
    """
    Total credits and debits for a channel (or both).

    ``balance`` covers the whole ledger including future-dated entries;
    ``balance_to_date`` only counts transactions dated on or before ``today``.
    """
    if today is None:
        today = date.today()

    ledger = normalize_ledger(transactions, channel)

    total_credits = sum((t.amount for t in ledger if t.kind == CREDIT), Decimal("0"))
    total_debits = sum((t.amount for t in ledger if t.kind == DEBIT), Decimal("0"))
    balance_to_date = sum((t.signed_amount for t in ledger if t.date <= today), Decimal("0"))

    return PoolSummary(
        channel=channel,
        total_credits=total_credits,
        total_debits=total_debits,
        balance=total_credits - total_debits,
        balance_to_date=balance_to_date,
    )


def partner_contributions(transactions: Iterable[Transaction]) -> List[PartnerContribution]:
    """
    Sum each partner's credits, split by channel.

    Debits and credits without a partner are ignored. Largest contributor first,
    ties broken by partner id.
    """
    declared: Dict[str, Decimal] = defaultdict(Decimal)
    undeclared: Dict[str, Decimal] = defaultdict(Decimal)

    for txn in transactions:
        if txn.kind != CREDIT or not txn.partner_id:
            continue
        if txn.channel == DECLARED:
            declared[txn.partner_id] += txn.amount
        else:
            undeclared[txn.partner_id] += txn.amount

    contributions = [
        PartnerContribution(partner_id=pid, declared=declared[pid], undeclared=undeclared[pid])
        for pid in set(declared) | set(undeclared)
    ]
    return sorted(contributions, key=lambda c: (-c.total, c.partner_id))
