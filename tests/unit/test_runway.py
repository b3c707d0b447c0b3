"""Unit tests for runway calculation and funding-need projection"""

from datetime import date, timedelta
from decimal import Decimal
from runway_ledger.domain.ledger import accumulate_daily_balances
from runway_ledger.domain.models import FundingNeed
from runway_ledger.domain.runway import calculate_runway, project_funding_needs, runway_for_ledger

DAY1 = date(2025, 1, 10)


def day(n: int) -> date:
    return DAY1 + timedelta(days=n - 1)


def test_runway_empty_ledger_unbounded():
    runway = calculate_runway([], today=DAY1)

    assert runway.is_bounded is False
    assert runway.exhaustion_date is None
    assert runway.days_remaining is None
    assert runway.amount_short == 0
    assert runway.is_exhausted is False


def test_runway_only_credits_unbounded(make_txn):
    ledger = [make_txn("credit", 100, 1), make_txn("credit", 50, 4)]

    runway = runway_for_ledger(ledger, None, today=DAY1)

    assert runway.is_bounded is False
    assert runway.amount_short == 0


def test_runway_debits_never_below_zero_unbounded(make_txn):
    """Balance touching exactly zero is not exhaustion"""
    ledger = [make_txn("credit", 100, 1), make_txn("debit", 60, 2), make_txn("debit", 40, 3)]

    runway = runway_for_ledger(ledger, None, today=DAY1)

    assert runway.is_bounded is False


def test_runway_exhaustion_scenario(exhausting_ledger):
    """100, 70, -20 -> exhausted on day 3, 20 short"""
    runway = runway_for_ledger(exhausting_ledger, None, today=DAY1)

    assert runway.is_bounded is True
    assert runway.exhaustion_date == day(3)
    assert runway.amount_short == Decimal("20")
    assert runway.days_remaining == 2
    assert runway.is_exhausted is False


def test_runway_days_remaining_negative_when_exhausted_in_past(exhausting_ledger):
    today = day(3) + timedelta(days=10)

    runway = runway_for_ledger(exhausting_ledger, None, today=today)

    assert runway.days_remaining == -10
    assert runway.is_exhausted is True


def test_runway_first_negative_day_wins(make_txn):
    """Later, deeper shortfalls do not move the exhaustion date"""
    ledger = [
        make_txn("debit", 5, 1),
        make_txn("credit", 20, 2),
        make_txn("debit", 500, 3),
    ]

    runway = runway_for_ledger(ledger, None, today=DAY1)

    assert runway.exhaustion_date == day(1)
    assert runway.amount_short == Decimal("5")


def test_runway_same_day_credit_masks_intraday_dip(make_txn):
    """Exhaustion is judged on the day's net, not transaction by transaction"""
    ledger = [
        make_txn("credit", 10, 1),
        make_txn("debit", 50, 2),
        make_txn("credit", 45, 2),
    ]

    runway = runway_for_ledger(ledger, None, today=DAY1)

    assert runway.is_bounded is False


def test_runway_channel_independence(make_txn):
    """Injecting undeclared transactions never changes the declared runway"""
    declared = [make_txn("credit", 100, 1), make_txn("debit", 130, 5)]
    noise = [
        make_txn("credit", 1000, 1, channel="undeclared"),
        make_txn("debit", 5000, 2, channel="undeclared"),
        make_txn("credit", 7, 5, channel="undeclared"),
    ]

    alone = runway_for_ledger(declared, "declared", today=DAY1)
    mixed = runway_for_ledger(noise + declared, "declared", today=DAY1)

    assert alone == mixed
    assert mixed.exhaustion_date == day(5)
    assert mixed.amount_short == Decimal("30")

    undeclared = runway_for_ledger(noise + declared, "undeclared", today=DAY1)
    assert undeclared.exhaustion_date == day(2)
    assert undeclared.amount_short == Decimal("4000")


def test_runway_idempotent(exhausting_ledger):
    first = runway_for_ledger(exhausting_ledger, None, today=DAY1)
    second = runway_for_ledger(exhausting_ledger, None, today=DAY1)

    assert first == second


def test_funding_needs_empty_when_unbounded(make_txn):
    walk = accumulate_daily_balances([make_txn("credit", 100, 1)])
    runway = calculate_runway(walk, today=DAY1)

    assert project_funding_needs(runway, walk) == []


def test_funding_needs_continuation_after_exhaustion(exhausting_ledger, make_txn):
    """day4 -> -30, day5 -> -25; day3 itself is not repeated"""
    ledger = exhausting_ledger + [make_txn("debit", 10, 4), make_txn("credit", 5, 5)]
    walk = accumulate_daily_balances(ledger)
    runway = calculate_runway(walk, today=DAY1)

    needs = project_funding_needs(runway, walk)

    assert needs == [
        FundingNeed(date=day(4), amount_needed=Decimal("30")),
        FundingNeed(date=day(5), amount_needed=Decimal("25")),
    ]


def test_funding_needs_do_not_double_count_exhaustion_day(exhausting_ledger, make_txn):
    ledger = exhausting_ledger + [make_txn("debit", 10, 4)]
    walk = accumulate_daily_balances(ledger)
    runway = calculate_runway(walk, today=DAY1)

    needs = project_funding_needs(runway, walk)

    assert runway.exhaustion_date not in [n.date for n in needs]
    assert runway.amount_short == Decimal("20")
    assert [n.amount_needed for n in needs] == [Decimal("30")]


def test_funding_needs_skip_recovered_days(exhausting_ledger, make_txn):
    """A day back at or above zero emits nothing; later dips emit again"""
    ledger = exhausting_ledger + [
        make_txn("credit", 20, 4),  # back to 0
        make_txn("credit", 30, 5),  # 30
        make_txn("debit", 45, 6),  # -15
    ]
    walk = accumulate_daily_balances(ledger)
    runway = calculate_runway(walk, today=DAY1)

    needs = project_funding_needs(runway, walk)

    assert needs == [FundingNeed(date=day(6), amount_needed=Decimal("15"))]


def test_funding_needs_one_entry_per_date(exhausting_ledger, make_txn):
    ledger = exhausting_ledger + [
        make_txn("debit", 10, 4),
        make_txn("debit", 5, 4),
        make_txn("credit", 1, 4),
    ]
    walk = accumulate_daily_balances(ledger)
    runway = calculate_runway(walk, today=DAY1)

    needs = project_funding_needs(runway, walk)

    assert needs == [FundingNeed(date=day(4), amount_needed=Decimal("34"))]
