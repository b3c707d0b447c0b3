"""Unit tests for transaction validation and value helpers"""

import pytest
from datetime import date, datetime
from decimal import Decimal
from runway_ledger.domain.models import RunwayResult, Transaction
from runway_ledger.domain.exceptions import (
    InvalidDateError,
    InvalidTransactionDataError,
    NegativeAmountError,
)
from runway_ledger.utils.date_utils import generate_date_range, parse_date
from runway_ledger.utils.money import to_decimal


def test_transaction_rejects_negative_amount():
    with pytest.raises(NegativeAmountError):
        Transaction("1", "debit", Decimal("-5"), date(2025, 1, 1), "declared")


def test_transaction_rejects_unknown_kind_and_channel():
    with pytest.raises(InvalidTransactionDataError):
        Transaction("1", "refund", Decimal("5"), date(2025, 1, 1), "declared")

    with pytest.raises(InvalidTransactionDataError):
        Transaction("1", "credit", Decimal("5"), date(2025, 1, 1), "offshore")


def test_transaction_amount_coerced_to_decimal():
    txn = Transaction("1", "credit", 0.1, date(2025, 1, 1), "declared")

    assert txn.amount == Decimal("0.1")
    assert isinstance(txn.amount, Decimal)


def test_transaction_zero_amount_allowed():
    txn = Transaction("1", "debit", 0, date(2025, 1, 1), "undeclared")
    assert txn.signed_amount == 0


def test_signed_amount_follows_kind():
    credit = Transaction("1", "credit", Decimal("12.5"), date(2025, 1, 1), "declared")
    debit = Transaction("2", "debit", Decimal("12.5"), date(2025, 1, 1), "declared")

    assert credit.signed_amount == Decimal("12.5")
    assert debit.signed_amount == Decimal("-12.5")


def test_partner_reference_round_trips():
    txn = Transaction("1", "credit", Decimal("1"), date(2025, 1, 1), "declared", partner_id="p-42")
    assert txn.partner_id == "p-42"


def test_runway_is_exhausted_boundaries():
    assert RunwayResult(is_bounded=True, exhaustion_date=date(2025, 1, 1), days_remaining=0).is_exhausted
    assert not RunwayResult(is_bounded=True, exhaustion_date=date(2025, 1, 2), days_remaining=1).is_exhausted
    assert not RunwayResult(is_bounded=False).is_exhausted


def test_to_decimal_rejects_garbage():
    with pytest.raises(InvalidTransactionDataError):
        to_decimal("twelve")
    with pytest.raises(InvalidTransactionDataError):
        to_decimal(True)
    with pytest.raises(InvalidTransactionDataError):
        to_decimal(float("nan"))

    assert to_decimal(" 7.25 ") == Decimal("7.25")


def test_parse_date():
    assert parse_date("2025-03-01") == date(2025, 3, 1)
    assert parse_date(date(2025, 3, 1)) == date(2025, 3, 1)

    with pytest.raises(InvalidDateError):
        parse_date("01/03/2025")
    with pytest.raises(InvalidDateError):
        parse_date(datetime(2025, 3, 1, 12, 0))
    with pytest.raises(InvalidDateError):
        parse_date(20250301)


def test_generate_date_range_inclusive():
    days = generate_date_range(date(2025, 2, 27), date(2025, 3, 2))
    assert days == [date(2025, 2, 27), date(2025, 2, 28), date(2025, 3, 1), date(2025, 3, 2)]
    assert generate_date_range(date(2025, 1, 1), date(2025, 1, 1)) == [date(2025, 1, 1)]
