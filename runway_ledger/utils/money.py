"""Decimal money helpers"""

from decimal import Decimal, InvalidOperation

from runway_ledger.domain.exceptions import InvalidTransactionDataError


def to_decimal(value) -> Decimal:
    """
    Coerce an amount to Decimal.

    Floats go through ``str`` so 0.1 stays 0.1 rather than its binary expansion.
    Booleans and non-finite values are rejected.
    """
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, bool) or value is None:
        raise InvalidTransactionDataError(f"Invalid amount: {value!r}")
    else:
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation as e:
            raise InvalidTransactionDataError(f"Invalid amount: {value!r}") from e

    if not amount.is_finite():
        raise InvalidTransactionDataError(f"Invalid amount: {value!r}")

    return amount
