"""Domain models - pure Python dataclasses representing ledger entities"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional

from runway_ledger.domain.exceptions import InvalidTransactionDataError, NegativeAmountError
from runway_ledger.utils.money import to_decimal

CREDIT = "credit"
DEBIT = "debit"
KINDS = (CREDIT, DEBIT)

DECLARED = "declared"
UNDECLARED = "undeclared"
CHANNELS = (DECLARED, UNDECLARED)

ZERO = Decimal("0")


@dataclass(frozen=True)
class Transaction:
    """Single credit or debit against the shared pool"""

    transaction_id: str
    kind: str  # "credit" or "debit"
    amount: Decimal  # magnitude, never negative
    date: date
    channel: str  # "declared" or "undeclared"
    partner_id: Optional[str] = None
    description: str = ""
    category: str = ""

    def __post_init__(self) -> None:
        if self.kind not in KINDS:
            raise InvalidTransactionDataError(f"Unknown transaction kind: {self.kind!r}")
        if self.channel not in CHANNELS:
            raise InvalidTransactionDataError(f"Unknown channel: {self.channel!r}")

        amount = to_decimal(self.amount)
        if amount < 0:
            raise NegativeAmountError(f"Transaction {self.transaction_id} has negative amount {amount}")
        object.__setattr__(self, "amount", amount)

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the direction applied: credits positive, debits negative"""
        return self.amount if self.kind == CREDIT else -self.amount


@dataclass(frozen=True)
class DayBalance:
    """One step of the day-walk: cumulative balance after all of a day's transactions"""

    date: date
    balance: Decimal
    net_change: Decimal
    transaction_count: int


@dataclass(frozen=True)
class RunwayResult:
    """How long the pool lasts before its balance first goes negative"""

    is_bounded: bool
    exhaustion_date: Optional[date] = None
    days_remaining: Optional[int] = None
    amount_short: Decimal = ZERO

    @property
    def is_exhausted(self) -> bool:
        """Exhaustion day is today or already behind us"""
        return self.is_bounded and self.days_remaining is not None and self.days_remaining <= 0


@dataclass(frozen=True)
class FundingNeed:
    """Additional funds required on a date to bring the pool back to zero"""

    date: date
    amount_needed: Decimal


@dataclass(frozen=True)
class DailyBalancePoint:
    date: date
    balance: Decimal
    had_activity: bool


@dataclass(frozen=True)
class DailySeries:
    """Gap-filled calendar series plus its extrema (both always include zero)"""

    points: List[DailyBalancePoint] = field(default_factory=list)
    min_balance: Decimal = ZERO
    max_balance: Decimal = ZERO


@dataclass(frozen=True)
class LedgerProjection:
    """Everything the engine derives for one channel filter"""

    channel: Optional[str]
    walk: List[DayBalance]
    runway: RunwayResult
    funding_needs: List[FundingNeed]
    series: DailySeries


@dataclass(frozen=True)
class PoolSummary:
    channel: Optional[str]
    total_credits: Decimal
    total_debits: Decimal
    balance: Decimal
    balance_to_date: Decimal


@dataclass(frozen=True)
class PartnerContribution:
    """Credits a partner has put into the pool, split by channel"""

    partner_id: str
    declared: Decimal
    undeclared: Decimal

    @property
    def total(self) -> Decimal:
        return self.declared + self.undeclared
