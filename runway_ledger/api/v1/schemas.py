"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import date
from decimal import Decimal
from typing import List, Literal, Optional

from runway_ledger.domain.models import (
    DailySeries,
    DayBalance,
    FundingNeed,
    PoolSummary,
    RunwayResult,
    Transaction,
)
from runway_ledger.domain.projection import COMBINED

Kind = Literal["credit", "debit"]
Channel = Literal["declared", "undeclared"]


# --- Partners ---


class PartnerCreate(BaseModel):
    """Request body for POST /v1/partners"""

    owner_id: str = Field(..., min_length=1, description="Ledger owner identifier")
    name: str = Field(..., min_length=1, max_length=200)


class PartnerResponse(BaseModel):
    partner_id: str
    owner_id: str
    name: str
    created_at: str


class PartnerListResponse(BaseModel):
    owner_id: str
    partners: List[PartnerResponse]


class PartnerContributionSchema(BaseModel):
    """Credits one partner has contributed, by channel"""

    partner_id: str
    name: Optional[str] = None
    declared: Decimal
    undeclared: Decimal
    total: Decimal


class ContributionsResponse(BaseModel):
    """Response for GET /v1/partners/contributions"""

    owner_id: str
    contributions: List[PartnerContributionSchema]


# --- Transactions ---


class TransactionFields(BaseModel):
    """Editable transaction fields; amount sign is carried by ``kind``"""

    kind: Kind
    # Matches the Numeric(14, 2) column so nothing is rounded on write
    amount: Decimal = Field(..., max_digits=14, decimal_places=2, description="Non-negative magnitude")
    date: date
    channel: Channel
    partner_id: Optional[str] = None
    description: str = ""
    category: str = ""

    def to_domain(self, transaction_id: str = "") -> Transaction:
        """Build the validated domain object (raises NegativeAmountError for amounts below zero)"""
        return Transaction(
            transaction_id=transaction_id,
            kind=self.kind,
            amount=self.amount,
            date=self.date,
            channel=self.channel,
            partner_id=self.partner_id,
            description=self.description,
            category=self.category,
        )


class TransactionCreate(TransactionFields):
    """Request body for POST /v1/transactions"""

    owner_id: str = Field(..., min_length=1, description="Ledger owner identifier")


class TransactionUpdate(TransactionFields):
    """Request body for PUT /v1/transactions/{transaction_id}"""

    pass


class TransactionResponse(BaseModel):
    transaction_id: str
    owner_id: str
    kind: Kind
    amount: Decimal
    date: date
    channel: Channel
    partner_id: Optional[str] = None
    description: str
    category: str


class TransactionListResponse(BaseModel):
    owner_id: str
    channel: str
    transactions: List[TransactionResponse]


# --- Projections ---


class RunwaySchema(BaseModel):
    is_bounded: bool
    exhaustion_date: Optional[date] = None
    days_remaining: Optional[int] = None
    amount_short: Decimal
    is_exhausted: bool

    @classmethod
    def from_domain(cls, runway: RunwayResult) -> "RunwaySchema":
        return cls(
            is_bounded=runway.is_bounded,
            exhaustion_date=runway.exhaustion_date,
            days_remaining=runway.days_remaining,
            amount_short=runway.amount_short,
            is_exhausted=runway.is_exhausted,
        )


class FundingNeedSchema(BaseModel):
    date: date
    amount_needed: Decimal

    @classmethod
    def from_domain(cls, need: FundingNeed) -> "FundingNeedSchema":
        return cls(date=need.date, amount_needed=need.amount_needed)


class DayBalanceSchema(BaseModel):
    """One day-walk entry (transaction dates only)"""

    date: date
    balance: Decimal
    net_change: Decimal
    transaction_count: int

    @classmethod
    def from_domain(cls, day: DayBalance) -> "DayBalanceSchema":
        return cls(
            date=day.date,
            balance=day.balance,
            net_change=day.net_change,
            transaction_count=day.transaction_count,
        )


class DailyBalancePointSchema(BaseModel):
    date: date
    balance: Decimal
    had_activity: bool


class DailySeriesSchema(BaseModel):
    min_balance: Decimal
    max_balance: Decimal
    points: List[DailyBalancePointSchema]

    @classmethod
    def from_domain(cls, series: DailySeries) -> "DailySeriesSchema":
        return cls(
            min_balance=series.min_balance,
            max_balance=series.max_balance,
            points=[
                DailyBalancePointSchema(date=p.date, balance=p.balance, had_activity=p.had_activity)
                for p in series.points
            ],
        )


class RunwayResponse(BaseModel):
    """Response for GET /v1/runway"""

    owner_id: str
    channel: str
    as_of: date
    runway: RunwaySchema


class RunwayOverviewResponse(BaseModel):
    """Response for GET /v1/runway/overview - each pool projected independently"""

    owner_id: str
    as_of: date
    combined: RunwaySchema
    declared: RunwaySchema
    undeclared: RunwaySchema


class FundingNeedsResponse(BaseModel):
    """Response for GET /v1/funding-needs"""

    owner_id: str
    channel: str
    as_of: date
    runway: RunwaySchema
    funding_needs: List[FundingNeedSchema]


class BalanceSeriesResponse(BaseModel):
    """Response for GET /v1/balance-series"""

    owner_id: str
    channel: str
    series: DailySeriesSchema


class ProjectionResponse(BaseModel):
    """Response for GET /v1/projection"""

    owner_id: str
    channel: str
    as_of: date
    runway: RunwaySchema
    funding_needs: List[FundingNeedSchema]
    walk: List[DayBalanceSchema]
    series: DailySeriesSchema


class PoolSummarySchema(BaseModel):
    channel: str
    total_credits: Decimal
    total_debits: Decimal
    balance: Decimal
    balance_to_date: Decimal

    @classmethod
    def from_domain(cls, summary: PoolSummary) -> "PoolSummarySchema":
        return cls(
            channel=summary.channel or COMBINED,
            total_credits=summary.total_credits,
            total_debits=summary.total_debits,
            balance=summary.balance,
            balance_to_date=summary.balance_to_date,
        )


class SummaryResponse(BaseModel):
    """Response for GET /v1/summary"""

    owner_id: str
    as_of: date
    combined: PoolSummarySchema
    declared: PoolSummarySchema
    undeclared: PoolSummarySchema
