"""SQLAlchemy ORM models for partners and ledger transactions"""

import uuid
from sqlalchemy import Column, Date, DateTime, ForeignKey, Index, Numeric, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class Partner(Base):
    """Party contributing credits to the shared pool"""

    __tablename__ = "partner"
    __table_args__ = (UniqueConstraint("owner_id", "name", name="uq_partner_owner_name"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id = Column(Text, nullable=False, index=True)
    name = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    transactions = relationship("LedgerTransaction", back_populates="partner")


class LedgerTransaction(Base):
    """Credit or debit against the pool; amount is always a non-negative magnitude"""

    __tablename__ = "ledger_transaction"
    __table_args__ = (Index("ix_ledger_transaction_owner_date", "owner_id", "date"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id = Column(Text, nullable=False, index=True)
    kind = Column(Text, nullable=False)  # credit | debit
    amount = Column(Numeric(14, 2), nullable=False)
    date = Column(Date, nullable=False)
    channel = Column(Text, nullable=False)  # declared | undeclared
    partner_id = Column(Uuid, ForeignKey("partner.id", ondelete="SET NULL"), nullable=True, index=True)
    description = Column(Text, nullable=False, default="")
    category = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    partner = relationship("Partner", back_populates="transactions")
