"""Data access layer for partners and ledger transactions"""

import uuid
from decimal import Decimal
from typing import List, Optional
from sqlalchemy.orm import Session
from runway_ledger.infrastructure.database.models import LedgerTransaction, Partner
from runway_ledger.domain.models import Transaction
from runway_ledger.utils.date_utils import parse_date
from runway_ledger.domain.exceptions import (
    DuplicatePartnerError,
    PartnerNotFoundError,
    TransactionNotFoundError,
)


def _parse_id(raw_id: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(raw_id))
    except ValueError:
        return None


def to_domain(row: LedgerTransaction) -> Transaction:
    """Convert a stored row into the engine's immutable Transaction"""
    return Transaction(
        transaction_id=str(row.id),
        kind=row.kind,
        amount=Decimal(row.amount),
        date=parse_date(row.date),
        channel=row.channel,
        partner_id=str(row.partner_id) if row.partner_id else None,
        description=row.description or "",
        category=row.category or "",
    )


class PartnerRepository:
    """Repository for pool partners"""

    def __init__(self, db: Session):
        self.db = db

    def create_partner(self, owner_id: str, name: str) -> Partner:
        """Persist a partner; names are unique per owner"""
        existing = (
            self.db.query(Partner)
            .filter(Partner.owner_id == owner_id, Partner.name == name)
            .first()
        )
        if existing:
            raise DuplicatePartnerError(f"Partner {name!r} already exists")

        db_partner = Partner(owner_id=owner_id, name=name)
        self.db.add(db_partner)
        self.db.flush()  # Get ID without committing
        return db_partner

    def list_partners(self, owner_id: str) -> List[Partner]:
        return (
            self.db.query(Partner)
            .filter(Partner.owner_id == owner_id)
            .order_by(Partner.name)
            .all()
        )

    def get_partner(self, owner_id: str, partner_id: str) -> Partner:
        """
        Fetch one partner owned by ``owner_id``.

        Raises:
            PartnerNotFoundError: unknown id, malformed id, or another owner's partner
        """
        partner_uuid = _parse_id(partner_id)
        partner = None
        if partner_uuid is not None:
            partner = (
                self.db.query(Partner)
                .filter(Partner.id == partner_uuid, Partner.owner_id == owner_id)
                .first()
            )
        if partner is None:
            raise PartnerNotFoundError(f"Partner {partner_id} not found")
        return partner

    def delete_partner(self, owner_id: str, partner_id: str) -> None:
        """Delete a partner; its transactions stay in the ledger without a partner link"""
        partner = self.get_partner(owner_id, partner_id)
        for txn in partner.transactions:
            txn.partner_id = None
        self.db.delete(partner)
        self.db.flush()


class TransactionRepository:
    """Repository for ledger transactions"""

    def __init__(self, db: Session):
        self.db = db

    def _resolve_partner(self, owner_id: str, partner_id: Optional[str]) -> Optional[uuid.UUID]:
        if not partner_id:
            return None
        return PartnerRepository(self.db).get_partner(owner_id, partner_id).id

    def create_transaction(
        self,
        owner_id: str,
        transaction: Transaction,
    ) -> LedgerTransaction:
        """
        Persist a validated domain transaction.

        The domain object has already enforced kind, channel and amount >= 0;
        its ``transaction_id`` is ignored and a new id is assigned.
        """
        db_txn = LedgerTransaction(
            owner_id=owner_id,
            kind=transaction.kind,
            amount=transaction.amount,
            date=transaction.date,
            channel=transaction.channel,
            partner_id=self._resolve_partner(owner_id, transaction.partner_id),
            description=transaction.description,
            category=transaction.category,
        )
        self.db.add(db_txn)
        self.db.flush()
        return db_txn

    def list_transactions(self, owner_id: str, channel: Optional[str] = None) -> List[LedgerTransaction]:
        """All of an owner's transactions, oldest first"""
        query = self.db.query(LedgerTransaction).filter(LedgerTransaction.owner_id == owner_id)
        if channel:
            query = query.filter(LedgerTransaction.channel == channel)
        return query.order_by(LedgerTransaction.date, LedgerTransaction.created_at).all()

    def load_ledger(self, owner_id: str) -> List[Transaction]:
        """Owner's full ledger as domain objects, ready for projection"""
        return [to_domain(row) for row in self.list_transactions(owner_id)]

    def get_transaction(self, owner_id: str, transaction_id: str) -> LedgerTransaction:
        txn_uuid = _parse_id(transaction_id)
        txn = None
        if txn_uuid is not None:
            txn = (
                self.db.query(LedgerTransaction)
                .filter(LedgerTransaction.id == txn_uuid, LedgerTransaction.owner_id == owner_id)
                .first()
            )
        if txn is None:
            raise TransactionNotFoundError(f"Transaction {transaction_id} not found")
        return txn

    def update_transaction(
        self,
        owner_id: str,
        transaction_id: str,
        transaction: Transaction,
    ) -> LedgerTransaction:
        """Replace every editable field of an existing transaction"""
        db_txn = self.get_transaction(owner_id, transaction_id)
        db_txn.kind = transaction.kind
        db_txn.amount = transaction.amount
        db_txn.date = transaction.date
        db_txn.channel = transaction.channel
        db_txn.partner_id = self._resolve_partner(owner_id, transaction.partner_id)
        db_txn.description = transaction.description
        db_txn.category = transaction.category
        self.db.flush()
        return db_txn

    def delete_transaction(self, owner_id: str, transaction_id: str) -> LedgerTransaction:
        db_txn = self.get_transaction(owner_id, transaction_id)
        self.db.delete(db_txn)
        self.db.flush()
        return db_txn
