"""/v1/transactions - create, read, update and delete ledger entries"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from sqlalchemy.orm import Session

from runway_ledger.api.v1.schemas import (
    Channel,
    TransactionCreate,
    TransactionListResponse,
    TransactionResponse,
    TransactionUpdate,
)
from runway_ledger.api.dependencies import get_request_id
from runway_ledger.infrastructure.database.session import get_db
from runway_ledger.infrastructure.database.repositories import TransactionRepository
from runway_ledger.infrastructure.database.models import LedgerTransaction
from runway_ledger.infrastructure.observability.metrics import transaction_write_counter
from runway_ledger.domain.exceptions import (
    DomainException,
    PartnerNotFoundError,
    TransactionNotFoundError,
)
from runway_ledger.domain.projection import COMBINED

router = APIRouter()


def _to_response(txn: LedgerTransaction) -> TransactionResponse:
    return TransactionResponse(
        transaction_id=str(txn.id),
        owner_id=txn.owner_id,
        kind=txn.kind,
        amount=txn.amount,
        date=txn.date,
        channel=txn.channel,
        partner_id=str(txn.partner_id) if txn.partner_id else None,
        description=txn.description,
        category=txn.category,
    )


def _raise_for(e: DomainException, db: Session, request_id: str):
    """Roll back and translate a domain error into the matching HTTP status"""
    db.rollback()
    if isinstance(e, (TransactionNotFoundError, PartnerNotFoundError)):
        raise HTTPException(status_code=404, detail=str(e))
    logging.warning(f"Rejected transaction: {e}", extra={"request_id": request_id})
    raise HTTPException(status_code=422, detail=str(e))


@router.post("/transactions", response_model=TransactionResponse, status_code=201)
def create_transaction(
    request_body: TransactionCreate,
    request: Request,
    db: Session = Depends(get_db),
):
    """
    Record a credit or debit.

    Amounts are magnitudes: a negative amount is rejected with 422 rather
    than being read as a debit.
    """
    request_id = get_request_id(request)
    try:
        transaction = request_body.to_domain()
        db_txn = TransactionRepository(db).create_transaction(request_body.owner_id, transaction)
        db.commit()
        db.refresh(db_txn)
    except DomainException as e:
        _raise_for(e, db, request_id)
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    transaction_write_counter.labels(operation="create", kind=db_txn.kind).inc()
    return _to_response(db_txn)


@router.get("/transactions", response_model=TransactionListResponse)
def list_transactions(
    owner_id: str = Query(..., min_length=1, description="Ledger owner identifier"),
    channel: Optional[Channel] = Query(None, description="Restrict to one channel"),
    db: Session = Depends(get_db),
):
    """Owner's transactions in date order"""
    rows = TransactionRepository(db).list_transactions(owner_id, channel)
    return TransactionListResponse(
        owner_id=owner_id,
        channel=channel or COMBINED,
        transactions=[_to_response(row) for row in rows],
    )


@router.get("/transactions/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: str,
    owner_id: str = Query(..., min_length=1, description="Ledger owner identifier"),
    db: Session = Depends(get_db),
):
    try:
        db_txn = TransactionRepository(db).get_transaction(owner_id, transaction_id)
    except TransactionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return _to_response(db_txn)


@router.put("/transactions/{transaction_id}", response_model=TransactionResponse)
def update_transaction(
    transaction_id: str,
    request_body: TransactionUpdate,
    request: Request,
    owner_id: str = Query(..., min_length=1, description="Ledger owner identifier"),
    db: Session = Depends(get_db),
):
    """Replace a transaction's fields"""
    request_id = get_request_id(request)
    try:
        transaction = request_body.to_domain(transaction_id)
        db_txn = TransactionRepository(db).update_transaction(owner_id, transaction_id, transaction)
        db.commit()
        db.refresh(db_txn)
    except DomainException as e:
        _raise_for(e, db, request_id)
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    transaction_write_counter.labels(operation="update", kind=db_txn.kind).inc()
    return _to_response(db_txn)


@router.delete("/transactions/{transaction_id}", status_code=204)
def delete_transaction(
    transaction_id: str,
    request: Request,
    owner_id: str = Query(..., min_length=1, description="Ledger owner identifier"),
    db: Session = Depends(get_db),
):
    request_id = get_request_id(request)
    try:
        kind = TransactionRepository(db).delete_transaction(owner_id, transaction_id).kind
        db.commit()
    except DomainException as e:
        _raise_for(e, db, request_id)
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    transaction_write_counter.labels(operation="delete", kind=kind).inc()
    return Response(status_code=204)
