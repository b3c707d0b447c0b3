"""/v1/partners - pool partners and their contributions"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from sqlalchemy.orm import Session

from runway_ledger.api.v1.schemas import (
    ContributionsResponse,
    PartnerContributionSchema,
    PartnerCreate,
    PartnerListResponse,
    PartnerResponse,
)
from runway_ledger.api.dependencies import get_request_id
from runway_ledger.infrastructure.database.session import get_db
from runway_ledger.infrastructure.database.repositories import PartnerRepository, TransactionRepository
from runway_ledger.infrastructure.database.models import Partner
from runway_ledger.domain.exceptions import DuplicatePartnerError, PartnerNotFoundError
from runway_ledger.domain.summary import partner_contributions

router = APIRouter()


def _to_response(partner: Partner) -> PartnerResponse:
    return PartnerResponse(
        partner_id=str(partner.id),
        owner_id=partner.owner_id,
        name=partner.name,
        created_at=partner.created_at.isoformat(),
    )


@router.post("/partners", response_model=PartnerResponse, status_code=201)
def create_partner(
    request_body: PartnerCreate,
    request: Request,
    db: Session = Depends(get_db),
):
    """Register a partner who contributes credits to the pool"""
    request_id = get_request_id(request)
    try:
        partner = PartnerRepository(db).create_partner(request_body.owner_id, request_body.name)
        db.commit()
        db.refresh(partner)
    except DuplicatePartnerError as e:
        db.rollback()
        logging.warning(f"Duplicate partner: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    return _to_response(partner)


@router.get("/partners", response_model=PartnerListResponse)
def list_partners(
    owner_id: str = Query(..., min_length=1, description="Ledger owner identifier"),
    db: Session = Depends(get_db),
):
    partners = PartnerRepository(db).list_partners(owner_id)
    return PartnerListResponse(owner_id=owner_id, partners=[_to_response(p) for p in partners])


@router.get("/partners/contributions", response_model=ContributionsResponse)
def get_partner_contributions(
    owner_id: str = Query(..., min_length=1, description="Ledger owner identifier"),
    db: Session = Depends(get_db),
):
    """
    Total credits each partner has put into the pool, split by channel.

    Largest contributor first.
    """
    names = {str(p.id): p.name for p in PartnerRepository(db).list_partners(owner_id)}
    ledger = TransactionRepository(db).load_ledger(owner_id)

    contributions = [
        PartnerContributionSchema(
            partner_id=c.partner_id,
            name=names.get(c.partner_id),
            declared=c.declared,
            undeclared=c.undeclared,
            total=c.total,
        )
        for c in partner_contributions(ledger)
    ]
    return ContributionsResponse(owner_id=owner_id, contributions=contributions)


@router.delete("/partners/{partner_id}", status_code=204)
def delete_partner(
    partner_id: str,
    request: Request,
    owner_id: str = Query(..., min_length=1, description="Ledger owner identifier"),
    db: Session = Depends(get_db),
):
    """Delete a partner; their past transactions stay in the ledger unlinked"""
    request_id = get_request_id(request)
    try:
        PartnerRepository(db).delete_partner(owner_id, partner_id)
        db.commit()
    except PartnerNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    logging.info("Partner deleted", extra={"request_id": request_id, "partner_id": partner_id})
    return Response(status_code=204)
