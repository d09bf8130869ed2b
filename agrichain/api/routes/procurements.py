from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from agrichain.api.deps import get_scope
from agrichain.db.database import get_db
from agrichain.schemas.events import ProcurementCreate, ProcurementOut, ProcurementUpdate
from agrichain.services.procurements import ProcurementService
from agrichain.services.scope import AccessScope

router = APIRouter(prefix="/procurements", tags=["Procurements"])


@router.get("", response_model=list[ProcurementOut])
def list_procurements(
    product_id: int | None = None,
    date_from: date | None = Query(default=None),
    date_to: date | None = Query(default=None),
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    return ProcurementService(db, scope).list(product_id=product_id, date_from=date_from, date_to=date_to)


@router.post("", response_model=ProcurementOut, status_code=status.HTTP_201_CREATED)
def create_procurement(
    payload: ProcurementCreate,
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    return ProcurementService(db, scope).create(
        farmer_id=payload.farmer_id,
        product_id=payload.product_id,
        quantity=payload.quantity,
        rate=payload.rate,
        procured_on=payload.procured_on or date.today(),
    )


@router.get("/{procurement_id}", response_model=ProcurementOut)
def get_procurement(
    procurement_id: int,
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    return ProcurementService(db, scope).get(procurement_id)


@router.patch("/{procurement_id}", response_model=ProcurementOut)
def update_procurement(
    procurement_id: int,
    payload: ProcurementUpdate,
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    return ProcurementService(db, scope).edit(procurement_id, quantity=payload.quantity, rate=payload.rate)


@router.delete("/{procurement_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_procurement(
    procurement_id: int,
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    ProcurementService(db, scope).delete(procurement_id)
