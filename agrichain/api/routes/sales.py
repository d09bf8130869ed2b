from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from agrichain.api.deps import get_scope
from agrichain.db.database import get_db
from agrichain.schemas.events import EventUpdate, SaleCreate, SaleOut, StatusUpdate
from agrichain.services.sales import SaleService
from agrichain.services.scope import AccessScope

router = APIRouter(prefix="/sales", tags=["Sales"])


@router.get("", response_model=list[SaleOut])
def list_sales(
    status_filter: str | None = Query(default=None, alias="status"),
    product_id: int | None = None,
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    return SaleService(db, scope).list(status=status_filter, product_id=product_id)


@router.post("", response_model=SaleOut, status_code=status.HTTP_201_CREATED)
def create_sale(
    payload: SaleCreate,
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    return SaleService(db, scope).create(
        product_id=payload.product_id,
        quantity=payload.quantity,
        rate=payload.rate,
        sold_on=payload.sold_on or date.today(),
    )


@router.get("/{sale_id}", response_model=SaleOut)
def get_sale(sale_id: int, scope: AccessScope = Depends(get_scope), db: Session = Depends(get_db)):
    return SaleService(db, scope).get(sale_id)


@router.patch("/{sale_id}", response_model=SaleOut)
def update_sale(
    sale_id: int,
    payload: EventUpdate,
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    return SaleService(db, scope).edit(sale_id, quantity=payload.quantity, rate=payload.rate)


@router.put("/{sale_id}/status", response_model=SaleOut)
def update_sale_status(
    sale_id: int,
    payload: StatusUpdate,
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    return SaleService(db, scope).transition(sale_id, payload.status)
