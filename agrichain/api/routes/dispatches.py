from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from agrichain.api.deps import get_scope
from agrichain.db.database import get_db
from agrichain.schemas.events import DispatchCreate, DispatchOut, EventUpdate, StatusUpdate
from agrichain.services.dispatches import DispatchService
from agrichain.services.scope import AccessScope

router = APIRouter(prefix="/dispatches", tags=["Dispatches"])


@router.get("", response_model=list[DispatchOut])
def list_dispatches(
    status_filter: str | None = Query(default=None, alias="status"),
    cooperative_id: int | None = None,
    retailer_id: int | None = None,
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    return DispatchService(db, scope).list(
        status=status_filter,
        cooperative_id=cooperative_id,
        retailer_id=retailer_id,
    )


@router.post("", response_model=DispatchOut, status_code=status.HTTP_201_CREATED)
def create_dispatch(
    payload: DispatchCreate,
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    return DispatchService(db, scope).create(
        cooperative_id=payload.cooperative_id,
        retailer_id=payload.retailer_id,
        product_id=payload.product_id,
        quantity=payload.quantity,
        rate=payload.rate,
        dispatched_on=payload.dispatched_on or date.today(),
        lot_threshold=payload.lot_threshold,
    )


@router.get("/{dispatch_id}", response_model=DispatchOut)
def get_dispatch(dispatch_id: int, scope: AccessScope = Depends(get_scope), db: Session = Depends(get_db)):
    return DispatchService(db, scope).get(dispatch_id)


@router.patch("/{dispatch_id}", response_model=DispatchOut)
def update_dispatch(
    dispatch_id: int,
    payload: EventUpdate,
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    return DispatchService(db, scope).edit(dispatch_id, quantity=payload.quantity, rate=payload.rate)


@router.put("/{dispatch_id}/status", response_model=DispatchOut)
def update_dispatch_status(
    dispatch_id: int,
    payload: StatusUpdate,
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    return DispatchService(db, scope).transition(dispatch_id, payload.status)
