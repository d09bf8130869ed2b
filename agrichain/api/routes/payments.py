from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from agrichain.api.deps import get_scope
from agrichain.db.database import get_db
from agrichain.schemas.events import PaymentCreate, PaymentOut, PaymentUpdate, StatusUpdate
from agrichain.services.payments import PaymentService
from agrichain.services.scope import AccessScope

router = APIRouter(prefix="/payments", tags=["Payments"])


@router.get("", response_model=list[PaymentOut])
def list_payments(
    status_filter: str | None = Query(default=None, alias="status"),
    cooperative_id: int | None = None,
    payment_type: str | None = Query(default=None, alias="type"),
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    return PaymentService(db, scope).list(
        status=status_filter,
        cooperative_id=cooperative_id,
        payment_type=payment_type,
    )


@router.post("", response_model=PaymentOut, status_code=status.HTTP_201_CREATED)
def create_payment(
    payload: PaymentCreate,
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    service = PaymentService(db, scope)
    paid_on = payload.paid_on or date.today()
    if payload.farmer_id is not None:
        return service.create_farmer_payment(
            farmer_id=payload.farmer_id,
            amount=payload.amount,
            paid_on=paid_on,
            description=payload.description,
        )
    return service.create_cooperative_payment(
        cooperative_id=payload.cooperative_id,
        payment_type=payload.type,
        amount=payload.amount,
        paid_on=paid_on,
        status=payload.status,
        description=payload.description,
    )


@router.get("/{payment_id}", response_model=PaymentOut)
def get_payment(payment_id: int, scope: AccessScope = Depends(get_scope), db: Session = Depends(get_db)):
    return PaymentService(db, scope).get(payment_id)


@router.patch("/{payment_id}", response_model=PaymentOut)
def update_payment(
    payment_id: int,
    payload: PaymentUpdate,
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    return PaymentService(db, scope).edit(
        payment_id,
        amount=payload.amount,
        paid_on=payload.paid_on,
        description=payload.description,
    )


@router.put("/{payment_id}/status", response_model=PaymentOut)
def update_payment_status(
    payment_id: int,
    payload: StatusUpdate,
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    return PaymentService(db, scope).transition(payment_id, payload.status)
