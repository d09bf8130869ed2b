from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from agrichain.api.deps import get_scope
from agrichain.core.exceptions import ValidationError
from agrichain.db.database import get_db
from agrichain.models.account import AccountRole
from agrichain.schemas.ledger import StockMovementOut, StockOut, StockUpdateRequest, StockUpsertRequest
from agrichain.services.ledger import InventoryLedger
from agrichain.services.reference import get_cooperative
from agrichain.services.scope import AccessScope
from agrichain.services.transaction import atomic

router = APIRouter(prefix="/inventory", tags=["Inventory"])


@router.get("", response_model=list[StockOut])
def list_stock(
    cooperative_id: int | None = None,
    product_id: int | None = None,
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    return InventoryLedger(db).read(scope, cooperative_id=cooperative_id, product_id=product_id)


@router.get("/movements", response_model=list[StockMovementOut])
def list_movements(
    cooperative_id: int | None = None,
    product_id: int | None = None,
    source_type: str | None = None,
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    return InventoryLedger(db).movements(
        scope,
        cooperative_id=cooperative_id,
        product_id=product_id,
        source_type=source_type,
    )


@router.post("", response_model=StockOut)
def upsert_stock(
    payload: StockUpsertRequest,
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    scope.require_role(AccountRole.FPO, AccountRole.MAHAFPC)
    cooperative_id = scope.resolve_cooperative(payload.cooperative_id)
    if cooperative_id is None:
        raise ValidationError("cooperative_id is required")

    ledger = InventoryLedger(db, actor_id=scope.identity)
    with atomic(db, "Inventory update"):
        get_cooperative(db, cooperative_id)
        stock = ledger.set_absolute(
            cooperative_id,
            payload.product_id,
            payload.quantity,
            min_stock=payload.min_stock,
            max_stock=payload.max_stock,
            reason=payload.reason or "manual stock entry",
        )
    db.refresh(stock)
    return stock


@router.patch("/{stock_id}", response_model=StockOut)
def update_stock(
    stock_id: int,
    payload: StockUpdateRequest,
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    scope.require_role(AccountRole.FPO, AccountRole.MAHAFPC)
    ledger = InventoryLedger(db, actor_id=scope.identity)
    with atomic(db, "Inventory update"):
        stock = ledger.update_limits(
            scope,
            stock_id,
            quantity=payload.quantity,
            min_stock=payload.min_stock,
            max_stock=payload.max_stock,
            reason=payload.reason or "manual stock edit",
        )
    db.refresh(stock)
    return stock
