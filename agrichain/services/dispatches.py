"""
Dispatch lifecycle: lots shipped from a cooperative to a retailer on the
aggregator's instruction.

Whether a dispatch touches stock depends on ``DISPATCH_INVENTORY_MODE``.
With ``none`` dispatches are bookkeeping only; with ``cooperative`` the
completed-state rule is applied to the source cooperative's stock.
"""

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from agrichain.core.config import DISPATCH_INVENTORY_MODES, settings
from agrichain.core.exceptions import ValidationError
from agrichain.models.account import AccountRole
from agrichain.models.events import Dispatch, EventStatus
from agrichain.services.amounts import ZERO, compute_amount, to_money, to_quantity
from agrichain.services.ledger import InventoryLedger
from agrichain.services.reference import get_cooperative, get_product, get_retailer
from agrichain.services.scope import AccessScope
from agrichain.services.sequence import next_id
from agrichain.services.status_flow import parse_status, post_status_change
from agrichain.services.transaction import atomic

logger = logging.getLogger(__name__)

SOURCE_TYPE = "dispatch"


class DispatchService:
    def __init__(self, db: Session, scope: AccessScope, inventory_mode: str | None = None):
        self.db = db
        self.scope = scope
        self.ledger = InventoryLedger(db, actor_id=scope.identity)
        self.inventory_mode = inventory_mode or settings.dispatch_inventory_mode
        if self.inventory_mode not in DISPATCH_INVENTORY_MODES:
            raise ValueError(f"Unknown dispatch inventory mode: {self.inventory_mode}")

    def create(
        self,
        *,
        cooperative_id: int,
        retailer_id: int,
        product_id: int,
        quantity,
        rate,
        dispatched_on: date,
        lot_threshold=None,
    ) -> Dispatch:
        self.scope.require_role(AccountRole.MAHAFPC)
        if quantity is None or to_quantity(quantity) <= ZERO:
            raise ValidationError("Quantity must be greater than zero")
        if rate is None or to_money(rate) <= ZERO:
            raise ValidationError("Rate must be greater than zero")
        stored_quantity, stored_rate = to_quantity(quantity), to_money(rate)
        threshold = settings.default_lot_threshold if lot_threshold is None else lot_threshold
        if to_quantity(threshold) < ZERO:
            raise ValidationError("Lot threshold cannot be negative")

        with atomic(self.db, "Dispatch creation"):
            cooperative = get_cooperative(self.db, cooperative_id)
            retailer = get_retailer(self.db, retailer_id)
            product = get_product(self.db, product_id)
            dispatch = Dispatch(
                id=next_id(self.db, Dispatch),
                dispatched_on=dispatched_on,
                cooperative_id=cooperative.id,
                cooperative_name=cooperative.name,
                retailer_id=retailer.id,
                retailer_name=retailer.name,
                product_id=product.id,
                product_name=product.name,
                quantity=stored_quantity,
                rate=stored_rate,
                amount=compute_amount(stored_quantity, stored_rate),
                status=EventStatus.PENDING,
                lot_threshold=to_quantity(threshold),
            )
            self.db.add(dispatch)
            self.db.flush()

        logger.info(
            "Dispatch %s created: cooperative=%s retailer=%s product=%s qty=%s",
            dispatch.id,
            dispatch.cooperative_id,
            dispatch.retailer_id,
            dispatch.product_id,
            dispatch.quantity,
        )
        self.db.refresh(dispatch)
        return dispatch

    def transition(self, dispatch_id: int, status) -> Dispatch:
        self.scope.require_role(AccountRole.MAHAFPC, AccountRole.RETAILER)
        new_status = parse_status(status)

        with atomic(self.db, "Dispatch status update"):
            dispatch = self.scope.get(self.db, Dispatch, dispatch_id, for_update=True)
            previous = dispatch.status
            effect = None
            if self.inventory_mode == "cooperative":
                effect = post_status_change(
                    self.ledger,
                    previous=previous,
                    current=new_status,
                    cooperative_id=dispatch.cooperative_id,
                    product_id=dispatch.product_id,
                    quantity=dispatch.quantity,
                    source_type=SOURCE_TYPE,
                    source_id=dispatch.id,
                )
            dispatch.status = new_status

        logger.info(
            "Dispatch %s status %s -> %s by %s (stock: %s)",
            dispatch_id,
            previous.value,
            new_status.value,
            self.scope.role.value,
            effect or "unchanged",
        )
        self.db.refresh(dispatch)
        return dispatch

    def edit(self, dispatch_id: int, *, quantity=None, rate=None) -> Dispatch:
        self.scope.require_role(AccountRole.MAHAFPC)
        if quantity is not None and to_quantity(quantity) <= ZERO:
            raise ValidationError("Quantity must be greater than zero")
        if rate is not None and to_money(rate) <= ZERO:
            raise ValidationError("Rate must be greater than zero")

        with atomic(self.db, "Dispatch update"):
            dispatch = self.scope.get(self.db, Dispatch, dispatch_id, for_update=True)
            if quantity is not None or rate is not None:
                new_quantity = to_quantity(quantity) if quantity is not None else to_quantity(dispatch.quantity)
                new_rate = to_money(rate) if rate is not None else to_money(dispatch.rate)
                dispatch.quantity = new_quantity
                dispatch.rate = new_rate
                dispatch.amount = compute_amount(new_quantity, new_rate)

        self.db.refresh(dispatch)
        return dispatch

    def get(self, dispatch_id: int) -> Dispatch:
        return self.scope.get(self.db, Dispatch, dispatch_id)

    def list(
        self,
        *,
        status: str | None = None,
        cooperative_id: int | None = None,
        retailer_id: int | None = None,
    ) -> list[Dispatch]:
        query = self.scope.apply(select(Dispatch), Dispatch).order_by(
            Dispatch.dispatched_on.desc(),
            Dispatch.id.desc(),
        )
        if status is not None:
            query = query.where(Dispatch.status == parse_status(status))
        if cooperative_id is not None:
            query = query.where(Dispatch.cooperative_id == cooperative_id)
        if retailer_id is not None:
            query = query.where(Dispatch.retailer_id == retailer_id)
        return list(self.db.scalars(query).all())
