"""
Sale lifecycle: goods sold by a cooperative to the aggregator.

Sales are created ``pending`` and leave stock untouched until the aggregator
moves them into ``completed``; see ``status_flow.post_status_change``.
"""

import logging
from datetime import date, datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from agrichain.core.config import COMPLETED_SALE_EDIT_POLICIES, settings
from agrichain.core.exceptions import ConflictError, ValidationError
from agrichain.models.account import AccountRole
from agrichain.models.events import EventStatus, Sale
from agrichain.services.activities import record_activity
from agrichain.services.amounts import ZERO, compute_amount, to_money, to_quantity
from agrichain.services.ledger import InventoryLedger
from agrichain.services.reference import get_cooperative, get_product
from agrichain.services.scope import AccessScope
from agrichain.services.sequence import next_id
from agrichain.services.status_flow import parse_status, post_status_change
from agrichain.services.transaction import atomic

logger = logging.getLogger(__name__)

SOURCE_TYPE = "sale"


class SaleService:
    def __init__(
        self,
        db: Session,
        scope: AccessScope,
        completed_edit_policy: str | None = None,
    ):
        self.db = db
        self.scope = scope
        self.ledger = InventoryLedger(db, actor_id=scope.identity)
        self.completed_edit_policy = completed_edit_policy or settings.completed_sale_edit_policy
        if self.completed_edit_policy not in COMPLETED_SALE_EDIT_POLICIES:
            raise ValueError(f"Unknown completed sale edit policy: {self.completed_edit_policy}")

    def create(self, *, product_id: int, quantity, rate, sold_on: date) -> Sale:
        self.scope.require_role(AccountRole.FPO)
        if quantity is None or to_quantity(quantity) <= ZERO:
            raise ValidationError("Quantity must be greater than zero")
        if rate is None or to_money(rate) <= ZERO:
            raise ValidationError("Rate must be greater than zero")
        stored_quantity, stored_rate = to_quantity(quantity), to_money(rate)

        with atomic(self.db, "Sale creation"):
            cooperative = get_cooperative(self.db, self.scope.identity)
            product = get_product(self.db, product_id)
            sale = Sale(
                id=next_id(self.db, Sale),
                sold_on=sold_on,
                sold_time=datetime.now().time().replace(microsecond=0),
                cooperative_id=cooperative.id,
                cooperative_name=cooperative.name,
                product_id=product.id,
                product_name=product.name,
                quantity=stored_quantity,
                rate=stored_rate,
                amount=compute_amount(stored_quantity, stored_rate),
                status=EventStatus.PENDING,
            )
            self.db.add(sale)
            self.db.flush()
            record_activity(
                self.db,
                activity_type="sale",
                product_name=product.name,
                quantity=sale.quantity,
                cooperative_id=cooperative.id,
                activity_date=sold_on,
            )

        logger.info(
            "Sale %s created pending: cooperative=%s product=%s qty=%s",
            sale.id,
            sale.cooperative_id,
            sale.product_id,
            sale.quantity,
        )
        self.db.refresh(sale)
        return sale

    def transition(self, sale_id: int, status) -> Sale:
        self.scope.require_role(AccountRole.MAHAFPC)
        new_status = parse_status(status)

        with atomic(self.db, "Sale status update"):
            sale = self.scope.get(self.db, Sale, sale_id, for_update=True)
            previous = sale.status
            effect = post_status_change(
                self.ledger,
                previous=previous,
                current=new_status,
                cooperative_id=sale.cooperative_id,
                product_id=sale.product_id,
                quantity=sale.quantity,
                source_type=SOURCE_TYPE,
                source_id=sale.id,
            )
            sale.status = new_status

        logger.info(
            "Sale %s status %s -> %s (stock: %s)",
            sale_id,
            previous.value,
            new_status.value,
            effect or "unchanged",
        )
        self.db.refresh(sale)
        return sale

    def edit(self, sale_id: int, *, quantity=None, rate=None) -> Sale:
        self.scope.require_role(AccountRole.FPO)
        if quantity is not None and to_quantity(quantity) <= ZERO:
            raise ValidationError("Quantity must be greater than zero")
        if rate is not None and to_money(rate) <= ZERO:
            raise ValidationError("Rate must be greater than zero")

        with atomic(self.db, "Sale update"):
            sale = self.scope.get(self.db, Sale, sale_id, for_update=True)
            old_quantity = to_quantity(sale.quantity)
            new_quantity = to_quantity(quantity) if quantity is not None else old_quantity
            new_rate = to_money(rate) if rate is not None else to_money(sale.rate)

            if sale.status == EventStatus.COMPLETED and new_quantity != old_quantity:
                self._completed_quantity_change(sale, old_quantity, new_quantity)

            if quantity is not None or rate is not None:
                sale.quantity = new_quantity
                sale.rate = new_rate
                sale.amount = compute_amount(new_quantity, new_rate)

        self.db.refresh(sale)
        return sale

    def _completed_quantity_change(self, sale: Sale, old_quantity, new_quantity) -> None:
        if self.completed_edit_policy == "reject":
            raise ConflictError("Quantity of a completed sale cannot be changed")
        if self.completed_edit_policy == "ignore":
            logger.warning(
                "Completed sale %s quantity edited %s -> %s without stock adjustment",
                sale.id,
                old_quantity,
                new_quantity,
            )
            return

        diff = new_quantity - old_quantity
        if diff > ZERO:
            self.ledger.decrement(
                sale.cooperative_id,
                sale.product_id,
                diff,
                source_type=SOURCE_TYPE,
                source_id=sale.id,
                reason="completed sale quantity increased",
            )
        else:
            self.ledger.increment(
                sale.cooperative_id,
                sale.product_id,
                -diff,
                source_type=SOURCE_TYPE,
                source_id=sale.id,
                reason="completed sale quantity reduced",
            )

    def get(self, sale_id: int) -> Sale:
        return self.scope.get(self.db, Sale, sale_id)

    def list(self, *, status: str | None = None, product_id: int | None = None) -> list[Sale]:
        query = self.scope.apply(select(Sale), Sale).order_by(Sale.sold_on.desc(), Sale.id.desc())
        if status is not None:
            query = query.where(Sale.status == parse_status(status))
        if product_id is not None:
            query = query.where(Sale.product_id == product_id)
        return list(self.db.scalars(query).all())
