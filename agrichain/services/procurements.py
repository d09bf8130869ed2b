"""
Procurement lifecycle: goods bought by a cooperative from one of its farmers.

Each operation posts the stock delta it implies to the ledger inside the same
transaction as the procurement record:

* create  -> +quantity
* edit    -> +/- (new quantity - old quantity)
* delete  -> -quantity, then the record is removed
"""

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from agrichain.core.exceptions import ValidationError
from agrichain.models.account import AccountRole
from agrichain.models.events import Procurement
from agrichain.services.activities import record_activity
from agrichain.services.amounts import ZERO, compute_amount, to_money, to_quantity
from agrichain.services.ledger import InventoryLedger
from agrichain.services.reference import get_cooperative_farmer, get_product
from agrichain.services.scope import AccessScope
from agrichain.services.sequence import next_id
from agrichain.services.transaction import atomic

logger = logging.getLogger(__name__)

SOURCE_TYPE = "procurement"


def _require_positive(value, label: str, convert=to_quantity):
    if value is None or convert(value, label) <= ZERO:
        raise ValidationError(f"{label} must be greater than zero")


class ProcurementService:
    def __init__(self, db: Session, scope: AccessScope):
        self.db = db
        self.scope = scope
        self.ledger = InventoryLedger(db, actor_id=scope.identity)

    def create(self, *, farmer_id: int, product_id: int, quantity, rate, procured_on: date) -> Procurement:
        self.scope.require_role(AccountRole.FPO)
        _require_positive(quantity, "Quantity")
        _require_positive(rate, "Rate", to_money)
        cooperative_id = self.scope.identity
        stored_quantity, stored_rate = to_quantity(quantity), to_money(rate)

        with atomic(self.db, "Procurement creation"):
            farmer = get_cooperative_farmer(self.db, farmer_id, cooperative_id)
            product = get_product(self.db, product_id)

            procurement = Procurement(
                id=next_id(self.db, Procurement),
                procured_on=procured_on,
                farmer_id=farmer.id,
                farmer_name=farmer.name,
                farmer_mobile_number=farmer.mobile_number,
                farmer_village_name=farmer.village_name,
                product_id=product.id,
                product_name=product.name,
                quantity=stored_quantity,
                rate=stored_rate,
                amount=compute_amount(stored_quantity, stored_rate),
                cooperative_id=cooperative_id,
            )
            self.db.add(procurement)
            self.db.flush()

            self.ledger.increment(
                cooperative_id,
                product.id,
                procurement.quantity,
                source_type=SOURCE_TYPE,
                source_id=procurement.id,
                reason="procurement recorded",
            )
            record_activity(
                self.db,
                activity_type="procurement",
                product_name=product.name,
                quantity=procurement.quantity,
                cooperative_id=cooperative_id,
                activity_date=procured_on,
            )

        logger.info(
            "Procurement %s recorded: cooperative=%s product=%s qty=%s amount=%s",
            procurement.id,
            cooperative_id,
            product.id,
            procurement.quantity,
            procurement.amount,
        )
        self.db.refresh(procurement)
        return procurement

    def edit(self, procurement_id: int, *, quantity=None, rate=None) -> Procurement:
        self.scope.require_role(AccountRole.FPO)
        if quantity is not None:
            _require_positive(quantity, "Quantity")
        if rate is not None:
            _require_positive(rate, "Rate", to_money)

        with atomic(self.db, "Procurement update"):
            procurement = self.scope.get(self.db, Procurement, procurement_id, for_update=True)
            old_quantity = to_quantity(procurement.quantity)
            new_quantity = to_quantity(quantity) if quantity is not None else old_quantity
            new_rate = to_money(rate) if rate is not None else to_money(procurement.rate)

            diff = new_quantity - old_quantity
            if diff > ZERO:
                self.ledger.increment(
                    procurement.cooperative_id,
                    procurement.product_id,
                    diff,
                    source_type=SOURCE_TYPE,
                    source_id=procurement.id,
                    reason="procurement quantity increased",
                )
            elif diff < ZERO:
                self.ledger.decrement(
                    procurement.cooperative_id,
                    procurement.product_id,
                    -diff,
                    source_type=SOURCE_TYPE,
                    source_id=procurement.id,
                    reason="procurement quantity reduced",
                )

            if quantity is not None or rate is not None:
                procurement.quantity = new_quantity
                procurement.rate = new_rate
                procurement.amount = compute_amount(new_quantity, new_rate)

        self.db.refresh(procurement)
        return procurement

    def delete(self, procurement_id: int) -> None:
        self.scope.require_role(AccountRole.FPO)
        with atomic(self.db, "Procurement deletion"):
            procurement = self.scope.get(self.db, Procurement, procurement_id, for_update=True)
            self.ledger.decrement(
                procurement.cooperative_id,
                procurement.product_id,
                procurement.quantity,
                source_type=SOURCE_TYPE,
                source_id=procurement.id,
                reason="procurement deleted",
            )
            logger.info("Procurement %s deleted, stock reversed by %s", procurement.id, procurement.quantity)
            self.db.delete(procurement)

    def get(self, procurement_id: int) -> Procurement:
        return self.scope.get(self.db, Procurement, procurement_id)

    def list(
        self,
        *,
        product_id: int | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[Procurement]:
        query = self.scope.apply(select(Procurement), Procurement).order_by(
            Procurement.procured_on.desc(),
            Procurement.id.desc(),
        )
        if product_id is not None:
            query = query.where(Procurement.product_id == product_id)
        if date_from is not None:
            query = query.where(Procurement.procured_on >= date_from)
        if date_to is not None:
            query = query.where(Procurement.procured_on <= date_to)
        return list(self.db.scalars(query).all())
