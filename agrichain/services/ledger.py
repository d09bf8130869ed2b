"""
Per-(cooperative, product) stock quantities.

The ledger never commits. Each adjustment locks the matching ``stock_rows``
row, applies the delta and appends a ``stock_movements`` entry in the
caller's transaction, so the lifecycle that triggered it commits the event
record and the stock change together or not at all.
"""

import logging
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from agrichain.core.exceptions import ConflictError, NotFoundError, ValidationError
from agrichain.models.inventory import Product, StockMovement, StockRow
from agrichain.services.amounts import ZERO, to_quantity
from agrichain.services.scope import AccessScope

logger = logging.getLogger(__name__)


def _positive_delta(delta) -> Decimal:
    value = to_quantity(delta)
    if value <= ZERO:
        raise ValidationError("Ledger delta must be greater than zero")
    return value


class InventoryLedger:
    def __init__(self, db: Session, actor_id: int | None = None):
        self.db = db
        self.actor_id = actor_id

    def _locked_row(self, cooperative_id: int, product_id: int) -> StockRow | None:
        return self.db.scalar(
            select(StockRow)
            .where(StockRow.cooperative_id == cooperative_id, StockRow.product_id == product_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )

    def _create_row(
        self,
        cooperative_id: int,
        product_id: int,
        min_stock=None,
        max_stock=None,
    ) -> StockRow:
        product = self.db.get(Product, product_id)
        if not product:
            raise NotFoundError("Product not found")
        stock = StockRow(
            cooperative_id=cooperative_id,
            product_id=product_id,
            product_name=product.name,
            quantity=ZERO,
            min_stock=to_quantity(min_stock) if min_stock is not None else ZERO,
            max_stock=to_quantity(max_stock) if max_stock is not None else ZERO,
            unit=product.unit,
        )
        self.db.add(stock)
        try:
            self.db.flush()
        except IntegrityError as exc:
            logger.warning(
                "Concurrent creation of stock row cooperative=%s product=%s",
                cooperative_id,
                product_id,
            )
            raise ConflictError("Inventory row was created concurrently, retry the request") from exc
        return stock

    def _record(
        self,
        stock: StockRow,
        *,
        requested: Decimal,
        before: Decimal,
        source_type: str,
        source_id: int | None,
        reason: str | None,
    ) -> None:
        after = to_quantity(stock.quantity)
        self.db.add(
            StockMovement(
                stock_id=stock.id,
                cooperative_id=stock.cooperative_id,
                product_id=stock.product_id,
                actor_id=self.actor_id,
                source_type=source_type,
                source_id=source_id,
                requested_delta=requested,
                quantity_delta=after - before,
                quantity_before=before,
                quantity_after=after,
                reason=reason,
            )
        )
        self.db.flush()

    def increment(
        self,
        cooperative_id: int,
        product_id: int,
        delta,
        *,
        source_type: str = "manual",
        source_id: int | None = None,
        reason: str | None = None,
        min_stock=None,
        max_stock=None,
    ) -> StockRow:
        amount = _positive_delta(delta)
        stock = self._locked_row(cooperative_id, product_id)
        if stock is None:
            stock = self._create_row(cooperative_id, product_id, min_stock=min_stock, max_stock=max_stock)

        before = to_quantity(stock.quantity)
        stock.quantity = before + amount
        self._record(
            stock,
            requested=amount,
            before=before,
            source_type=source_type,
            source_id=source_id,
            reason=reason,
        )
        logger.info(
            "Stock +%s cooperative=%s product=%s (%s -> %s) via %s:%s",
            amount,
            cooperative_id,
            product_id,
            before,
            stock.quantity,
            source_type,
            source_id,
        )
        return stock

    def decrement(
        self,
        cooperative_id: int,
        product_id: int,
        delta,
        *,
        source_type: str = "manual",
        source_id: int | None = None,
        reason: str | None = None,
    ) -> StockRow | None:
        amount = _positive_delta(delta)
        stock = self._locked_row(cooperative_id, product_id)
        if stock is None:
            logger.warning(
                "No stock row to decrement cooperative=%s product=%s by %s via %s:%s",
                cooperative_id,
                product_id,
                amount,
                source_type,
                source_id,
            )
            return None

        before = to_quantity(stock.quantity)
        after = max(ZERO, before - amount)
        if before < amount:
            logger.warning(
                "Stock clamped to zero cooperative=%s product=%s: requested -%s, on hand %s",
                cooperative_id,
                product_id,
                amount,
                before,
            )
        stock.quantity = after
        self._record(
            stock,
            requested=-amount,
            before=before,
            source_type=source_type,
            source_id=source_id,
            reason=reason,
        )
        logger.info(
            "Stock -%s cooperative=%s product=%s (%s -> %s) via %s:%s",
            before - after,
            cooperative_id,
            product_id,
            before,
            after,
            source_type,
            source_id,
        )
        return stock

    def set_absolute(
        self,
        cooperative_id: int,
        product_id: int,
        quantity,
        min_stock=None,
        max_stock=None,
        *,
        reason: str | None = None,
    ) -> StockRow:
        target = to_quantity(quantity)
        if target < ZERO:
            raise ValidationError("Quantity cannot be negative")

        stock = self._locked_row(cooperative_id, product_id)
        if stock is None:
            stock = self._create_row(cooperative_id, product_id, min_stock=min_stock, max_stock=max_stock)
        else:
            if min_stock is not None:
                stock.min_stock = to_quantity(min_stock)
            if max_stock is not None:
                stock.max_stock = to_quantity(max_stock)

        before = to_quantity(stock.quantity)
        stock.quantity = target
        self._record(
            stock,
            requested=target - before,
            before=before,
            source_type="manual",
            source_id=None,
            reason=reason,
        )
        return stock

    def update_limits(
        self,
        scope: AccessScope,
        stock_id: int,
        *,
        quantity=None,
        min_stock=None,
        max_stock=None,
        reason: str | None = None,
    ) -> StockRow:
        stock = scope.get(self.db, StockRow, stock_id, for_update=True)
        if quantity is None:
            if min_stock is not None:
                stock.min_stock = to_quantity(min_stock)
            if max_stock is not None:
                stock.max_stock = to_quantity(max_stock)
            self.db.flush()
            return stock
        return self.set_absolute(
            stock.cooperative_id,
            stock.product_id,
            quantity,
            min_stock=min_stock,
            max_stock=max_stock,
            reason=reason,
        )

    def read(
        self,
        scope: AccessScope,
        cooperative_id: int | None = None,
        product_id: int | None = None,
    ) -> list[StockRow]:
        effective_cooperative_id = scope.resolve_cooperative(cooperative_id)
        query = scope.apply(select(StockRow), StockRow).order_by(StockRow.cooperative_id, StockRow.product_id)
        if effective_cooperative_id is not None:
            query = query.where(StockRow.cooperative_id == effective_cooperative_id)
        if product_id is not None:
            query = query.where(StockRow.product_id == product_id)
        return list(self.db.scalars(query).all())

    def quantity_of(self, cooperative_id: int, product_id: int) -> Decimal:
        stock = self.db.scalar(
            select(StockRow).where(
                StockRow.cooperative_id == cooperative_id,
                StockRow.product_id == product_id,
            )
        )
        return to_quantity(stock.quantity) if stock else ZERO

    def movements(
        self,
        scope: AccessScope,
        cooperative_id: int | None = None,
        product_id: int | None = None,
        source_type: str | None = None,
    ) -> list[StockMovement]:
        effective_cooperative_id = scope.resolve_cooperative(cooperative_id)
        query = scope.apply(select(StockMovement), StockMovement).order_by(StockMovement.id.desc())
        if effective_cooperative_id is not None:
            query = query.where(StockMovement.cooperative_id == effective_cooperative_id)
        if product_id is not None:
            query = query.where(StockMovement.product_id == product_id)
        if source_type is not None:
            query = query.where(StockMovement.source_type == source_type)
        return list(self.db.scalars(query).all())
