"""
Payments recorded against cooperatives.

Two kinds share one table:

* farmer payments, made by a cooperative to one of its own farmers; they are
  ``completed`` as soon as they are recorded and only the paying cooperative
  may edit them.
* aggregator payments to a cooperative, created ``pending`` (unless a status
  is given) and moved through pending/completed/rejected by the aggregator.

Payments never touch stock.
"""

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from agrichain.core.exceptions import ConflictError, ValidationError
from agrichain.models.account import AccountRole
from agrichain.models.events import EventStatus, Payment
from agrichain.services.amounts import MAX_AMOUNT, ZERO, to_money
from agrichain.services.reference import get_cooperative, get_cooperative_farmer
from agrichain.services.scope import AccessScope
from agrichain.services.sequence import next_id
from agrichain.services.status_flow import parse_status
from agrichain.services.transaction import atomic

logger = logging.getLogger(__name__)

FARMER_PAYMENT = "farmer_payment"


def _positive_amount(amount):
    if amount is None:
        raise ValidationError("Amount is required")
    value = to_money(amount, "Amount", MAX_AMOUNT)
    if value <= ZERO:
        raise ValidationError("Amount must be greater than zero")
    return value


class PaymentService:
    def __init__(self, db: Session, scope: AccessScope):
        self.db = db
        self.scope = scope

    def create_farmer_payment(
        self,
        *,
        farmer_id: int,
        amount,
        paid_on: date,
        description: str | None = None,
    ) -> Payment:
        self.scope.require_role(AccountRole.FPO)
        value = _positive_amount(amount)

        with atomic(self.db, "Farmer payment creation"):
            cooperative = get_cooperative(self.db, self.scope.identity)
            farmer = get_cooperative_farmer(self.db, farmer_id, cooperative.id)
            payment = Payment(
                id=next_id(self.db, Payment),
                paid_on=paid_on,
                type=FARMER_PAYMENT,
                amount=value,
                cooperative_id=cooperative.id,
                cooperative_name=cooperative.name,
                farmer_id=farmer.id,
                farmer_name=farmer.name,
                description=(description or "").strip() or "Payment to farmer",
                status=EventStatus.COMPLETED,
            )
            self.db.add(payment)
            self.db.flush()

        logger.info(
            "Farmer payment %s recorded: cooperative=%s farmer=%s amount=%s",
            payment.id,
            payment.cooperative_id,
            payment.farmer_id,
            payment.amount,
        )
        self.db.refresh(payment)
        return payment

    def create_cooperative_payment(
        self,
        *,
        cooperative_id: int | None,
        payment_type: str | None,
        amount,
        paid_on: date,
        status=None,
        description: str | None = None,
    ) -> Payment:
        self.scope.require_role(AccountRole.MAHAFPC)
        payment_type = (payment_type or "").strip()
        if not payment_type or cooperative_id is None:
            raise ValidationError("Type, amount, date, and FPO ID are required")
        if payment_type == FARMER_PAYMENT:
            raise ValidationError("Farmer payments are recorded by the cooperative")
        value = _positive_amount(amount)
        initial_status = parse_status(status) if status is not None else EventStatus.PENDING

        with atomic(self.db, "Payment creation"):
            cooperative = get_cooperative(self.db, cooperative_id)
            payment = Payment(
                id=next_id(self.db, Payment),
                paid_on=paid_on,
                type=payment_type,
                amount=value,
                cooperative_id=cooperative.id,
                cooperative_name=cooperative.name,
                description=(description or "").strip(),
                status=initial_status,
            )
            self.db.add(payment)
            self.db.flush()

        logger.info(
            "Payment %s to cooperative %s created %s: type=%s amount=%s",
            payment.id,
            payment.cooperative_id,
            payment.status.value,
            payment.type,
            payment.amount,
        )
        self.db.refresh(payment)
        return payment

    def transition(self, payment_id: int, status) -> Payment:
        self.scope.require_role(AccountRole.MAHAFPC)
        new_status = parse_status(status)

        with atomic(self.db, "Payment status update"):
            payment = self.scope.get(self.db, Payment, payment_id, for_update=True)
            if payment.type == FARMER_PAYMENT:
                raise ConflictError("Farmer payments are completed when recorded")
            previous = payment.status
            payment.status = new_status

        logger.info("Payment %s status %s -> %s", payment_id, previous.value, new_status.value)
        self.db.refresh(payment)
        return payment

    def edit(
        self,
        payment_id: int,
        *,
        amount=None,
        paid_on: date | None = None,
        description: str | None = None,
    ) -> Payment:
        self.scope.require_role(AccountRole.FPO, AccountRole.MAHAFPC)
        value = _positive_amount(amount) if amount is not None else None

        with atomic(self.db, "Payment update"):
            payment = self.scope.get(self.db, Payment, payment_id, for_update=True)
            # The issuer edits: cooperatives their farmer payments, the aggregator the rest.
            issuer = AccountRole.FPO if payment.type == FARMER_PAYMENT else AccountRole.MAHAFPC
            self.scope.require_role(issuer)
            if value is not None:
                payment.amount = value
            if paid_on is not None:
                payment.paid_on = paid_on
            if description is not None:
                payment.description = description.strip()

        self.db.refresh(payment)
        return payment

    def get(self, payment_id: int) -> Payment:
        return self.scope.get(self.db, Payment, payment_id)

    def list(
        self,
        *,
        status: str | None = None,
        cooperative_id: int | None = None,
        payment_type: str | None = None,
    ) -> list[Payment]:
        query = self.scope.apply(select(Payment), Payment).order_by(Payment.paid_on.desc(), Payment.id.desc())
        if status is not None:
            query = query.where(Payment.status == parse_status(status))
        if cooperative_id is not None:
            query = query.where(Payment.cooperative_id == cooperative_id)
        if payment_type is not None:
            query = query.where(Payment.type == payment_type)
        return list(self.db.scalars(query).all())
