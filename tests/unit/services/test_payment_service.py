# tests/unit/services/test_payment_service.py
from datetime import date
from decimal import Decimal

import pytest

from agrichain.core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from agrichain.models.events import EventStatus
from agrichain.services.payments import FARMER_PAYMENT, PaymentService

PAID_ON = date(2024, 6, 5)


def _farmer_payment(db_session, scope, farmer, amount=1500):
    return PaymentService(db_session, scope).create_farmer_payment(
        farmer_id=farmer.id,
        amount=amount,
        paid_on=PAID_ON,
    )


def _cooperative_payment(db_session, scope, cooperative, **kwargs):
    return PaymentService(db_session, scope).create_cooperative_payment(
        cooperative_id=cooperative.id,
        payment_type=kwargs.pop("payment_type", "procurement_settlement"),
        amount=kwargs.pop("amount", 25000),
        paid_on=PAID_ON,
        **kwargs,
    )


def test_farmer_payment_is_completed_immediately(db_session, cooperative, cooperative_scope, farmer):
    payment = _farmer_payment(db_session, cooperative_scope, farmer)

    assert payment.type == FARMER_PAYMENT
    assert payment.status == EventStatus.COMPLETED
    assert payment.amount == Decimal("1500.00")
    assert payment.cooperative_id == cooperative.id
    assert payment.farmer_name == "Ramesh Patil"
    assert payment.description == "Payment to farmer"


def test_farmer_must_belong_to_paying_cooperative(db_session, cooperative_scope, other_farmer):
    with pytest.raises(NotFoundError, match="does not belong to your FPO"):
        _farmer_payment(db_session, cooperative_scope, other_farmer)


@pytest.mark.parametrize("amount", [0, -5, None, "1e30"])
def test_amount_must_be_positive_and_representable(db_session, cooperative_scope, farmer, amount):
    with pytest.raises(ValidationError, match="Amount"):
        _farmer_payment(db_session, cooperative_scope, farmer, amount=amount)


def test_cooperative_payment_status_flow(db_session, aggregator_scope, cooperative):
    payment = _cooperative_payment(db_session, aggregator_scope, cooperative)
    service = PaymentService(db_session, aggregator_scope)

    assert payment.status == EventStatus.PENDING
    assert payment.cooperative_name == "Green Valley FPO"
    assert service.transition(payment.id, "completed").status == EventStatus.COMPLETED
    assert service.transition(payment.id, "rejected").status == EventStatus.REJECTED

    with pytest.raises(ValidationError, match="Valid status is required"):
        service.transition(payment.id, "paid")


def test_cooperative_payment_requires_type_and_cooperative(db_session, aggregator_scope, cooperative):
    service = PaymentService(db_session, aggregator_scope)

    with pytest.raises(ValidationError, match="FPO ID are required"):
        _cooperative_payment(db_session, aggregator_scope, cooperative, payment_type=" ")
    with pytest.raises(ValidationError, match="FPO ID are required"):
        service.create_cooperative_payment(cooperative_id=None, payment_type="advance", amount=10, paid_on=PAID_ON)


def test_cooperative_payment_target_must_be_a_cooperative(db_session, aggregator_scope, retailer):
    with pytest.raises(NotFoundError, match="FPO not found"):
        _cooperative_payment(db_session, aggregator_scope, retailer)


def test_farmer_payments_cannot_change_status(db_session, cooperative_scope, aggregator_scope, farmer):
    payment = _farmer_payment(db_session, cooperative_scope, farmer)

    with pytest.raises(ConflictError):
        PaymentService(db_session, aggregator_scope).transition(payment.id, "pending")

    assert PaymentService(db_session, cooperative_scope).get(payment.id).status == EventStatus.COMPLETED


def test_roles_are_enforced(db_session, cooperative, cooperative_scope, aggregator_scope, retailer_scope, farmer):
    with pytest.raises(AuthorizationError):
        _cooperative_payment(db_session, cooperative_scope, cooperative)
    with pytest.raises(AuthorizationError):
        _farmer_payment(db_session, aggregator_scope, farmer)

    payment = _cooperative_payment(db_session, aggregator_scope, cooperative)
    with pytest.raises(AuthorizationError):
        PaymentService(db_session, cooperative_scope).transition(payment.id, "completed")
    with pytest.raises(AuthorizationError):
        PaymentService(db_session, retailer_scope).get(payment.id)


def test_edit_is_left_to_the_issuer(db_session, cooperative, cooperative_scope, aggregator_scope, farmer):
    farmer_payment = _farmer_payment(db_session, cooperative_scope, farmer)
    settlement = _cooperative_payment(db_session, aggregator_scope, cooperative)

    edited = PaymentService(db_session, cooperative_scope).edit(
        farmer_payment.id, amount=Decimal("1750.5"), description=" Balance "
    )
    assert edited.amount == Decimal("1750.50")
    assert edited.description == "Balance"

    with pytest.raises(AuthorizationError):
        PaymentService(db_session, cooperative_scope).edit(settlement.id, amount=1)
    with pytest.raises(AuthorizationError):
        PaymentService(db_session, aggregator_scope).edit(farmer_payment.id, amount=1)

    moved = PaymentService(db_session, aggregator_scope).edit(settlement.id, paid_on=date(2024, 6, 9))
    assert moved.paid_on == date(2024, 6, 9)


def test_other_cooperative_cannot_touch_payments(
    db_session, cooperative_scope, other_cooperative_scope, farmer
):
    payment = _farmer_payment(db_session, cooperative_scope, farmer)

    with pytest.raises(AuthorizationError):
        PaymentService(db_session, other_cooperative_scope).get(payment.id)
    with pytest.raises(AuthorizationError):
        PaymentService(db_session, other_cooperative_scope).edit(payment.id, amount=1)


def test_list_is_scoped(
    db_session,
    cooperative,
    other_cooperative,
    cooperative_scope,
    other_cooperative_scope,
    aggregator_scope,
    retailer_scope,
    farmer,
):
    _farmer_payment(db_session, cooperative_scope, farmer)
    _cooperative_payment(db_session, aggregator_scope, cooperative)
    _cooperative_payment(db_session, aggregator_scope, other_cooperative, status="completed")

    admin = PaymentService(db_session, aggregator_scope)
    assert len(PaymentService(db_session, cooperative_scope).list()) == 2
    assert len(PaymentService(db_session, other_cooperative_scope).list()) == 1
    assert len(admin.list()) == 3
    assert len(admin.list(status="completed")) == 2
    assert [p.type for p in admin.list(payment_type=FARMER_PAYMENT)] == [FARMER_PAYMENT]
    assert len(admin.list(cooperative_id=cooperative.id)) == 2
    assert PaymentService(db_session, retailer_scope).list() == []
