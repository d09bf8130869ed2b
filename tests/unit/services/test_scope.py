# tests/unit/services/test_scope.py
from datetime import date, time
from decimal import Decimal

import pytest
from sqlalchemy import select

from agrichain.core.exceptions import AuthorizationError, NotFoundError
from agrichain.models.account import AccountRole
from agrichain.models.events import EventStatus, Sale
from agrichain.services.scope import for_caller


def _sale(db_session, sale_id, cooperative, product):
    sale = Sale(
        id=sale_id,
        sold_on=date(2024, 3, 1),
        sold_time=time(10, 0),
        cooperative_id=cooperative.id,
        cooperative_name=cooperative.name,
        product_id=product.id,
        product_name=product.name,
        quantity=Decimal("1"),
        rate=Decimal("10"),
        amount=Decimal("10"),
        status=EventStatus.PENDING,
    )
    db_session.add(sale)
    db_session.commit()
    return sale


def test_for_caller_accepts_role_values():
    scope = for_caller("fpo", "3")

    assert scope.role == AccountRole.FPO
    assert scope.identity == 3
    assert scope.is_cooperative
    assert not scope.is_aggregator


def test_apply_filters_rows_per_role(
    db_session, cooperative, other_cooperative, wheat, cooperative_scope, aggregator_scope, retailer_scope
):
    _sale(db_session, 1, cooperative, wheat)
    _sale(db_session, 2, other_cooperative, wheat)

    def visible(scope):
        return [s.id for s in db_session.scalars(scope.apply(select(Sale), Sale).order_by(Sale.id))]

    assert visible(cooperative_scope) == [1]
    assert visible(aggregator_scope) == [1, 2]
    assert visible(retailer_scope) == []


def test_get_checks_existence_then_visibility(db_session, other_cooperative, wheat, cooperative_scope):
    _sale(db_session, 5, other_cooperative, wheat)

    with pytest.raises(NotFoundError, match="Sale not found"):
        cooperative_scope.get(db_session, Sale, 99)
    with pytest.raises(AuthorizationError):
        cooperative_scope.get(db_session, Sale, 5)


def test_resolve_cooperative(cooperative_scope, aggregator_scope, retailer_scope, cooperative):
    assert cooperative_scope.resolve_cooperative(None) == cooperative.id
    assert cooperative_scope.resolve_cooperative(cooperative.id) == cooperative.id
    assert aggregator_scope.resolve_cooperative(None) is None
    assert aggregator_scope.resolve_cooperative(12) == 12
    with pytest.raises(AuthorizationError, match="Cross-cooperative"):
        cooperative_scope.resolve_cooperative(cooperative.id + 100)
    with pytest.raises(AuthorizationError):
        retailer_scope.resolve_cooperative(None)


def test_require_role_names_allowed_roles(retailer_scope):
    with pytest.raises(AuthorizationError, match="Role required: fpo, mahafpc"):
        retailer_scope.require_role(AccountRole.FPO, AccountRole.MAHAFPC)
