# tests/unit/services/test_cooperative_service.py
from datetime import date

import pytest

from agrichain.core.exceptions import AuthorizationError, NotFoundError
from agrichain.services.activities import record_activity
from agrichain.services.cooperatives import daily_records, get_cooperative_account, list_cooperatives
from agrichain.services.procurements import ProcurementService
from agrichain.services.sales import SaleService


def _procure(db_session, scope, farmer, product, procured_on):
    return ProcurementService(db_session, scope).create(
        farmer_id=farmer.id,
        product_id=product.id,
        quantity=2,
        rate=10,
        procured_on=procured_on,
    )


def test_directory_lists_only_cooperatives(db_session, cooperative, other_cooperative, aggregator, retailer):
    assert [a.username for a in list_cooperatives(db_session)] == ["greenvalley", "sunrise"]
    assert get_cooperative_account(db_session, other_cooperative.id).name == "Sunrise FPO"

    with pytest.raises(NotFoundError, match="FPO not found"):
        get_cooperative_account(db_session, retailer.id)


def test_daily_records_for_one_cooperative_and_day(
    db_session,
    cooperative,
    cooperative_scope,
    other_cooperative_scope,
    aggregator_scope,
    farmer,
    other_farmer,
    wheat,
):
    first = _procure(db_session, cooperative_scope, farmer, wheat, date(2024, 6, 1))
    _procure(db_session, cooperative_scope, farmer, wheat, date(2024, 6, 2))
    _procure(db_session, other_cooperative_scope, other_farmer, wheat, date(2024, 6, 1))
    sale = SaleService(db_session, cooperative_scope).create(
        product_id=wheat.id, quantity=1, rate=12, sold_on=date(2024, 6, 1)
    )

    records = daily_records(db_session, aggregator_scope, cooperative.id, date(2024, 6, 1))

    assert [p.id for p in records.procurements] == [first.id]
    assert [s.id for s in records.sales] == [sale.id]
    assert sorted(a.type for a in records.activities) == ["procurement", "sale"]

    everything = daily_records(db_session, aggregator_scope, cooperative.id)
    assert len(everything.procurements) == 2
    assert len(everything.activities) == 3


def test_daily_records_are_for_the_aggregator(db_session, cooperative, cooperative_scope, aggregator_scope, retailer):
    record_activity(db_session, activity_type="note", product_name="Wheat", cooperative_id=cooperative.id)
    db_session.commit()

    with pytest.raises(AuthorizationError):
        daily_records(db_session, cooperative_scope, cooperative.id)
    with pytest.raises(NotFoundError, match="FPO not found"):
        daily_records(db_session, aggregator_scope, retailer.id)
