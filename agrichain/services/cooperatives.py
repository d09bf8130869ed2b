"""Cooperative directory and the aggregator's per-cooperative daily view."""

from dataclasses import dataclass, field
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from agrichain.models.account import Account, AccountRole
from agrichain.models.events import Activity, Procurement, Sale
from agrichain.services.reference import get_cooperative
from agrichain.services.scope import AccessScope


@dataclass
class DailyRecords:
    procurements: list[Procurement] = field(default_factory=list)
    sales: list[Sale] = field(default_factory=list)
    activities: list[Activity] = field(default_factory=list)


def list_cooperatives(db: Session) -> list[Account]:
    query = select(Account).where(Account.role == AccountRole.FPO).order_by(Account.id)
    return list(db.scalars(query).all())


def get_cooperative_account(db: Session, cooperative_id: int) -> Account:
    return get_cooperative(db, cooperative_id)


def daily_records(
    db: Session,
    scope: AccessScope,
    cooperative_id: int,
    on_date: date | None = None,
) -> DailyRecords:
    """Procurements, sales and activities of one cooperative, optionally for a single day."""
    scope.require_role(AccountRole.MAHAFPC)
    cooperative = get_cooperative(db, cooperative_id)

    def _rows(model, date_column, *order_by):
        query = scope.apply(select(model), model).where(model.cooperative_id == cooperative.id)
        if on_date is not None:
            query = query.where(date_column == on_date)
        return list(db.scalars(query.order_by(*order_by)).all())

    return DailyRecords(
        procurements=_rows(Procurement, Procurement.procured_on, Procurement.id),
        sales=_rows(Sale, Sale.sold_on, Sale.id),
        activities=_rows(Activity, Activity.activity_date, Activity.activity_time.desc(), Activity.id.desc()),
    )
