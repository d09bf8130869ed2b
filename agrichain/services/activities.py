from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from agrichain.core.exceptions import ValidationError
from agrichain.models.account import AccountRole
from agrichain.models.events import Activity
from agrichain.services.scope import AccessScope
from agrichain.services.sequence import next_id
from agrichain.services.transaction import atomic


def record_activity(
    db: Session,
    *,
    activity_type: str,
    product_name: str,
    quantity=None,
    cooperative_id: int | None = None,
    activity_date: date | None = None,
    activity_time=None,
) -> Activity:
    """Append an audit entry in the caller's transaction."""
    now = datetime.now()
    activity = Activity(
        id=next_id(db, Activity),
        activity_date=activity_date or now.date(),
        activity_time=activity_time or now.time().replace(microsecond=0),
        type=activity_type,
        quantity=Decimal(str(quantity)) if quantity is not None else Decimal("0"),
        product_name=product_name,
        cooperative_id=cooperative_id,
    )
    db.add(activity)
    db.flush()
    return activity


def create_manual_activity(
    db: Session,
    scope: AccessScope,
    *,
    activity_type: str,
    product_name: str,
    activity_date: date,
    activity_time,
    quantity=None,
    cooperative_id: int | None = None,
) -> Activity:
    if not activity_type.strip() or not product_name.strip():
        raise ValidationError("Date, time, type, and product name are required")
    scope.require_role(AccountRole.FPO, AccountRole.MAHAFPC)
    target = scope.resolve_cooperative(cooperative_id)
    with atomic(db, "Activity creation"):
        activity = record_activity(
            db,
            activity_type=activity_type.strip(),
            product_name=product_name.strip(),
            quantity=quantity,
            cooperative_id=target,
            activity_date=activity_date,
            activity_time=activity_time,
        )
    db.refresh(activity)
    return activity


def list_activities(
    db: Session,
    scope: AccessScope,
    *,
    on_date: date | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[Activity]:
    query = scope.apply(select(Activity), Activity).order_by(
        Activity.activity_date.desc(),
        Activity.activity_time.desc(),
        Activity.id.desc(),
    )
    if start_date is not None and end_date is not None:
        query = query.where(Activity.activity_date >= start_date, Activity.activity_date <= end_date)
    elif on_date is not None:
        query = query.where(Activity.activity_date == on_date)
    return list(db.scalars(query).all())
