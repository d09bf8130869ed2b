from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from agrichain.api.deps import get_scope
from agrichain.db.database import get_db
from agrichain.schemas.events import ActivityCreate, ActivityOut
from agrichain.services.activities import create_manual_activity, list_activities
from agrichain.services.scope import AccessScope

router = APIRouter(prefix="/activities", tags=["Activities"])


@router.get("", response_model=list[ActivityOut])
def get_activities(
    on_date: date | None = Query(default=None, alias="date"),
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    return list_activities(db, scope, on_date=on_date, start_date=start_date, end_date=end_date)


@router.post("", response_model=ActivityOut, status_code=status.HTTP_201_CREATED)
def create_activity(
    payload: ActivityCreate,
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    return create_manual_activity(
        db,
        scope,
        activity_type=payload.type,
        product_name=payload.product_name,
        activity_date=payload.activity_date,
        activity_time=payload.activity_time,
        quantity=payload.quantity,
        cooperative_id=payload.cooperative_id,
    )
