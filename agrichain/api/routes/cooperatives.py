from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from agrichain.api.deps import get_current_account, get_scope
from agrichain.db.database import get_db
from agrichain.models.account import Account
from agrichain.schemas.events import DailyRecordsOut
from agrichain.schemas.master import AccountOut
from agrichain.services.cooperatives import daily_records, get_cooperative_account, list_cooperatives
from agrichain.services.scope import AccessScope

router = APIRouter(prefix="/fpo", tags=["FPO"])


@router.get("", response_model=list[AccountOut])
def get_cooperatives(
    current_account: Account = Depends(get_current_account),
    db: Session = Depends(get_db),
):
    return list_cooperatives(db)


@router.get("/{cooperative_id}", response_model=AccountOut)
def get_cooperative(
    cooperative_id: int,
    current_account: Account = Depends(get_current_account),
    db: Session = Depends(get_db),
):
    return get_cooperative_account(db, cooperative_id)


@router.get("/{cooperative_id}/daily-records", response_model=DailyRecordsOut)
def get_daily_records(
    cooperative_id: int,
    on_date: date | None = Query(default=None, alias="date"),
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    records = daily_records(db, scope, cooperative_id, on_date)
    return DailyRecordsOut.model_validate(records, from_attributes=True)
