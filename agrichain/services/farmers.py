import logging
import re

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from agrichain.core.exceptions import ValidationError
from agrichain.models.account import AccountRole
from agrichain.models.events import Payment, Procurement
from agrichain.models.inventory import Farmer
from agrichain.services.scope import AccessScope
from agrichain.services.transaction import atomic

logger = logging.getLogger(__name__)

MOBILE_PATTERN = re.compile(r"^[0-9]{10}$")


def _check_mobile(db: Session, cooperative_id: int, mobile_number: str, exclude_id: int | None = None) -> None:
    if not MOBILE_PATTERN.match(mobile_number):
        raise ValidationError("Mobile number must be 10 digits")
    query = select(Farmer.id).where(
        Farmer.cooperative_id == cooperative_id,
        Farmer.mobile_number == mobile_number,
    )
    if exclude_id is not None:
        query = query.where(Farmer.id != exclude_id)
    if db.scalar(query) is not None:
        raise ValidationError("Farmer with this mobile number already exists")


def register_farmer(
    db: Session,
    scope: AccessScope,
    *,
    name: str,
    mobile_number: str,
    village_name: str,
) -> Farmer:
    """Register a farmer under the calling cooperative."""
    scope.require_role(AccountRole.FPO)
    name = (name or "").strip()
    mobile_number = (mobile_number or "").strip()
    village_name = (village_name or "").strip()
    if not name or not mobile_number or not village_name:
        raise ValidationError("Name, mobile number, and village name are required")
    _check_mobile(db, scope.identity, mobile_number)

    with atomic(db, "Farmer registration"):
        farmer = Farmer(
            cooperative_id=scope.identity,
            name=name,
            mobile_number=mobile_number,
            village_name=village_name,
        )
        db.add(farmer)
    db.refresh(farmer)
    return farmer


def get_farmer(db: Session, scope: AccessScope, farmer_id: int) -> Farmer:
    return scope.get(db, Farmer, farmer_id)


def update_farmer(
    db: Session,
    scope: AccessScope,
    farmer_id: int,
    *,
    name: str | None = None,
    mobile_number: str | None = None,
    village_name: str | None = None,
) -> Farmer:
    """Change a farmer's details. Procurements keep the snapshot taken when they were recorded."""
    scope.require_role(AccountRole.FPO)
    changes = {
        "name": name.strip() if name is not None else None,
        "mobile_number": mobile_number.strip() if mobile_number is not None else None,
        "village_name": village_name.strip() if village_name is not None else None,
    }
    if any(value == "" for value in changes.values()):
        raise ValidationError("Name, mobile number, and village name cannot be empty")

    with atomic(db, "Farmer update"):
        farmer = scope.get(db, Farmer, farmer_id, for_update=True)
        if changes["mobile_number"] is not None:
            _check_mobile(db, farmer.cooperative_id, changes["mobile_number"], exclude_id=farmer.id)
        for field, value in changes.items():
            if value is not None:
                setattr(farmer, field, value)
    db.refresh(farmer)
    return farmer


def delete_farmer(db: Session, scope: AccessScope, farmer_id: int) -> None:
    scope.require_role(AccountRole.FPO)
    with atomic(db, "Farmer deletion"):
        farmer = scope.get(db, Farmer, farmer_id, for_update=True)
        for model in (Procurement, Payment):
            db.execute(update(model).where(model.farmer_id == farmer.id).values(farmer_id=None))
        logger.info("Farmer %s removed from cooperative %s", farmer.id, farmer.cooperative_id)
        db.delete(farmer)


def list_farmers(db: Session, scope: AccessScope) -> list[Farmer]:
    query = scope.apply(select(Farmer), Farmer).order_by(Farmer.name, Farmer.id)
    return list(db.scalars(query).all())
