from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from agrichain.api.deps import get_scope
from agrichain.db.database import get_db
from agrichain.schemas.master import FarmerCreate, FarmerOut, FarmerUpdate
from agrichain.services.farmers import delete_farmer, get_farmer, list_farmers, register_farmer, update_farmer
from agrichain.services.scope import AccessScope

router = APIRouter(prefix="/farmers", tags=["Farmers"])


@router.get("", response_model=list[FarmerOut])
def get_farmers(scope: AccessScope = Depends(get_scope), db: Session = Depends(get_db)):
    return list_farmers(db, scope)


@router.post("", response_model=FarmerOut, status_code=status.HTTP_201_CREATED)
def create_farmer(
    payload: FarmerCreate,
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    return register_farmer(
        db,
        scope,
        name=payload.name,
        mobile_number=payload.mobile_number,
        village_name=payload.village_name,
    )


@router.get("/{farmer_id}", response_model=FarmerOut)
def read_farmer(farmer_id: int, scope: AccessScope = Depends(get_scope), db: Session = Depends(get_db)):
    return get_farmer(db, scope, farmer_id)


@router.patch("/{farmer_id}", response_model=FarmerOut)
def edit_farmer(
    farmer_id: int,
    payload: FarmerUpdate,
    scope: AccessScope = Depends(get_scope),
    db: Session = Depends(get_db),
):
    return update_farmer(
        db,
        scope,
        farmer_id,
        name=payload.name,
        mobile_number=payload.mobile_number,
        village_name=payload.village_name,
    )


@router.delete("/{farmer_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_farmer(farmer_id: int, scope: AccessScope = Depends(get_scope), db: Session = Depends(get_db)):
    delete_farmer(db, scope, farmer_id)
