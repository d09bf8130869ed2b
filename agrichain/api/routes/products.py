from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from agrichain.api.deps import get_current_account
from agrichain.db.database import get_db
from agrichain.models.account import Account
from agrichain.models.inventory import Product
from agrichain.schemas.master import ProductOut

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("", response_model=list[ProductOut])
def list_products(
    current_account: Account = Depends(get_current_account),
    db: Session = Depends(get_db),
):
    return db.scalars(select(Product).order_by(Product.id)).all()
