from sqlalchemy import select
from sqlalchemy.orm import Session

from agrichain.core.exceptions import NotFoundError
from agrichain.models.account import Account, AccountRole
from agrichain.models.inventory import Farmer, Product


def get_product(db: Session, product_id: int) -> Product:
    product = db.get(Product, product_id)
    if not product:
        raise NotFoundError("Product not found")
    return product


def get_account(db: Session, account_id: int, role: AccountRole, label: str) -> Account:
    account = db.scalar(select(Account).where(Account.id == account_id, Account.role == role))
    if not account:
        raise NotFoundError(f"{label} not found")
    return account


def get_cooperative(db: Session, cooperative_id: int) -> Account:
    return get_account(db, cooperative_id, AccountRole.FPO, "FPO")


def get_retailer(db: Session, retailer_id: int) -> Account:
    return get_account(db, retailer_id, AccountRole.RETAILER, "Retailer")


def get_cooperative_farmer(db: Session, farmer_id: int, cooperative_id: int) -> Farmer:
    farmer = db.scalar(
        select(Farmer).where(Farmer.id == farmer_id, Farmer.cooperative_id == cooperative_id)
    )
    if not farmer:
        raise NotFoundError("Farmer not found or does not belong to your FPO")
    return farmer
