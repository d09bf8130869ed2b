"""
First-start demo data: the product master and one account per role.

Each set is only written when its table is empty, so restarting the service
against a populated database changes nothing.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from agrichain.core.security import hash_password
from agrichain.models.account import Account, AccountRole
from agrichain.models.inventory import Product

logger = logging.getLogger(__name__)

DEMO_PRODUCTS = (
    ("Wheat", "kg", "Grains"),
    ("Rice", "kg", "Grains"),
    ("Moong Dal", "kg", "Pulses"),
    ("Toor Dal", "kg", "Pulses"),
    ("Gram", "kg", "Pulses"),
    ("Jowar", "kg", "Grains"),
)

DEMO_ACCOUNTS = (
    {
        "username": "greenvalley",
        "name": "Green Valley FPO",
        "role": AccountRole.FPO,
        "location": "Pune",
        "contact": "9876543210",
        "email": "greenvalley@fpo.in",
        "password": "fpo123",
    },
    {
        "username": "sunrise",
        "name": "Sunrise FPO",
        "role": AccountRole.FPO,
        "location": "Nashik",
        "contact": "9876543211",
        "email": "sunrise@fpo.in",
        "password": "fpo123",
    },
    {
        "username": "harvest",
        "name": "Harvest FPO",
        "role": AccountRole.FPO,
        "location": "Aurangabad",
        "contact": "9876543212",
        "email": "harvest@fpo.in",
        "password": "fpo123",
    },
    {
        "username": "admin",
        "name": "MAHAFPC Admin",
        "role": AccountRole.MAHAFPC,
        "location": None,
        "contact": None,
        "email": "admin@mahafpc.in",
        "password": "admin123",
    },
    {
        "username": "raigad",
        "name": "Raigad Market",
        "role": AccountRole.RETAILER,
        "location": "Raigad",
        "contact": "9876543223",
        "email": "raigad@retailer.in",
        "password": "retail123",
    },
)


def seed_products(db: Session) -> int:
    if db.scalar(select(func.count(Product.id))):
        return 0
    for name, unit, category in DEMO_PRODUCTS:
        db.add(Product(name=name, unit=unit, category=category))
    return len(DEMO_PRODUCTS)


def seed_accounts(db: Session) -> int:
    if db.scalar(select(func.count(Account.id))):
        return 0
    for entry in DEMO_ACCOUNTS:
        data = dict(entry)
        password = data.pop("password")
        db.add(Account(**data, password_hash=hash_password(password), is_active=True))
    return len(DEMO_ACCOUNTS)


def seed_demo_data(db: Session) -> None:
    products = seed_products(db)
    accounts = seed_accounts(db)
    db.commit()
    if products or accounts:
        logger.info("Seeded %s products and %s accounts", products, accounts)
    else:
        logger.debug("Demo data already present, nothing seeded")
