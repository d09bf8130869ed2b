from agrichain.models.account import Account, AccountRole
from agrichain.models.events import Activity, Dispatch, EventStatus, Payment, Procurement, Sale
from agrichain.models.inventory import Farmer, Product, SequenceCounter, StockMovement, StockRow

__all__ = [
    "Account",
    "AccountRole",
    "Activity",
    "Dispatch",
    "EventStatus",
    "Farmer",
    "Payment",
    "Procurement",
    "Product",
    "Sale",
    "SequenceCounter",
    "StockMovement",
    "StockRow",
]
