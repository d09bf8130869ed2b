"""
Row visibility derived from the caller's role and identity.

Every read and every write in the services goes through an ``AccessScope``.
Cooperatives see rows whose owning-cooperative column equals their id,
retailers see rows keyed to their own id, and the aggregator sees all rows.
A model/role pair with no registered owner column is invisible to that role.
"""

from dataclasses import dataclass

from sqlalchemy import false, select
from sqlalchemy.orm import Session

from agrichain.core.exceptions import AuthorizationError, NotFoundError
from agrichain.models.account import AccountRole
from agrichain.models.events import Activity, Dispatch, Payment, Procurement, Sale
from agrichain.models.inventory import Farmer, StockMovement, StockRow

OWNER_COLUMNS: dict[AccountRole, dict[type, str]] = {
    AccountRole.FPO: {
        Procurement: "cooperative_id",
        Sale: "cooperative_id",
        Dispatch: "cooperative_id",
        StockRow: "cooperative_id",
        StockMovement: "cooperative_id",
        Activity: "cooperative_id",
        Farmer: "cooperative_id",
        Payment: "cooperative_id",
    },
    AccountRole.RETAILER: {
        Dispatch: "retailer_id",
    },
}

_LABELS = {
    Procurement: "Procurement",
    Sale: "Sale",
    Dispatch: "Dispatch",
    StockRow: "Inventory",
    StockMovement: "Stock movement",
    Activity: "Activity",
    Farmer: "Farmer",
    Payment: "Payment",
}


@dataclass(frozen=True)
class AccessScope:
    role: AccountRole
    identity: int

    @property
    def is_aggregator(self) -> bool:
        return self.role == AccountRole.MAHAFPC

    @property
    def is_cooperative(self) -> bool:
        return self.role == AccountRole.FPO

    def _owner_column(self, model):
        column_name = OWNER_COLUMNS.get(self.role, {}).get(model)
        if column_name is None:
            return None
        return getattr(model, column_name)

    def apply(self, query, model):
        if self.is_aggregator:
            return query
        column = self._owner_column(model)
        if column is None:
            return query.where(false())
        return query.where(column == self.identity)

    def covers(self, record) -> bool:
        if self.is_aggregator:
            return True
        column_name = OWNER_COLUMNS.get(self.role, {}).get(type(record))
        if column_name is None:
            return False
        return getattr(record, column_name) == self.identity

    def check(self, record) -> None:
        if not self.covers(record):
            raise AuthorizationError("Not authorized")

    def get(self, db: Session, model, record_id: int, *, for_update: bool = False):
        query = select(model).where(model.id == record_id)
        if for_update:
            query = query.with_for_update().execution_options(populate_existing=True)
        record = db.scalar(query)
        if record is None:
            raise NotFoundError(f"{_LABELS.get(model, model.__name__)} not found")
        self.check(record)
        return record

    def require_role(self, *roles: AccountRole) -> None:
        if self.role not in roles:
            allowed = ", ".join(role.value for role in roles)
            raise AuthorizationError(f"Role required: {allowed}")

    def resolve_cooperative(self, requested_id: int | None) -> int | None:
        """Cooperative id a query may target; ``None`` means all cooperatives."""
        if self.is_aggregator:
            return requested_id
        if self.is_cooperative:
            if requested_id is not None and requested_id != self.identity:
                raise AuthorizationError("Cross-cooperative access is not allowed")
            return self.identity
        raise AuthorizationError("Role required: fpo, mahafpc")


def for_caller(role: AccountRole | str, identity: int) -> AccessScope:
    return AccessScope(role=AccountRole(role), identity=int(identity))
