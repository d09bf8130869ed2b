from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from agrichain.services.amounts import MAX_QUANTITY


class StockUpsertRequest(BaseModel):
    cooperative_id: int | None = None
    product_id: int
    quantity: Decimal = Field(ge=0, le=MAX_QUANTITY)
    min_stock: Decimal | None = Field(default=None, ge=0, le=MAX_QUANTITY)
    max_stock: Decimal | None = Field(default=None, ge=0, le=MAX_QUANTITY)
    reason: str | None = Field(default=None, max_length=255)


class StockUpdateRequest(BaseModel):
    quantity: Decimal | None = Field(default=None, ge=0, le=MAX_QUANTITY)
    min_stock: Decimal | None = Field(default=None, ge=0, le=MAX_QUANTITY)
    max_stock: Decimal | None = Field(default=None, ge=0, le=MAX_QUANTITY)
    reason: str | None = Field(default=None, max_length=255)


class StockOut(BaseModel):
    id: int
    cooperative_id: int
    product_id: int
    product_name: str
    quantity: Decimal
    min_stock: Decimal
    max_stock: Decimal
    unit: str
    updated_at: datetime

    model_config = {"from_attributes": True}


class StockMovementOut(BaseModel):
    id: int
    stock_id: int
    cooperative_id: int
    product_id: int
    actor_id: int | None
    source_type: str
    source_id: int | None
    requested_delta: Decimal
    quantity_delta: Decimal
    quantity_before: Decimal
    quantity_after: Decimal
    reason: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
