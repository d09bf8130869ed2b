from datetime import date, datetime, time
from decimal import Decimal

from pydantic import BaseModel, Field

from agrichain.models.events import EventStatus
from agrichain.services.amounts import MAX_AMOUNT, MAX_QUANTITY, MAX_RATE


class ProcurementCreate(BaseModel):
    farmer_id: int
    product_id: int
    quantity: Decimal = Field(gt=0, le=MAX_QUANTITY, description="Tons")
    rate: Decimal = Field(gt=0, le=MAX_RATE, description="Price per ton")
    procured_on: date | None = None


class ProcurementUpdate(BaseModel):
    quantity: Decimal | None = Field(default=None, gt=0, le=MAX_QUANTITY)
    rate: Decimal | None = Field(default=None, gt=0, le=MAX_RATE)


class ProcurementOut(BaseModel):
    id: int
    procured_on: date
    farmer_id: int | None
    farmer_name: str
    farmer_mobile_number: str
    farmer_village_name: str
    product_id: int
    product_name: str
    quantity: Decimal
    rate: Decimal
    amount: Decimal
    cooperative_id: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class SaleCreate(BaseModel):
    product_id: int
    quantity: Decimal = Field(gt=0, le=MAX_QUANTITY)
    rate: Decimal = Field(gt=0, le=MAX_RATE)
    sold_on: date | None = None


class EventUpdate(BaseModel):
    quantity: Decimal | None = Field(default=None, gt=0, le=MAX_QUANTITY)
    rate: Decimal | None = Field(default=None, gt=0, le=MAX_RATE)


class StatusUpdate(BaseModel):
    # Left as a plain string so an unknown value yields the service's 400.
    status: str = Field(min_length=1, max_length=32)


class SaleOut(BaseModel):
    id: int
    sold_on: date
    sold_time: time
    cooperative_id: int
    cooperative_name: str
    product_id: int
    product_name: str
    quantity: Decimal
    rate: Decimal
    amount: Decimal
    status: EventStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class DispatchCreate(BaseModel):
    cooperative_id: int
    retailer_id: int
    product_id: int
    quantity: Decimal = Field(gt=0, le=MAX_QUANTITY)
    rate: Decimal = Field(gt=0, le=MAX_RATE)
    dispatched_on: date | None = None
    lot_threshold: Decimal | None = Field(default=None, ge=0, le=MAX_QUANTITY)


class DispatchOut(BaseModel):
    id: int
    dispatched_on: date
    cooperative_id: int
    cooperative_name: str
    retailer_id: int
    retailer_name: str
    product_id: int
    product_name: str
    quantity: Decimal
    rate: Decimal
    amount: Decimal
    status: EventStatus
    lot_threshold: Decimal
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ActivityCreate(BaseModel):
    activity_date: date
    activity_time: time
    type: str = Field(min_length=1, max_length=40)
    product_name: str = Field(min_length=1, max_length=160)
    quantity: Decimal | None = Field(default=None, ge=0, le=MAX_QUANTITY)
    cooperative_id: int | None = None


class ActivityOut(BaseModel):
    id: int
    activity_date: date
    activity_time: time
    type: str
    quantity: Decimal
    product_name: str
    cooperative_id: int | None
    created_at: datetime

    model_config = {"from_attributes": True}


class PaymentCreate(BaseModel):
    """A ``farmer_id`` makes this a farmer payment; otherwise ``cooperative_id`` and ``type`` are needed."""

    amount: Decimal = Field(gt=0, le=MAX_AMOUNT)
    paid_on: date | None = None
    farmer_id: int | None = None
    cooperative_id: int | None = None
    type: str | None = Field(default=None, max_length=40)
    status: str | None = Field(default=None, max_length=32)
    description: str | None = Field(default=None, max_length=255)


class PaymentUpdate(BaseModel):
    amount: Decimal | None = Field(default=None, gt=0, le=MAX_AMOUNT)
    paid_on: date | None = None
    description: str | None = Field(default=None, max_length=255)


class PaymentOut(BaseModel):
    id: int
    paid_on: date
    type: str
    amount: Decimal
    cooperative_id: int
    cooperative_name: str
    farmer_id: int | None
    farmer_name: str | None
    description: str
    status: EventStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class DailyRecordsOut(BaseModel):
    procurements: list[ProcurementOut]
    sales: list[SaleOut]
    activities: list[ActivityOut]
