from datetime import datetime

from pydantic import BaseModel, Field

from agrichain.models.account import AccountRole


class AccountOut(BaseModel):
    id: int
    username: str
    name: str
    role: AccountRole
    email: str | None
    location: str | None
    contact: str | None
    is_active: bool

    model_config = {"from_attributes": True}


class ProductOut(BaseModel):
    id: int
    name: str
    unit: str
    category: str | None

    model_config = {"from_attributes": True}


class FarmerCreate(BaseModel):
    name: str = Field(min_length=1, max_length=160)
    mobile_number: str = Field(min_length=1, max_length=32)
    village_name: str = Field(min_length=1, max_length=120)


class FarmerOut(BaseModel):
    id: int
    cooperative_id: int
    name: str
    mobile_number: str
    village_name: str
    created_at: datetime

    model_config = {"from_attributes": True}


class FarmerUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=160)
    mobile_number: str | None = Field(default=None, min_length=1, max_length=32)
    village_name: str | None = Field(default=None, min_length=1, max_length=120)
