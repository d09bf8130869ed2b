from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from agrichain.models.account import AccountRole


class LoginRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    identity: str = Field(min_length=1, max_length=320, description="Username or email")
    password: str = Field(min_length=1, max_length=128)

    @model_validator(mode="before")
    @classmethod
    def accept_username_or_email(cls, data):
        if not isinstance(data, dict):
            return data
        if data.get("identity"):
            return data
        for key in ("username", "email"):
            value = data.get(key)
            if isinstance(value, str) and value.strip():
                data["identity"] = value
                break
        return data

    @field_validator("identity")
    @classmethod
    def normalize_identity(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("identity must not be empty")
        return normalized


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    role: AccountRole
    account_id: int
