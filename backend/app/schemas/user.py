from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserType(str, Enum):
    company = "company"
    employee = "employee"
    admin = "admin"


class Subscription(str, Enum):
    basic = "Basic"
    silver = "Silver"
    premium = "Premium"
    enterprise = "Enterprise"


class UserOut(BaseModel):
    """Public view of a user row. There is deliberately no password field."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    email: str
    type: str
    company_id: Optional[str] = None
    subscription: str
    plan: int
    lang: str
    avatar: str
    created_by: int
    is_active: bool
    is_login_enable: bool
    dark_mode: bool
    messenger_color: str
    is_disable: bool
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserData(BaseModel):
    user: UserOut


class UserResponse(BaseModel):
    status: bool = True
    message: str
    data: UserData


class MessageResponse(BaseModel):
    status: bool = True
    message: str


class HealthResponse(BaseModel):
    status: bool = True
    message: str
    timestamp: str


class ProfileUpdate(BaseModel):
    # Unknown keys, password included, are dropped rather than written as columns
    model_config = ConfigDict(extra="ignore")

    first_name: Optional[str] = Field(default=None, max_length=255)
    last_name: Optional[str] = Field(default=None, max_length=255)
    subscription: Optional[str] = None
    lang: Optional[str] = Field(default=None, max_length=16)
    avatar: Optional[str] = Field(default=None, max_length=512)
    dark_mode: Optional[bool] = None
    messenger_color: Optional[str] = Field(default=None, max_length=16)

    @field_validator("first_name")
    @classmethod
    def _first_name(cls, v):
        if not v:
            raise ValueError("First name cannot be empty")
        return v

    @field_validator("last_name")
    @classmethod
    def _last_name(cls, v):
        if not v:
            raise ValueError("Last name cannot be empty")
        return v

    @field_validator("subscription")
    @classmethod
    def _subscription(cls, v):
        if v not in {s.value for s in Subscription}:
            raise ValueError("Invalid subscription type")
        return v

    @field_validator("lang", "avatar", "dark_mode", "messenger_color")
    @classmethod
    def _not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v
