from typing import Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.user import UserType


def _normalize_email(v: Optional[str]) -> str:
    if not v:
        raise ValueError("Valid email is required")
    try:
        validate_email(v, check_deliverability=False)
    except EmailNotValidError:
        raise ValueError("Valid email is required")
    return v.strip().lower()


class UserRegister(BaseModel):
    # Missing fields are validated too, so each gets its own message
    model_config = ConfigDict(validate_default=True)

    first_name: Optional[str] = Field(default=None, max_length=255)
    last_name: Optional[str] = Field(default=None, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    password: Optional[str] = None
    type: Optional[str] = None
    lang: str = Field(default="en", max_length=16)
    avatar: str = Field(default="", max_length=512)

    @field_validator("first_name")
    @classmethod
    def _first_name(cls, v):
        if not v:
            raise ValueError("First name is required")
        return v

    @field_validator("last_name")
    @classmethod
    def _last_name(cls, v):
        if not v:
            raise ValueError("Last name is required")
        return v

    @field_validator("email")
    @classmethod
    def _email(cls, v):
        return _normalize_email(v)

    @field_validator("password")
    @classmethod
    def _password(cls, v):
        if v is None or len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v

    @field_validator("type")
    @classmethod
    def _type(cls, v):
        if v not in {t.value for t in UserType}:
            raise ValueError("Type must be company, employee, or admin")
        return v


class UserLogin(BaseModel):
    model_config = ConfigDict(validate_default=True)

    email: Optional[str] = None
    password: Optional[str] = None

    @field_validator("email")
    @classmethod
    def _email(cls, v):
        return _normalize_email(v)

    @field_validator("password")
    @classmethod
    def _password(cls, v):
        if not v:
            raise ValueError("Password is required")
        return v
