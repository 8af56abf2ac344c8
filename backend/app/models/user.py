from datetime import datetime
from typing import Optional

from sqlalchemy import String, Boolean, Integer, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base

class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    first_name: Mapped[str] = mapped_column(String(255))
    last_name: Mapped[str] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    # Column keeps the legacy name "password"; it only ever holds a hash
    password_hash: Mapped[str] = mapped_column("password", String(255))
    type: Mapped[str] = mapped_column(String(16))  # company | employee | admin
    company_id: Mapped[Optional[str]] = mapped_column(String(64), unique=True, nullable=True)
    subscription: Mapped[str] = mapped_column(String(32), default="Basic")
    plan: Mapped[int] = mapped_column(Integer, default=0)
    lang: Mapped[str] = mapped_column(String(16), default="en")
    avatar: Mapped[str] = mapped_column(String(512), default="")
    created_by: Mapped[int] = mapped_column(Integer, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    is_login_enable: Mapped[bool] = mapped_column(Boolean, default=True)
    dark_mode: Mapped[bool] = mapped_column(Boolean, default=False)
    messenger_color: Mapped[str] = mapped_column(String(16), default="#2180f3")
    is_disable: Mapped[bool] = mapped_column(Boolean, default=True)
    last_login: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
