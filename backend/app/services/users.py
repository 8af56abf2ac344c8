"""Account operations shared by the auth and profile routes."""
import logging
import secrets
import string
import time
from typing import Any, Dict, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.security import get_password_hash, password_needs_rehash
from app.models.user import User
from app.schemas.auth import UserRegister
from app.schemas.user import Subscription, UserType

logger = logging.getLogger(__name__)

COMPANY_ID_PREFIX = "CMP-"
COMPANY_ID_RANDOM_LENGTH = 6
_BASE36 = string.digits + string.ascii_lowercase

PLAN_BY_SUBSCRIPTION: Dict[str, int] = {
    Subscription.basic.value: 0,
    Subscription.silver.value: 1,
    Subscription.premium.value: 2,
    Subscription.enterprise.value: 3,
}

# Columns a user may change on their own profile
MUTABLE_PROFILE_FIELDS = frozenset({
    "first_name",
    "last_name",
    "subscription",
    "lang",
    "avatar",
    "dark_mode",
    "messenger_color",
})

DEFAULT_MESSENGER_COLOR = "#2180f3"

COMPANY_ID_ATTEMPTS = 3


class EmailAlreadyRegistered(Exception):
    pass


def generate_company_id() -> str:
    """CMP-<epoch ms><6 random base-36 chars>. Unique in practice, not by proof."""
    timestamp = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_BASE36) for _ in range(COMPANY_ID_RANDOM_LENGTH))
    return f"{COMPANY_ID_PREFIX}{timestamp}{suffix}"


def plan_for(subscription: str) -> int:
    return PLAN_BY_SUBSCRIPTION[subscription]


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email.strip().lower()).first()


def get_active_user_by_email(db: Session, email: str) -> Optional[User]:
    return (
        db.query(User)
        .filter(User.email == email.strip().lower(), User.is_active == True)  # noqa: E712
        .first()
    )


def create_user(db: Session, payload: UserRegister) -> User:
    """Insert a new account with the fixed registration defaults.

    Subscription always starts at Basic; the caller cannot choose it. Raises
    EmailAlreadyRegistered when the unique email constraint fires (a concurrent
    registration won). A company_id collision is retried with a fresh id.
    """
    password_hash = get_password_hash(payload.password)
    is_company = payload.type == UserType.company.value
    for attempt in range(1, COMPANY_ID_ATTEMPTS + 1):
        user = User(
            first_name=payload.first_name,
            last_name=payload.last_name,
            email=payload.email,
            password_hash=password_hash,
            type=payload.type,
            company_id=generate_company_id() if is_company else None,
            subscription=Subscription.basic.value,
            plan=plan_for(Subscription.basic.value),
            lang=payload.lang,
            avatar=payload.avatar,
            created_by=0,
            is_active=True,
            is_login_enable=True,
            dark_mode=False,
            messenger_color=DEFAULT_MESSENGER_COLOR,
            is_disable=True,
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            if db.query(User.id).filter(User.email == payload.email).first():
                raise EmailAlreadyRegistered(payload.email)
            if not is_company or attempt == COMPANY_ID_ATTEMPTS:
                raise
            logger.warning("company_id collision on registration, retrying (attempt %s)", attempt)
            continue
        db.refresh(user)
        logger.info("Registered user id=%s type=%s", user.id, user.type)
        return user


def record_login(db: Session, user: User, password: str) -> User:
    user.last_login = func.now()
    if password_needs_rehash(user.password_hash):
        user.password_hash = get_password_hash(password)
        logger.info("Upgraded password hash for user id=%s", user.id)
    db.commit()
    db.refresh(user)
    return user


def profile_changes(data: Dict[str, Any]) -> Dict[str, Any]:
    """Restrict a partial update to the allow-list and keep plan in step."""
    changes = {k: v for k, v in data.items() if k in MUTABLE_PROFILE_FIELDS}
    if "subscription" in changes:
        changes["plan"] = plan_for(changes["subscription"])
    return changes


def update_profile(db: Session, user: User, changes: Dict[str, Any]) -> User:
    for key, value in changes.items():
        setattr(user, key, value)
    user.updated_at = func.now()
    db.commit()
    db.refresh(user)
    return user
