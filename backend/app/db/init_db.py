import logging

from app.db.session import Database
from app.models import user  # noqa: F401
from app.models.base import Base
from app.models.user import User
from app.core.config import settings
from app.core.security import get_password_hash

logger = logging.getLogger(__name__)

def create_tables(database: Database):
    Base.metadata.create_all(bind=database.engine)

def seed_admin(database: Database) -> User | None:
    """Create the configured admin account once; existing accounts are left alone."""
    if not settings.seed_admin_email or not settings.seed_admin_password:
        return None
    email = settings.seed_admin_email.strip().lower()
    db = database.session()
    try:
        admin = db.query(User).filter(User.email == email).first()
        if admin:
            return admin
        admin = User(
            first_name="Admin",
            last_name="User",
            email=email,
            password_hash=get_password_hash(settings.seed_admin_password),
            type="admin",
        )
        db.add(admin)
        db.commit()
        db.refresh(admin)
        logger.info("Seeded admin account %s", email)
        return admin
    finally:
        db.close()
