from passlib.context import CryptContext

# Prefer argon2, keep bcrypt so legacy "$2a$10$..." digests still verify
pwd_context = CryptContext(schemes=["argon2", "bcrypt"], deprecated="auto")

def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Constant-time check; malformed or unknown digests count as a mismatch."""
    if not plain_password or not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def password_needs_rehash(hashed_password: str) -> bool:
    try:
        return pwd_context.needs_update(hashed_password)
    except (ValueError, TypeError):
        return False
