import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.core.errors import BadRequest, Forbidden, Internal, Unauthenticated
from app.core.security import verify_password
from app.db.session import get_db
from app.models.user import User
from app.schemas.auth import UserRegister, UserLogin
from app.schemas.user import MessageResponse, UserOut, UserResponse
from app.services import users as user_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(payload: UserRegister, db: Session = Depends(get_db)):
    try:
        if user_service.get_user_by_email(db, payload.email):
            raise BadRequest("Email already registered")
        user = user_service.create_user(db, payload)
    except user_service.EmailAlreadyRegistered:
        raise BadRequest("Email already registered")
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Register error")
        raise Internal(error=str(e))
    return {"status": True, "message": "User registered successfully", "data": {"user": UserOut.model_validate(user)}}


@router.post("/login", response_model=UserResponse)
def login(payload: UserLogin, db: Session = Depends(get_db)):
    """Check credentials and stamp last_login.

    Returns 401 with the same message whether the email is unknown or the
    password is wrong; 403 when the account is inactive or login is disabled.
    """
    try:
        user = user_service.get_user_by_email(db, payload.email)
        if not user:
            raise Unauthenticated("Invalid email or password")
        if not user.is_active:
            raise Forbidden("Account is not active")
        if not user.is_login_enable:
            raise Forbidden("Login is disabled for this account")
        if not verify_password(payload.password, user.password_hash):
            logger.info("Login failed for user id=%s", user.id)
            raise Unauthenticated("Invalid email or password")
        user = user_service.record_login(db, user, payload.password)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Login error")
        raise Internal(error=str(e))
    return {"status": True, "message": "Login successful", "data": {"user": UserOut.model_validate(user)}}


@router.post("/logout", response_model=MessageResponse)
def logout(user: User = Depends(get_current_user)):
    # Nothing to invalidate: credentials are re-sent on every request
    return {"status": True, "message": "Logged out successfully"}
