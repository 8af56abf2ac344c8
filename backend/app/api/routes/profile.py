import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.core.errors import BadRequest, Internal
from app.db.session import get_db
from app.models.user import User
from app.schemas.user import ProfileUpdate, UserOut, UserResponse
from app.services import users as user_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=UserResponse)
def get_profile(user: User = Depends(get_current_user)):
    return {"status": True, "message": "Profile retrieved successfully", "data": {"user": UserOut.model_validate(user)}}


@router.put("", response_model=UserResponse)
def update_profile(
    payload: Optional[ProfileUpdate] = Body(default=None),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Partial update of the caller's own profile.

    Only fields in ``MUTABLE_PROFILE_FIELDS`` are written; a subscription
    change also rewrites ``plan``.
    """
    data = payload.model_dump(exclude_unset=True) if payload is not None else {}
    changes = user_service.profile_changes(data)
    if not changes:
        raise BadRequest("No valid fields to update")
    try:
        user = user_service.update_profile(db, user, changes)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Update profile error")
        raise Internal(error=str(e))
    return {"status": True, "message": "Profile updated successfully", "data": {"user": UserOut.model_validate(user)}}
