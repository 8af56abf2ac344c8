import binascii
import logging
from base64 import b64decode
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from fastapi.security.utils import get_authorization_scheme_param
from sqlalchemy.orm import Session

from app.core.errors import Forbidden, Unauthenticated
from app.core.security import verify_password
from app.db.session import get_db
from app.models.user import User
from app.services.users import get_active_user_by_email

logger = logging.getLogger(__name__)


class Utf8HTTPBasic(HTTPBasic):
    """HTTPBasic that decodes the credentials as UTF-8 instead of ASCII.

    Returns None when no Basic header is sent; an undecodable payload or one
    without a colon is rejected with a fixed 401 message.
    """

    async def __call__(self, request: Request) -> Optional[HTTPBasicCredentials]:
        authorization = request.headers.get("Authorization")
        scheme, param = get_authorization_scheme_param(authorization)
        if not authorization or scheme.lower() != "basic":
            return None
        try:
            data = b64decode(param, validate=True).decode("utf-8")
        except (ValueError, UnicodeDecodeError, binascii.Error):
            raise Unauthenticated("Invalid authentication credentials")
        username, separator, password = data.partition(":")
        if not separator:
            raise Unauthenticated("Invalid authentication credentials")
        return HTTPBasicCredentials(username=username, password=password)


basic_scheme = Utf8HTTPBasic(auto_error=False)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPBasicCredentials] = Depends(basic_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Re-authenticate the Basic credentials sent with this request.

    There is no session or token: every protected call loads the active user by
    email and verifies the password again. The full row, hash included, is put
    on ``request.state.user``; responses must go through ``UserOut``.
    """
    if credentials is None:
        raise Unauthenticated("Basic authentication required")
    email, password = credentials.username, credentials.password
    if not email or not password:
        raise Unauthenticated("Email and password required")

    user = get_active_user_by_email(db, email)
    if not user:
        raise Unauthenticated("Invalid credentials")
    if not user.is_login_enable:
        raise Forbidden("Login is disabled for this account")
    if not verify_password(password, user.password_hash):
        logger.info("Basic auth failed for user id=%s", user.id)
        raise Unauthenticated("Invalid credentials")

    request.state.user = user
    return user
