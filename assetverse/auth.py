"""Authentication and authorization dependencies.

ID tokens are issued by the external identity provider; this module only
verifies them and maps the email claim to a registered user.
"""
import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError, ExpiredSignatureError
from sqlalchemy import func
from sqlalchemy.orm import Session

from assetverse.config import settings
from assetverse.database import get_db
from assetverse.errors import AuthenticationError, AuthorizationError
from assetverse.models.user import User, UserRole

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def verify_id_token(token: str) -> dict:
    """Decode and verify a bearer ID token, returning its claims."""
    options = {"verify_aud": settings.AUTH_AUDIENCE is not None}
    try:
        return jwt.decode(
            token,
            settings.AUTH_SECRET_KEY,
            algorithms=[settings.AUTH_ALGORITHM],
            audience=settings.AUTH_AUDIENCE,
            options=options,
        )
    except ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except JWTError as e:
        logger.warning(f"Token verification failed: {type(e).__name__}")
        raise AuthenticationError("Invalid or expired token")


def get_token_email(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """Email of the caller, taken from a verified bearer token."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("No token provided")

    claims = verify_id_token(credentials.credentials)
    email = claims.get("email")
    if not email:
        raise AuthenticationError("Invalid token payload")
    return email


def get_current_user(
    email: str = Depends(get_token_email),
    db: Session = Depends(get_db),
) -> User:
    """Registered user behind the bearer token."""
    user = db.query(User).filter(func.lower(User.email) == email.lower()).first()
    if user is None:
        logger.warning(f"Valid token but user not registered: {email}")
        raise AuthenticationError("User account not found")
    return user


def require_role(role: UserRole):
    """Dependency factory that only lets users with ``role`` through."""
    def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role != role:
            raise AuthorizationError(f"{role.value} access required")
        return current_user
    return role_checker


require_hr = require_role(UserRole.HR)
require_employee = require_role(UserRole.EMPLOYEE)


def ensure_same_email(claimed_email: str, email: str):
    """The email named in a payload must be the caller's own."""
    if claimed_email.lower() != email.lower():
        raise AuthorizationError("Email does not match the authenticated user")
