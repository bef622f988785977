"""User registration and lookup."""
import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from assetverse.config import settings
from assetverse.errors import ConflictError, ValidationError
from assetverse.models.user import User, UserRole
from assetverse.schemas.user import UserCreate

logger = logging.getLogger(__name__)


def list_users(db: Session, email: Optional[str] = None) -> List[User]:
    query = db.query(User)
    if email:
        query = query.filter(func.lower(User.email) == email.lower())
    return query.all()


def email_available(db: Session, email: str) -> bool:
    return db.query(User).filter(func.lower(User.email) == email.lower()).first() is None


def register_user(db: Session, data: UserCreate) -> User:
    """
    Create an account. HR accounts start on the default package with no
    employees; the role cannot be changed later.
    """
    if not email_available(db, data.email):
        raise ConflictError("User already exists")

    user = User(
        name=data.name,
        email=data.email,
        role=data.role,
        date_of_birth=data.date_of_birth,
    )

    if data.role == UserRole.HR:
        if not data.company_name:
            raise ValidationError("Company name is required for HR accounts")
        user.company_name = data.company_name
        user.company_logo = data.company_logo
        user.subscription = settings.DEFAULT_PACKAGE
        user.package_limit = settings.DEFAULT_PACKAGE_LIMIT
        user.current_employees = 0
    else:
        user.photo = data.photo

    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("User already exists")

    db.refresh(user)
    logger.info(f"Registered {user.role.value} account {user.email}")
    return user
