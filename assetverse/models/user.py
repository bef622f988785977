"""User model and role enumeration."""
import enum
from sqlalchemy import Column, Integer, String, Enum, DateTime
from sqlalchemy.sql import func

from assetverse.database import Base


class UserRole(str, enum.Enum):
    """Account types. A user's role never changes after registration."""
    HR = "HR"
    EMPLOYEE = "EMPLOYEE"


class User(Base):
    """
    Registered account, keyed by the email the identity provider vouches for.

    HR accounts carry the company and subscription fields; ``current_employees``
    counts active affiliations and is only moved by the affiliation manager.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=True)
    role = Column(Enum(UserRole), nullable=False)
    date_of_birth = Column(String(20), nullable=True)

    # HR only
    company_name = Column(String(255), nullable=True, index=True)
    company_logo = Column(String(500), nullable=True)
    subscription = Column(String(50), nullable=True)
    package_limit = Column(Integer, nullable=True)
    current_employees = Column(Integer, nullable=True)

    # Employee only
    photo = Column(String(500), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

