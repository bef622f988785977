"""Employee affiliation model."""
import enum
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func

from assetverse.database import Base


class AffiliationStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class EmployeeAffiliation(Base):
    """
    Membership of an employee in an HR's company.

    Rows are never reactivated: a removed employee who is onboarded again gets
    a fresh active row, so the table doubles as membership history.
    """
    __tablename__ = "employee_affiliations"

    id = Column(Integer, primary_key=True, index=True)
    employee_email = Column(String(255), nullable=False, index=True)
    employee_name = Column(String(255), nullable=True)
    hr_email = Column(String(255), nullable=False, index=True)
    company_name = Column(String(255), nullable=False)
    company_logo = Column(String(500), nullable=False, default="")
    status = Column(String(20), default=AffiliationStatus.ACTIVE.value, nullable=False)
    affiliation_date = Column(DateTime(timezone=True), server_default=func.now())
    deactivation_date = Column(DateTime(timezone=True), nullable=True)
