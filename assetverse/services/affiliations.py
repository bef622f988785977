"""Affiliation and quota manager.

``User.current_employees`` must always equal the number of active affiliations
of that HR. Both sides are written in the same transaction, and the counter is
only moved by conditional UPDATEs so the package limit cannot be overshot by
concurrent onboarding.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from assetverse.errors import NotFoundError, QuotaExceededError
from assetverse.models.affiliation import EmployeeAffiliation, AffiliationStatus
from assetverse.models.user import User, UserRole
from assetverse.services.transitions import transition

logger = logging.getLogger(__name__)


def get_active_affiliation(
    db: Session, employee_email: str, hr_email: str
) -> Optional[EmployeeAffiliation]:
    return db.query(EmployeeAffiliation).filter(
        EmployeeAffiliation.employee_email == employee_email,
        EmployeeAffiliation.hr_email == hr_email,
        EmployeeAffiliation.status == AffiliationStatus.ACTIVE.value,
    ).first()


def is_affiliated(db: Session, employee_email: str, hr_email: str) -> bool:
    return get_active_affiliation(db, employee_email, hr_email) is not None


def get_hr(db: Session, hr_email: str) -> User:
    hr = db.query(User).filter(User.email == hr_email, User.role == UserRole.HR).first()
    if not hr:
        raise NotFoundError("HR user not found")
    return hr


def has_quota(hr: User) -> bool:
    return (hr.current_employees or 0) < (hr.package_limit or 0)


def ensure_quota(hr: User):
    """Raise QuotaExceededError when the HR cannot onboard another employee."""
    if not has_quota(hr):
        raise QuotaExceededError(
            f"Employee limit reached ({hr.current_employees}/{hr.package_limit})"
        )


def try_affiliate(
    db: Session, employee_email: str, employee_name: Optional[str], hr: User
) -> EmployeeAffiliation:
    """
    Onboard an employee into the HR's company.

    Claims a slot with a conditional increment first; if the package is full
    at that instant nothing is written and QuotaExceededError is raised.
    """
    result = db.execute(
        update(User)
        .where(User.id == hr.id, User.current_employees < User.package_limit)
        .values(current_employees=User.current_employees + 1)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        db.refresh(hr)
        raise QuotaExceededError(
            f"Employee limit reached ({hr.current_employees}/{hr.package_limit})"
        )

    affiliation = EmployeeAffiliation(
        employee_email=employee_email,
        employee_name=employee_name,
        hr_email=hr.email,
        company_name=hr.company_name,
        company_logo=hr.company_logo or "",
        status=AffiliationStatus.ACTIVE.value,
        affiliation_date=datetime.now(timezone.utc),
    )
    db.add(affiliation)
    db.flush()
    logger.info(f"{employee_email} affiliated with {hr.email}")
    return affiliation


def deaffiliate(db: Session, employee_email: str, hr_email: str) -> EmployeeAffiliation:
    """Deactivate the employee's active affiliation and free the HR's slot."""
    affiliation = get_active_affiliation(db, employee_email, hr_email)
    if not affiliation:
        raise NotFoundError("Employee is not affiliated with your company")

    transition(
        db, affiliation, "status", AffiliationStatus.INACTIVE,
        message="Employee is not affiliated with your company",
        deactivation_date=datetime.now(timezone.utc),
    )

    result = db.execute(
        update(User)
        .where(User.email == hr_email, User.current_employees > 0)
        .values(current_employees=User.current_employees - 1)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        logger.warning(f"Employee counter of {hr_email} already at 0 while removing {employee_email}")

    logger.info(f"{employee_email} deaffiliated from {hr_email}")
    return affiliation


def count_active_affiliations(db: Session, hr_email: str) -> int:
    return db.query(EmployeeAffiliation).filter(
        EmployeeAffiliation.hr_email == hr_email,
        EmployeeAffiliation.status == AffiliationStatus.ACTIVE.value,
    ).count()


def reconcile_employee_count(db: Session, hr: User) -> int:
    """Recompute ``current_employees`` from the affiliation rows."""
    actual = count_active_affiliations(db, hr.email)
    if hr.current_employees != actual:
        logger.warning(
            f"Employee counter drift for {hr.email}: stored {hr.current_employees}, actual {actual}"
        )
        hr.current_employees = actual
        db.commit()
    return actual


def list_team(db: Session, hr_email: str) -> List[EmployeeAffiliation]:
    """Active affiliations of an HR, newest first."""
    return db.query(EmployeeAffiliation).filter(
        EmployeeAffiliation.hr_email == hr_email,
        EmployeeAffiliation.status == AffiliationStatus.ACTIVE.value,
    ).order_by(EmployeeAffiliation.id.desc()).all()


def list_companies(db: Session, employee_email: str) -> List[EmployeeAffiliation]:
    """Companies an employee currently belongs to."""
    return db.query(EmployeeAffiliation).filter(
        EmployeeAffiliation.employee_email == employee_email,
        EmployeeAffiliation.status == AffiliationStatus.ACTIVE.value,
    ).order_by(EmployeeAffiliation.id.desc()).all()
