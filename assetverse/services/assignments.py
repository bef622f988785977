"""Assignment ledger - which employee currently holds which asset unit."""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from assetverse.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    OutOfStockError,
    ValidationError,
)
from assetverse.models.asset import Asset, ProductType
from assetverse.models.assignment import AssignedAsset, AssignmentStatus, AssignmentSource
from assetverse.models.user import User, UserRole
from assetverse.services import affiliations, inventory
from assetverse.services.transitions import transition

logger = logging.getLogger(__name__)


def assign(
    db: Session,
    asset: Asset,
    employee_email: str,
    employee_name: Optional[str],
    hr_email: str,
    company_name: str,
    source: AssignmentSource,
    request_id: Optional[int] = None,
    asset_name: Optional[str] = None,
    asset_type: Optional[str] = None,
) -> AssignedAsset:
    """
    Record that the employee now holds one unit of ``asset``.

    Must only be called after ``inventory.reserve_unit`` succeeded for it.
    ``asset_name``/``asset_type`` override the live asset values so approvals
    keep the snapshot taken when the request was filed.
    """
    assignment = AssignedAsset(
        asset_id=asset.id,
        request_id=request_id,
        asset_name=asset_name or asset.product_name,
        asset_image=asset.product_image,
        asset_type=asset_type or asset.product_type,
        employee_email=employee_email,
        employee_name=employee_name,
        hr_email=hr_email,
        company_name=company_name,
        source=source.value,
        status=AssignmentStatus.ASSIGNED.value,
        assignment_date=datetime.now(timezone.utc),
    )
    db.add(assignment)
    db.flush()
    return assignment


def active_assignments(db: Session, employee_email: str, hr_email: Optional[str] = None):
    query = db.query(AssignedAsset).filter(
        AssignedAsset.employee_email == employee_email,
        AssignedAsset.status == AssignmentStatus.ASSIGNED.value,
    )
    if hr_email:
        query = query.filter(AssignedAsset.hr_email == hr_email)
    return query


def _close(db: Session, assignment: AssignedAsset):
    """Restock one unit and mark the assignment returned."""
    if assignment.asset_id is None or not inventory.release_unit(db, assignment.asset_id):
        logger.warning(f"Assignment {assignment.id} returned but its asset no longer exists")
    transition(
        db, assignment, "status", AssignmentStatus.RETURNED,
        message="Asset is already returned",
        return_date=datetime.now(timezone.utc),
    )


def return_all(db: Session, employee_email: str, hr_email: str) -> int:
    """Return every asset the employee holds from this HR. Returns the unit count."""
    held = active_assignments(db, employee_email, hr_email).all()
    for assignment in held:
        _close(db, assignment)
    return len(held)


def list_assigned(db: Session, employee_email: str) -> List[AssignedAsset]:
    """Assets currently held by an employee, newest first."""
    return active_assignments(db, employee_email).order_by(AssignedAsset.id.desc()).all()


def direct_assign(db: Session, hr_email: str, employee_email: str, asset_id: int) -> AssignedAsset:
    """HR hands one unit of an asset to an employee already on the team."""
    asset = inventory.get_owned_asset(db, asset_id, hr_email)

    employee = db.query(User).filter(User.email == employee_email).first()
    if not employee or employee.role != UserRole.EMPLOYEE:
        raise NotFoundError("Employee not found")

    affiliation = affiliations.get_active_affiliation(db, employee_email, hr_email)
    if not affiliation:
        raise AuthorizationError("Employee is not affiliated with your company")

    duplicate = active_assignments(db, employee_email, hr_email).filter(
        AssignedAsset.asset_id == asset.id
    ).first()
    if duplicate:
        raise ConflictError("This asset is already assigned to the employee")

    try:
        if not inventory.reserve_unit(db, asset.id):
            raise OutOfStockError("Asset out of stock")

        assignment = assign(
            db,
            asset,
            employee_email=employee.email,
            employee_name=employee.name,
            hr_email=hr_email,
            company_name=asset.company_name,
            source=AssignmentSource.DIRECT,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(assignment)
    logger.info(f"Asset {asset.id} directly assigned to {employee_email} by {hr_email}")
    return assignment


def return_assignment(db: Session, assignment_id: int, employee_email: str) -> AssignedAsset:
    """An employee hands back a returnable asset."""
    assignment = db.query(AssignedAsset).filter(AssignedAsset.id == assignment_id).first()
    if not assignment:
        raise NotFoundError("Assignment not found")
    if assignment.employee_email != employee_email:
        raise AuthorizationError("Unauthorized")
    if assignment.asset_type != ProductType.RETURNABLE.value:
        raise ValidationError("Non-returnable assets cannot be returned")

    try:
        _close(db, assignment)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(assignment)
    logger.info(f"Assignment {assignment_id} returned by {employee_email}")
    return assignment


def remove_employee(db: Session, hr_email: str, employee_email: str) -> int:
    """
    Take an employee off the HR's team.

    Every asset they hold from this HR goes back into stock, the affiliation
    turns inactive and the HR's slot is freed. Returns the restocked count.
    """
    if not affiliations.is_affiliated(db, employee_email, hr_email):
        raise NotFoundError("Employee is not affiliated with your company")

    try:
        returned = return_all(db, employee_email, hr_email)
        affiliations.deaffiliate(db, employee_email, hr_email)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"{employee_email} removed from {hr_email}, {returned} asset(s) restocked")
    return returned
