"""Assigned asset routes."""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from assetverse.auth import ensure_same_email, require_employee, require_hr
from assetverse.database import get_db
from assetverse.models.user import User
from assetverse.schemas.assignment import (
    AssignedAssetList,
    AssignedAssetResponse,
    DirectAssign,
    DirectAssignResponse,
    ReturnAsset,
)
from assetverse.services import assignments

router = APIRouter(tags=["Assignments"])


@router.get("/assigned-assets", response_model=AssignedAssetList)
async def list_assigned_assets(
    employee_email: str = Query(..., alias="employeeEmail"),
    current_user: User = Depends(require_employee),
    db: Session = Depends(get_db)
):
    """Assets the employee currently holds, newest first."""
    ensure_same_email(employee_email, current_user.email)
    held = assignments.list_assigned(db, employee_email)
    return AssignedAssetList(count=len(held), data=held)


@router.patch("/assigned-assets/{assignment_id}/return", response_model=AssignedAssetResponse)
async def return_assigned_asset(
    assignment_id: int,
    payload: ReturnAsset,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_employee)
):
    """Hand a returnable asset back to the company."""
    ensure_same_email(payload.employee_email, current_user.email)
    return assignments.return_assignment(db, assignment_id, payload.employee_email)


@router.patch("/direct-assign", response_model=DirectAssignResponse)
async def direct_assign(
    payload: DirectAssign,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_hr)
):
    """Assign an asset straight to an employee already on the team."""
    ensure_same_email(payload.hr_email, current_user.email)
    assignment = assignments.direct_assign(
        db, payload.hr_email, payload.employee_email, payload.asset_id
    )
    return DirectAssignResponse(assignment=assignment)
