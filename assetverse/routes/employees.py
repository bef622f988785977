"""Team membership routes."""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from assetverse.auth import ensure_same_email, require_employee, require_hr
from assetverse.database import get_db
from assetverse.models.user import User
from assetverse.schemas.affiliation import (
    CompanyList,
    RemoveEmployee,
    RemoveEmployeeResponse,
    TeamResponse,
)
from assetverse.services import affiliations, assignments

router = APIRouter(tags=["Employees"])


@router.get("/my-employees", response_model=TeamResponse)
async def list_team(
    hr_email: str = Query(..., alias="hrEmail"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_hr)
):
    """Active employees of the HR's company with quota usage."""
    ensure_same_email(hr_email, current_user.email)
    return TeamResponse(
        current_employees=current_user.current_employees or 0,
        package_limit=current_user.package_limit or 0,
        data=affiliations.list_team(db, hr_email),
    )


@router.get("/my-companies", response_model=CompanyList)
async def list_companies(
    employee_email: str = Query(..., alias="employeeEmail"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_employee)
):
    """Companies the employee is currently affiliated with."""
    ensure_same_email(employee_email, current_user.email)
    return CompanyList(data=affiliations.list_companies(db, employee_email))


@router.patch("/remove-employee", response_model=RemoveEmployeeResponse)
async def remove_employee(
    payload: RemoveEmployee,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_hr)
):
    """Remove an employee from the team, restocking everything they hold."""
    ensure_same_email(payload.hr_email, current_user.email)
    returned = assignments.remove_employee(db, payload.hr_email, payload.employee_email)
    return RemoveEmployeeResponse(returned_assets=returned)
