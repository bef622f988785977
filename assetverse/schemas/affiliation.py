"""Affiliation schemas."""
from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr

from assetverse.models.affiliation import AffiliationStatus
from assetverse.schemas.common import CamelModel


class AffiliationResponse(CamelModel):
    id: int
    employee_email: str
    employee_name: Optional[str] = None
    hr_email: str
    company_name: str
    company_logo: str = ""
    status: AffiliationStatus
    affiliation_date: Optional[datetime] = None
    deactivation_date: Optional[datetime] = None


class TeamResponse(CamelModel):
    """Active employees of an HR together with the quota usage."""
    success: bool = True
    current_employees: int
    package_limit: int
    data: List[AffiliationResponse]


class CompanyList(CamelModel):
    success: bool = True
    data: List[AffiliationResponse]


class RemoveEmployee(CamelModel):
    hr_email: EmailStr
    employee_email: EmailStr


class RemoveEmployeeResponse(CamelModel):
    success: bool = True
    message: str = "Employee removed from team"
    returned_assets: int
