"""Assignment schemas."""
from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr

from assetverse.models.assignment import AssignmentStatus, AssignmentSource
from assetverse.schemas.common import CamelModel


class AssignedAssetResponse(CamelModel):
    id: int
    asset_id: Optional[int] = None
    request_id: Optional[int] = None
    asset_name: str
    asset_image: Optional[str] = None
    asset_type: str
    employee_email: str
    employee_name: Optional[str] = None
    hr_email: str
    company_name: str
    source: AssignmentSource
    status: AssignmentStatus
    assignment_date: Optional[datetime] = None
    return_date: Optional[datetime] = None


class AssignedAssetList(CamelModel):
    success: bool = True
    count: int
    data: List[AssignedAssetResponse]


class DirectAssign(CamelModel):
    """HR hands an asset to an already affiliated employee."""
    hr_email: EmailStr
    employee_email: EmailStr
    asset_id: int


class DirectAssignResponse(CamelModel):
    success: bool = True
    message: str = "Asset assigned successfully"
    assignment: AssignedAssetResponse


class ReturnAsset(CamelModel):
    employee_email: EmailStr
