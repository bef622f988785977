"""Asset request schemas."""
from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field

from assetverse.models.asset_request import RequestStatus
from assetverse.schemas.common import CamelModel


class AssetRequestCreate(CamelModel):
    """Schema for an employee's asset request."""
    asset_id: int
    requester_email: EmailStr
    note: Optional[str] = Field(None, max_length=1000)


class HrAction(CamelModel):
    """Body of approve/reject calls."""
    hr_email: EmailStr


class AssetRequestResponse(CamelModel):
    id: int
    asset_id: Optional[int] = None
    asset_name: str
    asset_type: str
    requester_name: Optional[str] = None
    requester_email: str
    hr_email: str
    company_name: str
    note: str = ""
    request_status: RequestStatus
    request_date: Optional[datetime] = None
    approval_date: Optional[datetime] = None
    rejection_date: Optional[datetime] = None


class AssetRequestList(CamelModel):
    success: bool = True
    data: List[AssetRequestResponse]
