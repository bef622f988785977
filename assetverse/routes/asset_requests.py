"""Asset request routes."""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from assetverse.auth import ensure_same_email, get_current_user, require_employee, require_hr
from assetverse.database import get_db
from assetverse.models.user import User
from assetverse.schemas.asset_request import AssetRequestCreate, AssetRequestList, HrAction
from assetverse.schemas.common import CreatedResponse, MessageResponse
from assetverse.services import approval, requests

router = APIRouter(tags=["Asset Requests"])


@router.post("/asset-requests", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_asset_request(
    request_data: AssetRequestCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_employee)
):
    """Request one unit of an asset (employees only)."""
    ensure_same_email(request_data.requester_email, current_user.email)
    request = requests.create_request(
        db, request_data.asset_id, request_data.requester_email, request_data.note
    )
    return CreatedResponse(message="Asset request submitted successfully", inserted_id=request.id)


@router.get("/asset-requests", response_model=AssetRequestList)
async def list_asset_requests(
    email: str = Query(..., description="Employee or HR email"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Requests filed by an employee, or addressed to an HR, newest first."""
    ensure_same_email(email, current_user.email)
    return AssetRequestList(data=requests.list_requests(db, email))


@router.patch("/asset-request/approve/{request_id}", response_model=MessageResponse)
async def approve_asset_request(
    request_id: int,
    payload: HrAction,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_hr)
):
    """Approve a pending request, assigning the asset and onboarding the employee if new."""
    ensure_same_email(payload.hr_email, current_user.email)
    approval.approve_request(db, request_id, payload.hr_email)
    return MessageResponse(message="Request approved successfully")


@router.patch("/asset-request/reject/{request_id}", response_model=MessageResponse)
async def reject_asset_request(
    request_id: int,
    payload: HrAction,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_hr)
):
    """Reject a pending request."""
    ensure_same_email(payload.hr_email, current_user.email)
    requests.reject_request(db, request_id, payload.hr_email)
    return MessageResponse(message="Request rejected successfully")
