"""Asset collection routes."""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from assetverse.auth import ensure_same_email, get_current_user, require_hr
from assetverse.database import get_db
from assetverse.models.user import User
from assetverse.schemas.asset import (
    AssetCreate,
    AssetDelete,
    AssetPage,
    AssetUpdate,
    AssetUpdateResponse,
)
from assetverse.schemas.common import CreatedResponse, MessageResponse
from assetverse.services import inventory

router = APIRouter(prefix="/assetcollection", tags=["Assets"])


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_asset(
    asset_data: AssetCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_hr)
):
    """Add a new asset to the HR's company inventory."""
    ensure_same_email(asset_data.hr_email, current_user.email)
    asset = inventory.create_asset(db, asset_data)
    return CreatedResponse(message="Asset added successfully", inserted_id=asset.id)


@router.get("", response_model=AssetPage)
async def list_assets(
    email: Optional[str] = Query(None, description="HR email; omit to list in-stock assets"),
    search: Optional[str] = Query(None, description="Search by product name"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """List assets newest first, paginated."""
    if email:
        ensure_same_email(email, current_user.email)
    assets, pagination = inventory.list_assets(db, email, search, page, limit)
    return AssetPage(data=assets, pagination=pagination)


@router.patch("/{asset_id}", response_model=AssetUpdateResponse)
async def update_asset(
    asset_id: int,
    asset_update: AssetUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_hr)
):
    """Update an asset (owner only)."""
    ensure_same_email(asset_update.hr_email, current_user.email)
    asset = inventory.update_asset(db, asset_id, asset_update)
    return AssetUpdateResponse(asset=asset)


@router.delete("/{asset_id}", response_model=MessageResponse)
async def delete_asset(
    asset_id: int,
    payload: AssetDelete,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_hr)
):
    """Delete an asset nobody has an active request for (owner only)."""
    ensure_same_email(payload.hr_email, current_user.email)
    inventory.delete_asset(db, asset_id, payload.hr_email)
    return MessageResponse(message="Asset deleted successfully")
