"""Inventory ledger - asset registry and atomic stock counters.

The quantity counters are only ever changed by single conditional UPDATE
statements, so concurrent reservations can never drive stock below zero.
"""
import logging
import math
from typing import List, Optional, Tuple

from sqlalchemy import update
from sqlalchemy.orm import Session

from assetverse.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from assetverse.models.asset import Asset
from assetverse.models.asset_request import AssetRequest, RequestStatus
from assetverse.models.assignment import AssignedAsset, AssignmentStatus
from assetverse.models.user import User, UserRole
from assetverse.schemas.asset import AssetCreate, AssetUpdate, Pagination

logger = logging.getLogger(__name__)

ACTIVE_REQUEST_STATUSES = [RequestStatus.PENDING.value, RequestStatus.APPROVED.value]


def reserve_unit(db: Session, asset_id: int) -> bool:
    """Take one unit out of stock. Returns False when nothing was available."""
    result = db.execute(
        update(Asset)
        .where(Asset.id == asset_id, Asset.available_quantity > 0)
        .values(
            available_quantity=Asset.available_quantity - 1,
            product_quantity=Asset.product_quantity - 1,
        )
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


def release_unit(db: Session, asset_id: int) -> bool:
    """Put one unit back into stock. Returns False if the asset no longer exists."""
    result = db.execute(
        update(Asset)
        .where(Asset.id == asset_id)
        .values(
            available_quantity=Asset.available_quantity + 1,
            product_quantity=Asset.product_quantity + 1,
        )
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


def is_in_stock(asset: Optional[Asset]) -> bool:
    return asset is not None and asset.available_quantity > 0


def active_request_count(db: Session, asset_id: int) -> int:
    """Number of pending or approved requests referencing the asset."""
    return db.query(AssetRequest).filter(
        AssetRequest.asset_id == asset_id,
        AssetRequest.request_status.in_(ACTIVE_REQUEST_STATUSES),
    ).count()


def assigned_unit_count(db: Session, asset_id: int) -> int:
    """Units of the asset currently held by employees."""
    return db.query(AssignedAsset).filter(
        AssignedAsset.asset_id == asset_id,
        AssignedAsset.status == AssignmentStatus.ASSIGNED.value,
    ).count()


def can_delete(db: Session, asset_id: int) -> bool:
    return active_request_count(db, asset_id) == 0 and assigned_unit_count(db, asset_id) == 0


def get_asset(db: Session, asset_id: int) -> Asset:
    asset = db.query(Asset).filter(Asset.id == asset_id).first()
    if not asset:
        raise NotFoundError("Asset not found")
    return asset


def get_owned_asset(db: Session, asset_id: int, hr_email: str) -> Asset:
    """Load an asset and make sure ``hr_email`` owns it."""
    asset = get_asset(db, asset_id)
    if asset.hr_email != hr_email:
        raise AuthorizationError("Unauthorized")
    return asset


def create_asset(db: Session, data: AssetCreate) -> Asset:
    """Register a new asset for a verified HR account."""
    hr = db.query(User).filter(User.email == data.hr_email, User.role == UserRole.HR).first()
    if not hr:
        raise AuthorizationError("Unauthorized: Only verified HR users can add assets")
    if hr.company_name != data.company_name:
        raise AuthorizationError("Unauthorized: Company name does not match your account")

    asset = Asset(
        product_name=data.product_name.strip(),
        product_image=data.product_image,
        product_type=data.product_type.value,
        product_quantity=data.product_quantity,
        available_quantity=data.product_quantity,
        hr_email=hr.email,
        company_name=hr.company_name,
    )
    db.add(asset)
    db.commit()
    db.refresh(asset)
    logger.info(f"Asset {asset.id} '{asset.product_name}' added by {hr.email}")
    return asset


def list_assets(
    db: Session,
    email: Optional[str] = None,
    search: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
) -> Tuple[List[Asset], Pagination]:
    """
    Newest-first page of assets.

    With ``email`` the HR's whole inventory is listed; without it only assets
    that are still in stock.
    """
    query = db.query(Asset)

    if email:
        query = query.filter(Asset.hr_email == email)
    else:
        query = query.filter(Asset.available_quantity > 0)

    if search and search.strip():
        query = query.filter(Asset.product_name.ilike(f"%{search.strip()}%"))

    total_items = query.count()
    total_pages = math.ceil(total_items / limit) if total_items else 0

    assets = (
        query.order_by(Asset.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )

    pagination = Pagination(
        current_page=page,
        total_pages=total_pages,
        total_items=total_items,
        has_next=page < total_pages,
        has_prev=page > 1,
    )
    return assets, pagination


def update_asset(db: Session, asset_id: int, data: AssetUpdate) -> Asset:
    """Rename, re-image or restock an asset. Setting a quantity resets both counters."""
    update_data = data.model_dump(exclude_unset=True, exclude={"hr_email"})
    update_data = {field: value for field, value in update_data.items() if value is not None}
    if not update_data:
        raise ValidationError("At least one field is required to update")

    asset = get_owned_asset(db, asset_id, data.hr_email)

    if "product_name" in update_data:
        asset.product_name = update_data["product_name"].strip()
    if "product_image" in update_data:
        asset.product_image = update_data["product_image"]
    if "product_quantity" in update_data:
        asset.product_quantity = update_data["product_quantity"]
        asset.available_quantity = update_data["product_quantity"]

    db.commit()
    db.refresh(asset)
    return asset


def delete_asset(db: Session, asset_id: int, hr_email: str) -> None:
    """Delete an asset that is neither requested nor held by anyone."""
    asset = get_owned_asset(db, asset_id, hr_email)

    if not can_delete(db, asset.id):
        active = active_request_count(db, asset.id)
        if active > 0:
            raise ConflictError(f"Cannot delete asset. {active} active request(s) exist.")
        raise ConflictError(
            f"Cannot delete asset. {assigned_unit_count(db, asset.id)} unit(s) still assigned."
        )

    db.delete(asset)
    db.commit()
    logger.info(f"Asset {asset_id} deleted by {hr_email}")
