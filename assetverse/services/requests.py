"""Asset request lifecycle: creation, rejection and listing.

Approval lives in :mod:`assetverse.services.approval` because it spans the
inventory, assignment and affiliation ledgers.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from assetverse.errors import (
    AuthorizationError,
    ConflictError,
    InvalidStateError,
    NotFoundError,
    OutOfStockError,
    RequestBlockedError,
)
from assetverse.models.asset import Asset
from assetverse.models.asset_request import AssetRequest, RequestStatus
from assetverse.models.user import User, UserRole
from assetverse.services import inventory
from assetverse.services.transitions import transition

logger = logging.getLogger(__name__)


def get_request(db: Session, request_id: int) -> AssetRequest:
    request = db.query(AssetRequest).filter(AssetRequest.id == request_id).first()
    if not request:
        raise NotFoundError("Request not found")
    return request


def get_pending_request(db: Session, request_id: int, hr_email: str, action: str) -> AssetRequest:
    """Load a request that the HR may still act on."""
    request = get_request(db, request_id)
    if request.hr_email != hr_email:
        raise AuthorizationError(f"Cannot {action} this request")
    if request.request_status != RequestStatus.PENDING.value:
        raise InvalidStateError(f"Cannot {action} this request")
    return request


def find_existing(db: Session, asset_id: int, requester_email: str) -> Optional[AssetRequest]:
    """
    Most relevant earlier request for the pair. A rejection outranks
    everything else since it blocks the pair for good.
    """
    existing = db.query(AssetRequest).filter(
        AssetRequest.asset_id == asset_id,
        AssetRequest.requester_email == requester_email,
    ).all()
    for status in (RequestStatus.REJECTED, RequestStatus.APPROVED, RequestStatus.PENDING):
        for request in existing:
            if request.request_status == status.value:
                return request
    return None


def create_request(
    db: Session, asset_id: int, requester_email: str, note: Optional[str] = None
) -> AssetRequest:
    """File a pending request for one unit of an asset."""
    user = db.query(User).filter(User.email == requester_email).first()
    if not user or user.role != UserRole.EMPLOYEE:
        raise AuthorizationError("Only employees can request assets")

    asset = db.query(Asset).filter(Asset.id == asset_id).first()
    if not inventory.is_in_stock(asset):
        raise OutOfStockError("Asset not found or out of stock")

    existing = find_existing(db, asset.id, user.email)
    if existing:
        if existing.request_status == RequestStatus.REJECTED.value:
            raise RequestBlockedError()
        if existing.request_status == RequestStatus.APPROVED.value:
            raise ConflictError("This asset is already approved for you")
        raise ConflictError("You already have a pending request")

    request = AssetRequest(
        asset_id=asset.id,
        asset_name=asset.product_name,
        asset_type=asset.product_type,
        requester_name=user.name,
        requester_email=user.email,
        hr_email=asset.hr_email,
        company_name=asset.company_name,
        note=note or "",
        request_status=RequestStatus.PENDING.value,
        request_date=datetime.now(timezone.utc),
    )
    db.add(request)
    db.commit()
    db.refresh(request)
    logger.info(f"Request {request.id} for asset {asset.id} filed by {user.email}")
    return request


def reject_request(db: Session, request_id: int, hr_email: str) -> AssetRequest:
    """Reject a pending request. The (asset, employee) pair stays blocked afterwards."""
    request = get_pending_request(db, request_id, hr_email, "reject")
    transition(
        db, request, "request_status", RequestStatus.REJECTED,
        message="Cannot reject this request",
        rejection_date=datetime.now(timezone.utc),
    )
    db.commit()
    db.refresh(request)
    logger.info(f"Request {request_id} rejected by {hr_email}")
    return request


def list_requests(db: Session, email: str) -> List[AssetRequest]:
    """Employees see their own requests, HR sees those addressed to it."""
    user = db.query(User).filter(User.email == email).first()
    if not user:
        raise NotFoundError("User not found")

    query = db.query(AssetRequest)
    if user.role == UserRole.EMPLOYEE:
        query = query.filter(AssetRequest.requester_email == email)
    else:
        query = query.filter(AssetRequest.hr_email == email)
    return query.order_by(AssetRequest.id.desc()).all()
