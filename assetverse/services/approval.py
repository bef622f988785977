"""Approval transaction.

Approving a request touches four tables: the asset's stock, the request's
status, a new assignment and, for a first-time employee, a new affiliation
plus the HR's employee counter. All of it happens in one database transaction:
the checks run before any write, and a failure in any later step (lost stock
race, lost quota race) rolls everything back so the request stays pending.
"""
import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from assetverse.errors import OutOfStockError
from assetverse.models.asset import Asset
from assetverse.models.asset_request import AssetRequest, RequestStatus
from assetverse.models.assignment import AssignmentSource
from assetverse.services import affiliations, assignments, inventory, requests
from assetverse.services.transitions import transition

logger = logging.getLogger(__name__)


def approve_request(db: Session, request_id: int, hr_email: str) -> AssetRequest:
    # 1. pending request owned by the caller
    request = requests.get_pending_request(db, request_id, hr_email, "approve")

    # 2. HR account and asset
    hr = affiliations.get_hr(db, hr_email)
    asset = db.query(Asset).filter(Asset.id == request.asset_id).first()
    if not inventory.is_in_stock(asset):
        raise OutOfStockError("Asset out of stock")

    # 3-4. first asset from this company means a new employee, which needs a slot
    is_new_employee = not affiliations.is_affiliated(db, request.requester_email, hr_email)
    if is_new_employee:
        affiliations.ensure_quota(hr)

    try:
        # 5. fails closed if the last unit went to someone else meanwhile
        if not inventory.reserve_unit(db, asset.id):
            raise OutOfStockError("Asset out of stock")

        # 6.
        transition(
            db, request, "request_status", RequestStatus.APPROVED,
            message="Cannot approve this request",
            approval_date=datetime.now(timezone.utc),
        )

        # 7.
        assignments.assign(
            db,
            asset,
            employee_email=request.requester_email,
            employee_name=request.requester_name,
            hr_email=request.hr_email,
            company_name=request.company_name,
            source=AssignmentSource.REQUEST,
            request_id=request.id,
            asset_name=request.asset_name,
            asset_type=request.asset_type,
        )

        # 8.
        if is_new_employee:
            affiliations.try_affiliate(db, request.requester_email, request.requester_name, hr)

        db.commit()
    except Exception:
        db.rollback()
        logger.warning(f"Approval of request {request_id} by {hr_email} aborted")
        raise

    db.refresh(request)
    logger.info(
        f"Request {request_id} approved by {hr_email}"
        f"{' (new employee onboarded)' if is_new_employee else ''}"
    )
    return request
