"""Package and payment routes."""
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from assetverse.auth import ensure_same_email, get_current_user, require_hr
from assetverse.database import get_db
from assetverse.models.user import User
from assetverse.schemas.payment import (
    CheckoutCreate,
    CheckoutResponse,
    PackageResponse,
    PaymentConfirm,
    PaymentConfirmResponse,
    PaymentList,
)
from assetverse.services import payments

router = APIRouter(tags=["Payments"])


@router.get("/packages", response_model=List[PackageResponse])
async def list_packages(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Available subscription packages, smallest first."""
    payments.ensure_default_packages(db)
    return payments.list_packages(db)


@router.post("/create-checkout-session", response_model=CheckoutResponse)
async def create_checkout_session(
    payload: CheckoutCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_hr)
):
    """Start a Stripe checkout for a package upgrade."""
    ensure_same_email(payload.hr_email, current_user.email)
    session = payments.create_checkout_session(db, current_user, payload.package_name)
    return CheckoutResponse(url=session.url, session_id=session.id)


@router.post("/payments/confirm", response_model=PaymentConfirmResponse)
async def confirm_payment(
    payload: PaymentConfirm,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_hr)
):
    """Apply the package of a paid checkout session to the caller's account."""
    hr = payments.confirm_payment(db, payload.session_id, current_user.email)
    return PaymentConfirmResponse(
        message="Package upgraded successfully",
        subscription=hr.subscription,
        package_limit=hr.package_limit,
    )


@router.get("/payments", response_model=PaymentList)
async def list_payments(
    hr_email: str = Query(..., alias="hrEmail"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_hr)
):
    """Payment history of an HR account, newest first."""
    ensure_same_email(hr_email, current_user.email)
    return PaymentList(data=payments.list_payments(db, hr_email))
