"""Subscription packages and Stripe checkout.

Checkout sessions are created and confirmed against Stripe; a confirmed paid
session raises the HR's ``package_limit`` exactly once, keyed by the session id.
"""
import logging
from typing import List

import stripe
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from assetverse.config import settings
from assetverse.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    PaymentProviderError,
    ValidationError,
)
from assetverse.models.package import Package, DEFAULT_PACKAGES
from assetverse.models.payment import Payment, PaymentStatus
from assetverse.models.user import User
from assetverse.services.affiliations import get_hr

logger = logging.getLogger(__name__)


def ensure_default_packages(db: Session):
    """Create default packages if they don't exist."""
    for package_data in DEFAULT_PACKAGES:
        existing = db.query(Package).filter(Package.name == package_data["name"]).first()
        if not existing:
            db.add(Package(**package_data))
    db.commit()


def list_packages(db: Session) -> List[Package]:
    return db.query(Package).order_by(Package.employee_limit).all()


def get_package(db: Session, name: str) -> Package:
    package = db.query(Package).filter(Package.name == name.lower()).first()
    if not package:
        raise NotFoundError("Package not found")
    return package


def create_checkout_session(db: Session, hr: User, package_name: str):
    """Start a Stripe Checkout for upgrading ``hr`` to ``package_name``."""
    package = get_package(db, package_name)

    if hr.subscription == package.name:
        raise ConflictError(f"You are already on the {package.name} package")
    if package.employee_limit < (hr.current_employees or 0):
        raise ConflictError(
            f"Package {package.name} allows {package.employee_limit} employees "
            f"but you have {hr.current_employees}"
        )

    stripe.api_key = settings.STRIPE_SECRET_KEY
    try:
        session = stripe.checkout.Session.create(
            payment_method_types=["card"],
            mode="payment",
            customer_email=hr.email,
            line_items=[{
                "price_data": {
                    "currency": settings.CURRENCY,
                    "unit_amount": int(round(package.price * 100)),
                    "product_data": {
                        "name": f"{package.name.title()} package",
                        "description": f"Up to {package.employee_limit} employees",
                    },
                },
                "quantity": 1,
            }],
            metadata={"hrEmail": hr.email, "packageName": package.name},
            success_url=f"{settings.CLIENT_URL}/payment-success?session_id={{CHECKOUT_SESSION_ID}}",
            cancel_url=f"{settings.CLIENT_URL}/upgrade-package",
        )
    except stripe.StripeError as e:
        logger.error(f"Stripe checkout creation failed for {hr.email}: {e}")
        raise PaymentProviderError("Failed to create checkout session")

    logger.info(f"Checkout session {session.id} created for {hr.email} ({package.name})")
    return session


def confirm_payment(db: Session, session_id: str, hr_email: str) -> User:
    """
    Apply the package bought in a paid checkout session.

    Confirming the same session again returns the account unchanged.
    """
    hr = get_hr(db, hr_email)

    existing = db.query(Payment).filter(Payment.transaction_id == session_id).first()
    if existing:
        if existing.hr_email != hr.email:
            raise AuthorizationError("Payment belongs to another account")
        return hr

    stripe.api_key = settings.STRIPE_SECRET_KEY
    try:
        session = stripe.checkout.Session.retrieve(session_id)
    except stripe.StripeError as e:
        logger.error(f"Stripe session lookup failed for {session_id}: {e}")
        raise PaymentProviderError("Failed to verify payment")

    if session.payment_status != "paid":
        raise ValidationError("Payment not completed")

    metadata = session.metadata or {}
    if metadata.get("hrEmail") != hr.email:
        raise AuthorizationError("Payment belongs to another account")

    package = get_package(db, metadata.get("packageName", ""))
    amount_total = getattr(session, "amount_total", None)

    hr.package_limit = package.employee_limit
    hr.subscription = package.name
    db.add(Payment(
        hr_email=hr.email,
        package_name=package.name,
        employee_limit=package.employee_limit,
        amount=amount_total / 100 if amount_total is not None else package.price,
        transaction_id=session_id,
        status=PaymentStatus.COMPLETED.value,
    ))
    try:
        db.commit()
    except IntegrityError:
        # Another confirmation of the same session won the race
        db.rollback()
        db.refresh(hr)
        return hr

    db.refresh(hr)
    logger.info(f"{hr.email} upgraded to {package.name} (limit {package.employee_limit})")
    return hr


def list_payments(db: Session, hr_email: str) -> List[Payment]:
    return db.query(Payment).filter(
        Payment.hr_email == hr_email
    ).order_by(Payment.id.desc()).all()
