"""Package and payment schemas."""
from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field

from assetverse.schemas.common import CamelModel


class PackageResponse(CamelModel):
    id: int
    name: str
    employee_limit: int
    price: float
    features: List[str] = []


class CheckoutCreate(CamelModel):
    hr_email: EmailStr
    package_name: str = Field(..., min_length=1)


class CheckoutResponse(CamelModel):
    success: bool = True
    url: Optional[str] = None
    session_id: str


class PaymentConfirm(CamelModel):
    session_id: str = Field(..., min_length=1)


class PaymentConfirmResponse(CamelModel):
    success: bool = True
    message: str
    subscription: str
    package_limit: int


class PaymentResponse(CamelModel):
    id: int
    hr_email: str
    package_name: str
    employee_limit: int
    amount: float
    transaction_id: str
    status: str
    payment_date: Optional[datetime] = None


class PaymentList(CamelModel):
    success: bool = True
    data: List[PaymentResponse]
