"""Payment model."""
import enum
from sqlalchemy import Column, Integer, String, Float, DateTime
from sqlalchemy.sql import func

from assetverse.database import Base


class PaymentStatus(str, enum.Enum):
    COMPLETED = "completed"


class Payment(Base):
    """A confirmed package purchase. ``transaction_id`` is the checkout session id."""
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    hr_email = Column(String(255), nullable=False, index=True)
    package_name = Column(String(50), nullable=False)
    employee_limit = Column(Integer, nullable=False)
    amount = Column(Float, nullable=False)
    transaction_id = Column(String(255), unique=True, index=True, nullable=False)
    status = Column(String(20), default=PaymentStatus.COMPLETED.value, nullable=False)
    payment_date = Column(DateTime(timezone=True), server_default=func.now())
