"""Asset model."""
import enum
from sqlalchemy import Column, Integer, String, DateTime, CheckConstraint
from sqlalchemy.sql import func

from assetverse.database import Base


class ProductType(str, enum.Enum):
    RETURNABLE = "Returnable"
    NON_RETURNABLE = "Non-returnable"


class Asset(Base):
    """
    Company equipment registered by an HR account.

    ``available_quantity`` is the stock that can still be handed out and is the
    only field consulted for out-of-stock checks. ``product_quantity`` mirrors
    every reservation and release so both counters move together.
    """
    __tablename__ = "assets"
    __table_args__ = (
        CheckConstraint("available_quantity >= 0", name="ck_assets_available_non_negative"),
        CheckConstraint("available_quantity <= product_quantity", name="ck_assets_available_le_total"),
        # deleted ids are never handed to a new asset
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, index=True)
    product_name = Column(String(255), nullable=False, index=True)
    product_image = Column(String(500), nullable=False)
    product_type = Column(String(20), nullable=False)
    product_quantity = Column(Integer, nullable=False, default=0)
    available_quantity = Column(Integer, nullable=False, default=0)
    hr_email = Column(String(255), nullable=False, index=True)
    company_name = Column(String(255), nullable=False)
    date_added = Column(DateTime(timezone=True), server_default=func.now())
