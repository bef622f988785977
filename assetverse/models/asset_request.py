"""Asset request model."""
import enum
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.sql import func

from assetverse.database import Base


class RequestStatus(str, enum.Enum):
    """Request lifecycle. Approved and rejected are terminal."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class AssetRequest(Base):
    """An employee's request for one unit of an asset."""
    __tablename__ = "asset_requests"

    id = Column(Integer, primary_key=True, index=True)
    asset_id = Column(Integer, ForeignKey("assets.id", ondelete="SET NULL"), nullable=True, index=True)

    # Snapshot of asset/requester info at request time, never re-synced
    asset_name = Column(String(255), nullable=False)
    asset_type = Column(String(20), nullable=False)
    requester_name = Column(String(255), nullable=True)
    requester_email = Column(String(255), nullable=False, index=True)
    hr_email = Column(String(255), nullable=False, index=True)
    company_name = Column(String(255), nullable=False)

    note = Column(Text, nullable=False, default="")
    request_status = Column(String(20), default=RequestStatus.PENDING.value, nullable=False)
    request_date = Column(DateTime(timezone=True), server_default=func.now())
    approval_date = Column(DateTime(timezone=True), nullable=True)
    rejection_date = Column(DateTime(timezone=True), nullable=True)
