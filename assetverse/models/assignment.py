"""Assigned asset model."""
import enum
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.sql import func

from assetverse.database import Base


class AssignmentStatus(str, enum.Enum):
    ASSIGNED = "assigned"
    RETURNED = "returned"


class AssignmentSource(str, enum.Enum):
    """How the assignment came to be."""
    REQUEST = "request"
    DIRECT = "direct"


class AssignedAsset(Base):
    """One unit of an asset held by one employee."""
    __tablename__ = "assigned_assets"

    id = Column(Integer, primary_key=True, index=True)
    asset_id = Column(Integer, ForeignKey("assets.id", ondelete="SET NULL"), nullable=True, index=True)
    request_id = Column(Integer, ForeignKey("asset_requests.id", ondelete="SET NULL"), nullable=True)

    # Snapshot of asset/employee info at assignment time
    asset_name = Column(String(255), nullable=False)
    asset_image = Column(String(500), nullable=True)
    asset_type = Column(String(20), nullable=False)
    employee_email = Column(String(255), nullable=False, index=True)
    employee_name = Column(String(255), nullable=True)
    hr_email = Column(String(255), nullable=False, index=True)
    company_name = Column(String(255), nullable=False)

    source = Column(String(20), default=AssignmentSource.REQUEST.value, nullable=False)
    status = Column(String(20), default=AssignmentStatus.ASSIGNED.value, nullable=False)
    assignment_date = Column(DateTime(timezone=True), server_default=func.now())
    return_date = Column(DateTime(timezone=True), nullable=True)
