"""Subscription package model."""
from sqlalchemy import Column, Integer, String, Float, JSON

from assetverse.database import Base


# Packages created on first run
DEFAULT_PACKAGES = [
    {
        "name": "basic",
        "employee_limit": 5,
        "price": 5.0,
        "features": ["Asset tracking", "Employee management", "Basic support"],
    },
    {
        "name": "standard",
        "employee_limit": 10,
        "price": 8.0,
        "features": ["All Basic features", "Advanced analytics", "Priority support"],
    },
    {
        "name": "premium",
        "employee_limit": 20,
        "price": 15.0,
        "features": ["All Standard features", "Custom branding", "24/7 support"],
    },
]


class Package(Base):
    """Purchasable plan; ``employee_limit`` becomes the HR's ``package_limit``."""
    __tablename__ = "packages"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), unique=True, index=True, nullable=False)
    employee_limit = Column(Integer, nullable=False)
    price = Column(Float, nullable=False)
    features = Column(JSON, nullable=True, default=list)
