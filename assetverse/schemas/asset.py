"""Asset schemas for request/response validation."""
from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field

from assetverse.models.asset import ProductType
from assetverse.schemas.common import CamelModel


class AssetCreate(CamelModel):
    """Schema for registering an asset (HR only)."""
    product_name: str = Field(..., min_length=1, max_length=255)
    product_image: str = Field(..., min_length=1)
    product_type: ProductType
    product_quantity: int = Field(..., gt=0)
    hr_email: EmailStr
    company_name: str = Field(..., min_length=1)


class AssetUpdate(CamelModel):
    """Schema for updating an asset. ``hr_email`` authorizes the change."""
    hr_email: EmailStr
    product_name: Optional[str] = Field(None, min_length=1, max_length=255)
    product_image: Optional[str] = None
    product_quantity: Optional[int] = Field(None, ge=0)


class AssetDelete(CamelModel):
    hr_email: EmailStr


class AssetResponse(CamelModel):
    """Schema for asset response."""
    id: int
    product_name: str
    product_image: str
    product_type: ProductType
    product_quantity: int
    available_quantity: int
    hr_email: str
    company_name: str
    date_added: Optional[datetime] = None


class Pagination(CamelModel):
    current_page: int
    total_pages: int
    total_items: int
    has_next: bool
    has_prev: bool


class AssetPage(CamelModel):
    success: bool = True
    data: List[AssetResponse]
    pagination: Pagination


class AssetUpdateResponse(CamelModel):
    success: bool = True
    message: str = "Asset updated successfully"
    asset: AssetResponse
