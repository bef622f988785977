"""User routes."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from assetverse.auth import ensure_same_email, get_current_user, get_token_email
from assetverse.database import get_db
from assetverse.errors import ConflictError
from assetverse.models.user import User
from assetverse.schemas.common import CamelModel, CreatedResponse
from assetverse.schemas.user import UserCreate, UserResponse, UserValidate
from assetverse.services import users as user_service

router = APIRouter(tags=["Users"])


class ValidateResponse(CamelModel):
    success: bool = True


@router.get("/user", response_model=List[UserResponse])
async def list_users(
    email: Optional[str] = Query(None, description="Filter by email"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """List users, optionally a single one by email."""
    if email:
        ensure_same_email(email, current_user.email)
    return user_service.list_users(db, email)


@router.post("/user/validate", response_model=ValidateResponse)
async def validate_user(
    payload: UserValidate,
    db: Session = Depends(get_db),
    token_email: str = Depends(get_token_email)
):
    """Check that an email is still free before registering it."""
    if not user_service.email_available(db, payload.email):
        raise ConflictError("User already exists")
    return ValidateResponse()


@router.post("/user", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def register_user(
    payload: UserCreate,
    db: Session = Depends(get_db),
    token_email: str = Depends(get_token_email)
):
    """Register the authenticated identity as an HR or employee account."""
    ensure_same_email(payload.email, token_email)
    user = user_service.register_user(db, payload)
    return CreatedResponse(message="User created successfully", inserted_id=user.id)
