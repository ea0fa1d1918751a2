# ============================================================================
# FILE: habithub/api/v1/endpoints/users.py
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
from typing import List
from habithub.api.dependencies import get_upload_client, require_token_user
from habithub.core.outcomes import DeleteOutcome
from habithub.core.security import TokenClaims
from habithub.config import get_settings
from habithub.core.upload_client import UploadClient, delete_files_best_effort, storage_key
from habithub.db.session import get_db
from habithub.schemas.user import (
    AvailabilityResponse, UserCreate, UserDeleteResponse, UserMessageResponse,
    UserResponse, UserUpdate,
)
from habithub.services.user_service import user_service
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("", response_model=List[UserResponse])
async def list_users(db: Session = Depends(get_db)):
    return user_service.get_users(db)

@router.get("/username/{username}", response_model=AvailabilityResponse)
async def check_username(username: str, db: Session = Depends(get_db)):
    return {"available": user_service.get_user_by_username(db, username) is None}

@router.get("/email/{email}", response_model=AvailabilityResponse)
async def check_email(email: str, db: Session = Depends(get_db)):
    return {"available": user_service.get_user_by_email(db, email) is None}

@router.get("/token", response_model=UserMessageResponse)
async def check_token(
    db: Session = Depends(get_db),
    token_user: TokenClaims = Depends(require_token_user),
):
    """Resolve the bearer token to its user"""
    user = user_service.get_user(db, token_user.user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return {"message": "Token valid", "user": user}

@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, db: Session = Depends(get_db)):
    user = user_service.get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user

@router.post("", response_model=UserMessageResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreate, db: Session = Depends(get_db)):
    """
    Register a new user account
    Duplicate username or email answers 409
    """
    user = user_service.create_user(db, user_data)
    return {"message": "User created", "user": user}

@router.put("", response_model=UserMessageResponse)
async def update_user(
    update_data: UserUpdate,
    db: Session = Depends(get_db),
    token_user: TokenClaims = Depends(require_token_user),
):
    if not update_data.model_dump(exclude_none=True):
        raise HTTPException(status_code=400, detail="Nothing to update")
    user = user_service.update_user(db, token_user.user_id, update_data)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return {"message": "User updated", "user": user}

@router.delete("", response_model=UserDeleteResponse)
async def delete_user(
    request: Request,
    token_user: TokenClaims = Depends(require_token_user),
    upload_client: UploadClient = Depends(get_upload_client),
):
    """
    Delete the token's user and everything it owns
    Post files are removed from the upload service after the commit
    """
    deletion = user_service.delete_user(token_user.user_id)
    if deletion.outcome == DeleteOutcome.NOT_FOUND:
        raise HTTPException(status_code=404, detail="User not found or already deleted")

    upload_url = get_settings().UPLOAD_URL
    keys = [storage_key(filename, upload_url) for filename in deletion.filenames]
    await delete_files_best_effort(
        upload_client, keys, request.state.token, context=f"deleting user {token_user.user_id}"
    )
    return {"message": "User deleted", "user": {"user_id": token_user.user_id}}
