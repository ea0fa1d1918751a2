# ============================================================================
# FILE: habithub/api/v1/endpoints/posts.py
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
from typing import List
from habithub.api.dependencies import get_upload_client, require_token_user
from habithub.config import get_settings
from habithub.core.outcomes import DeleteOutcome
from habithub.core.security import TokenClaims
from habithub.core.upload_client import UploadClient
from habithub.db.session import get_db
from habithub.schemas.common import MessageResponse
from habithub.schemas.post import PostCreate, PostMessageResponse, PostResponse, PostUpdate
from habithub.services.post_service import post_service

router = APIRouter()

@router.get("", response_model=List[PostResponse])
async def list_posts(db: Session = Depends(get_db)):
    upload_url = get_settings().UPLOAD_URL
    return [PostResponse.from_post(post, upload_url) for post in post_service.get_posts(db)]

@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: int, db: Session = Depends(get_db)):
    post = post_service.get_post(db, post_id)
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return PostResponse.from_post(post, get_settings().UPLOAD_URL)

@router.post("", response_model=PostMessageResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    db: Session = Depends(get_db),
    token_user: TokenClaims = Depends(require_token_user),
):
    upload_url = get_settings().UPLOAD_URL
    post = post_service.create_post(db, token_user.user_id, post_data, upload_url)
    return {"message": "Post created", "post": PostResponse.from_post(post, upload_url)}

@router.put("/{post_id}", response_model=PostMessageResponse)
async def update_post(
    post_id: int,
    update_data: PostUpdate,
    db: Session = Depends(get_db),
    token_user: TokenClaims = Depends(require_token_user),
):
    """Update title or text of one of the token user's posts"""
    if not update_data.model_dump(exclude_none=True):
        raise HTTPException(status_code=400, detail="Nothing to update")
    post = post_service.update_post(db, post_id, token_user.user_id, update_data)
    if not post:
        if post_service.get_post(db, post_id):
            raise HTTPException(status_code=403, detail="Not your post")
        raise HTTPException(status_code=404, detail="Post not found")
    return {"message": "Post updated", "post": PostResponse.from_post(post, get_settings().UPLOAD_URL)}

@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: int,
    request: Request,
    db: Session = Depends(get_db),
    token_user: TokenClaims = Depends(require_token_user),
    upload_client: UploadClient = Depends(get_upload_client),
):
    """
    Delete one of the token user's posts
    The media file is removed afterwards; failing that does not fail the delete
    """
    outcome = await post_service.delete_post(
        db, post_id, token_user.user_id, request.state.token, upload_client, get_settings().UPLOAD_URL
    )
    if outcome == DeleteOutcome.NOT_FOUND:
        raise HTTPException(status_code=404, detail="Post not found")
    if outcome == DeleteOutcome.FORBIDDEN:
        raise HTTPException(status_code=403, detail="Not your post")
    return {"message": "Post deleted"}
