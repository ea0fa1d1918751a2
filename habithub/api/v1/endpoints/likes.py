# ============================================================================
# FILE: habithub/api/v1/endpoints/likes.py
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from habithub.api.dependencies import require_token_user
from habithub.core.guard import GuardOutcome
from habithub.core.security import TokenClaims
from habithub.db.session import get_db
from habithub.schemas.common import CountResponse, MessageResponse
from habithub.schemas.like import LikeCreate, LikeResponse
from habithub.services.like_service import like_service

router = APIRouter()

@router.get("", response_model=List[LikeResponse])
async def list_likes(db: Session = Depends(get_db)):
    return like_service.get_likes(db)

@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def create_like(
    body: LikeCreate,
    token_user: TokenClaims = Depends(require_token_user),
):
    """
    Like a post once
    409 when the like exists already, 404 for an unknown post
    """
    outcome = like_service.create_like(body.post_id, token_user.user_id)
    if outcome == GuardOutcome.ALREADY_EXISTS:
        raise HTTPException(status_code=409, detail="Like already exists")
    return {"message": "Like added"}

@router.get("/bypost/{post_id}", response_model=List[LikeResponse])
async def likes_by_post(post_id: int, db: Session = Depends(get_db)):
    return like_service.get_likes_by_post(db, post_id)

@router.get("/bypost/user/{post_id}", response_model=LikeResponse)
async def like_by_post_and_token_user(
    post_id: int,
    db: Session = Depends(get_db),
    token_user: TokenClaims = Depends(require_token_user),
):
    like = like_service.get_like(db, post_id, token_user.user_id)
    if not like:
        raise HTTPException(status_code=404, detail="Like not found")
    return like

@router.get("/byuser/{user_id}", response_model=List[LikeResponse])
async def likes_by_user(user_id: int, db: Session = Depends(get_db)):
    return like_service.get_likes_by_user(db, user_id)

@router.get("/count/{post_id}", response_model=CountResponse)
async def count_likes(post_id: int, db: Session = Depends(get_db)):
    return {"count": like_service.count_likes(db, post_id)}

@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_like(
    post_id: int,
    db: Session = Depends(get_db),
    token_user: TokenClaims = Depends(require_token_user),
):
    if not like_service.delete_like(db, post_id, token_user.user_id):
        raise HTTPException(status_code=404, detail="Like not found")
    return {"message": "Like deleted"}
