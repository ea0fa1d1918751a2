# ============================================================================
# FILE: habithub/api/v1/endpoints/comments.py
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from habithub.api.dependencies import require_token_user
from habithub.core.security import TokenClaims
from habithub.db.session import get_db
from habithub.schemas.comment import CommentCreate, CommentMessageResponse, CommentResponse, CommentUpdate
from habithub.schemas.common import CountResponse, MessageResponse
from habithub.services.comment_service import comment_service

router = APIRouter()

@router.get("", response_model=List[CommentResponse])
async def list_comments(db: Session = Depends(get_db)):
    return [CommentResponse.from_comment(c) for c in comment_service.get_comments(db)]

@router.post("", response_model=CommentMessageResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(
    comment_data: CommentCreate,
    db: Session = Depends(get_db),
    token_user: TokenClaims = Depends(require_token_user),
):
    comment = comment_service.create_comment(db, token_user.user_id, comment_data)
    if not comment:
        raise HTTPException(status_code=404, detail="Post not found")
    return {"message": "Comment added", "comment": CommentResponse.from_comment(comment)}

@router.get("/bypost/{post_id}", response_model=List[CommentResponse])
async def comments_by_post(post_id: int, db: Session = Depends(get_db)):
    return [CommentResponse.from_comment(c) for c in comment_service.get_comments_by_post(db, post_id)]

@router.get("/byuser", response_model=List[CommentResponse])
async def comments_by_token_user(
    db: Session = Depends(get_db),
    token_user: TokenClaims = Depends(require_token_user),
):
    return [CommentResponse.from_comment(c) for c in comment_service.get_comments_by_user(db, token_user.user_id)]

@router.get("/count/{post_id}", response_model=CountResponse)
async def count_comments(post_id: int, db: Session = Depends(get_db)):
    return {"count": comment_service.count_comments(db, post_id)}

@router.put("/{comment_id}", response_model=CommentMessageResponse)
async def update_comment(
    comment_id: int,
    body: CommentUpdate,
    db: Session = Depends(get_db),
    token_user: TokenClaims = Depends(require_token_user),
):
    comment = comment_service.update_comment(db, comment_id, token_user.user_id, body.comment_text)
    if not comment:
        raise HTTPException(status_code=404, detail="Comment not found")
    return {"message": "Comment updated", "comment": CommentResponse.from_comment(comment)}

@router.delete("/{comment_id}", response_model=MessageResponse)
async def delete_comment(
    comment_id: int,
    db: Session = Depends(get_db),
    token_user: TokenClaims = Depends(require_token_user),
):
    if not comment_service.delete_comment(db, comment_id, token_user.user_id):
        raise HTTPException(status_code=404, detail="Comment not found")
    return {"message": "Comment deleted"}
