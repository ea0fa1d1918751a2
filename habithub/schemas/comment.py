# ============================================================================
# FILE: habithub/schemas/comment.py
# ============================================================================
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class CommentCreate(BaseModel):
    post_id: int
    comment_text: str = Field(..., min_length=1)

class CommentUpdate(BaseModel):
    comment_text: str = Field(..., min_length=1)

class CommentResponse(BaseModel):
    comment_id: int
    post_id: int
    user_id: int
    comment_text: str
    created_at: Optional[datetime] = None
    username: Optional[str] = None

    @classmethod
    def from_comment(cls, comment) -> "CommentResponse":
        return cls(
            comment_id=comment.comment_id,
            post_id=comment.post_id,
            user_id=comment.user_id,
            comment_text=comment.comment_text,
            created_at=comment.created_at,
            username=comment.owner.username if comment.owner else None,
        )

class CommentMessageResponse(BaseModel):
    message: str
    comment: CommentResponse
