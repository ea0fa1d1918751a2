# ============================================================================
# FILE: habithub/schemas/post.py
# ============================================================================
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class PostCreate(BaseModel):
    """Post body; filename/filesize/media_type come from the upload service's answer"""
    post_title: str = Field(..., min_length=1, max_length=255)
    post_text: Optional[str] = None
    filename: str = Field(..., min_length=1, max_length=255)
    filesize: int = Field(..., ge=0)
    media_type: str = Field(..., min_length=1, max_length=100)

class PostUpdate(BaseModel):
    post_title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    post_text: Optional[str] = None

class PostResponse(BaseModel):
    post_id: int
    user_id: int
    post_title: str
    post_text: Optional[str] = None
    filename: str
    thumbnail: str
    filesize: int
    media_type: str
    created_at: Optional[datetime] = None
    username: Optional[str] = None

    @classmethod
    def from_post(cls, post, upload_url: str) -> "PostResponse":
        """Expose the stored key as public file and thumbnail URLs"""
        return cls(
            post_id=post.post_id,
            user_id=post.user_id,
            post_title=post.post_title,
            post_text=post.post_text,
            filename=f"{upload_url}{post.filename}",
            thumbnail=f"{upload_url}{post.filename}-thumb.png",
            filesize=post.filesize,
            media_type=post.media_type,
            created_at=post.created_at,
            username=post.owner.username if post.owner else None,
        )

class PostMessageResponse(BaseModel):
    message: str
    post: PostResponse
