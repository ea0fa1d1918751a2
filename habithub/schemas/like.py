# ============================================================================
# FILE: habithub/schemas/like.py
# ============================================================================
from pydantic import BaseModel
from typing import Optional
from datetime import datetime

class LikeCreate(BaseModel):
    post_id: int

class LikeResponse(BaseModel):
    like_id: int
    post_id: int
    user_id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
