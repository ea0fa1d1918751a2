# ============================================================================
# FILE: habithub/schemas/reflection.py
# ============================================================================
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class ReflectionCreate(BaseModel):
    reflection_text: str = Field(..., min_length=1)
    prompt_id: Optional[int] = None

class ReflectionResponse(BaseModel):
    reflection_id: int
    user_id: int
    prompt_id: Optional[int] = None
    reflection_text: str
    prompt_text: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class PromptResponse(BaseModel):
    prompt_id: int
    prompt_text: str
    type: Optional[str] = None

    class Config:
        from_attributes = True
