# ============================================================================
# FILE: habithub/schemas/message.py
# ============================================================================
from pydantic import BaseModel
from typing import Optional
from datetime import date

class DailyMessageResponse(BaseModel):
    message_id: int
    message_text: str
    message_author: Optional[str] = None
    last_used_date: Optional[date] = None

    class Config:
        from_attributes = True
