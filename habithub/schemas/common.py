# ============================================================================
# FILE: habithub/schemas/common.py
# ============================================================================
from pydantic import BaseModel

class MessageResponse(BaseModel):
    message: str

class CountResponse(BaseModel):
    count: int
