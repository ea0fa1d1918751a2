# ============================================================================
# FILE: habithub/api/v1/endpoints/messages.py
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from habithub.db.session import get_db
from habithub.schemas.message import DailyMessageResponse
from habithub.services.message_service import message_service

router = APIRouter()

@router.get("", response_model=DailyMessageResponse)
async def daily_message(db: Session = Depends(get_db)):
    """Message of the day"""
    message = message_service.get_daily_message(db)
    if not message:
        raise HTTPException(status_code=404, detail="No messages left for today")
    return message
