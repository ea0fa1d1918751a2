# ============================================================================
# FILE: habithub/services/message_service.py
# ============================================================================
import random
from datetime import date
from typing import Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session
from habithub.db.models import DailyMessage
import logging

logger = logging.getLogger(__name__)

class MessageService:
    """Message of the day"""

    def get_daily_message(self, db: Session, today: Optional[date] = None) -> Optional[DailyMessage]:
        """Pick a random message not used today and mark it used"""
        today = today or date.today()
        candidates = db.query(DailyMessage).filter(
            or_(DailyMessage.last_used_date.is_(None), DailyMessage.last_used_date < today)
        ).all()
        if not candidates:
            return None

        message = random.choice(candidates)
        try:
            message.last_used_date = today
            db.commit()
            db.refresh(message)
            return message
        except Exception as e:
            db.rollback()
            logger.error(f"Error marking message {message.message_id} used: {e}")
            raise

# Create singleton instance
message_service = MessageService()
