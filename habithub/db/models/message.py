# ============================================================================
# FILE: habithub/db/models/message.py
# ============================================================================
from sqlalchemy import Column, Date, Integer, String, Text
from habithub.db.base import Base

class DailyMessage(Base):
    """Motivational message; last_used_date keeps one from repeating within a day"""
    __tablename__ = "messages"

    message_id = Column(Integer, primary_key=True, index=True)
    message_text = Column(Text, nullable=False)
    message_author = Column(String(100), nullable=True)
    last_used_date = Column(Date, nullable=True)
