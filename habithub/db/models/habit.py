# ============================================================================
# FILE: habithub/db/models/habit.py
# ============================================================================
from sqlalchemy import Boolean, Column, Date, Integer, String, DateTime, ForeignKey, Text
from datetime import datetime
from habithub.db.base import Base

class Habit(Base):
    """Default habit (is_default) or one created by a user"""
    __tablename__ = "habits"

    habit_id = Column(Integer, primary_key=True, index=True)
    habit_name = Column(String(100), nullable=False)
    habit_description = Column(Text, nullable=False)
    habit_category = Column(String(50), nullable=False)
    is_default = Column(Boolean, default=False, nullable=False)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=True, index=True)

class HabitDate(Base):
    """A day on which a user completed a habit"""
    __tablename__ = "habit_dates"

    id = Column(Integer, primary_key=True, index=True)
    habit_id = Column(Integer, ForeignKey("habits.habit_id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    completed_date = Column(Date, nullable=False)

class Achievement(Base):
    __tablename__ = "achievements"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    habit_id = Column(Integer, ForeignKey("habits.habit_id"), nullable=True)
    achieved_at = Column(DateTime, default=datetime.utcnow)
