# ============================================================================
# FILE: habithub/db/models/user.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from habithub.db.base import Base

class User(Base):
    """Identity record; owns every post, comment, like, reflection and habit date"""
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, index=True)
    username = Column(String(20), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Selected habit; habits.user_id points back here so the FK is added after both tables exist
    habit_id = Column(Integer, ForeignKey("habits.habit_id", use_alter=True, name="fk_users_habit_id"), nullable=True)
    habit_frequency = Column(Integer, nullable=True)

    habit = relationship("Habit", foreign_keys=[habit_id], lazy="joined")

    @property
    def habit_name(self):
        return self.habit.habit_name if self.habit else None
