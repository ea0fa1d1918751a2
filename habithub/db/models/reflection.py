# ============================================================================
# FILE: habithub/db/models/reflection.py
# ============================================================================
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from datetime import datetime
from habithub.db.base import Base

class ReflectionPrompt(Base):
    __tablename__ = "reflection_prompts"

    prompt_id = Column(Integer, primary_key=True, index=True)
    prompt_text = Column(Text, nullable=False)
    type = Column(String(50), nullable=True)

class UserReflection(Base):
    __tablename__ = "user_reflections"

    reflection_id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.user_id"), nullable=False, index=True)
    prompt_id = Column(Integer, ForeignKey("reflection_prompts.prompt_id"), nullable=True)
    reflection_text = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    prompt = relationship("ReflectionPrompt", lazy="joined")

    @property
    def prompt_text(self):
        return self.prompt.prompt_text if self.prompt else None
