# ============================================================================
# FILE: habithub/services/reflection_service.py
# ============================================================================
from typing import List, Optional
from sqlalchemy.orm import Session, joinedload
from habithub.db.models import ReflectionPrompt, UserReflection
from habithub.schemas.reflection import ReflectionCreate
import logging

logger = logging.getLogger(__name__)

class ReflectionService:
    """Service layer for reflection prompts and user reflections"""

    def get_reflections(self, db: Session) -> List[UserReflection]:
        return db.query(UserReflection).options(joinedload(UserReflection.prompt)).order_by(
            UserReflection.reflection_id
        ).all()

    def get_reflections_by_user(self, db: Session, user_id: int) -> List[UserReflection]:
        return db.query(UserReflection).options(joinedload(UserReflection.prompt)).filter(
            UserReflection.user_id == user_id
        ).order_by(UserReflection.reflection_id).all()

    def get_prompts(self, db: Session) -> List[ReflectionPrompt]:
        return db.query(ReflectionPrompt).order_by(ReflectionPrompt.prompt_id).all()

    def create_reflection(self, db: Session, user_id: int, data: ReflectionCreate) -> Optional[UserReflection]:
        """Store a reflection; None when it answers a prompt that does not exist"""
        if data.prompt_id is not None and db.get(ReflectionPrompt, data.prompt_id) is None:
            return None
        try:
            reflection = UserReflection(
                user_id=user_id,
                prompt_id=data.prompt_id,
                reflection_text=data.reflection_text,
            )
            db.add(reflection)
            db.commit()
            db.refresh(reflection)
            logger.info(f"Reflection added: {reflection.reflection_id} for user {user_id}")
            return reflection
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating reflection: {e}")
            raise

# Create singleton instance
reflection_service = ReflectionService()
