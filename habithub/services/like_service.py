# ============================================================================
# FILE: habithub/services/like_service.py
# ============================================================================
from typing import List, Optional
from sqlalchemy import func, select
from sqlalchemy.orm import Session
from habithub.core.errors import NotFoundError
from habithub.core.guard import GuardOutcome, UniquenessGuard
from habithub.core.transaction import TransactionalMutationExecutor
from habithub.db.models import Like, Post
import logging

logger = logging.getLogger(__name__)

class LikeService:
    """Service layer for likes; one like per (user, post)"""

    def __init__(self, executor: Optional[TransactionalMutationExecutor] = None):
        self.guard = UniquenessGuard(Like, ("user_id", "post_id"), executor=executor)

    def get_likes(self, db: Session) -> List[Like]:
        return db.query(Like).order_by(Like.like_id).all()

    def get_likes_by_post(self, db: Session, post_id: int) -> List[Like]:
        return db.query(Like).filter(Like.post_id == post_id).order_by(Like.like_id).all()

    def get_likes_by_user(self, db: Session, user_id: int) -> List[Like]:
        return db.query(Like).filter(Like.user_id == user_id).order_by(Like.like_id).all()

    def get_like(self, db: Session, post_id: int, user_id: int) -> Optional[Like]:
        return db.query(Like).filter(Like.post_id == post_id, Like.user_id == user_id).first()

    def count_likes(self, db: Session, post_id: int) -> int:
        return db.query(func.count(Like.like_id)).filter(Like.post_id == post_id).scalar() or 0

    def create_like(self, post_id: int, user_id: int) -> GuardOutcome:
        """
        Like a post. Returns CREATED or ALREADY_EXISTS; raises NotFoundError
        for an unknown post and ConflictError when a concurrent like won.
        """
        def post_exists(session: Session) -> None:
            if session.execute(select(Post.post_id).where(Post.post_id == post_id)).first() is None:
                raise NotFoundError("Post not found")

        return self.guard.try_create({"user_id": user_id, "post_id": post_id}, precheck=post_exists)

    def delete_like(self, db: Session, post_id: int, user_id: int) -> bool:
        try:
            deleted = db.query(Like).filter(
                Like.post_id == post_id,
                Like.user_id == user_id,
            ).delete(synchronize_session=False)
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting like: {e}")
            raise
        return deleted > 0

# Create singleton instance
like_service = LikeService()
