# ============================================================================
# FILE: habithub/services/comment_service.py
# ============================================================================
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload
from habithub.db.models import Comment, Post
from habithub.schemas.comment import CommentCreate
import logging

logger = logging.getLogger(__name__)

class CommentService:
    """Service layer for comments; writes are filtered by owner"""

    def _with_owner(self, db: Session):
        return db.query(Comment).options(joinedload(Comment.owner))

    def get_comments(self, db: Session) -> List[Comment]:
        return self._with_owner(db).order_by(Comment.comment_id).all()

    def get_comment(self, db: Session, comment_id: int) -> Optional[Comment]:
        return self._with_owner(db).filter(Comment.comment_id == comment_id).first()

    def get_comments_by_post(self, db: Session, post_id: int) -> List[Comment]:
        return self._with_owner(db).filter(Comment.post_id == post_id).order_by(Comment.comment_id).all()

    def get_comments_by_user(self, db: Session, user_id: int) -> List[Comment]:
        return self._with_owner(db).filter(Comment.user_id == user_id).order_by(Comment.comment_id).all()

    def count_comments(self, db: Session, post_id: int) -> int:
        return db.query(func.count(Comment.comment_id)).filter(Comment.post_id == post_id).scalar() or 0

    def create_comment(self, db: Session, user_id: int, comment_data: CommentCreate) -> Optional[Comment]:
        """Add a comment; None when the post does not exist"""
        if db.query(Post.post_id).filter(Post.post_id == comment_data.post_id).first() is None:
            return None
        try:
            comment = Comment(
                post_id=comment_data.post_id,
                user_id=user_id,
                comment_text=comment_data.comment_text,
            )
            db.add(comment)
            db.commit()
            db.refresh(comment)
            logger.info(f"Comment created: {comment.comment_id} on post {comment.post_id}")
            return comment
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating comment: {e}")
            raise

    def update_comment(self, db: Session, comment_id: int, user_id: int, comment_text: str) -> Optional[Comment]:
        try:
            updated = db.query(Comment).filter(
                Comment.comment_id == comment_id,
                Comment.user_id == user_id,
            ).update({Comment.comment_text: comment_text}, synchronize_session=False)
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Error updating comment: {e}")
            raise
        if updated == 0:
            return None
        return self.get_comment(db, comment_id)

    def delete_comment(self, db: Session, comment_id: int, user_id: int) -> bool:
        try:
            deleted = db.query(Comment).filter(
                Comment.comment_id == comment_id,
                Comment.user_id == user_id,
            ).delete(synchronize_session=False)
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting comment: {e}")
            raise
        if deleted:
            logger.info(f"Comment deleted: {comment_id}")
        return deleted > 0

# Create singleton instance
comment_service = CommentService()
