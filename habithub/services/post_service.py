# ============================================================================
# FILE: habithub/services/post_service.py
# ============================================================================
from typing import List, Optional
from sqlalchemy import delete, select
from sqlalchemy.orm import Session, joinedload
from habithub.core.errors import ForbiddenError, NotFoundError, TransactionError
from habithub.core.outcomes import DeleteOutcome
from habithub.core.transaction import TransactionalMutationExecutor, rowcount
from habithub.core.upload_client import UploadClient, delete_files_best_effort, storage_key
from habithub.db.models import Comment, Like, Post
from habithub.schemas.post import PostCreate, PostUpdate
import logging

logger = logging.getLogger(__name__)

class PostService:
    """Service layer for posts"""

    def __init__(self, executor: Optional[TransactionalMutationExecutor] = None):
        self._executor = executor or TransactionalMutationExecutor()

    def get_posts(self, db: Session) -> List[Post]:
        """All posts, newest first, with their owners"""
        return db.query(Post).options(joinedload(Post.owner)).order_by(
            Post.created_at.desc(), Post.post_id.desc()
        ).all()

    def get_post(self, db: Session, post_id: int) -> Optional[Post]:
        return db.query(Post).options(joinedload(Post.owner)).filter(Post.post_id == post_id).first()

    def create_post(self, db: Session, user_id: int, post_data: PostCreate, upload_url: str = "") -> Post:
        """Create a post owned by the token user"""
        try:
            post = Post(
                user_id=user_id,
                post_title=post_data.post_title,
                post_text=post_data.post_text,
                filename=storage_key(post_data.filename, upload_url),
                filesize=post_data.filesize,
                media_type=post_data.media_type,
            )
            db.add(post)
            db.commit()
            db.refresh(post)
            logger.info(f"Post created: {post.post_id} for user {user_id}")
            return post
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating post: {e}")
            raise

    def update_post(self, db: Session, post_id: int, user_id: int, update_data: PostUpdate) -> Optional[Post]:
        """Update title/text; the owner filter is part of the write"""
        values = update_data.model_dump(exclude_none=True)
        if not values:
            return None
        try:
            updated = db.query(Post).filter(Post.post_id == post_id, Post.user_id == user_id).update(
                values, synchronize_session=False
            )
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Error updating post: {e}")
            raise
        if updated == 0:
            return None
        logger.info(f"Post updated: {post_id}")
        return self.get_post(db, post_id)

    async def delete_post(
        self,
        db: Session,
        post_id: int,
        user_id: int,
        token: str,
        upload_client: UploadClient,
        upload_url: str = "",
    ) -> DeleteOutcome:
        """
        Delete a post, then its media file on the upload service.

        The local delete (post plus its likes and comments) commits before
        the upload service is called, and a failed remote delete does not
        undo it: the file is left as an orphan and logged for reconciliation.
        """
        post = self.get_post(db, post_id)
        if not post:
            return DeleteOutcome.NOT_FOUND
        key = storage_key(post.filename, upload_url)

        def check_owner(session: Session) -> None:
            owned = session.execute(
                select(Post.post_id).where(Post.post_id == post_id, Post.user_id == user_id)
            ).first()
            if owned is None:
                raise ForbiddenError("Post not deleted")

        def delete_dependents(session: Session) -> int:
            likes = session.execute(
                delete(Like).where(Like.post_id == post_id).execution_options(synchronize_session=False)
            )
            comments = session.execute(
                delete(Comment).where(Comment.post_id == post_id).execution_options(synchronize_session=False)
            )
            return rowcount(likes) + rowcount(comments)

        def delete_row(session: Session) -> int:
            stmt = delete(Post).where(Post.post_id == post_id, Post.user_id == user_id)
            deleted = rowcount(session.execute(stmt.execution_options(synchronize_session=False)))
            if deleted == 0:
                raise ForbiddenError("Post not deleted")
            return deleted

        result = self._executor.run(
            [check_owner, delete_dependents, delete_row], label=f"delete post {post_id}"
        )
        if not result.committed:
            if isinstance(result.cause, (ForbiddenError, NotFoundError)):
                # Gone in the meantime, or someone else's post
                db.expire_all()
                return DeleteOutcome.FORBIDDEN if self.get_post(db, post_id) else DeleteOutcome.NOT_FOUND
            logger.error(f"Error deleting post {post_id}: {result.cause}")
            raise TransactionError("Post not deleted") from result.cause

        logger.info(f"Post deleted: {post_id} by user {user_id}")
        await delete_files_best_effort(upload_client, [key], token, context=f"deleting post {post_id}")
        return DeleteOutcome.DELETED

# Create singleton instance
post_service = PostService()
