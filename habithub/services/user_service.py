# ============================================================================
# FILE: habithub/services/user_service.py
# ============================================================================
from dataclasses import dataclass, field
from typing import List, Optional
from sqlalchemy import delete, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from habithub.core.errors import ConflictError, NotFoundError, TransactionError
from habithub.core.outcomes import DeleteOutcome
from habithub.core.security import get_password_hash, verify_password
from habithub.core.transaction import TransactionalMutationExecutor, rowcount
from habithub.db.models import (
    Achievement, Comment, Habit, HabitDate, Like, Post, User, UserReflection,
)
from habithub.schemas.user import UserCreate, UserUpdate
import logging

logger = logging.getLogger(__name__)

@dataclass
class UserDeletion:
    outcome: DeleteOutcome
    # Storage keys of posts removed with the user; their files are cleaned up after commit
    filenames: List[str] = field(default_factory=list)

def _bulk_delete(model, *criteria):
    def step(session: Session) -> int:
        stmt = delete(model).where(*criteria).execution_options(synchronize_session=False)
        return rowcount(session.execute(stmt))
    return step

class UserService:
    """Service layer for user operations"""

    def __init__(self, executor: Optional[TransactionalMutationExecutor] = None):
        self._executor = executor or TransactionalMutationExecutor()

    def create_user(self, db: Session, user_data: UserCreate) -> User:
        """Create a new user account"""
        try:
            user = User(
                username=user_data.username,
                email=user_data.email,
                password_hash=get_password_hash(user_data.password),
            )
            db.add(user)
            db.commit()
            db.refresh(user)
            logger.info(f"User created: {user.username}")
            return user
        except IntegrityError as e:
            db.rollback()
            logger.warning(f"Duplicate user {user_data.username}: {e.orig}")
            raise ConflictError("Duplicate entry") from e
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating user: {e}")
            raise

    def get_users(self, db: Session) -> List[User]:
        return db.query(User).order_by(User.user_id).all()

    def get_user(self, db: Session, user_id: int) -> Optional[User]:
        return db.query(User).filter(User.user_id == user_id).first()

    def get_user_by_username(self, db: Session, username: str) -> Optional[User]:
        """Get user by username"""
        return db.query(User).filter(User.username == username).first()

    def get_user_by_email(self, db: Session, email: str) -> Optional[User]:
        """Get user by email"""
        return db.query(User).filter(User.email == email).first()

    def authenticate_user(self, db: Session, username: str, password: str) -> Optional[User]:
        """Authenticate user with username and password"""
        user = self.get_user_by_username(db, username)
        if not user:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    def update_user(self, db: Session, user_id: int, update_data: UserUpdate) -> Optional[User]:
        """Update the token user's own profile; None when the user is gone"""
        user = self.get_user(db, user_id)
        if not user:
            return None

        try:
            if update_data.username is not None:
                user.username = update_data.username
            if update_data.email is not None:
                user.email = update_data.email
            if update_data.password is not None:
                user.password_hash = get_password_hash(update_data.password)
            db.commit()
            db.refresh(user)
            logger.info(f"User updated: {user_id}")
            return user
        except IntegrityError as e:
            db.rollback()
            raise ConflictError("Username or email already in use") from e
        except Exception as e:
            db.rollback()
            logger.error(f"Error updating user: {e}")
            raise

    def delete_user(self, user_id: int) -> UserDeletion:
        """
        Remove a user and every row that depends on it in one transaction.

        The store does not cascade, so dependents go first: achievements and
        habit dates, likes and comments (by the user and on the user's posts),
        habits the user created, posts, reflections, and the user row last.
        If the user row is missing nothing is written.
        """
        own_posts = select(Post.post_id).where(Post.user_id == user_id)
        created_habits = select(Habit.habit_id).where(Habit.user_id == user_id, Habit.is_default.is_(False))

        def require_user(session: Session) -> None:
            if session.get(User, user_id) is None:
                raise NotFoundError("User not found or already deleted")

        def collect_filenames(session: Session) -> List[str]:
            return list(session.execute(select(Post.filename).where(Post.user_id == user_id)).scalars())

        def release_created_habits(session: Session) -> int:
            stmt = (
                update(User)
                .where(User.habit_id.in_(created_habits))
                .values(habit_id=None)
                .execution_options(synchronize_session=False)
            )
            return rowcount(session.execute(stmt))

        def delete_user_row(session: Session) -> int:
            stmt = delete(User).where(User.user_id == user_id).execution_options(synchronize_session=False)
            deleted = rowcount(session.execute(stmt))
            if deleted == 0:
                raise NotFoundError("User not found or already deleted")
            return deleted

        steps = [
            require_user,
            collect_filenames,
            _bulk_delete(Achievement, Achievement.user_id == user_id),
            _bulk_delete(HabitDate, HabitDate.user_id == user_id),
            _bulk_delete(Like, or_(Like.user_id == user_id, Like.post_id.in_(own_posts))),
            _bulk_delete(Comment, or_(Comment.user_id == user_id, Comment.post_id.in_(own_posts))),
            release_created_habits,
            _bulk_delete(HabitDate, HabitDate.habit_id.in_(created_habits)),
            _bulk_delete(Achievement, Achievement.habit_id.in_(created_habits)),
            _bulk_delete(Habit, Habit.user_id == user_id, Habit.is_default.is_(False)),
            _bulk_delete(Post, Post.user_id == user_id),
            _bulk_delete(UserReflection, UserReflection.user_id == user_id),
            delete_user_row,
        ]
        result = self._executor.run(steps, label=f"delete user {user_id}")

        if result.committed:
            filenames = result.results[1]
            logger.info(f"User deleted: {user_id} ({len(filenames)} post file(s) to remove)")
            return UserDeletion(outcome=DeleteOutcome.DELETED, filenames=filenames)
        if isinstance(result.cause, NotFoundError):
            return UserDeletion(outcome=DeleteOutcome.NOT_FOUND)
        logger.error(f"Error deleting user {user_id}: {result.cause}")
        raise TransactionError("User not deleted") from result.cause

# Create singleton instance
user_service = UserService()
