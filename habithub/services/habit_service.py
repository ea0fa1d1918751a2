# ============================================================================
# FILE: habithub/services/habit_service.py
# ============================================================================
from datetime import date
from typing import List, Optional
from sqlalchemy import update
from sqlalchemy.orm import Session
from habithub.core.errors import NotFoundError, TransactionError
from habithub.core.transaction import TransactionalMutationExecutor, rowcount
from habithub.db.models import Habit, HabitDate, User
from habithub.schemas.habit import HabitCreate, HabitResponse
import logging

logger = logging.getLogger(__name__)

class HabitService:
    """Service layer for habits, habit selection and completion dates"""

    def __init__(self, executor: Optional[TransactionalMutationExecutor] = None):
        self._executor = executor or TransactionalMutationExecutor()

    def get_habits(self, db: Session) -> List[Habit]:
        return db.query(Habit).order_by(Habit.habit_id).all()

    def get_habit(self, db: Session, habit_id: int) -> Optional[Habit]:
        return db.query(Habit).filter(Habit.habit_id == habit_id).first()

    def get_created_habits(self, db: Session) -> List[Habit]:
        """Habits created by users (not the defaults)"""
        return db.query(Habit).filter(Habit.is_default.is_(False)).order_by(Habit.habit_id).all()

    def get_created_habit(self, db: Session, habit_id: int) -> Optional[Habit]:
        return db.query(Habit).filter(Habit.habit_id == habit_id, Habit.is_default.is_(False)).first()

    def create_habit(self, user_id: int, habit_data: HabitCreate) -> HabitResponse:
        """Create a habit and make it the user's selected habit, atomically"""

        created = {}

        def insert_habit(session: Session) -> int:
            if session.get(User, user_id) is None:
                raise NotFoundError("User not found")
            habit = Habit(
                habit_name=habit_data.habit_name,
                habit_description=habit_data.habit_description,
                habit_category=habit_data.habit_category,
                is_default=False,
                user_id=user_id,
            )
            session.add(habit)
            session.flush()
            created["habit"] = habit
            return habit.habit_id

        def select_for_user(session: Session) -> int:
            stmt = (
                update(User)
                .where(User.user_id == user_id)
                .values(habit_id=created["habit"].habit_id)
                .execution_options(synchronize_session=False)
            )
            updated = rowcount(session.execute(stmt))
            if updated == 0:
                raise NotFoundError("User not found")
            return updated

        def snapshot(session: Session) -> HabitResponse:
            return HabitResponse.model_validate(created["habit"])

        result = self._executor.run([insert_habit, select_for_user, snapshot], label=f"create habit for {user_id}")
        if result.committed:
            habit = result.results[-1]
            logger.info(f"Habit created: {habit.habit_id} for user {user_id}")
            return habit
        if isinstance(result.cause, NotFoundError):
            raise result.cause
        logger.error(f"Error creating habit: {result.cause}")
        raise TransactionError("Habit not created") from result.cause

    def set_frequency(self, db: Session, user_id: int, frequency: int) -> Optional[int]:
        try:
            updated = db.query(User).filter(User.user_id == user_id).update(
                {User.habit_frequency: frequency}, synchronize_session=False
            )
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Error updating frequency: {e}")
            raise
        if updated == 0:
            return None
        logger.info(f"Habit frequency for user {user_id}: {frequency}")
        return frequency

    def select_habit(self, db: Session, user_id: int, habit_id: int) -> Optional[Habit]:
        """Point the user's selected habit at an existing habit"""
        habit = self.get_habit(db, habit_id)
        if not habit:
            return None
        try:
            updated = db.query(User).filter(User.user_id == user_id).update(
                {User.habit_id: habit_id}, synchronize_session=False
            )
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Error selecting habit: {e}")
            raise
        if updated == 0:
            return None
        return habit

    def add_habit_date(self, db: Session, habit_id: int, user_id: int, completed_date: date) -> Optional[HabitDate]:
        if not self.get_habit(db, habit_id):
            return None
        try:
            habit_date = HabitDate(habit_id=habit_id, user_id=user_id, completed_date=completed_date)
            db.add(habit_date)
            db.commit()
            db.refresh(habit_date)
            return habit_date
        except Exception as e:
            db.rollback()
            logger.error(f"Error adding habit date: {e}")
            raise

    def get_habit_dates(self, db: Session, habit_id: int, user_id: int) -> List[date]:
        rows = db.query(HabitDate.completed_date).filter(
            HabitDate.habit_id == habit_id,
            HabitDate.user_id == user_id,
        ).order_by(HabitDate.completed_date).all()
        return [row.completed_date for row in rows]

# Create singleton instance
habit_service = HabitService()
