# ============================================================================
# FILE: habithub/db/models/__init__.py
# ============================================================================
from habithub.db.models.user import User
from habithub.db.models.habit import Habit, HabitDate, Achievement
from habithub.db.models.post import Post, Comment, Like
from habithub.db.models.reflection import ReflectionPrompt, UserReflection
from habithub.db.models.message import DailyMessage

__all__ = [
    "User", "Habit", "HabitDate", "Achievement", "Post", "Comment", "Like",
    "ReflectionPrompt", "UserReflection", "DailyMessage",
]
