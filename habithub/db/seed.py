# ============================================================================
# FILE: habithub/db/seed.py
# ============================================================================
from sqlalchemy.orm import Session
from habithub.db.models import DailyMessage, Habit, ReflectionPrompt
import logging

logger = logging.getLogger(__name__)

# (habit_name, habit_description, habit_category)
DEFAULT_HABITS = [
    ("Drink water", "Drink at least eight glasses of water", "Health"),
    ("Morning walk", "Take a 20 minute walk before work", "Exercise"),
    ("Read", "Read for 15 minutes", "Learning"),
    ("Meditate", "Meditate for 10 minutes", "Mindfulness"),
    ("No screens before bed", "Put screens away an hour before sleep", "Sleep"),
]

# (prompt_text, type)
DEFAULT_PROMPTS = [
    ("What went well today?", "daily"),
    ("What made keeping your habit hard today?", "daily"),
    ("What would you do differently next week?", "weekly"),
    ("Which small win are you proud of?", "weekly"),
]

# (message_text, message_author)
DEFAULT_MESSAGES = [
    ("We are what we repeatedly do.", "Will Durant"),
    ("Small steps every day add up.", None),
    ("The secret of getting ahead is getting started.", "Mark Twain"),
    ("Motivation gets you going, habit keeps you going.", "Jim Ryun"),
    ("Progress, not perfection.", None),
]

def seed_defaults(session: Session) -> None:
    """Insert default habits, reflection prompts and messages into empty tables"""
    added = 0
    if session.query(Habit).filter(Habit.is_default.is_(True)).first() is None:
        for name, description, category in DEFAULT_HABITS:
            session.add(Habit(
                habit_name=name,
                habit_description=description,
                habit_category=category,
                is_default=True,
            ))
            added += 1
    if session.query(ReflectionPrompt).first() is None:
        for text, prompt_type in DEFAULT_PROMPTS:
            session.add(ReflectionPrompt(prompt_text=text, type=prompt_type))
            added += 1
    if session.query(DailyMessage).first() is None:
        for text, author in DEFAULT_MESSAGES:
            session.add(DailyMessage(message_text=text, message_author=author))
            added += 1

    if not added:
        return
    try:
        session.commit()
        logger.info(f"Seeded {added} default row(s)")
    except Exception as e:
        session.rollback()
        logger.error(f"Error seeding defaults: {e}")
        raise
