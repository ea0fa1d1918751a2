from datetime import date

import pytest
from sqlalchemy import delete

from habithub.core.errors import ConflictError, TransactionError
from habithub.core.outcomes import DeleteOutcome
from habithub.core.transaction import TransactionalMutationExecutor
from habithub.db.models import (
    Achievement, Comment, Habit, HabitDate, Like, Post, ReflectionPrompt, User, UserReflection,
)
from habithub.schemas.habit import HabitCreate
from habithub.schemas.user import UserCreate, UserUpdate
from habithub.services.habit_service import habit_service
from habithub.services.user_service import UserService, user_service

DAY = date(2024, 5, 1)

class FailBeforeUserRow(TransactionalMutationExecutor):
    """Injects a store failure right before the final user-row delete"""

    def run(self, steps, label="transaction"):
        def fail(session):
            raise RuntimeError("store failure")
        steps = list(steps)
        return super().run(steps[:-1] + [fail, steps[-1]], label)

class UserRowVanishes(TransactionalMutationExecutor):
    """Skips the up-front existence check and removes the user row just before the final delete"""

    def __init__(self, user_id):
        super().__init__()
        self.user_id = user_id

    def run(self, steps, label="transaction"):
        def remove_row(session):
            session.execute(delete(User).where(User.user_id == self.user_id))
        steps = list(steps)
        return super().run(steps[1:-1] + [remove_row, steps[-1]], label)

@pytest.fixture()
def populated(db, make_user, make_post, default_habit):
    alice = make_user("alice")
    bob = make_user("bob")
    alice_post = make_post(alice.user_id, filename="alice-1.jpg")
    bob_post = make_post(bob.user_id, filename="bob-1.jpg")

    created = habit_service.create_habit(
        alice.user_id,
        HabitCreate(habit_name="Cold showers", habit_description="Every morning", habit_category="Health"),
    )
    prompt = db.query(ReflectionPrompt).first()

    db.add_all([
        Like(user_id=alice.user_id, post_id=bob_post.post_id),
        Like(user_id=bob.user_id, post_id=alice_post.post_id),
        Comment(user_id=alice.user_id, post_id=bob_post.post_id, comment_text="nice"),
        Comment(user_id=bob.user_id, post_id=alice_post.post_id, comment_text="cool"),
        Comment(user_id=bob.user_id, post_id=bob_post.post_id, comment_text="mine"),
        UserReflection(user_id=alice.user_id, prompt_id=prompt.prompt_id, reflection_text="fine"),
        Achievement(user_id=alice.user_id, habit_id=default_habit.habit_id),
        HabitDate(user_id=alice.user_id, habit_id=default_habit.habit_id, completed_date=DAY),
        HabitDate(user_id=bob.user_id, habit_id=created.habit_id, completed_date=DAY),
        Achievement(user_id=bob.user_id, habit_id=created.habit_id),
    ])
    db.query(User).filter(User.user_id == bob.user_id).update({User.habit_id: created.habit_id})
    db.commit()
    return {
        "alice": alice.user_id,
        "bob": bob.user_id,
        "alice_post": alice_post.post_id,
        "bob_post": bob_post.post_id,
        "habit": created.habit_id,
    }

def _counts(db, user_id):
    db.expire_all()
    return {
        "user": db.query(User).filter(User.user_id == user_id).count(),
        "posts": db.query(Post).filter(Post.user_id == user_id).count(),
        "likes": db.query(Like).filter(Like.user_id == user_id).count(),
        "comments": db.query(Comment).filter(Comment.user_id == user_id).count(),
        "reflections": db.query(UserReflection).filter(UserReflection.user_id == user_id).count(),
        "achievements": db.query(Achievement).filter(Achievement.user_id == user_id).count(),
        "habit_dates": db.query(HabitDate).filter(HabitDate.user_id == user_id).count(),
        "habits": db.query(Habit).filter(Habit.user_id == user_id).count(),
    }

def test_create_user_hashes_password(db):
    user = user_service.create_user(db, UserCreate(username="carol", email="carol@example.com", password="password123"))
    assert user.password_hash != "password123"
    assert user_service.authenticate_user(db, "carol", "password123").user_id == user.user_id
    assert user_service.authenticate_user(db, "carol", "wrongpass1") is None
    assert user_service.authenticate_user(db, "nobody", "password123") is None

def test_duplicate_username_or_email_is_a_conflict(db, make_user):
    make_user("dave")
    with pytest.raises(ConflictError):
        user_service.create_user(db, UserCreate(username="dave", email="other@example.com", password="password123"))
    with pytest.raises(ConflictError):
        user_service.create_user(db, UserCreate(username="other", email="dave@example.com", password="password123"))

def test_update_user_rehashes_password(db, make_user):
    user = make_user("erin")
    old_hash = user.password_hash
    updated = user_service.update_user(db, user.user_id, UserUpdate(password="newpassword1"))
    assert updated.password_hash != old_hash
    assert user_service.authenticate_user(db, "erin", "newpassword1") is not None

def test_update_to_taken_username_is_a_conflict(db, make_user):
    make_user("frank")
    user = make_user("grace")
    with pytest.raises(ConflictError):
        user_service.update_user(db, user.user_id, UserUpdate(username="frank"))

def test_delete_user_removes_every_dependent_row(db, populated):
    deletion = user_service.delete_user(populated["alice"])

    assert deletion.outcome == DeleteOutcome.DELETED
    assert deletion.filenames == ["alice-1.jpg"]
    assert all(count == 0 for count in _counts(db, populated["alice"]).values())

    # Rows of other users that pointed at alice's post or habit are gone too
    assert db.query(Like).filter(Like.post_id == populated["alice_post"]).count() == 0
    assert db.query(Comment).filter(Comment.post_id == populated["alice_post"]).count() == 0
    assert db.query(HabitDate).filter(HabitDate.habit_id == populated["habit"]).count() == 0
    assert db.query(Achievement).filter(Achievement.habit_id == populated["habit"]).count() == 0

    # Bob keeps his own post, comment and account; his selection of alice's habit is cleared
    bob = db.query(User).filter(User.user_id == populated["bob"]).one()
    assert bob.habit_id is None
    assert db.query(Post).filter(Post.post_id == populated["bob_post"]).count() == 1
    assert db.query(Comment).filter(Comment.user_id == populated["bob"]).count() == 1
    assert db.query(Habit).filter(Habit.is_default.is_(True)).count() > 0

def test_delete_user_twice_reports_not_found(db, populated):
    assert user_service.delete_user(populated["alice"]).outcome == DeleteOutcome.DELETED
    second = user_service.delete_user(populated["alice"])
    assert second.outcome == DeleteOutcome.NOT_FOUND
    assert second.filenames == []

def test_delete_unknown_user_writes_nothing(db, populated):
    before = _counts(db, populated["bob"])
    assert user_service.delete_user(999999).outcome == DeleteOutcome.NOT_FOUND
    assert _counts(db, populated["bob"]) == before

def test_failed_step_leaves_everything_in_place(db, populated):
    before = _counts(db, populated["alice"])
    service = UserService(executor=FailBeforeUserRow())

    with pytest.raises(TransactionError):
        service.delete_user(populated["alice"])

    assert _counts(db, populated["alice"]) == before
    assert db.query(Like).filter(Like.post_id == populated["alice_post"]).count() == 1

def test_missing_user_row_at_the_end_rolls_everything_back(db, populated):
    alice_before = _counts(db, populated["alice"])
    bob_before = _counts(db, populated["bob"])
    service = UserService(executor=UserRowVanishes(populated["alice"]))

    deletion = service.delete_user(populated["alice"])

    assert deletion.outcome == DeleteOutcome.NOT_FOUND
    assert deletion.filenames == []
    assert _counts(db, populated["alice"]) == alice_before
    assert _counts(db, populated["bob"]) == bob_before
    assert db.query(Like).filter(Like.post_id == populated["alice_post"]).count() == 1
    assert db.query(Comment).filter(Comment.post_id == populated["alice_post"]).count() == 1
    assert db.query(User).filter(User.user_id == populated["bob"]).one().habit_id == populated["habit"]
