import pytest

from habithub.core.errors import ConflictError, NotFoundError
from habithub.core.guard import GuardOutcome, UniquenessGuard
from habithub.db.models import Like
from habithub.services.like_service import like_service

def test_second_like_reports_already_exists(db, make_user, make_post):
    user = make_user()
    post = make_post(user.user_id)

    assert like_service.create_like(post.post_id, user.user_id) == GuardOutcome.CREATED
    assert like_service.create_like(post.post_id, user.user_id) == GuardOutcome.ALREADY_EXISTS
    assert like_service.count_likes(db, post.post_id) == 1

def test_different_users_can_like_the_same_post(db, make_user, make_post):
    alice = make_user()
    bob = make_user()
    post = make_post(alice.user_id)

    assert like_service.create_like(post.post_id, alice.user_id) == GuardOutcome.CREATED
    assert like_service.create_like(post.post_id, bob.user_id) == GuardOutcome.CREATED
    assert like_service.count_likes(db, post.post_id) == 2
    assert [l.user_id for l in like_service.get_likes_by_post(db, post.post_id)] == [alice.user_id, bob.user_id]

def test_like_on_unknown_post_is_not_found(db, make_user):
    user = make_user()
    with pytest.raises(NotFoundError):
        like_service.create_like(999999, user.user_id)
    assert db.query(Like).count() == 0

def test_concurrent_insert_hits_the_unique_constraint(db, make_user, make_post, monkeypatch):
    user = make_user()
    post = make_post(user.user_id)
    assert like_service.create_like(post.post_id, user.user_id) == GuardOutcome.CREATED

    # Both writers passed the existence check; the constraint decides
    monkeypatch.setattr(UniquenessGuard, "_find_existing", lambda self, session, key: None)
    with pytest.raises(ConflictError):
        like_service.create_like(post.post_id, user.user_id)

    db.expire_all()
    assert db.query(Like).filter(Like.post_id == post.post_id, Like.user_id == user.user_id).count() == 1

def test_guard_requires_every_key_field(temp_db):
    guard = UniquenessGuard(Like, ("user_id", "post_id"))
    with pytest.raises(ValueError):
        guard.try_create({"user_id": 1})

def test_delete_like_only_removes_own(db, make_user, make_post):
    alice = make_user()
    bob = make_user()
    post = make_post(alice.user_id)
    like_service.create_like(post.post_id, alice.user_id)

    assert like_service.delete_like(db, post.post_id, bob.user_id) is False
    assert like_service.delete_like(db, post.post_id, alice.user_id) is True
    assert like_service.get_like(db, post.post_id, alice.user_id) is None
