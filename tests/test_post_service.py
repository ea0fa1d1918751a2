import asyncio
import logging

import httpx
import pytest

from habithub.core.errors import RemoteSideEffectError
from habithub.core.outcomes import DeleteOutcome
from habithub.core.upload_client import UploadClient, delete_files_best_effort, storage_key
from habithub.db.models import Comment, Like, Post, User
from habithub.core.security import get_password_hash
from habithub.services.post_service import post_service

from tests.conftest import UPLOAD_SERVER, UPLOAD_URL

TOKEN = "bearer-token-for-test"

def fake_upload_client(respond):
    calls = []

    def handler(request):
        calls.append(request)
        return respond(request)

    return UploadClient(UPLOAD_SERVER, timeout=0.5, transport=httpx.MockTransport(handler)), calls

def ok(request):
    return httpx.Response(200, json={"message": "File deleted"})

def timeout(request):
    raise httpx.ReadTimeout("timed out", request=request)

def server_error(request):
    return httpx.Response(500, json={"message": "boom"})

def broken_transport(request):
    raise RuntimeError("transport exploded")

def delete(post_id, user_id, client):
    from habithub.db.session import get_sessionmaker
    db = get_sessionmaker()()
    try:
        return asyncio.run(post_service.delete_post(db, post_id, user_id, TOKEN, client, UPLOAD_URL))
    finally:
        db.close()

@pytest.fixture()
def user_42_with_posts(db):
    db.add(User(user_id=42, username="owner42", email="owner42@example.com", password_hash=get_password_hash("password123")))
    db.commit()
    db.add_all([
        Post(post_id=7, user_id=42, post_title="seven", filename="seven.jpg", filesize=1, media_type="image/jpeg"),
        Post(post_id=9, user_id=42, post_title="nine", filename=f"{UPLOAD_URL}nine.jpg", filesize=1, media_type="image/jpeg"),
    ])
    db.commit()
    return 42

def test_storage_key_strips_prefix_and_path():
    assert storage_key("abc.jpg") == "abc.jpg"
    assert storage_key(f"{UPLOAD_URL}abc.jpg", UPLOAD_URL) == "abc.jpg"
    assert storage_key("http://elsewhere/uploads/abc.jpg") == "abc.jpg"
    assert storage_key("uploads/abc.jpg") == "abc.jpg"

def test_owner_delete_commits_then_calls_upload_service(db, user_42_with_posts):
    client, calls = fake_upload_client(ok)
    assert delete(7, 42, client) == DeleteOutcome.DELETED

    assert len(calls) == 1
    assert calls[0].method == "DELETE"
    assert str(calls[0].url) == f"{UPLOAD_SERVER}/delete/seven.jpg"
    assert calls[0].headers["Authorization"] == f"Bearer {TOKEN}"
    db.expire_all()
    assert db.get(Post, 7) is None
    assert db.get(Post, 9) is not None

def test_url_style_filename_is_reduced_to_key(db, user_42_with_posts):
    client, calls = fake_upload_client(ok)
    assert delete(9, 42, client) == DeleteOutcome.DELETED
    assert str(calls[0].url) == f"{UPLOAD_SERVER}/delete/nine.jpg"

def test_remote_timeout_does_not_undo_local_delete(db, user_42_with_posts, caplog):
    client, calls = fake_upload_client(timeout)
    with caplog.at_level(logging.WARNING):
        assert delete(7, 42, client) == DeleteOutcome.DELETED

    assert len(calls) == 1
    db.expire_all()
    assert db.get(Post, 7) is None
    assert db.get(Post, 9) is not None
    assert "Orphaned upload" in caplog.text
    assert "seven.jpg" in caplog.text

def test_remote_error_status_does_not_undo_local_delete(db, user_42_with_posts):
    client, _ = fake_upload_client(server_error)
    assert delete(7, 42, client) == DeleteOutcome.DELETED
    db.expire_all()
    assert db.get(Post, 7) is None

def test_other_user_is_forbidden_and_nothing_changes(db, user_42_with_posts, make_user):
    intruder = make_user()
    client, calls = fake_upload_client(ok)
    assert delete(7, intruder.user_id, client) == DeleteOutcome.FORBIDDEN
    assert calls == []
    db.expire_all()
    assert db.get(Post, 7) is not None

def test_unknown_post_is_not_found(db, user_42_with_posts):
    client, calls = fake_upload_client(ok)
    assert delete(12345, 42, client) == DeleteOutcome.NOT_FOUND
    assert calls == []

def test_likes_and_comments_go_with_the_post(db, user_42_with_posts, make_user):
    fan = make_user()
    db.add_all([
        Like(user_id=fan.user_id, post_id=7),
        Comment(user_id=fan.user_id, post_id=7, comment_text="great"),
        Comment(user_id=fan.user_id, post_id=9, comment_text="also great"),
    ])
    db.commit()

    client, _ = fake_upload_client(ok)
    assert delete(7, 42, client) == DeleteOutcome.DELETED

    db.expire_all()
    assert db.query(Like).filter(Like.post_id == 7).count() == 0
    assert db.query(Comment).filter(Comment.post_id == 7).count() == 0
    assert db.query(Comment).filter(Comment.post_id == 9).count() == 1

def test_upload_client_raises_on_failure():
    client, _ = fake_upload_client(timeout)
    with pytest.raises(RemoteSideEffectError):
        asyncio.run(client.delete_file("x.jpg", TOKEN))

def test_unexpected_remote_error_does_not_undo_local_delete(db, user_42_with_posts, caplog):
    client, calls = fake_upload_client(broken_transport)
    with caplog.at_level(logging.WARNING):
        assert delete(7, 42, client) == DeleteOutcome.DELETED

    assert len(calls) == 1
    db.expire_all()
    assert db.get(Post, 7) is None
    assert "Orphaned upload" in caplog.text
    assert "transport exploded" in caplog.text

def test_best_effort_counts_every_kind_of_failure():
    failing, _ = fake_upload_client(broken_transport)
    timing_out, _ = fake_upload_client(timeout)
    working, _ = fake_upload_client(ok)

    assert asyncio.run(delete_files_best_effort(failing, ["a.jpg", "b.jpg"], TOKEN, context="test")) == 2
    assert asyncio.run(delete_files_best_effort(timing_out, ["a.jpg"], TOKEN, context="test")) == 1
    assert asyncio.run(delete_files_best_effort(working, ["a.jpg"], TOKEN, context="test")) == 0
