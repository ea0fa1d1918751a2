"""
Shared fixtures: a temporary SQLite store and settings read from the
environment, with every cached settings/engine object reset around each test.
"""
import pytest
from fastapi.testclient import TestClient

from habithub import config
from habithub.core.security import TokenConfig, TokenIssuer, TokenVerifier, get_password_hash
from habithub.db import session as db_session
from habithub.db.base import Base
from habithub.db.models import Habit, Post, User
from habithub.db.seed import seed_defaults

TEST_SECRET = "test-secret-do-not-use"
UPLOAD_URL = "http://upload.test/uploads/"
UPLOAD_SERVER = "http://upload.test/api/v1"

def _clear_caches():
    config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session.get_sessionmaker.cache_clear()

@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    """Temporary SQLite store with the default rows seeded"""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.setenv("JWT_SECRET", TEST_SECRET)
    monkeypatch.setenv("UPLOAD_URL", UPLOAD_URL)
    monkeypatch.setenv("UPLOAD_SERVER", UPLOAD_SERVER)
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path / "uploads"))
    monkeypatch.setenv("UPLOAD_TIMEOUT_SECONDS", "0.5")
    _clear_caches()

    engine = db_session.get_engine()
    Base.metadata.create_all(bind=engine)
    db = db_session.get_sessionmaker()()
    try:
        seed_defaults(db)
    finally:
        db.close()

    yield db_file

    # The database file goes away with tmp_path
    engine.dispose()
    _clear_caches()

@pytest.fixture()
def db(temp_db):
    session = db_session.get_sessionmaker()()
    yield session
    session.close()

@pytest.fixture()
def make_user(db):
    counter = {"n": 0}

    def _make(username=None, password="password123"):
        counter["n"] += 1
        username = username or f"user{counter['n']}"
        user = User(
            username=username,
            email=f"{username}@example.com",
            password_hash=get_password_hash(password),
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make

@pytest.fixture()
def make_post(db):
    def _make(user_id, filename="abc123.jpg", title="A post"):
        post = Post(
            user_id=user_id,
            post_title=title,
            post_text="text",
            filename=filename,
            filesize=10,
            media_type="image/jpeg",
        )
        db.add(post)
        db.commit()
        db.refresh(post)
        return post

    return _make

@pytest.fixture()
def default_habit(db):
    return db.query(Habit).filter(Habit.is_default.is_(True)).order_by(Habit.habit_id).first()

@pytest.fixture()
def token_config():
    return TokenConfig(secret=TEST_SECRET)

@pytest.fixture()
def issuer(token_config):
    return TokenIssuer(token_config)

@pytest.fixture()
def verifier(token_config):
    return TokenVerifier(token_config)

def _client(service):
    from habithub.main import create_app
    return TestClient(create_app(service))

@pytest.fixture()
def auth_client(temp_db):
    with _client("auth") as client:
        yield client

@pytest.fixture()
def media_client(temp_db):
    with _client("media") as client:
        yield client

@pytest.fixture()
def upload_client_app(temp_db):
    with _client("upload") as client:
        yield client
