import json
import os

# Configure before the application modules read their settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["REDIS_URL"] = "redis://localhost:6390/0"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["YOUTUBE_API_KEY"] = ""
os.environ["SOUNDCLOUD_CLIENT_ID"] = ""

import pytest
from fastapi.testclient import TestClient

from listenqueue.core.cache import cache
from listenqueue.core.errors import GenericError
from listenqueue.core.security import create_access_token
from listenqueue.db.base import Base
from listenqueue.db.models.user import ROLE_DEFAULT
from listenqueue.db.session import SessionLocal, engine
from listenqueue.main import app
from listenqueue.schemas.user import UserCreate
from listenqueue.services.search_service import search_service
from listenqueue.services.user_service import user_service


class RedisDouble:
    """In-process stand-in for the handful of Redis commands the app uses"""

    def __init__(self):
        self.store = {}
        self.lists = {}
        self.published = []

    def ping(self):
        return True

    def get(self, key):
        return self.store.get(key)

    def set(self, key, value, px=None, ex=None):
        self.store[key] = value
        return True

    def setex(self, key, seconds, value):
        self.store[key] = value
        return True

    def delete(self, *keys):
        removed = 0
        for key in keys:
            if self.store.pop(key, None) is not None:
                removed += 1
            if self.lists.pop(key, None) is not None:
                removed += 1
        return removed

    def rpush(self, key, *values):
        self.lists.setdefault(key, []).extend(values)
        return len(self.lists[key])

    def lrange(self, key, start, end):
        items = self.lists.get(key, [])
        return items[start:] if end == -1 else items[start:end + 1]

    def lrem(self, key, count, value):
        items = self.lists.get(key, [])
        removed = items.count(value)
        self.lists[key] = [item for item in items if item != value]
        return removed

    def publish(self, channel, message):
        self.published.append((channel, json.loads(message)))
        return 1

    def commands(self, name):
        return [message["data"] for channel, message in self.published if message["command"] == name]


@pytest.fixture(autouse=True)
def redis_double(monkeypatch):
    double = RedisDouble()
    monkeypatch.setattr(cache, "redis_client", double)
    return double


@pytest.fixture(autouse=True)
def _schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


def auth_headers(user_id):
    token = create_access_token({"sub": str(user_id)})
    return {"Authorization": f"JWT {token}"}


@pytest.fixture
def make_user(db_session):
    """Create a user and return (id, auth headers)"""
    def _make(username, role=ROLE_DEFAULT):
        user = user_service.create_user(db_session, UserCreate(
            username=username,
            email=f"{username}@example.com",
            password="secret123",
        ))
        if role != ROLE_DEFAULT:
            user.role = role
            db_session.commit()
        return user.id, auth_headers(user.id)
    return _make


@pytest.fixture
def fake_sources(monkeypatch):
    """Replace provider lookups with canned youtube media; records every lookup"""
    calls = []

    def fetch_media(source_type, source_id):
        calls.append((source_type, source_id))
        if source_type.lower() != "youtube":
            raise GenericError(404, "unknown provider")
        return {
            "source_type": "youtube",
            "source_id": source_id,
            "artist": f"Artist {source_id}",
            "title": f"Title {source_id}",
            "duration": 200,
            "thumbnail": f"https://i.ytimg.com/vi/{source_id}/hqdefault.jpg",
            "nsfw": False,
            "restricted": [],
        }

    monkeypatch.setattr(search_service, "fetch_media", fetch_media)
    return calls


@pytest.fixture
def headers_for():
    return auth_headers
