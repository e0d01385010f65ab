import copy
import itertools
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from dependencies import get_current_user, get_firestore
from main import app
from models.user import User
from services.errors import UserNotFound
from services.firestore import validate_document_id
from services.posts import PostService


class InMemoryFirestore:
    """Stands in for FirestoreDB, storing documents in dicts"""

    def __init__(self):
        self.posts = {}
        self.users = {}
        self._ids = itertools.count(1)

    def get_all_posts(self):
        posts = [dict(copy.deepcopy(data), id=post_id) for post_id, data in self.posts.items()]
        return sorted(posts, key=lambda post: post["date"], reverse=True)

    def get_post(self, post_id):
        validate_document_id(post_id)
        if post_id not in self.posts:
            return None
        return dict(copy.deepcopy(self.posts[post_id]), id=post_id)

    def create_post(self, post_data):
        post_id = f"post{next(self._ids)}"
        self.posts[post_id] = copy.deepcopy(post_data)
        return post_id

    def update_post(self, post_id, fields):
        validate_document_id(post_id)
        self.posts[post_id].update(copy.deepcopy(fields))

    def delete_post(self, post_id):
        validate_document_id(post_id)
        self.posts.pop(post_id, None)

    def get_user(self, user_id):
        if user_id not in self.users:
            raise UserNotFound(user_id)
        return dict(self.users[user_id])


@pytest.fixture
def db():
    store = InMemoryFirestore()
    store.users["alice"] = {"name": "Alice", "avatar": "https://example.com/alice.png"}
    store.users["bob"] = {"name": "Bob", "avatar": "https://example.com/bob.png"}
    return store


@pytest.fixture
def service(db):
    return PostService(db)


@pytest.fixture
def seeded_post(db):
    """A post by alice with two comments (bob's first) and no likes"""
    now = datetime.now(timezone.utc)
    return db.create_post({
        "user": "alice",
        "text": "first post",
        "name": "Alice",
        "avatar": "https://example.com/alice.png",
        "likes": [],
        "comments": [
            {"id": "c2", "user": "bob", "text": "nice", "name": "Bob",
             "avatar": "https://example.com/bob.png", "date": now},
            {"id": "c1", "user": "alice", "text": "thanks", "name": "Alice",
             "avatar": "https://example.com/alice.png", "date": now - timedelta(minutes=1)},
        ],
        "date": now - timedelta(minutes=5),
    })


@pytest.fixture
def caller():
    """Mutable identity returned by the overridden auth dependency"""
    return {"user_id": "alice"}


@pytest.fixture
def client(db, caller):
    app.dependency_overrides[get_firestore] = lambda: db
    app.dependency_overrides[get_current_user] = lambda: User(user_id=caller["user_id"])
    yield TestClient(app)
    app.dependency_overrides.clear()
