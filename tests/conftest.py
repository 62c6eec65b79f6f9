from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from google.api_core.exceptions import NotFound

from models.post import Post
from routes.posts import router as posts_router
from services.posts_repository import PostsRepository
from viewmodels.posts import PostsViewModel


class FakeSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data

    def to_dict(self):
        return dict(self._data) if self._data is not None else None


class FakeDocument:
    def __init__(self, db, doc_id):
        self.db = db
        self.id = doc_id

    async def set(self, data):
        self.db.check()
        self.db.documents[self.id] = dict(data)

    async def delete(self, option=None):
        self.db.check()
        if option is not None and option.exists and self.id not in self.db.documents:
            raise NotFound(f"No document to update: posts/{self.id}")
        self.db.documents.pop(self.id, None)


class FakeQuery:
    def __init__(self, db, field, direction):
        self.db = db
        self.field = field
        self.direction = direction

    async def stream(self):
        self.db.check()
        items = sorted(
            self.db.documents.items(),
            key=lambda item: item[1][self.field],
            reverse=self.direction == "DESCENDING"
        )
        for doc_id, data in items:
            yield FakeSnapshot(doc_id, data)


class FakeCollection:
    def __init__(self, db):
        self.db = db

    def document(self, doc_id):
        return FakeDocument(self.db, doc_id)

    def order_by(self, field, direction="ASCENDING"):
        return FakeQuery(self.db, field, direction)


class FakeFirestore:
    """In-memory stand-in for the async Firestore client, holding one "posts" collection"""

    def __init__(self):
        self.documents = {}
        self.collections = []
        self.error = None

    def collection(self, name):
        self.collections.append(name)
        return FakeCollection(self)

    def write_option(self, exists=None):
        return SimpleNamespace(exists=exists)

    def check(self):
        if self.error is not None:
            raise self.error


@pytest.fixture
def fake_db():
    return FakeFirestore()


@pytest.fixture
def repository(fake_db):
    return PostsRepository(db=fake_db)


@pytest.fixture
def make_post():
    base = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def _make_post(title="Lorem ipsum", minutes=0, **kwargs):
        return Post(
            title=title,
            content=kwargs.pop("content", "Lorem ipsum dolor sit amet, consectetur adipiscing elit."),
            authorName=kwargs.pop("authorName", "Jamie Harris"),
            timestamp=base + timedelta(minutes=minutes),
            **kwargs
        )

    return _make_post


@pytest.fixture
def view_model(repository):
    return PostsViewModel(repository)


@pytest.fixture
def client(view_model):
    app = FastAPI()
    app.include_router(posts_router, prefix="/posts")
    app.state.posts_view_model = view_model
    return TestClient(app)
