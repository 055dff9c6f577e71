"""공용 fixture

MongoDB 서버 없이 돌 수 있도록 motor 컬렉션에서 실제로 쓰는 메서드만
흉내 낸 in-process DB를 app.db.mongo.db 자리에 끼워 넣습니다.
"""
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from app.core.security import create_access_token
from app.db import mongo
from app.main import app

TEST_USER_ID = "test_user_123"


def _matches(doc, query):
    return all(doc.get(k) == v for k, v in (query or {}).items())


class FakeCursor:
    def __init__(self, docs):
        self._docs = list(docs)

    def sort(self, key, direction=1):
        self._docs.sort(key=lambda d: d.get(key), reverse=direction < 0)
        return self

    def limit(self, n):
        self._docs = self._docs[:n]
        return self

    async def to_list(self, length=None):
        docs = self._docs if length is None else self._docs[:length]
        return [dict(d) for d in docs]


class FakeCollection:
    def __init__(self):
        self.docs = []

    async def insert_one(self, doc):
        stored = dict(doc)
        stored.setdefault("_id", ObjectId())
        self.docs.append(stored)
        return SimpleNamespace(inserted_id=stored["_id"])

    async def find_one(self, query=None, sort=None):
        for d in self.docs:
            if _matches(d, query):
                return dict(d)
        return None

    def find(self, query=None):
        return FakeCursor(d for d in self.docs if _matches(d, query))

    async def delete_one(self, query):
        for i, d in enumerate(self.docs):
            if _matches(d, query):
                del self.docs[i]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)


class FakeDatabase:
    def __init__(self):
        self.collections = {}

    def __getitem__(self, name):
        return self.collections.setdefault(name, FakeCollection())

    async def command(self, name):
        return {"ok": 1.0}


@pytest.fixture
def fake_db(monkeypatch):
    db = FakeDatabase()
    monkeypatch.setattr(mongo, "db", db)
    return db


@pytest.fixture
def client(fake_db):
    # lifespan(실제 Mongo 연결)을 돌리지 않도록 with 없이 사용
    return TestClient(app)


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {create_access_token(TEST_USER_ID)}"}


@pytest.fixture
def make_session_doc(fake_db):
    """breathing_sessions 컬렉션에 문서를 직접 넣는 헬퍼"""
    col = fake_db["breathing_sessions"]

    def _make(user_id=TEST_USER_ID, created_at=None, **overrides):
        doc = {
            "_id": ObjectId(),
            "user_id": user_id,
            "pattern_name": "Square Breathing",
            "total_duration_seconds": 64,
            "duration_minutes": 1.1,
            "completed_cycles": 4,
            "completed": True,
            "stress_level_before": None,
            "stress_level_after": None,
            "notes": None,
            "created_at": created_at or datetime.now(timezone.utc),
        }
        doc.update(overrides)
        col.docs.append(doc)
        return doc

    return _make
