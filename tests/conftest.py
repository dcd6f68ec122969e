# tests/conftest.py
import copy
from datetime import datetime, timedelta, timezone

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo import ASCENDING, DESCENDING

from app.core.config import settings
from app.db.mongo import get_database
from app.main import app


USER_ID = ObjectId("63701cc1f03239c72c00017f")
STATS_2021_ID = ObjectId("636ffd4fc7195768677097d7")
BASE_TIME = datetime(2021, 11, 15, 8, 0, 0, tzinfo=timezone.utc)


def _sort_key(value):
    # Missing fields sort lowest, as in MongoDB
    return (value is not None, value)


def _matches(document, query):
    return all(document.get(field) == value for field, value in query.items())


class FakeCursor:
    """Covers the slice of AsyncIOMotorCursor the services use."""

    def __init__(self, documents, error=None):
        self._documents = list(documents)
        self._limit = 0
        self._error = error

    def sort(self, key_or_list, direction=None):
        if isinstance(key_or_list, list):
            keys = key_or_list
        else:
            keys = [(key_or_list, direction or ASCENDING)]
        # Stable sorts applied last key first give a multi-key sort
        for key, key_direction in reversed(keys):
            self._documents.sort(
                key=lambda doc: _sort_key(doc.get(key)),
                reverse=key_direction == DESCENDING
            )
        return self

    def limit(self, count):
        self._limit = count
        return self

    async def to_list(self, length=None):
        if self._error is not None:
            raise self._error
        documents = self._documents
        if self._limit:
            documents = documents[:self._limit]
        if length is not None:
            documents = documents[:length]
        return copy.deepcopy(documents)


class FakeCollection:
    """In-memory stand-in for AsyncIOMotorCollection (read side plus indexes)."""

    def __init__(self, documents=None, error=None, index_error=None):
        self.documents = list(documents or [])
        self.error = error
        self.index_error = index_error
        self.queries = []
        self.indexes = {}

    def find(self, query=None, **kwargs):
        query = query or {}
        self.queries.append((query, kwargs))
        matched = [doc for doc in self.documents if _matches(doc, query)]
        return FakeCursor(matched, error=self.error)

    async def find_one(self, query=None, **kwargs):
        query = query or {}
        self.queries.append((query, kwargs))
        if self.error is not None:
            raise self.error
        for doc in self.documents:
            if _matches(doc, query):
                return copy.deepcopy(doc)
        return None

    async def create_index(self, keys, **kwargs):
        if kwargs.get("unique") and self.index_error is not None:
            raise self.index_error
        self.indexes[kwargs.get("name")] = {"keys": keys, **kwargs}
        return kwargs.get("name")


class FakeDatabase:
    """Maps collection names to FakeCollections, creating empty ones on demand."""

    def __init__(self, collections=None):
        self.collections = dict(collections or {})

    def __getitem__(self, name):
        if name not in self.collections:
            self.collections[name] = FakeCollection()
        return self.collections[name]


def make_transactions(count):
    """Transactions created one minute apart, stored oldest first."""
    return [
        {
            "_id": ObjectId(),
            "userId": str(USER_ID),
            "cost": f"{10 + i}.99",
            "products": [str(ObjectId())],
            "createdAt": BASE_TIME - timedelta(minutes=count - i),
            "updatedAt": BASE_TIME - timedelta(minutes=count - i),
        }
        for i in range(count)
    ]


def make_yearly_stats(year=2021, **overrides):
    document = {
        "_id": STATS_2021_ID,
        "year": year,
        "totalCustomers": 9035,
        "yearlyTotalSoldUnits": 22436,
        "yearlySalesTotal": 3546523,
        "monthlyData": [
            {"_id": ObjectId(), "month": "October", "totalSales": 27019, "totalUnits": 562},
            {"_id": ObjectId(), "month": "November", "totalSales": 28543, "totalUnits": 621},
            {"_id": ObjectId(), "month": "December", "totalSales": 30021, "totalUnits": 700},
        ],
        "dailyData": [
            {"_id": ObjectId(), "date": "2021-11-14", "totalSales": 1185, "totalUnits": 17},
            {"_id": ObjectId(), "date": "2021-11-15", "totalSales": 1244, "totalUnits": 19},
        ],
        "salesByCategory": {"shoes": 6515, "clothing": 22803, "accessories": 16931, "misc": 26087},
        "createdAt": datetime(2022, 11, 12, 20, 10, 0, tzinfo=timezone.utc),
        "updatedAt": datetime(2022, 11, 12, 20, 10, 0, tzinfo=timezone.utc),
    }
    document.update(overrides)
    return document


@pytest.fixture
def fake_db():
    """Database seeded with one user, one 2021 statistics document and 60 transactions."""
    return FakeDatabase({
        settings.USERS_COLLECTION: FakeCollection([
            {"_id": USER_ID, "name": "Shelton", "email": "swelch@example.com", "role": "admin"},
        ]),
        settings.OVERALL_STATS_COLLECTION: FakeCollection([make_yearly_stats()]),
        settings.TRANSACTIONS_COLLECTION: FakeCollection(make_transactions(60)),
    })


@pytest.fixture
def client(fake_db):
    """
    Test client with the database dependency pointed at the fake store.
    Used without a `with` block so the lifespan never dials MongoDB.
    """
    app.dependency_overrides[get_database] = lambda: fake_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def pinned_reference_date(monkeypatch):
    """Pins the dashboard's 'today' to 2021-11-15."""
    from datetime import date
    monkeypatch.setattr(settings, "DASHBOARD_REFERENCE_DATE", date(2021, 11, 15))
    return date(2021, 11, 15)
