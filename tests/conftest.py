"""Shared fixtures: an in-memory stand-in for the Supabase client and a fake clock."""

import copy
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from app.services import goal_store


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    """Subset of the PostgREST query builder used by the goal store."""

    def __init__(self, client, table):
        self.client = client
        self.table = table
        self.op = None
        self.payload = None
        self.filters = []

    def select(self, columns="*"):
        self.op = "select"
        return self

    def insert(self, row):
        self.op = "insert"
        self.payload = row
        return self

    def update(self, data):
        self.op = "update"
        self.payload = data
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def _matches(self, row):
        return all(row.get(column) == value for column, value in self.filters)

    def execute(self):
        self.client.calls.append((self.op, self.table, list(self.filters)))
        if self.op in self.client.fail_on:
            raise RuntimeError(f"{self.op} failed: service unavailable")

        rows = self.client.tables.setdefault(self.table, [])
        if self.op == "insert":
            row = dict(self.payload, id=str(uuid.uuid4()))
            rows.append(row)
            return FakeResponse([copy.deepcopy(row)])
        matched = [row for row in rows if self._matches(row)]
        if self.op == "update":
            for row in matched:
                row.update(self.payload)
        elif self.op == "delete":
            self.client.tables[self.table] = [row for row in rows if not self._matches(row)]
        return FakeResponse(copy.deepcopy(matched))


class FakeBucket:
    def __init__(self, client, name):
        self.client = client
        self.name = name

    def upload(self, path, file, file_options=None):
        if "upload" in self.client.fail_on:
            raise RuntimeError("upload failed: quota exceeded")
        self.client.blobs[(self.name, path)] = file
        return {"Key": f"{self.name}/{path}"}

    def get_public_url(self, path):
        return f"https://fake.supabase.co/storage/v1/object/public/{self.name}/{path}"


class FakeStorage:
    def __init__(self, client):
        self.client = client

    def from_(self, bucket):
        return FakeBucket(self.client, bucket)


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self.blobs = {}
        self.calls = []
        self.fail_on = set()
        self.storage = FakeStorage(self)

    def table(self, name):
        return FakeQuery(self, name)

    def blob_for_url(self, url):
        prefix = "https://fake.supabase.co/storage/v1/object/public/"
        bucket, path = url[len(prefix):].split("/", 1)
        return self.blobs.get((bucket, path))


@pytest.fixture
def supabase():
    return FakeSupabase()


@pytest.fixture(autouse=True)
def clock(monkeypatch):
    """Make goal_store._now() advance one second per call."""
    state = {"now": datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc)}

    def fake_now():
        state["now"] += timedelta(seconds=1)
        return state["now"]

    monkeypatch.setattr(goal_store, "_now", fake_now)
    return state
