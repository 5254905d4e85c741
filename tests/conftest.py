from __future__ import annotations

import copy

import pytest
from fastapi.testclient import TestClient
from postgrest.exceptions import APIError

from erp.core import database
from erp.core.roles import Role
from erp.core.security import get_password_hash
from erp.core.session import Session, SessionStore, get_session_store
from erp.main import app

PRIMARY_KEYS = {
    "attendance": "attendance_id",
    "marks": "marks_id",
    "assignments": "assignment_id",
    "leaveapplications": "leave_id",
    "timetable": "timetable_id",
    "academiccalendar": "event_id",
    "courses": "course_id",
    "students": "student_id",
    "faculty": "faculty_id",
    "sections": "section_id",
    "users": "user_id",
}


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    """Just enough of the postgrest request builder for the crud layer."""

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self._filters = []
        self._op = "select"
        self._payload = None
        self._on_conflict = None
        self._order = None
        self._limit = None

    # builders
    def select(self, *columns, **kwargs):
        return self

    def eq(self, column, value):
        self._filters.append(lambda r: r.get(column) == value)
        return self

    def in_(self, column, values):
        values = list(values)
        self._filters.append(lambda r: r.get(column) in values)
        return self

    def gte(self, column, value):
        self._filters.append(lambda r: r.get(column) is not None and r.get(column) >= value)
        return self

    def order(self, column, desc=False):
        self._order = (column, desc)
        return self

    def limit(self, n):
        self._limit = n
        return self

    def insert(self, payload):
        self._op, self._payload = "insert", payload
        return self

    def update(self, payload):
        self._op, self._payload = "update", payload
        return self

    def upsert(self, payload, on_conflict=""):
        self._op, self._payload, self._on_conflict = "upsert", payload, on_conflict
        return self

    def delete(self):
        self._op = "delete"
        return self

    # execution
    def _matches(self, row):
        return all(f(row) for f in self._filters)

    def execute(self):
        self.db.calls.append((self.table, self._op))
        if self.table in self.db.failing_tables:
            raise APIError({"message": "simulated outage", "code": "500"})

        rows = self.db.tables.setdefault(self.table, [])
        if self._op == "select":
            found = [copy.deepcopy(r) for r in rows if self._matches(r)]
            if self._order:
                column, desc = self._order
                found.sort(key=lambda r: (r.get(column) is None, r.get(column)), reverse=desc)
            if self._limit is not None:
                found = found[: self._limit]
            return FakeResponse(found)
        if self._op == "insert":
            payload = self._payload if isinstance(self._payload, list) else [self._payload]
            return FakeResponse([self.db.add(self.table, item) for item in payload])
        if self._op == "update":
            changed = []
            for r in rows:
                if self._matches(r):
                    r.update(self._payload)
                    changed.append(copy.deepcopy(r))
            return FakeResponse(changed)
        if self._op == "upsert":
            keys = [k.strip() for k in self._on_conflict.split(",") if k.strip()]
            payload = self._payload if isinstance(self._payload, list) else [self._payload]
            saved = []
            for item in payload:
                existing = next((r for r in rows if keys and all(r.get(k) == item.get(k) for k in keys)), None)
                if existing is not None:
                    existing.update(item)
                    saved.append(copy.deepcopy(existing))
                else:
                    saved.append(self.db.add(self.table, item))
            return FakeResponse(saved)
        if self._op == "delete":
            removed = [r for r in rows if self._matches(r)]
            self.db.tables[self.table] = [r for r in rows if not self._matches(r)]
            return FakeResponse(removed)
        raise AssertionError(f"unsupported op {self._op}")


class FakeBucket:
    def __init__(self, storage: "FakeStorage", name: str):
        self.storage = storage
        self.name = name

    def upload(self, path, file, file_options=None):
        if self.storage.fail:
            raise RuntimeError("storage unavailable")
        self.storage.objects[(self.name, path)] = (file, file_options)
        return {"Key": f"{self.name}/{path}"}

    def get_public_url(self, path):
        return f"https://storage.test/{self.name}/{path}"


class FakeStorage:
    def __init__(self):
        self.objects = {}
        self.fail = False

    def from_(self, bucket):
        return FakeBucket(self, bucket)


class FakeSupabase:
    def __init__(self):
        self.tables: dict[str, list[dict]] = {}
        self.failing_tables: set[str] = set()
        self.calls: list[tuple[str, str]] = []
        self.storage = FakeStorage()
        self._next_id = 1000

    def table(self, name):
        return FakeQuery(self, name)

    def add(self, table, item):
        row = dict(item)
        pk = PRIMARY_KEYS.get(table)
        if pk and row.get(pk) is None:
            self._next_id += 1
            row[pk] = self._next_id
        self.tables.setdefault(table, []).append(row)
        return copy.deepcopy(row)

    def seed(self, table, *items):
        for item in items:
            self.add(table, item)


@pytest.fixture
def fake_db(monkeypatch):
    db = FakeSupabase()
    monkeypatch.setattr(database, "_supabase_client", db)
    return db


@pytest.fixture
def college(fake_db):
    """Two sections, one faculty teaching in both, two students in section 1."""
    fake_db.seed(
        "users",
        {"user_id": 1, "email": "teacher@example.com", "password_hash": get_password_hash("secret123"), "role": "faculty"},
        {"user_id": 2, "email": "student@example.com", "password_hash": get_password_hash("secret123"), "role": "student"},
        {"user_id": 3, "email": "other@example.com", "password_hash": get_password_hash("secret123"), "role": "student"},
        {"user_id": 4, "email": "colleague@example.com", "password_hash": get_password_hash("secret123"), "role": "teacher"},
    )
    fake_db.seed("sections", {"section_id": 1, "name": "CSE-A"}, {"section_id": 2, "name": "CSE-B"}, {"section_id": 3, "name": "ECE-A"})
    fake_db.seed(
        "faculty",
        {"faculty_id": 10, "user_id": 1, "name": "Dr. Rao"},
        {"faculty_id": 11, "user_id": 4, "name": "Dr. Iyer"},
    )
    fake_db.seed(
        "students",
        {"student_id": 20, "user_id": 2, "name": "Asha", "section_id": 1},
        {"student_id": 21, "user_id": 3, "name": "Bala", "section_id": 1},
        {"student_id": 22, "user_id": 99, "name": "Chitra", "section_id": 2},
        {"student_id": 23, "user_id": 98, "name": "Deepa", "section_id": 3},
    )
    fake_db.seed(
        "courses",
        {"course_id": 100, "course_name": "Data Structures", "faculty_id": 10, "section_id": 1},
        {"course_id": 101, "course_name": "Algorithms", "faculty_id": 10, "section_id": 2},
        {"course_id": 102, "course_name": "Signals", "faculty_id": 11, "section_id": 3},
    )
    return fake_db


@pytest.fixture
def session_store():
    store = SessionStore()
    app.dependency_overrides[get_session_store] = lambda: store
    yield store
    app.dependency_overrides.pop(get_session_store, None)


@pytest.fixture
def client(session_store):
    return TestClient(app)


def _bearer(store: SessionStore, user_id: int, email: str, role: Role) -> dict:
    session = Session.open(user_id=user_id, email=email, role=role)
    store.save(session)
    return {"Authorization": f"Bearer {session.token}"}


@pytest.fixture
def faculty_headers(session_store):
    return _bearer(session_store, 1, "teacher@example.com", Role.FACULTY)


@pytest.fixture
def student_headers(session_store):
    return _bearer(session_store, 2, "student@example.com", Role.STUDENT)


@pytest.fixture
def other_student_headers(session_store):
    return _bearer(session_store, 3, "other@example.com", Role.STUDENT)
