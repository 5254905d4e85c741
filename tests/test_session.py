from __future__ import annotations

import json

import pytest

from erp.core.roles import Role
from erp.core.security import get_password_hash, verify_password
from erp.core.session import Session, SessionStore


@pytest.mark.parametrize("raw,role", [
    ("student", Role.STUDENT),
    ("faculty", Role.FACULTY),
    ("teacher", Role.FACULTY),
    (" Teacher ", Role.FACULTY),
])
def test_role_spellings_collapse_to_one_enum(raw, role):
    assert Role.parse(raw) is role


@pytest.mark.parametrize("raw", ["admin", "", None])
def test_unknown_role_is_rejected(raw):
    with pytest.raises(ValueError):
        Role.parse(raw)


def test_password_hash_roundtrip():
    hashed = get_password_hash("secret123")
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("secret123", "not-a-bcrypt-hash")


def test_memory_store_lifecycle():
    store = SessionStore()
    assert store.hydrate() == 0
    session = Session.open(user_id=1, email="a@b.c", role=Role.STUDENT)
    store.save(session)
    assert store.get(session.token) == session
    assert store.clear(session.token)
    assert store.get(session.token) is None
    assert not store.clear(session.token)


def test_file_store_survives_restart(tmp_path):
    path = tmp_path / "sessions.json"
    first = SessionStore(str(path))
    first.hydrate()
    session = Session.open(user_id=7, email="t@x.y", role=Role.FACULTY)
    first.save(session)

    second = SessionStore(str(path))
    assert second.hydrate() == 1
    restored = second.get(session.token)
    assert restored.user_id == 7
    assert restored.role is Role.FACULTY

    second.clear(session.token)
    assert json.loads(path.read_text()) == []


def test_unreadable_session_file_is_discarded(tmp_path):
    path = tmp_path / "sessions.json"
    path.write_text("{not json")
    store = SessionStore(str(path))
    assert store.hydrate() == 0
    assert not path.exists()


def test_tokens_are_unique():
    a = Session.open(user_id=1, email="a@b.c", role=Role.STUDENT)
    b = Session.open(user_id=1, email="a@b.c", role=Role.STUDENT)
    assert a.token != b.token
