from concurrent.futures import ThreadPoolExecutor

import pytest

from notes_api.storage import users_store
from notes_api.storage.notes_store import NotesStore
from notes_api.storage.users_store import UsernameTakenError, UsersStore


def test_users_store_create_and_find(tmp_path):
    users = UsersStore(tmp_path)
    created = users.create("alice", "hashed")

    assert users.find_by_username("alice") == created
    assert users.find_by_id(created.id) == created
    assert users.find_by_username("bob") is None
    assert users.find_by_id("../alice") is None


def test_users_store_reserves_usernames(tmp_path):
    users = UsersStore(tmp_path)
    users.create("alice", "h1")
    with pytest.raises(UsernameTakenError):
        users.create("alice", "h2")
    assert users.find_by_username("alice").hashed_password == "h1"
    assert len(list((tmp_path / "users").glob("*.json"))) == 1


def test_concurrent_creates_claim_a_username_once(tmp_path):
    users = UsersStore(tmp_path)

    def attempt(i):
        # lookups running alongside the creates must never blow up
        users.find_by_username("alice")
        try:
            return users.create("alice", f"h{i}")
        except UsernameTakenError:
            return None

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(attempt, range(16)))

    winners = [r for r in results if r is not None]
    assert len(winners) == 1
    assert users.find_by_username("alice") == winners[0]
    assert len(list((tmp_path / "users").glob("*.json"))) == 1
    assert list((tmp_path / "usernames").glob("*.tmp")) == []


def test_unreadable_reservation_reads_as_absent(tmp_path):
    users = UsersStore(tmp_path)
    (tmp_path / "usernames").mkdir()
    (tmp_path / "usernames" / "alice.json").write_text("", encoding="utf-8")

    assert users.find_by_username("alice") is None
    with pytest.raises(UsernameTakenError):
        users.create("alice", "h1")


def test_failed_user_write_leaves_username_free(tmp_path, monkeypatch):
    users = UsersStore(tmp_path)

    def disk_full(path, data):
        raise OSError("No space left on device")

    monkeypatch.setattr(users_store, "atomic_write_json", disk_full)
    with pytest.raises(OSError):
        users.create("alice", "h1")
    monkeypatch.undo()

    created = users.create("alice", "h2")
    assert users.find_by_username("alice") == created


def test_failed_reservation_removes_user_document(tmp_path, monkeypatch):
    users = UsersStore(tmp_path)

    def no_links(src, dst):
        raise PermissionError("links not allowed")

    monkeypatch.setattr(users_store.os, "link", no_links)
    with pytest.raises(PermissionError):
        users.create("alice", "h1")
    monkeypatch.undo()

    assert list((tmp_path / "users").glob("*.json")) == []
    assert users.find_by_username("alice") is None
    assert users.create("alice", "h2").hashed_password == "h2"


def test_notes_store_crud(tmp_path):
    notes = NotesStore(tmp_path)
    a = notes.create(owner_id="u1", content="a")
    b = notes.create(owner_id="u2", content="b")

    assert notes.get(a["id"]) == a
    assert notes.list_by_owner("u1") == [a]

    updated = notes.update(a["id"], {"content": "a2", "_id": "x", "id": "y"})
    assert updated == {"id": a["id"], "ownerId": "u1", "content": "a2"}

    assert notes.delete(a["id"]) is True
    assert notes.delete(a["id"]) is False
    assert notes.get(a["id"]) is None
    assert notes.update(a["id"], {"content": "gone"}) is None
    assert notes.list_by_owner("u2") == [b]


def test_notes_store_empty_collection(tmp_path):
    assert NotesStore(tmp_path).list_by_owner("u1") == []
