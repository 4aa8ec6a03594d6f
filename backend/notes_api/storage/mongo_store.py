"""MongoDB-backed ``users`` and ``notes`` collections (pymongo).

Same interface as the JSON-file stores. ObjectIds never leave this module:
documents are returned with a string ``id`` in place of ``_id``.
"""
from __future__ import annotations

from typing import Any, Optional

from bson import ObjectId
from pymongo import ASCENDING
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from notes_api.storage.notes_store import IMMUTABLE_FIELDS
from notes_api.storage.users_store import UsernameTakenError, UserRecord


def _object_id(raw_id: str) -> Optional[ObjectId]:
    if not isinstance(raw_id, str) or not ObjectId.is_valid(raw_id):
        return None
    return ObjectId(raw_id)


def _out(doc: dict[str, Any]) -> dict[str, Any]:
    out = {"id": str(doc["_id"])}
    out.update((k, v) for k, v in doc.items() if k != "_id")
    return out


class MongoUsersStore:
    def __init__(self, db: Database):
        self.col = db["users"]
        self.col.create_index([("username", ASCENDING)], unique=True)

    @staticmethod
    def _to_record(doc: dict[str, Any]) -> UserRecord:
        return UserRecord(
            id=str(doc["_id"]),
            username=doc["username"],
            hashed_password=doc["password"],
            created_at=doc.get("created_at"),
        )

    def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        oid = _object_id(user_id)
        if oid is None:
            return None
        doc = self.col.find_one({"_id": oid})
        return self._to_record(doc) if doc is not None else None

    def find_by_username(self, username: str) -> Optional[UserRecord]:
        doc = self.col.find_one({"username": username})
        return self._to_record(doc) if doc is not None else None

    def create(self, username: str, hashed_password: str) -> UserRecord:
        doc = {"username": username, "password": hashed_password}
        try:
            result = self.col.insert_one(doc)
        except DuplicateKeyError:
            raise UsernameTakenError(username) from None
        doc["_id"] = result.inserted_id
        return self._to_record(doc)


class MongoNotesStore:
    def __init__(self, db: Database):
        self.col = db["notes"]
        self.col.create_index([("ownerId", ASCENDING)])

    def create(self, owner_id: str, content: Any) -> dict[str, Any]:
        doc = {"ownerId": owner_id, "content": content}
        result = self.col.insert_one(doc)
        return {"id": str(result.inserted_id), "ownerId": owner_id, "content": content}

    def get(self, note_id: str) -> Optional[dict[str, Any]]:
        oid = _object_id(note_id)
        if oid is None:
            return None
        doc = self.col.find_one({"_id": oid})
        return _out(doc) if doc is not None else None

    def list_by_owner(self, owner_id: str) -> list[dict[str, Any]]:
        return [_out(doc) for doc in self.col.find({"ownerId": owner_id})]

    def update(self, note_id: str, fields: dict[str, Any]) -> Optional[dict[str, Any]]:
        oid = _object_id(note_id)
        if oid is None:
            return None
        changes = {k: v for k, v in fields.items() if k not in IMMUTABLE_FIELDS}
        if changes:
            self.col.update_one({"_id": oid}, {"$set": changes})
        return self.get(note_id)

    def delete(self, note_id: str) -> bool:
        oid = _object_id(note_id)
        if oid is None:
            return False
        return self.col.delete_one({"_id": oid}).deleted_count == 1
