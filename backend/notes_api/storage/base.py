"""Store interfaces shared by the JSON-file and MongoDB backends."""
from __future__ import annotations

from typing import Any, Optional, Protocol

from notes_api.storage.users_store import UserRecord


class UserStore(Protocol):
    def find_by_id(self, user_id: str) -> Optional[UserRecord]: ...

    def find_by_username(self, username: str) -> Optional[UserRecord]: ...

    # raises UsernameTakenError when the name is already claimed
    def create(self, username: str, hashed_password: str) -> UserRecord: ...


class NoteStore(Protocol):
    def create(self, owner_id: str, content: Any) -> dict[str, Any]: ...

    def get(self, note_id: str) -> Optional[dict[str, Any]]: ...

    def list_by_owner(self, owner_id: str) -> list[dict[str, Any]]: ...

    # merges ``fields`` into the note; None when the note does not exist
    def update(self, note_id: str, fields: dict[str, Any]) -> Optional[dict[str, Any]]: ...

    def delete(self, note_id: str) -> bool: ...
