from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from notes_api.storage.files import atomic_write_json, new_id, read_json, safe_doc_path, utc_now_iso


class UsernameTakenError(Exception):
    pass


@dataclass(frozen=True)
class UserRecord:
    id: str
    username: str
    hashed_password: str
    created_at: Optional[str] = None


class UsersStore:
    """``users`` collection kept as JSON documents under ``<base_dir>/users``.

    Usernames are reserved through ``<base_dir>/usernames/<username>.json``.
    The reservation is written in full under a temporary name and then
    hard-linked into place, which fails if the name is already claimed, so
    two signups racing on the same name cannot both succeed and readers
    never see a half-written reservation.
    """

    def __init__(self, base_dir: Path):
        self.base_dir = base_dir
        self.users_dir = base_dir / "users"
        self.names_dir = base_dir / "usernames"

    def _name_path(self, username: str) -> Optional[Path]:
        return safe_doc_path(self.names_dir, username)

    @staticmethod
    def _to_record(raw: dict) -> UserRecord:
        return UserRecord(
            id=raw["id"],
            username=raw["username"],
            hashed_password=raw["password"],
            created_at=raw.get("created_at"),
        )

    def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        p = safe_doc_path(self.users_dir, user_id)
        if p is None:
            return None
        raw = read_json(p)
        return self._to_record(raw) if raw is not None else None

    def find_by_username(self, username: str) -> Optional[UserRecord]:
        p = self._name_path(username)
        if p is None or not p.exists():
            return None
        try:
            user_id = json.loads(p.read_text(encoding="utf-8"))["id"]
        except (OSError, ValueError, KeyError, TypeError):
            # unreadable reservation: no usable account behind it
            return None
        return self.find_by_id(user_id)

    def create(self, username: str, hashed_password: str) -> UserRecord:
        name_path = self._name_path(username)
        if name_path is None:
            raise ValueError("Invalid username")

        user_id = new_id()
        raw = {
            "id": user_id,
            "username": username,
            "password": hashed_password,
            "created_at": utc_now_iso(),
        }
        user_path = self.users_dir / f"{user_id}.json"
        atomic_write_json(user_path, raw)

        tmp_path = self.names_dir / f"{user_id}.tmp"
        try:
            atomic_write_json(tmp_path, {"id": user_id})
            os.link(tmp_path, name_path)
        except FileExistsError:
            user_path.unlink(missing_ok=True)
            raise UsernameTakenError(username) from None
        except OSError:
            user_path.unlink(missing_ok=True)
            raise
        finally:
            tmp_path.unlink(missing_ok=True)
        return self._to_record(raw)
