"""FastAPI dependencies handing out the collaborators built by ``create_app``."""
from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request

if TYPE_CHECKING:
    from notes_api.storage.base import NoteStore, UserStore
    from notes_api.utils.auth_hash import PasswordHasher
    from notes_api.utils.jwt_auth import TokenSigner


def get_users_store(request: Request) -> "UserStore":
    return request.app.state.stores.users


def get_notes_store(request: Request) -> "NoteStore":
    return request.app.state.stores.notes


def get_token_signer(request: Request) -> "TokenSigner":
    return request.app.state.token_signer


def get_password_hasher(request: Request) -> "PasswordHasher":
    return request.app.state.password_hasher
