from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends

from notes_api import messages
from notes_api.api.deps import get_notes_store
from notes_api.errors import ForbiddenError, InternalError, NotFoundError
from notes_api.models.notes import DeletedResponse, NoteOut, NoteResponse, NotesResponse
from notes_api.storage.base import NoteStore
from notes_api.storage.users_store import UserRecord
from notes_api.utils.jwt_auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notes", tags=["notes"])


def _require_content(payload: Optional[dict[str, Any]]) -> dict[str, Any]:
    # missing content is answered with a 500, as the web client expects
    if not payload or payload.get("content") is None:
        raise InternalError(messages.INTERNAL_SERVER_ERROR)
    return payload


def _owned_note(store: NoteStore, note_id: str, user: UserRecord) -> dict[str, Any]:
    note = store.get(note_id)
    if note is None:
        raise NotFoundError(messages.UNKNOWN_IDENTIFIER)
    if str(note.get("ownerId")) != str(user.id):
        logger.warning("User %s denied access to note %s", user.id, note_id)
        raise ForbiddenError(messages.NOTE_FORBIDDEN)
    return note


@router.get("", response_model=NotesResponse)
def list_notes(
    user: UserRecord = Depends(get_current_user),
    store: NoteStore = Depends(get_notes_store),
) -> NotesResponse:
    notes = store.list_by_owner(user.id)
    return NotesResponse(notes=[NoteOut(**n) for n in notes])


@router.put("", response_model=NoteResponse)
def create_note(
    payload: Optional[dict[str, Any]] = Body(default=None),
    user: UserRecord = Depends(get_current_user),
    store: NoteStore = Depends(get_notes_store),
) -> NoteResponse:
    payload = _require_content(payload)
    note = store.create(owner_id=user.id, content=payload["content"])
    logger.info("User %s created note %s", user.id, note["id"])
    return NoteResponse(note=NoteOut(**note))


@router.patch("/{note_id}", response_model=NoteResponse)
def patch_note(
    note_id: str,
    payload: Optional[dict[str, Any]] = Body(default=None),
    user: UserRecord = Depends(get_current_user),
    store: NoteStore = Depends(get_notes_store),
) -> NoteResponse:
    """Merge every field of the body into the note (``content`` is required).

    A note owned by someone else is rejected with 403 and left untouched.
    """
    _owned_note(store, note_id, user)
    payload = _require_content(payload)

    updated = store.update(note_id, payload)
    if updated is None:
        raise NotFoundError(messages.UNKNOWN_IDENTIFIER)

    logger.info("User %s updated note %s", user.id, note_id)
    return NoteResponse(note=NoteOut(**updated))


@router.delete("/{note_id}", response_model=DeletedResponse)
def delete_note(
    note_id: str,
    user: UserRecord = Depends(get_current_user),
    store: NoteStore = Depends(get_notes_store),
) -> DeletedResponse:
    _owned_note(store, note_id, user)
    if not store.delete(note_id):
        raise NotFoundError(messages.UNKNOWN_IDENTIFIER)

    logger.info("User %s deleted note %s", user.id, note_id)
    return DeletedResponse()
