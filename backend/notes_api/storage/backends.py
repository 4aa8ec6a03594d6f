from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from pymongo import MongoClient

from notes_api.config import Settings
from notes_api.storage.base import NoteStore, UserStore
from notes_api.storage.mongo_store import MongoNotesStore, MongoUsersStore
from notes_api.storage.notes_store import NotesStore
from notes_api.storage.users_store import UsersStore

logger = logging.getLogger(__name__)


@dataclass
class Stores:
    users: UserStore
    notes: NoteStore
    close: Callable[[], None]


def open_stores(settings: Settings) -> Stores:
    """Open the ``users``/``notes`` collections for the configured backend.

    MongoDB when ``mongodb_uri`` is set, JSON files under ``data_dir`` otherwise.
    The caller owns the returned ``close``.
    """
    if settings.mongodb_uri:
        client: MongoClient = MongoClient(settings.mongodb_uri)
        db = client.get_default_database(default=settings.mongodb_db)
        logger.info("Using MongoDB database %r", db.name)
        return Stores(users=MongoUsersStore(db), notes=MongoNotesStore(db), close=client.close)

    settings.data_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Using JSON document store in %s", settings.data_dir)
    return Stores(
        users=UsersStore(settings.data_dir),
        notes=NotesStore(settings.data_dir),
        close=lambda: None,
    )
