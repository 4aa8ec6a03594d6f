from pathlib import Path
from typing import Any, Optional

from notes_api.storage.files import atomic_write_json, new_id, read_json, safe_doc_path

# keys a caller can never overwrite through update()
IMMUTABLE_FIELDS = ("id", "_id")


class NotesStore:
    """``notes`` collection kept as one JSON document per note.

    Documents are plain dicts ``{"id", "ownerId", "content", ...}``; extra
    fields merged in by ``update`` are stored and returned as-is.
    """

    def __init__(self, base_dir: Path):
        self.base_dir = base_dir
        self.notes_dir = base_dir / "notes"

    def create(self, owner_id: str, content: Any) -> dict[str, Any]:
        note = {"id": new_id(), "ownerId": owner_id, "content": content}
        atomic_write_json(self.notes_dir / f"{note['id']}.json", note)
        return note

    def get(self, note_id: str) -> Optional[dict[str, Any]]:
        path = safe_doc_path(self.notes_dir, note_id)
        if path is None:
            return None
        return read_json(path)

    def list_by_owner(self, owner_id: str) -> list[dict[str, Any]]:
        if not self.notes_dir.exists():
            return []
        out: list[dict[str, Any]] = []
        # ObjectId file names sort in creation order
        for p in sorted(self.notes_dir.glob("*.json")):
            raw = read_json(p)
            if raw is not None and raw.get("ownerId") == owner_id:
                out.append(raw)
        return out

    def update(self, note_id: str, fields: dict[str, Any]) -> Optional[dict[str, Any]]:
        path = safe_doc_path(self.notes_dir, note_id)
        if path is None:
            return None
        raw = read_json(path)
        if raw is None:
            return None

        raw.update({k: v for k, v in fields.items() if k not in IMMUTABLE_FIELDS})
        atomic_write_json(path, raw)
        return raw

    def delete(self, note_id: str) -> bool:
        path = safe_doc_path(self.notes_dir, note_id)
        if path is None or not path.exists():
            return False
        path.unlink()
        return True
