import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from bson import ObjectId


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def new_id() -> str:
    # ObjectId hex: same id format as the MongoDB backend, sorts by creation time
    return str(ObjectId())


def safe_doc_path(collection_dir: Path, doc_id: str) -> Optional[Path]:
    # ids come from URLs; anything that could escape the collection dir is unknown
    if not doc_id or any(ch in doc_id for ch in "/\\") or ".." in doc_id:
        return None
    return collection_dir / f"{doc_id}.json"


def atomic_write_json(path: Path, data: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
        f.flush()
        os.fsync(f.fileno())
    tmp_path.replace(path)


def read_json(path: Path) -> Optional[dict[str, Any]]:
    if not path.exists():
        return None
    return json.loads(path.read_text(encoding="utf-8"))
