from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class NoteOut(BaseModel):
    # patched notes may carry any extra field the client sent
    model_config = ConfigDict(extra="allow")

    id: str
    ownerId: Any
    content: Any = None


class NoteResponse(BaseModel):
    error: Optional[str] = None
    note: NoteOut


class NotesResponse(BaseModel):
    error: Optional[str] = None
    notes: list[NoteOut]


class DeletedResponse(BaseModel):
    error: Optional[str] = None
