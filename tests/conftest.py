"""
Fixtures compartidas: repositorio en memoria, servicio y TestClient.

El TestClient se usa sin `with` para que el lifespan (conexión a Mongo) no corra;
el servicio se inyecta vía `app.dependency_overrides`.
"""
import os
from typing import Any, Dict, List, Optional

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import DuplicateKeyError

os.environ.setdefault("LOG_LEVEL", "WARNING")

from app.api.deps import get_note_service  # noqa: E402
from app.main import app  # noqa: E402
from app.services.note_service import NoteService  # noqa: E402


class InMemoryNoteRepository:
    """Mismo contrato que NoteRepository, con índice único sobre `text`."""

    def __init__(self) -> None:
        self.docs: Dict[str, Dict[str, Any]] = {}
        self.writes = 0

    def _check_unique(self, text: str, exclude: Optional[str] = None) -> None:
        for note_id, doc in self.docs.items():
            if doc["text"] == text and note_id != exclude:
                raise DuplicateKeyError("E11000 duplicate key error index: uniq_text")

    async def list_notes(self) -> List[Dict[str, Any]]:
        return [dict(d) for d in self.docs.values()]

    async def find_by_id(self, note_id: str) -> Optional[Dict[str, Any]]:
        doc = self.docs.get(note_id)
        return dict(doc) if doc else None

    async def find_by_text(self, text: str) -> Optional[Dict[str, Any]]:
        for doc in self.docs.values():
            if doc["text"] == text:
                return dict(doc)
        return None

    async def insert_note(self, user: str, title: str, text: str) -> Optional[Dict[str, Any]]:
        self._check_unique(text)
        note_id = str(ObjectId())
        doc = {
            "id": note_id,
            "user": user,
            "title": title,
            "text": text,
            "completed": False,
            "created_at": "2026-01-01T00:00:00Z",
            "updated_at": "2026-01-01T00:00:00Z",
        }
        self.docs[note_id] = doc
        self.writes += 1
        return dict(doc)

    async def replace_note(self, note_id: str, *, user: str, title: str, text: str, completed: bool):
        if note_id not in self.docs:
            return None
        self._check_unique(text, exclude=note_id)
        self.docs[note_id].update(user=user, title=title, text=text, completed=completed)
        self.writes += 1
        return dict(self.docs[note_id])

    async def delete_note(self, note_id: str) -> bool:
        if self.docs.pop(note_id, None) is None:
            return False
        self.writes += 1
        return True


@pytest.fixture
def repo() -> InMemoryNoteRepository:
    return InMemoryNoteRepository()


@pytest.fixture
def service(repo) -> NoteService:
    return NoteService(repo)


@pytest.fixture
def client(service):
    app.dependency_overrides[get_note_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
