"""Repo de la colección `notes`.

- Expone `id` (str) en lugar de `_id` (ObjectId).
- Sella timestamps en ISO-8601 UTC (Z).
- No atrapa errores del driver: `DuplicateKeyError` y demás suben al servicio.
"""
from typing import Dict, Any, List, Optional
from datetime import datetime, timezone
from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ReturnDocument

COLLECTION = "notes"


def _now_iso() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _oid(note_id: str) -> Optional[ObjectId]:
    if not ObjectId.is_valid(note_id):
        return None
    return ObjectId(note_id)


def _out(doc: Dict[str, Any]) -> Dict[str, Any]:
    d = dict(doc)
    d["id"] = str(d.pop("_id", ""))
    return d


class NoteRepository:
    def __init__(self, collection: AsyncIOMotorCollection) -> None:
        self.collection = collection

    async def list_notes(self) -> List[Dict[str, Any]]:
        """Todas las notas en orden de inserción."""
        docs = await self.collection.find({}).sort("_id", 1).to_list(length=None)
        return [_out(d) for d in docs]

    async def find_by_id(self, note_id: str) -> Optional[Dict[str, Any]]:
        """None si no existe o si `note_id` no es un ObjectId válido."""
        oid = _oid(note_id)
        if oid is None:
            return None
        doc = await self.collection.find_one({"_id": oid})
        return _out(doc) if doc else None

    async def find_by_text(self, text: str) -> Optional[Dict[str, Any]]:
        doc = await self.collection.find_one({"text": text})
        return _out(doc) if doc else None

    async def insert_note(self, user: str, title: str, text: str) -> Optional[Dict[str, Any]]:
        """Inserta nota con defaults; None si el servidor no confirma la escritura."""
        now = _now_iso()
        data: Dict[str, Any] = {
            "user": user,
            "title": title,
            "text": text,
            "completed": False,
            "created_at": now,
            "updated_at": now,
        }
        res = await self.collection.insert_one(data)
        if not res.acknowledged or res.inserted_id is None:
            return None
        data["_id"] = res.inserted_id
        return _out(data)

    async def replace_note(
        self, note_id: str, *, user: str, title: str, text: str, completed: bool
    ) -> Optional[Dict[str, Any]]:
        """Sobrescribe los cuatro campos mutables; None si la nota ya no existe."""
        oid = _oid(note_id)
        if oid is None:
            return None
        doc = await self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": {
                "user": user,
                "title": title,
                "text": text,
                "completed": completed,
                "updated_at": _now_iso(),
            }},
            return_document=ReturnDocument.AFTER,
        )
        return _out(doc) if doc else None

    async def delete_note(self, note_id: str) -> bool:
        oid = _oid(note_id)
        if oid is None:
            return False
        res = await self.collection.delete_one({"_id": oid})
        return res.deleted_count == 1
