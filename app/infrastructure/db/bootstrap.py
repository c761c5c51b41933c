"""
Bootstrap de la base Mongo: define y aplica validadores (JSON Schema) e índices.
Se ejecuta al inicio de la app para asegurar la colección de notas y su consistencia.
No tumba la app si algo falla; deja warnings en casos no críticos.
"""
from __future__ import annotations

from typing import Any, Dict, List
import logging
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from app.repositories.note_repo import COLLECTION as NOTE_COLL

_log = logging.getLogger("notes.mongo.bootstrap")


NOTE_VALIDATOR: Dict[str, Any] = {
    "bsonType": "object",
    "required": ["user", "title", "text", "completed", "created_at", "updated_at"],
    "properties": {
        "user": {"bsonType": "string", "minLength": 1},
        "title": {"bsonType": "string", "minLength": 1},
        "text": {"bsonType": "string", "minLength": 1},
        "completed": {"bsonType": "bool"},
        "created_at": {"bsonType": "string"},
        "updated_at": {"bsonType": "string"},
    },
}

NOTE_INDEXES: List[Dict[str, Any]] = [
    # Árbitro final de la unicidad por texto (el pre-check no es atómico)
    {"keys": [("text", ASCENDING)], "name": "uniq_text", "unique": True},
    {"keys": [("user", ASCENDING)], "name": "by_user"},
]


async def _collmod_or_create(db: AsyncIOMotorDatabase, name: str, validator: Dict[str, Any] | None) -> None:
    try:
        if name not in await db.list_collection_names():
            if validator:
                await db.create_collection(name, validator={"$jsonSchema": validator})
            else:
                await db.create_collection(name)
        elif validator:
            await db.command({
                "collMod": name,
                "validator": {"$jsonSchema": validator},
                "validationLevel": "moderate",
            })
    except PyMongoError as e:
        # No aborta el arranque; solo deja sin validator estricto.
        _log.warning("No se pudo aplicar validator en '%s': %s", name, e)


async def _ensure_indexes(db: AsyncIOMotorDatabase, name: str, indexes: List[Dict[str, Any]]) -> None:
    coll = db[name]
    for ix in indexes:
        opts = dict(ix)
        keys = opts.pop("keys")
        try:
            await coll.create_index(keys, **opts)
        except PyMongoError as e:
            # p.ej. textos duplicados previos impiden el índice único
            _log.warning("No se pudo crear índice en '%s' (%s): %s", name, keys, e)


async def ensure_collections(db: AsyncIOMotorDatabase) -> None:
    """Garantiza la colección de notas, su validador e índices."""
    await _collmod_or_create(db, NOTE_COLL, NOTE_VALIDATOR)
    await _ensure_indexes(db, NOTE_COLL, NOTE_INDEXES)
    _log.info("Colección '%s' lista", NOTE_COLL)
