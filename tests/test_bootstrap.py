import pytest
from unittest.mock import AsyncMock, MagicMock
from pymongo.errors import OperationFailure

from app.infrastructure.db.bootstrap import ensure_collections


def _db(existing):
    coll = MagicMock()
    coll.create_index = AsyncMock()
    db = MagicMock()
    db.list_collection_names = AsyncMock(return_value=existing)
    db.create_collection = AsyncMock()
    db.command = AsyncMock()
    db.__getitem__.return_value = coll
    return db, coll


@pytest.mark.asyncio
async def test_creates_collection_with_validator_and_unique_text_index():
    db, coll = _db([])
    await ensure_collections(db)

    name = db.create_collection.await_args.args[0]
    assert name == "notes"
    assert "$jsonSchema" in db.create_collection.await_args.kwargs["validator"]

    unique = [c for c in coll.create_index.await_args_list if c.kwargs.get("unique")]
    assert len(unique) == 1
    assert unique[0].args[0] == [("text", 1)]


@pytest.mark.asyncio
async def test_existing_collection_uses_collmod_and_tolerates_index_failure():
    db, coll = _db(["notes"])
    coll.create_index.side_effect = OperationFailure("E11000 duplicate key")

    await ensure_collections(db)

    db.create_collection.assert_not_awaited()
    assert db.command.await_args.args[0]["collMod"] == "notes"
    assert coll.create_index.await_count == 2
