import pytest
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId

from app.repositories.note_repo import NoteRepository


@pytest.fixture
def collection():
    coll = MagicMock()
    coll.find_one = AsyncMock()
    coll.insert_one = AsyncMock()
    coll.find_one_and_update = AsyncMock()
    coll.delete_one = AsyncMock()
    return coll


@pytest.mark.asyncio
async def test_list_notes_exposes_string_id(collection):
    oid = ObjectId()
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.to_list = AsyncMock(return_value=[{"_id": oid, "user": "u1", "title": "T", "text": "x", "completed": False}])
    collection.find.return_value = cursor

    notes = await NoteRepository(collection).list_notes()

    cursor.sort.assert_called_once_with("_id", 1)
    assert notes == [{"id": str(oid), "user": "u1", "title": "T", "text": "x", "completed": False}]


@pytest.mark.asyncio
async def test_find_by_id_skips_query_for_malformed_id(collection):
    assert await NoteRepository(collection).find_by_id("nope") is None
    collection.find_one.assert_not_awaited()


@pytest.mark.asyncio
async def test_find_by_text_queries_exact_text(collection):
    collection.find_one.return_value = None
    assert await NoteRepository(collection).find_by_text("hello") is None
    collection.find_one.assert_awaited_once_with({"text": "hello"})


@pytest.mark.asyncio
async def test_insert_defaults_completed_false(collection):
    oid = ObjectId()
    collection.insert_one.return_value = MagicMock(acknowledged=True, inserted_id=oid)

    note = await NoteRepository(collection).insert_note("u1", "T", "hello")

    doc = collection.insert_one.await_args.args[0]
    assert doc["completed"] is False
    assert doc["created_at"] == doc["updated_at"]
    assert note["id"] == str(oid)


@pytest.mark.asyncio
async def test_insert_unacknowledged_returns_none(collection):
    collection.insert_one.return_value = MagicMock(acknowledged=False, inserted_id=None)
    assert await NoteRepository(collection).insert_note("u1", "T", "hello") is None


@pytest.mark.asyncio
async def test_replace_sets_all_mutable_fields(collection):
    oid = ObjectId()
    collection.find_one_and_update.return_value = {"_id": oid, "user": "u2", "title": "T2", "text": "y", "completed": True}

    note = await NoteRepository(collection).replace_note(str(oid), user="u2", title="T2", text="y", completed=True)

    flt, update = collection.find_one_and_update.await_args.args
    assert flt == {"_id": oid}
    assert {k: update["$set"][k] for k in ("user", "title", "text", "completed")} == {
        "user": "u2", "title": "T2", "text": "y", "completed": True,
    }
    assert note["id"] == str(oid)


@pytest.mark.asyncio
async def test_delete_reports_deleted_count(collection):
    collection.delete_one.return_value = MagicMock(deleted_count=0)
    assert await NoteRepository(collection).delete_note(str(ObjectId())) is False
    assert await NoteRepository(collection).delete_note("bad-id") is False
    collection.delete_one.assert_awaited_once()
