from datetime import datetime, UTC
from typing import Optional
from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.database import Database


def now_millis() -> int:
    return int(datetime.now(UTC).timestamp() * 1000)


def new_todo(text: str, owner_id: ObjectId) -> dict:
    return {
        "text": text,
        "completed": False,
        "completed_at": None,
        "owner_id": owner_id,
    }


def owner_scope(owner_id: ObjectId, todo_id: Optional[ObjectId] = None) -> dict:
    """Build an owner-scoped filter; with todo_id it matches a single record."""
    query = {"owner_id": owner_id}
    if todo_id is not None:
        query["_id"] = todo_id
    return query


def completion_fields(completed) -> dict:
    """Only a literal boolean True marks the todo completed."""
    if completed is True:
        return {"completed": True, "completed_at": now_millis()}
    return {"completed": False, "completed_at": None}


def insert_todo(db: Database, text: str, owner_id: ObjectId) -> dict:
    doc = new_todo(text, owner_id)
    result = db.todos.insert_one(doc)
    doc["_id"] = result.inserted_id
    return doc


def list_todos(db: Database, owner_id: ObjectId) -> list:
    return list(db.todos.find(owner_scope(owner_id)).sort("_id", 1))


def find_todo(db: Database, owner_id: ObjectId, todo_id: ObjectId) -> Optional[dict]:
    return db.todos.find_one(owner_scope(owner_id, todo_id))


def delete_todo(db: Database, owner_id: ObjectId, todo_id: ObjectId) -> Optional[dict]:
    return db.todos.find_one_and_delete(owner_scope(owner_id, todo_id))


def update_todo(db: Database, owner_id: ObjectId, todo_id: ObjectId, changes: dict) -> Optional[dict]:
    return db.todos.find_one_and_update(
        owner_scope(owner_id, todo_id),
        {"$set": changes},
        return_document=ReturnDocument.AFTER,
    )


def to_public(doc: dict) -> dict:
    return {
        "id": str(doc["_id"]),
        "text": doc["text"],
        "completed": doc.get("completed", False),
        "completed_at": doc.get("completed_at"),
        "owner_id": str(doc["owner_id"]),
    }
