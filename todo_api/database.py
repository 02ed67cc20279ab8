from typing import Optional
from bson import ObjectId
from fastapi import Request
from pymongo import ASCENDING, MongoClient
from pymongo.database import Database
from todo_api.config import MONGODB_URI, MONGODB_DB


def create_client(uri: str = MONGODB_URI) -> MongoClient:
    return MongoClient(uri)


def get_database(client: MongoClient, name: str = MONGODB_DB) -> Database:
    """Return the database named in the URI, falling back to MONGODB_DB."""
    return client.get_default_database(default=name)


def ensure_indexes(db: Database):
    db.users.create_index([("email", ASCENDING)], unique=True)
    db.todos.create_index([("owner_id", ASCENDING)])


def parse_object_id(value) -> Optional[ObjectId]:
    """Return an ObjectId for a 24-char hex string, or None when malformed."""
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        return None
    return ObjectId(value)


def get_db(request: Request) -> Database:
    return request.app.state.db
