from typing import Optional
from bson import ObjectId
from pymongo.database import Database

ACCESS_AUTH = "auth"


def new_user(email: str, password_hash: str) -> dict:
    return {"email": email, "password": password_hash, "tokens": []}


def find_by_email(db: Database, email: str) -> Optional[dict]:
    return db.users.find_one({"email": email})


def find_by_token(db: Database, user_id: ObjectId, token: str) -> Optional[dict]:
    """Return the user holding this exact auth token, or None."""
    return db.users.find_one({
        "_id": user_id,
        "tokens": {"$elemMatch": {"access": ACCESS_AUTH, "token": token}},
    })


def push_token(db: Database, user_id: ObjectId, token: str):
    db.users.update_one(
        {"_id": user_id},
        {"$push": {"tokens": {"access": ACCESS_AUTH, "token": token}}},
    )


def pull_token(db: Database, user_id: ObjectId, token: str):
    db.users.update_one({"_id": user_id}, {"$pull": {"tokens": {"token": token}}})


def to_public(doc: dict) -> dict:
    # password and tokens never leave the server
    return {"id": str(doc["_id"]), "email": doc["email"]}
