import mongomock
import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from todo_api.main import create_app
from todo_api.models import user as users
from todo_api.models import todo as todos
from todo_api.utils.auth import hash_password, issue_token

PASSWORD = "userOnePass"


@pytest.fixture
def db():
    return mongomock.MongoClient().get_database("TodoAppTest")


@pytest.fixture
def client(db):
    # entering the client runs the lifespan, which builds the unique email index
    with TestClient(create_app(db=db)) as c:
        yield c


def _seed_user(db, email):
    doc = users.new_user(email, hash_password(PASSWORD))
    doc["_id"] = ObjectId()
    db.users.insert_one(doc)
    token = issue_token(db, doc["_id"])
    return {"_id": doc["_id"], "email": email, "token": token}


@pytest.fixture
def user_a(db):
    return _seed_user(db, "andrew@example.com")


@pytest.fixture
def user_b(db):
    return _seed_user(db, "jen@example.com")


@pytest.fixture
def seeded(db, user_a, user_b):
    """Two todos, one per user; B's is already completed."""
    todo_a = todos.insert_todo(db, "Get lunch", user_a["_id"])
    todo_b = todos.insert_todo(db, "Brush teeth", user_b["_id"])
    db.todos.update_one({"_id": todo_b["_id"]}, {"$set": {"completed": True, "completed_at": 777}})
    return {"a": todo_a, "b": todo_b}
