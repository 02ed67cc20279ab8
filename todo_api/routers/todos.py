import logging
from typing import Optional
from bson import ObjectId
from fastapi import APIRouter, Depends, HTTPException
from pymongo.database import Database
from pymongo.errors import PyMongoError
from todo_api.database import get_db, parse_object_id
from todo_api.models import todo as todos
from todo_api.schemas.todo import TodoCreate, TodoUpdate, TodoOut, TodoEnvelope, TodoList
from todo_api.utils.auth import Identity, authenticate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/todos", tags=["todos"])


def todo_object_id(todo_id: str) -> ObjectId:
    """Path dependency: a malformed id is a 404, resolved before the body is validated."""
    oid = parse_object_id(todo_id)
    if oid is None:
        raise HTTPException(status_code=404, detail="Todo not found")
    return oid


@router.post("", response_model=TodoOut)
def create_todo(todo: TodoCreate, db: Database = Depends(get_db), identity: Identity = Depends(authenticate)):
    try:
        doc = todos.insert_todo(db, todo.text, identity.user["_id"])
    except PyMongoError as e:
        logger.warning("Could not create todo: %s", e)
        raise HTTPException(status_code=400, detail="Could not create todo")
    logger.info("Created todo %s for user %s", doc["_id"], identity.user["_id"])
    return todos.to_public(doc)


@router.get("", response_model=TodoList)
def list_todos(db: Database = Depends(get_db), identity: Identity = Depends(authenticate)):
    try:
        docs = todos.list_todos(db, identity.user["_id"])
    except PyMongoError as e:
        logger.warning("Could not list todos: %s", e)
        raise HTTPException(status_code=400, detail="Could not list todos")
    return {"todos": [todos.to_public(d) for d in docs]}


@router.get("/{todo_id}", response_model=TodoEnvelope)
def get_todo(db: Database = Depends(get_db), identity: Identity = Depends(authenticate), oid: ObjectId = Depends(todo_object_id)):
    try:
        doc = todos.find_todo(db, identity.user["_id"], oid)
    except PyMongoError as e:
        logger.warning("Could not fetch todo %s: %s", oid, e)
        raise HTTPException(status_code=400, detail="Could not fetch todo")
    # a todo owned by someone else is reported exactly like a missing one
    if doc is None:
        raise HTTPException(status_code=404, detail="Todo not found")
    return {"todo": todos.to_public(doc)}


@router.delete("/{todo_id}", response_model=TodoEnvelope)
def delete_todo(db: Database = Depends(get_db), identity: Identity = Depends(authenticate), oid: ObjectId = Depends(todo_object_id)):
    try:
        doc = todos.delete_todo(db, identity.user["_id"], oid)
    except PyMongoError as e:
        logger.warning("Could not delete todo %s: %s", oid, e)
        raise HTTPException(status_code=400, detail="Could not delete todo")
    if doc is None:
        raise HTTPException(status_code=404, detail="Todo not found")
    logger.info("Deleted todo %s for user %s", oid, identity.user["_id"])
    return {"todo": todos.to_public(doc)}


@router.patch("/{todo_id}", response_model=TodoEnvelope)
def update_todo(
    body: Optional[TodoUpdate] = None,
    db: Database = Depends(get_db),
    identity: Identity = Depends(authenticate),
    oid: ObjectId = Depends(todo_object_id),
):
    """Partial update of text and completion state.

    A missing body counts as an empty one, which marks the todo not completed.
    A todo that is missing or owned by another user answers 400 rather than 404;
    existing clients rely on that status.
    """
    if body is None:
        body = TodoUpdate()
    changes = todos.completion_fields(body.completed)
    if "text" in body.model_fields_set:
        changes["text"] = body.text
    try:
        doc = todos.update_todo(db, identity.user["_id"], oid, changes)
    except PyMongoError as e:
        logger.warning("Could not update todo %s: %s", oid, e)
        raise HTTPException(status_code=400, detail="Could not update todo")
    if doc is None:
        raise HTTPException(status_code=400, detail="Could not update todo")
    return {"todo": todos.to_public(doc)}
