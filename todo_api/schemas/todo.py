from pydantic import BaseModel, field_validator
from typing import Any, List, Optional


def _clean_text(v):
    if not v.strip():
        raise ValueError("text cannot be empty")
    return v.strip()


class TodoCreate(BaseModel):
    text: str

    @field_validator("text")
    @classmethod
    def text_not_empty(cls, v):
        return _clean_text(v)


class TodoUpdate(BaseModel):
    """Only text and completed are honoured; any other field is dropped.

    completed stays untyped so that a non-boolean value is accepted and then
    treated as "not completed" instead of failing validation.
    """
    text: Optional[str] = None
    completed: Any = None

    @field_validator("text")
    @classmethod
    def text_not_empty(cls, v):
        if v is None:
            raise ValueError("text cannot be null")
        return _clean_text(v)


class TodoOut(BaseModel):
    id: str
    text: str
    completed: bool = False
    completed_at: Optional[int] = None
    owner_id: str


class TodoEnvelope(BaseModel):
    todo: TodoOut


class TodoList(BaseModel):
    todos: List[TodoOut]
