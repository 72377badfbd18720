"""
todos/models.py -- Domain dataclasses for the TODO item store.

These are pure data containers with zero logic. Id assignment, timestamps
and ownership checks all live in todos/store.py.

Separation of concerns: these dataclasses are the store's domain truth.
api/models.py owns the HTTP contract (camelCase aliases, request shapes),
and route handlers map between the two.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class TodoFields:
    """The caller-writable part of a task record.

    create() and update() accept only this shape, so id, timestamps and
    user_id can never be supplied by a caller.
    """

    title: str
    description: str = ""
    is_completed: bool = False


@dataclass
class TodoItem:
    """A single task record owned by exactly one user.

    id is assigned by the store from a counter that never goes backwards,
    so ids are not reused after a delete. user_id and created_date are
    fixed at creation; updated_date moves on every successful update.
    """

    id: int
    title: str
    description: str
    is_completed: bool
    created_date: datetime
    updated_date: datetime
    user_id: str
