"""
todos/store.py -- Thread-safe in-memory repository for TODO items.

Pattern: Repository. TodoStore is the single interface to the shared keyed
collection; route handlers never touch the dict directly.

Concurrency: FastAPI runs sync route handlers in a worker thread pool, so
many threads hit one store at once. One lock guards both the dict and the
id counter:
  - id allocation is atomic -- two concurrent creates never get the same id.
  - get/update/delete on a key are atomic -- no torn reads or writes.
  - list() sorts a snapshot taken under the lock. Concurrent creates and
    deletes may or may not be reflected in it.

Every record handed out is a copy made under the lock. Callers can read it
freely without racing a concurrent update and cannot change stored state
except through update().

Ownership: get/update/delete report "absent" both when the id does not
exist and when it belongs to another user. Callers cannot tell the two
apart, which keeps other users' ids from leaking through 404 vs 403.

Storage is volatile. Everything is lost on process restart.

Usage:
    store = TodoStore()
    item = store.create(TodoFields(title="Buy milk"), user_id="alice")
    store.list("alice")                                      # [item]
    store.get(item.id, "bob")                                # None
    store.update(item.id, TodoFields(title="Buy oat milk"), "alice")
    store.delete(item.id, "alice")                           # True
    store.close()
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Optional

from todos.models import TodoFields, TodoItem

logger = logging.getLogger("todoapi.todos")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class TodoStore:
    """Repository for TodoItem records across all users."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items: dict[int, TodoItem] = {}
        self._last_id = 0

    def list(self, user_id: str) -> list[TodoItem]:
        """Return the user's items, newest first.

        Items created within the same clock tick fall back to descending id
        so the order always matches creation order, reversed.
        """
        with self._lock:
            owned = [replace(item) for item in self._items.values() if item.user_id == user_id]
        owned.sort(key=lambda item: (item.created_date, item.id), reverse=True)
        return owned

    def get(self, todo_id: int, user_id: str) -> Optional[TodoItem]:
        """Return the item if it exists and belongs to user_id, else None."""
        with self._lock:
            item = self._items.get(todo_id)
            if item is None or item.user_id != user_id:
                return None
            return replace(item)

    def create(self, fields: TodoFields, user_id: str) -> TodoItem:
        """Store a new item owned by user_id and return it."""
        with self._lock:
            self._last_id += 1
            now = _utcnow()
            item = TodoItem(
                id=self._last_id,
                title=fields.title,
                description=fields.description,
                is_completed=fields.is_completed,
                created_date=now,
                updated_date=now,
                user_id=user_id,
            )
            self._items[item.id] = item
            return replace(item)

    def update(self, todo_id: int, fields: TodoFields, user_id: str) -> Optional[TodoItem]:
        """Overwrite the writable fields of an owned item.

        id, created_date and user_id are never touched. Returns None, with
        nothing changed, when the item is missing or owned by someone else.
        """
        with self._lock:
            item = self._items.get(todo_id)
            if item is None or item.user_id != user_id:
                return None
            item.title = fields.title
            item.description = fields.description
            item.is_completed = fields.is_completed
            # Wall clock can step backwards; updated_date must not.
            item.updated_date = max(_utcnow(), item.updated_date)
            return replace(item)

    def delete(self, todo_id: int, user_id: str) -> bool:
        """Remove an owned item. Returns False when missing or not owned."""
        with self._lock:
            item = self._items.get(todo_id)
            if item is None or item.user_id != user_id:
                return False
            del self._items[todo_id]
            return True

    def count(self) -> int:
        """Total number of items across all users."""
        with self._lock:
            return len(self._items)

    def close(self) -> None:
        """Drop all items. Called from the app lifespan on shutdown."""
        with self._lock:
            discarded = len(self._items)
            self._items.clear()
        logger.info("TodoStore closed (%d items discarded)", discarded)
