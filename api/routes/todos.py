"""
api/routes/todos.py -- TODO item routes for the REST API.

Routes:
  GET    /todos            -- list the caller's items, newest first
  GET    /todos/{todo_id}  -- one item
  POST   /todos            -- create; 201 + Location header
  PUT    /todos/{todo_id}  -- replace title, description, isCompleted
  DELETE /todos/{todo_id}  -- remove; 204

Ownership:
  Every route is scoped to the owner id taken from the verified token
  (auth.dependencies.get_owner_id). An item that exists but belongs to
  someone else is reported exactly like an item that does not exist: 404
  with the same code and message. The API never confirms another user's ids.

Validation:
  POST and PUT reject a missing, empty or whitespace-only title with 400
  "Title is required" before the store is touched.

Failures:
  Any exception from the store is logged with the operation and id, and the
  caller gets a generic 500. Store calls are single in-memory steps, so
  there is nothing to retry.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from api.limiter import READ_LIMIT, WRITE_LIMIT, limiter
from api.models import ErrorDetail, TodoCreate, TodoResponse, TodoUpdate
from auth.dependencies import get_owner_id
from todos.store import TodoStore

logger = logging.getLogger("todoapi.api.todos")

router = APIRouter()


# ---------------------------------------------------------------------------
# Error helpers
# ---------------------------------------------------------------------------


def _title_required() -> HTTPException:
    return HTTPException(
        status_code=400,
        detail=ErrorDetail(code="title_required", message="Title is required").model_dump(),
    )


def _not_found(todo_id: int) -> HTTPException:
    return HTTPException(
        status_code=404,
        detail=ErrorDetail(code="todo_not_found", message=f"Todo {todo_id} not found.").model_dump(),
    )


def _internal_error() -> HTTPException:
    # Never include the exception text -- it goes to the log only.
    return HTTPException(
        status_code=500,
        detail=ErrorDetail(code="internal_error", message="Internal server error").model_dump(),
    )


def _store(request: Request) -> TodoStore:
    return request.app.state.todo_store


# ---------------------------------------------------------------------------
# GET /todos -- list the caller's items
# ---------------------------------------------------------------------------


@limiter.limit(READ_LIMIT)
@router.get("/todos", response_model=list[TodoResponse])
def list_todos(request: Request, owner_id: str = Depends(get_owner_id)) -> list[TodoResponse]:
    """Return the caller's TODO items, newest first. Empty list if none."""
    try:
        items = _store(request).list(owner_id)
    except Exception as exc:
        logger.exception("Error listing todos")
        raise _internal_error() from exc
    return [TodoResponse.from_item(item) for item in items]


# ---------------------------------------------------------------------------
# GET /todos/{todo_id} -- one item
# ---------------------------------------------------------------------------


@limiter.limit(READ_LIMIT)
@router.get("/todos/{todo_id}", response_model=TodoResponse)
def get_todo(request: Request, todo_id: int, owner_id: str = Depends(get_owner_id)) -> TodoResponse:
    """Return one of the caller's items. 404 if missing or owned by someone else."""
    try:
        item = _store(request).get(todo_id, owner_id)
    except Exception as exc:
        logger.exception("Error getting todo %d", todo_id)
        raise _internal_error() from exc
    if item is None:
        raise _not_found(todo_id)
    return TodoResponse.from_item(item)


# ---------------------------------------------------------------------------
# POST /todos -- create
# ---------------------------------------------------------------------------


@limiter.limit(WRITE_LIMIT)
@router.post("/todos", response_model=TodoResponse, status_code=201)
def create_todo(
    request: Request,
    response: Response,
    body: TodoCreate,
    owner_id: str = Depends(get_owner_id),
) -> TodoResponse:
    """Create an item owned by the caller.

    The Location header points at GET /todos/{id} for the new item.
    """
    if not body.has_title():
        raise _title_required()
    try:
        item = _store(request).create(body.to_fields(), owner_id)
    except Exception as exc:
        logger.exception("Error creating todo")
        raise _internal_error() from exc
    logger.info("Created todo %d for %s", item.id, owner_id)
    response.headers["Location"] = str(request.url_for("get_todo", todo_id=item.id))
    return TodoResponse.from_item(item)


# ---------------------------------------------------------------------------
# PUT /todos/{todo_id} -- update
# ---------------------------------------------------------------------------


@limiter.limit(WRITE_LIMIT)
@router.put("/todos/{todo_id}", response_model=TodoResponse)
def update_todo(
    request: Request,
    todo_id: int,
    body: TodoUpdate,
    owner_id: str = Depends(get_owner_id),
) -> TodoResponse:
    """Replace title, description and isCompleted of one of the caller's items.

    id, createdDate and userId never change. 404 if missing or not owned.
    """
    if not body.has_title():
        raise _title_required()
    try:
        item = _store(request).update(todo_id, body.to_fields(), owner_id)
    except Exception as exc:
        logger.exception("Error updating todo %d", todo_id)
        raise _internal_error() from exc
    if item is None:
        raise _not_found(todo_id)
    return TodoResponse.from_item(item)


# ---------------------------------------------------------------------------
# DELETE /todos/{todo_id} -- remove
# ---------------------------------------------------------------------------


@limiter.limit(WRITE_LIMIT)
@router.delete("/todos/{todo_id}", status_code=204)
def delete_todo(request: Request, todo_id: int, owner_id: str = Depends(get_owner_id)) -> Response:
    """Delete one of the caller's items. 204 on success, 404 if missing or not owned."""
    try:
        deleted = _store(request).delete(todo_id, owner_id)
    except Exception as exc:
        logger.exception("Error deleting todo %d", todo_id)
        raise _internal_error() from exc
    if not deleted:
        raise _not_found(todo_id)
    logger.info("Deleted todo %d for %s", todo_id, owner_id)
    return Response(status_code=204)
