"""
API request and response models for the TODO REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in todos/models.py, which
own the internal domain representation. Route handlers map between the two.

Wire names are camelCase (isCompleted, createdDate, userId) to match the
browser frontend. Requests also accept the snake_case field names.

Separation of concerns: todos/ models = domain truth; api/ models = API contract.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from todos.models import TodoFields, TodoItem

# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class TodoWrite(BaseModel):
    """Request body for POST /api/todos and PUT /api/todos/{id}.

    title is deliberately not constrained here. A blank or missing title is
    rejected by the route with 400 "Title is required", not by Pydantic with
    a 422, so clients get the same answer for "" and "   ".

    extra="ignore" drops any id, userId or date fields a client sends. The
    owner always comes from the verified token, never from the body.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: Optional[str] = None
    description: Optional[str] = None
    is_completed: bool = Field(default=False, alias="isCompleted")

    def has_title(self) -> bool:
        """True if title has at least one non-whitespace character."""
        return bool(self.title and self.title.strip())

    def to_fields(self) -> TodoFields:
        """Map the request body to the store's writable-fields shape."""
        return TodoFields(
            title=self.title or "",
            description=self.description or "",
            is_completed=self.is_completed,
        )


class TodoCreate(TodoWrite):
    """Request body for POST /api/todos."""


class TodoUpdate(TodoWrite):
    """Request body for PUT /api/todos/{id}."""


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class TodoResponse(BaseModel):
    """A single TODO item as returned to its owner."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    title: str
    description: str
    is_completed: bool = Field(alias="isCompleted")
    created_date: datetime = Field(alias="createdDate")
    updated_date: datetime = Field(alias="updatedDate")
    user_id: str = Field(alias="userId")

    @classmethod
    def from_item(cls, item: TodoItem) -> "TodoResponse":
        """Build a TodoResponse from a store TodoItem.

        This is the Factory Method pattern -- the mapping lives here, colocated
        with the output model, rather than scattered across route handlers.
        """
        return cls(
            id=item.id,
            title=item.title,
            description=item.description,
            is_completed=item.is_completed,
            created_date=item.created_date,
            updated_date=item.updated_date,
            user_id=item.user_id,
        )


class ErrorDetail(BaseModel):
    """Machine-readable error payload."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Top-level error envelope returned on 4xx/5xx responses."""

    model_config = ConfigDict(frozen=True)

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Response for GET /api/health."""

    model_config = ConfigDict(frozen=True)

    status: str = "ok"
    version: str
    todos: int
