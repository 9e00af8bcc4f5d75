from datetime import datetime, timezone

from pydantic import ConfigDict
from sqlalchemy import Column, DateTime, ForeignKey, Integer
from sqlmodel import Field, SQLModel


def get_utc_now():
    """Helper function to get current UTC time with timezone"""
    return datetime.now(timezone.utc)


class TodoBase(SQLModel):
    """Base model with shared fields"""

    name: str
    description: str | None = Field(default=None)


class Todo(TodoBase, table=True):
    """Database model"""

    __tablename__ = "todo"

    id: int | None = Field(default=None, primary_key=True)
    status: bool = Field(default=False)


class TodoCreate(SQLModel):
    """Body of POST /todos"""

    name: str | None = None
    description: str | None = None


class TodoUpdate(SQLModel):
    """Body of PUT /todos. Fields left out of the body are not touched."""

    id: int | None = None
    name: str | None = None
    status: bool | None = None
    description: str | None = None


class TodoResponse(TodoBase):
    id: int
    status: bool

    model_config = {"from_attributes": True}


class TagBase(SQLModel):
    name: str
    color: str


class Tag(TagBase, table=True):
    __tablename__ = "tag"

    id: int | None = Field(default=None, primary_key=True)


class TagCreate(SQLModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    color: str | None = None
    todo_id: int | None = Field(default=None, alias="todoId")


class TagUpdate(SQLModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None
    name: str | None = None
    color: str | None = None
    todo_id: int | None = Field(default=None, alias="todoId")


class TagResponse(TagBase):
    id: int

    model_config = {"from_attributes": True}


class TagTodo(SQLModel, table=True):
    """Link between one tag and one todo. Uniqueness of the pair is checked by the service."""

    __tablename__ = "tag_todo"

    id: int | None = Field(default=None, primary_key=True)
    todo_id: int = Field(
        sa_column=Column(
            Integer, ForeignKey("todo.id", ondelete="CASCADE"), nullable=False, index=True
        )
    )
    tag_id: int = Field(
        sa_column=Column(
            Integer, ForeignKey("tag.id", ondelete="CASCADE"), nullable=False, index=True
        )
    )


class TagTodoCreate(SQLModel):
    model_config = ConfigDict(populate_by_name=True)

    tag_id: int | None = Field(default=None, alias="tagId")
    todo_id: int | None = Field(default=None, alias="todoId")


class TagTodoResponse(SQLModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    tag_id: int = Field(alias="tagId")
    todo_id: int = Field(alias="todoId")


class TagCreated(SQLModel):
    model_config = ConfigDict(populate_by_name=True)

    tag: TagResponse
    tag_todo: TagTodoResponse | None = Field(default=None, alias="tagTodo")


class TagUpdatedWithLink(SQLModel):
    model_config = ConfigDict(populate_by_name=True)

    updated_tag: TagResponse = Field(alias="updatedTag")
    new_tag_todo: TagTodoResponse = Field(alias="newTagTodo")


class LogBase(SQLModel):
    table_name: str  # "Todo" | "Tag"
    action: str  # "CREATE" | "UPDATE" | "DELETE"
    record_id: int


class Log(LogBase, table=True):
    """Append-only audit record of a Todo or Tag mutation"""

    __tablename__ = "log"

    id: int | None = Field(default=None, primary_key=True)
    created_at: datetime = Field(
        default_factory=get_utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )


class LogResponse(LogBase):
    id: int
    created_at: datetime

    model_config = {"from_attributes": True}


class DeleteResponse(SQLModel):
    success: str
