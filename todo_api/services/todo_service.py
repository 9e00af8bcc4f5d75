import logging

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from todo_api.core.errors import BadRequestError, NotFoundError
from todo_api.models import TagTodo, Todo, TodoCreate, TodoUpdate
from todo_api.services.log_service import CREATE, DELETE, UPDATE, LogService

logger = logging.getLogger(__name__)

TABLE_NAME = "Todo"


def require_id(value: int | None, message: str = "Id is required") -> int:
    if not value:
        raise BadRequestError(message)
    return value


async def get_todo_or_404(db: AsyncSession, todo_id: int) -> Todo:
    todo = await db.get(Todo, todo_id)
    if not todo:
        raise NotFoundError("Todo not found")
    return todo


class TodoService:
    @staticmethod
    async def create_todo(todo_data: TodoCreate, db: AsyncSession):
        todo = Todo(name=todo_data.name, description=todo_data.description)
        db.add(todo)
        await db.flush()
        LogService.record(db, TABLE_NAME, CREATE, todo.id)
        await db.commit()
        await db.refresh(todo)
        logger.info("Created todo %s", todo.id)
        return todo

    @staticmethod
    async def get_all_todos(db: AsyncSession):
        result = await db.exec(select(Todo).order_by(Todo.id))
        return result.all()

    @staticmethod
    async def update_todo(todo_data: TodoUpdate, db: AsyncSession):
        todo_id = require_id(todo_data.id)
        todo = await get_todo_or_404(db, todo_id)

        update_data = todo_data.model_dump(exclude_unset=True, exclude={"id"})
        todo.sqlmodel_update(update_data)
        db.add(todo)
        LogService.record(db, TABLE_NAME, UPDATE, todo_id)
        await db.commit()
        await db.refresh(todo)
        logger.info("Updated todo %s (%s)", todo_id, ", ".join(update_data) or "no fields")
        return todo

    @staticmethod
    async def delete_todo(todo_id: int, db: AsyncSession):
        require_id(todo_id)
        todo = await get_todo_or_404(db, todo_id)

        links = await db.exec(select(TagTodo).where(TagTodo.todo_id == todo_id))
        for link in links.all():
            await db.delete(link)
        await db.flush()

        await db.delete(todo)
        LogService.record(db, TABLE_NAME, DELETE, todo_id)
        await db.commit()
        logger.info("Deleted todo %s", todo_id)
