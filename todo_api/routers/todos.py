from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from todo_api.database import get_db
from todo_api.models import DeleteResponse, TodoCreate, TodoResponse, TodoUpdate
from todo_api.services.todo_service import TodoService

router = APIRouter(tags=["todos"])


@router.post("/todos", response_model=TodoResponse, status_code=status.HTTP_201_CREATED)
async def create_todo(todo_data: TodoCreate, db: AsyncSession = Depends(get_db)):
    """Create a new todo"""
    return await TodoService.create_todo(todo_data, db)


@router.get("/todos", response_model=list[TodoResponse])
async def get_todos(db: AsyncSession = Depends(get_db)):
    return await TodoService.get_all_todos(db)


@router.put("/todos", response_model=TodoResponse)
async def update_todo(todo_data: TodoUpdate, db: AsyncSession = Depends(get_db)):
    """Update the todo identified by `id` in the body"""
    return await TodoService.update_todo(todo_data, db)


@router.delete("/todos/{todo_id}", response_model=DeleteResponse)
async def delete_todo(todo_id: int, db: AsyncSession = Depends(get_db)):
    """Delete a todo together with its tag links"""
    await TodoService.delete_todo(todo_id, db)
    return DeleteResponse(success="Todo deleted")
