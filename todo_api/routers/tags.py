from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from todo_api.database import get_db
from todo_api.models import (
    DeleteResponse,
    TagCreate,
    TagCreated,
    TagResponse,
    TagTodoCreate,
    TagTodoResponse,
    TagUpdate,
    TagUpdatedWithLink,
)
from todo_api.services.tag_service import TagService

router = APIRouter(tags=["tags"])


@router.post(
    "/tags",
    response_model=TagCreated,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_tag(tag_data: TagCreate, db: AsyncSession = Depends(get_db)):
    """Create a tag, linking it to `todoId` when one is given"""
    tag, link = await TagService.create_tag(tag_data, db)
    return TagCreated(
        tag=TagResponse.model_validate(tag),
        tag_todo=TagTodoResponse.model_validate(link) if link else None,
    )


@router.get("/tags", response_model=list[TagResponse])
async def get_tags(
    todo_id: int | None = Query(default=None, alias="todoId"),
    db: AsyncSession = Depends(get_db),
):
    return await TagService.get_all_tags(db, todo_id)


@router.get("/tags/{todo_id}", response_model=list[TagResponse])
async def get_tags_for_todo(todo_id: int, db: AsyncSession = Depends(get_db)):
    """Tags linked to an existing todo"""
    return await TagService.get_tags_for_todo(todo_id, db)


@router.put("/tags", response_model=TagUpdatedWithLink | TagResponse)
async def update_tag(tag_data: TagUpdate, db: AsyncSession = Depends(get_db)):
    tag, link = await TagService.update_tag(tag_data, db)
    if link:
        return TagUpdatedWithLink(
            updated_tag=TagResponse.model_validate(tag),
            new_tag_todo=TagTodoResponse.model_validate(link),
        )
    return TagResponse.model_validate(tag)


@router.delete("/tags/{tag_id}", response_model=DeleteResponse)
async def delete_tag(tag_id: int, db: AsyncSession = Depends(get_db)):
    await TagService.delete_tag(tag_id, db)
    return DeleteResponse(success="Tag deleted")


@router.post(
    "/tag-todos", response_model=TagTodoResponse, status_code=status.HTTP_201_CREATED
)
async def create_tag_todo(link_data: TagTodoCreate, db: AsyncSession = Depends(get_db)):
    return await TagService.create_association(link_data, db)


@router.delete("/tag-todos/{tag_id}/{todo_id}", response_model=str)
async def delete_tag_todo(tag_id: int, todo_id: int, db: AsyncSession = Depends(get_db)):
    await TagService.delete_association(tag_id, todo_id, db)
    return "TagTodo relation deleted"
