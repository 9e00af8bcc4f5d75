import logging

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from todo_api.core.errors import BadRequestError, ConflictError, NotFoundError
from todo_api.models import Tag, TagCreate, TagTodo, TagTodoCreate, TagUpdate
from todo_api.services.log_service import CREATE, DELETE, UPDATE, LogService
from todo_api.services.todo_service import get_todo_or_404, require_id

logger = logging.getLogger(__name__)

TABLE_NAME = "Tag"


async def get_tag_or_404(db: AsyncSession, tag_id: int) -> Tag:
    tag = await db.get(Tag, tag_id)
    if not tag:
        raise NotFoundError("Tag not found")
    return tag


async def find_link(db: AsyncSession, tag_id: int, todo_id: int) -> TagTodo | None:
    result = await db.exec(
        select(TagTodo).where(TagTodo.tag_id == tag_id, TagTodo.todo_id == todo_id)
    )
    return result.first()


def _link(db: AsyncSession, tag_id: int, todo_id: int) -> TagTodo:
    link = TagTodo(tag_id=tag_id, todo_id=todo_id)
    db.add(link)
    return link


class TagService:
    @staticmethod
    async def create_tag(tag_data: TagCreate, db: AsyncSession):
        """Create a tag, optionally linked to an existing todo. Returns (tag, link or None)."""
        if tag_data.todo_id:
            await get_todo_or_404(db, tag_data.todo_id)

        tag = Tag(name=tag_data.name, color=tag_data.color)
        db.add(tag)
        await db.flush()
        LogService.record(db, TABLE_NAME, CREATE, tag.id)

        link = _link(db, tag.id, tag_data.todo_id) if tag_data.todo_id else None
        await db.commit()
        await db.refresh(tag)
        if link is not None:
            await db.refresh(link)
        logger.info("Created tag %s", tag.id)
        return tag, link

    @staticmethod
    async def get_all_tags(db: AsyncSession, todo_id: int | None = None):
        query = select(Tag)
        if todo_id is not None:
            query = query.join(TagTodo, TagTodo.tag_id == Tag.id).where(
                TagTodo.todo_id == todo_id
            )
        result = await db.exec(query.order_by(Tag.id))
        return result.all()

    @staticmethod
    async def get_tags_for_todo(todo_id: int, db: AsyncSession):
        require_id(todo_id, "todoId is required")
        await get_todo_or_404(db, todo_id)
        return await TagService.get_all_tags(db, todo_id)

    @staticmethod
    async def update_tag(tag_data: TagUpdate, db: AsyncSession):
        """Update a tag. Returns (tag, link created for todoId or None)."""
        tag_id = require_id(tag_data.id)
        tag = await get_tag_or_404(db, tag_id)
        if tag_data.name is None:
            raise BadRequestError("Name is required")

        link = None
        if tag_data.todo_id:
            await get_todo_or_404(db, tag_data.todo_id)
            if await find_link(db, tag_id, tag_data.todo_id) is None:
                link = _link(db, tag_id, tag_data.todo_id)

        tag.name = tag_data.name
        tag.color = tag_data.color or tag.color
        db.add(tag)
        LogService.record(db, TABLE_NAME, UPDATE, tag_id)
        await db.commit()
        await db.refresh(tag)
        if link is not None:
            await db.refresh(link)
        logger.info("Updated tag %s", tag_id)
        return tag, link

    @staticmethod
    async def delete_tag(tag_id: int, db: AsyncSession):
        require_id(tag_id)
        tag = await get_tag_or_404(db, tag_id)

        links = await db.exec(select(TagTodo).where(TagTodo.tag_id == tag_id))
        for link in links.all():
            await db.delete(link)
        await db.flush()

        await db.delete(tag)
        LogService.record(db, TABLE_NAME, DELETE, tag_id)
        await db.commit()
        logger.info("Deleted tag %s", tag_id)

    @staticmethod
    async def create_association(link_data: TagTodoCreate, db: AsyncSession):
        if not link_data.tag_id or not link_data.todo_id:
            raise BadRequestError("Both tagId and todoId are required")
        tag = await get_tag_or_404(db, link_data.tag_id)
        todo = await get_todo_or_404(db, link_data.todo_id)

        if await find_link(db, tag.id, todo.id) is not None:
            raise ConflictError("TagTodo relation already exists")

        link = _link(db, tag.id, todo.id)
        await db.commit()
        await db.refresh(link)
        logger.info("Linked tag %s to todo %s", tag.id, todo.id)
        return link

    @staticmethod
    async def delete_association(tag_id: int, todo_id: int, db: AsyncSession):
        if not tag_id or not todo_id:
            raise BadRequestError("Both tagId and todoId are required")
        await get_tag_or_404(db, tag_id)
        await get_todo_or_404(db, todo_id)

        link = await find_link(db, tag_id, todo_id)
        if link is None:
            raise NotFoundError("TagTodo relation not found")

        await db.delete(link)
        await db.commit()
        logger.info("Unlinked tag %s from todo %s", tag_id, todo_id)
