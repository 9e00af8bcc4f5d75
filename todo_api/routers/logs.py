from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from todo_api.database import get_db
from todo_api.models import LogResponse
from todo_api.services.log_service import LogService

router = APIRouter(tags=["logs"])


@router.get("/logs", response_model=list[LogResponse])
async def get_logs(db: AsyncSession = Depends(get_db)):
    """Audit trail of todo and tag mutations"""
    return await LogService.get_all_logs(db)
