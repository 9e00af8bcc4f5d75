from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from todo_api.models import Log

CREATE = "CREATE"
UPDATE = "UPDATE"
DELETE = "DELETE"


class LogService:
    @staticmethod
    def record(db: AsyncSession, table_name: str, action: str, record_id: int) -> Log:
        """Stage an audit row; it is written by the caller's commit."""
        entry = Log(table_name=table_name, action=action, record_id=record_id)
        db.add(entry)
        return entry

    @staticmethod
    async def get_all_logs(db: AsyncSession):
        result = await db.exec(select(Log).order_by(Log.id))
        return result.all()
