"""Report Store — user reports and their counts."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from sharehub.core.domain_types import UserId
from sharehub.core.errors import NotAllowedError
from sharehub.models.report import Report
from sharehub.stores.unit_of_work import guarded_read, unit_of_work


class SqlReportStore:
    """Report persistence."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def report(
        self, reporter_id: UserId, reported_id: UserId, message: str | None = None,
    ) -> Report:
        if reporter_id == reported_id:
            raise NotAllowedError("Users cannot report themselves")
        report = Report(
            reporter_id=reporter_id, reported_id=reported_id, message=message,
        )
        async with unit_of_work(self.db, "create report"):
            self.db.add(report)
        return report

    async def count_for(self, reported_id: UserId) -> int:
        async with guarded_read(self.db, "count reports"):
            result = await self.db.execute(
                select(func.count()).select_from(Report)
                .where(Report.reported_id == reported_id),
            )
        return result.scalar_one()
