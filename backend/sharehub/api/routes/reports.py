"""Report Routes — flag a user, read how often a user was flagged."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from sharehub.api.dependencies import get_current_user, get_stores
from sharehub.config import get_settings
from sharehub.core.domain_types import UserId
from sharehub.core.reputation import is_reported
from sharehub.schemas.reputation import ReportCreate, ReportResponse, ReportSummary
from sharehub.stores.registry import StoreRegistry

router = APIRouter(prefix="/api/v1/reports", tags=["reports"])


@router.post("", response_model=ReportResponse, status_code=status.HTTP_201_CREATED)
async def report_user(
    body: ReportCreate,
    user: UserId = Depends(get_current_user),
    stores: StoreRegistry = Depends(get_stores),
):
    return await stores.reports.report(user, UserId(body.reported_id), body.message)


@router.get("", response_model=ReportSummary)
async def get_report_summary(
    reported_id: UUID = Query(...), stores: StoreRegistry = Depends(get_stores),
):
    count = await stores.reports.count_for(UserId(reported_id))
    return ReportSummary(
        reported_id=reported_id,
        number_of_reports=count,
        is_reported=is_reported(count, get_settings().report_threshold),
    )
