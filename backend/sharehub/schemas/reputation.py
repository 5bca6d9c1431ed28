"""Review, Report and Tag Schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ReviewCreate(BaseModel):
    subject_id: UUID
    rating: int = Field(ge=1, le=5)
    message: str | None = Field(None, max_length=2000)


class ReviewUpdate(BaseModel):
    rating: int | None = Field(None, ge=1, le=5)
    message: str | None = Field(None, max_length=2000)


class ReviewResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    author_id: UUID
    subject_id: UUID
    rating: int
    message: str | None = None
    created_at: datetime


class ReportCreate(BaseModel):
    reported_id: UUID
    message: str | None = Field(None, max_length=2000)


class ReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    reporter_id: UUID
    reported_id: UUID
    message: str | None = None
    created_at: datetime


class ReportSummary(BaseModel):
    reported_id: UUID
    number_of_reports: int
    is_reported: bool


class TaggedItem(BaseModel):
    item_id: UUID
    item_kind: str
