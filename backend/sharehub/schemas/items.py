"""Item Schemas — listings, requests, and their expiration records.

Invariants:
    - expire_date is YYYY-MM-DD, expire_time is HH:MM (calendar validity
      checked by core.expiration.parse_expiration)
    - name is stripped and non-empty; quantity >= 1 on create
    - Updates never carry `hidden=False`: hide is one-way
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
TIME_PATTERN = r"^\d{2}:\d{2}$"


class _ItemCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    quantity: int = Field(1, ge=1)
    image: str | None = Field(None, max_length=2000)
    description: str | None = Field(None, max_length=5000)
    expire_date: str = Field(pattern=DATE_PATTERN)
    expire_time: str | None = Field(None, pattern=TIME_PATTERN)
    tags: list[str] = Field(default_factory=list, max_length=20)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class ListingCreate(_ItemCreate):
    """Listing creation — item fields plus expiration and tags."""
    meetup_location: str = Field(min_length=1, max_length=500)


class RequestCreate(_ItemCreate):
    """Request creation — expire_date is the need-by date."""


class ListingUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    meetup_location: str | None = Field(None, min_length=1, max_length=500)
    image: str | None = Field(None, max_length=2000)
    quantity: int | None = Field(None, ge=0)
    description: str | None = Field(None, max_length=5000)
    expire_date: str | None = Field(None, pattern=DATE_PATTERN)
    expire_time: str | None = Field(None, pattern=TIME_PATTERN)


class RequestUpdate(BaseModel):
    """Request edit; hide=True hides the request instead of editing it."""
    name: str | None = Field(None, min_length=1, max_length=200)
    quantity: int | None = Field(None, ge=0)
    image: str | None = Field(None, max_length=2000)
    description: str | None = Field(None, max_length=5000)
    expire_date: str | None = Field(None, pattern=DATE_PATTERN)
    expire_time: str | None = Field(None, pattern=TIME_PATTERN)
    hide: bool = False


class ListingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    author_id: UUID
    name: str
    meetup_location: str
    image: str | None = None
    quantity: int
    description: str | None = None
    hidden: bool
    created_at: datetime


class RequestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    author_id: UUID
    name: str
    quantity: int
    image: str | None = None
    description: str | None = None
    hidden: bool
    created_at: datetime


class ExpirationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    item_id: UUID
    item_kind: str
    expire_date: str
    expire_time: str
    expires_at: datetime


class ExpirationUpdate(BaseModel):
    expire_date: str = Field(pattern=DATE_PATTERN)
    expire_time: str | None = Field(None, pattern=TIME_PATTERN)


class ListingCreated(BaseModel):
    msg: str
    listing: ListingResponse
    expiration: ExpirationResponse
    untagged: list[str] = Field(default_factory=list)


class RequestCreated(BaseModel):
    msg: str
    request: RequestResponse
    expiration: ExpirationResponse
    untagged: list[str] = Field(default_factory=list)


class UserCounts(BaseModel):
    listings: int
    requests: int
