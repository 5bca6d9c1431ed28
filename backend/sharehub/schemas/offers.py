"""Offer and Claim Schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class OfferCreate(BaseModel):
    request_id: UUID
    location: str = Field(min_length=1, max_length=500)
    image: str | None = Field(None, max_length=2000)
    message: str | None = Field(None, max_length=2000)


class OfferUpdate(BaseModel):
    location: str | None = Field(None, min_length=1, max_length=500)
    image: str | None = Field(None, max_length=2000)
    message: str | None = Field(None, max_length=2000)


class OfferAccept(BaseModel):
    offer_id: UUID


class OfferResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    request_id: UUID
    offerer_id: UUID
    location: str
    image: str | None = None
    message: str | None = None
    state: str
    created_at: datetime


class ClaimCreate(BaseModel):
    listing_id: UUID
    quantity: int = Field(ge=1)


class ClaimResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    listing_id: UUID
    claimer_id: UUID
    quantity: int
    created_at: datetime
