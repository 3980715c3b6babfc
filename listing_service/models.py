"""Pydantic models for repository input and output shapes."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ListingStatus(str, Enum):
    """Lifecycle states of a listing."""

    NOT_STARTED = "not started"
    IN_PROGRESS = "in progress"
    COMPLETED = "completed"


class NewOwner(BaseModel):
    """Input model for creating an owner."""

    name: str = Field(..., description="Owner display name")
    email: str = Field(..., description="Contact email")
    phone: str = Field(..., description="Contact phone number")


class Owner(BaseModel):
    """Owner response model."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=24, max_length=24, description="Hex ObjectId")
    name: str
    email: str
    phone: str


class NewListing(BaseModel):
    """
    Input model for creating a listing.

    Status and creation time are assigned by the repository; any such fields
    supplied by the caller are dropped.
    """

    owner_id: str = Field(..., description="Identifier of the owning Owner")
    description: str
    location: str


class Listing(BaseModel):
    """Listing response model."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=24, max_length=24, description="Hex ObjectId")
    owner_id: str
    description: str
    location: str
    created_at: datetime
    status: ListingStatus = ListingStatus.NOT_STARTED
