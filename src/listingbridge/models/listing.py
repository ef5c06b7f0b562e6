"""Listing data models exchanged with the remote listing service."""

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

ACTIVE_STATUS = "ACTIVE"


class ListingSummary(BaseModel):
    """A listing as returned by the remote listing service.

    Field aliases follow the remote wire shape (camelCase). Only ``id`` is
    required; the service omits or nulls the rest freely, and a missing
    ``status`` means the listing is active.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        frozen=True,
        str_strip_whitespace=True,
    )

    # Identification
    id: UUID = Field(..., description="Listing identifier in the remote service")
    title: str | None = Field(default=None, description="Listing headline")
    description: str | None = Field(default=None, description="Free-form listing text")
    address: str | None = Field(default=None, description="Street address")

    # Pricing
    price: Decimal | None = Field(default=None, description="Asking price")

    # References owned by the surrounding application
    city_id: UUID | None = Field(default=None, alias="cityId")
    property_type_id: UUID | None = Field(default=None, alias="propertyTypeId")
    agent_id: UUID | None = Field(default=None, alias="agentId")

    # Property details
    bedrooms: int | None = Field(default=None, description="Number of bedrooms")
    bathrooms: int | None = Field(default=None, description="Number of bathrooms")
    area: Decimal | None = Field(
        default=None, alias="squareFeet", description="Living area"
    )

    featured: bool | None = Field(default=None, alias="isFeatured")
    status: str | None = Field(default=None, description="Listing status; None means active")

    image_urls: list[str] | None = Field(default=None, alias="imageUrls")
    features: list[str] | None = Field(default=None)
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")

    @property
    def is_active(self) -> bool:
        """A listing is active when its status is missing or ACTIVE."""
        return is_active(self)

    def to_wire(self) -> dict[str, Any]:
        """Serialize back to the remote JSON shape."""
        return self.model_dump(mode="json", by_alias=True)


def is_active(listing: ListingSummary) -> bool:
    """Check whether a listing counts as active.

    A null status is a deliberate default for active listings, not an
    error state.
    """
    return listing.status is None or listing.status == ACTIVE_STATUS


class ListingCreate(BaseModel):
    """Payload for creating a listing through the remote service.

    Prices go over the wire as decimal strings so cents survive exactly.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=2000)
    price: Decimal = Field(..., gt=0)
    agent_id: UUID = Field(..., alias="agentId")
    city_id: UUID = Field(..., alias="cityId")
    property_type_id: UUID = Field(..., alias="propertyTypeId")
    status: str = Field(default="DRAFT")
    bedrooms: int | None = Field(default=None, ge=0)
    bathrooms: int | None = Field(default=None, ge=0)
    square_feet: int | None = Field(default=None, ge=0, alias="squareFeet")
    address: str | None = None
    features: list[str] | None = None
    image_urls: list[str] | None = Field(default=None, alias="imageUrls")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ListingUpdate(BaseModel):
    """Partial update payload; unset fields are left untouched remotely."""

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=2000)
    price: Decimal | None = Field(default=None, gt=0)
    agent_id: UUID | None = Field(default=None, alias="agentId")
    city_id: UUID | None = Field(default=None, alias="cityId")
    property_type_id: UUID | None = Field(default=None, alias="propertyTypeId")
    status: str | None = None
    bedrooms: int | None = Field(default=None, ge=0)
    bathrooms: int | None = Field(default=None, ge=0)
    square_feet: int | None = Field(default=None, ge=0, alias="squareFeet")
    address: str | None = None
    features: list[str] | None = None

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class NamedRef(BaseModel):
    """A reference table row (city or property type) with its display name."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    name: str


class ListingStatistics(BaseModel):
    """Aggregate figures derived from the cached bulk snapshot."""

    total: int = Field(default=0, ge=0)
    active: int = Field(default=0, ge=0)
    featured: int = Field(default=0, ge=0, description="Active listings flagged featured")
    average_active_price: Decimal = Field(default=Decimal("0"))
    active_by_city: dict[UUID, int] = Field(default_factory=dict)
