"""Data models for ListingBridge."""

from listingbridge.models.criteria import (
    NO_DIMENSIONS,
    Dimension,
    ResolvedCriteria,
    SearchCriteria,
)
from listingbridge.models.listing import (
    ACTIVE_STATUS,
    ListingCreate,
    ListingStatistics,
    ListingSummary,
    ListingUpdate,
    NamedRef,
    is_active,
)

__all__ = [
    "ACTIVE_STATUS",
    "Dimension",
    "ListingCreate",
    "ListingStatistics",
    "ListingSummary",
    "ListingUpdate",
    "NO_DIMENSIONS",
    "NamedRef",
    "ResolvedCriteria",
    "SearchCriteria",
    "is_active",
]
