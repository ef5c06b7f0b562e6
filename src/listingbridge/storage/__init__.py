"""Storage modules for cached listing data.

This package provides the in-process cache used to avoid redundant calls to
the remote listing service.
"""

from .cache import (
    ALL_LISTINGS,
    CITY_NAMES,
    FEATURED_LISTINGS,
    LISTING_NAMESPACES,
    PROPERTY_TYPE_NAMES,
    Cache,
    InMemoryCache,
)

__all__ = [
    "ALL_LISTINGS",
    "CITY_NAMES",
    "Cache",
    "FEATURED_LISTINGS",
    "InMemoryCache",
    "LISTING_NAMESPACES",
    "PROPERTY_TYPE_NAMES",
]
