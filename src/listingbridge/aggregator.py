"""Bulk listing access with caching and derived views.

This module provides the ListingAggregator class, the single source of bulk
listing reads. It caches the full snapshot from the remote listing service,
derives per-city, per-agent and per-type views from it, and evicts the cache
whenever a mutation goes through the service successfully.
"""

import logging
from collections import Counter
from decimal import Decimal
from typing import Optional
from uuid import UUID

from .clients.base import (
    ErrorClass,
    ListingClient,
    RemoteFailure,
    RemoteResult,
    classify,
    require,
)
from .config import Settings, config
from .models.listing import (
    ListingCreate,
    ListingStatistics,
    ListingSummary,
    ListingUpdate,
    is_active,
)
from .storage.cache import (
    ALL_LISTINGS,
    FEATURED_LISTINGS,
    LISTING_NAMESPACES,
    Cache,
    InMemoryCache,
)

logger = logging.getLogger(__name__)


def log_remote_failure(
    operation: str, failure: RemoteFailure, known_defect_status: int
) -> ErrorClass:
    """Log a failed remote call at the level its class calls for.

    Returns:
        The ErrorClass of the failure
    """
    error_class = classify(failure, known_defect_status)
    if error_class is ErrorClass.UNREACHABLE:
        logger.warning(f"Listing service unreachable during {operation}: {failure}")
    elif error_class is ErrorClass.KNOWN_DEFECT:
        logger.warning(
            f"Listing service returned known-defect status during {operation}: {failure}"
        )
    else:
        logger.error(f"Listing service error during {operation}: {failure}")
    return error_class


class ListingAggregator:
    """Cached bulk reads and derived listing views.

    Derived views, counts and existence checks never call the remote
    service themselves; they all read through ``get_all()`` so the cached
    snapshot is the single source of truth for bulk reads.

    Example:
        aggregator = ListingAggregator(HttpListingClient())

        listings = aggregator.get_all()          # remote fetch, cached
        in_city = aggregator.get_by_city(city_id)  # served from cache

        aggregator.create_listing(payload)       # evicts on success
    """

    def __init__(
        self,
        client: ListingClient,
        cache: Optional[Cache] = None,
        known_defect_status: Optional[int] = None,
        settings: Optional[Settings] = None,
    ):
        """Initialize the aggregator.

        Args:
            client: Remote listing client
            cache: Cache to hold snapshots (defaults to an InMemoryCache
                   using the configured TTL)
            known_defect_status: Status code that triggers fallbacks
                                 (defaults to settings)
            settings: Settings to read defaults from (defaults to global config)
        """
        settings = settings or config
        self.client = client
        self.cache = cache if cache is not None else InMemoryCache(settings.cache_ttl_seconds)
        self.known_defect_status = (
            known_defect_status
            if known_defect_status is not None
            else settings.known_defect_status
        )

    # Bulk snapshot

    def get_all(self) -> list[ListingSummary]:
        """Return every listing, from cache when possible.

        An empty or failed fetch is never cached: it usually means a
        transient outage rather than a truly empty dataset.
        """
        cached = self.cache.get(ALL_LISTINGS)
        if cached is not None:
            return list(cached)

        logger.debug("Fetching all listings from listing service")
        result = self.client.fetch_all()
        if not result.ok:
            log_remote_failure("bulk fetch", result.failure, self.known_defect_status)
            return []

        listings = result.value or []
        logger.info(f"Retrieved {len(listings)} listings from listing service")
        if listings:
            self.cache.put(ALL_LISTINGS, tuple(listings))
        else:
            logger.warning("Listing service returned no listings; not caching")
        return list(listings)

    def get_active(self) -> list[ListingSummary]:
        """Every active listing in the snapshot."""
        return [listing for listing in self.get_all() if is_active(listing)]

    def evict_all(self) -> None:
        """Drop cached listing snapshots.

        Must be called after any successful create, update or delete made
        through the listing service outside this class.
        """
        logger.debug("Evicting cached listing snapshots")
        for key in LISTING_NAMESPACES:
            self.cache.evict(key)

    # Derived views

    def get_by_city(self, city_id: Optional[UUID]) -> list[ListingSummary]:
        """Active listings in a city."""
        if city_id is None:
            return []
        return [l for l in self.get_all() if l.city_id == city_id and is_active(l)]

    def get_by_agent(self, agent_id: Optional[UUID]) -> list[ListingSummary]:
        """Active listings of an agent."""
        if agent_id is None:
            return []
        return [l for l in self.get_all() if l.agent_id == agent_id and is_active(l)]

    def get_by_type(self, type_id: Optional[UUID]) -> list[ListingSummary]:
        """Active listings of a property type."""
        if type_id is None:
            return []
        return [
            l for l in self.get_all() if l.property_type_id == type_id and is_active(l)
        ]

    def has_active_in_city(self, city_id: Optional[UUID]) -> bool:
        return bool(self.get_by_city(city_id))

    def has_active_for_agent(self, agent_id: Optional[UUID]) -> bool:
        return bool(self.get_by_agent(agent_id))

    def has_active_of_type(self, type_id: Optional[UUID]) -> bool:
        return bool(self.get_by_type(type_id))

    def count_active_in_city(self, city_id: Optional[UUID]) -> int:
        return len(self.get_by_city(city_id))

    def count_active_for_agent(self, agent_id: Optional[UUID]) -> int:
        return len(self.get_by_agent(agent_id))

    def count_active_of_type(self, type_id: Optional[UUID]) -> int:
        return len(self.get_by_type(type_id))

    def statistics(self) -> ListingStatistics:
        """Summary figures over the cached snapshot."""
        listings = self.get_all()
        active = [l for l in listings if is_active(l)]
        prices = [l.price for l in active if l.price is not None]
        average = sum(prices, Decimal("0")) / len(prices) if prices else Decimal("0")
        by_city = Counter(l.city_id for l in active if l.city_id is not None)

        return ListingStatistics(
            total=len(listings),
            active=len(active),
            featured=sum(1 for l in active if l.featured),
            average_active_price=average,
            active_by_city=dict(by_city),
        )

    # Direct remote reads

    def get_by_agent_direct(self, agent_id: Optional[UUID]) -> list[ListingSummary]:
        """Listings of an agent via the dedicated endpoint, all statuses.

        If the endpoint fails with the known-defect status, falls back to
        filtering the bulk snapshot by agent in memory.
        """
        if agent_id is None:
            return []

        logger.debug(f"Fetching listings for agent: {agent_id}")
        result = self.client.fetch_by_agent(agent_id)
        if result.ok:
            listings = result.value or []
            logger.info(f"Retrieved {len(listings)} listings for agent {agent_id}")
            return list(listings)

        operation = f"agent listings fetch for {agent_id}"
        error_class = log_remote_failure(operation, result.failure, self.known_defect_status)
        if error_class is not ErrorClass.KNOWN_DEFECT:
            return []

        logger.warning(f"Falling back to bulk snapshot for agent {agent_id}")
        snapshot = self.get_all()
        if not snapshot:
            logger.warning("Fallback bulk fetch returned no listings")
            return []
        listings = [l for l in snapshot if l.agent_id == agent_id]
        logger.info(f"Fallback retrieved {len(listings)} listings for agent {agent_id}")
        return listings

    def get_featured(self) -> list[ListingSummary]:
        """Active featured listings, cached separately from the bulk snapshot."""
        cached = self.cache.get(FEATURED_LISTINGS)
        if cached is not None:
            return list(cached)

        result = self.client.fetch_featured()
        if not result.ok:
            log_remote_failure("featured fetch", result.failure, self.known_defect_status)
            return []

        listings = [l for l in (result.value or []) if is_active(l)]
        if listings:
            self.cache.put(FEATURED_LISTINGS, tuple(listings))
        return listings

    def get_by_id(self, listing_id: UUID) -> Optional[ListingSummary]:
        """A single listing, or None when missing or the fetch fails."""
        require(listing_id, "listing_id")
        result = self.client.fetch_by_id(listing_id)
        if not result.ok:
            log_remote_failure(
                f"fetch of listing {listing_id}", result.failure, self.known_defect_status
            )
            return None
        return result.value

    # Mutations

    def create_listing(self, payload: ListingCreate) -> RemoteResult[ListingSummary]:
        """Create a listing remotely and evict the snapshot on success."""
        require(payload, "payload")
        result = self.client.create(payload)
        if result.ok:
            logger.info(f"Created listing {result.value.id}")
            self.evict_all()
        else:
            log_remote_failure("listing create", result.failure, self.known_defect_status)
        return result

    def update_listing(
        self, listing_id: UUID, payload: ListingUpdate
    ) -> RemoteResult[None]:
        """Update a listing remotely and evict the snapshot on success."""
        require(listing_id, "listing_id")
        require(payload, "payload")
        result = self.client.update(listing_id, payload)
        if result.ok:
            logger.info(f"Updated listing {listing_id}")
            self.evict_all()
        else:
            log_remote_failure(
                f"update of listing {listing_id}", result.failure, self.known_defect_status
            )
        return result

    def delete_listing(self, listing_id: UUID) -> RemoteResult[None]:
        """Delete a listing remotely and evict the snapshot on success."""
        require(listing_id, "listing_id")
        result = self.client.delete(listing_id)
        if result.ok:
            logger.info(f"Deleted listing {listing_id}")
            self.evict_all()
        else:
            log_remote_failure(
                f"delete of listing {listing_id}", result.failure, self.known_defect_status
            )
        return result
