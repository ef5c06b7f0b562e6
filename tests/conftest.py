"""Pytest fixtures and test utilities."""

from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

import pytest

from listingbridge.aggregator import ListingAggregator
from listingbridge.clients.base import ListingClient, RemoteFailure, RemoteResult
from listingbridge.config import Settings
from listingbridge.models.listing import (
    ListingCreate,
    ListingSummary,
    ListingUpdate,
    NamedRef,
)
from listingbridge.search.criteria import CriteriaTranslator, StaticNameIndex
from listingbridge.search.orchestrator import SearchOrchestrator
from listingbridge.storage.cache import InMemoryCache

SOFIA = UUID("11111111-1111-1111-1111-111111111111")
PLOVDIV = UUID("22222222-2222-2222-2222-222222222222")
APARTMENT = UUID("33333333-3333-3333-3333-333333333333")
HOUSE = UUID("44444444-4444-4444-4444-444444444444")
AGENT_A = UUID("55555555-5555-5555-5555-555555555555")
AGENT_B = UUID("66666666-6666-6666-6666-666666666666")


class FakeListingClient(ListingClient):
    """Recording ListingClient double.

    Each operation returns the scripted RemoteResult for that operation
    (or a default success) and records its call arguments in ``calls``.
    """

    def __init__(self, listings: Optional[list[ListingSummary]] = None):
        self.listings = list(listings or [])
        self.results: dict[str, RemoteResult] = {}
        self.calls: dict[str, list[tuple]] = {}

    def script(self, operation: str, result: RemoteResult) -> None:
        self.results[operation] = result

    def fail(self, operation: str, failure: RemoteFailure) -> None:
        self.results[operation] = RemoteResult.failed(failure)

    def count(self, operation: str) -> int:
        return len(self.calls.get(operation, []))

    def _record(self, operation: str, *args) -> Optional[RemoteResult]:
        self.calls.setdefault(operation, []).append(args)
        return self.results.get(operation)

    def fetch_all(self, text_term=None, city_id=None, type_id=None, max_price=None):
        scripted = self._record("fetch_all", text_term, city_id, type_id, max_price)
        return scripted or RemoteResult.success(list(self.listings))

    def search(self, text_term=None, city_id=None, type_id=None, max_price=None):
        scripted = self._record("search", text_term, city_id, type_id, max_price)
        if scripted:
            return scripted
        # Emulate the service: active listings narrowed by its own filters.
        found = [
            l
            for l in self.listings
            if l.is_active
            and (city_id is None or l.city_id == city_id)
            and (type_id is None or l.property_type_id == type_id)
            and (max_price is None or (l.price is not None and l.price <= max_price))
            and (
                not text_term
                or text_term.lower() in (l.title or "").lower()
                or text_term.lower() in (l.description or "").lower()
            )
        ]
        return RemoteResult.success(found)

    def fetch_by_agent(self, agent_id):
        scripted = self._record("fetch_by_agent", agent_id)
        return scripted or RemoteResult.success(
            [l for l in self.listings if l.agent_id == agent_id]
        )

    def fetch_by_city(self, city_id):
        scripted = self._record("fetch_by_city", city_id)
        return scripted or RemoteResult.success(
            [l for l in self.listings if l.city_id == city_id]
        )

    def fetch_featured(self):
        scripted = self._record("fetch_featured")
        return scripted or RemoteResult.success([l for l in self.listings if l.featured])

    def fetch_by_id(self, listing_id):
        scripted = self._record("fetch_by_id", listing_id)
        if scripted:
            return scripted
        for listing in self.listings:
            if listing.id == listing_id:
                return RemoteResult.success(listing)
        return RemoteResult.success(None)

    def create(self, payload: ListingCreate):
        scripted = self._record("create", payload)
        if scripted:
            return scripted
        created = ListingSummary(
            id=uuid4(),
            title=payload.title,
            price=payload.price,
            city_id=payload.city_id,
            property_type_id=payload.property_type_id,
            agent_id=payload.agent_id,
            status=payload.status,
        )
        self.listings.append(created)
        return RemoteResult.success(created)

    def update(self, listing_id, payload: ListingUpdate):
        scripted = self._record("update", listing_id, payload)
        return scripted or RemoteResult.success(None)

    def delete(self, listing_id):
        scripted = self._record("delete", listing_id)
        if scripted:
            return scripted
        self.listings = [l for l in self.listings if l.id != listing_id]
        return RemoteResult.success(None)


def make_listing(**overrides) -> ListingSummary:
    """Build a listing with sensible defaults."""
    data = {
        "id": uuid4(),
        "title": "Bright apartment",
        "description": "Close to the center",
        "price": Decimal("150000"),
        "city_id": SOFIA,
        "property_type_id": APARTMENT,
        "agent_id": AGENT_A,
        "bedrooms": 2,
        "bathrooms": 1,
        "area": Decimal("75"),
        "featured": False,
        "status": "ACTIVE",
    }
    data.update(overrides)
    return ListingSummary(**data)


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment."""
    return Settings(_env_file=None, known_defect_status=500, cache_ttl_seconds=None)


@pytest.fixture
def sample_listings() -> list[ListingSummary]:
    """A small mixed dataset across cities, types, agents and statuses."""
    return [
        make_listing(
            title="Sunny loft downtown",
            description="Open-plan loft with terrace",
            price=Decimal("240000"),
            bedrooms=1,
            area=Decimal("65.5"),
            featured=True,
        ),
        make_listing(
            title="Family house with garden",
            description="Quiet street",
            price=Decimal("420000"),
            property_type_id=HOUSE,
            bedrooms=4,
            bathrooms=2,
            area=Decimal("180"),
            agent_id=AGENT_B,
            status=None,
        ),
        make_listing(
            title="Old town studio",
            price=Decimal("90000"),
            city_id=PLOVDIV,
            bedrooms=1,
            area=None,
            featured=None,
        ),
        make_listing(
            title="Sold penthouse loft",
            price=Decimal("500000"),
            bedrooms=3,
            bathrooms=2,
            featured=True,
            status="SOLD",
        ),
        make_listing(
            title="Plovdiv family house",
            price=Decimal("310000"),
            city_id=PLOVDIV,
            property_type_id=HOUSE,
            bedrooms=3,
            bathrooms=2,
            area=Decimal("140"),
            agent_id=AGENT_B,
        ),
    ]


@pytest.fixture
def fake_client(sample_listings: list[ListingSummary]) -> FakeListingClient:
    return FakeListingClient(sample_listings)


@pytest.fixture
def cache() -> InMemoryCache:
    return InMemoryCache()


@pytest.fixture
def aggregator(
    fake_client: FakeListingClient, cache: InMemoryCache, settings: Settings
) -> ListingAggregator:
    return ListingAggregator(fake_client, cache=cache, settings=settings)


@pytest.fixture
def translator() -> CriteriaTranslator:
    cities = StaticNameIndex(
        [NamedRef(id=SOFIA, name="Sofia"), NamedRef(id=PLOVDIV, name="Plovdiv")]
    )
    types = StaticNameIndex(
        [NamedRef(id=APARTMENT, name="Apartment"), NamedRef(id=HOUSE, name="House")]
    )
    return CriteriaTranslator(cities, types)


@pytest.fixture
def orchestrator(
    fake_client: FakeListingClient,
    aggregator: ListingAggregator,
    translator: CriteriaTranslator,
) -> SearchOrchestrator:
    return SearchOrchestrator(fake_client, aggregator, translator)
