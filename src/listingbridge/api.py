"""FastAPI application exposing cached listing reads and search.

Run with: uvicorn --factory listingbridge.api:create_app_from_settings
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional
from uuid import UUID

from fastapi import APIRouter, FastAPI, HTTPException, Query, Request, Response

from .aggregator import ListingAggregator
from .clients.http import HttpListingClient
from .config import Settings, config
from .models.listing import ListingSummary
from .search.criteria import CriteriaTranslator, StaticNameIndex, build_criteria
from .search.orchestrator import SearchOrchestrator
from .storage.cache import InMemoryCache

logger = logging.getLogger(__name__)

router = APIRouter()


def _wire(listings: list[ListingSummary]) -> list[dict[str, Any]]:
    return [listing.to_wire() for listing in listings]


def _aggregator(request: Request) -> ListingAggregator:
    return request.app.state.aggregator


def _orchestrator(request: Request) -> SearchOrchestrator:
    return request.app.state.orchestrator


@router.get("/properties")
def list_properties(
    request: Request,
    search: Optional[str] = Query(default=None),
    city: Optional[str] = Query(default=None),
    type: Optional[str] = Query(default=None),
    max_price: Optional[str] = Query(default=None, alias="maxPrice"),
    min_price: Optional[str] = Query(default=None, alias="minPrice"),
    min_beds: Optional[str] = Query(default=None, alias="minBeds"),
    min_baths: Optional[str] = Query(default=None, alias="minBaths"),
    min_area: Optional[str] = Query(default=None, alias="minArea"),
    max_area: Optional[str] = Query(default=None, alias="maxArea"),
    featured: Optional[str] = Query(default=None),
):
    """Search listings; malformed numeric filters are ignored."""
    criteria = build_criteria(
        search=search,
        city=city,
        type=type,
        max_price=max_price,
        min_price=min_price,
        min_beds=min_beds,
        min_baths=min_baths,
        min_area=min_area,
        max_area=max_area,
        featured=featured,
    )
    return _wire(_orchestrator(request).search(criteria))


@router.get("/properties/featured")
def featured_properties(request: Request):
    return _wire(_orchestrator(request).featured())


@router.get("/properties/city/{city_id}")
def properties_by_city(request: Request, city_id: UUID):
    return _wire(_aggregator(request).get_by_city(city_id))


@router.get("/properties/agent/{agent_id}")
def properties_by_agent(request: Request, agent_id: UUID):
    """All of an agent's listings, via the dedicated endpoint with fallback."""
    return _wire(_aggregator(request).get_by_agent_direct(agent_id))


@router.get("/properties/type/{type_id}")
def properties_by_type(request: Request, type_id: UUID):
    return _wire(_aggregator(request).get_by_type(type_id))


@router.get("/properties/{listing_id}")
def property_detail(request: Request, listing_id: UUID):
    listing = _aggregator(request).get_by_id(listing_id)
    if listing is None:
        raise HTTPException(status_code=404, detail=f"Listing {listing_id} not found")
    return listing.to_wire()


@router.get("/statistics")
def statistics(request: Request):
    stats = _aggregator(request).statistics()
    return {
        "total": stats.total,
        "active": stats.active,
        "featured": stats.featured,
        "averageActivePrice": float(stats.average_active_price),
        "activeByCity": {str(k): v for k, v in stats.active_by_city.items()},
    }


@router.get("/reference/cities")
def reference_cities(request: Request):
    return _orchestrator(request).available_cities()


@router.get("/reference/property-types")
def reference_property_types(request: Request):
    return _orchestrator(request).available_property_types()


@router.post("/cache/evict", status_code=204)
def evict_cache(request: Request):
    _aggregator(request).evict_all()
    _orchestrator(request).evict_reference_names()
    logger.info("Listing caches evicted via API")
    return Response(status_code=204)


def create_app(
    aggregator: ListingAggregator,
    orchestrator: SearchOrchestrator,
    lifespan: Any = None,
) -> FastAPI:
    """Build the FastAPI application around already-wired services."""
    app = FastAPI(
        title="ListingBridge API",
        description="Cached, failure-tolerant reads over the remote listing service",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.aggregator = aggregator
    app.state.orchestrator = orchestrator
    app.include_router(router, prefix="/api")
    return app


def create_app_from_settings(settings: Optional[Settings] = None) -> FastAPI:
    """Wire an HTTP-backed application from settings.

    The reference tables live in the surrounding application, so city and
    property type names start empty here and every name filter resolves
    to no listings until indexes are supplied.
    """
    settings = settings or config
    client = HttpListingClient(settings=settings)
    aggregator = ListingAggregator(
        client, cache=InMemoryCache(settings.cache_ttl_seconds), settings=settings
    )
    translator = CriteriaTranslator(StaticNameIndex(), StaticNameIndex())
    orchestrator = SearchOrchestrator(client, aggregator, translator)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Serving listings from {client.base_url}")
        yield
        client.close()
        logger.info("Listing service client closed")

    return create_app(aggregator, orchestrator, lifespan=lifespan)
