"""HTTP adapter for the remote listing service.

Talks to the listing service's REST API with a synchronous httpx client
and folds every transport and protocol error into a RemoteResult, so the
caching and search layers never handle httpx exceptions themselves.

Routes:
    GET    /api/v1/properties              bulk fetch (optional filters)
    GET    /api/v1/properties/search       criteria search
    GET    /api/v1/properties/featured     featured listings
    GET    /api/v1/properties/agent/{id}   listings by agent
    GET    /api/v1/properties/city/{id}    listings by city
    GET    /api/v1/properties/{id}         single listing
    POST   /api/v1/properties              create
    PUT    /api/v1/properties/{id}         update
    DELETE /api/v1/properties/{id}         delete
"""

import logging
from decimal import Decimal
from typing import Any, Optional
from uuid import UUID

import httpx
from pydantic import TypeAdapter, ValidationError

from ..config import Settings, config
from ..models.listing import ListingCreate, ListingSummary, ListingUpdate
from .base import ListingClient, RemoteFailure, RemoteResult, require

logger = logging.getLogger(__name__)

_LISTINGS = TypeAdapter(list[ListingSummary])


class HttpListingClient(ListingClient):
    """ListingClient backed by the listing service's REST API.

    Example:
        with HttpListingClient("http://localhost:8083") as client:
            result = client.fetch_all()
            if result.ok:
                print(len(result.value))

    Tests can pass ``transport=httpx.MockTransport(handler)`` to serve
    canned responses without a running service.
    """

    API_PREFIX = "/api/v1/properties"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        connect_timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
        settings: Optional[Settings] = None,
    ):
        """Initialize the client.

        Args:
            base_url: Listing service address (defaults to settings)
            timeout: Overall request timeout in seconds (defaults to settings)
            connect_timeout: Connect timeout in seconds (defaults to settings)
            transport: Optional httpx transport, mainly for tests
            settings: Settings to read defaults from (defaults to global config)
        """
        settings = settings or config
        self.base_url = (base_url or settings.listing_service_url).rstrip("/")
        self.timeout = httpx.Timeout(
            timeout or settings.request_timeout,
            connect=connect_timeout or settings.connect_timeout,
        )
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpListingClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    @staticmethod
    def _query_params(**params: Any) -> dict[str, str]:
        """Drop unset parameters and stringify ids and decimals."""
        return {
            key: str(value)
            for key, value in params.items()
            if value is not None and value != ""
        }

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, str]] = None,
        json: Optional[dict[str, Any]] = None,
    ) -> RemoteResult[httpx.Response]:
        """Issue one request and classify its outcome.

        Returns:
            RemoteResult holding the response for 2xx and 404 replies,
            or a RemoteFailure for everything else
        """
        url = f"{self.API_PREFIX}{path}"
        try:
            response = self._client.request(method, url, params=params, json=json)
        except (httpx.TimeoutException, httpx.NetworkError) as e:
            logger.debug(f"{method} {url} unreachable: {e!r}")
            return RemoteResult.failed(
                RemoteFailure.unreachable(f"{type(e).__name__}: {e}")
            )
        except httpx.HTTPError as e:
            logger.debug(f"{method} {url} transport error: {e!r}")
            return RemoteResult.failed(
                RemoteFailure.invalid_response(f"{type(e).__name__}: {e}")
            )

        if response.status_code == 404:
            return RemoteResult.success(response)
        if response.is_error:
            return RemoteResult.failed(
                RemoteFailure.status(
                    response.status_code, f"{method} {url}: {response.reason_phrase}"
                )
            )
        return RemoteResult.success(response)

    def _listings(
        self, method: str, path: str, params: Optional[dict[str, str]] = None
    ) -> RemoteResult[list[ListingSummary]]:
        result = self._request(method, path, params=params)
        if not result.ok:
            return RemoteResult.failed(result.failure)

        response = result.value
        if response.status_code == 404:
            return RemoteResult.failed(
                RemoteFailure.status(404, f"{method} {self.API_PREFIX}{path}: Not Found")
            )
        if not response.content:
            return RemoteResult.success([])
        try:
            data = response.json()
            if data is None:
                return RemoteResult.success([])
            return RemoteResult.success(_LISTINGS.validate_python(data))
        except (ValueError, ValidationError) as e:
            return RemoteResult.failed(RemoteFailure.invalid_response(str(e)))

    def fetch_all(
        self,
        text_term: Optional[str] = None,
        city_id: Optional[UUID] = None,
        type_id: Optional[UUID] = None,
        max_price: Optional[Decimal] = None,
    ) -> RemoteResult[list[ListingSummary]]:
        params = self._query_params(
            search=text_term, cityId=city_id, propertyTypeId=type_id, maxPrice=max_price
        )
        return self._listings("GET", "", params=params)

    def search(
        self,
        text_term: Optional[str] = None,
        city_id: Optional[UUID] = None,
        type_id: Optional[UUID] = None,
        max_price: Optional[Decimal] = None,
    ) -> RemoteResult[list[ListingSummary]]:
        params = self._query_params(
            search=text_term, cityId=city_id, propertyTypeId=type_id, maxPrice=max_price
        )
        return self._listings("GET", "/search", params=params)

    def fetch_featured(self) -> RemoteResult[list[ListingSummary]]:
        return self._listings("GET", "/featured")

    def fetch_by_agent(self, agent_id: UUID) -> RemoteResult[list[ListingSummary]]:
        require(agent_id, "agent_id")
        return self._listings("GET", f"/agent/{agent_id}")

    def fetch_by_city(self, city_id: UUID) -> RemoteResult[list[ListingSummary]]:
        require(city_id, "city_id")
        return self._listings("GET", f"/city/{city_id}")

    def fetch_by_id(self, listing_id: UUID) -> RemoteResult[Optional[ListingSummary]]:
        require(listing_id, "listing_id")
        result = self._request("GET", f"/{listing_id}")
        if not result.ok:
            return RemoteResult.failed(result.failure)

        response = result.value
        if response.status_code == 404 or not response.content:
            return RemoteResult.success(None)
        try:
            data = response.json()
            if data is None:
                return RemoteResult.success(None)
            return RemoteResult.success(ListingSummary.model_validate(data))
        except (ValueError, ValidationError) as e:
            return RemoteResult.failed(RemoteFailure.invalid_response(str(e)))

    def create(self, payload: ListingCreate) -> RemoteResult[ListingSummary]:
        require(payload, "payload")
        result = self._request("POST", "", json=payload.to_wire())
        if not result.ok:
            return RemoteResult.failed(result.failure)

        response = result.value
        if response.status_code == 404:
            return RemoteResult.failed(RemoteFailure.status(404, "POST: Not Found"))
        try:
            created = ListingSummary.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            return RemoteResult.failed(
                RemoteFailure.invalid_response(f"create returned no usable listing: {e}")
            )
        return RemoteResult.success(created)

    def update(self, listing_id: UUID, payload: ListingUpdate) -> RemoteResult[None]:
        require(listing_id, "listing_id")
        require(payload, "payload")
        return self._no_content("PUT", f"/{listing_id}", json=payload.to_wire())

    def delete(self, listing_id: UUID) -> RemoteResult[None]:
        require(listing_id, "listing_id")
        return self._no_content("DELETE", f"/{listing_id}")

    def _no_content(
        self, method: str, path: str, json: Optional[dict[str, Any]] = None
    ) -> RemoteResult[None]:
        result = self._request(method, path, json=json)
        if not result.ok:
            return RemoteResult.failed(result.failure)
        if result.value.status_code == 404:
            return RemoteResult.failed(
                RemoteFailure.status(404, f"{method} {self.API_PREFIX}{path}: Not Found")
            )
        return RemoteResult.success(None)
