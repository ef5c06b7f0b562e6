"""Search orchestration with single-step fallback.

Each search goes through at most two remote calls:

1. The remote criteria search. On success only the residual dimensions
   are filtered locally.
2. On the known-defect status only, an unfiltered bulk fetch through the
   aggregator (so it is served from cache when warm), followed by full
   local filtering.

An unreachable service skips the fallback, since the bulk fetch would hit
the same dead service. Any other failure also resolves to an empty result.
"""

import logging
from typing import Optional

from ..aggregator import ListingAggregator, log_remote_failure
from ..clients.base import ErrorClass, ListingClient, require
from ..models.criteria import ResolvedCriteria, SearchCriteria
from ..models.listing import ListingSummary
from ..storage.cache import CITY_NAMES, PROPERTY_TYPE_NAMES, Cache
from .criteria import CriteriaTranslator, NameIndex
from .predicate import NONE_APPLIED, RESIDUAL_APPLIED, filter_listings

logger = logging.getLogger(__name__)


class SearchOrchestrator:
    """Run listing searches against the remote service with graceful degradation.

    Example:
        orchestrator = SearchOrchestrator(client, aggregator, translator)
        results = orchestrator.search(
            SearchCriteria(search_term="loft", city_name="Sofia")
        )
    """

    def __init__(
        self,
        client: ListingClient,
        aggregator: ListingAggregator,
        translator: CriteriaTranslator,
        cache: Optional[Cache] = None,
    ):
        """Initialize the orchestrator.

        Args:
            client: Remote listing client used for the primary search call
            aggregator: Aggregator providing the cached bulk snapshot
            translator: Criteria translator backed by the reference tables
            cache: Cache for reference name lists (defaults to the
                   aggregator's cache)
        """
        self.client = client
        self.aggregator = aggregator
        self.translator = translator
        self.cache = cache if cache is not None else aggregator.cache

    @property
    def known_defect_status(self) -> int:
        return self.aggregator.known_defect_status

    def search(self, criteria: SearchCriteria) -> list[ListingSummary]:
        """Search listings matching criteria.

        Unconstrained criteria are served from the bulk snapshot without
        touching the search endpoint.

        Returns:
            Matching listings; empty when the service fails
        """
        require(criteria, "criteria")
        logger.debug(f"Searching listings with criteria: {criteria}")

        if criteria.is_empty():
            logger.debug("No filters applied, serving active bulk snapshot")
            return self.aggregator.get_active()

        resolved = self.translator.translate(criteria)
        if resolved.unresolved:
            logger.info("Filter names an unknown city or type; no listings match")
            return []

        results = self._search_resolved(resolved)
        logger.info(f"Search matched {len(results)} listings")
        return results

    def search_text(self, term: Optional[str]) -> list[ListingSummary]:
        """Free-text search over title and description."""
        if term is None or not term.strip():
            return []
        return self.search(SearchCriteria(search_term=term.strip()))

    def _search_resolved(self, resolved: ResolvedCriteria) -> list[ListingSummary]:
        result = self.client.search(**resolved.to_remote_query())
        if result.ok:
            return filter_listings(result.value or [], resolved, RESIDUAL_APPLIED)

        error_class = log_remote_failure("search", result.failure, self.known_defect_status)
        if error_class is not ErrorClass.KNOWN_DEFECT:
            return []

        logger.warning("Search endpoint degraded; filtering bulk snapshot locally")
        snapshot = self.aggregator.get_all()
        if not snapshot:
            logger.warning("Fallback bulk fetch returned no listings")
            return []
        return filter_listings(snapshot, resolved, NONE_APPLIED)

    def featured(self) -> list[ListingSummary]:
        """Active featured listings."""
        return self.aggregator.get_featured()

    def available_cities(self) -> list[str]:
        """Sorted city names for filter pickers."""
        return self._cached_names(CITY_NAMES, self.translator.cities)

    def available_property_types(self) -> list[str]:
        """Sorted property type names for filter pickers."""
        return self._cached_names(PROPERTY_TYPE_NAMES, self.translator.property_types)

    def _cached_names(self, key: str, index: NameIndex) -> list[str]:
        cached = self.cache.get(key)
        if cached is not None:
            return list(cached)

        names = sorted(index.names(), key=str.casefold)
        if names:
            self.cache.put(key, tuple(names))
        return names

    def evict_reference_names(self) -> None:
        """Drop cached name lists after the reference tables change."""
        self.cache.evict(CITY_NAMES)
        self.cache.evict(PROPERTY_TYPE_NAMES)
