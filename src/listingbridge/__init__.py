"""ListingBridge: caching and failure-tolerant search over a remote listing service."""

from listingbridge.aggregator import ListingAggregator
from listingbridge.clients import HttpListingClient, ListingClient, RemoteResult
from listingbridge.models import ListingSummary, SearchCriteria
from listingbridge.search import CriteriaTranslator, SearchOrchestrator, StaticNameIndex
from listingbridge.storage import InMemoryCache

__version__ = "0.1.0"

__all__ = [
    "CriteriaTranslator",
    "HttpListingClient",
    "InMemoryCache",
    "ListingAggregator",
    "ListingClient",
    "ListingSummary",
    "RemoteResult",
    "SearchCriteria",
    "SearchOrchestrator",
    "StaticNameIndex",
]
