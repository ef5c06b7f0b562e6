"""Remote listing service clients.

Main Components:
    - ListingClient: Abstract call surface of the listing service
    - RemoteResult / RemoteFailure: Tagged outcome of every call
    - HttpListingClient: httpx-based adapter for the service's REST API

Example usage:
    from listingbridge.clients import HttpListingClient

    with HttpListingClient("http://localhost:8083") as client:
        result = client.search(text_term="loft")
"""

from .base import (
    ErrorClass,
    FailureKind,
    ListingBridgeError,
    ListingClient,
    MissingArgumentError,
    RemoteCallError,
    RemoteFailure,
    RemoteResult,
    classify,
    require,
)
from .http import HttpListingClient

__all__ = [
    "ErrorClass",
    "FailureKind",
    "HttpListingClient",
    "ListingBridgeError",
    "ListingClient",
    "MissingArgumentError",
    "RemoteCallError",
    "RemoteFailure",
    "RemoteResult",
    "classify",
    "require",
]
