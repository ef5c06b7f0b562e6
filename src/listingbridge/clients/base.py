"""Call interface for the remote listing service.

This module defines the ListingClient abstract base class together with the
tagged result type every client call returns. Clients never raise for
remote failures: they report success, an unreachable service, or an error
status, and the layers above decide how to degrade.

Example usage:
    class MyListingClient(ListingClient):
        def fetch_all(self, text_term=None, city_id=None, type_id=None, max_price=None):
            try:
                return RemoteResult.success(self._load())
            except OSError as e:
                return RemoteResult.failed(RemoteFailure.unreachable(str(e)))
        ...
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Generic, Optional, TypeVar
from uuid import UUID

from ..models.listing import ListingCreate, ListingSummary, ListingUpdate

T = TypeVar("T")


class FailureKind(str, Enum):
    """How a remote call failed, as observed by the client."""

    UNREACHABLE = "unreachable"  # connection refused, DNS, timeouts
    STATUS = "status"  # non-2xx response
    INVALID_RESPONSE = "invalid_response"  # 2xx with an undecodable body


class ErrorClass(str, Enum):
    """How this layer reacts to a failure."""

    UNREACHABLE = "remote_unreachable"
    KNOWN_DEFECT = "remote_known_defect"
    OTHER = "remote_other_error"


@dataclass(frozen=True)
class RemoteFailure:
    """A failed remote call.

    Attributes:
        kind: Failure category reported by the client
        status_code: HTTP status for STATUS failures, otherwise None
        message: Human-readable detail for logs
    """

    kind: FailureKind
    status_code: Optional[int] = None
    message: str = ""

    @classmethod
    def unreachable(cls, message: str = "") -> "RemoteFailure":
        return cls(FailureKind.UNREACHABLE, message=message)

    @classmethod
    def status(cls, status_code: int, message: str = "") -> "RemoteFailure":
        return cls(FailureKind.STATUS, status_code=status_code, message=message)

    @classmethod
    def invalid_response(cls, message: str = "") -> "RemoteFailure":
        return cls(FailureKind.INVALID_RESPONSE, message=message)

    def __str__(self) -> str:
        if self.kind is FailureKind.STATUS:
            head = f"status {self.status_code}"
        else:
            head = self.kind.value
        return f"{head}: {self.message}" if self.message else head


@dataclass(frozen=True)
class RemoteResult(Generic[T]):
    """Outcome of a remote call: a value or a failure, never both."""

    value: Optional[T] = None
    failure: Optional[RemoteFailure] = None

    @classmethod
    def success(cls, value: T) -> "RemoteResult[T]":
        return cls(value=value)

    @classmethod
    def failed(cls, failure: RemoteFailure) -> "RemoteResult[T]":
        return cls(failure=failure)

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap(self) -> T:
        """Return the value or raise RemoteCallError for a failure."""
        if self.failure is not None:
            raise RemoteCallError(self.failure)
        return self.value  # type: ignore[return-value]


def classify(failure: RemoteFailure, known_defect_status: int) -> ErrorClass:
    """Map a client failure onto the degradation policy.

    Args:
        failure: The failure reported by a client call
        known_defect_status: Status code tied to the remote data-shape
                             defect; 0 disables the known-defect class

    Returns:
        The ErrorClass that decides whether a fallback is attempted
    """
    if failure.kind is FailureKind.UNREACHABLE:
        return ErrorClass.UNREACHABLE
    if (
        failure.kind is FailureKind.STATUS
        and known_defect_status
        and failure.status_code == known_defect_status
    ):
        return ErrorClass.KNOWN_DEFECT
    return ErrorClass.OTHER


class ListingClient(ABC):
    """Abstract call surface of the remote listing service.

    All listing-returning operations yield ``RemoteResult[list[ListingSummary]]``.
    Implementations must translate every transport or protocol error into
    a RemoteFailure instead of raising.
    """

    @abstractmethod
    def fetch_all(
        self,
        text_term: Optional[str] = None,
        city_id: Optional[UUID] = None,
        type_id: Optional[UUID] = None,
        max_price: Optional[Decimal] = None,
    ) -> RemoteResult[list[ListingSummary]]:
        """Bulk fetch, optionally narrowed by the service's own filters."""

    @abstractmethod
    def search(
        self,
        text_term: Optional[str] = None,
        city_id: Optional[UUID] = None,
        type_id: Optional[UUID] = None,
        max_price: Optional[Decimal] = None,
    ) -> RemoteResult[list[ListingSummary]]:
        """Criteria search; the service returns active listings only."""

    @abstractmethod
    def fetch_by_agent(self, agent_id: UUID) -> RemoteResult[list[ListingSummary]]:
        """Listings of one agent, all statuses."""

    @abstractmethod
    def fetch_by_city(self, city_id: UUID) -> RemoteResult[list[ListingSummary]]:
        """Listings located in one city."""

    @abstractmethod
    def fetch_featured(self) -> RemoteResult[list[ListingSummary]]:
        """Listings flagged as featured."""

    @abstractmethod
    def fetch_by_id(self, listing_id: UUID) -> RemoteResult[Optional[ListingSummary]]:
        """A single listing; ``success(None)`` when it does not exist."""

    @abstractmethod
    def create(self, payload: ListingCreate) -> RemoteResult[ListingSummary]:
        """Create a listing and return the stored representation."""

    @abstractmethod
    def update(self, listing_id: UUID, payload: ListingUpdate) -> RemoteResult[None]:
        """Apply a partial update."""

    @abstractmethod
    def delete(self, listing_id: UUID) -> RemoteResult[None]:
        """Delete a listing."""

    def close(self) -> None:
        """Release any held resources."""


class ListingBridgeError(Exception):
    """Base exception for errors raised to callers of this package."""


class MissingArgumentError(ListingBridgeError, ValueError):
    """Raised when a required argument is None."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name} is required")


class RemoteCallError(ListingBridgeError):
    """Raised by RemoteResult.unwrap() for a failed call.

    Attributes:
        failure: The RemoteFailure being surfaced
    """

    def __init__(self, failure: RemoteFailure):
        self.failure = failure
        super().__init__(f"[listing-service] {failure}")


def require(value: Any, name: str) -> Any:
    """Return ``value`` or raise MissingArgumentError when it is None."""
    if value is None:
        raise MissingArgumentError(name)
    return value
