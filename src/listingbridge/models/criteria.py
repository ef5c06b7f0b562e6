"""Search criteria models."""

import enum
from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class Dimension(enum.Flag):
    """Filterable dimensions of a listing search."""

    CITY = enum.auto()
    TYPE = enum.auto()
    MIN_PRICE = enum.auto()
    MAX_PRICE = enum.auto()
    BEDS = enum.auto()
    BATHS = enum.auto()
    AREA = enum.auto()
    FEATURED = enum.auto()
    TEXT = enum.auto()
    STATUS = enum.auto()


NO_DIMENSIONS = Dimension(0)


class SearchCriteria(BaseModel):
    """Caller-facing filter description using human-readable names.

    Every field is optional; a missing field places no constraint on that
    dimension.

    Example:
        criteria = SearchCriteria(
            search_term="loft",
            city_name="Sofia",
            max_price=Decimal("250000"),
            min_beds=2,
        )
    """

    model_config = ConfigDict(frozen=True)

    search_term: str | None = None
    city_name: str | None = None
    property_type_name: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    min_beds: int | None = None
    min_baths: int | None = None
    min_area: Decimal | None = None
    max_area: Decimal | None = None
    featured: bool | None = None

    def is_empty(self) -> bool:
        """True when no dimension is constrained."""
        return all(value is None for value in self.model_dump().values())


@dataclass(frozen=True)
class ResolvedCriteria:
    """Criteria with names translated to the remote service's identifiers.

    ``unresolved`` records the named dimensions the caller constrained but
    that matched no reference row; such dimensions match nothing.
    """

    search_term: str | None = None
    city_id: UUID | None = None
    property_type_id: UUID | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    min_beds: int | None = None
    min_baths: int | None = None
    min_area: Decimal | None = None
    max_area: Decimal | None = None
    featured: bool | None = None
    unresolved: Dimension = NO_DIMENSIONS

    def to_remote_query(self) -> dict:
        """Keyword arguments for the remote search and bulk fetch calls."""
        return {
            "text_term": self.search_term,
            "city_id": self.city_id,
            "type_id": self.property_type_id,
            "max_price": self.max_price,
        }
