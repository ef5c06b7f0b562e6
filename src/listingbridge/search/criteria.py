"""Criteria building and name-to-identifier translation."""

import logging
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional, Protocol
from uuid import UUID

from ..models.criteria import NO_DIMENSIONS, Dimension, ResolvedCriteria, SearchCriteria
from ..models.listing import NamedRef

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"true", "yes", "1", "on"}
_FALSE_VALUES = {"false", "no", "0", "off"}

# Largest decimal exponent accepted for a numeric filter (about 10^15).
_MAX_MAGNITUDE = 15


class NameIndex(Protocol):
    """Name lookup over a reference table owned by the application."""

    def find_id(self, name: str) -> Optional[UUID]:
        """Return the id whose name matches case-insensitively, if any."""
        ...

    def names(self) -> list[str]:
        """Return every display name in the table."""
        ...


class StaticNameIndex:
    """In-memory NameIndex built from reference rows.

    Example:
        cities = StaticNameIndex([NamedRef(id=sofia_id, name="Sofia")])
        cities.find_id("  SOFIA ")  # -> sofia_id
    """

    def __init__(self, refs: Iterable[NamedRef] = ()):
        self._refs = list(refs)
        self._by_name = {_normalize(ref.name): ref.id for ref in self._refs}

    def find_id(self, name: str) -> Optional[UUID]:
        return self._by_name.get(_normalize(name))

    def names(self) -> list[str]:
        return [ref.name for ref in self._refs]


def _normalize(name: str) -> str:
    return name.strip().casefold()


def _blank(raw: Optional[str]) -> bool:
    return raw is None or not str(raw).strip()


def _parse_decimal(raw: Optional[str], field: str) -> Optional[Decimal]:
    """Parse a non-negative decimal, dropping the dimension when malformed."""
    if _blank(raw):
        return None
    text = str(raw).strip().replace(",", "")
    try:
        value = Decimal(text)
    except InvalidOperation:
        logger.warning(f"Ignoring malformed {field} filter: {raw!r}")
        return None
    if not value.is_finite() or value < 0 or value.adjusted() > _MAX_MAGNITUDE:
        logger.warning(f"Ignoring out-of-range {field} filter: {raw!r}")
        return None
    return value


def _parse_int(raw: Optional[str], field: str) -> Optional[int]:
    value = _parse_decimal(raw, field)
    if value is None:
        return None
    if value != value.to_integral_value():
        logger.warning(f"Ignoring non-integer {field} filter: {raw!r}")
        return None
    return int(value)


def _parse_bool(raw: Optional[str], field: str) -> Optional[bool]:
    if _blank(raw):
        return None
    text = str(raw).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    logger.warning(f"Ignoring malformed {field} filter: {raw!r}")
    return None


def _clean_text(raw: Optional[str]) -> Optional[str]:
    return None if _blank(raw) else str(raw).strip()


def build_criteria(
    search: Optional[str] = None,
    city: Optional[str] = None,
    type: Optional[str] = None,
    max_price: Optional[str] = None,
    min_price: Optional[str] = None,
    min_beds: Optional[str] = None,
    min_baths: Optional[str] = None,
    min_area: Optional[str] = None,
    max_area: Optional[str] = None,
    featured: Optional[str] = None,
) -> SearchCriteria:
    """Build SearchCriteria from raw request parameters.

    Blank values mean "no constraint". A value that cannot be parsed drops
    its dimension with a warning instead of failing the whole search.

    Example:
        build_criteria(search="loft", city="Sofia", max_price="250,000")
    """
    return SearchCriteria(
        search_term=_clean_text(search),
        city_name=_clean_text(city),
        property_type_name=_clean_text(type),
        min_price=_parse_decimal(min_price, "min_price"),
        max_price=_parse_decimal(max_price, "max_price"),
        min_beds=_parse_int(min_beds, "min_beds"),
        min_baths=_parse_int(min_baths, "min_baths"),
        min_area=_parse_decimal(min_area, "min_area"),
        max_area=_parse_decimal(max_area, "max_area"),
        featured=_parse_bool(featured, "featured"),
    )


class CriteriaTranslator:
    """Translate human-readable criteria into the remote service's identifiers.

    Names resolve case-insensitively. A name with no matching reference row
    becomes "no constraint" for the remote query but is recorded as
    unresolved, so local filtering excludes every listing for it.
    """

    def __init__(self, cities: NameIndex, property_types: NameIndex):
        self.cities = cities
        self.property_types = property_types

    def translate(self, criteria: SearchCriteria) -> ResolvedCriteria:
        unresolved = NO_DIMENSIONS

        city_id = None
        if criteria.city_name:
            city_id = self.cities.find_id(criteria.city_name)
            if city_id is None:
                logger.info(f"Unknown city in filter: {criteria.city_name!r}")
                unresolved |= Dimension.CITY

        type_id = None
        if criteria.property_type_name:
            type_id = self.property_types.find_id(criteria.property_type_name)
            if type_id is None:
                logger.info(
                    f"Unknown property type in filter: {criteria.property_type_name!r}"
                )
                unresolved |= Dimension.TYPE

        return ResolvedCriteria(
            search_term=criteria.search_term,
            city_id=city_id,
            property_type_id=type_id,
            min_price=criteria.min_price,
            max_price=criteria.max_price,
            min_beds=criteria.min_beds,
            min_baths=criteria.min_baths,
            min_area=criteria.min_area,
            max_area=criteria.max_area,
            featured=criteria.featured,
            unresolved=unresolved,
        )
