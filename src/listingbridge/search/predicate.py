"""Listing filter predicate shared by residual and full filtering.

The same ``matches`` function runs in two modes:

- Residual mode (``applied=RESIDUAL_APPLIED``): the remote search already
  filtered by city, type, price ceiling, text and active status, so only the
  remaining dimensions are checked.
- Full mode (``applied=NONE_APPLIED``): every dimension is checked against an
  unfiltered bulk snapshot, used when the remote search failed.

A listing with a null value on a constrained dimension never matches that
dimension. Status is the exception: null counts as active.
"""

from typing import Callable, Iterable

from ..models.criteria import NO_DIMENSIONS, Dimension, ResolvedCriteria
from ..models.listing import ListingSummary, is_active

RESIDUAL_APPLIED = (
    Dimension.CITY
    | Dimension.TYPE
    | Dimension.MAX_PRICE
    | Dimension.TEXT
    | Dimension.STATUS
)
NONE_APPLIED = NO_DIMENSIONS


def matches_city(item: ListingSummary, criteria: ResolvedCriteria) -> bool:
    if criteria.city_id is None:
        return True
    return item.city_id == criteria.city_id


def matches_type(item: ListingSummary, criteria: ResolvedCriteria) -> bool:
    if criteria.property_type_id is None:
        return True
    return item.property_type_id == criteria.property_type_id


def matches_min_price(item: ListingSummary, criteria: ResolvedCriteria) -> bool:
    if criteria.min_price is None:
        return True
    return item.price is not None and item.price >= criteria.min_price


def matches_max_price(item: ListingSummary, criteria: ResolvedCriteria) -> bool:
    if criteria.max_price is None:
        return True
    return item.price is not None and item.price <= criteria.max_price


def matches_beds(item: ListingSummary, criteria: ResolvedCriteria) -> bool:
    if criteria.min_beds is None:
        return True
    return item.bedrooms is not None and item.bedrooms >= criteria.min_beds


def matches_baths(item: ListingSummary, criteria: ResolvedCriteria) -> bool:
    if criteria.min_baths is None:
        return True
    return item.bathrooms is not None and item.bathrooms >= criteria.min_baths


def matches_area(item: ListingSummary, criteria: ResolvedCriteria) -> bool:
    if criteria.min_area is None and criteria.max_area is None:
        return True
    if item.area is None:
        return False
    if criteria.min_area is not None and item.area < criteria.min_area:
        return False
    if criteria.max_area is not None and item.area > criteria.max_area:
        return False
    return True


def matches_featured(item: ListingSummary, criteria: ResolvedCriteria) -> bool:
    if criteria.featured is None:
        return True
    return item.featured is not None and item.featured == criteria.featured


def matches_text(item: ListingSummary, criteria: ResolvedCriteria) -> bool:
    """Case-insensitive substring match on title or description."""
    if not criteria.search_term:
        return True
    term = criteria.search_term.casefold()
    return any(
        field is not None and term in field.casefold()
        for field in (item.title, item.description)
    )


def matches_status(item: ListingSummary, criteria: ResolvedCriteria) -> bool:
    return is_active(item)


_CHECKS: tuple[tuple[Dimension, Callable[[ListingSummary, ResolvedCriteria], bool]], ...] = (
    (Dimension.STATUS, matches_status),
    (Dimension.CITY, matches_city),
    (Dimension.TYPE, matches_type),
    (Dimension.MIN_PRICE, matches_min_price),
    (Dimension.MAX_PRICE, matches_max_price),
    (Dimension.BEDS, matches_beds),
    (Dimension.BATHS, matches_baths),
    (Dimension.AREA, matches_area),
    (Dimension.FEATURED, matches_featured),
    (Dimension.TEXT, matches_text),
)


def matches(
    item: ListingSummary,
    criteria: ResolvedCriteria,
    applied: Dimension = NONE_APPLIED,
) -> bool:
    """Check a listing against criteria, skipping dimensions already applied.

    Args:
        item: Listing to test
        criteria: Translated criteria
        applied: Dimensions the data source already filtered on

    Returns:
        True if the listing satisfies every dimension not in ``applied``
    """
    # A name that resolved to nothing matches nothing, whoever filtered.
    if criteria.unresolved:
        return False
    for dimension, check in _CHECKS:
        if dimension in applied:
            continue
        if not check(item, criteria):
            return False
    return True


def filter_listings(
    items: Iterable[ListingSummary],
    criteria: ResolvedCriteria,
    applied: Dimension = NONE_APPLIED,
) -> list[ListingSummary]:
    """Keep the listings that match, preserving input order."""
    return [item for item in items if matches(item, criteria, applied)]
