"""Listing search: criteria translation, filtering, and orchestration."""

from .criteria import CriteriaTranslator, NameIndex, StaticNameIndex, build_criteria
from .orchestrator import SearchOrchestrator
from .predicate import NONE_APPLIED, RESIDUAL_APPLIED, filter_listings, matches

__all__ = [
    "CriteriaTranslator",
    "NONE_APPLIED",
    "NameIndex",
    "RESIDUAL_APPLIED",
    "SearchOrchestrator",
    "StaticNameIndex",
    "build_criteria",
    "filter_listings",
    "matches",
]
