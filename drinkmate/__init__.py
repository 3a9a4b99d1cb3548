"""
DrinkMate: fuzzy drink search, Widmark-based BAC accumulation and risk patterns.
Use from project root: python -m drinkmate.main
"""

from drinkmate.calculations import (
    ELIMINATION_PER_HOUR,
    ETHANOL_DENSITY,
    SAFE_THRESHOLD_BAC,
    compute_contribution,
    sex_factor,
    time_until_safe,
)
from drinkmate.catalog import CATALOG, CatalogEntry, get_entry, search
from drinkmate.risk import RiskAssessment, RiskLevel, classify, insights
from drinkmate.session import DrinkEvent, Session, apply_event, remove_event
from drinkmate.similarity import distance, rank, similarity

__all__ = [
    "CATALOG",
    "CatalogEntry",
    "DrinkEvent",
    "ELIMINATION_PER_HOUR",
    "ETHANOL_DENSITY",
    "RiskAssessment",
    "RiskLevel",
    "SAFE_THRESHOLD_BAC",
    "Session",
    "apply_event",
    "classify",
    "compute_contribution",
    "distance",
    "get_entry",
    "insights",
    "rank",
    "remove_event",
    "search",
    "sex_factor",
    "similarity",
    "time_until_safe",
]
