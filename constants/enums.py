"""
Shared Enums

Application-wide enums used across multiple modules.
"""
from enum import Enum


class InventoryClass(str, Enum):
    """ABC classes. Lexical order matches priority (A is the most important)."""
    A = "A"
    B = "B"
    C = "C"


class Trend(str, Enum):
    """Movement of an item between two classification runs."""
    UP = "up"
    DOWN = "down"
    SAME = "same"


class DataSource(str, Enum):
    """Collections a generated criterion may draw its evidence from."""
    REVIEWS = "reviews"
    PRODUCTS = "products"


class FailureStage(str, Enum):
    """Step of the per-item scoring workflow where an item failed."""
    RETRIEVAL = "retrieval"
    SCORING = "scoring"


# Base criteria supplied with the dataset. These cannot be deleted.
DEFAULT_CRITERION = "annualDollarUsage"
PROTECTED_CRITERIA = frozenset({
    "annualDollarUsage",
    "averageUnitCost",
    "totalAnnualUsage",
    "leadTime",
})
