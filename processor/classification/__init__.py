"""
ABC Module - Multi-criteria inventory classification

Components:
- normalize_data: Min-max normalization per criterion
- calculate_weighted_scores: Weighted sum of normalized criteria
- calculate_abc: Cumulative-share A/B/C assignment
- compare_results: Class movement between two runs
- classify: All of the above in one call
"""

from .models import InventoryItem, NormalizedItem, ScoredItem, ClassificationOutcome
from .config import THRESHOLD_A, THRESHOLD_B, validate_thresholds
from .analysis import (
    InvalidCriteriaError,
    default_weights,
    normalize_data,
    calculate_weighted_scores,
    calculate_abc,
    compare_results,
    classify,
)


__all__ = [
    # Models
    "InventoryItem",
    "NormalizedItem",
    "ScoredItem",
    "ClassificationOutcome",
    # Config
    "THRESHOLD_A",
    "THRESHOLD_B",
    "validate_thresholds",
    # Analysis
    "InvalidCriteriaError",
    "default_weights",
    "normalize_data",
    "calculate_weighted_scores",
    "calculate_abc",
    "compare_results",
    "classify",
]
