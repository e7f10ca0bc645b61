"""
Scorer Module - LLM scoring of items against a criterion

Components:
- CriterionScorer: Builds the scoring prompt and parses the numeric reply
- CriterionScore: Parsed score with its raw reply
- ScoringError: Raised when no usable score comes back
"""

from .models import CriterionScore
from .scorer import CriterionScorer, ScoringError


__all__ = [
    "CriterionScorer",
    "CriterionScore",
    "ScoringError",
]
