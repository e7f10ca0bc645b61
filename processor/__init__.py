"""
Processor package for the Inventory Classification Engine.

Two independent parts:
- abc: Multi-criteria ABC classification (pure computation)
- Criterion scoring: derive a new criterion for every product
    - CriterionGenerator: draft a criterion from a user's description
    - ReviewRetriever: find the reviews relevant to a criterion
    - CriterionScorer: score one product from its reviews
    - CriterionScoringPipeline: run all of the above and persist the values

Main entry point for scoring: CriterionScoringPipeline
"""

from .models import (
    CriterionDefinition,
    ContextSnippet,
    PendingUpdate,
    ItemFailure,
    CriterionScoringResult,
    to_field_key,
)
from .output_parser import extract_json
from .scorer import CriterionScorer, CriterionScore, ScoringError
from .generator import CriterionGenerator, GeneratedCriterion, CriterionGenerationError
from .retriever import ReviewRetriever, RetrievalError
from .pipeline import (
    CriterionScoringPipeline,
    CriterionScoringError,
    InvalidCriterionError,
    MissingContextError,
)

__all__ = [
    # Pipeline
    "CriterionScoringPipeline",
    "CriterionScoringError",
    "InvalidCriterionError",
    "MissingContextError",
    # Components
    "CriterionGenerator",
    "GeneratedCriterion",
    "CriterionGenerationError",
    "CriterionScorer",
    "CriterionScore",
    "ScoringError",
    "ReviewRetriever",
    "RetrievalError",
    # Models
    "CriterionDefinition",
    "ContextSnippet",
    "PendingUpdate",
    "ItemFailure",
    "CriterionScoringResult",
    "to_field_key",
    # Utilities
    "extract_json",
]
