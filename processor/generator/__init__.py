"""
Generator Module - LLM drafting of new criteria

Components:
- CriterionGenerator: Prompt, retry and validation logic
- GeneratedCriterion: A complete generated criterion
- CriterionGenerationError: Raised when no complete criterion is produced
"""

from .models import GeneratedCriterion
from .generator import CriterionGenerator, CriterionGenerationError


__all__ = [
    "CriterionGenerator",
    "GeneratedCriterion",
    "CriterionGenerationError",
]
