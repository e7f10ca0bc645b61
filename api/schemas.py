"""
API request bodies.

Field names follow the camelCase wire format used by the dashboard.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from constants import DEFAULT_CRITERION, InventoryClass


class DefineCriterionRequest(BaseModel):
    """Free-text description of a criterion the user wants."""
    prompt: str = Field(..., description="What the new criterion should measure")


class ScoreCriterionRequest(BaseModel):
    """A criterion to score for every product."""
    criteriaField: str = Field(..., description="Product field key, e.g. supplyRisk")
    criteriaDefinition: str = Field(..., description="Definition including the scoring scale")
    criteriaName: Optional[str] = None
    dataSources: List[str] = Field(default_factory=list)


class ClassifyRequest(BaseModel):
    """Criteria and weights for an ABC classification of all products."""
    criteria: List[str] = Field(
        default_factory=lambda: [DEFAULT_CRITERION], description="Criterion field keys to classify on"
    )
    weights: Optional[Dict[str, float]] = Field(
        default=None, description="Per-criterion weights (default: equal)"
    )
    previous: Optional[Dict[str, InventoryClass]] = Field(
        default=None, description="Previous classification (productId -> class) for trends"
    )
