"""
Data models shared by the criterion scoring components.
"""
import re
from dataclasses import dataclass, field
from typing import Optional


def to_field_key(criteria_name: str) -> str:
    """
    Derive the product field key for a criterion name.
    
    "Supply Risk" -> "supplyRisk". Characters other than letters, digits and
    underscores are dropped.
    """
    key = re.sub(r'\s+', '', criteria_name or '')
    key = re.sub(r'[^A-Za-z0-9_]', '', key)
    return key[:1].lower() + key[1:]


@dataclass
class CriterionDefinition:
    """A criterion to be scored for every product."""
    field_key: str
    definition: str
    name: Optional[str] = None
    data_sources: list[str] = field(default_factory=list)
    
    def to_dict(self) -> dict:
        return {
            "criteriaField": self.field_key,
            "criteriaName": self.name or self.field_key,
            "criteriaDefinition": self.definition,
            "dataSources": self.data_sources,
        }


@dataclass
class ContextSnippet:
    """A review passage retrieved as evidence for one product."""
    product_id: str
    message: str
    title: Optional[str] = None
    rating: Optional[float] = None
    relevance: float = 0.0
    
    def to_prompt_dict(self) -> dict:
        """Fields shown to the model (relevance is internal)."""
        return {
            "title": self.title,
            "message": self.message,
            "score": self.rating,
        }


@dataclass
class PendingUpdate:
    """A criterion value waiting for the bulk commit."""
    product_id: str
    field_key: str
    value: float
    
    def to_dict(self) -> dict:
        return {
            "productId": self.product_id,
            "field": self.field_key,
            "value": self.value,
        }


@dataclass
class ItemFailure:
    """A product whose value could not be produced."""
    product_id: str
    stage: str  # FailureStage value
    error: str
    
    def to_dict(self) -> dict:
        return {
            "productId": self.product_id,
            "stage": self.stage,
            "error": self.error,
        }


@dataclass
class CriterionScoringResult:
    """Outcome of one criterion scoring run."""
    field_key: str
    succeeded: list[PendingUpdate] = field(default_factory=list)
    failed: list[ItemFailure] = field(default_factory=list)
    committed: int = 0
    
    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)
    
    @property
    def failure_ratio(self) -> float:
        """Share of products that failed; 0.0 when there were no products."""
        return len(self.failed) / self.total if self.total else 0.0
    
    def to_dict(self) -> dict:
        return {
            "criteriaField": self.field_key,
            "total": self.total,
            "committed": self.committed,
            "failureRatio": round(self.failure_ratio, 4),
            "succeeded": [u.to_dict() for u in self.succeeded],
            "failed": [f.to_dict() for f in self.failed],
        }
