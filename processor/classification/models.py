"""
Data models for ABC classification.
"""
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class InventoryItem:
    """An item and its raw criterion values."""
    product_id: str
    criteria: dict[str, float] = field(default_factory=dict)
    
    @classmethod
    def from_dict(cls, data: dict) -> "InventoryItem":
        """
        Build from an API/store record.
        
        Accepts `productId` or `product_id`. Criterion values are read from a
        nested `criteria` mapping when present, otherwise from the record's
        top-level numeric fields.
        """
        product_id = data.get("productId", data.get("product_id"))
        if product_id is None:
            raise ValueError(f"Item has no productId: {data}")
        
        if "criteria" in data:
            raw = data["criteria"] or {}
        else:
            raw = {
                k: v for k, v in data.items()
                if k not in ("productId", "product_id")
                and isinstance(v, (int, float)) and not isinstance(v, bool)
            }
        return cls(product_id=str(product_id), criteria={k: float(v) for k, v in raw.items()})


@dataclass
class NormalizedItem:
    """Criterion values of one item rescaled to [0, 1]."""
    product_id: str
    normalized: dict[str, float]


@dataclass
class ScoredItem:
    """An item with its weighted score and, once classified, its class."""
    product_id: str
    criteria: dict[str, float]
    weighted_score: float
    abc_class: Optional[str] = None
    
    def to_dict(self) -> dict:
        return {
            "productId": self.product_id,
            "criteria": self.criteria,
            "weightedScore": self.weighted_score,
            "class": self.abc_class,
        }


@dataclass
class ClassificationOutcome:
    """Result of one classification run."""
    items: list[ScoredItem]
    classes: dict[str, str]
    trends: dict[str, str] = field(default_factory=dict)
    
    def to_dict(self) -> dict:
        return {
            "items": [item.to_dict() for item in self.items],
            "classes": self.classes,
            "trends": self.trends,
        }
