"""
SQLAlchemy ORM Models

- Inventory: products, reviews and the criterion registry
"""

from .base import Base, TimestampMixin
from .inventory import Product, Review, CriterionRecord

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    # Inventory
    "Product",
    "Review",
    "CriterionRecord",
]
