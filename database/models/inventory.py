"""
Inventory Models

Products (SKUs) with their dynamic criterion values, the reviews used as
scoring evidence, and the registry of known criteria.
"""
from typing import Optional, List, Dict

from sqlalchemy import String, Float, Integer, Text, JSON, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin


class Product(Base, TimestampMixin):
    """
    An inventory item.
    
    Criterion values live in a JSON mapping (criterion field -> number) so
    new criteria can be added without a schema change. The set of known
    criteria is tracked separately in CriterionRecord.
    
    Examples of criteria:
        - annual_dollar_usage
        - lead_time_days
        - criticality (LLM-derived)
    """
    __tablename__ = "products"
    
    # productId
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    
    name: Mapped[Optional[str]] = mapped_column(String(300), nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    
    criteria: Mapped[Dict[str, float]] = mapped_column(JSON, nullable=False, default=dict)
    
    reviews: Mapped[List["Review"]] = relationship(
        "Review",
        back_populates="product",
        cascade="all, delete-orphan",
    )


class Review(Base):
    """
    A customer review of a product.
    
    The embedding is produced outside this system and stored as a JSON
    list of floats.
    """
    __tablename__ = "reviews"
    
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    
    product_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    
    title: Mapped[Optional[str]] = mapped_column(String(300), nullable=True)
    message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    rating: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    
    embedding: Mapped[Optional[List[float]]] = mapped_column(JSON, nullable=True)
    
    product: Mapped["Product"] = relationship("Product", back_populates="reviews")


class CriterionRecord(Base, TimestampMixin):
    """
    Registry of criteria known to the system.
    
    position keeps the registration order for display; membership is what
    matters for classification.
    """
    __tablename__ = "criteria"
    
    # Field key used in Product.criteria
    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    definition: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    data_sources: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    
    # True for criteria whose values were derived by the scoring pipeline
    generated: Mapped[bool] = mapped_column(default=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    
    __table_args__ = (
        Index('idx_criteria_position', 'position'),
    )
