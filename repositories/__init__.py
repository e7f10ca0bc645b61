"""
SQLAlchemy-based Repositories

This package provides async repository pattern using SQLAlchemy ORM.

Usage:
    from repositories import ProductRepository
    from database import get_session
    
    async with get_session() as session:
        repo = ProductRepository(session)
        product_ids = await repo.get_all_ids()
"""

from .base import BaseRepository
from .products import ProductRepository
from .reviews import ReviewRepository, cosine_scores
from .criteria import CriterionRepository

__all__ = [
    "BaseRepository",
    "ProductRepository",
    "ReviewRepository",
    "CriterionRepository",
    "cosine_scores",
]
