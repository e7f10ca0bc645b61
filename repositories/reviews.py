"""
Review Repository

Handles database operations for reviews, including the per-product
similarity search used to pick scoring evidence.
"""
from typing import List, Sequence, Tuple

import numpy as np
from sqlalchemy import select

from database.models import Review
from .base import BaseRepository


def _l2_normalise(matrix: np.ndarray) -> np.ndarray:
    norms = np.linalg.norm(matrix, axis=-1, keepdims=True)
    norms[norms == 0] = 1.0
    return matrix / norms


def cosine_scores(query: Sequence[float], vectors: Sequence[Sequence[float]]) -> np.ndarray:
    """
    Cosine similarity of `query` against each row of `vectors`.

    Zero vectors score 0.0.

    Raises:
        ValueError: If the rows and the query differ in dimension
    """
    matrix = np.asarray(vectors, dtype="float32")
    q = np.asarray(query, dtype="float32")

    if matrix.size == 0:
        return np.zeros(len(vectors), dtype="float32")
    if matrix.ndim != 2 or matrix.shape[1] != q.shape[0]:
        raise ValueError(f"Embedding shape {matrix.shape} does not match query dimension {q.shape[0]}")

    return _l2_normalise(matrix) @ _l2_normalise(q)


class ReviewRepository(BaseRepository[Review]):
    """Repository for review operations."""

    model = Review

    async def search_similar(
        self,
        query_vector: List[float],
        product_id: str,
        k: int = 5,
        num_candidates: int = 50,
    ) -> List[Tuple[Review, float]]:
        """
        Nearest-neighbour search scoped to one product.

        Every embedded review of the product is scored against
        `query_vector`; the `num_candidates` most similar form the pool and
        the best `k` of it are returned with their similarity.

        Args:
            query_vector: Query embedding
            product_id: Product to search within
            k: Number of results to return
            num_candidates: Size of the candidate pool kept before truncation

        Returns:
            (review, similarity) pairs, most similar first
        """
        stmt = (
            select(Review)
            .where(
                Review.product_id == product_id,
                Review.embedding.is_not(None),
            )
            .order_by(Review.id)
        )
        result = await self.session.execute(stmt)
        reviews = result.scalars().all()
        if not reviews or k <= 0:
            return []

        scores = cosine_scores(query_vector, [review.embedding for review in reviews])

        # Stable sort keeps id order among equal scores
        order = np.argsort(-scores, kind="stable")[:max(num_candidates, k)]
        return [(reviews[i], float(scores[i])) for i in order[:k]]
