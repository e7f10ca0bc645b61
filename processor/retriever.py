"""
Review Retriever - Fetch the reviews most relevant to a criterion for one product.
"""
from typing import List, Optional

from loguru import logger

from config import settings
from database.session import SessionFactory, get_session
from repositories import ReviewRepository
from .models import ContextSnippet


class RetrievalError(Exception):
    """Raised when the review search for a product fails."""
    pass


class ReviewRetriever:
    """
    Similarity search over a product's reviews.
    
    Each call opens its own session, so many products can be searched
    concurrently.
    """
    
    def __init__(
        self,
        session_factory: SessionFactory = get_session,
        k: Optional[int] = None,
        num_candidates: Optional[int] = None,
    ):
        self.session_factory = session_factory
        self.k = k or settings.RETRIEVAL_TOP_K
        self.num_candidates = num_candidates or settings.RETRIEVAL_NUM_CANDIDATES
    
    async def top_k(
        self,
        query_vector: List[float],
        product_id: str,
        k: Optional[int] = None,
        num_candidates: Optional[int] = None,
    ) -> List[ContextSnippet]:
        """
        Get up to k reviews of a product, most relevant first.
        
        Raises:
            RetrievalError: If the search fails
        """
        k = k or self.k
        num_candidates = num_candidates or self.num_candidates
        
        try:
            async with self.session_factory() as session:
                pairs = await ReviewRepository(session).search_similar(
                    query_vector,
                    product_id,
                    k=k,
                    num_candidates=num_candidates,
                )
        except Exception as e:
            raise RetrievalError(f"Review search failed for product {product_id}: {e}") from e
        
        snippets = [
            ContextSnippet(
                product_id=product_id,
                title=review.title,
                message=review.message or "",
                rating=review.rating,
                relevance=similarity,
            )
            for review, similarity in pairs
        ]
        logger.debug(f"Retrieved {len(snippets)} reviews for product {product_id}")
        return snippets
