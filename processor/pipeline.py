"""
Criterion Scoring Pipeline - Derive a new criterion's value for every product.

Pipeline Flow:
1. Validate the criterion definition (before any external call)
2. Enumerate target products
3. Embed the criterion definition once
4. For every product, concurrently and with bounded width:
   - Retrieve its most relevant reviews
   - Ask the LLM scorer for a value
5. Collect per-product successes and failures (a failure never aborts the batch)
6. Bulk-write the successful values and register the criterion
"""
import asyncio
import json
from datetime import datetime
from typing import List, Optional, Union

from loguru import logger

from config import settings
from constants import FailureStage
from database.session import SessionFactory, get_session
from llm import EmbeddingClient, get_embedding_client, set_llm_context
from repositories import ProductRepository, CriterionRepository
from .models import CriterionDefinition, CriterionScoringResult, PendingUpdate, ItemFailure
from .retriever import ReviewRetriever
from .scorer import CriterionScorer


class InvalidCriterionError(ValueError):
    """Raised when a criterion definition is incomplete."""
    pass


class MissingContextError(Exception):
    """Raised when a product has no reviews to score from."""
    pass


class CriterionScoringError(Exception):
    """Raised when the run as a whole fails (embedding, enumeration or commit)."""
    pass


class CriterionScoringPipeline:
    """
    Scores one criterion for all products and persists the results.

    Per-product work is best effort: retrieval or scoring errors are logged
    and reported in the result's `failed` list, and the remaining products
    still get their values. The store is written once, after every product
    has finished.
    """

    def __init__(
        self,
        scorer: Optional[CriterionScorer] = None,
        embedder: Optional[EmbeddingClient] = None,
        retriever: Optional[ReviewRetriever] = None,
        session_factory: SessionFactory = get_session,
        max_concurrency: Optional[int] = None,
        require_context: Optional[bool] = None,
    ):
        """
        Initialize pipeline.

        Args:
            scorer: LLM scorer (built from settings if not provided)
            embedder: Embedding client (built from settings if not provided)
            retriever: Review retriever (default: search the configured database)
            session_factory: Source of database sessions
            max_concurrency: Products processed at once (default: settings.SCORING_MAX_CONCURRENCY)
            require_context: Fail products without reviews (default: settings.SCORING_REQUIRE_CONTEXT)
        """
        self.scorer = scorer or CriterionScorer()
        self.embedder = embedder or get_embedding_client()
        self.session_factory = session_factory
        self.retriever = retriever or ReviewRetriever(session_factory=session_factory)
        self.max_concurrency = max_concurrency or settings.SCORING_MAX_CONCURRENCY
        self.require_context = (
            settings.SCORING_REQUIRE_CONTEXT if require_context is None else require_context
        )

    async def run(self, criterion: CriterionDefinition) -> CriterionScoringResult:
        """
        Run the pipeline for one criterion.

        Returns:
            CriterionScoringResult. A run where every product failed is still
            returned normally with committed == 0; check failure_ratio to
            decide whether that is acceptable.

        Raises:
            InvalidCriterionError: Missing field key or definition
            CriterionScoringError: Product enumeration, embedding or the bulk write failed
        """
        self._validate(criterion)

        run_id = datetime.now().strftime("%Y%m%d_%H%M%S")
        set_llm_context(task_type="criterion_scoring", run_id=run_id)
        logger.info(f"=== Criterion scoring run {run_id}: '{criterion.field_key}' ===")

        result = CriterionScoringResult(field_key=criterion.field_key)

        # Step 1: Enumerate targets
        try:
            async with self.session_factory() as session:
                product_ids = await ProductRepository(session).get_all_ids()
        except Exception as e:
            logger.exception(f"Failed to list products: {e}")
            raise CriterionScoringError(f"Failed to list products: {e}") from e

        if not product_ids:
            logger.warning("No products to score")
            return result
        logger.info(f"Step 1: {len(product_ids)} products to score")

        # Step 2: Embed the criterion once for all products
        try:
            query_vector = await asyncio.to_thread(self.embedder.embed, criterion.definition)
        except Exception as e:
            logger.exception(f"Failed to embed criterion definition: {e}")
            raise CriterionScoringError(f"Failed to embed criterion definition: {e}") from e
        logger.info(f"Step 2: Criterion embedded ({len(query_vector)} dimensions)")

        # Step 3: Per-product fan-out, joined before anything is written
        logger.info(f"Step 3: Scoring products (max {self.max_concurrency} in flight)...")
        semaphore = asyncio.Semaphore(self.max_concurrency)
        outcomes = await asyncio.gather(*(
            self._process_product(product_id, criterion, query_vector, semaphore)
            for product_id in product_ids
        ))

        for outcome in outcomes:
            if isinstance(outcome, PendingUpdate):
                result.succeeded.append(outcome)
            else:
                result.failed.append(outcome)

        logger.info(f"Scoring complete: {len(result.succeeded)} scored, {len(result.failed)} failed")

        # Step 4: Bulk commit
        if not result.succeeded:
            logger.warning(f"No values produced for '{criterion.field_key}'; nothing written")
            return result

        result.committed = await self._commit(criterion, result.succeeded)
        logger.info(f"Step 4: Committed '{criterion.field_key}' for {result.committed} products")

        return result

    def _validate(self, criterion: CriterionDefinition) -> None:
        if not criterion.field_key or not criterion.field_key.strip():
            raise InvalidCriterionError("Missing criteria details: field key is required")
        if not criterion.definition or not criterion.definition.strip():
            raise InvalidCriterionError("Missing criteria details: definition is required")

    async def _process_product(
        self,
        product_id: str,
        criterion: CriterionDefinition,
        query_vector: List[float],
        semaphore: asyncio.Semaphore,
    ) -> Union[PendingUpdate, ItemFailure]:
        """Retrieve and score one product. Never raises."""
        async with semaphore:
            try:
                snippets = await self.retriever.top_k(query_vector, product_id)
                if not snippets and self.require_context:
                    raise MissingContextError(f"No reviews found for product {product_id}")
            except Exception as e:
                logger.warning(f"Retrieval failed for product {product_id}: {e}")
                return ItemFailure(product_id, FailureStage.RETRIEVAL.value, str(e))

            try:
                value = await asyncio.to_thread(self.scorer.score, criterion.definition, snippets)
            except Exception as e:
                logger.warning(f"Scoring failed for product {product_id}: {e}")
                return ItemFailure(product_id, FailureStage.SCORING.value, str(e))

        logger.debug(f"Product {product_id}: {criterion.field_key}={value}")
        return PendingUpdate(product_id=product_id, field_key=criterion.field_key, value=value)

    async def _commit(
        self,
        criterion: CriterionDefinition,
        updates: List[PendingUpdate],
    ) -> int:
        """Write all values and register the criterion in one transaction."""
        try:
            async with self.session_factory() as session:
                committed = await ProductRepository(session).bulk_set_criterion(
                    criterion.field_key,
                    {u.product_id: u.value for u in updates},
                )
                await CriterionRepository(session).register(
                    field_key=criterion.field_key,
                    name=criterion.name,
                    definition=criterion.definition,
                    data_sources=criterion.data_sources,
                    generated=True,
                )
        except Exception as e:
            logger.exception(f"Bulk write failed for '{criterion.field_key}': {e}")
            raise CriterionScoringError(f"Bulk write failed: {e}") from e

        return committed


# ============================================
# CLI ENTRY POINT
# ============================================

def main():
    """Run the criterion scoring pipeline from command line."""
    import argparse

    from database.session import init_engine, close_engine
    from utils import init_logging

    parser = argparse.ArgumentParser(description="Score a criterion for every product")
    parser.add_argument("--field", required=True, help="Product field key, e.g. supplyRisk")
    parser.add_argument("--definition", required=True, help="Criterion definition with its scoring scale")
    parser.add_argument("--name", help="Display name (defaults to the field key)")
    parser.add_argument("--max-concurrency", type=int, help="Products processed at once")

    args = parser.parse_args()
    init_logging(app_name="scoring")

    async def _run() -> CriterionScoringResult:
        await init_engine()
        try:
            pipeline = CriterionScoringPipeline(max_concurrency=args.max_concurrency)
            return await pipeline.run(CriterionDefinition(
                field_key=args.field,
                definition=args.definition,
                name=args.name,
            ))
        finally:
            await close_engine()

    result = asyncio.run(_run())
    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False, default=str))


if __name__ == "__main__":
    main()
