"""
API Routes - All endpoint definitions for the Inventory Classification Engine

Endpoints organized by:
- Health Check
- Products (criterion values per product)
- Criteria (registry, generation, scoring, deletion)
- Classification (multi-criteria ABC)
"""
import asyncio
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from constants import PROTECTED_CRITERIA, DataSource
from database import get_session_dependency
from llm import ConfigurationError
from processor import (
    CriterionDefinition,
    CriterionGenerator,
    CriterionGenerationError,
    CriterionScoringPipeline,
    CriterionScoringError,
    InvalidCriterionError,
)
from processor.classification import InventoryItem, InvalidCriteriaError, classify
from repositories import ProductRepository, CriterionRepository
from .schemas import DefineCriterionRequest, ScoreCriterionRequest, ClassifyRequest

router = APIRouter()


# ============================================================
# Dependencies
# ============================================================
def get_generator() -> CriterionGenerator:
    """Build a criterion generator for one request."""
    try:
        return CriterionGenerator()
    except ConfigurationError as e:
        logger.error(f"LLM not configured: {e}")
        raise HTTPException(status_code=500, detail=str(e))


def get_pipeline() -> CriterionScoringPipeline:
    """Build a scoring pipeline for one request."""
    try:
        return CriterionScoringPipeline()
    except ConfigurationError as e:
        logger.error(f"LLM not configured: {e}")
        raise HTTPException(status_code=500, detail=str(e))


def check_score_request(body: ScoreCriterionRequest) -> ScoreCriterionRequest:
    """Refuse base fields and unknown data sources before any client is built."""
    if body.criteriaField in PROTECTED_CRITERIA:
        raise HTTPException(status_code=403, detail=f"Cannot overwrite base field: {body.criteriaField}")

    allowed = {source.value for source in DataSource}
    unknown = [source for source in body.dataSources if source not in allowed]
    if unknown:
        raise HTTPException(status_code=400, detail=f"Unknown data sources: {', '.join(unknown)}")
    return body


# ============================================================
# Health Check
# ============================================================
@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "database": str(settings.DATABASE_PATH)
    }


# ============================================================
# Products
# ============================================================
@router.get("/products")
async def list_products(session: AsyncSession = Depends(get_session_dependency)):
    """List all products with their criterion values."""
    products = await ProductRepository(session).get_all()
    return {
        "products": [
            {
                "productId": p.id,
                "name": p.name,
                "category": p.category,
                "criteria": p.criteria or {},
            }
            for p in products
        ],
        "total": len(products),
    }


# ============================================================
# Criteria
# ============================================================
@router.get("/criteria")
async def list_criteria(session: AsyncSession = Depends(get_session_dependency)):
    """List registered criteria in registration order."""
    records = await CriterionRepository(session).list_ordered()
    return {
        "criteria": [
            {
                "criteriaField": r.id,
                "criteriaName": r.name,
                "criteriaDefinition": r.definition,
                "dataSources": r.data_sources or [],
                "generated": r.generated,
                "protected": r.id in PROTECTED_CRITERIA,
            }
            for r in records
        ]
    }


@router.post("/criteria/define")
async def define_criterion(
    body: DefineCriterionRequest,
    generator: CriterionGenerator = Depends(get_generator),
):
    """Draft a new criterion (name, definition, data sources) from a description."""
    try:
        generated = await asyncio.to_thread(generator.generate, body.prompt)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CriterionGenerationError as e:
        logger.error(f"Criterion generation failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate criteria definition")

    return generated.to_dict()


@router.post("/criteria/score")
async def score_criterion(
    body: ScoreCriterionRequest = Depends(check_score_request),
    pipeline: CriterionScoringPipeline = Depends(get_pipeline),
):
    """Score a criterion for every product and store the values."""
    definition = CriterionDefinition(
        field_key=body.criteriaField,
        definition=body.criteriaDefinition,
        name=body.criteriaName,
        data_sources=body.dataSources,
    )

    try:
        result = await pipeline.run(definition)
    except InvalidCriterionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CriterionScoringError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return {"success": True, **result.to_dict()}


@router.delete("/criteria/{field}")
async def delete_criterion(
    field: str,
    session: AsyncSession = Depends(get_session_dependency),
):
    """Remove a criterion from every product and from the registry."""
    if field in PROTECTED_CRITERIA:
        raise HTTPException(status_code=403, detail=f"Cannot delete base field: {field}")

    products_changed = await ProductRepository(session).unset_criterion(field)
    registered = await CriterionRepository(session).delete(field)

    if not products_changed and not registered:
        raise HTTPException(status_code=404, detail="Criterion not found")

    logger.info(f"Deleted criterion '{field}' from {products_changed} products")
    return {"success": True, "criteriaField": field, "productsUpdated": products_changed}


# ============================================================
# Classification
# ============================================================
@router.post("/classify")
async def classify_products(
    body: ClassifyRequest,
    session: AsyncSession = Depends(get_session_dependency),
):
    """Classify all stored products into A/B/C on the requested criteria."""
    products = await ProductRepository(session).get_all()
    items = [InventoryItem(product_id=p.id, criteria=dict(p.criteria or {})) for p in products]

    try:
        outcome = classify(
            items,
            body.criteria,
            weights=body.weights,
            previous={pid: cls.value for pid, cls in body.previous.items()} if body.previous else None,
            threshold_a=settings.ABC_THRESHOLD_A,
            threshold_b=settings.ABC_THRESHOLD_B,
        )
    except InvalidCriteriaError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return outcome.to_dict()
