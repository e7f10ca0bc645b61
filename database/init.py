"""
Schema creation and dataset import.

    python -m database.init --load data/dataset.json
"""
import json
from pathlib import Path

from loguru import logger
from sqlalchemy import select, func

from .models import Base, Review
from .session import create_tables, get_session


async def init_database_async() -> None:
    await create_tables()


async def get_table_counts_async() -> dict:
    """Row count per table, e.g. {"products": 120, "reviews": 3400, "criteria": 4}."""
    counts = {}
    async with get_session() as session:
        for table in Base.metadata.sorted_tables:
            result = await session.execute(select(func.count()).select_from(table))
            counts[table.name] = result.scalar_one()
    return counts


async def load_dataset_async(path: Path) -> dict:
    """
    Import criteria, products and reviews from a JSON export.

    Layout (field names as exported from the product catalogue):
        {
          "criteria": [{"field": "annualDollarUsage", "name": "Annual Dollar Usage",
                        "definition": "...", "dataSources": ["products"]}],
          "products": [{"productId": "P1", "name": "...", "category": "...",
                        "criteria": {"annualDollarUsage": 1200.5}}],
          "reviews":  [{"id": "R1", "productId": "P1", "title": "...", "message": "...",
                        "score": 4, "emb": [0.01, ...]}]
        }

    Criteria and products are upserted. Reviews already present (by id) are
    skipped, so the same file can be loaded twice.

    Returns:
        Counts: criteria, products, reviews, reviews_skipped
    """
    from repositories import CriterionRepository, ProductRepository, ReviewRepository

    data = json.loads(Path(path).read_text(encoding="utf-8"))
    stats = {"criteria": 0, "products": 0, "reviews": 0, "reviews_skipped": 0}

    async with get_session() as session:
        criteria = CriterionRepository(session)
        products = ProductRepository(session)
        reviews = ReviewRepository(session)

        for entry in data.get("criteria", []):
            await criteria.register(
                field_key=entry["field"],
                name=entry.get("name"),
                definition=entry.get("definition"),
                data_sources=entry.get("dataSources"),
            )
            stats["criteria"] += 1

        for entry in data.get("products", []):
            values = entry.get("criteria") or {}
            await products.upsert_product(
                product_id=str(entry["productId"]),
                name=entry.get("name"),
                category=entry.get("category"),
                description=entry.get("description"),
                criteria={key: float(value) for key, value in values.items()},
            )
            stats["products"] += 1

        for entry in data.get("reviews", []):
            review_id = str(entry["id"])
            if await reviews.exists(review_id):
                stats["reviews_skipped"] += 1
                continue
            await reviews.add(Review(
                id=review_id,
                product_id=str(entry["productId"]),
                title=entry.get("title"),
                message=entry.get("message"),
                rating=entry.get("score"),
                embedding=entry.get("emb"),
            ))
            stats["reviews"] += 1

    logger.info(
        f"Loaded {path}: {stats['criteria']} criteria, {stats['products']} products, "
        f"{stats['reviews']} reviews ({stats['reviews_skipped']} already present)"
    )
    return stats


def main():
    """Create the schema and optionally import a dataset."""
    import argparse
    import asyncio

    from utils import init_logging
    from .session import close_engine

    parser = argparse.ArgumentParser(description="Create the inventory database")
    parser.add_argument("--load", type=Path, help="JSON dataset to import")
    args = parser.parse_args()

    init_logging(app_name="init")

    async def _run() -> dict:
        try:
            await init_database_async()
            if args.load:
                await load_dataset_async(args.load)
            return await get_table_counts_async()
        finally:
            await close_engine()

    print(json.dumps(asyncio.run(_run()), indent=2))


if __name__ == "__main__":
    main()
