"""
Database Module - Inventory Classification Engine

Structure:
    database/
    ├── __init__.py      # This file - public API
    ├── session.py       # Async engine and sessions
    ├── init.py          # Schema creation and dataset import
    └── models/          # ORM models
        ├── base.py
        └── inventory.py

Usage:
    from database import get_session
    from repositories import ProductRepository

    async with get_session() as session:
        product_ids = await ProductRepository(session).get_all_ids()
"""

from .models import (
    Base,
    TimestampMixin,
    Product,
    Review,
    CriterionRecord,
)

from .session import (
    SessionFactory,
    init_engine,
    close_engine,
    create_tables,
    get_session,
    get_session_dependency,
)

from .init import (
    init_database_async,
    get_table_counts_async,
    load_dataset_async,
)

__all__ = [
    # Models
    "Base",
    "TimestampMixin",
    "Product",
    "Review",
    "CriterionRecord",
    # Sessions
    "SessionFactory",
    "init_engine",
    "close_engine",
    "create_tables",
    "get_session",
    "get_session_dependency",
    # Init
    "init_database_async",
    "get_table_counts_async",
    "load_dataset_async",
]
