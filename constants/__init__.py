"""
Constants package for the Inventory Classification Engine.

Contains shared enums and the base criterion names.
"""

from .enums import (
    InventoryClass,
    Trend,
    DataSource,
    FailureStage,
    # Base criteria
    DEFAULT_CRITERION,
    PROTECTED_CRITERIA,
)

__all__ = [
    # Enums
    "InventoryClass",
    "Trend",
    "DataSource",
    "FailureStage",
    # Base criteria
    "DEFAULT_CRITERION",
    "PROTECTED_CRITERIA",
]
