"""
Utilities module for the Inventory Classification Engine.
"""
from .logger import logger, init_logging, setup_logging

__all__ = ["logger", "init_logging", "setup_logging"]
