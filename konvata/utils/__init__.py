# konvata/utils/__init__.py
"""
Cross-cutting utilities for Konvata.

- logging: Logging configuration with correlation ID support
- context: Request context management for correlation IDs

Usage:
    from konvata.utils import setup_logging
    from konvata.utils import get_correlation_id, set_correlation_id
"""

from konvata.utils.context import (
    get_correlation_id,
    set_correlation_id,
    clear_correlation_id,
)
from konvata.utils.logging import setup_logging

__all__ = [
    # Logging
    "setup_logging",
    # Context
    "get_correlation_id",
    "set_correlation_id",
    "clear_correlation_id",
]
