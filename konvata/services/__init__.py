# konvata/services/__init__.py
"""
Service layer for Konvata.

- rates: coinlayer client, response cache and rate payload types
- conversion: conversion resolver with live-rate fallback
- price_history: simulated chart series
- exceptions: domain errors (no HTTP knowledge)
- constants: business constants and rate limits
"""

from konvata.services.conversion import (
    ConversionOutcome,
    ConversionPath,
    ConversionRequest,
    ConversionResolver,
)
from konvata.services.price_history import PriceHistory, PriceHistoryService
from konvata.services.rates import RateProviderClient, ResponseCache

__all__ = [
    "ConversionResolver",
    "ConversionRequest",
    "ConversionOutcome",
    "ConversionPath",
    "PriceHistoryService",
    "PriceHistory",
    "RateProviderClient",
    "ResponseCache",
]
