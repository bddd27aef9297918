# konvata/routers/__init__.py
"""
API routers for Konvata.

- convert: currency conversion with live-rate fallback
- rates: live, historical-by-date and symbol list passthroughs
- history: simulated price series for the chart
"""

from konvata.routers.convert import router as convert_router
from konvata.routers.history import router as history_router
from konvata.routers.rates import router as rates_router

__all__ = [
    "convert_router",
    "rates_router",
    "history_router",
]
