# konvata/services/constants.py
"""
Centralized constants for Konvata services.

Usage:
    from konvata.services.constants import USD, RATE_LIMIT_CONVERT
"""


# =============================================================================
# CURRENCIES
# =============================================================================

# Upstream live rates are always quoted in USD per unit of the asset,
# whatever target the caller asks for
USD: str = "USD"

# Default quote currency for historical lookups
DEFAULT_TARGET: str = USD


# =============================================================================
# CONVERSION FALLBACK
# =============================================================================

NOTE_FALLBACK_USD: str = "Computed using live USD rate (fallback)"
NOTE_FALLBACK_CROSS: str = "Computed using live USD cross rates (fallback)"

# Used when the native convert call failed without a usable message
UNSUPPORTED_CONVERSION_MESSAGE: str = (
    "Conversion endpoint is not available on this plan. "
    "Try converting to USD or between two cryptos."
)


# =============================================================================
# PRICE HISTORY (simulated chart data)
# =============================================================================

# Longest series the chart endpoint will produce
HISTORY_MAX_DAYS: int = 30

# Start of the walk, as a fraction of the current price: [0.8, 1.2)
HISTORY_START_MIN: float = 0.8
HISTORY_START_SPREAD: float = 0.4

# Largest day-over-day move: +/- 5%
HISTORY_DAILY_SWING: float = 0.1

# The walk never drops below 10% of the current price
HISTORY_PRICE_FLOOR: float = 0.1

# Base price used when no live price is available: [500, 1500)
HISTORY_FALLBACK_BASE: float = 1000.0

HISTORY_PRICE_DECIMALS: int = 6

HISTORY_SIMULATED_WARNING: str = "Using simulated data due to API limitations"


# =============================================================================
# RATE LIMITING (per client IP)
# =============================================================================

# Conversion may cost two upstream calls
RATE_LIMIT_CONVERT: str = "60/minute"

# Live/historical passthroughs and the symbol list (cached upstream calls)
RATE_LIMIT_RATES: str = "120/minute"

RATE_LIMIT_HISTORY: str = "60/minute"

RATE_LIMIT_HEALTH: str = "300/minute"

RATE_LIMIT_DEFAULT: str = "100/minute"

# Seconds clients are told to wait after a 429
RATE_LIMIT_RETRY_AFTER_SECONDS: int = 60
