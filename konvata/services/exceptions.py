# konvata/services/exceptions.py
"""
Service layer exceptions.

These exceptions represent domain-specific errors and contain NO HTTP knowledge.
The global handlers in main.py map them to HTTP responses.

Exception Hierarchy:
    ServiceError (base)
    ├── ValidationError
    │   ├── MissingParamsError
    │   ├── InvalidAmountError
    │   └── InvalidDateError
    ├── RateProviderError
    │   ├── ProviderConfigurationError
    │   ├── ProviderTransportError
    │   └── ProviderApiError
    └── ConversionError
        ├── NoLiveRateError
        └── UnsupportedConversionError

Each class carries a short `code` that ends up in the error body.
"""


class ServiceError(Exception):
    """
    Base exception for all service layer errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code for the response body
    """

    code: str | int | None = None

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(ServiceError):
    """
    Raised when request parameters are missing or malformed.

    Attributes:
        field: The field that failed validation (optional)
    """

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class MissingParamsError(ValidationError):
    """
    Raised when required query parameters are absent.

    The message always lists the full set of required parameters, not only
    the missing ones, so clients see the whole contract.
    """

    code = "MISSING_PARAMS"

    def __init__(self, required: list[str], missing: list[str] | None = None) -> None:
        self.required = required
        self.missing = missing or list(required)
        super().__init__(f"Missing required params: {', '.join(required)}")


class InvalidAmountError(ValidationError):
    """Raised when the amount is not a finite number greater than zero."""

    code = "INVALID_AMOUNT"

    def __init__(self, amount: str) -> None:
        self.amount = amount
        super().__init__("Invalid amount", field="amount")


class InvalidDateError(ValidationError):
    """Raised when a date parameter is not a valid YYYY-MM-DD calendar date."""

    code = "INVALID_DATE"

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Invalid date: '{value}'. Expected YYYY-MM-DD", field="date")


# =============================================================================
# RATE PROVIDER ERRORS
# =============================================================================


class RateProviderError(ServiceError):
    """
    Base exception for rate provider failures.

    None of these are retried.

    Attributes:
        provider: Name of the provider that failed
    """

    code = "PROVIDER_ERROR"

    def __init__(self, message: str, provider: str | None = None) -> None:
        self.provider = provider
        super().__init__(message)


class ProviderConfigurationError(RateProviderError):
    """
    Raised when the provider credential is not configured.

    Detected before any network call. Fatal for the request: the conversion
    fallback does not try to work around it.
    """

    code = "CONFIGURATION_ERROR"

    def __init__(self, provider: str, env_var: str) -> None:
        self.env_var = env_var
        super().__init__(
            f"Missing {env_var} environment variable. "
            f"Create a .env with {env_var}=your_key",
            provider=provider,
        )


class ProviderTransportError(RateProviderError):
    """
    Raised when the provider cannot be reached or answers with something
    other than a 2xx JSON object.

    Attributes:
        reason: What went wrong
        status_code: HTTP status returned by the provider, if any
    """

    code = "PROVIDER_UNAVAILABLE"

    def __init__(self, provider: str, reason: str, status_code: int | None = None) -> None:
        self.reason = reason
        self.status_code = status_code
        super().__init__(reason, provider=provider)


class ProviderApiError(RateProviderError):
    """
    Raised when the provider answers with `success: false`.

    Typical causes are plan restrictions (e.g. /convert on the free plan),
    invalid symbols and exhausted quotas.

    Attributes:
        provider_code: The provider's numeric error code
        error_type: The provider's error type slug
        info: The provider's human-readable explanation
    """

    def __init__(
            self,
            provider: str,
            provider_code: int | str | None,
            info: str,
            error_type: str | None = None,
    ) -> None:
        self.provider_code = provider_code
        self.error_type = error_type
        self.info = info
        super().__init__(f"Coinlayer API error ({provider_code}): {info}", provider=provider)

    @property
    def code(self) -> str | int | None:  # type: ignore[override]
        return self.provider_code


# =============================================================================
# CONVERSION ERRORS
# =============================================================================


class ConversionError(ServiceError):
    """
    Base exception for conversions that cannot be resolved.

    Attributes:
        from_currency: Source asset code
        to_currency: Target asset code
    """

    code = "CONVERSION_ERROR"

    def __init__(
            self,
            message: str,
            from_currency: str | None = None,
            to_currency: str | None = None,
    ) -> None:
        self.from_currency = from_currency
        self.to_currency = to_currency
        super().__init__(message)


class NoLiveRateError(ConversionError):
    """Raised when the live rates carry no usable entry for a symbol."""

    code = "NO_LIVE_RATE"

    def __init__(self, symbol: str, to_currency: str | None = None) -> None:
        self.symbol = symbol
        super().__init__(
            f"No live rate for {symbol}",
            from_currency=symbol,
            to_currency=to_currency,
        )


class UnsupportedConversionError(ConversionError):
    """
    Raised when neither the native endpoint nor the live-rate fallback can
    resolve a pair, typically crypto to a non-USD fiat on the free plan.

    The message is the native attempt's error message when there was one.
    """

    code = "UNSUPPORTED_CONVERSION"

    def __init__(self, from_currency: str, to_currency: str, message: str) -> None:
        super().__init__(message, from_currency=from_currency, to_currency=to_currency)


__all__ = [
    # Base
    "ServiceError",
    # Validation
    "ValidationError",
    "MissingParamsError",
    "InvalidAmountError",
    "InvalidDateError",
    # Provider
    "RateProviderError",
    "ProviderConfigurationError",
    "ProviderTransportError",
    "ProviderApiError",
    # Conversion
    "ConversionError",
    "NoLiveRateError",
    "UnsupportedConversionError",
]
