"""
Exception hierarchy for the Alpha Council interval layer.

Only genuinely fatal conditions raise. Extraction failures are signaled by
returning None, and out-of-policy bands are repaired and logged rather than
rejected, so the hierarchy stays small:

    AlphaCouncilException
    ├── IntervalValidationError
    │   └── InvalidCurrentPriceError
    ├── ConfigurationError
    │   └── PolicyConfigError
    └── DataProcessingError
        └── MarketDataError
"""

from typing import Optional


# ============================================================================
# BASE EXCEPTION CLASSES
# ============================================================================

class AlphaCouncilException(Exception):
    """
    Base exception for all Alpha Council errors.

    Inheriting from this allows catching all framework errors:
        try:
            ...
        except AlphaCouncilException as e:
            ...
    """

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__


class IntervalValidationError(AlphaCouncilException):
    """Base class for inputs the interval validator cannot work with."""
    pass


class ConfigurationError(AlphaCouncilException):
    """Base class for configuration/setup issues."""
    pass


class DataProcessingError(AlphaCouncilException):
    """Base class for errors while converting collaborator data."""
    pass


# ============================================================================
# CONCRETE EXCEPTIONS
# ============================================================================

class InvalidCurrentPriceError(IntervalValidationError):
    """
    Raised when the reference price is not a positive finite number.

    Every percentage threshold is computed against the current price, so no
    partial result is produced.

    Example:
        raise InvalidCurrentPriceError("当前价格必须大于0 (got -1.0)")
    """

    def __init__(self, current_price: float):
        super().__init__(f"当前价格必须大于0 (got {current_price!r})")
        self.current_price = current_price


class PolicyConfigError(ConfigurationError):
    """
    Raised when an environment-supplied policy value cannot be used.

    Example:
        raise PolicyConfigError("ALPHA_COUNCIL_MIN_BUY_WIDTH_PCT='wide' is not a number")
    """
    pass


class MarketDataError(DataProcessingError):
    """
    Raised when a market-data quote lacks a usable current price.

    Example:
        raise MarketDataError("Quote for sh600519 has no numeric 'nowPri'")
    """
    pass
