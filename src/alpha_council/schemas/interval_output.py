"""
Interval Validator — Data Model
Alpha Council trading-interval normalization layer

Contracts shared by the extractor, the normalizers, the reporter and the
validation entry point. Every model is frozen: each normalization stage
returns a new value instead of mutating its input.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class AgentRole(str, Enum):
    """Text producers of the council. Only some of them emit price bands."""
    MACRO = "MACRO"
    INDUSTRY = "INDUSTRY"
    TECHNICAL = "TECHNICAL"
    FUNDS = "FUNDS"
    FUNDAMENTAL = "FUNDAMENTAL"
    MANAGER_FUNDAMENTAL = "MANAGER_FUNDAMENTAL"
    MANAGER_MOMENTUM = "MANAGER_MOMENTUM"
    RISK_SYSTEM = "RISK_SYSTEM"
    RISK_PORTFOLIO = "RISK_PORTFOLIO"
    GM = "GM"


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

Band = tuple[float, float]


class PriceInterval(BaseModel):
    """One candidate trading plan. Raw input may be unordered."""

    model_config = ConfigDict(frozen=True)

    buy_range: Band = Field(..., description="(low, high) buy zone")
    sell_range: Band = Field(..., description="(low, high) sell zone")
    stop_loss: Optional[float] = Field(None, description="Single stop-loss price")


class StockContext(BaseModel):
    """
    Market snapshot supplied by the market-data collaborator.

    current_price is not constrained here; validate_and_adjust_intervals()
    rejects non-positive prices with InvalidCurrentPriceError.
    """

    model_config = ConfigDict(frozen=True)

    current_price: float = Field(...)
    volatility_20d: Optional[float] = Field(
        None, description="20-day volatility as a fraction (0.03 = 3%)",
    )
    atr_20d: Optional[float] = Field(
        None, description="20-day average true range in currency units",
    )
    market_cap: Optional[float] = Field(
        None, description="Market capitalization in 100M currency units",
    )
    industry: Optional[str] = Field(None)
    daily_amplitude: Optional[float] = Field(
        None, description="Intraday high-low range as percent of price",
    )
    volume: Optional[float] = Field(None, ge=0)


class IntervalValidationOptions(BaseModel):
    """Effective policy: percentage thresholds for one validation call."""

    model_config = ConfigDict(frozen=True)

    min_total_width_percent: float = Field(...)
    min_buy_width_percent: float = Field(...)
    min_sell_width_percent: float = Field(...)
    min_below_current_percent: float = Field(...)
    min_above_current_percent: float = Field(...)
    max_below_current_percent: Optional[float] = Field(None)
    max_above_current_percent: Optional[float] = Field(None)


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------

class ValidationResult(BaseModel):
    """Summary metrics recomputed from the final bands."""

    model_config = ConfigDict(frozen=True)

    meets_standards: bool = Field(...)
    total_width_percent: float = Field(...)
    buy_width_percent: float = Field(...)
    sell_width_percent: float = Field(...)
    below_current_percent: float = Field(...)
    above_current_percent: float = Field(...)


class AdjustedInterval(PriceInterval):
    """Normalized interval plus its audit trail."""

    adjustments: tuple[str, ...] = Field(default_factory=tuple)
    warnings: tuple[str, ...] = Field(default_factory=tuple)
    validation_result: ValidationResult = Field(...)

    @field_validator("buy_range", "sell_range")
    @classmethod
    def band_ordered(cls, v: Band) -> Band:
        if not 0 < v[0] < v[1]:
            raise ValueError(f"normalized band must satisfy 0 < low < high, got {v}")
        return v


class IntervalValidationOutput(BaseModel):
    """Result of running the text pipeline on one producer's output."""

    model_config = ConfigDict(frozen=True)

    agent_role: Optional[AgentRole] = Field(None)
    extracted: PriceInterval = Field(..., description="Interval as parsed from text")
    adjusted: AdjustedInterval = Field(...)
    policy: IntervalValidationOptions = Field(...)
    policy_source: Literal["resolved", "recommended"] = Field("resolved")
    report: str = Field(..., min_length=1)
