"""
Interval Validator Tool: Recommendation Advisor
Suggest a policy from market context alone, for callers without one.

Starts from the global default and applies independent, additive buckets:
market-cap tier, 20-day volatility and daily amplitude. Each bucket touches
its own fields or accumulates onto them, so application order is irrelevant.
"""

from __future__ import annotations

import logging
import math
from typing import Mapping

from alpha_council.config.constants import (
    DEFAULT_VALIDATION_OPTIONS,
    HIGH_AMPLITUDE_ADJUSTMENTS,
    HIGH_AMPLITUDE_MIN,
    HIGH_VOLATILITY_MIN,
    LARGE_CAP_ADJUSTMENTS,
    LARGE_CAP_MIN,
    SMALL_CAP_ADJUSTMENTS,
    SMALL_CAP_MAX,
    VOLATILITY_SCALING,
)
from alpha_council.schemas.interval_output import IntervalValidationOptions, StockContext

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def _apply(policy: dict[str, float], increments: Mapping[str, float]) -> None:
    for name, delta in increments.items():
        policy[name] += delta


def recommend_validation_options(stock_context: StockContext) -> IntervalValidationOptions:
    """
    Derive a suggested policy from market-cap, volatility and amplitude.

    Args:
        stock_context: Market context; missing or zero measures skip their bucket.

    Returns:
        IntervalValidationOptions built on the global default.
    """
    policy = dict(DEFAULT_VALIDATION_OPTIONS)
    buckets: list[str] = []

    cap = stock_context.market_cap
    if cap:
        if cap < SMALL_CAP_MAX:
            _apply(policy, SMALL_CAP_ADJUSTMENTS)
            buckets.append("small-cap")
        elif cap > LARGE_CAP_MIN:
            _apply(policy, LARGE_CAP_ADJUSTMENTS)
            buckets.append("large-cap")

    vol = stock_context.volatility_20d
    if vol and vol > HIGH_VOLATILITY_MIN:
        _apply(policy, {
            name: round_half_up(vol * 100 * factor)
            for name, factor in VOLATILITY_SCALING.items()
        })
        buckets.append(f"volatility {vol:.3f}")

    amplitude = stock_context.daily_amplitude
    if amplitude and amplitude > HIGH_AMPLITUDE_MIN:
        _apply(policy, HIGH_AMPLITUDE_ADJUSTMENTS)
        buckets.append(f"amplitude {amplitude:.1f}%")

    logger.info(
        f"[PolicyAdvisor] Recommended policy from {', '.join(buckets) or 'defaults only'}"
    )
    return IntervalValidationOptions(**policy)
