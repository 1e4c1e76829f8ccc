"""
Interval Validator Tool: Buy/Sell Range Normalizers
Repair one side's band against the effective policy.

Pure functions: each normalizer copies the incoming band into locals, runs
its ordered repair steps (later steps see the effect of earlier ones) and
returns a new band together with the adjustments and warnings it recorded.

Buy band steps                          Sell band steps (mirror)
1. invalid -> (0.85p, 0.90p)            1. invalid -> (1.10p, 1.15p)
2. min width, 1.2x down / 0.8x up       2. min width, 0.8x down / 1.2x up
3. min distance below, 0.7x / 0.3x      3. min distance above, 0.3x / 0.7x
4. max distance below -> warning        4. max distance above -> warning
5. ATR widening to 2.5 x ATR            5. ATR widening to 3 x ATR
6. high >= 0.99p safety net             6. low <= 1.01p safety net
7. clamp into [0.50p, 0.96p]            7. clamp into [1.04p, 2.00p]
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from alpha_council.config.constants import (
    ATR_TRIGGER_RATIO,
    BUY_ATR_MULTIPLIER,
    BUY_CEILING,
    BUY_DEFAULT_BAND,
    BUY_EXPAND_DOWN_WEIGHT,
    BUY_EXPAND_UP_WEIGHT,
    BUY_FLOOR,
    BUY_PROXIMITY_HIGH,
    BUY_PROXIMITY_LOW_RATIO,
    BUY_PROXIMITY_TRIGGER,
    BUY_SHIFT_HIGH_WEIGHT,
    BUY_SHIFT_LOW_WEIGHT,
    MAX_DISTANCE_PULL_RATIO,
    PCT_TOLERANCE,
    SELL_ATR_MULTIPLIER,
    SELL_CEILING,
    SELL_DEFAULT_BAND,
    SELL_EXPAND_DOWN_WEIGHT,
    SELL_EXPAND_UP_WEIGHT,
    SELL_FLOOR,
    SELL_PROXIMITY_HIGH_RATIO,
    SELL_PROXIMITY_LOW,
    SELL_PROXIMITY_TRIGGER,
    SELL_SHIFT_HIGH_WEIGHT,
    SELL_SHIFT_LOW_WEIGHT,
)
from alpha_council.schemas.interval_output import (
    Band,
    IntervalValidationOptions,
    StockContext,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RepairResult:
    """Outcome of one repair stage: the new value plus its audit trail."""

    band: Band
    adjustments: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


def pct_of_price(amount: float, current_price: float) -> float:
    """Express a currency amount as a percent of the current price."""
    return amount * 100.0 / current_price


def falls_short(value_pct: float, threshold_pct: float) -> bool:
    """value_pct < threshold_pct, ignoring float noise."""
    return value_pct < threshold_pct - PCT_TOLERANCE


def exceeds(value_pct: float, threshold_pct: float) -> bool:
    """value_pct > threshold_pct, ignoring float noise."""
    return value_pct > threshold_pct + PCT_TOLERANCE


def invalid_band_reasons(low: float, high: float, side: str) -> list[str]:
    """Describe why a raw band cannot be used as-is (empty when it can)."""
    if not (math.isfinite(low) and math.isfinite(high)):
        return [f"{side}区间包含无效数值，已自动修正"]
    reasons = []
    if low >= high:
        reasons.append(f"{side}区间上下限颠倒，已自动修正")
    if low <= 0 or high <= 0:
        reasons.append(f"{side}区间包含非正数，已自动修正")
    return reasons


def _atr(stock_context: Optional[StockContext]) -> float:
    if stock_context is None or not stock_context.atr_20d:
        return 0.0
    return stock_context.atr_20d if stock_context.atr_20d > 0 else 0.0


def clamp_band(
    low: float,
    high: float,
    current_price: float,
    floor_ratio: float,
    ceiling_ratio: float,
    default_band: tuple[float, float],
    side: str,
) -> tuple[Band, Optional[str]]:
    """
    Clamp both bounds into [floor_ratio*p, ceiling_ratio*p].

    A band that collapses under the clamp is replaced by the side's default
    band. Returns the band and an adjustment note (None when nothing moved).
    """
    p = current_price
    floor, ceiling = p * floor_ratio, p * ceiling_ratio
    clamped_low = min(max(low, floor), ceiling)
    clamped_high = min(max(high, floor), ceiling)
    if clamped_low >= clamped_high:
        return (p * default_band[0], p * default_band[1]), f"{side}区间超出安全范围，已重置为默认区间"
    if (clamped_low, clamped_high) != (low, high):
        return (clamped_low, clamped_high), f"{side}区间限制在安全范围({floor:.2f} - {ceiling:.2f})内"
    return (low, high), None


# ---------------------------------------------------------------------------
# Buy band
# ---------------------------------------------------------------------------

def normalize_buy_range(
    buy_range: Band,
    current_price: float,
    options: IntervalValidationOptions,
    stock_context: Optional[StockContext] = None,
) -> RepairResult:
    """
    Repair the buy band so it sits comfortably below the current price.

    Args:
        buy_range: Raw (low, high) band; may be unordered or degenerate.
        current_price: Reference price, assumed > 0.
        options: Effective policy.
        stock_context: Optional context; `atr_20d` drives step 5.

    Returns:
        RepairResult with the new band and the ordered audit logs.
    """
    p = current_price
    low, high = float(buy_range[0]), float(buy_range[1])
    adjustments: list[str] = []
    warnings: list[str] = []

    # 1. Inversion / non-positivity
    reasons = invalid_band_reasons(low, high, "买入")
    if reasons:
        low, high = p * BUY_DEFAULT_BAND[0], p * BUY_DEFAULT_BAND[1]
        adjustments.extend(reasons)

    # 2. Minimum width
    width = high - low
    width_pct = pct_of_price(width, p)
    if falls_short(width_pct, options.min_buy_width_percent):
        target_width = options.min_buy_width_percent * p / 100
        expand_by = (target_width - width) / 2
        low -= expand_by * BUY_EXPAND_DOWN_WEIGHT
        high += expand_by * BUY_EXPAND_UP_WEIGHT
        adjustments.append(
            f"买入区间宽度从{width_pct:.1f}%扩大到{options.min_buy_width_percent:g}%"
        )

    # 3. Minimum distance below the current price
    below_pct = pct_of_price(p - high, p)
    if falls_short(below_pct, options.min_below_current_percent):
        target_below = options.min_below_current_percent * p / 100
        shift = target_below - (p - high)
        low -= shift * BUY_SHIFT_LOW_WEIGHT
        high -= shift * BUY_SHIFT_HIGH_WEIGHT
        adjustments.append(f"买入区间下调{shift:.2f}元以远离当前价")

    # 4. Maximum distance below the current price (advisory)
    low_pct = pct_of_price(p - low, p)
    if options.max_below_current_percent and exceeds(low_pct, options.max_below_current_percent):
        max_below = options.max_below_current_percent * p / 100
        excess = (p - low) - max_below
        min_width = options.min_buy_width_percent * p / 100
        low = min(low + excess * MAX_DISTANCE_PULL_RATIO, high - min_width)
        warnings.append(f"买入区间下限过于远离当前价({low_pct:.1f}%)，已上移")

    # 5. Volatility-based widening
    atr = _atr(stock_context)
    if atr > 0:
        atr_width = atr * BUY_ATR_MULTIPLIER
        width = high - low
        if width < atr_width * ATR_TRIGGER_RATIO:
            expand_by = (atr_width - width) / 2
            low -= expand_by * BUY_EXPAND_DOWN_WEIGHT
            high += expand_by * BUY_EXPAND_UP_WEIGHT
            adjustments.append(f"基于ATR({atr:.2f})调整买入区间宽度")

    # 6. Proximity safety net
    if high >= p * BUY_PROXIMITY_TRIGGER:
        high = p * BUY_PROXIMITY_HIGH
        low = high * BUY_PROXIMITY_LOW_RATIO
        adjustments.append("买入区间上限过于接近当前价，已下移")

    # 7. Final clamp
    (low, high), note = clamp_band(low, high, p, BUY_FLOOR, BUY_CEILING, BUY_DEFAULT_BAND, "买入")
    if note:
        adjustments.append(note)

    logger.debug(f"[RangeNormalizer] buy {buy_range} -> ({low:.4f}, {high:.4f})")
    return RepairResult(band=(low, high), adjustments=tuple(adjustments), warnings=tuple(warnings))


# ---------------------------------------------------------------------------
# Sell band
# ---------------------------------------------------------------------------

def normalize_sell_range(
    sell_range: Band,
    current_price: float,
    options: IntervalValidationOptions,
    stock_context: Optional[StockContext] = None,
) -> RepairResult:
    """Repair the sell band so it sits comfortably above the current price."""
    p = current_price
    low, high = float(sell_range[0]), float(sell_range[1])
    adjustments: list[str] = []
    warnings: list[str] = []

    # 1. Inversion / non-positivity
    reasons = invalid_band_reasons(low, high, "卖出")
    if reasons:
        low, high = p * SELL_DEFAULT_BAND[0], p * SELL_DEFAULT_BAND[1]
        adjustments.extend(reasons)

    # 2. Minimum width
    width = high - low
    width_pct = pct_of_price(width, p)
    if falls_short(width_pct, options.min_sell_width_percent):
        target_width = options.min_sell_width_percent * p / 100
        expand_by = (target_width - width) / 2
        low -= expand_by * SELL_EXPAND_DOWN_WEIGHT
        high += expand_by * SELL_EXPAND_UP_WEIGHT
        adjustments.append(
            f"卖出区间宽度从{width_pct:.1f}%扩大到{options.min_sell_width_percent:g}%"
        )

    # 3. Minimum distance above the current price
    above_pct = pct_of_price(low - p, p)
    if falls_short(above_pct, options.min_above_current_percent):
        target_above = options.min_above_current_percent * p / 100
        shift = target_above - (low - p)
        low += shift * SELL_SHIFT_LOW_WEIGHT
        high += shift * SELL_SHIFT_HIGH_WEIGHT
        adjustments.append(f"卖出区间上移{shift:.2f}元以远离当前价")

    # 4. Maximum distance above the current price (advisory)
    high_pct = pct_of_price(high - p, p)
    if options.max_above_current_percent and exceeds(high_pct, options.max_above_current_percent):
        max_above = options.max_above_current_percent * p / 100
        excess = (high - p) - max_above
        min_width = options.min_sell_width_percent * p / 100
        high = max(high - excess * MAX_DISTANCE_PULL_RATIO, low + min_width)
        warnings.append(f"卖出区间上限过于远离当前价({high_pct:.1f}%)，已下移")

    # 5. Volatility-based widening
    atr = _atr(stock_context)
    if atr > 0:
        atr_width = atr * SELL_ATR_MULTIPLIER
        width = high - low
        if width < atr_width * ATR_TRIGGER_RATIO:
            expand_by = (atr_width - width) / 2
            low -= expand_by * SELL_EXPAND_DOWN_WEIGHT
            high += expand_by * SELL_EXPAND_UP_WEIGHT
            adjustments.append(f"基于ATR({atr:.2f})调整卖出区间宽度")

    # 6. Proximity safety net
    if low <= p * SELL_PROXIMITY_TRIGGER:
        low = p * SELL_PROXIMITY_LOW
        high = low * SELL_PROXIMITY_HIGH_RATIO
        adjustments.append("卖出区间下限过于接近当前价，已上移")

    # 7. Final clamp
    (low, high), note = clamp_band(low, high, p, SELL_FLOOR, SELL_CEILING, SELL_DEFAULT_BAND, "卖出")
    if note:
        adjustments.append(note)

    logger.debug(f"[RangeNormalizer] sell {sell_range} -> ({low:.4f}, {high:.4f})")
    return RepairResult(band=(low, high), adjustments=tuple(adjustments), warnings=tuple(warnings))
