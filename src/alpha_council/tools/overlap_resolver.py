"""
Interval Validator Tool: Overlap Resolver
Guarantee a minimum separation between the repaired buy and sell bands.

    min_gap = max(2% of buy_high, 10% of (sell_low - buy_high))

When buy_high is not strictly below sell_low - min_gap, the whole sell band
moves up by the overlap plus two gap-widths; its width is preserved. The
formula is applied literally, even for inputs where the shifted sell band
still sits inside the nominal min-distance-above-current threshold.
"""

from __future__ import annotations

import logging

from alpha_council.config.constants import (
    GAP_MARGIN_MULTIPLIER,
    MIN_GAP_PRICE_RATIO,
    MIN_GAP_RAW_RATIO,
)
from alpha_council.schemas.interval_output import Band
from alpha_council.tools.range_normalizer import RepairResult

logger = logging.getLogger(__name__)


def minimum_gap(buy_high: float, sell_low: float) -> float:
    """Required separation between buy_high and sell_low."""
    return max(buy_high * MIN_GAP_PRICE_RATIO, (sell_low - buy_high) * MIN_GAP_RAW_RATIO)


def resolve_overlap(buy_range: Band, sell_range: Band) -> RepairResult:
    """
    Shift the sell band upward if it overlaps or crowds the buy band.

    Returns:
        RepairResult whose band is the (possibly shifted) sell band.
    """
    buy_high = buy_range[1]
    sell_low, sell_high = sell_range
    min_gap = minimum_gap(buy_high, sell_low)

    if buy_high < sell_low - min_gap:
        return RepairResult(band=(sell_low, sell_high))

    overlap = buy_high - (sell_low - min_gap)
    shift = overlap + min_gap * GAP_MARGIN_MULTIPLIER
    logger.info(
        f"[OverlapResolver] buy_high={buy_high:.2f} crowds sell_low={sell_low:.2f} "
        f"(gap {min_gap:.2f}); shifting sell band by {shift:.2f}"
    )
    return RepairResult(
        band=(sell_low + shift, sell_high + shift),
        adjustments=(f"买入卖出区间过于接近，已增加间隔{shift:.2f}元",),
    )
