"""
Interval Validator Tool: Stop-Loss Binder
Reposition an out-of-policy stop-loss relative to the final buy band.

- stop >= buy_low (or not a finite number): wrong side of the band,
  replaced by 0.95 x buy_low and logged as a warning.
- stop more than 8% of current price below buy_low: excessively loose,
  replaced by 0.97 x buy_low and logged as an adjustment.
- otherwise the value passes through.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from alpha_council.config.constants import (
    STOP_LOSS_MAX_DISTANCE_PCT,
    STOP_LOSS_TIGHTENED_RATIO,
    STOP_LOSS_WRONG_SIDE_RATIO,
)
from alpha_council.schemas.interval_output import Band
from alpha_council.tools.range_normalizer import exceeds, pct_of_price

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StopLossDecision:
    """Bound stop-loss plus the log entries the binding produced."""

    stop_loss: Optional[float]
    adjustments: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


def bind_stop_loss(
    stop_loss: Optional[float],
    buy_range: Band,
    current_price: float,
) -> StopLossDecision:
    """Bind a stop-loss to the final buy band. No-op when stop_loss is None."""
    if stop_loss is None:
        return StopLossDecision(stop_loss=None)

    buy_low = buy_range[0]

    if not math.isfinite(stop_loss) or stop_loss >= buy_low:
        bound = buy_low * STOP_LOSS_WRONG_SIDE_RATIO
        logger.info(f"[StopLossBinder] stop {stop_loss} not below buy_low {buy_low:.2f} -> {bound:.2f}")
        return StopLossDecision(
            stop_loss=bound,
            warnings=(f"止损价({stop_loss:g})高于买入区间下限({buy_low:.2f})，已自动调整",),
        )

    distance_pct = pct_of_price(buy_low - stop_loss, current_price)
    if exceeds(distance_pct, STOP_LOSS_MAX_DISTANCE_PCT):
        bound = buy_low * STOP_LOSS_TIGHTENED_RATIO
        logger.info(f"[StopLossBinder] stop {stop_loss} is {distance_pct:.1f}% below buy_low -> {bound:.2f}")
        return StopLossDecision(
            stop_loss=bound,
            adjustments=(f"止损过于严格({distance_pct:.1f}%)，调整为低于买入下限3%",),
        )

    return StopLossDecision(stop_loss=stop_loss)
