"""
Interval Validator Tool: Market Context Adapter
Build a StockContext from a realtime quote as delivered by the market-data
collaborator (string-typed numbers, e.g. {"nowPri": "101.20", ...}).

Only the fields the normalizers consume are derived here: the current price,
the daily amplitude ((todayMax - todayMin) / nowPri x 100) and the traded
volume. Retrieval itself lives outside this package.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping, Optional

from alpha_council.exceptions import MarketDataError
from alpha_council.schemas.interval_output import StockContext

logger = logging.getLogger(__name__)


def _to_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def compute_daily_amplitude(
    today_max: Optional[float],
    today_min: Optional[float],
    current_price: float,
) -> Optional[float]:
    """Intraday range as percent of the current price, or None if unknown."""
    if today_max is None or today_min is None or current_price <= 0:
        return None
    return (today_max - today_min) / current_price * 100


def build_stock_context_from_quote(
    quote: Mapping[str, Any],
    **overrides: Any,
) -> StockContext:
    """
    Convert a realtime quote into a StockContext.

    Args:
        quote: Mapping with at least `nowPri`; `todayMax`, `todayMin` and
            `traNumber` are used when present.
        **overrides: StockContext fields (industry, atr_20d, volatility_20d,
            market_cap, ...) that take precedence over derived values.

    Raises:
        MarketDataError: if `nowPri` is missing or not a positive number.
    """
    current_price = _to_float(quote.get("nowPri"))
    if current_price is None or current_price <= 0:
        symbol = quote.get("gid", "?")
        raise MarketDataError(f"Quote for {symbol} has no usable 'nowPri': {quote.get('nowPri')!r}")

    fields: dict[str, Any] = {
        "current_price": current_price,
        "daily_amplitude": compute_daily_amplitude(
            _to_float(quote.get("todayMax")),
            _to_float(quote.get("todayMin")),
            current_price,
        ),
        "volume": _to_float(quote.get("traNumber")),
    }
    fields.update({k: v for k, v in overrides.items() if v is not None})

    logger.debug(
        f"[MarketContext] {quote.get('gid', '?')}: price={current_price}, "
        f"amplitude={fields['daily_amplitude']}"
    )
    return StockContext(**fields)
