"""
Interval Validator Tool: Text Interval Extractor
Recover a buy band, a sell band and an optional stop-loss from free-form
producer text.

Each field has an ordered list of patterns, most decorated form first
(emphasized label with brackets), then progressively looser forms (plain
label, abbreviated label). The first pattern that matches wins, so the order
of the lists below is part of the contract.

Tolerated around a band:
  - markdown emphasis (`**`) around the label and the numbers
  - an optional colon, full-width `：` or ASCII `:`
  - optional `[` `]` brackets
  - `-`, `~` or `—` between the two numbers, with any whitespace

Numbers are read by their leading float, so a sentence period right after
the last number is ignored. Never raises: a missing buy or sell band, or a
band token with no leading number (such as "."), yields None.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Optional, Sequence

from alpha_council.schemas.interval_output import Band, PriceInterval

logger = logging.getLogger(__name__)

_NUM = r"([\d.]+)"
_SEP = r"\s*[-~—]\s*"
_COLON = r"[：:]?"
_LEADING_FLOAT = re.compile(r"\d+\.?\d*|\.\d+")

# ---------------------------------------------------------------------------
# Ordered pattern lists
# ---------------------------------------------------------------------------

BUY_PATTERNS: tuple[re.Pattern, ...] = (
    # **买入区间：** [27.80 - 28.80]  /  **买入区间：** 27.80 - 28.80
    re.compile(r"\*{0,2}买入区间" + _COLON + r"\*{0,2}\s*\*{0,2}\[?\s*" + _NUM + _SEP + _NUM + r"\s*\]?\*{0,2}"),
    # 买入区间：[27.80 - 28.80]  /  买入区间：27.80 - 28.80
    re.compile(r"买入区间" + _COLON + r"\s*\[?\s*" + _NUM + _SEP + _NUM + r"\s*\]?"),
    # 买入：[27.80 - 28.80]
    re.compile(r"买入" + _COLON + r"\s*\[?\s*" + _NUM + _SEP + _NUM + r"\s*\]?"),
    # 买入价：27.80 - 28.80
    re.compile(r"买入价" + _COLON + r"\s*" + _NUM + _SEP + _NUM),
)

SELL_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"\*{0,2}卖出区间" + _COLON + r"\*{0,2}\s*\*{0,2}\[?\s*" + _NUM + _SEP + _NUM + r"\s*\]?\*{0,2}"),
    re.compile(r"卖出区间" + _COLON + r"\s*\[?\s*" + _NUM + _SEP + _NUM + r"\s*\]?"),
    re.compile(r"卖出" + _COLON + r"\s*\[?\s*" + _NUM + _SEP + _NUM + r"\s*\]?"),
    re.compile(r"卖出价" + _COLON + r"\s*" + _NUM + _SEP + _NUM),
)

STOP_LOSS_PATTERNS: tuple[re.Pattern, ...] = (
    # **止损价格：** 82.00
    re.compile(r"\*{0,2}止损价格" + _COLON + r"\*{0,2}\s*\*{0,2}\[?\s*" + _NUM),
    # 止损价：82.00
    re.compile(r"\*{0,2}止损价" + _COLON + r"\*{0,2}\s*\*{0,2}\[?\s*" + _NUM),
    # **止损：** 82.00
    re.compile(r"\*{0,2}止损" + _COLON + r"\*{0,2}\s*\*{0,2}\[?\s*" + _NUM),
)

_EXCERPT_CHARS = 500


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def first_match(
    text: str,
    patterns: Sequence[re.Pattern],
    label: str = "",
) -> Optional[re.Match]:
    """Return the match of the first pattern (in list order) found in text."""
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            logger.info(f"[IntervalExtractor] {label} matched pattern: {pattern.pattern}")
            return match
    return None


def parse_number(token: str) -> float:
    """
    Parse the leading float of a numeric token.

    The token may carry trailing dots from the surrounding sentence
    ('90.20.' -> 90.2, '1.2.3' -> 1.2). A token without a leading number,
    such as '.' or '..', gives NaN.
    """
    match = _LEADING_FLOAT.match(token)
    if match is None:
        return math.nan
    return float(match.group(0))


def _sorted_band(match: re.Match) -> Optional[Band]:
    a = parse_number(match.group(1))
    b = parse_number(match.group(2))
    if math.isnan(a) or math.isnan(b):
        return None
    return (min(a, b), max(a, b))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_intervals_from_text(text: str) -> Optional[PriceInterval]:
    """
    Extract a PriceInterval from producer text.

    Args:
        text: Arbitrary text, typically a technical analyst or GM answer.

    Returns:
        PriceInterval with each band ordered (low, high), or None when the
        text lacks a complete buy/sell pair or a band number is invalid.
    """
    if not text:
        logger.warning("[IntervalExtractor] Empty text, nothing to extract")
        return None

    buy_match = first_match(text, BUY_PATTERNS, "buy")
    sell_match = first_match(text, SELL_PATTERNS, "sell")

    if buy_match is None or sell_match is None:
        logger.warning(
            f"[IntervalExtractor] Incomplete interval — "
            f"buy: {'ok' if buy_match else 'missing'}, "
            f"sell: {'ok' if sell_match else 'missing'}; "
            f"excerpt: {text[:_EXCERPT_CHARS]!r}"
        )
        return None

    buy_range = _sorted_band(buy_match)
    sell_range = _sorted_band(sell_match)
    if buy_range is None or sell_range is None:
        logger.warning(
            f"[IntervalExtractor] Number parsing failed — "
            f"buy: {buy_match.groups()}, sell: {sell_match.groups()}"
        )
        return None

    stop_loss: Optional[float] = None
    stop_match = first_match(text, STOP_LOSS_PATTERNS, "stop-loss")
    if stop_match is not None:
        value = parse_number(stop_match.group(1))
        if math.isnan(value):
            logger.warning(
                f"[IntervalExtractor] Ignoring unparseable stop-loss {stop_match.group(1)!r}"
            )
        else:
            stop_loss = value

    logger.info(
        f"[IntervalExtractor] Extracted buy={buy_range}, sell={sell_range}, "
        f"stop_loss={stop_loss}"
    )
    return PriceInterval(buy_range=buy_range, sell_range=sell_range, stop_loss=stop_loss)
