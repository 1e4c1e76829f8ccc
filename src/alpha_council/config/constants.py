"""
Centralized configuration for the Alpha Council interval layer.

This module defines the policy tables and every magic number used by the
band normalizers, the overlap resolver, the stop-loss binder and the report
renderer. Centralizing these values makes it easier to tune the system and
understand decision boundaries.

Policy tables are plain mappings of field name -> percentage. They are merged
left to right (default -> industry -> role -> caller override) and are never
mutated at runtime.
"""

from types import MappingProxyType

# ============================================================================
# POLICY FIELDS
# ============================================================================

POLICY_FIELDS: tuple[str, ...] = (
    "min_total_width_percent",
    "min_buy_width_percent",
    "min_sell_width_percent",
    "min_below_current_percent",
    "min_above_current_percent",
    "max_below_current_percent",
    "max_above_current_percent",
)
"""Every threshold name a policy layer may define"""

# ============================================================================
# DEFAULT POLICY
# ============================================================================

DEFAULT_VALIDATION_OPTIONS = MappingProxyType({
    "min_total_width_percent": 12.0,
    "min_buy_width_percent": 4.0,
    "min_sell_width_percent": 5.0,
    "min_below_current_percent": 6.0,
    "min_above_current_percent": 10.0,
    "max_below_current_percent": 25.0,
    "max_above_current_percent": 35.0,
})
"""Global default thresholds (swing-trading bands, GM standard)"""

# ============================================================================
# INDUSTRY POLICY TABLE
# ============================================================================
# Keys are the industry names supplied by the market-data collaborator.

INDUSTRY_INTERVAL_SETTINGS = MappingProxyType({
    # High volatility
    "科技": MappingProxyType({
        "min_total_width_percent": 18.0,
        "min_buy_width_percent": 6.0,
        "min_sell_width_percent": 7.0,
        "min_below_current_percent": 8.0,
        "min_above_current_percent": 12.0,
        "max_below_current_percent": 30.0,
        "max_above_current_percent": 40.0,
    }),
    "医药": MappingProxyType({
        "min_total_width_percent": 16.0,
        "min_buy_width_percent": 5.0,
        "min_sell_width_percent": 6.0,
        "min_below_current_percent": 7.0,
        "min_above_current_percent": 11.0,
        "max_below_current_percent": 28.0,
        "max_above_current_percent": 38.0,
    }),
    "新能源": MappingProxyType({
        "min_total_width_percent": 15.0,
        "min_buy_width_percent": 5.0,
        "min_sell_width_percent": 6.0,
        "min_below_current_percent": 7.0,
        "min_above_current_percent": 10.0,
        "max_below_current_percent": 25.0,
        "max_above_current_percent": 35.0,
    }),
    # Medium volatility
    "消费": MappingProxyType({
        "min_total_width_percent": 12.0,
        "min_buy_width_percent": 4.0,
        "min_sell_width_percent": 5.0,
        "min_below_current_percent": 6.0,
        "min_above_current_percent": 8.0,
        "max_below_current_percent": 20.0,
        "max_above_current_percent": 30.0,
    }),
    "制造": MappingProxyType({
        "min_total_width_percent": 10.0,
        "min_buy_width_percent": 3.5,
        "min_sell_width_percent": 4.5,
        "min_below_current_percent": 5.0,
        "min_above_current_percent": 7.0,
        "max_below_current_percent": 18.0,
        "max_above_current_percent": 28.0,
    }),
    # Low volatility
    "金融": MappingProxyType({
        "min_total_width_percent": 8.0,
        "min_buy_width_percent": 3.0,
        "min_sell_width_percent": 4.0,
        "min_below_current_percent": 4.0,
        "min_above_current_percent": 6.0,
        "max_below_current_percent": 15.0,
        "max_above_current_percent": 25.0,
    }),
    "公用事业": MappingProxyType({
        "min_total_width_percent": 7.0,
        "min_buy_width_percent": 2.5,
        "min_sell_width_percent": 3.5,
        "min_below_current_percent": 4.0,
        "min_above_current_percent": 5.0,
        "max_below_current_percent": 12.0,
        "max_above_current_percent": 20.0,
    }),
})

# ============================================================================
# ROLE POLICY TABLE
# ============================================================================
# Keyed by AgentRole value. Roles that never emit bands have no entry.
# Role layers leave the max_* caps to the industry/default layers.

AGENT_VALIDATION_OPTIONS = MappingProxyType({
    "TECHNICAL": MappingProxyType({
        "min_total_width_percent": 10.0,
        "min_buy_width_percent": 4.0,
        "min_sell_width_percent": 5.0,
        "min_below_current_percent": 5.0,
        "min_above_current_percent": 8.0,
    }),
    "GM": MappingProxyType({
        "min_total_width_percent": 12.0,
        "min_buy_width_percent": 4.0,
        "min_sell_width_percent": 5.0,
        "min_below_current_percent": 6.0,
        "min_above_current_percent": 10.0,
    }),
})

# ============================================================================
# BUY BAND REPAIR
# ============================================================================

BUY_DEFAULT_BAND = (0.85, 0.90)
"""Replacement buy band (fractions of current price) for invalid input"""

BUY_EXPAND_DOWN_WEIGHT = 1.2
BUY_EXPAND_UP_WEIGHT = 0.8
"""Width expansion weights: buy bands grow away from the current price"""

BUY_SHIFT_LOW_WEIGHT = 0.7
BUY_SHIFT_HIGH_WEIGHT = 0.3
"""Share of the needed downward shift applied to each buy bound"""

BUY_ATR_MULTIPLIER = 2.5
"""Target buy width in multiples of the 20-day ATR"""

BUY_PROXIMITY_TRIGGER = 0.99
BUY_PROXIMITY_HIGH = 0.94
BUY_PROXIMITY_LOW_RATIO = 0.95
"""Safety net: high >= 0.99p forces high = 0.94p, low = 0.95 x high"""

BUY_FLOOR = 0.50
BUY_CEILING = 0.96
"""Final clamp window for buy bounds (fractions of current price)"""

# ============================================================================
# SELL BAND REPAIR
# ============================================================================

SELL_DEFAULT_BAND = (1.10, 1.15)
"""Replacement sell band (fractions of current price) for invalid input"""

SELL_EXPAND_DOWN_WEIGHT = 0.8
SELL_EXPAND_UP_WEIGHT = 1.2
"""Width expansion weights: sell bands grow away from the current price"""

SELL_SHIFT_LOW_WEIGHT = 0.3
SELL_SHIFT_HIGH_WEIGHT = 0.7
"""Share of the needed upward shift applied to each sell bound"""

SELL_ATR_MULTIPLIER = 3.0
"""Target sell width in multiples of the 20-day ATR"""

SELL_PROXIMITY_TRIGGER = 1.01
SELL_PROXIMITY_LOW = 1.06
SELL_PROXIMITY_HIGH_RATIO = 1.05
"""Safety net: low <= 1.01p forces low = 1.06p, high = 1.05 x low"""

SELL_FLOOR = 1.04
SELL_CEILING = 2.00
"""Final clamp window for sell bounds (fractions of current price)"""

# ============================================================================
# SHARED REPAIR RATIOS
# ============================================================================

ATR_TRIGGER_RATIO = 0.8
"""Widen only when width < 0.8 x the ATR-based target width"""

MAX_DISTANCE_PULL_RATIO = 0.8
"""Share of the excess distance recovered when a max-distance cap fires"""

PCT_TOLERANCE = 1e-9
"""Percent comparisons ignore differences below this (float noise)"""

# ============================================================================
# BAND SEPARATION
# ============================================================================

MIN_GAP_PRICE_RATIO = 0.02
"""Absolute gap term: 2% of the buy band upper bound"""

MIN_GAP_RAW_RATIO = 0.10
"""Relative gap term: 10% of the raw gap between the bands"""

GAP_MARGIN_MULTIPLIER = 2
"""Gap-widths added on top of the overlap when the sell band is shifted"""

# ============================================================================
# STOP LOSS
# ============================================================================

STOP_LOSS_WRONG_SIDE_RATIO = 0.95
"""Replacement stop when the stop sits at/above the buy lower bound"""

STOP_LOSS_MAX_DISTANCE_PCT = 8.0
"""Stops further than this (percent of price) below buy low are too loose"""

STOP_LOSS_TIGHTENED_RATIO = 0.97
"""Replacement stop when the stop is excessively far below buy low"""

# ============================================================================
# REPORT ADVISORY THRESHOLDS
# ============================================================================

ADVISORY_TOTAL_WIDTH_MIN = 10.0
ADVISORY_BELOW_CURRENT_MIN = 5.0
ADVISORY_ABOVE_CURRENT_MIN = 8.0
"""Below these the report adds a cautionary bullet"""

HEADLINE_TOTAL_WIDTH = 12.0
HEADLINE_BELOW_CURRENT = 6.0
HEADLINE_ABOVE_CURRENT = 10.0
"""Headline thresholds for the positive confirmation bullet"""

# ============================================================================
# RECOMMENDATION HEURISTICS
# ============================================================================

SMALL_CAP_MAX = 50
"""Market cap (100M currency units) below which a stock is small-cap"""

LARGE_CAP_MIN = 500
"""Market cap (100M currency units) above which a stock is large-cap"""

SMALL_CAP_ADJUSTMENTS = MappingProxyType({
    "min_total_width_percent": 3.0,
    "min_buy_width_percent": 1.0,
    "min_sell_width_percent": 1.0,
    "min_below_current_percent": 1.0,
    "min_above_current_percent": 2.0,
})

LARGE_CAP_ADJUSTMENTS = MappingProxyType({
    "min_total_width_percent": -2.0,
    "min_buy_width_percent": -0.5,
    "min_sell_width_percent": -0.5,
    "min_below_current_percent": -1.0,
    "min_above_current_percent": -1.0,
})

HIGH_VOLATILITY_MIN = 0.03
"""20-day volatility (fraction) above which thresholds scale up"""

VOLATILITY_SCALING = MappingProxyType({
    "min_total_width_percent": 0.5,
    "min_buy_width_percent": 0.2,
    "min_sell_width_percent": 0.3,
})
"""Increment = round(volatility x 100 x factor)"""

HIGH_AMPLITUDE_MIN = 5.0
"""Daily amplitude (percent) above which flat increments apply"""

HIGH_AMPLITUDE_ADJUSTMENTS = MappingProxyType({
    "min_total_width_percent": 2.0,
    "min_above_current_percent": 1.0,
})
