"""
Shared test fixtures for the interval validator tests.
Provides sample agent answers, market contexts and band helpers.
"""

from __future__ import annotations

from alpha_council.schemas.interval_output import PriceInterval, StockContext


# Standard GM answer: every band already satisfies the default policy.
GM_COMPLIANT_TEXT = """
### 🧭 最终指令
【🟢 买入】

### 📌 仓位
【60%】

### 📈 操作区间
- **买入区间：** 85.50 - 90.20
- **卖出区间：** 110.30 - 118.50

### 🛑 止损红线
**止损：** 82.00
"""

# Bands too narrow, too close to price and to each other.
GM_NARROW_TEXT = """
### 📈 操作区间
- **买入区间：** 95.00 - 97.00
- **卖出区间：** 102.00 - 105.00

### 🛑 止损红线
**止损：** 93.00
"""

# Technical analyst style: plain labels, tight dashes, ASCII colon.
TECHNICAL_MIXED_TEXT = """
- 买入区间：88.5-92.3
- 卖出区间: 108.0 - 115.5
- 止损价格：85.0
"""

TECHNICAL_LABELLED_TEXT = """
- **买入区间：** 88.50 - 92.30
- **卖出区间：** 108.00 - 115.50
- **止损价格：** 85.00
"""

MACRO_TEXT = """
- **宏观评级**：中性
- **核心结论**：流动性边际改善
- **政策风口**：设备更新
"""


def make_context(current_price: float = 100.0, **kwargs) -> StockContext:
    """StockContext with a price of 100 unless overridden."""
    return StockContext(current_price=current_price, **kwargs)


def make_interval(
    buy: tuple[float, float] = (85.5, 90.2),
    sell: tuple[float, float] = (110.3, 118.5),
    stop_loss: float | None = 82.0,
) -> PriceInterval:
    return PriceInterval(buy_range=buy, sell_range=sell, stop_loss=stop_loss)

