"""
Interval Validator Tool: Validation Reporter
Recompute summary metrics from the final bands and render the diagnostic
report shown to the user.

The report structure is stable; downstream consumers parse it field by field:

    ## 📊 区间验证报告
    ### 验证结果: ✅ 通过 | ⚠️ 未完全通过
    (five metric bullets)
    ### 📈 调整后区间
    (buy / sell / optional stop-loss bullets, two decimals)
    ### 🔧 自动调整项        (omitted if empty)
    ### ⚠️ 警告信息          (omitted if empty)
    ### 📋 建议
"""

from __future__ import annotations

from alpha_council.config.constants import (
    ADVISORY_ABOVE_CURRENT_MIN,
    ADVISORY_BELOW_CURRENT_MIN,
    ADVISORY_TOTAL_WIDTH_MIN,
    HEADLINE_ABOVE_CURRENT,
    HEADLINE_BELOW_CURRENT,
    HEADLINE_TOTAL_WIDTH,
)
from alpha_council.schemas.interval_output import (
    AdjustedInterval,
    Band,
    IntervalValidationOptions,
    ValidationResult,
)
from alpha_council.tools.range_normalizer import falls_short, pct_of_price

REPORT_TITLE = "## 📊 区间验证报告"
VERDICT_PASS = "✅ 通过"
VERDICT_FAIL = "⚠️ 未完全通过"


def format_percent(value: float) -> str:
    """One decimal place, without a trailing '.0' (33.0 -> '33', 4.7 -> '4.7')."""
    text = f"{value:.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    return "0" if text == "-0" else text


def calculate_validation_result(
    buy_range: Band,
    sell_range: Band,
    current_price: float,
    options: IntervalValidationOptions,
) -> ValidationResult:
    """
    Compute the five headline metrics and the compliance verdict.

    The verdict compares unrounded metrics against the policy minimums
    (logical AND, no partial credit); the reported metrics are rounded to
    one decimal place.
    """
    buy_low, buy_high = buy_range
    sell_low, sell_high = sell_range

    total_width = pct_of_price(sell_high - buy_low, current_price)
    buy_width = pct_of_price(buy_high - buy_low, current_price)
    sell_width = pct_of_price(sell_high - sell_low, current_price)
    below_current = pct_of_price(current_price - buy_high, current_price)
    above_current = pct_of_price(sell_low - current_price, current_price)

    meets_standards = (
        not falls_short(total_width, options.min_total_width_percent)
        and not falls_short(buy_width, options.min_buy_width_percent)
        and not falls_short(sell_width, options.min_sell_width_percent)
        and not falls_short(below_current, options.min_below_current_percent)
        and not falls_short(above_current, options.min_above_current_percent)
    )

    return ValidationResult(
        meets_standards=meets_standards,
        total_width_percent=round(total_width, 1),
        buy_width_percent=round(buy_width, 1),
        sell_width_percent=round(sell_width, 1),
        below_current_percent=round(below_current, 1),
        above_current_percent=round(above_current, 1),
    )


def _advice_lines(result: ValidationResult) -> list[str]:
    lines = []
    if result.total_width_percent < ADVISORY_TOTAL_WIDTH_MIN:
        lines.append(f"- ❗ 总区间宽度({format_percent(result.total_width_percent)}%)偏小，建议考虑波动率扩大区间")
    if result.below_current_percent < ADVISORY_BELOW_CURRENT_MIN:
        lines.append(f"- ❗ 买入区间距离当前价较近({format_percent(result.below_current_percent)}%)，可能缺乏安全边际")
    if result.above_current_percent < ADVISORY_ABOVE_CURRENT_MIN:
        lines.append(f"- ❗ 卖出区间距离当前价较近({format_percent(result.above_current_percent)}%)，可能缺乏盈利空间")
    if (
        result.meets_standards
        and result.total_width_percent >= HEADLINE_TOTAL_WIDTH
        and result.below_current_percent >= HEADLINE_BELOW_CURRENT
        and result.above_current_percent >= HEADLINE_ABOVE_CURRENT
    ):
        lines.append("- ✅ 区间设置合理，符合波段交易要求")
    return lines


def generate_interval_report(adjusted: AdjustedInterval) -> str:
    """Render the diagnostic markdown report for an AdjustedInterval."""
    result = adjusted.validation_result
    buy_low, buy_high = adjusted.buy_range
    sell_low, sell_high = adjusted.sell_range

    lines = [
        REPORT_TITLE,
        "",
        f"### 验证结果: {VERDICT_PASS if result.meets_standards else VERDICT_FAIL}",
        f"- 总区间宽度: {format_percent(result.total_width_percent)}%",
        f"- 买入区间宽度: {format_percent(result.buy_width_percent)}%",
        f"- 卖出区间宽度: {format_percent(result.sell_width_percent)}%",
        f"- 买入区间低于当前价: {format_percent(result.below_current_percent)}%",
        f"- 卖出区间高于当前价: {format_percent(result.above_current_percent)}%",
        "",
        "### 📈 调整后区间",
        f"- **买入区间**: {buy_low:.2f} - {buy_high:.2f}",
        f"- **卖出区间**: {sell_low:.2f} - {sell_high:.2f}",
    ]
    if adjusted.stop_loss is not None:
        lines.append(f"- **止损价格**: {adjusted.stop_loss:.2f}")

    if adjusted.adjustments:
        lines += ["", "### 🔧 自动调整项"]
        lines += [f"- {item}" for item in adjusted.adjustments]

    if adjusted.warnings:
        lines += ["", "### ⚠️ 警告信息"]
        lines += [f"- {item}" for item in adjusted.warnings]

    lines += ["", "### 📋 建议"]
    lines += _advice_lines(result)

    return "\n".join(lines) + "\n"
