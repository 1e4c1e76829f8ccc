"""
Interval Validator
Deterministic post-processing for producer price bands — Alpha Council

Receives a raw PriceInterval (or producer text) plus a StockContext.
Produces an AdjustedInterval with:
- buy/sell bands repaired against the effective policy
- a guaranteed gap between the bands
- a stop-loss bound below the buy band
- ordered adjustment and warning logs
- summary metrics and a compliance verdict

Two entry points:
1. validate_and_adjust_intervals() — raw interval in, AdjustedInterval out
2. run_interval_validation_pipeline() — text in, extraction + validation +
   rendered report out (None when the text holds no complete interval)

This layer never generates trading decisions, calls no network service and
keeps no state between calls.
"""

from __future__ import annotations

import logging
import math
from typing import Mapping, Optional, Union

from alpha_council.exceptions import InvalidCurrentPriceError
from alpha_council.schemas.interval_output import (
    AdjustedInterval,
    AgentRole,
    IntervalValidationOptions,
    IntervalValidationOutput,
    PriceInterval,
    StockContext,
)
from alpha_council.tools.interval_extractor import extract_intervals_from_text
from alpha_council.tools.overlap_resolver import resolve_overlap
from alpha_council.tools.policy_advisor import recommend_validation_options
from alpha_council.tools.policy_resolver import resolve_validation_options
from alpha_council.tools.range_normalizer import normalize_buy_range, normalize_sell_range
from alpha_council.tools.stop_loss_binder import bind_stop_loss
from alpha_council.tools.validation_reporter import (
    calculate_validation_result,
    generate_interval_report,
)

logger = logging.getLogger(__name__)

PolicyOverrides = Mapping[str, Optional[float]]


def _coerce_role(agent_role: Union[AgentRole, str, None]) -> Optional[AgentRole]:
    if agent_role is None or isinstance(agent_role, AgentRole):
        return agent_role
    try:
        return AgentRole(str(agent_role).strip().upper())
    except ValueError:
        logger.debug(f"Unknown agent role {agent_role!r}; no role policy applied")
        return None


# ---------------------------------------------------------------------------
# Validation entry point
# ---------------------------------------------------------------------------

def validate_and_adjust_intervals(
    intervals: PriceInterval,
    stock_context: StockContext,
    options: Optional[PolicyOverrides] = None,
    agent_role: Union[AgentRole, str, None] = None,
) -> AdjustedInterval:
    """
    Validate and repair a candidate trading plan.

    Args:
        intervals: Raw interval, from the extractor or supplied directly.
        stock_context: Market context; current_price must be > 0.
        options: Optional caller-supplied partial policy.
        agent_role: Optional producer role selecting a role policy layer.

    Returns:
        AdjustedInterval satisfying 0 < buy_low < buy_high < sell_low < sell_high.

    Raises:
        InvalidCurrentPriceError: if current_price is not a positive number.
    """
    _require_positive_price(stock_context)
    policy = resolve_validation_options(stock_context, agent_role, options)
    return _adjust_with_policy(intervals, stock_context, policy)


def _require_positive_price(stock_context: StockContext) -> None:
    current_price = stock_context.current_price
    if not math.isfinite(current_price) or current_price <= 0:
        raise InvalidCurrentPriceError(current_price)


def _adjust_with_policy(
    intervals: PriceInterval,
    stock_context: StockContext,
    policy: IntervalValidationOptions,
) -> AdjustedInterval:
    current_price = stock_context.current_price
    logger.info(
        f"[IntervalValidator] Validating buy={intervals.buy_range} sell={intervals.sell_range} "
        f"stop={intervals.stop_loss} at price {current_price}"
    )

    buy = normalize_buy_range(intervals.buy_range, current_price, policy, stock_context)
    sell = normalize_sell_range(intervals.sell_range, current_price, policy, stock_context)
    separated = resolve_overlap(buy.band, sell.band)
    stop = bind_stop_loss(intervals.stop_loss, buy.band, current_price)

    adjustments = buy.adjustments + sell.adjustments + separated.adjustments + stop.adjustments
    warnings = buy.warnings + sell.warnings + separated.warnings + stop.warnings
    result = calculate_validation_result(buy.band, separated.band, current_price, policy)

    logger.info(
        f"[IntervalValidator] Done — meets_standards={result.meets_standards}, "
        f"{len(adjustments)} adjustments, {len(warnings)} warnings"
    )

    return AdjustedInterval(
        buy_range=buy.band,
        sell_range=separated.band,
        stop_loss=stop.stop_loss,
        adjustments=adjustments,
        warnings=warnings,
        validation_result=result,
    )


# ---------------------------------------------------------------------------
# Text pipeline
# ---------------------------------------------------------------------------

def run_interval_validation_pipeline(
    text: str,
    stock_context: StockContext,
    options: Optional[PolicyOverrides] = None,
    agent_role: Union[AgentRole, str, None] = None,
    use_recommended_options: bool = False,
) -> Optional[IntervalValidationOutput]:
    """
    Extract, validate and report on one producer's text.

    Args:
        text: Producer output in the documented band convention.
        stock_context: Market context; current_price must be > 0.
        options: Optional caller-supplied partial policy.
        agent_role: Optional producer role.
        use_recommended_options: When no `options` are given, use the
            RecommendationAdvisor's policy as the override layer.

    Returns:
        IntervalValidationOutput, or None if no complete interval was found.
        Callers should fall back to showing the raw text.

    Raises:
        InvalidCurrentPriceError: if current_price is not a positive number.
    """
    role = _coerce_role(agent_role)
    label = role.value if role else "UNSPECIFIED"
    logger.info(f"[IntervalValidator] Running text pipeline for role {label} ...")

    extracted = extract_intervals_from_text(text)
    if extracted is None:
        logger.warning(f"[IntervalValidator] No interval found in {label} output")
        return None

    policy_source = "resolved"
    if options is None and use_recommended_options:
        options = recommend_validation_options(stock_context).model_dump()
        policy_source = "recommended"

    _require_positive_price(stock_context)
    policy = resolve_validation_options(stock_context, role, options)
    adjusted = _adjust_with_policy(extracted, stock_context, policy)

    return IntervalValidationOutput(
        agent_role=role,
        extracted=extracted,
        adjusted=adjusted,
        policy=policy,
        policy_source=policy_source,
        report=generate_interval_report(adjusted),
    )
