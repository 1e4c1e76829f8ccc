"""
Interval Validator Tool: Policy Resolver
Merge the layered policy tables into one effective policy.

Layers are plain mappings folded left to right:
    global default -> industry -> role -> caller override
Each layer overwrites only the fields it defines. Unknown industries, roles
and field names mean "no override for this layer". No error conditions.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Union

from alpha_council.config.constants import (
    AGENT_VALIDATION_OPTIONS,
    DEFAULT_VALIDATION_OPTIONS,
    INDUSTRY_INTERVAL_SETTINGS,
    POLICY_FIELDS,
)
from alpha_council.schemas.interval_output import (
    AgentRole,
    IntervalValidationOptions,
    StockContext,
)

logger = logging.getLogger(__name__)


def _role_key(agent_role: Union[AgentRole, str, None]) -> Optional[str]:
    if agent_role is None:
        return None
    if isinstance(agent_role, AgentRole):
        return agent_role.value
    return str(agent_role).strip().upper()


def policy_layers(
    stock_context: Optional[StockContext] = None,
    agent_role: Union[AgentRole, str, None] = None,
    overrides: Optional[Mapping[str, Optional[float]]] = None,
) -> list[Mapping[str, Optional[float]]]:
    """Return the ordered partial mappings that make up the effective policy."""
    layers: list[Mapping[str, Optional[float]]] = [DEFAULT_VALIDATION_OPTIONS]

    industry = stock_context.industry if stock_context is not None else None
    if industry:
        layers.append(INDUSTRY_INTERVAL_SETTINGS.get(industry, {}))

    role = _role_key(agent_role)
    if role:
        layers.append(AGENT_VALIDATION_OPTIONS.get(role, {}))

    if overrides:
        layers.append(overrides)

    return layers


def merge_policy_layers(
    layers: list[Mapping[str, Optional[float]]],
) -> dict[str, Optional[float]]:
    """Fold partial mappings left to right; later layers win per field."""
    merged: dict[str, Optional[float]] = {}
    for layer in layers:
        for name, value in layer.items():
            if name not in POLICY_FIELDS:
                logger.debug(f"Ignoring unknown policy field '{name}'")
                continue
            if value is None:
                continue
            merged[name] = float(value)
    return merged


def resolve_validation_options(
    stock_context: Optional[StockContext] = None,
    agent_role: Union[AgentRole, str, None] = None,
    overrides: Optional[Mapping[str, Optional[float]]] = None,
) -> IntervalValidationOptions:
    """
    Build the effective policy for one validation call.

    Args:
        stock_context: Market context; only `industry` is consulted.
        agent_role: Producer role (enum or its string value).
        overrides: Caller-supplied partial policy.

    Returns:
        Fully populated IntervalValidationOptions.
    """
    merged = merge_policy_layers(policy_layers(stock_context, agent_role, overrides))
    return IntervalValidationOptions(**merged)
