"""
Environment-driven settings for the Alpha Council interval layer.

Values come from the process environment; the command-line runner calls
`load_dotenv()` first so a local `.env` file works too.

    ALPHA_COUNCIL_LOG_LEVEL            logging level name (default INFO)
    ALPHA_COUNCIL_DEFAULT_ROLE         AgentRole used when none is given
    ALPHA_COUNCIL_MIN_TOTAL_WIDTH_PCT  \
    ALPHA_COUNCIL_MIN_BUY_WIDTH_PCT     |
    ALPHA_COUNCIL_MIN_SELL_WIDTH_PCT    |  caller-override policy layer
    ALPHA_COUNCIL_MIN_BELOW_PCT         |
    ALPHA_COUNCIL_MIN_ABOVE_PCT         |
    ALPHA_COUNCIL_MAX_BELOW_PCT         |
    ALPHA_COUNCIL_MAX_ABOVE_PCT        /
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

from alpha_council.exceptions import PolicyConfigError
from alpha_council.schemas.interval_output import AgentRole

logger = logging.getLogger(__name__)

ENV_PREFIX = "ALPHA_COUNCIL_"

POLICY_ENV_VARS: dict[str, str] = {
    "ALPHA_COUNCIL_MIN_TOTAL_WIDTH_PCT": "min_total_width_percent",
    "ALPHA_COUNCIL_MIN_BUY_WIDTH_PCT": "min_buy_width_percent",
    "ALPHA_COUNCIL_MIN_SELL_WIDTH_PCT": "min_sell_width_percent",
    "ALPHA_COUNCIL_MIN_BELOW_PCT": "min_below_current_percent",
    "ALPHA_COUNCIL_MIN_ABOVE_PCT": "min_above_current_percent",
    "ALPHA_COUNCIL_MAX_BELOW_PCT": "max_below_current_percent",
    "ALPHA_COUNCIL_MAX_ABOVE_PCT": "max_above_current_percent",
}

DEFAULT_LOG_LEVEL = "INFO"


def load_policy_overrides(env: Optional[Mapping[str, str]] = None) -> dict[str, float]:
    """
    Read the caller-override policy layer from the environment.

    Blank variables are ignored.

    Raises:
        PolicyConfigError: if a set variable is not a number.
    """
    env = os.environ if env is None else env
    overrides: dict[str, float] = {}
    for var, field_name in POLICY_ENV_VARS.items():
        raw = env.get(var, "").strip()
        if not raw:
            continue
        try:
            overrides[field_name] = float(raw)
        except ValueError:
            raise PolicyConfigError(f"{var}={raw!r} is not a number") from None
    if overrides:
        logger.info(f"Policy overrides from environment: {sorted(overrides)}")
    return overrides


def load_default_role(env: Optional[Mapping[str, str]] = None) -> Optional[AgentRole]:
    """Return the configured default AgentRole, if any."""
    env = os.environ if env is None else env
    raw = env.get(f"{ENV_PREFIX}DEFAULT_ROLE", "").strip().upper()
    if not raw:
        return None
    try:
        return AgentRole(raw)
    except ValueError:
        valid = ", ".join(r.value for r in AgentRole)
        raise PolicyConfigError(
            f"{ENV_PREFIX}DEFAULT_ROLE={raw!r} is not one of: {valid}"
        ) from None


def load_log_level(env: Optional[Mapping[str, str]] = None) -> int:
    """Return the logging level configured for the command-line runner."""
    env = os.environ if env is None else env
    name = env.get(f"{ENV_PREFIX}LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise PolicyConfigError(f"{ENV_PREFIX}LOG_LEVEL={name!r} is not a logging level")
    return level
