"""
Interval Validator Tool: CrewAI wrapper
Lets a council agent (typically the technical analyst or the GM) check its
own band proposal before answering. Requires the `agents` extra (crewai).
"""

from __future__ import annotations

import logging
from typing import Optional

from crewai.tools import BaseTool
from pydantic import BaseModel, Field

from alpha_council.agents.interval_validator import run_interval_validation_pipeline
from alpha_council.schemas.interval_output import StockContext

logger = logging.getLogger(__name__)

NO_INTERVAL_MESSAGE = (
    "未能从文本中提取完整的买入/卖出区间。请使用格式：买入区间：下限 - 上限；卖出区间：下限 - 上限；止损：价格"
)


class IntervalValidatorInput(BaseModel):
    """Input schema for IntervalValidatorTool."""

    text: str = Field(..., description="Agent answer containing 买入区间/卖出区间/止损 lines")
    current_price: float = Field(..., gt=0, description="Current stock price")
    industry: Optional[str] = Field(None, description="Industry name, e.g. 科技, 金融")
    atr_20d: Optional[float] = Field(None, description="20-day ATR in currency units")
    agent_role: Optional[str] = Field(None, description="Producer role, e.g. TECHNICAL or GM")


class IntervalValidatorTool(BaseTool):
    """Extract and normalize the trading bands in an agent answer."""

    name: str = "interval_validator"
    description: str = (
        "Extract buy band, sell band and stop-loss from an analysis text, "
        "repair them against width/distance/separation policy and return a "
        "validation report listing every adjustment."
    )
    args_schema: type[BaseModel] = IntervalValidatorInput

    def _run(
        self,
        text: str,
        current_price: float,
        industry: Optional[str] = None,
        atr_20d: Optional[float] = None,
        agent_role: Optional[str] = None,
    ) -> str:
        context = StockContext(current_price=current_price, industry=industry, atr_20d=atr_20d)
        output = run_interval_validation_pipeline(text, context, agent_role=agent_role)
        if output is None:
            return NO_INTERVAL_MESSAGE
        return output.report
