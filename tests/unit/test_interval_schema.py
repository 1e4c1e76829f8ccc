"""
Interval Validator — Schema Tests
Level 1: Pure Pydantic validation, no file I/O.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from alpha_council.config.constants import (
    AGENT_VALIDATION_OPTIONS,
    DEFAULT_VALIDATION_OPTIONS,
    INDUSTRY_INTERVAL_SETTINGS,
    POLICY_FIELDS,
)
from alpha_council.exceptions import (
    AlphaCouncilException,
    IntervalValidationError,
    InvalidCurrentPriceError,
)
from alpha_council.schemas.interval_output import (
    AdjustedInterval,
    AgentRole,
    IntervalValidationOptions,
    IntervalValidationOutput,
    PriceInterval,
    StockContext,
    ValidationResult,
)
from tests.fixtures.conftest import make_context, make_interval


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_result(meets: bool = True) -> ValidationResult:
    return ValidationResult(
        meets_standards=meets,
        total_width_percent=33.0,
        buy_width_percent=4.7,
        sell_width_percent=8.2,
        below_current_percent=9.8,
        above_current_percent=10.3,
    )


def _make_adjusted(**overrides) -> AdjustedInterval:
    fields = dict(
        buy_range=(85.5, 90.2),
        sell_range=(110.3, 118.5),
        stop_loss=82.0,
        validation_result=_make_result(),
    )
    fields.update(overrides)
    return AdjustedInterval(**fields)


# ---------------------------------------------------------------------------
# Constants Tests
# ---------------------------------------------------------------------------

class TestPolicyTables:

    @pytest.mark.schema
    def test_default_policy_complete(self):
        """Global default defines every policy field."""
        assert set(DEFAULT_VALIDATION_OPTIONS) == set(POLICY_FIELDS)

    @pytest.mark.schema
    def test_default_policy_values(self):
        assert DEFAULT_VALIDATION_OPTIONS["min_total_width_percent"] == 12.0
        assert DEFAULT_VALIDATION_OPTIONS["min_buy_width_percent"] == 4.0
        assert DEFAULT_VALIDATION_OPTIONS["min_sell_width_percent"] == 5.0
        assert DEFAULT_VALIDATION_OPTIONS["min_below_current_percent"] == 6.0
        assert DEFAULT_VALIDATION_OPTIONS["min_above_current_percent"] == 10.0
        assert DEFAULT_VALIDATION_OPTIONS["max_below_current_percent"] == 25.0
        assert DEFAULT_VALIDATION_OPTIONS["max_above_current_percent"] == 35.0

    @pytest.mark.schema
    def test_seven_industries(self):
        assert set(INDUSTRY_INTERVAL_SETTINGS) == {
            "科技", "医药", "新能源", "消费", "制造", "金融", "公用事业",
        }

    @pytest.mark.schema
    def test_industry_layers_only_known_fields(self):
        for name, layer in INDUSTRY_INTERVAL_SETTINGS.items():
            assert set(layer) <= set(POLICY_FIELDS), name

    @pytest.mark.schema
    def test_role_layers_keyed_by_agent_role(self):
        """Every role layer key is a valid AgentRole value."""
        for key in AGENT_VALIDATION_OPTIONS:
            assert AgentRole(key).value == key

    @pytest.mark.schema
    def test_tables_read_only(self):
        """Policy tables cannot be mutated by callers."""
        with pytest.raises(TypeError):
            DEFAULT_VALIDATION_OPTIONS["min_buy_width_percent"] = 1.0  # type: ignore[index]


# ---------------------------------------------------------------------------
# Input Model Tests
# ---------------------------------------------------------------------------

class TestPriceInterval:

    @pytest.mark.schema
    def test_stop_loss_optional(self):
        interval = PriceInterval(buy_range=(85.0, 90.0), sell_range=(110.0, 115.0))
        assert interval.stop_loss is None

    @pytest.mark.schema
    def test_raw_input_may_be_unordered(self):
        """Raw intervals are repaired later, not rejected on construction."""
        interval = make_interval(buy=(95.0, 90.0), sell=(115.0, 110.0))
        assert interval.buy_range == (95.0, 90.0)

    @pytest.mark.schema
    def test_frozen(self):
        interval = make_interval()
        with pytest.raises(ValidationError):
            interval.stop_loss = 70.0


class TestStockContext:

    @pytest.mark.schema
    def test_optional_measures_default_none(self):
        ctx = make_context()
        assert ctx.current_price == 100.0
        assert ctx.atr_20d is None
        assert ctx.industry is None
        assert ctx.market_cap is None

    @pytest.mark.schema
    def test_negative_volume_rejected(self):
        with pytest.raises(ValidationError):
            StockContext(current_price=100.0, volume=-1)

    @pytest.mark.schema
    def test_non_positive_price_accepted_by_model(self):
        """The price check belongs to the validation entry point."""
        assert StockContext(current_price=0.0).current_price == 0.0


class TestIntervalValidationOptions:

    @pytest.mark.schema
    def test_max_caps_optional(self):
        options = IntervalValidationOptions(
            min_total_width_percent=12,
            min_buy_width_percent=4,
            min_sell_width_percent=5,
            min_below_current_percent=6,
            min_above_current_percent=10,
        )
        assert options.max_below_current_percent is None
        assert options.max_above_current_percent is None

    @pytest.mark.schema
    def test_minimums_required(self):
        with pytest.raises(ValidationError):
            IntervalValidationOptions(min_total_width_percent=12)


# ---------------------------------------------------------------------------
# Output Model Tests
# ---------------------------------------------------------------------------

class TestAdjustedInterval:

    @pytest.mark.schema
    def test_valid(self):
        adjusted = _make_adjusted(adjustments=("a",), warnings=("w",))
        assert adjusted.adjustments == ("a",)
        assert adjusted.warnings == ("w",)

    @pytest.mark.schema
    def test_logs_default_empty(self):
        adjusted = _make_adjusted()
        assert adjusted.adjustments == ()
        assert adjusted.warnings == ()

    @pytest.mark.schema
    def test_inverted_band_rejected(self):
        with pytest.raises(ValidationError, match="0 < low < high"):
            _make_adjusted(buy_range=(90.2, 85.5))

    @pytest.mark.schema
    def test_non_positive_band_rejected(self):
        with pytest.raises(ValidationError):
            _make_adjusted(sell_range=(0.0, 118.5))

    @pytest.mark.schema
    def test_frozen(self):
        adjusted = _make_adjusted()
        with pytest.raises(ValidationError):
            adjusted.stop_loss = 80.0


class TestIntervalValidationOutput:

    @pytest.mark.schema
    def test_empty_report_rejected(self):
        with pytest.raises(ValidationError):
            IntervalValidationOutput(
                extracted=make_interval(),
                adjusted=_make_adjusted(),
                policy=IntervalValidationOptions(**DEFAULT_VALIDATION_OPTIONS),
                report="",
            )

    @pytest.mark.schema
    def test_policy_source_restricted(self):
        with pytest.raises(ValidationError):
            IntervalValidationOutput(
                extracted=make_interval(),
                adjusted=_make_adjusted(),
                policy=IntervalValidationOptions(**DEFAULT_VALIDATION_OPTIONS),
                policy_source="guessed",
                report="## report",
            )

    @pytest.mark.schema
    def test_json_round_trip_keeps_role(self):
        output = IntervalValidationOutput(
            agent_role=AgentRole.GM,
            extracted=make_interval(),
            adjusted=_make_adjusted(),
            policy=IntervalValidationOptions(**DEFAULT_VALIDATION_OPTIONS),
            report="## report",
        )
        restored = IntervalValidationOutput.model_validate_json(output.model_dump_json())
        assert restored.agent_role is AgentRole.GM
        assert restored.adjusted.buy_range == (85.5, 90.2)


# ---------------------------------------------------------------------------
# Exception Tests
# ---------------------------------------------------------------------------

class TestExceptions:

    @pytest.mark.schema
    def test_invalid_price_hierarchy(self):
        err = InvalidCurrentPriceError(-1.0)
        assert isinstance(err, IntervalValidationError)
        assert isinstance(err, AlphaCouncilException)
        assert err.current_price == -1.0
        assert err.error_code == "InvalidCurrentPriceError"
        assert "当前价格必须大于0" in err.message
