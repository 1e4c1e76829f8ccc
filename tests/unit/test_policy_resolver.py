"""
Policy Resolver — Unit Tests
Tests for policy_layers(), merge_policy_layers() and
resolve_validation_options().
"""

from __future__ import annotations

import pytest

from alpha_council.config.constants import DEFAULT_VALIDATION_OPTIONS
from alpha_council.schemas.interval_output import AgentRole
from alpha_council.tools.policy_resolver import (
    merge_policy_layers,
    policy_layers,
    resolve_validation_options,
)
from tests.fixtures.conftest import make_context


class TestPolicyLayers:

    @pytest.mark.schema
    def test_default_only(self):
        layers = policy_layers()
        assert layers == [DEFAULT_VALIDATION_OPTIONS]

    @pytest.mark.schema
    def test_layer_order(self):
        """default -> industry -> role -> override."""
        overrides = {"min_buy_width_percent": 9.0}
        layers = policy_layers(make_context(industry="科技"), AgentRole.GM, overrides)
        assert len(layers) == 4
        assert layers[1]["min_buy_width_percent"] == 6.0
        assert layers[2]["min_buy_width_percent"] == 4.0
        assert layers[3] is overrides

    @pytest.mark.schema
    def test_unknown_industry_is_empty_layer(self):
        layers = policy_layers(make_context(industry="航天"))
        assert layers[1] == {}


class TestMergePolicyLayers:

    @pytest.mark.schema
    def test_later_layer_wins_per_field(self):
        merged = merge_policy_layers([
            {"min_buy_width_percent": 4.0, "min_sell_width_percent": 5.0},
            {"min_buy_width_percent": 6.0},
        ])
        assert merged == {"min_buy_width_percent": 6.0, "min_sell_width_percent": 5.0}

    @pytest.mark.schema
    def test_unknown_fields_ignored(self):
        merged = merge_policy_layers([{"min_buy_width_percent": 4.0, "bogus": 1.0}])
        assert merged == {"min_buy_width_percent": 4.0}

    @pytest.mark.schema
    def test_none_does_not_clear(self):
        merged = merge_policy_layers([
            {"max_below_current_percent": 25.0},
            {"max_below_current_percent": None},
        ])
        assert merged["max_below_current_percent"] == 25.0


class TestResolveValidationOptions:

    @pytest.mark.schema
    def test_no_context_gives_default(self):
        options = resolve_validation_options()
        assert options.model_dump() == dict(DEFAULT_VALIDATION_OPTIONS)

    @pytest.mark.schema
    def test_industry_layer(self):
        """科技 overrides the default widths and caps."""
        options = resolve_validation_options(make_context(industry="科技"))
        assert options.min_buy_width_percent == 6.0
        assert options.min_total_width_percent == 18.0
        assert options.max_below_current_percent == 30.0
        assert options.max_above_current_percent == 40.0

    @pytest.mark.schema
    def test_role_over_industry(self):
        """金融 + GM: role minimums win, industry caps survive."""
        options = resolve_validation_options(make_context(industry="金融"), AgentRole.GM)
        assert options.min_total_width_percent == 12.0
        assert options.min_buy_width_percent == 4.0
        assert options.min_sell_width_percent == 5.0
        assert options.min_below_current_percent == 6.0
        assert options.min_above_current_percent == 10.0
        assert options.max_below_current_percent == 15.0
        assert options.max_above_current_percent == 25.0

    @pytest.mark.schema
    def test_role_as_string(self):
        options = resolve_validation_options(agent_role="technical")
        assert options.min_above_current_percent == 8.0
        assert options.min_below_current_percent == 5.0

    @pytest.mark.schema
    def test_role_without_layer(self):
        """MACRO emits no bands and has no role layer."""
        options = resolve_validation_options(agent_role=AgentRole.MACRO)
        assert options.model_dump() == dict(DEFAULT_VALIDATION_OPTIONS)

    @pytest.mark.schema
    def test_unknown_role_ignored(self):
        options = resolve_validation_options(agent_role="INTERN")
        assert options.model_dump() == dict(DEFAULT_VALIDATION_OPTIONS)

    @pytest.mark.schema
    def test_override_wins(self):
        options = resolve_validation_options(
            make_context(industry="科技"),
            AgentRole.TECHNICAL,
            {"min_buy_width_percent": 7.5, "max_above_current_percent": 50},
        )
        assert options.min_buy_width_percent == 7.5
        assert options.max_above_current_percent == 50.0
        assert options.min_above_current_percent == 8.0
