"""
Overlap Resolver — Unit Tests
Tests for minimum_gap() and resolve_overlap().
"""

from __future__ import annotations

import pytest

from alpha_council.tools.overlap_resolver import minimum_gap, resolve_overlap


class TestMinimumGap:

    @pytest.mark.schema
    def test_price_term_dominates_when_bands_touch(self):
        assert minimum_gap(100.0, 101.0) == pytest.approx(2.0)

    @pytest.mark.schema
    def test_raw_term_dominates_for_wide_gap(self):
        """10% of a 30-point gap beats 2% of 100."""
        assert minimum_gap(100.0, 130.0) == pytest.approx(3.0)


class TestResolveOverlap:

    @pytest.mark.schema
    def test_separated_bands_untouched(self):
        result = resolve_overlap((85.0, 90.0), (110.0, 115.0))
        assert result.band == (110.0, 115.0)
        assert result.adjustments == ()
        assert result.warnings == ()

    @pytest.mark.schema
    def test_crowded_bands_shifted(self):
        """Overlap 1 plus two gap-widths of 2 moves the sell band by 5."""
        result = resolve_overlap((90.0, 100.0), (101.0, 110.0))
        assert result.band == (pytest.approx(106.0), pytest.approx(115.0))
        assert result.adjustments == ("买入卖出区间过于接近，已增加间隔5.00元",)

    @pytest.mark.schema
    def test_overlapping_bands_shifted(self):
        result = resolve_overlap((90.0, 100.0), (95.0, 110.0))
        assert result.band == (pytest.approx(106.0), pytest.approx(121.0))
        assert result.adjustments == ("买入卖出区间过于接近，已增加间隔11.00元",)

    @pytest.mark.schema
    def test_sell_width_preserved(self):
        result = resolve_overlap((90.0, 100.0), (95.0, 110.0))
        assert result.band[1] - result.band[0] == pytest.approx(15.0)

    @pytest.mark.schema
    def test_exact_gap_boundary_shifts(self):
        """buy_high == sell_low - gap is not strictly below, so it shifts."""
        result = resolve_overlap((90.0, 100.0), (102.0, 110.0))
        assert result.band[0] > 102.0

    @pytest.mark.behavior
    def test_shift_can_stay_inside_min_distance_above(self):
        """
        The gap formula is applied literally: after separating the bands the
        sell band may still sit closer than 10% above a price of 100.
        """
        result = resolve_overlap((80.0, 96.0), (96.5, 105.0))
        assert result.adjustments == ("买入卖出区间过于接近，已增加间隔5.26元",)
        assert result.band[0] == pytest.approx(101.76)
        assert result.band[0] - 100.0 < 10.0
        assert result.band[0] - 96.0 > minimum_gap(96.0, 96.5)
