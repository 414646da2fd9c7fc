"""Tests for the crown fire model.

These tests validate Van Wagner's (1977) initiation criterion, Rothermel's
(1991) active spread rate, the fire type classification and Scott &
Reinhardt's (2001) crown fraction burned.
"""

import pytest
import numpy as np

from firebehavior.models.crown_fire import (
    ACTIVE_CROWN_ROS_FACTOR,
    calc_active_ratio,
    calc_critical_crown_fire_spread_rate,
    calc_critical_surface_fire_intensity,
    calc_crown_fraction_burned,
    calc_crowning_index,
    calc_fire_type,
    calc_power_of_wind,
    calc_transition_ratio,
)
from firebehavior.utilities.fire_util import FireType, INFINITY
from firebehavior.utilities.unit_conversions import kW_m_to_BTU_ft_s, m_to_ft


class TestFireTypeTable:
    """Tests for the (transition ratio, active ratio) classification."""

    @pytest.mark.parametrize("trans,active,expected", [
        (0.5, 0.5, FireType.SURFACE),
        (0.5, 1.5, FireType.CONDITIONAL_ACTIVE),
        (1.5, 0.5, FireType.PASSIVE),
        (1.5, 1.5, FireType.ACTIVE),
        (1.0, 1.0, FireType.ACTIVE),
    ])
    def test_table(self, trans, active, expected):
        assert calc_fire_type(trans, active) == expected

    def test_monotone_in_active_ratio(self):
        ratios = np.linspace(0.0, 3.0, 31)
        for trans in ratios:
            types = [calc_fire_type(trans, active) for active in ratios]
            assert all(a <= b for a, b in zip(types, types[1:]))

    def test_monotone_in_transition_ratio(self):
        ratios = np.linspace(0.0, 3.0, 31)
        for active in ratios:
            types = [calc_fire_type(trans, active) for trans in ratios]
            assert all(a <= b for a, b in zip(types, types[1:]))


class TestCrownEquations:
    """Tests for the standalone crown fire equations."""

    def test_critical_surface_intensity(self):
        """I_o = (0.010 * CBH * (460 + 25.9 * FMC))^1.5 in kW/m."""
        cbh_ft = m_to_ft(3.0)
        expected = kW_m_to_BTU_ft_s((0.010 * 3.0 * (460.0 + 25.9 * 100.0)) ** 1.5)
        assert calc_critical_surface_fire_intensity(1.0, cbh_ft) == pytest.approx(expected, rel=1e-4)

    def test_critical_surface_intensity_floors(self):
        """Foliar moisture is floored at 30% and base height at 0.1 m."""
        assert calc_critical_surface_fire_intensity(0.1, 10.0) == pytest.approx(
            calc_critical_surface_fire_intensity(0.3, 10.0))
        assert calc_critical_surface_fire_intensity(1.0, 0.0) == pytest.approx(
            calc_critical_surface_fire_intensity(1.0, m_to_ft(0.1)), rel=1e-6)

    def test_critical_crown_ros(self):
        """R'active = 3 / CBD (m/min, kg/m^3)."""
        cbd_lb = 0.15 / 16.0185
        assert calc_critical_crown_fire_spread_rate(cbd_lb) == pytest.approx(m_to_ft(20.0), rel=1e-6)
        assert calc_critical_crown_fire_spread_rate(0.0) == 0.0

    def test_active_ratio_guard(self):
        assert calc_active_ratio(50.0, 0.0) == 0.0
        assert calc_active_ratio(50.0, 1.0e-9) == 0.0
        assert calc_active_ratio(50.0, 100.0) == pytest.approx(0.5)

    def test_transition_ratio_guard(self):
        assert calc_transition_ratio(100.0, 0.0) == 0.0
        assert calc_transition_ratio(150.0, 100.0) == pytest.approx(1.5)

    @pytest.mark.parametrize("ros,crit,full,expected", [
        (5.0, 10.0, 30.0, 0.0),
        (20.0, 10.0, 30.0, 0.5),
        (50.0, 10.0, 30.0, 1.0),
        (20.0, 10.0, 10.0, 0.0),
    ])
    def test_crown_fraction_burned_clamped(self, ros, crit, full, expected):
        assert calc_crown_fraction_burned(ros, crit, full) == pytest.approx(expected)

    def test_crowning_index_without_canopy(self):
        assert calc_crowning_index(0.0, 3000.0, 400.0, 0.0) == 0.0
        assert calc_crowning_index(0.01, 0.0, 400.0, 0.0) == 0.0

    def test_crowning_index_decreases_with_bulk_density(self):
        sparse = calc_crowning_index(0.005, 3000.0, 400.0, 0.0)
        dense = calc_crowning_index(0.015, 3000.0, 400.0, 0.0)
        assert sparse > dense > 0.0

    def test_power_of_wind_floor(self):
        assert calc_power_of_wind(100.0, 200.0) == 0.0
        assert calc_power_of_wind(660.0, 60.0) == pytest.approx(0.00106 * 1000.0)


class TestPassiveScenario:
    """Transition ratio 1.5 with active ratio 0.5 is a passive crown fire."""

    @pytest.fixture
    def crown(self, dry_crown_fire):
        active = dry_crown_fire.active_crown_fire_ros
        cbd = calc_critical_crown_fire_spread_rate(1.0) / (2.0 * active)
        dry_crown_fire.set_canopy(60.0, 10.0, cbd, 1.0)
        crit_fli = dry_crown_fire.critical_surface_fire_fli
        dry_crown_fire.set_surface_fire(10.0, 1.5 * crit_fli, 500.0)
        return dry_crown_fire

    def test_ratios(self, crown):
        assert crown.transition_ratio == pytest.approx(1.5)
        assert crown.active_ratio == pytest.approx(0.5)

    def test_classification(self, crown):
        assert crown.fire_type == FireType.PASSIVE
        assert crown.is_crown_fire
        assert crown.is_passive_crown_fire
        assert not crown.is_active_crown_fire
        assert not crown.is_surface_fire

    def test_passive_values_without_surface_model(self, crown):
        """Supplied by value, the crown fraction burned is 0 and passive equals surface."""
        assert crown.crown_fraction_burned == 0.0
        assert crown.final_fire_ros == pytest.approx(10.0)
        assert crown.final_fire_fli == crown.behavior.passive_fli


class TestCrownFireModel:
    """Tests for the stateful crown fire model."""

    def test_active_ros_from_fuel_model_10(self, dry_crown_fire):
        fm10 = dry_crown_fire.fuel_model_10
        assert fm10.midflame_wind_speed == pytest.approx(0.4 * 20.0 * 88.0)
        assert fm10.slope_fraction == 0.0
        assert dry_crown_fire.active_crown_fire_ros == pytest.approx(
            ACTIVE_CROWN_ROS_FACTOR * fm10.spread_rate_at_head)
        assert dry_crown_fire.active_crown_fire_ros > 0.0

    def test_crown_length_to_width(self, dry_crown_fire):
        assert dry_crown_fire.crown_fire_lw_ratio == pytest.approx(1.0 + 0.125 * 20.0)

    def test_no_canopy(self, dry_crown_fire, timber_litter_fire):
        dry_crown_fire.set_canopy(0.0, 0.0, 0.0, 1.0)
        dry_crown_fire.attach_surface_fire(timber_litter_fire)
        assert dry_crown_fire.active_ratio == 0.0
        assert dry_crown_fire.crown_fraction_burned == 0.0
        assert dry_crown_fire.critical_crown_fire_ros == 0.0

    def test_defaults_before_surface_fire(self, dry_crown_fire):
        assert dry_crown_fire.fire_type == FireType.SURFACE
        assert dry_crown_fire.behavior.critical_surface_ros == INFINITY

    def test_attached_surface_fire(self, dry_crown_fire, timber_litter_fire):
        dry_crown_fire.set_canopy(60.0, 3.0, 0.011, 1.0)
        dry_crown_fire.attach_surface_fire(timber_litter_fire)
        b = dry_crown_fire.behavior

        assert b.surface_ros == timber_litter_fire.spread_rate_at_head
        assert 0.0 <= dry_crown_fire.crown_fraction_burned <= 1.0
        if dry_crown_fire.is_surface_fire:
            assert dry_crown_fire.final_fire_ros == b.surface_ros
        elif dry_crown_fire.is_passive_crown_fire:
            assert dry_crown_fire.final_fire_ros == b.passive_ros
        else:
            assert dry_crown_fire.final_fire_ros == dry_crown_fire.active_crown_fire_ros
        active = dry_crown_fire.active_crown_fire_ros
        assert min(b.surface_ros, active) <= b.passive_ros <= max(b.surface_ros, active)

    def test_low_canopy_base_torches(self, dry_crown_fire, timber_litter_fire):
        """A very low canopy base puts an intense surface fire into the crowns."""
        dry_crown_fire.set_canopy(60.0, 0.5, 0.011, 0.8)
        dry_crown_fire.attach_surface_fire(timber_litter_fire)
        assert dry_crown_fire.transition_ratio >= 1.0
        assert dry_crown_fire.is_crown_fire

    def test_idempotent_canopy(self, dry_crown_fire, timber_litter_fire):
        dry_crown_fire.set_canopy(60.0, 3.0, 0.011, 1.0)
        dry_crown_fire.attach_surface_fire(timber_litter_fire)
        first = dry_crown_fire.behavior.to_dict()
        dry_crown_fire.set_canopy(60.0, 3.0, 0.011, 1.0)
        assert dry_crown_fire.behavior.to_dict() == first

    def test_wind_change_recomputes(self, dry_crown_fire, timber_litter_fire):
        dry_crown_fire.set_canopy(60.0, 3.0, 0.011, 1.0)
        dry_crown_fire.attach_surface_fire(timber_litter_fire)
        ratio = dry_crown_fire.active_ratio
        dry_crown_fire.set_wind(40.0 * 88.0)
        assert dry_crown_fire.active_ratio > ratio

    def test_elapsed_time_size(self, dry_crown_fire, timber_litter_fire):
        dry_crown_fire.set_canopy(60.0, 3.0, 0.011, 1.0)
        dry_crown_fire.attach_surface_fire(timber_litter_fire)
        dry_crown_fire.set_time(30.0)
        size = dry_crown_fire.size
        assert size.elapsed == 30.0
        assert size.active_length == pytest.approx(30.0 * dry_crown_fire.active_crown_fire_ros)
        assert size.active_width == pytest.approx(size.active_length / dry_crown_fire.crown_fire_lw_ratio)
        assert size.passive_length == pytest.approx(30.0 * dry_crown_fire.behavior.passive_ros)
