"""Tests for moisture damping, live extinction moisture and reaction intensity."""

import pytest
import numpy as np

from firebehavior.exceptions import ValidationError
from firebehavior.models.fuel_bed import calc_fuel_bed_intermediates
from firebehavior.models.moisture import (
    CHAMISE_LIVE_MEXT,
    calc_moisture_damping,
    heat_of_preignition,
    moisture_damping_coefficient,
)


class TestDampingCoefficient:
    """Tests for 1 - 2.59r + 5.11r^2 - 3.52r^3."""

    def test_dry_fuel(self):
        assert moisture_damping_coefficient(0.0, 0.12) == pytest.approx(1.0)

    def test_half_extinction(self):
        assert moisture_damping_coefficient(0.06, 0.12) == pytest.approx(
            1.0 - 2.59 * 0.5 + 5.11 * 0.25 - 3.52 * 0.125)

    def test_at_and_above_extinction(self):
        assert moisture_damping_coefficient(0.12, 0.12) == 0.0
        assert moisture_damping_coefficient(0.30, 0.12) == 0.0

    def test_zero_extinction_moisture(self):
        assert moisture_damping_coefficient(0.05, 0.0) == 0.0


def test_heat_of_preignition():
    """Qig = 250 + 1116 * moisture."""
    assert heat_of_preignition(0.1) == pytest.approx(361.6)


class TestCalcMoistureDamping:
    """Tests for applying particle moistures to a fuel bed."""

    def test_wrong_moisture_count_raises(self, timber_grass_bed):
        intermediates = calc_fuel_bed_intermediates(timber_grass_bed)
        with pytest.raises(ValidationError):
            calc_moisture_damping(timber_grass_bed, intermediates, [0.06, 0.07])

    def test_defaults_to_particle_moistures(self, timber_grass_bed):
        intermediates = calc_fuel_bed_intermediates(timber_grass_bed)
        implicit = calc_moisture_damping(timber_grass_bed, intermediates)
        explicit = calc_moisture_damping(timber_grass_bed, intermediates,
                                         timber_grass_bed.moistures)
        assert implicit.total_rx_int == explicit.total_rx_int
        assert implicit.ros0 == explicit.ros0

    def test_total_is_sum_of_damped_life_intensities(self, timber_grass_bed):
        intermediates = calc_fuel_bed_intermediates(timber_grass_bed)
        damping = calc_moisture_damping(timber_grass_bed, intermediates)
        expected = np.sum(intermediates.life_rx_dry * damping.life_eta_m)
        assert damping.total_rx_int == pytest.approx(expected)
        assert damping.dead_rx_int + damping.live_rx_int == pytest.approx(expected)

    def test_no_live_fuel_uses_dead_extinction(self, short_grass_bed):
        intermediates = calc_fuel_bed_intermediates(short_grass_bed)
        damping = calc_moisture_damping(short_grass_bed, intermediates)
        assert damping.live_mext == pytest.approx(short_grass_bed.dead_mext)
        assert damping.fine_dead_moisture == 0.0

    def test_live_extinction_floored_at_dead(self, timber_grass_bed):
        """Dead fine fuel at extinction drives the computed live value below the floor."""
        intermediates = calc_fuel_bed_intermediates(timber_grass_bed)
        mext = timber_grass_bed.dead_mext
        damping = calc_moisture_damping(timber_grass_bed, intermediates, [mext, mext, mext, 1.0])
        assert damping.live_mext_calculated == pytest.approx(mext)

    def test_live_extinction_computed(self, timber_grass_bed):
        intermediates = calc_fuel_bed_intermediates(timber_grass_bed)
        damping = calc_moisture_damping(timber_grass_bed, intermediates)
        expected = (intermediates.live_mext_k
                    * (1.0 - damping.fine_dead_moisture / timber_grass_bed.dead_mext) - 0.226)
        assert damping.live_mext_calculated == pytest.approx(max(expected, timber_grass_bed.dead_mext))
        assert damping.live_mext == damping.live_mext_calculated

    def test_override_above_threshold_applies(self, timber_grass_bed):
        intermediates = calc_fuel_bed_intermediates(timber_grass_bed)
        damping = calc_moisture_damping(timber_grass_bed, intermediates,
                                        live_mext_override=CHAMISE_LIVE_MEXT)
        assert damping.live_mext == pytest.approx(CHAMISE_LIVE_MEXT)
        assert damping.life_mext[1] == pytest.approx(CHAMISE_LIVE_MEXT)

    def test_override_at_or_below_threshold_ignored(self, timber_grass_bed):
        intermediates = calc_fuel_bed_intermediates(timber_grass_bed)
        damping = calc_moisture_damping(timber_grass_bed, intermediates, live_mext_override=0.4)
        assert damping.live_mext == damping.live_mext_calculated

    def test_fuel_at_extinction_has_no_spread(self, short_grass_bed):
        intermediates = calc_fuel_bed_intermediates(short_grass_bed)
        damping = calc_moisture_damping(short_grass_bed, intermediates, [0.20])
        assert damping.total_rx_int == 0.0
        assert damping.ros0 == 0.0

    def test_wetter_fuel_spreads_slower(self, short_grass_bed):
        intermediates = calc_fuel_bed_intermediates(short_grass_bed)
        dry = calc_moisture_damping(short_grass_bed, intermediates, [0.03])
        wet = calc_moisture_damping(short_grass_bed, intermediates, [0.09])
        assert dry.ros0 > wet.ros0 > 0.0
        assert dry.rb_qig < wet.rb_qig
