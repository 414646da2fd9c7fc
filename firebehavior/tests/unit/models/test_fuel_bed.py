"""Tests for fuel bed description and Rothermel fuel bed intermediates.

Expected values follow Rothermel (1972) and Albini (1976).
"""

import pytest
import numpy as np

from firebehavior.models.fuel_bed import (
    FuelBed,
    FuelParticle,
    calc_fuel_bed_intermediates,
    size_class,
)
from firebehavior.utilities.fire_util import LifeCategory


class TestSizeClass:
    """Tests for size class assignment from savr."""

    @pytest.mark.parametrize("savr,expected", [
        (3500.0, 0),
        (1200.0, 0),
        (1199.0, 1),
        (192.0, 1),
        (109.0, 2),
        (50.0, 3),
        (30.0, 4),
        (10.0, 5),
        (0.0, 5),
    ])
    def test_boundaries(self, savr, expected):
        """Particles belong to the first class whose boundary does not exceed savr."""
        assert size_class(savr) == expected

    def test_particle_property(self):
        particle = FuelParticle(life=LifeCategory.DEAD, load=0.1, savr=109.0)
        assert particle.size_class == 2
        assert particle.is_dead


class TestFuelBed:
    """Tests for FuelBed totals."""

    def test_load_conservation(self, timber_grass_bed):
        """Total load is the sum of particle loads."""
        expected = sum(p.load for p in timber_grass_bed.particles)
        assert timber_grass_bed.total_load == pytest.approx(expected, rel=1e-12)

    def test_live_and_dead_partition(self, timber_grass_bed):
        assert len(timber_grass_bed.dead_particles) == 3
        assert len(timber_grass_bed.live_particles) == 1
        assert timber_grass_bed.has_live_fuel

    def test_moistures_in_particle_order(self, timber_grass_bed):
        assert timber_grass_bed.moistures == [0.06, 0.07, 0.08, 0.60]


class TestSingleParticleIntermediates:
    """Intermediates of a bed holding a single fine dead particle."""

    @pytest.fixture
    def intermediates(self, one_hour_fuel_bed):
        return calc_fuel_bed_intermediates(one_hour_fuel_bed)

    def test_sigma_is_particle_savr(self, intermediates):
        assert intermediates.sigma == pytest.approx(3500.0)

    def test_packing_and_bulk_density(self, intermediates):
        """Packing ratio = load / density / depth; bulk density = load / depth."""
        assert intermediates.packing_ratio == pytest.approx(0.034 / 32.0)
        assert intermediates.bulk_density == pytest.approx(0.034)

    def test_optimum_packing_ratio(self, intermediates):
        """beta_opt = 3.348 * sigma^-0.8189."""
        assert intermediates.beta_opt == pytest.approx(3.348 * 3500.0 ** -0.8189, rel=1e-9)
        assert intermediates.beta_ratio == pytest.approx(
            intermediates.packing_ratio / intermediates.beta_opt, rel=1e-9)

    def test_residence_time_and_heating_number(self, intermediates):
        assert intermediates.res_time == pytest.approx(384.0 / 3500.0)
        assert intermediates.epsilon == pytest.approx(np.exp(-138.0 / 3500.0))

    def test_mineral_damping(self, intermediates):
        """eta_s = min(1, 0.174 * Seff^-0.19) with Seff = 0.01."""
        expected = min(1.0, 0.174 * 0.01 ** -0.19)
        assert intermediates.life_eta_s[LifeCategory.DEAD] == pytest.approx(expected)

    def test_wind_coefficients_are_consistent(self, intermediates):
        """wind_e is the inverse of wind_k."""
        assert intermediates.wind_k * intermediates.wind_e == pytest.approx(1.0, rel=1e-9)

    def test_no_live_contribution(self, intermediates):
        assert intermediates.live_rx_dry == 0.0
        assert intermediates.live_mext_k == 0.0
        assert intermediates.dead_rx_dry > 0.0


class TestMixedBedIntermediates:
    """Intermediates of a bed with dead and live fuel."""

    @pytest.fixture
    def intermediates(self, timber_grass_bed):
        return calc_fuel_bed_intermediates(timber_grass_bed)

    def test_size_class_weights_sum_to_one(self, intermediates):
        """Per-life size class weights sum to 1 when the life category has area."""
        for life in (LifeCategory.DEAD, LifeCategory.LIVE):
            assert np.sum(intermediates.life_swtg[life]) == pytest.approx(1.0)

    def test_life_weights_sum_to_one(self, intermediates):
        assert np.sum(intermediates.life_awtg) == pytest.approx(1.0)

    def test_live_extinction_constant(self, intermediates):
        """liveMextK = 2.9 * deadFine / liveFine."""
        dead_fine = intermediates.life_fine[LifeCategory.DEAD]
        live_fine = intermediates.life_fine[LifeCategory.LIVE]
        assert intermediates.live_mext_k == pytest.approx(2.9 * dead_fine / live_fine)

    def test_fine_fuel_sums(self, timber_grass_bed, intermediates):
        live = timber_grass_bed.live_particles[0]
        assert intermediates.life_fine[LifeCategory.LIVE] == pytest.approx(
            live.load * np.exp(-500.0 / live.savr))

    def test_sigma_between_particle_savrs(self, intermediates):
        assert 30.0 < intermediates.sigma < 3000.0

    def test_idempotent(self, timber_grass_bed, intermediates):
        """Recomputing from the same bed yields identical state."""
        again = calc_fuel_bed_intermediates(timber_grass_bed)
        assert again.sigma == intermediates.sigma
        assert again.prop_flux == intermediates.prop_flux
        np.testing.assert_array_equal(again.life_rx_dry, intermediates.life_rx_dry)
        np.testing.assert_array_equal(again.s_wtg, intermediates.s_wtg)


class TestDegenerateBeds:
    """Guards for beds that cannot burn."""

    def test_zero_depth(self):
        bed = FuelBed(depth=0.0, dead_mext=0.25,
                      particles=[FuelParticle(life=LifeCategory.DEAD, load=0.1, savr=2000.0)])
        out = calc_fuel_bed_intermediates(bed)
        assert out.total_load == pytest.approx(0.1)
        assert out.packing_ratio == 0.0
        assert out.bulk_density == 0.0
        assert out.sigma == 0.0

    def test_no_particles(self):
        out = calc_fuel_bed_intermediates(FuelBed(depth=1.0, dead_mext=0.25))
        assert out.num_particles == 0
        assert out.total_load == 0.0
        assert out.res_time == 0.0

    def test_zero_density_particle_has_no_area(self):
        bed = FuelBed(depth=1.0, dead_mext=0.25,
                      particles=[FuelParticle(life=LifeCategory.DEAD, load=0.1, savr=2000.0,
                                              density=0.0)])
        out = calc_fuel_bed_intermediates(bed)
        assert out.total_area == 0.0
        assert out.prop_flux == 0.0
