"""Shared pytest fixtures for the firebehavior test suite.

This module provides reusable fuel beds, configured surface fires and run
configurations for testing the fire behavior models.
"""

import pytest


# ============================================================================
# Fuel Bed Fixtures
# ============================================================================

@pytest.fixture
def one_hour_fuel_bed():
    """Provide a fuel bed of uniform 1-h dead fuel.

    Returns:
        FuelBed: 1 ft deep, dead extinction moisture 25%, one fine dead
            particle at 10% moisture.
    """
    from firebehavior.models.fuel_bed import FuelBed, FuelParticle
    from firebehavior.utilities.fire_util import LifeCategory

    return FuelBed(
        depth=1.0,
        dead_mext=0.25,
        particles=[FuelParticle(life=LifeCategory.DEAD, load=0.034, savr=3500.0, moisture=0.10)],
    )


@pytest.fixture
def short_grass_bed():
    """Provide Anderson fuel model 1 (short grass) at 6% dead moisture."""
    from firebehavior.models.fuel_models import Anderson13
    return Anderson13(1).to_fuel_bed([0.06, 0.07, 0.08, 0.60, 0.90])


@pytest.fixture
def timber_grass_bed():
    """Provide Anderson fuel model 2 (timber grass and understory).

    Returns:
        FuelBed: Three dead classes and live herbaceous fuel.
    """
    from firebehavior.models.fuel_models import Anderson13
    return Anderson13(2).to_fuel_bed([0.06, 0.07, 0.08, 0.60, 0.90])


# ============================================================================
# Surface Fire Fixtures
# ============================================================================

@pytest.fixture
def short_grass_fire(short_grass_bed):
    """Provide a surface fire in short grass with moisture set, no site yet."""
    from firebehavior.models.surface_fire import SurfaceFire

    fire = SurfaceFire()
    fire.set_fuel_bed(short_grass_bed)
    fire.set_moisture(short_grass_bed.moistures)
    return fire


@pytest.fixture
def timber_litter_fire():
    """Provide a fuel model 10 surface fire on a 30% slope.

    Returns:
        SurfaceFire: 5 mi/h mid-flame wind blowing upslope.
    """
    from firebehavior.models.fuel_models import Anderson13
    from firebehavior.models.surface_fire import SurfaceFire

    bed = Anderson13(10).to_fuel_bed([0.04, 0.05, 0.06, 0.60, 0.80])
    fire = SurfaceFire()
    fire.set_fuel_bed(bed)
    fire.set_moisture(bed.moistures)
    fire.set_site(0.3, 180.0, 5.0 * 88.0, 0.0)
    return fire


# ============================================================================
# Crown Fire Fixtures
# ============================================================================

@pytest.fixture
def dry_crown_fire():
    """Provide a crown fire model with dry fuel model 10 moistures and a 20 mi/h wind."""
    from firebehavior.models.crown_fire import CrownFire

    crown = CrownFire()
    crown.set_moisture([0.04, 0.05, 0.06, 0.80])
    crown.set_wind(20.0 * 88.0)
    return crown


# ============================================================================
# Run Configuration Fixtures
# ============================================================================

@pytest.fixture
def run_config_dict():
    """Provide a two scenario run configuration mapping.

    The second scenario carries a canopy and is classified for crown fire.
    """
    return {
        "description": "Grass and timber",
        "scenarios": [
            {
                "name": "grass",
                "fuel_model": 1,
                "moisture": {"dead_1h": 0.06},
                "site": {"midflame_wind_mph": 5.0, "slope": 0.2},
                "elapsed_min": 60.0,
            },
            {
                "name": "timber",
                "fuel_model": 10,
                "moisture": {"dead_1h": 0.04, "dead_10h": 0.05, "dead_100h": 0.06,
                             "live_woody": 0.8},
                "site": {"midflame_wind_mph": 4.0, "wind_20ft_mph": 20.0, "slope": 0.3},
                "canopy": {"height": 60.0, "base_height": 6.0, "bulk_density": 0.011,
                           "foliar_moisture": 1.0},
            },
        ],
    }
