"""firebehavior - deterministic surface, crown and chaparral fire behavior."""

from firebehavior.models.fuel_bed import FuelBed, FuelParticle
from firebehavior.models.surface_fire import SurfaceFire
from firebehavior.models.crown_fire import CrownFire
from firebehavior.models.chaparral import ChaparralFuel, ChamiseAllometry, MixedBrushAllometry
from firebehavior.models.fuel_models import Anderson13
from firebehavior.exceptions import (
    FireBehaviorError,
    ConfigurationError,
    ValidationError,
    FuelModelError,
    SpeciesTableError,
)

__version__ = "0.1.0"

__all__ = [
    "FuelBed",
    "FuelParticle",
    "SurfaceFire",
    "CrownFire",
    "ChaparralFuel",
    "ChamiseAllometry",
    "MixedBrushAllometry",
    "Anderson13",
    "FireBehaviorError",
    "ConfigurationError",
    "ValidationError",
    "FuelModelError",
    "SpeciesTableError",
]
