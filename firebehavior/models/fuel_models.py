"""Standard fire behavior fuel model catalog.

Provides the Anderson 13 Fire Behavior Fuel Models (FBFMs) as ready-made
:class:`FuelBed` instances for the surface fire model.

Classes:
    - Fuel: Base class holding the catalog values of one fuel model.
    - Anderson13: The 13 standard Anderson fuel models plus the
      non-burnable codes (91-99).

Catalog loads are stored in tons/acre in the order 1-h, 10-h, 100-h, live
herbaceous, live woody, and converted to lb/ft^2 here.

References:
    - Anderson, H. E. (1982). Aids to Determining Fuel Models for Estimating
      Fire Behavior. USDA Forest Service General Technical Report INT-122.
"""

import json
import os

import numpy as np

from firebehavior.exceptions import FuelModelError
from firebehavior.models.fuel_bed import FuelBed, FuelParticle
from firebehavior.utilities.fire_util import LifeCategory, SMIDGEN
from firebehavior.utilities.unit_conversions import TPA_to_Lbsft2

# Life category of each catalog load class
_CLASS_LIFE = (LifeCategory.DEAD, LifeCategory.DEAD, LifeCategory.DEAD,
               LifeCategory.LIVE, LifeCategory.LIVE)


class Fuel:
    """Catalog values of one fuel model.

    Args:
        name (str): Name of the fuel model (e.g., "Short Grass").
        model_num (int): Fuel model number.
        burnable (bool): Whether the model carries fire.
        w_0 (np.ndarray): Oven-dry loads by class (tons/acre).
        s (np.ndarray): Surface area to volume ratios by class (1/ft).
        dead_mx (float): Dead fuel moisture of extinction (fraction).
        fuel_depth (float): Fuel bed depth (ft).

    Attributes:
        w_0 (np.ndarray): Oven-dry loads by class (lb/ft^2).
        heat_content (float): Low heat of combustion (Btu/lb).
    """
    def __init__(self, name: str, model_num: int, burnable: bool, w_0: np.ndarray,
                 s: np.ndarray, dead_mx: float, fuel_depth: float):
        self.name = name
        self.model_num = model_num
        self.burnable = burnable

        if self.burnable:
            self.s_T = 0.0555
            self.s_e = 0.010
            self.rho_p = 32.0
            self.heat_content = 8000.0

            self.w_0 = TPA_to_Lbsft2(np.asarray(w_0, dtype=float))
            self.s = np.asarray(s, dtype=float)
            self.dead_mx = dead_mx
            self.fuel_depth_ft = fuel_depth

    def to_fuel_bed(self, moistures=None) -> FuelBed:
        """Build the fuel bed of this model from its non-empty load classes.

        Args:
            moistures (Sequence[float], optional): Moisture content (fraction)
                of each catalog load class, stored on the particles. Defaults
                to 0 for every class.

        Raises:
            FuelModelError: If the model is non-burnable.
        """
        if not self.burnable:
            raise FuelModelError(f"Fuel model '{self.name}' is not burnable",
                                 fuel_model_id=self.model_num)

        if moistures is None:
            moistures = [0.0] * len(self.w_0)
        elif len(moistures) != len(self.w_0):
            raise FuelModelError(f"Expected {len(self.w_0)} class moistures, got {len(moistures)}",
                                 fuel_model_id=self.model_num)

        particles = []
        for idx, load in enumerate(self.w_0):
            if load < SMIDGEN:
                continue
            particles.append(FuelParticle(
                life=_CLASS_LIFE[idx],
                load=float(load),
                savr=float(self.s[idx]),
                density=self.rho_p,
                heat=self.heat_content,
                stot=self.s_T,
                seff=self.s_e,
                moisture=float(moistures[idx]),
            ))
        return FuelBed(depth=self.fuel_depth_ft, dead_mext=self.dead_mx, particles=particles)


class Anderson13(Fuel):
    _fuel_models = None # class-level cache

    @classmethod
    def load_fuel_models(cls):
        if cls._fuel_models is None:
            json_path = os.path.join(os.path.dirname(__file__), "Anderson13.json")
            with open(json_path, "r") as f:
                cls._fuel_models = json.load(f)

    @classmethod
    def model_numbers(cls):
        cls.load_fuel_models()
        return sorted(int(k) for k in cls._fuel_models["names"])

    def __init__(self, model_number: int):
        self.load_fuel_models()

        try:
            model_number = int(model_number)
        except (TypeError, ValueError) as e:
            raise FuelModelError(f"{model_number!r} is not a fuel model number") from e

        model_id = str(model_number)
        if model_id not in self._fuel_models["names"]:
            raise FuelModelError("Not a valid Anderson 13 model number", fuel_model_id=model_number)

        burnable = model_number <= 13
        name = self._fuel_models["names"][model_id]

        if not burnable:
            w_0 = None
            s = None
            mx_dead = None
            fuel_bed_depth = None

        else:
            w_0 = self._fuel_models["w_0"][model_id]
            s = self._fuel_models["s"][model_id]
            mx_dead = self._fuel_models["mx_dead"][model_id]
            fuel_bed_depth = self._fuel_models["fuel_bed_depth"][model_id]

        super().__init__(name, model_number, burnable, w_0, s, mx_dead, fuel_bed_depth)
