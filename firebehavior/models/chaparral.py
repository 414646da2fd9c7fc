"""Rothermel & Philpot (1973) chaparral fuel populator.

Estimates chaparral fuel bed depth and fuel loads by life category and size
class from stand age (or from observed depth), and live fuel moisture and
heat content from the date. The result is a :class:`FuelBed` for the surface
fire model.

Stand-specific allometry (age <-> depth, age -> total load) is supplied by an
allometry object chosen at construction:

    - ChamiseAllometry
    - MixedBrushAllometry

Size classes are, in order: dead 0-0.25 in, 0.25-0.5 in, 0.5-1 in, 1-3 in
and (empty) >3 in; live leaves, 0-0.25 in, 0.25-0.5 in, 0.5-1 in and 1-3 in
stems.

References:
    - Rothermel, R. C. and Philpot, C. W. (1973). Predicting changes in
      chaparral flammability. Journal of Forestry 71: 640-643.
    - Cohen, J. D. (1986). Estimating fire behavior with FIRECAST: user's
      manual. USDA Forest Service General Technical Report PSW-90.
"""

import numpy as np

from firebehavior.models.fuel_bed import FuelBed, FuelParticle
from firebehavior.models.moisture import CHAMISE_LIVE_MEXT, MIXED_BRUSH_LIVE_MEXT
from firebehavior.utilities.fire_util import LifeCategory, SMIDGEN
from firebehavior.utilities.unit_conversions import TPA_to_Lbsft2

NUM_SIZES = 5

DEAD_MEXT = 0.3

# Days from Jan 1 to the first of each month (non leap year)
_MONTH_START_DAYS = (0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334)
_MAY_FIRST = 121
_OCTOBER_31 = 304
MAX_DAYS_SINCE_MAY1 = _OCTOBER_31 - _MAY_FIRST + 1

# Dead load fractions of (dead fraction * total load) by size class
_DEAD_LOAD_COEF = (0.347, 0.364, 0.207, 0.082, 0.0)

# Live loads are total load * (a - b * dead fraction) by size class
_LIVE_LOAD_A = (0.1957, 0.2416, 0.1918, 0.2648, 0.1036)
_LIVE_LOAD_B = (0.305, 0.256, 0.256, 0.050, 0.114)

_DEAD_SAVR = (640.0, 127.0, 61.0, 27.0, 27.0)
_LIVE_SAVR = (2200.0, 640.0, 127.0, 61.0, 27.0)


class ChamiseAllometry:
    """Age, depth and load relations for chamise stands."""
    name = "chamise"
    depth_scale = 7.5
    recommended_live_mext = CHAMISE_LIVE_MEXT

    def age_from_depth(self, depth: float) -> float:
        return float(np.exp(3.912023 * np.sqrt(max(depth, 0.0) / self.depth_scale)))

    def depth_from_age(self, age: float) -> float:
        if age < SMIDGEN:
            return 0.0
        x = np.log(age) / 3.912023
        return float(self.depth_scale * x * x)

    def total_load_from_age(self, age: float) -> float:
        """Total fuel load (lb/ft^2) of a stand ``age`` years old."""
        tpa = age / (1.4459 + 0.0315 * age)
        return TPA_to_Lbsft2(tpa)


class MixedBrushAllometry(ChamiseAllometry):
    """Age, depth and load relations for mixed brush stands."""
    name = "mixed_brush"
    depth_scale = 10.0
    recommended_live_mext = MIXED_BRUSH_LIVE_MEXT

    def total_load_from_age(self, age: float) -> float:
        tpa = age / (0.4849 + 0.0170 * age)
        return TPA_to_Lbsft2(tpa)


def dead_fuel_fraction_from_age(age: float) -> float:
    """Average mortality dead fuel fraction, clamped to [0, 1]."""
    return min(max(0.0694 * np.exp(0.0402 * age), 0.0), 1.0)


def calc_days_since_may1(month: int, day: int) -> int:
    """Days since May 1 of a calendar date, limited to May 1 through Oct 31.

    Month is clamped to [1, 12] and day to [1, 31].
    """
    month = min(max(int(month), 1), 12)
    day = min(max(int(day), 1), 31)
    days = _MONTH_START_DAYS[month - 1] + day
    days = min(days, _OCTOBER_31)
    return max(days - _MAY_FIRST, 0)


def live_leaf_moisture(days: float) -> float:
    return 1.0 / (0.726 + 0.00877 * days)


def live_wood_moisture(days: float) -> float:
    return 1.0 / (1.454 + 0.00650 * days)


def live_leaf_heat(days: float) -> float:
    d = days
    return 9613.0 - 1.00 * d + 0.1369 * d * d - 0.000365 * d * d * d


def live_wood_heat(days: float) -> float:
    d = days
    return 9509.0 - 10.74 * d + 0.1359 * d * d - 0.000405 * d * d * d


class ChaparralFuel:
    """Chaparral fuel bed populated from age or depth and date.

    Args:
        allometry: ``ChamiseAllometry()`` or ``MixedBrushAllometry()``.
            Defaults to chamise.

    Example:
        >>> fuel = ChaparralFuel(MixedBrushAllometry())
        >>> fuel.set_age(20.0)
        >>> fuel.set_date(7, 15)
        >>> bed = fuel.to_fuel_bed(dead_moisture=0.06)
    """

    def __init__(self, allometry=None):
        self.allometry = allometry if allometry is not None else ChamiseAllometry()

        self._age = 0.0
        self._days = 0.0
        self._dead_fuel_fraction = 0.0
        self._fuel_bed_depth = 0.0
        self._total_fuel_load = 0.0

        shape = (LifeCategory.NUM_CATEGORIES, NUM_SIZES)
        self._load = np.zeros(shape)
        self._dens = np.full(shape, 46.0)
        self._heat = np.full(shape, 8000.0)
        self._mois = np.full(shape, 1.0)
        self._seff = np.full(shape, 0.015)
        self._stot = np.full(shape, 0.055)
        self._savr = np.array([_DEAD_SAVR, _LIVE_SAVR])

        # Live leaves
        self._dens[LifeCategory.LIVE, 0] = 32.0
        self._seff[LifeCategory.LIVE, 0] = 0.035

    # ------------------------------------------------------------------
    # Setters
    # ------------------------------------------------------------------

    def set_age(self, years: float):
        """Set the stand age and derive total load, dead fraction and depth."""
        self._age = float(years)
        self._total_fuel_load = self.allometry.total_load_from_age(self._age)
        self._dead_fuel_fraction = dead_fuel_fraction_from_age(self._age)
        self._fuel_bed_depth = self.allometry.depth_from_age(self._age)
        self._update_fuel_loads()

    def set_depth_and_dead_fuel_fraction(self, depth: float, dead_fuel_fraction: float):
        """Set the observed depth (ft) and dead fraction; age and load are derived."""
        self._fuel_bed_depth = float(depth)
        self._dead_fuel_fraction = min(max(float(dead_fuel_fraction), 0.0), 1.0)
        self._age = self.allometry.age_from_depth(self._fuel_bed_depth)
        self._total_fuel_load = self.allometry.total_load_from_age(self._age)
        self._update_fuel_loads()

    def set_total_fuel_load(self, total_load: float):
        """Set the total fuel load (lb/ft^2) directly, keeping the dead fraction."""
        self._total_fuel_load = float(total_load)
        self._update_fuel_loads()

    def set_date(self, month: int, day: int):
        """Set the calendar date and derive live fuel moisture and heat."""
        self.set_days_since_may1(calc_days_since_may1(month, day))

    def set_days_since_may1(self, days: float):
        """Set days since May 1 (clamped to [0, 184]) and derive live moisture and heat."""
        self._days = float(min(max(days, 0), MAX_DAYS_SINCE_MAY1))
        self._update_live_fuel_moisture()
        self._update_live_fuel_heat()

    def set_live_fuel_moisture(self, leaf: float, wood: float):
        """Override the live leaf and stem moistures (fraction)."""
        self._mois[LifeCategory.LIVE, 0] = leaf
        self._mois[LifeCategory.LIVE, 1:] = wood

    def set_live_fuel_heat(self, leaf: float, wood: float):
        """Override the live leaf and stem heat contents (Btu/lb)."""
        self._heat[LifeCategory.LIVE, 0] = leaf
        self._heat[LifeCategory.LIVE, 1:] = wood

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    def _update_fuel_loads(self):
        f = self._dead_fuel_fraction
        total = self._total_fuel_load
        for size in range(NUM_SIZES):
            self._load[LifeCategory.DEAD, size] = _DEAD_LOAD_COEF[size] * f * total
            # Older stands drive some live classes negative; to_fuel_bed skips them
            self._load[LifeCategory.LIVE, size] = total * (_LIVE_LOAD_A[size] - _LIVE_LOAD_B[size] * f)

    def _update_live_fuel_moisture(self):
        self._mois[LifeCategory.LIVE, 0] = live_leaf_moisture(self._days)
        self._mois[LifeCategory.LIVE, 1:] = live_wood_moisture(self._days)

    def _update_live_fuel_heat(self):
        self._heat[LifeCategory.LIVE, 0] = live_leaf_heat(self._days)
        self._heat[LifeCategory.LIVE, 1:] = live_wood_heat(self._days)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def to_fuel_bed(self, dead_moisture=None) -> FuelBed:
        """Build a fuel bed of the non-empty size classes.

        Args:
            dead_moisture (float or Sequence[float], optional): Dead fuel
                moisture, either one value for every dead class or one per
                dead size class. Defaults to the stored dead moistures.

        Returns:
            FuelBed: Dead particles followed by live particles, each with
                the moisture stored on it.
        """
        dead_mois = self._mois[LifeCategory.DEAD].copy()
        if dead_moisture is not None:
            dead_mois[:] = dead_moisture

        particles = []
        for life in (LifeCategory.DEAD, LifeCategory.LIVE):
            for size in range(NUM_SIZES):
                load = self._load[life, size]
                if load < SMIDGEN:
                    continue
                mois = dead_mois[size] if life == LifeCategory.DEAD else self._mois[life, size]
                particles.append(FuelParticle(
                    life=life,
                    load=float(load),
                    savr=float(self._savr[life, size]),
                    density=float(self._dens[life, size]),
                    heat=float(self._heat[life, size]),
                    stot=float(self._stot[life, size]),
                    seff=float(self._seff[life, size]),
                    moisture=float(mois),
                ))
        return FuelBed(depth=self._fuel_bed_depth, dead_mext=DEAD_MEXT, particles=particles)

    @property
    def recommended_live_mext(self) -> float:
        return self.allometry.recommended_live_mext

    @property
    def age(self) -> float:
        return self._age

    @property
    def days_since_may1(self) -> float:
        return self._days

    @property
    def dead_fuel_fraction(self) -> float:
        return self._dead_fuel_fraction

    @property
    def dead_mext(self) -> float:
        return DEAD_MEXT

    @property
    def fuel_bed_depth(self) -> float:
        return self._fuel_bed_depth

    @property
    def total_fuel_load(self) -> float:
        return self._total_fuel_load

    @property
    def total_dead_fuel_load(self) -> float:
        return float(np.sum(self._load[LifeCategory.DEAD]))

    @property
    def total_live_fuel_load(self) -> float:
        return float(np.sum(self._load[LifeCategory.LIVE]))

    def load(self, life: int, size: int) -> float:
        return float(self._load[life, size])

    def moisture(self, life: int, size: int) -> float:
        return float(self._mois[life, size])

    def heat(self, life: int, size: int) -> float:
        return float(self._heat[life, size])

    def savr(self, life: int, size: int) -> float:
        return float(self._savr[life, size])

    def density(self, life: int, size: int) -> float:
        return float(self._dens[life, size])

    def seff(self, life: int, size: int) -> float:
        return float(self._seff[life, size])

    def stot(self, life: int, size: int) -> float:
        return float(self._stot[life, size])
