"""Fuel bed description and Rothermel (1972) fuel bed intermediates.

A fuel bed is an ordered list of fuel particles plus a depth and a dead fuel
moisture of extinction. Everything in this module depends only on fuel
geometry and chemistry; moisture enters later in
:mod:`firebehavior.models.moisture`.

Classes:
    - FuelParticle: A single fuel component (life category, load, savr, ...).
    - FuelBed: Depth, dead extinction moisture and the particle list.
    - FuelBedIntermediates: Derived packing, reaction velocity and wind/slope
      coefficients of a fuel bed.

Functions:
    - size_class(savr): Size class index of a particle.
    - calc_fuel_bed_intermediates(fuel_bed): Derive FuelBedIntermediates.

References:
    - Rothermel, R. C. (1972). A mathematical model for predicting fire
      spread in wildland fuels. USDA Forest Service Research Paper INT-115.
    - Albini, F. A. (1976). Estimating wildfire behavior and effects. USDA
      Forest Service General Technical Report INT-30.
"""

from dataclasses import dataclass, field
from typing import List

import numpy as np

from firebehavior.utilities.fire_util import (
    LifeCategory,
    MAX_SIZE_CLASSES,
    SIZE_BOUNDARIES,
    SMIDGEN,
)


def size_class(savr: float) -> int:
    """Size class index of a particle with the given savr.

    The particle belongs to the first class whose lower savr boundary
    does not exceed the particle savr.

    Args:
        savr (float): Surface area to volume ratio (1/ft).

    Returns:
        int: Size class index in [0, 5].
    """
    for idx, boundary in enumerate(SIZE_BOUNDARIES):
        if savr >= boundary:
            return idx
    return MAX_SIZE_CLASSES - 1


@dataclass
class FuelParticle:
    """A single fuel particle type within a fuel bed.

    Attributes:
        life (int): ``LifeCategory.DEAD`` or ``LifeCategory.LIVE``.
        load (float): Oven-dry load (lb/ft^2).
        savr (float): Surface area to volume ratio (1/ft).
        density (float): Particle density (lb/ft^3).
        heat (float): Low heat of combustion (Btu/lb).
        stot (float): Total mineral (silica) content (fraction).
        seff (float): Effective (silica-free) mineral content (fraction).
        moisture (float): Moisture content (fraction of oven-dry weight).
    """
    life: int
    load: float
    savr: float
    density: float = 32.0
    heat: float = 8000.0
    stot: float = 0.0555
    seff: float = 0.0100
    moisture: float = 0.0

    @property
    def size_class(self) -> int:
        return size_class(self.savr)

    @property
    def is_dead(self) -> bool:
        return self.life == LifeCategory.DEAD


@dataclass
class FuelBed:
    """Static description of a surface fuel bed.

    Attributes:
        depth (float): Fuel bed depth (ft).
        dead_mext (float): Dead fuel moisture of extinction (fraction).
        particles (List[FuelParticle]): Ordered fuel particles.
    """
    depth: float
    dead_mext: float
    particles: List[FuelParticle] = field(default_factory=list)

    @property
    def total_load(self) -> float:
        return float(sum(p.load for p in self.particles))

    @property
    def dead_particles(self) -> List[FuelParticle]:
        return [p for p in self.particles if p.life == LifeCategory.DEAD]

    @property
    def live_particles(self) -> List[FuelParticle]:
        return [p for p in self.particles if p.life == LifeCategory.LIVE]

    @property
    def has_live_fuel(self) -> bool:
        return any(p.life == LifeCategory.LIVE for p in self.particles)

    @property
    def moistures(self) -> List[float]:
        return [p.moisture for p in self.particles]


@dataclass
class FuelBedIntermediates:
    """Fuel bed quantities that depend only on fuel geometry and chemistry.

    Per-particle arrays are indexed like ``FuelBed.particles``; per-life
    arrays are indexed by ``LifeCategory``.
    """
    # Per particle
    life: np.ndarray
    load: np.ndarray
    savr: np.ndarray
    area: np.ndarray
    sig_k: np.ndarray
    a_wtg: np.ndarray
    s_wtg: np.ndarray
    size: np.ndarray

    # Per life category
    life_area: np.ndarray
    life_awtg: np.ndarray
    life_load: np.ndarray
    life_savr: np.ndarray
    life_heat: np.ndarray
    life_seff: np.ndarray
    life_stot: np.ndarray
    life_eta_s: np.ndarray
    life_rx_dry: np.ndarray
    life_fine: np.ndarray
    life_swtg: np.ndarray

    # Fuel bed
    depth: float = 0.0
    dead_mext: float = 0.0
    total_area: float = 0.0
    total_load: float = 0.0
    bulk_density: float = 0.0
    packing_ratio: float = 0.0
    beta_opt: float = 0.0
    beta_ratio: float = 0.0
    sigma: float = 0.0
    sigma15: float = 0.0
    aa: float = 0.0
    gamma_max: float = 0.0
    gamma_opt: float = 0.0
    wind_b: float = 0.0
    wind_c: float = 0.0
    wind_e_exponent: float = 0.0
    wind_e: float = 0.0
    wind_k: float = 0.0
    slope_k: float = 0.0
    live_mext_k: float = 0.0
    prop_flux: float = 0.0
    res_time: float = 0.0
    epsilon: float = 0.0

    @property
    def num_particles(self) -> int:
        return len(self.load)

    @property
    def dead_rx_dry(self) -> float:
        return float(self.life_rx_dry[LifeCategory.DEAD])

    @property
    def live_rx_dry(self) -> float:
        return float(self.life_rx_dry[LifeCategory.LIVE])


def _empty_intermediates(n: int, depth: float, dead_mext: float) -> FuelBedIntermediates:
    cats = LifeCategory.NUM_CATEGORIES
    return FuelBedIntermediates(
        life=np.zeros(n, dtype=int),
        load=np.zeros(n),
        savr=np.zeros(n),
        area=np.zeros(n),
        sig_k=np.zeros(n),
        a_wtg=np.zeros(n),
        s_wtg=np.zeros(n),
        size=np.zeros(n, dtype=int),
        life_area=np.zeros(cats),
        life_awtg=np.zeros(cats),
        life_load=np.zeros(cats),
        life_savr=np.zeros(cats),
        life_heat=np.zeros(cats),
        life_seff=np.zeros(cats),
        life_stot=np.zeros(cats),
        life_eta_s=np.zeros(cats),
        life_rx_dry=np.zeros(cats),
        life_fine=np.zeros(cats),
        life_swtg=np.zeros((cats, MAX_SIZE_CLASSES)),
        depth=depth,
        dead_mext=dead_mext,
    )


def calc_fuel_bed_intermediates(fuel_bed: FuelBed) -> FuelBedIntermediates:
    """Derive the Rothermel fuel bed intermediates of a fuel bed.

    Computes surface area weighting, characteristic savr (sigma), packing
    ratio, optimum reaction velocity, wind and slope coefficients, mineral
    damping, dry reaction intensity by life category, fine fuel loads,
    propagating flux ratio, residence time and effective heating number.

    A bed with no depth, no particles or no surface area yields all-zero
    intermediates. Every division by a quantity below ``SMIDGEN`` yields 0.

    Args:
        fuel_bed (FuelBed): Fuel bed to evaluate.

    Returns:
        FuelBedIntermediates: Derived quantities for the fuel bed.
    """
    particles = fuel_bed.particles
    n = len(particles)
    out = _empty_intermediates(n, fuel_bed.depth, fuel_bed.dead_mext)

    out.life[:] = [p.life for p in particles]
    out.load[:] = [p.load for p in particles]
    out.savr[:] = [p.savr for p in particles]
    out.total_load = float(np.sum(out.load))

    if fuel_bed.depth < SMIDGEN or n < 1:
        return out

    dens = np.array([p.density for p in particles], dtype=float)
    heat = np.array([p.heat for p in particles], dtype=float)
    seff = np.array([p.seff for p in particles], dtype=float)
    stot = np.array([p.stot for p in particles], dtype=float)

    packing_ratio = 0.0
    for i, p in enumerate(particles):
        if p.density >= SMIDGEN:
            out.area[i] = p.load * p.savr / p.density
            packing_ratio += p.load / p.density
        out.life_area[p.life] += out.area[i]
        out.sig_k[i] = 0.0 if p.savr < SMIDGEN else np.exp(-138.0 / p.savr)
        out.size[i] = size_class(p.savr)

    out.total_area = float(np.sum(out.area))
    if out.total_area < SMIDGEN:
        return out

    out.bulk_density = out.total_load / fuel_bed.depth
    out.packing_ratio = packing_ratio / fuel_bed.depth
    if out.packing_ratio >= SMIDGEN:
        out.slope_k = 5.275 * np.power(out.packing_ratio, -0.3)

    # Surface area weights within each life category, summed by size class
    for i, p in enumerate(particles):
        life_area = out.life_area[p.life]
        out.a_wtg[i] = 0.0 if life_area < SMIDGEN else out.area[i] / life_area
        out.life_swtg[p.life, out.size[i]] += out.a_wtg[i]

    for i, p in enumerate(particles):
        out.s_wtg[i] = out.life_swtg[p.life, out.size[i]]

    out.life_awtg[:] = out.life_area / out.total_area

    for i, p in enumerate(particles):
        out.life_load[p.life] += out.s_wtg[i] * p.load
        out.life_savr[p.life] += out.a_wtg[i] * p.savr
        out.life_heat[p.life] += out.a_wtg[i] * heat[i]
        out.life_seff[p.life] += out.a_wtg[i] * seff[i]
        out.life_stot[p.life] += out.a_wtg[i] * stot[i]

    sigma = float(np.sum(out.life_awtg * out.life_savr))
    out.sigma = sigma

    # Optimum reaction velocity
    out.beta_opt = 3.348 / np.power(sigma, 0.8189)
    out.aa = 133.0 / np.power(sigma, 0.7913)
    out.sigma15 = np.power(sigma, 1.5)
    out.gamma_max = out.sigma15 / (495.0 + 0.0594 * out.sigma15)
    out.beta_ratio = 0.0 if out.beta_opt < SMIDGEN else out.packing_ratio / out.beta_opt
    if out.beta_ratio > SMIDGEN and out.beta_ratio != 1.0:
        out.gamma_opt = (out.gamma_max * np.power(out.beta_ratio, out.aa)
                         * np.exp(out.aa * (1.0 - out.beta_ratio)))

    # Wind and slope coefficients
    out.wind_b = 0.02526 * np.power(sigma, 0.54)
    out.wind_c = 7.47 * np.exp(-0.133 * np.power(sigma, 0.55))
    out.wind_e_exponent = 0.715 * np.exp(-0.000359 * sigma)
    if out.beta_ratio >= SMIDGEN:
        out.wind_k = out.wind_c * np.power(out.beta_ratio, -out.wind_e_exponent)
        if out.wind_c >= SMIDGEN:
            out.wind_e = np.power(out.beta_ratio, out.wind_e_exponent) / out.wind_c

    # Mineral damping and dry reaction intensity
    for life in range(LifeCategory.NUM_CATEGORIES):
        if out.life_seff[life] < SMIDGEN:
            eta_s = 1.0
        else:
            eta_s = min(1.0, 0.174 / np.power(out.life_seff[life], 0.19))
        out.life_eta_s[life] = eta_s
        out.life_rx_dry[life] = (out.gamma_opt
                                 * out.life_load[life] * (1.0 - out.life_stot[life])
                                 * out.life_heat[life]
                                 * eta_s)

    # Fine fuel loads used for the live extinction moisture
    for i, p in enumerate(particles):
        if p.life == LifeCategory.DEAD:
            out.life_fine[p.life] += p.load * out.sig_k[i]
        elif p.savr > SMIDGEN:
            out.life_fine[p.life] += p.load * np.exp(-500.0 / p.savr)

    live_fine = out.life_fine[LifeCategory.LIVE]
    if live_fine >= SMIDGEN:
        out.live_mext_k = 2.9 * out.life_fine[LifeCategory.DEAD] / live_fine

    out.prop_flux = (np.exp((0.792 + 0.681 * np.sqrt(sigma)) * (out.packing_ratio + 0.1))
                     / (192.0 + 0.2595 * sigma))
    out.res_time = 384.0 / sigma
    out.epsilon = np.exp(-138.0 / sigma)

    _to_python_floats(out)
    return out


def _to_python_floats(out: FuelBedIntermediates):
    for name in ("bulk_density", "packing_ratio", "beta_opt", "beta_ratio", "sigma",
                 "sigma15", "aa", "gamma_max", "gamma_opt", "wind_b", "wind_c", "wind_e_exponent", "wind_e",
                 "wind_k", "slope_k", "live_mext_k", "prop_flux", "res_time", "epsilon"):
        setattr(out, name, float(getattr(out, name)))
