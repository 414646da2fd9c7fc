"""Moisture damping, heat sink and reaction intensity of a fuel bed.

Classes:
    - MoistureDamping: Moisture-dependent state of a fuel bed.

Functions:
    - moisture_damping_coefficient(moisture, mext): Rothermel damping polynomial.
    - heat_of_preignition(moisture): Qig of a particle.
    - calc_moisture_damping(fuel_bed, intermediates, moistures, live_mext_override):
      Derive MoistureDamping.

References:
    - Rothermel, R. C. (1972). A mathematical model for predicting fire
      spread in wildland fuels. USDA Forest Service Research Paper INT-115.
    - Albini, F. A. (1976). Estimating wildfire behavior and effects. USDA
      Forest Service General Technical Report INT-30.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from firebehavior.exceptions import ValidationError
from firebehavior.models.fuel_bed import FuelBed, FuelBedIntermediates
from firebehavior.utilities.fire_util import LifeCategory, SMIDGEN

# Fixed live extinction moistures used for chaparral fuel beds
CHAMISE_LIVE_MEXT = 0.65
MIXED_BRUSH_LIVE_MEXT = 0.74

# Overrides at or below this value are ignored
LIVE_MEXT_OVERRIDE_THRESHOLD = 0.5


def moisture_damping_coefficient(moisture: float, mext: float) -> float:
    """Rothermel (1972) moisture damping coefficient.

    Args:
        moisture (float): Weighted moisture content (fraction).
        mext (float): Moisture of extinction (fraction).

    Returns:
        float: 1 - 2.59r + 5.11r^2 - 3.52r^3 with r = moisture / mext, or 0
            when the fuel is at or above extinction.
    """
    if mext < SMIDGEN:
        return 0.0
    r = moisture / mext
    if r >= 1.0:
        return 0.0
    return 1.0 - 2.59 * r + 5.11 * r * r - 3.52 * r * r * r


def heat_of_preignition(moisture: float) -> float:
    """Heat of pre-ignition (Btu/lb) of a particle at the given moisture."""
    return 250.0 + 1116.0 * moisture


@dataclass
class MoistureDamping:
    """Moisture-dependent quantities of a fuel bed.

    Attributes:
        rb_qig (float): Heat sink term (Btu/ft^3).
        dead_moisture (float): Area-weighted dead fuel moisture.
        live_moisture (float): Area-weighted live fuel moisture.
        wfmd (float): Water mass in the fine dead fuel.
        fine_dead_moisture (float): wfmd / fine dead fuel load; 0 when the
            bed has no live fuel.
        live_mext_calculated (float): Computed live extinction moisture,
            floored at the dead extinction moisture.
        live_mext_override (float): Caller supplied live extinction moisture.
        live_mext (float): Live extinction moisture actually applied.
        life_mext (np.ndarray): Extinction moisture per life category.
        life_moisture (np.ndarray): Weighted moisture per life category.
        life_eta_m (np.ndarray): Damping coefficient per life category.
        life_rx_int (np.ndarray): Reaction intensity per life category.
        total_rx_int (float): Total reaction intensity (Btu/ft^2/min).
        ros0 (float): No-wind no-slope spread rate (ft/min).
    """
    rb_qig: float
    dead_moisture: float
    live_moisture: float
    wfmd: float
    fine_dead_moisture: float
    live_mext_calculated: float
    live_mext_override: float
    live_mext: float
    life_mext: np.ndarray
    life_moisture: np.ndarray
    life_eta_m: np.ndarray
    life_rx_int: np.ndarray
    total_rx_int: float
    ros0: float

    @property
    def dead_rx_int(self) -> float:
        return float(self.life_rx_int[LifeCategory.DEAD])

    @property
    def live_rx_int(self) -> float:
        return float(self.life_rx_int[LifeCategory.LIVE])

    @property
    def dead_eta_m(self) -> float:
        return float(self.life_eta_m[LifeCategory.DEAD])

    @property
    def live_eta_m(self) -> float:
        return float(self.life_eta_m[LifeCategory.LIVE])


def calc_moisture_damping(fuel_bed: FuelBed,
                          intermediates: FuelBedIntermediates,
                          moistures: Optional[Sequence[float]] = None,
                          live_mext_override: float = 0.0) -> MoistureDamping:
    """Apply particle moistures to a fuel bed.

    Args:
        fuel_bed (FuelBed): Fuel bed whose intermediates were computed.
        intermediates (FuelBedIntermediates): Output of
            :func:`calc_fuel_bed_intermediates` for ``fuel_bed``.
        moistures (Sequence[float], optional): One moisture per particle.
            Defaults to the moistures stored on the particles.
        live_mext_override (float): Live extinction moisture to use instead
            of the computed value when it exceeds 0.5.

    Raises:
        ValidationError: If ``moistures`` does not have one entry per particle.

    Returns:
        MoistureDamping: Heat sink, damping coefficients, reaction
            intensities and no-wind no-slope spread rate.
    """
    n = intermediates.num_particles
    if moistures is None:
        moistures = fuel_bed.moistures
    if len(moistures) != n:
        raise ValidationError("Expected one moisture per fuel particle",
                              field="moistures", value=len(moistures))
    moistures = np.asarray(moistures, dtype=float)

    cats = LifeCategory.NUM_CATEGORIES
    life_moisture = np.zeros(cats)
    rb_qig = 0.0
    wfmd = 0.0
    n_live = 0

    for i in range(n):
        life = int(intermediates.life[i])
        m = moistures[i]
        qig = heat_of_preignition(m)
        if life == LifeCategory.DEAD:
            wfmd += m * intermediates.sig_k[i] * intermediates.load[i]
        else:
            n_live += 1
        life_moisture[life] += intermediates.a_wtg[i] * m
        rb_qig += (qig * intermediates.a_wtg[i]
                   * intermediates.life_awtg[life]
                   * intermediates.sig_k[i])
    rb_qig *= intermediates.bulk_density

    dead_mext = intermediates.dead_mext
    fdmois = 0.0
    live_mext_calculated = dead_mext
    if n_live > 0:
        dead_fine = intermediates.life_fine[LifeCategory.DEAD]
        fdmois = 0.0 if dead_fine < SMIDGEN else wfmd / dead_fine
        if dead_mext < SMIDGEN:
            live_mext_calculated = 0.0
        else:
            live_mext_calculated = (intermediates.live_mext_k
                                    * (1.0 - fdmois / dead_mext) - 0.226)
    live_mext_calculated = max(live_mext_calculated, dead_mext)

    if live_mext_override > LIVE_MEXT_OVERRIDE_THRESHOLD:
        live_mext = live_mext_override
    else:
        live_mext = live_mext_calculated

    life_mext = np.array([dead_mext, live_mext], dtype=float)
    life_eta_m = np.array([moisture_damping_coefficient(life_moisture[life], life_mext[life])
                           for life in range(cats)])
    life_rx_int = intermediates.life_rx_dry * life_eta_m
    total_rx_int = float(np.sum(life_rx_int))

    ros0 = 0.0 if rb_qig < SMIDGEN else total_rx_int * intermediates.prop_flux / rb_qig

    return MoistureDamping(
        rb_qig=float(rb_qig),
        dead_moisture=float(life_moisture[LifeCategory.DEAD]),
        live_moisture=float(life_moisture[LifeCategory.LIVE]),
        wfmd=float(wfmd),
        fine_dead_moisture=float(fdmois),
        live_mext_calculated=float(live_mext_calculated),
        live_mext_override=float(live_mext_override),
        live_mext=float(live_mext),
        life_mext=life_mext,
        life_moisture=life_moisture,
        life_eta_m=life_eta_m,
        life_rx_int=life_rx_int,
        total_rx_int=total_rx_int,
        ros0=float(ros0),
    )
