"""Crown fire initiation, spread and classification.

Combines Rothermel's (1991) crown fire spread rate with Van Wagner's (1977)
initiation criteria and Scott & Reinhardt's (2001) crown fraction burned.

The crown model owns a private :class:`SurfaceFire` loaded with the standard
fuel model 10 surrogate. That fire is driven only by the 20-ft wind speed
(mid-flame wind = 0.4 * U20, level ground) and supplies the active crown fire
spread rate, 3.34 times its head spread rate.

Setter chain::

    set_moisture -> set_wind -> set_canopy -> set_surface_fire -> set_time

Each setter fully recomputes its own outputs and everything downstream that
has already been given its inputs.

Classes:
    - CanopyBehavior: Canopy and wind dependent outputs.
    - CrownFireBehavior: Surface fire dependent outputs, fire type and final
      fire behavior.
    - CrownFireSize: Active and passive crown fire size after elapsed time.
    - CrownFire: Stateful crown fire model.

References:
    - Rothermel, R. C. (1991). Predicting behavior and size of crown fires in
      the Northern Rocky Mountains. USDA Forest Service Research Paper
      INT-438.
    - Van Wagner, C. E. (1977). Conditions for the start and spread of crown
      fire. Canadian Journal of Forest Research 7: 23-34.
    - Scott, J. H. and Reinhardt, E. D. (2001). Assessing crown fire
      potential by linking models of surface and crown fire behavior. USDA
      Forest Service Research Paper RMRS-RP-29.
"""

from dataclasses import dataclass, asdict
from typing import Optional, Sequence

import numpy as np

from firebehavior.models.fuel_bed import FuelParticle
from firebehavior.models.surface_fire import SiteExtension, SurfaceFire
from firebehavior.utilities import geometry
from firebehavior.utilities.fire_util import FireType, INFINITY, LifeCategory, SMIDGEN
from firebehavior.utilities.unit_conversions import (
    BTU_ft2_min_to_kW_m2,
    BTU_lb_to_kJ_kg,
    Lbsft3_to_KgM3,
    ft_to_m,
    kW_m_to_BTU_ft_s,
    m_min_to_ft_min,
)

# Standard fuel model 10 surrogate: 1-h, 10-h, 100-h dead and live woody
FM10_DEPTH = 1.0
FM10_DEAD_MEXT = 0.25
FM10_LIFE = (LifeCategory.DEAD, LifeCategory.DEAD, LifeCategory.DEAD, LifeCategory.LIVE)
FM10_LOAD = (0.138, 0.092, 0.230, 0.092)
FM10_SAVR = (2000.0, 109.0, 30.0, 1500.0)

# Fuel model 10 bulk density (lb/ft^3) used by the crowning index
FM10_BULK_DENSITY = 0.5520

MIDFLAME_WIND_FACTOR = 0.4
ACTIVE_CROWN_ROS_FACTOR = 3.34


def fm10_particles():
    """Fresh particle list for the fuel model 10 surrogate."""
    return [FuelParticle(life=life, load=load, savr=savr, density=32.0, heat=8000.0,
                         stot=0.0555, seff=0.0100)
            for life, load, savr in zip(FM10_LIFE, FM10_LOAD, FM10_SAVR)]


@dataclass
class CanopyBehavior:
    """Outputs that depend only on the canopy and the 20-ft wind."""
    crown_lw_ratio: float = 1.0
    canopy_fuel_load: float = 0.0
    canopy_hpua: float = 0.0
    critical_surface_fli: float = INFINITY
    critical_surface_flame: float = INFINITY
    critical_crown_ros: float = INFINITY
    active_ratio: float = 0.0
    power_wind: float = 0.0

    def to_dict(self):
        return asdict(self)


@dataclass
class CrownFireBehavior:
    """Outputs that depend on the attached surface fire.

    Rates are ft/min, intensities Btu/ft/s, heat per unit area Btu/ft^2,
    flame lengths ft and wind speeds ft/min.
    """
    surface_ros: float = 0.0
    surface_fli: float = 0.0
    surface_hpua: float = 0.0
    active_hpua: float = 0.0
    active_fli: float = 0.0
    active_flame: float = 0.0
    trans_ratio: float = 0.0
    fire_type: int = FireType.SURFACE
    is_surface_fire: bool = True
    is_passive_crown_fire: bool = False
    is_active_crown_fire: bool = False
    is_crown_fire: bool = False
    power_fire: float = 0.0
    power_ratio: float = 0.0
    is_wind_driven: bool = True
    is_plume_dominated: bool = False
    critical_surface_ros: float = INFINITY
    full_crown_u20: float = INFINITY
    full_crown_ros: float = INFINITY
    crown_fraction_burned: float = 0.0
    passive_ros: float = 0.0
    passive_hpua: float = 0.0
    passive_fli: float = 0.0
    passive_flame: float = 0.0
    final_ros: float = 0.0
    final_hpua: float = 0.0
    final_fli: float = 0.0
    final_flame: float = 0.0

    def to_dict(self):
        return asdict(self)


@dataclass
class CrownFireSize:
    """Active and passive crown fire size after an elapsed time.

    Backing spread is ignored (Rothermel 1991).
    """
    elapsed: float = 0.0
    active_length: float = 0.0
    active_width: float = 0.0
    active_area: float = 0.0
    active_perimeter: float = 0.0
    passive_length: float = 0.0
    passive_width: float = 0.0
    passive_area: float = 0.0
    passive_perimeter: float = 0.0

    def to_dict(self):
        return asdict(self)


# ---------------------------------------------------------------------------
# Crown fire equations
# ---------------------------------------------------------------------------

def calc_fire_type(trans_ratio: float, active_ratio: float) -> int:
    """Final fire type from the transition and active ratios.

    ========== ============ ===================================
    trans      active       fire type
    ========== ============ ===================================
    < 1        < 1          ``FireType.SURFACE``
    < 1        >= 1         ``FireType.CONDITIONAL_ACTIVE``
    >= 1       < 1          ``FireType.PASSIVE``
    >= 1       >= 1         ``FireType.ACTIVE``
    ========== ============ ===================================
    """
    if trans_ratio < 1.0:
        if active_ratio < 1.0:
            return FireType.SURFACE
        return FireType.CONDITIONAL_ACTIVE
    if active_ratio < 1.0:
        return FireType.PASSIVE
    return FireType.ACTIVE


def calc_crown_fraction_burned(surface_ros: float, critical_surface_ros: float,
                               crowning_surface_ros: float) -> float:
    """Scott & Reinhardt crown fraction burned, clamped to [0, 1].

    Args:
        surface_ros (float): Actual surface fire spread rate (ft/min).
        critical_surface_ros (float): Surface spread rate that initiates
            crowning (ft/min).
        crowning_surface_ros (float): Surface spread rate at which the
            crown fire becomes fully active (ft/min).

    Returns:
        float: Crown fraction burned in [0, 1].
    """
    num = surface_ros - critical_surface_ros
    den = crowning_surface_ros - critical_surface_ros
    cfb = num / den if den > SMIDGEN else 0.0
    return min(max(cfb, 0.0), 1.0)


def calc_crowning_index(canopy_bulk_density: float, reaction_intensity: float,
                        heat_sink: float, slope_factor: float) -> float:
    """Scott & Reinhardt (2001) eq. 20 crowning index (O'active).

    The 20-ft wind speed at which the canopy becomes fully available for
    active crown fire spread.

    Args:
        canopy_bulk_density (float): Canopy bulk density (lb/ft^3).
        reaction_intensity (float): Fuel model 10 reaction intensity
            (Btu/ft^2/min).
        heat_sink (float): Fuel model 10 heat sink (Btu/ft^3).
        slope_factor (float): Slope factor of the surface fire.

    Returns:
        float: Crowning index (ft/min); 0 when the canopy or fuel cannot
            support an active crown fire at any wind speed.
    """
    cbd = Lbsft3_to_KgM3(canopy_bulk_density)
    rx_int = BTU_ft2_min_to_kW_m2(reaction_intensity)
    if cbd < SMIDGEN or rx_int < SMIDGEN:
        return 0.0
    eps_qig = BTU_lb_to_kJ_kg(heat_sink / FM10_BULK_DENSITY)
    term = ((164.8 * eps_qig / (rx_int * cbd)) - slope_factor - 1.0) / 0.001612
    if term <= 0.0:
        return 0.0
    o_active = 0.0457 * np.power(term, 0.7)
    return float(3.2808 * o_active)


def calc_critical_surface_fire_intensity(foliar_moisture: float, canopy_base_height: float) -> float:
    """Van Wagner (1977) critical surface fireline intensity (Btu/ft/s).

    Args:
        foliar_moisture (float): Foliar moisture content (fraction); floored
            at 30%.
        canopy_base_height (float): Canopy base height (ft); floored at
            0.1 m.
    """
    fmc = max(100.0 * foliar_moisture, 30.0)
    cbh = max(ft_to_m(canopy_base_height), 0.1)
    csfi = np.power(0.010 * cbh * (460.0 + 25.9 * fmc), 1.5)
    return float(kW_m_to_BTU_ft_s(csfi))


def calc_critical_crown_fire_spread_rate(canopy_bulk_density: float) -> float:
    """Critical crown fire spread rate (ft/min), 3 / cbd in m/min with cbd in kg/m^3."""
    cbd = Lbsft3_to_KgM3(canopy_bulk_density)
    ros = 0.0 if cbd <= 0.0 else 3.0 / cbd
    return m_min_to_ft_min(ros)


def calc_critical_surface_fire_spread_rate(critical_surface_fli: float, surface_hpua: float) -> float:
    if surface_hpua <= 0.0:
        return INFINITY
    return 60.0 * critical_surface_fli / surface_hpua


def calc_active_ratio(active_ros: float, critical_crown_ros: float) -> float:
    """Active ratio; a critical rate below SMIDGEN (no canopy fuel) gives 0."""
    if critical_crown_ros < SMIDGEN:
        return 0.0
    return active_ros / critical_crown_ros


def calc_transition_ratio(surface_fli: float, critical_surface_fli: float) -> float:
    if critical_surface_fli <= 0.0:
        return 0.0
    return surface_fli / critical_surface_fli


def calc_power_of_fire(crown_fli: float) -> float:
    """Rothermel's power of the fire (ft-lb/ft^2/s)."""
    return crown_fli / 129.0


def calc_power_of_wind(wind_speed_at_20ft: float, spread_rate: float) -> float:
    """Rothermel's power of the wind (ft-lb/ft^2/s); both speeds in ft/min."""
    diff = max((wind_speed_at_20ft - spread_rate) / 60.0, 0.0)
    return 0.00106 * diff * diff * diff


def calc_crown_fuel_load(canopy_bulk_density: float, canopy_height: float,
                         canopy_base_height: float) -> float:
    return canopy_bulk_density * (canopy_height - canopy_base_height)


# ---------------------------------------------------------------------------
# Crown fire model
# ---------------------------------------------------------------------------

class _CrownSiteExtension(SiteExtension):
    """Derives the active crown fire spread rate and size from the FM10 fire."""

    def __init__(self, crown: "CrownFire"):
        self._crown = crown

    def reset_site(self, fire: SurfaceFire):
        self._crown._active_ros = 0.0

    def update_site(self, fire: SurfaceFire):
        # Rothermel (1991) crown spread rate, no foliar moisture effect
        self._crown._active_ros = ACTIVE_CROWN_ROS_FACTOR * fire.spread_rate_at_head

    def reset_time(self, fire: SurfaceFire):
        self._crown._size = CrownFireSize()

    def update_time(self, fire: SurfaceFire):
        self._crown._update_time(fire.elapsed)


class CrownFire:
    """Crown fire behavior over a surface fire.

    Example:
        >>> crown = CrownFire()
        >>> crown.set_moisture([0.05, 0.06, 0.07, 1.0])
        >>> crown.set_wind(mph_to_ft_min(20.0))
        >>> crown.set_canopy(60.0, 10.0, KgM3_to_Lbsft3(0.15), 1.0)
        >>> crown.attach_surface_fire(surface_fire)
        >>> FireType.names[crown.fire_type]
    """

    def __init__(self):
        self._active_ros = 0.0
        self._size = CrownFireSize()
        self._fm10 = SurfaceFire(extension=_CrownSiteExtension(self))
        self._fm10.set_fuel(FM10_DEPTH, FM10_DEAD_MEXT, fm10_particles())

        self._wind_speed_at_20ft = 0.0

        self._canopy_height = 0.0
        self._canopy_base_height = 0.0
        self._canopy_bulk_density = 0.0
        self._canopy_foliar_moisture = 5.0
        self._canopy_heat = 8000.0
        self._canopy = CanopyBehavior()

        self._surface_fire: Optional[SurfaceFire] = None
        self._has_surface_fire_input = False
        self._behavior = CrownFireBehavior()

    # ------------------------------------------------------------------
    # Setters
    # ------------------------------------------------------------------

    def set_moisture(self, moistures: Sequence[float]):
        """Set the moistures of the four fuel model 10 particles.

        Args:
            moistures (Sequence[float]): 1-h, 10-h, 100-h dead and live
                woody moisture contents (fraction).
        """
        self._fm10.set_moisture(moistures)
        self._update_wind()

    def set_wind(self, wind_speed_at_20ft: float):
        """Set the 20-ft wind speed (ft/min).

        The fuel model 10 fire is evaluated on level ground at a mid-flame
        wind of 0.4 * U20 blowing upslope, with the wind speed limit applied.
        """
        self._wind_speed_at_20ft = wind_speed_at_20ft
        self._update_wind()

    def set_canopy(self, height: float, base_height: float, bulk_density: float,
                   foliar_moisture: float, heat: float = 8000.0):
        """Set the canopy and recompute canopy and surface fire dependent outputs.

        Args:
            height (float): Canopy height (ft).
            base_height (float): Canopy base height (ft).
            bulk_density (float): Canopy bulk density (lb/ft^3).
            foliar_moisture (float): Foliar moisture content (fraction).
            heat (float): Canopy fuel heat of combustion (Btu/lb).
        """
        self._canopy_height = height
        self._canopy_base_height = base_height
        self._canopy_bulk_density = bulk_density
        self._canopy_foliar_moisture = foliar_moisture
        self._canopy_heat = heat
        self._update_canopy()
        self._update_surface_fire()

    def set_surface_fire(self, ros: float, fli: float, hpua: float):
        """Supply the surface fire by value.

        Without a surface fire model the crown fraction burned cannot be
        derived; it is 0 and passive values equal the surface values.

        Args:
            ros (float): Surface fire head spread rate (ft/min).
            fli (float): Surface fireline intensity (Btu/ft/s).
            hpua (float): Surface heat per unit area (Btu/ft^2).
        """
        self._surface_fire = None
        self._has_surface_fire_input = True
        self._behavior = CrownFireBehavior(surface_ros=ros, surface_fli=fli, surface_hpua=hpua)
        self._update_surface_fire()

    def attach_surface_fire(self, surface_fire: SurfaceFire):
        """Supply the surface fire as a model instance.

        The head spread rate, fireline intensity and heat per unit area are
        read from ``surface_fire``; its slope factor and
        :meth:`SurfaceFire.get_rsa` are used for the crown fraction burned.
        """
        self._surface_fire = surface_fire
        self._has_surface_fire_input = True
        self._behavior = CrownFireBehavior(surface_ros=surface_fire.spread_rate_at_head,
                                           surface_fli=surface_fire.fireline_intensity_at_head,
                                           surface_hpua=surface_fire.heat_per_unit_area)
        self._update_surface_fire()

    def set_time(self, elapsed: float):
        """Grow the active and passive crown fire ellipses for ``elapsed`` minutes."""
        self._fm10.set_time(elapsed)

    # ------------------------------------------------------------------
    # Updates
    # ------------------------------------------------------------------

    def _update_wind(self):
        self._fm10.set_site(0.0, 180.0, MIDFLAME_WIND_FACTOR * self._wind_speed_at_20ft,
                            0.0, True)
        self._update_canopy()
        self._update_surface_fire()

    def _update_canopy(self):
        c = CanopyBehavior()
        c.crown_lw_ratio = geometry.crown_length_to_width(self._wind_speed_at_20ft)
        c.canopy_fuel_load = calc_crown_fuel_load(self._canopy_bulk_density,
                                                  self._canopy_height,
                                                  self._canopy_base_height)
        if self._active_ros > SMIDGEN:
            c.canopy_hpua = c.canopy_fuel_load * self._canopy_heat
        c.critical_surface_fli = calc_critical_surface_fire_intensity(self._canopy_foliar_moisture,
                                                                      self._canopy_base_height)
        c.critical_surface_flame = geometry.flame_length_byram(c.critical_surface_fli)
        c.critical_crown_ros = calc_critical_crown_fire_spread_rate(self._canopy_bulk_density)
        c.active_ratio = calc_active_ratio(self._active_ros, c.critical_crown_ros)
        c.power_wind = calc_power_of_wind(self._wind_speed_at_20ft, self._active_ros)
        self._canopy = c

    def _update_surface_fire(self):
        if not self._has_surface_fire_input:
            return

        if self._surface_fire is not None:
            sf = self._surface_fire
            surface_ros = sf.spread_rate_at_head
            surface_fli = sf.fireline_intensity_at_head
            surface_hpua = sf.heat_per_unit_area
        else:
            surface_ros = self._behavior.surface_ros
            surface_fli = self._behavior.surface_fli
            surface_hpua = self._behavior.surface_hpua

        canopy = self._canopy
        active_ros = self._active_ros
        b = CrownFireBehavior(surface_ros=surface_ros, surface_fli=surface_fli,
                              surface_hpua=surface_hpua)

        b.active_hpua = canopy.canopy_hpua + surface_hpua
        b.active_fli = (active_ros / 60.0) * b.active_hpua
        b.active_flame = geometry.flame_length_thomas(b.active_fli)

        b.trans_ratio = calc_transition_ratio(surface_fli, canopy.critical_surface_fli)
        b.fire_type = calc_fire_type(b.trans_ratio, canopy.active_ratio)
        b.is_surface_fire = b.fire_type in (FireType.SURFACE, FireType.CONDITIONAL_ACTIVE)
        b.is_passive_crown_fire = b.fire_type == FireType.PASSIVE
        b.is_active_crown_fire = b.fire_type == FireType.ACTIVE
        b.is_crown_fire = b.is_passive_crown_fire or b.is_active_crown_fire

        b.power_fire = calc_power_of_fire(b.active_fli)
        b.power_ratio = 0.0 if canopy.power_wind <= 0.0 else b.power_fire / canopy.power_wind
        b.is_wind_driven = b.power_ratio < 1.0
        b.is_plume_dominated = not b.is_wind_driven

        b.critical_surface_ros = calc_critical_surface_fire_spread_rate(canopy.critical_surface_fli,
                                                                        surface_hpua)

        # Crown fraction burned needs a surface fire model to re-evaluate
        if self._surface_fire is None or self._canopy_bulk_density < SMIDGEN:
            b.full_crown_u20 = 0.0
            b.full_crown_ros = 0.0
            b.crown_fraction_burned = 0.0
            b.passive_ros = surface_ros
            b.passive_hpua = surface_hpua
            b.passive_fli = surface_fli
        else:
            b.full_crown_u20 = calc_crowning_index(self._canopy_bulk_density,
                                                   self._fm10.total_rx_int,
                                                   self._fm10.heat_sink,
                                                   self._surface_fire.slope_factor)
            b.full_crown_ros = self._surface_fire.get_rsa(MIDFLAME_WIND_FACTOR * b.full_crown_u20)
            b.crown_fraction_burned = calc_crown_fraction_burned(surface_ros,
                                                                 b.critical_surface_ros,
                                                                 b.full_crown_ros)
            b.passive_ros = surface_ros + b.crown_fraction_burned * (active_ros - surface_ros)
            b.passive_hpua = surface_hpua + canopy.canopy_hpua * b.crown_fraction_burned
            b.passive_fli = b.passive_hpua * b.passive_ros / 60.0

        b.passive_flame = geometry.flame_length_thomas(b.passive_fli)

        if b.is_surface_fire:
            b.final_ros = surface_ros
            b.final_hpua = surface_hpua
            b.final_fli = surface_fli
            b.final_flame = geometry.flame_length_byram(surface_fli)
        elif b.is_passive_crown_fire:
            b.final_ros = b.passive_ros
            b.final_hpua = b.passive_hpua
            b.final_fli = b.passive_fli
            b.final_flame = b.passive_flame
        else:
            b.final_ros = active_ros
            b.final_hpua = b.active_hpua
            b.final_fli = b.active_fli
            b.final_flame = b.active_flame

        self._behavior = b

    def _update_time(self, elapsed: float):
        lw = self._canopy.crown_lw_ratio
        active_length = elapsed * self._active_ros
        passive_length = elapsed * self._behavior.passive_ros
        active_width = active_length / lw
        passive_width = passive_length / lw
        self._size = CrownFireSize(
            elapsed=elapsed,
            active_length=active_length,
            active_width=active_width,
            active_area=geometry.ellipse_area(active_length, lw),
            active_perimeter=geometry.ellipse_perimeter(active_length, active_width),
            passive_length=passive_length,
            passive_width=passive_width,
            passive_area=geometry.ellipse_area(passive_length, lw),
            passive_perimeter=geometry.ellipse_perimeter(passive_length, passive_width),
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def fuel_model_10(self) -> SurfaceFire:
        """The internal fuel model 10 surface fire (read only by convention)."""
        return self._fm10

    @property
    def surface_fire(self) -> Optional[SurfaceFire]:
        return self._surface_fire

    @property
    def canopy(self) -> CanopyBehavior:
        return self._canopy

    @property
    def behavior(self) -> CrownFireBehavior:
        return self._behavior

    @property
    def size(self) -> CrownFireSize:
        return self._size

    @property
    def wind_speed_at_20ft(self) -> float:
        return self._wind_speed_at_20ft

    @property
    def canopy_height(self) -> float:
        return self._canopy_height

    @property
    def canopy_base_height(self) -> float:
        return self._canopy_base_height

    @property
    def canopy_bulk_density(self) -> float:
        return self._canopy_bulk_density

    @property
    def canopy_foliar_moisture(self) -> float:
        return self._canopy_foliar_moisture

    @property
    def canopy_heat(self) -> float:
        return self._canopy_heat

    @property
    def active_crown_fire_ros(self) -> float:
        """Rothermel (1991) active crown fire spread rate (ft/min)."""
        return self._active_ros

    @property
    def active_ratio(self) -> float:
        return self._canopy.active_ratio

    @property
    def critical_crown_fire_ros(self) -> float:
        return self._canopy.critical_crown_ros

    @property
    def critical_surface_fire_fli(self) -> float:
        return self._canopy.critical_surface_fli

    @property
    def crown_fire_lw_ratio(self) -> float:
        return self._canopy.crown_lw_ratio

    @property
    def transition_ratio(self) -> float:
        return self._behavior.trans_ratio

    @property
    def fire_type(self) -> int:
        return self._behavior.fire_type

    @property
    def is_surface_fire(self) -> bool:
        return self._behavior.is_surface_fire

    @property
    def is_passive_crown_fire(self) -> bool:
        return self._behavior.is_passive_crown_fire

    @property
    def is_active_crown_fire(self) -> bool:
        return self._behavior.is_active_crown_fire

    @property
    def is_crown_fire(self) -> bool:
        return self._behavior.is_crown_fire

    @property
    def is_wind_driven(self) -> bool:
        return self._behavior.is_wind_driven

    @property
    def is_plume_dominated(self) -> bool:
        return self._behavior.is_plume_dominated

    @property
    def crown_fraction_burned(self) -> float:
        return self._behavior.crown_fraction_burned

    @property
    def final_fire_ros(self) -> float:
        return self._behavior.final_ros

    @property
    def final_fire_fli(self) -> float:
        return self._behavior.final_fli

    @property
    def final_fire_hpua(self) -> float:
        return self._behavior.final_hpua

    @property
    def final_fire_flame(self) -> float:
        return self._behavior.final_flame
