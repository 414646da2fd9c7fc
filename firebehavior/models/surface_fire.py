"""Rothermel (1972) surface fire spread with elliptical growth.

The surface fire is driven by a fixed chain of setters, each of which resets
and fully recomputes its own outputs and every output downstream of it::

    set_fuel -> set_moisture -> set_site -> set_time

Calling a setter before its prerequisites leaves the dependent outputs at
their reset values (zero).

Classes:
    - SurfaceSpread: Wind/slope dependent outputs of a surface fire.
    - FireSize: Elapsed time dependent fire ellipse size.
    - SiteExtension: Hook object run after site and time updates.
    - SurfaceFire: Stateful surface fire driven by the setter chain.

Functions:
    - calc_surface_spread(intermediates, damping, ...): Pure wind/slope
      spread computation shared by ``SurfaceFire.set_site`` and
      ``SurfaceFire.get_rsa``.
    - calc_fire_size(spread, elapsed): Ellipse size after ``elapsed`` minutes.
    - effective_wind_speed(phi_ew, wind_b, wind_e): Invert the wind factor.

References:
    - Rothermel, R. C. (1972). A mathematical model for predicting fire
      spread in wildland fuels. USDA Forest Service Research Paper INT-115.
    - Rothermel, R. C. (1991). Predicting behavior and size of crown fires in
      the Northern Rocky Mountains. USDA Forest Service Research Paper
      INT-438.
"""

from dataclasses import dataclass, asdict
from typing import Optional, Sequence

import numpy as np

from firebehavior.models.fuel_bed import (
    FuelBed,
    FuelBedIntermediates,
    FuelParticle,
    calc_fuel_bed_intermediates,
)
from firebehavior.models.moisture import MoistureDamping, calc_moisture_damping
from firebehavior.utilities import geometry
from firebehavior.utilities.fire_util import FT_MIN_PER_MPH, SMIDGEN, Situation

# Moisture assigned to every particle until set_moisture is called
DEFAULT_MOISTURE = 5.0


def effective_wind_speed(phi_ew: float, wind_b: float, wind_e: float) -> float:
    """Wind speed (ft/min) that alone would produce the factor ``phi_ew``.

    Args:
        phi_ew (float): Combined wind-slope factor.
        wind_b (float): Rothermel wind exponent B.
        wind_e (float): Inverse wind coefficient (beta ratio^E / C).

    Returns:
        float: Effective wind speed (ft/min), 0 when undefined.
    """
    x = phi_ew * wind_e
    if x < SMIDGEN or wind_b < SMIDGEN:
        return 0.0
    return float(np.power(x, 1.0 / wind_b))


@dataclass
class SurfaceSpread:
    """Outputs of a surface fire that depend on slope and wind.

    Rates are ft/min, intensities Btu/ft/s, flame lengths ft, heat per unit
    area Btu/ft^2 and directions degrees clockwise from upslope.
    """
    situation: int = Situation.NONE
    ros_head: float = 0.0
    head_dir_from_upslope: float = 0.0
    effective_wind_speed: float = 0.0
    wind_speed_limit: float = 0.0
    wind_limit_exceeded: bool = False
    spread_exceeds_wind: bool = False
    wind_factor: float = 0.0
    slope_factor: float = 0.0
    wind_slope_factor: float = 0.0
    lw_ratio: float = 1.0
    eccentricity: float = 0.0
    hpua: float = 0.0
    ros_back: float = 0.0
    ros_major: float = 0.0
    ros_flank: float = 0.0
    fli_head: float = 0.0
    fli_back: float = 0.0
    fli_flank: float = 0.0
    flame_head: float = 0.0
    flame_back: float = 0.0
    flame_flank: float = 0.0
    ellipse_f: float = 0.0
    ellipse_g: float = 0.0
    ellipse_h: float = 0.0

    def to_dict(self):
        return asdict(self)


@dataclass
class FireSize:
    """Fire ellipse size after an elapsed time (ft, ft^2, acres)."""
    elapsed: float = 0.0
    length: float = 0.0
    width: float = 0.0
    area: float = 0.0
    perimeter: float = 0.0

    @property
    def acres(self) -> float:
        return geometry.fire_acres(self.area)

    def to_dict(self):
        return asdict(self)


def calc_surface_spread(intermediates: FuelBedIntermediates,
                        damping: MoistureDamping,
                        slope_fraction: float,
                        midflame_wind_speed: float,
                        wind_dir_from_upslope: float,
                        apply_wind_speed_limit: bool = True) -> SurfaceSpread:
    """Resolve the wind/slope situation and derive head fire behavior.

    The situation is the first that applies of:

    1. no spread (ros0 is zero)
    2. neither wind nor slope
    3. wind without slope
    4. slope without wind
    5. wind blowing directly upslope
    6. wind blowing across the slope (vector sum of wind and slope rates)

    The effective wind is then checked against Rothermel's upper limit of
    0.9 * reaction intensity, and finally the head rate is capped at the
    effective wind speed whenever that wind exceeds 1 mi/h (88 ft/min).

    Args:
        intermediates (FuelBedIntermediates): Fuel bed intermediates.
        damping (MoistureDamping): Moisture damping for the same fuel bed.
        slope_fraction (float): Terrain slope (rise / reach).
        midflame_wind_speed (float): Mid-flame wind speed (ft/min).
        wind_dir_from_upslope (float): Wind heading, degrees clockwise from
            upslope.
        apply_wind_speed_limit (bool): Scale back the wind factor when the
            effective wind exceeds the limit.

    Returns:
        SurfaceSpread: Head, back and flank behavior and ellipse factors.
    """
    ros0 = damping.ros0
    total_rx_int = damping.total_rx_int
    wind_b = intermediates.wind_b
    wind_k = intermediates.wind_k
    wind_e = intermediates.wind_e

    phi_s = intermediates.slope_k * slope_fraction * slope_fraction
    if midflame_wind_speed < SMIDGEN:
        phi_w = 0.0
    else:
        phi_w = float(wind_k * np.power(midflame_wind_speed, wind_b))
    phi_ew = phi_s + phi_w

    ros_max = ros0
    dir_max = 0.0
    eff_wind = 0.0
    do_eff_wind = False

    if ros0 < SMIDGEN:
        situation = Situation.NO_SPREAD
    elif phi_ew < SMIDGEN:
        situation = Situation.NO_WIND_NO_SLOPE
    elif phi_s < SMIDGEN:
        ros_max = ros0 * (1.0 + phi_ew)
        dir_max = wind_dir_from_upslope
        eff_wind = midflame_wind_speed
        situation = Situation.WIND_NO_SLOPE
    elif phi_w < SMIDGEN:
        ros_max = ros0 * (1.0 + phi_ew)
        do_eff_wind = True
        situation = Situation.SLOPE_NO_WIND
    elif wind_dir_from_upslope < SMIDGEN:
        ros_max = ros0 * (1.0 + phi_ew)
        do_eff_wind = True
        situation = Situation.WIND_UPSLOPE
    else:
        split = np.deg2rad(wind_dir_from_upslope)
        slp_rate = ros0 * phi_s
        wnd_rate = ros0 * phi_w
        x = slp_rate + wnd_rate * np.cos(split)
        y = wnd_rate * np.sin(split)
        rv = float(np.sqrt(x * x + y * y))
        ros_max = ros0 + rv

        phi_ew = ros_max / ros0 - 1.0
        do_eff_wind = phi_ew >= SMIDGEN

        al = 0.0 if rv < SMIDGEN else float(np.arcsin(abs(y) / rv))
        if x >= 0.0:
            a = al if y >= 0.0 else 2.0 * np.pi - al
        else:
            a = np.pi - al if y >= 0.0 else np.pi + al
        dir_max = float(np.rad2deg(a))
        if abs(dir_max) < 0.5:
            dir_max = 0.0
        situation = Situation.CROSS_SLOPE

    if do_eff_wind:
        eff_wind = effective_wind_speed(phi_ew, wind_b, wind_e)

    # Rothermel's reliable wind limit
    max_wind = 0.9 * total_rx_int
    wind_limit_exceeded = False
    if eff_wind > max_wind:
        wind_limit_exceeded = True
        if apply_wind_speed_limit:
            if max_wind < SMIDGEN:
                phi_ew = 0.0
            else:
                phi_ew = float(wind_k * np.power(max_wind, wind_b))
            ros_max = ros0 * (1.0 + phi_ew)
            eff_wind = max_wind

    spread_exceeds_wind = False
    if ros_max > eff_wind and eff_wind > FT_MIN_PER_MPH:
        spread_exceeds_wind = True
        ros_max = eff_wind

    out = SurfaceSpread(
        situation=situation,
        ros_head=float(ros_max),
        head_dir_from_upslope=float(dir_max),
        effective_wind_speed=float(eff_wind),
        wind_speed_limit=float(max_wind),
        wind_limit_exceeded=wind_limit_exceeded,
        spread_exceeds_wind=spread_exceeds_wind,
        wind_factor=float(phi_w),
        slope_factor=float(phi_s),
        wind_slope_factor=float(phi_ew),
    )

    res_time = intermediates.res_time
    out.hpua = geometry.heat_per_unit_area(total_rx_int, res_time)
    out.lw_ratio = geometry.ellipse_length_to_width(out.effective_wind_speed)
    out.eccentricity = geometry.ellipse_eccentricity(out.lw_ratio)
    out.ros_back = geometry.spread_rate_at_back(out.ros_head, out.lw_ratio)
    out.ros_major = out.ros_head + out.ros_back
    out.ros_flank = geometry.spread_rate_at_flank(out.ros_head, out.lw_ratio)

    out.fli_head = geometry.fireline_intensity(out.ros_head, total_rx_int, res_time)
    out.fli_back = geometry.fireline_intensity(out.ros_back, total_rx_int, res_time)
    out.fli_flank = geometry.fireline_intensity(out.ros_flank, total_rx_int, res_time)
    out.flame_head = geometry.flame_length_byram(out.fli_head)
    out.flame_back = geometry.flame_length_byram(out.fli_back)
    out.flame_flank = geometry.flame_length_byram(out.fli_flank)

    # Rate factors; multiply by elapsed time for distances
    out.ellipse_f = 0.5 * out.ros_major
    out.ellipse_g = 0.5 * out.ros_major - out.ros_back
    out.ellipse_h = out.ros_flank
    return out


def calc_fire_size(spread: SurfaceSpread, elapsed: float) -> FireSize:
    length = spread.ros_major * elapsed
    width = 2.0 * spread.ros_flank * elapsed
    return FireSize(
        elapsed=elapsed,
        length=length,
        width=width,
        area=geometry.ellipse_area(length, spread.lw_ratio),
        perimeter=geometry.ellipse_perimeter(length, width),
    )


class SiteExtension:
    """Hook run by :class:`SurfaceFire` after its own site and time updates.

    The plain surface fire has no extension. Models that derive further
    outputs from a surface fire (e.g. the crown fire's active spread rate)
    install a subclass at construction; each method receives the surface
    fire whose outputs were just reset or updated.
    """

    def reset_site(self, fire: "SurfaceFire"):
        pass

    def update_site(self, fire: "SurfaceFire"):
        pass

    def reset_time(self, fire: "SurfaceFire"):
        pass

    def update_time(self, fire: "SurfaceFire"):
        pass


class SurfaceFire:
    """Surface fire behavior of a single fuel bed.

    Args:
        extension (SiteExtension, optional): Hook object run after site and
            time updates. Defaults to None.

    Example:
        >>> fire = SurfaceFire()
        >>> fire.set_fuel_bed(Anderson13(1).to_fuel_bed())
        >>> fire.set_moisture([0.06])
        >>> fire.set_site(0.0, 180.0, 440.0, 0.0)
        >>> fire.spread_rate_at_head
    """

    def __init__(self, extension: Optional[SiteExtension] = None):
        self._extension = extension

        self._fuel_bed = FuelBed(depth=1.0, dead_mext=0.0)
        self._intermediates = calc_fuel_bed_intermediates(self._fuel_bed)
        self._moistures = []
        self._live_mext_override = 0.0
        self._damping = self._zero_damping()

        self._slope_fraction = 0.0
        self._aspect = 180.0
        self._midflame_wind_speed = 0.0
        self._wind_dir_from_upslope = 0.0
        self._apply_wind_speed_limit = True
        self._spread = SurfaceSpread()

        self._size = FireSize()

    # ------------------------------------------------------------------
    # Setters
    # ------------------------------------------------------------------

    def set_fuel(self, depth: float, dead_mext: float, particles: Sequence[FuelParticle]):
        """Set the fuel bed and recompute the fuel bed intermediates.

        Moisture and site outputs are reset; particle moistures default to
        5.0 (500%) until :meth:`set_moisture` is called.

        Args:
            depth (float): Fuel bed depth (ft).
            dead_mext (float): Dead fuel moisture of extinction (fraction).
            particles (Sequence[FuelParticle]): Fuel particles.
        """
        self.set_fuel_bed(FuelBed(depth=depth, dead_mext=dead_mext, particles=list(particles)))

    def set_fuel_bed(self, fuel_bed: FuelBed):
        self._fuel_bed = fuel_bed
        self._intermediates = calc_fuel_bed_intermediates(fuel_bed)
        self._moistures = [DEFAULT_MOISTURE] * len(fuel_bed.particles)
        self._live_mext_override = 0.0
        self._damping = self._zero_damping()
        self._reset_site_output()
        self._reset_time_output()

    def set_moisture(self, moistures: Sequence[float], live_mext_override: float = 0.0):
        """Set particle moistures and recompute reaction intensity and ros0.

        Args:
            moistures (Sequence[float]): One moisture content (fraction) per
                fuel particle, in particle order.
            live_mext_override (float): Fixed live extinction moisture, used
                in place of the computed value when it exceeds 0.5 (e.g.
                0.65 for chamise, 0.74 for mixed brush).

        Raises:
            ValidationError: If the number of moistures does not match the
                number of particles.
        """
        damping = calc_moisture_damping(self._fuel_bed, self._intermediates,
                                        moistures, live_mext_override)
        self._moistures = [float(m) for m in moistures]
        self._live_mext_override = float(live_mext_override)
        self._damping = damping
        self._reset_site_output()
        self._reset_time_output()

    def set_site(self, slope_fraction: float, aspect: float, midflame_wind_speed: float,
                 wind_dir_from_upslope: float, apply_wind_speed_limit: bool = True):
        """Set terrain and wind and recompute spread, intensity and shape.

        Args:
            slope_fraction (float): Terrain slope (rise / reach).
            aspect (float): Terrain aspect, degrees clockwise from north.
            midflame_wind_speed (float): Mid-flame wind speed (ft/min).
            wind_dir_from_upslope (float): Wind heading, degrees clockwise
                from upslope.
            apply_wind_speed_limit (bool): Apply Rothermel's upper wind
                speed limit. Defaults to True.
        """
        self._reset_site_output()
        self._reset_time_output()
        self._slope_fraction = slope_fraction
        self._aspect = aspect
        self._midflame_wind_speed = midflame_wind_speed
        self._wind_dir_from_upslope = wind_dir_from_upslope
        self._apply_wind_speed_limit = apply_wind_speed_limit
        self._update_site()

    def set_time(self, elapsed: float):
        """Grow the fire ellipse for ``elapsed`` minutes since ignition."""
        self._reset_time_output()
        self._size = calc_fire_size(self._spread, elapsed)
        if self._extension is not None:
            self._extension.update_time(self)

    def _update_site(self):
        self._spread = calc_surface_spread(self._intermediates, self._damping,
                                           self._slope_fraction,
                                           self._midflame_wind_speed,
                                           self._wind_dir_from_upslope,
                                           self._apply_wind_speed_limit)
        if self._extension is not None:
            self._extension.update_site(self)

    def _reset_site_output(self):
        self._spread = SurfaceSpread()
        if self._extension is not None:
            self._extension.reset_site(self)

    def _reset_time_output(self):
        self._size = FireSize()
        if self._extension is not None:
            self._extension.reset_time(self)

    def _zero_damping(self) -> MoistureDamping:
        cats = len(self._intermediates.life_rx_dry)
        return MoistureDamping(
            rb_qig=0.0, dead_moisture=0.0, live_moisture=0.0, wfmd=0.0,
            fine_dead_moisture=0.0, live_mext_calculated=0.0,
            live_mext_override=0.0, live_mext=0.0,
            life_mext=np.zeros(cats), life_moisture=np.zeros(cats),
            life_eta_m=np.zeros(cats), life_rx_int=np.zeros(cats),
            total_rx_int=0.0, ros0=0.0,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_rsa(self, midflame_wind_speed: float) -> float:
        """Head spread rate (ft/min) at another mid-flame wind speed.

        Evaluated with the current slope, wind direction and limit flag.
        The fire's own state is not modified.
        """
        spread = calc_surface_spread(self._intermediates, self._damping,
                                     self._slope_fraction, midflame_wind_speed,
                                     self._wind_dir_from_upslope,
                                     self._apply_wind_speed_limit)
        return spread.ros_head

    def spread_rate_at_beta(self, beta: float) -> float:
        """Spread rate (ft/min) ``beta`` degrees from the heading direction."""
        return geometry.spread_rate_at_beta(self._spread.ros_head, self._spread.lw_ratio, beta)

    def effective_wind_speed_at_vector(self, vector_ros: float) -> float:
        """Effective wind speed (ft/min) that would drive the fire at ``vector_ros``."""
        ros0 = self._damping.ros0
        phi_ew = 0.0 if ros0 < SMIDGEN else vector_ros / ros0 - 1.0
        return effective_wind_speed(phi_ew, self._intermediates.wind_b, self._intermediates.wind_e)

    # ------------------------------------------------------------------
    # Fuel and moisture state
    # ------------------------------------------------------------------

    @property
    def extension(self) -> Optional[SiteExtension]:
        return self._extension

    @property
    def fuel_bed(self) -> FuelBed:
        return self._fuel_bed

    @property
    def intermediates(self) -> FuelBedIntermediates:
        """Fuel bed intermediates from the last :meth:`set_fuel`."""
        return self._intermediates

    @property
    def moisture_damping(self) -> MoistureDamping:
        """Moisture dependent state from the last :meth:`set_moisture`."""
        return self._damping

    @property
    def moistures(self) -> list:
        return list(self._moistures)

    @property
    def live_mext_override(self) -> float:
        return self._live_mext_override

    @property
    def ros0(self) -> float:
        """No-wind no-slope spread rate (ft/min)."""
        return self._damping.ros0

    @property
    def total_rx_int(self) -> float:
        return self._damping.total_rx_int

    @property
    def dead_rx_int(self) -> float:
        return self._damping.dead_rx_int

    @property
    def live_rx_int(self) -> float:
        return self._damping.live_rx_int

    @property
    def heat_sink(self) -> float:
        return self._damping.rb_qig

    @property
    def residence_time(self) -> float:
        return self._intermediates.res_time

    @property
    def live_mext_applied(self) -> float:
        return self._damping.live_mext

    @property
    def live_mext_calculated(self) -> float:
        return self._damping.live_mext_calculated

    # ------------------------------------------------------------------
    # Site state
    # ------------------------------------------------------------------

    @property
    def slope_fraction(self) -> float:
        return self._slope_fraction

    @property
    def aspect(self) -> float:
        return self._aspect

    @property
    def midflame_wind_speed(self) -> float:
        return self._midflame_wind_speed

    @property
    def wind_dir_from_upslope(self) -> float:
        return self._wind_dir_from_upslope

    @property
    def apply_wind_speed_limit(self) -> bool:
        return self._apply_wind_speed_limit

    @property
    def spread(self) -> SurfaceSpread:
        """All outputs of the last :meth:`set_site`."""
        return self._spread

    @property
    def situation(self) -> int:
        """Wind/slope situation code, see :class:`Situation`."""
        return self._spread.situation

    @property
    def spread_rate_at_head(self) -> float:
        return self._spread.ros_head

    @property
    def spread_rate_at_back(self) -> float:
        return self._spread.ros_back

    @property
    def spread_rate_at_flank(self) -> float:
        return self._spread.ros_flank

    @property
    def spread_rate_major(self) -> float:
        return self._spread.ros_major

    @property
    def head_dir_from_upslope(self) -> float:
        return self._spread.head_dir_from_upslope

    @property
    def effective_wind_speed(self) -> float:
        return self._spread.effective_wind_speed

    @property
    def wind_speed_limit(self) -> float:
        return self._spread.wind_speed_limit

    @property
    def wind_limit_exceeded(self) -> bool:
        return self._spread.wind_limit_exceeded

    @property
    def spread_exceeds_wind(self) -> bool:
        return self._spread.spread_exceeds_wind

    @property
    def wind_factor(self) -> float:
        return self._spread.wind_factor

    @property
    def slope_factor(self) -> float:
        return self._spread.slope_factor

    @property
    def wind_slope_factor(self) -> float:
        return self._spread.wind_slope_factor

    @property
    def length_to_width_ratio(self) -> float:
        return self._spread.lw_ratio

    @property
    def eccentricity(self) -> float:
        return self._spread.eccentricity

    @property
    def heat_per_unit_area(self) -> float:
        return self._spread.hpua

    @property
    def fireline_intensity_at_head(self) -> float:
        return self._spread.fli_head

    @property
    def fireline_intensity_at_back(self) -> float:
        return self._spread.fli_back

    @property
    def fireline_intensity_at_flank(self) -> float:
        return self._spread.fli_flank

    @property
    def flame_length_at_head(self) -> float:
        return self._spread.flame_head

    @property
    def flame_length_at_back(self) -> float:
        return self._spread.flame_back

    @property
    def flame_length_at_flank(self) -> float:
        return self._spread.flame_flank

    # ------------------------------------------------------------------
    # Time state
    # ------------------------------------------------------------------

    @property
    def fire_size(self) -> FireSize:
        return self._size

    @property
    def elapsed(self) -> float:
        return self._size.elapsed

    @property
    def fire_length(self) -> float:
        return self._size.length

    @property
    def fire_width(self) -> float:
        return self._size.width

    @property
    def fire_area(self) -> float:
        return self._size.area

    @property
    def fire_perimeter(self) -> float:
        return self._size.perimeter

    @property
    def fire_acres(self) -> float:
        return self._size.acres
