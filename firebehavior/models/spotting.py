"""Albini maximum spotting distance from burning piles, surface fires and
torching trees.

Wind speeds are 20-ft wind speeds in mi/h, heights are in ft and distances
in miles. Each source function returns a single result dataclass whose
``distance`` is the spotting distance adjusted for ridge/valley terrain.

Firebrand source location codes are defined in :class:`SpotLocation`.

References:
    - Albini, F. A. (1979). Spot fire distance from burning trees: a
      predictive model. USDA Forest Service General Technical Report
      INT-56.
    - Albini, F. A. (1981). Spot fire distance from isolated sources:
      extensions of a predictive model. USDA Forest Service Research Note
      INT-309.
    - Chase, C. H. (1981). Spot fire distance equations for pocket
      calculators. USDA Forest Service Research Note INT-310.
"""

from dataclasses import dataclass, asdict

import numpy as np

from firebehavior.utilities.fire_util import SMIDGEN, SpotLocation
from firebehavior.utilities.geometry import fireline_intensity_from_flame_byram

# Steady flame height and duration coefficients by torching tree species
TORCHING_TREE_SPECIES = (
    "Engelmann spruce",
    "Douglas-fir",
    "subalpine fir",
    "western hemlock",
    "ponderosa pine",
    "lodgepole pine",
    "western white pine",
    "grand fir",
    "balsam fir",
    "slash pine",
    "longleaf pine",
    "pond pine",
    "shortleaf pine",
    "loblolly pine",
)

_TORCH_A = (
    (15.7, 0.451, 12.6, -0.256),
    (15.7, 0.451, 10.7, -0.278),
    (15.7, 0.451, 10.7, -0.278),
    (15.7, 0.451, 6.3, -0.249),
    (12.9, 0.453, 12.6, -0.256),
    (12.9, 0.453, 12.6, -0.256),
    (12.9, 0.453, 10.7, -0.278),
    (16.5, 0.515, 10.7, -0.278),
    (16.5, 0.515, 10.7, -0.278),
    (2.71, 1.00, 11.9, -0.389),
    (2.71, 1.00, 11.9, -0.389),
    (2.71, 1.00, 7.91, -0.344),
    (2.71, 1.00, 7.91, -0.344),
    (2.71, 1.00, 13.5, -0.544),
)

# Firebrand lofting coefficients by flame ratio / duration regime
_TORCH_B = (
    (4.24, 0.332),
    (3.64, 0.391),
    (2.78, 0.418),
    (4.70, 0.000),
)


@dataclass
class BurningPileSpot:
    cover_ht_used: float = 0.0
    firebrand_ht: float = 0.0
    flat_distance: float = 0.0
    distance: float = 0.0

    def to_dict(self):
        return asdict(self)


@dataclass
class SurfaceFireSpot:
    cover_ht_used: float = 0.0
    firebrand_ht: float = 0.0
    firebrand_drift: float = 0.0
    flat_distance: float = 0.0
    distance: float = 0.0

    def to_dict(self):
        return asdict(self)


@dataclass
class TorchingTreesSpot:
    """Spotting from a group of torching trees.

    Attributes:
        cover_ht_used (float): Downwind cover height used (ft).
        flame_ht (float): Steady flame height (ft).
        flame_ratio (float): Tree height / steady flame height.
        flame_duration (float): Steady flame duration (min).
        firebrand_ht (float): Initial maximum firebrand height (ft).
        flat_distance (float): Spotting distance over flat terrain (mi).
        distance (float): Spotting distance over ridge/valley terrain (mi).
    """
    cover_ht_used: float = 0.0
    flame_ht: float = 0.0
    flame_ratio: float = 0.0
    flame_duration: float = 0.0
    firebrand_ht: float = 0.0
    flat_distance: float = 0.0
    distance: float = 0.0

    def to_dict(self):
        return asdict(self)


def critical_cover_height(firebrand_ht: float, cover_ht: float) -> float:
    """Cover height (ft) used for the flat terrain distance.

    The larger of the actual downwind cover height and the minimum height for
    which the log profile of the flat terrain equation is valid.
    """
    if firebrand_ht < SMIDGEN:
        critical_ht = 0.0
    else:
        critical_ht = 2.2 * np.power(firebrand_ht, 0.337) - 4.0
    return float(max(cover_ht, critical_ht))


def flat_terrain_distance(firebrand_ht: float, cover_ht: float, wind_speed_at_20ft: float) -> float:
    """Maximum spotting distance (mi) over flat terrain."""
    if cover_ht <= SMIDGEN:
        return 0.0
    ratio = firebrand_ht / cover_ht
    return float(0.000718 * wind_speed_at_20ft * np.sqrt(cover_ht)
                 * (0.362 + np.sqrt(ratio) / 2.0 * np.log(ratio)))


def mountain_terrain_distance(flat_distance: float, location: int,
                              ridge_to_valley_dist: float, ridge_to_valley_elev: float) -> float:
    """Adjust a flat terrain spotting distance for ridge/valley terrain.

    Args:
        flat_distance (float): Flat terrain spotting distance (mi).
        location (int): Source location, see :class:`SpotLocation`.
        ridge_to_valley_dist (float): Horizontal ridge to valley distance (mi).
        ridge_to_valley_elev (float): Vertical ridge to valley distance (ft).

    Returns:
        float: Spotting distance (mi); ``flat_distance`` on flat terrain.
    """
    if ridge_to_valley_elev <= SMIDGEN or ridge_to_valley_dist <= SMIDGEN:
        return flat_distance
    a1 = flat_distance / ridge_to_valley_dist
    b1 = ridge_to_valley_elev / (10.0 * np.pi) / 1000.0
    phase = location * np.pi / 2.0
    x = a1
    for _ in range(6):
        x = a1 - b1 * (np.cos(np.pi * x - phase) - np.cos(phase))
    return float(x * ridge_to_valley_dist)


def _downwind_cover(cover_ht: float, open_canopy: bool) -> float:
    return 0.5 * cover_ht if open_canopy else cover_ht


def spot_distance_from_burning_pile(location: int, ridge_to_valley_dist: float,
                                    ridge_to_valley_elev: float, cover_ht: float,
                                    open_canopy: bool, wind_speed_at_20ft: float,
                                    flame_ht: float) -> BurningPileSpot:
    """Maximum spotting distance from a burning pile.

    Args:
        location (int): Source location, see :class:`SpotLocation`.
        ridge_to_valley_dist (float): Ridge to valley horizontal distance (mi).
        ridge_to_valley_elev (float): Ridge to valley elevation difference (ft).
        cover_ht (float): Downwind cover height (ft).
        open_canopy (bool): True if the downwind canopy is open.
        wind_speed_at_20ft (float): 20-ft wind speed (mi/h).
        flame_ht (float): Pile flame height (ft).

    Returns:
        BurningPileSpot: Firebrand height and spotting distances.
    """
    out = BurningPileSpot()
    if wind_speed_at_20ft <= SMIDGEN or flame_ht <= SMIDGEN:
        return out
    out.firebrand_ht = 12.2 * flame_ht
    out.cover_ht_used = critical_cover_height(out.firebrand_ht,
                                              _downwind_cover(cover_ht, open_canopy))
    if out.cover_ht_used > SMIDGEN:
        out.flat_distance = flat_terrain_distance(out.firebrand_ht, out.cover_ht_used,
                                                  wind_speed_at_20ft)
        out.distance = mountain_terrain_distance(out.flat_distance, location,
                                                 ridge_to_valley_dist, ridge_to_valley_elev)
    return out


def spot_distance_from_surface_fire(location: int, ridge_to_valley_dist: float,
                                    ridge_to_valley_elev: float, cover_ht: float,
                                    open_canopy: bool, wind_speed_at_20ft: float,
                                    flame_length: float) -> SurfaceFireSpot:
    """Maximum spotting distance from a wind-driven surface fire.

    Args:
        location (int): Source location, see :class:`SpotLocation`.
        ridge_to_valley_dist (float): Ridge to valley horizontal distance (mi).
        ridge_to_valley_elev (float): Ridge to valley elevation difference (ft).
        cover_ht (float): Downwind cover height (ft).
        open_canopy (bool): True if the downwind canopy is open.
        wind_speed_at_20ft (float): 20-ft wind speed (mi/h).
        flame_length (float): Surface fire flame length (ft).

    Returns:
        SurfaceFireSpot: Firebrand height, drift and spotting distances.
    """
    out = SurfaceFireSpot()
    if wind_speed_at_20ft <= SMIDGEN or flame_length <= SMIDGEN:
        return out

    # Thermal energy to wind speed relation
    f = 322.0 * np.power(0.474 * wind_speed_at_20ft, -1.01)
    byram = fireline_intensity_from_flame_byram(flame_length)
    out.firebrand_ht = 0.0 if f * byram < SMIDGEN else float(1.055 * np.sqrt(f * byram))

    out.cover_ht_used = critical_cover_height(out.firebrand_ht,
                                              _downwind_cover(cover_ht, open_canopy))
    if out.cover_ht_used > SMIDGEN:
        out.firebrand_drift = float(0.000278 * wind_speed_at_20ft
                                    * np.power(out.firebrand_ht, 0.643))
        out.flat_distance = (flat_terrain_distance(out.firebrand_ht, out.cover_ht_used,
                                                   wind_speed_at_20ft)
                             + out.firebrand_drift)
        out.distance = mountain_terrain_distance(out.flat_distance, location,
                                                 ridge_to_valley_dist, ridge_to_valley_elev)
    return out


def spot_distance_from_torching_trees(location: int, ridge_to_valley_dist: float,
                                      ridge_to_valley_elev: float, cover_ht: float,
                                      open_canopy: bool, wind_speed_at_20ft: float,
                                      torching_trees: float, tree_dbh: float,
                                      tree_ht: float, species: int) -> TorchingTreesSpot:
    """Maximum spotting distance from a group of torching trees.

    Args:
        location (int): Source location, see :class:`SpotLocation`.
        ridge_to_valley_dist (float): Ridge to valley horizontal distance (mi).
        ridge_to_valley_elev (float): Ridge to valley elevation difference (ft).
        cover_ht (float): Downwind cover height (ft).
        open_canopy (bool): True if the downwind canopy is open.
        wind_speed_at_20ft (float): 20-ft wind speed (mi/h).
        torching_trees (float): Number of trees torching together.
        tree_dbh (float): Tree diameter at breast height (in).
        tree_ht (float): Tree height (ft).
        species (int): Index into ``TORCHING_TREE_SPECIES``.

    Returns:
        TorchingTreesSpot: Flame, firebrand and spotting distance results;
            all zero for an unknown species or when no tree is torching.
    """
    out = TorchingTreesSpot()
    if wind_speed_at_20ft <= SMIDGEN or tree_dbh <= SMIDGEN or torching_trees < 1.0:
        return out
    if species < 0 or species >= len(_TORCH_A):
        return out

    a0, a1, a2, a3 = _TORCH_A[species]
    out.flame_ht = float(a0 * np.power(tree_dbh, a1) * np.power(torching_trees, 0.4))
    out.flame_ratio = tree_ht / out.flame_ht
    out.flame_duration = float(a2 * np.power(tree_dbh, a3) * np.power(torching_trees, -0.2))

    if out.flame_ratio >= 1.0:
        j = 0
    elif out.flame_ratio >= 0.5:
        j = 1
    elif out.flame_duration < 3.5:
        j = 2
    else:
        j = 3
    b0, b1 = _TORCH_B[j]
    out.firebrand_ht = float(b0 * np.power(out.flame_duration, b1) * out.flame_ht + tree_ht / 2.0)

    out.cover_ht_used = critical_cover_height(out.firebrand_ht,
                                              _downwind_cover(cover_ht, open_canopy))
    if out.cover_ht_used > SMIDGEN:
        out.flat_distance = flat_terrain_distance(out.firebrand_ht, out.cover_ht_used,
                                                  wind_speed_at_20ft)
        out.distance = mountain_terrain_distance(out.flat_distance, location,
                                                 ridge_to_valley_dist, ridge_to_valley_elev)
    return out


__all__ = [
    "BurningPileSpot",
    "SurfaceFireSpot",
    "TorchingTreesSpot",
    "SpotLocation",
    "TORCHING_TREE_SPECIES",
    "critical_cover_height",
    "flat_terrain_distance",
    "mountain_terrain_distance",
    "spot_distance_from_burning_pile",
    "spot_distance_from_surface_fire",
    "spot_distance_from_torching_trees",
]
