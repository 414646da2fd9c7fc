from dataclasses import dataclass, asdict
from typing import Optional


@dataclass
class SurfaceFireLogEntry:
    scenario: int
    name: str
    fuel_model: int
    slope: float
    aspect: float
    midflame_wind_mph: float
    wind_dir_from_upslope: float
    reaction_intensity: float # Btu/ft^2/min
    ros_head: float # ft/min
    ros_back: float
    ros_flank: float
    head_dir_from_upslope: float
    lw_ratio: float
    hpua: float # Btu/ft^2
    fli_head: float # Btu/ft/s
    flame_head: float # ft
    effective_wind_mph: float
    wind_limit_exceeded: bool
    situation: int
    elapsed_min: Optional[float] = None
    fire_acres: Optional[float] = None

    def to_dict(self):
        return asdict(self)


@dataclass
class CrownFireLogEntry:
    scenario: int
    name: str
    wind_20ft_mph: float
    canopy_height: float
    canopy_base_height: float
    canopy_bulk_density: float
    foliar_moisture: float
    fire_type: int
    fire_type_name: str
    transition_ratio: float
    active_ratio: float
    crown_fraction_burned: float
    active_ros: float # ft/min
    final_ros: float
    final_fli: float # Btu/ft/s
    final_flame: float # ft
    final_hpua: float # Btu/ft^2
    is_plume_dominated: bool

    def to_dict(self):
        return asdict(self)
