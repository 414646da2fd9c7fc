"""Batch evaluation of surface and crown fire scenarios.

Each scenario builds a catalog fuel bed, runs the surface fire at the given
moisture and site, and, when a canopy is given, classifies the crown fire
over that surface fire. Results can be written to parquet through
:class:`firebehavior.utilities.logger.Logger`.
"""

from dataclasses import dataclass
from typing import List, Optional

from tqdm import tqdm

from firebehavior.models.crown_fire import CrownFire
from firebehavior.models.fuel_models import Anderson13
from firebehavior.models.surface_fire import SurfaceFire
from firebehavior.utilities.data_classes import RunParams, ScenarioParams
from firebehavior.utilities.fire_util import FireType
from firebehavior.utilities.logger import Logger
from firebehavior.utilities.logger_schemas import CrownFireLogEntry, SurfaceFireLogEntry
from firebehavior.utilities.unit_conversions import ft_min_to_mph, mph_to_ft_min


@dataclass
class ScenarioResult:
    surface: SurfaceFireLogEntry
    crown: Optional[CrownFireLogEntry] = None


def run_surface_fire(scenario: ScenarioParams) -> SurfaceFire:
    """Build and evaluate the surface fire of a scenario.

    Raises:
        FuelModelError: If the scenario's fuel model is unknown or not burnable.
    """
    bed = Anderson13(scenario.fuel_model).to_fuel_bed(scenario.moisture.by_class())

    site = scenario.site
    fire = SurfaceFire()
    fire.set_fuel_bed(bed)
    fire.set_moisture(bed.moistures, scenario.moisture.live_mext_override or 0.0)
    fire.set_site(site.slope, site.aspect, mph_to_ft_min(site.midflame_wind_mph),
                  site.wind_dir_from_upslope, site.apply_wind_limit)
    if scenario.elapsed_min is not None:
        fire.set_time(scenario.elapsed_min)
    return fire


def run_crown_fire(scenario: ScenarioParams, surface_fire: SurfaceFire) -> CrownFire:
    """Classify the crown fire of a scenario over its evaluated surface fire."""
    m = scenario.moisture
    canopy = scenario.canopy

    crown = CrownFire()
    crown.set_moisture([m.dead_1h, m.dead_10h, m.dead_100h, m.live_woody])
    crown.set_wind(mph_to_ft_min(scenario.site.u20_mph))
    crown.set_canopy(canopy.height, canopy.base_height, canopy.bulk_density,
                     canopy.foliar_moisture, canopy.heat)
    crown.attach_surface_fire(surface_fire)
    if scenario.elapsed_min is not None:
        crown.set_time(scenario.elapsed_min)
    return crown


def surface_log_entry(idx: int, scenario: ScenarioParams, fire: SurfaceFire) -> SurfaceFireLogEntry:
    return SurfaceFireLogEntry(
        scenario=idx,
        name=scenario.name or f"scenario_{idx}",
        fuel_model=scenario.fuel_model,
        slope=fire.slope_fraction,
        aspect=fire.aspect,
        midflame_wind_mph=scenario.site.midflame_wind_mph,
        wind_dir_from_upslope=fire.wind_dir_from_upslope,
        reaction_intensity=fire.total_rx_int,
        ros_head=fire.spread_rate_at_head,
        ros_back=fire.spread_rate_at_back,
        ros_flank=fire.spread_rate_at_flank,
        head_dir_from_upslope=fire.head_dir_from_upslope,
        lw_ratio=fire.length_to_width_ratio,
        hpua=fire.heat_per_unit_area,
        fli_head=fire.fireline_intensity_at_head,
        flame_head=fire.flame_length_at_head,
        effective_wind_mph=ft_min_to_mph(fire.effective_wind_speed),
        wind_limit_exceeded=fire.wind_limit_exceeded,
        situation=fire.situation,
        elapsed_min=scenario.elapsed_min,
        fire_acres=fire.fire_acres if scenario.elapsed_min is not None else None,
    )


def crown_log_entry(idx: int, scenario: ScenarioParams, crown: CrownFire) -> CrownFireLogEntry:
    return CrownFireLogEntry(
        scenario=idx,
        name=scenario.name or f"scenario_{idx}",
        wind_20ft_mph=scenario.site.u20_mph,
        canopy_height=crown.canopy_height,
        canopy_base_height=crown.canopy_base_height,
        canopy_bulk_density=crown.canopy_bulk_density,
        foliar_moisture=crown.canopy_foliar_moisture,
        fire_type=crown.fire_type,
        fire_type_name=FireType.names[crown.fire_type],
        transition_ratio=crown.transition_ratio,
        active_ratio=crown.active_ratio,
        crown_fraction_burned=crown.crown_fraction_burned,
        active_ros=crown.active_crown_fire_ros,
        final_ros=crown.final_fire_ros,
        final_fli=crown.final_fire_fli,
        final_flame=crown.final_fire_flame,
        final_hpua=crown.final_fire_hpua,
        is_plume_dominated=crown.is_plume_dominated,
    )


def run_scenarios(params: RunParams, log_folder: Optional[str] = None,
                  progress: bool = True) -> List[ScenarioResult]:
    """Evaluate every scenario of a run in order.

    Args:
        params (RunParams): Run configuration.
        log_folder (str, optional): When given, results are written there as
            parquet files with run metadata and a status log.
        progress (bool): Show a tqdm progress bar. Defaults to True.

    Returns:
        List[ScenarioResult]: One result per scenario, in scenario order.
    """
    logger = None
    if log_folder is not None:
        logger = Logger(log_folder)
        logger.start_new_run()
        logger.log_metadata(params)
        if params.description:
            logger.log_message(params.description)

    results = []
    for idx, scenario in enumerate(tqdm(params.scenarios, desc='Scenarios ',
                                        leave=False, disable=not progress)):
        fire = run_surface_fire(scenario)
        result = ScenarioResult(surface=surface_log_entry(idx, scenario, fire))

        if scenario.canopy is not None:
            crown = run_crown_fire(scenario, fire)
            result.crown = crown_log_entry(idx, scenario, crown)

        results.append(result)

        if logger is not None:
            logger.cache_surface_entries([result.surface])
            if result.crown is not None:
                logger.cache_crown_entries([result.crown])

    if logger is not None:
        logger.finish([r.surface for r in results],
                      [r.crown for r in results if r.crown is not None])

    return results
