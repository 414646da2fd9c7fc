"""Run configuration dataclasses.

A run is a list of scenarios; each scenario names a catalog fuel model and
carries its moisture, site and (optionally) canopy inputs. Wind speeds are
given in mi/h and converted to ft/min by the scenario runner.

Example run file::

    {
        "description": "Grass and timber at 5 mi/h",
        "scenarios": [
            {
                "name": "fm1",
                "fuel_model": 1,
                "moisture": {"dead_1h": 0.06},
                "site": {"midflame_wind_mph": 5.0}
            }
        ]
    }
"""

import json
from dataclasses import dataclass, field, fields
from typing import Optional, List

from firebehavior.exceptions import ConfigurationError


@dataclass
class MoistureParams:
    dead_1h: float = 0.06
    dead_10h: float = 0.07
    dead_100h: float = 0.08
    live_herb: float = 0.60
    live_woody: float = 0.90
    live_mext_override: Optional[float] = 0.0

    def by_class(self) -> List[float]:
        """Moistures in catalog load class order (1-h, 10-h, 100-h, herb, woody)."""
        return [self.dead_1h, self.dead_10h, self.dead_100h, self.live_herb, self.live_woody]


@dataclass
class SiteParams:
    slope: Optional[float] = 0.0 # rise / reach
    aspect: Optional[float] = 180.0
    midflame_wind_mph: Optional[float] = 0.0
    wind_dir_from_upslope: Optional[float] = 0.0
    wind_20ft_mph: Optional[float] = None
    apply_wind_limit: Optional[bool] = True

    @property
    def u20_mph(self) -> float:
        """20-ft wind, defaulting to the mid-flame wind over the 0.4 reduction factor."""
        if self.wind_20ft_mph is not None:
            return self.wind_20ft_mph
        return self.midflame_wind_mph / 0.4


@dataclass
class CanopyParams:
    height: float
    base_height: float
    bulk_density: float # lb/ft^3
    foliar_moisture: Optional[float] = 1.0
    heat: Optional[float] = 8000.0


@dataclass
class ScenarioParams:
    fuel_model: int
    name: Optional[str] = None
    moisture: MoistureParams = field(default_factory=MoistureParams)
    site: SiteParams = field(default_factory=SiteParams)
    canopy: Optional[CanopyParams] = None
    elapsed_min: Optional[float] = None


@dataclass
class RunParams:
    scenarios: List[ScenarioParams] = field(default_factory=list)
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict, config_path: Optional[str] = None) -> "RunParams":
        """Build run parameters from a parsed configuration mapping.

        Raises:
            ConfigurationError: If a required field is missing, a field is
                unknown or a value has the wrong type.
        """
        if not isinstance(data, dict):
            raise ConfigurationError("Run configuration must be a mapping", config_path=config_path)

        raw_scenarios = data.get("scenarios")
        if not raw_scenarios:
            raise ConfigurationError("Scenario list is empty", config_path=config_path,
                                     parameter="scenarios")
        if not isinstance(raw_scenarios, list):
            raise ConfigurationError("Scenarios must be a list", config_path=config_path,
                                     parameter="scenarios")

        scenarios = []
        for idx, raw in enumerate(raw_scenarios):
            scenarios.append(_parse_scenario(raw, idx, config_path))

        return cls(scenarios=scenarios, description=data.get("description"))

    @classmethod
    def from_json(cls, path: str) -> "RunParams":
        try:
            with open(path, "r") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise ConfigurationError("Configuration file not found", config_path=path) from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON: {e}", config_path=path) from e

        return cls.from_dict(data, config_path=path)


def _parse_scenario(raw, idx: int, config_path: Optional[str]) -> ScenarioParams:
    prefix = f"scenarios[{idx}]"
    if not isinstance(raw, dict):
        raise ConfigurationError("Scenario must be a mapping", config_path=config_path,
                                 parameter=prefix)
    if "fuel_model" not in raw:
        raise ConfigurationError("Missing required parameter", config_path=config_path,
                                 parameter=f"{prefix}.fuel_model")

    try:
        fuel_model = int(raw["fuel_model"])
    except (TypeError, ValueError) as e:
        raise ConfigurationError("Fuel model must be an integer", config_path=config_path,
                                 parameter=f"{prefix}.fuel_model") from e

    canopy = None
    if raw.get("canopy") is not None:
        canopy = _build(CanopyParams, raw["canopy"], f"{prefix}.canopy", config_path)

    elapsed = raw.get("elapsed_min")
    if elapsed is not None:
        elapsed = _as_float(elapsed, f"{prefix}.elapsed_min", config_path)

    return ScenarioParams(
        fuel_model=fuel_model,
        name=raw.get("name", f"scenario_{idx}"),
        moisture=_build(MoistureParams, raw.get("moisture", {}), f"{prefix}.moisture", config_path),
        site=_build(SiteParams, raw.get("site", {}), f"{prefix}.site", config_path),
        canopy=canopy,
        elapsed_min=elapsed,
    )


def _build(cls, raw, prefix: str, config_path: Optional[str]):
    if not isinstance(raw, dict):
        raise ConfigurationError("Expected a mapping", config_path=config_path, parameter=prefix)

    known = {f.name: f for f in fields(cls)}
    for key in raw:
        if key not in known:
            raise ConfigurationError("Unknown parameter", config_path=config_path,
                                     parameter=f"{prefix}.{key}")

    kwargs = {}
    for key, value in raw.items():
        if value is None:
            kwargs[key] = None
        elif key == "apply_wind_limit":
            if not isinstance(value, bool):
                raise ConfigurationError("Expected a boolean", config_path=config_path,
                                         parameter=f"{prefix}.{key}")
            kwargs[key] = value
        else:
            kwargs[key] = _as_float(value, f"{prefix}.{key}", config_path)

    try:
        return cls(**kwargs)
    except TypeError as e:
        raise ConfigurationError(f"Missing required parameter: {e}", config_path=config_path,
                                 parameter=prefix) from e


def _as_float(value, parameter: str, config_path: Optional[str]) -> float:
    if isinstance(value, bool):
        raise ConfigurationError("Expected a number", config_path=config_path, parameter=parameter)
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError("Expected a number", config_path=config_path,
                                 parameter=parameter) from e
