"""FOFEM 6 bark thickness and tree mortality, and crown scorch geometry.

The species table that maps FOFEM genus-species codes to bark thickness and
mortality equations is reference data supplied by the caller. It is loaded
once into an immutable :class:`SpeciesTable`; the equation functions here
take equation ids directly and never consult global state.

References:
    - Reinhardt, E. D. (2003). Using FOFEM 5.0 to estimate tree mortality,
      fuel consumption, smoke production and soil heating from wildland
      fire. 2nd International Wildland Fire Ecology and Fire Management
      Congress.
    - Van Wagner, C. E. (1973). Height of crown scorch in forest fires.
      Canadian Journal of Forest Research 3: 373-378.
"""

import json
from dataclasses import dataclass, asdict
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

import numpy as np

from firebehavior.exceptions import SpeciesTableError
from firebehavior.utilities.fire_util import SMIDGEN
from firebehavior.utilities.unit_conversions import in_to_cm

# Single bark thickness coefficients (in bark per in dbh) by equation id
_SINGLE_BARK_THICKNESS = (
    0.000, 0.019, 0.022, 0.024, 0.025, 0.026, 0.027, 0.028, 0.029, 0.030,
    0.031, 0.032, 0.033, 0.034, 0.035, 0.036, 0.037, 0.038, 0.039, 0.040,
    0.041, 0.042, 0.043, 0.044, 0.045, 0.046, 0.047, 0.048, 0.049, 0.050,
    0.052, 0.055, 0.057, 0.059, 0.060, 0.062, 0.063, 0.068, 0.072, 0.081,
    0.000,
)

LONGLEAF_PINE_BARK_EQUATION = 40

MORTALITY_EQUATIONS = (1, 3, 5, 10, 11, 12, 14, 15, 16, 17, 18, 19, 20)


def bark_thickness(equation_id: int, dbh: float) -> float:
    """FOFEM 6 single bark thickness (in).

    Args:
        equation_id (int): Bark thickness equation, 0-39 or 40 (longleaf pine).
        dbh (float): Diameter at breast height (in).

    Returns:
        float: Bark thickness (in); 0 for an unknown equation.
    """
    if equation_id == LONGLEAF_PINE_BARK_EQUATION:
        bt_cm = 0.435 + 0.031 * in_to_cm(dbh)
        return bt_cm / 2.54
    if 0 <= equation_id < LONGLEAF_PINE_BARK_EQUATION:
        return _SINGLE_BARK_THICKNESS[equation_id] * dbh
    return 0.0


def _logistic(x: float) -> float:
    return float(1.0 / (1.0 + np.exp(-x)))


def mortality_rate(equation_id: int, dbh: float, bark: float, scorch_ht: float,
                   crown_length_scorched: float, crown_volume_scorched: float) -> float:
    """FOFEM 6 probability of mortality for trees with dbh >= 1 in.

    Args:
        equation_id (int): Mortality equation (1, 3, 5, 10-12, 14-20).
        dbh (float): Diameter at breast height (in).
        bark (float): Bark thickness (in).
        scorch_ht (float): Scorch height (ft).
        crown_length_scorched (float): Fraction of crown length scorched.
        crown_volume_scorched (float): Fraction of crown volume scorched.

    Returns:
        float: Mortality probability in [0, 1]; 0 without scorch, for
            probabilities below 0.0001 or for an unknown equation.
    """
    if scorch_ht < 0.0001:
        return 0.0

    bt = in_to_cm(bark)
    cls = 100.0 * crown_length_scorched
    cvs = 100.0 * crown_volume_scorched
    dbh_cm = in_to_cm(dbh)

    if equation_id in (1, 3):
        x = (-1.941 + 6.316 * (1.0 - np.exp(-bark))
             - 5.35 * crown_volume_scorched * crown_volume_scorched)
        mr = _logistic(-x)
        if equation_id == 3:
            mr = max(mr, 0.8)
    elif equation_id == 5:
        cvs = cvs / 10.0
        x = 0.169 + 5.136 * bt + 14.492 * bt * bt - 0.348 * cvs * cvs
        mr = _logistic(-x)
    elif equation_id == 10:
        mr = _logistic(-3.5083 + 0.0956 * cls - 0.00184 * cls ** 2 + 0.000017 * cls ** 3)
    elif equation_id == 11:
        mr = _logistic(-1.6950 + 0.2071 * cvs - 0.0047 * cvs ** 2 + 0.000035 * cvs ** 3)
    elif equation_id == 12:
        mr = _logistic(-4.2466 + 0.000007172 * cls ** 3)
    elif equation_id == 14:
        mr = _logistic(-1.6594 + 0.0327 * cvs - 0.0489 * dbh_cm)
    elif equation_id == 15:
        mr = _logistic(0.0845 + 0.0445 * cvs)
    elif equation_id == 16:
        mr = _logistic(-2.3085 + 0.000004059 * cls ** 3)
    elif equation_id == 17:
        mr = _logistic(-0.3268 + 0.1387 * cvs - 0.0033 * cvs ** 2
                       + 0.000025 * cvs ** 3 - 0.0266 * dbh_cm)
    elif equation_id == 18:
        mr = _logistic(-2.0588 + 0.000814 * cls ** 2)
    elif equation_id == 19:
        mr = _logistic(-2.7103 + 0.000004093 * cvs ** 3)
    elif equation_id == 20:
        mr = _logistic(-2.0346 + 0.0906 * cvs - 0.0022 * cvs ** 2 + 0.000019 * cvs ** 3)
    else:
        return 0.0

    mr = min(mr, 1.0)
    return 0.0 if mr < 0.0001 else mr


@dataclass
class CrownScorch:
    """Scorched portion of a tree crown.

    Attributes:
        crown_length (float): Crown length (ft).
        crown_base_ht (float): Crown base height (ft).
        scorch_length (float): Scorched crown length (ft).
        length_fraction (float): Fraction of the crown length scorched.
        volume_fraction (float): Fraction of the crown volume scorched.
    """
    crown_length: float = 0.0
    crown_base_ht: float = 0.0
    scorch_length: float = 0.0
    length_fraction: float = 0.0
    volume_fraction: float = 0.0

    def to_dict(self):
        return asdict(self)


def crown_scorch(tree_ht: float, crown_ratio: float, scorch_ht: float) -> CrownScorch:
    """Scorched crown length and volume fractions.

    The crown is treated as a cone; the scorched volume is the part of the
    cone below the scorch height.

    Args:
        tree_ht (float): Tree height (ft).
        crown_ratio (float): Crown length / tree height.
        scorch_ht (float): Scorch height (ft).
    """
    crown_length = tree_ht * crown_ratio
    base = tree_ht - crown_length
    scorch_length = min(max(scorch_ht - base, 0.0), crown_length)
    if crown_length < SMIDGEN:
        length_fraction = 1.0 if scorch_length > 0.0 else 0.0
        volume_fraction = 0.0
    else:
        length_fraction = scorch_length / crown_length
        volume_fraction = (scorch_length * (2.0 * crown_length - scorch_length)
                           / (crown_length * crown_length))
    return CrownScorch(crown_length=crown_length, crown_base_ht=base,
                       scorch_length=scorch_length, length_fraction=length_fraction,
                       volume_fraction=volume_fraction)


def crown_ratio(tree_ht: float, crown_base_ht: float) -> float:
    if tree_ht < SMIDGEN or crown_base_ht < 0.0:
        return 0.0
    return (tree_ht - crown_base_ht) / tree_ht


def crown_base_height(tree_ht: float, crown_ratio: float) -> float:
    return tree_ht * (1.0 - crown_ratio)


@dataclass(frozen=True)
class SpeciesRecord:
    """One row of the FOFEM species table."""
    fofem6_code: str
    fofem5_code: str
    mortality_equation: int
    bark_equation: int
    regions: int
    scientific_name: str
    common_name: str


_REQUIRED_FIELDS = ("fofem6_code", "mortality_equation", "bark_equation")


class SpeciesTable:
    """Immutable FOFEM species lookup keyed by upper-case FOFEM 6 code.

    Built once from caller-supplied records; lookups by FOFEM 5 code are
    also supported.

    Raises:
        SpeciesTableError: On a malformed record or a duplicate code.
    """

    def __init__(self, records: Iterable[SpeciesRecord]):
        by6 = {}
        by5 = {}
        for rec in records:
            code = rec.fofem6_code.upper()
            if code in by6:
                raise SpeciesTableError("Duplicate species code", species_code=code)
            by6[code] = rec
            if rec.fofem5_code:
                by5[rec.fofem5_code.upper()] = rec
        self._by_fofem6: Mapping[str, SpeciesRecord] = MappingProxyType(by6)
        self._by_fofem5: Mapping[str, SpeciesRecord] = MappingProxyType(by5)

    @classmethod
    def from_records(cls, records: Iterable[Mapping]) -> "SpeciesTable":
        """Build a table from mappings with ``SpeciesRecord`` field names."""
        parsed = []
        for raw in records:
            if not isinstance(raw, Mapping):
                raise SpeciesTableError(f"Species record must be a mapping, got {type(raw).__name__}")
            code = raw.get("fofem6_code")
            for name in _REQUIRED_FIELDS:
                if name not in raw:
                    raise SpeciesTableError(f"Missing field '{name}'", species_code=code)
            try:
                parsed.append(SpeciesRecord(
                    fofem6_code=str(code),
                    fofem5_code=str(raw.get("fofem5_code", "")),
                    mortality_equation=int(raw["mortality_equation"]),
                    bark_equation=int(raw["bark_equation"]),
                    regions=int(raw.get("regions", 0)),
                    scientific_name=str(raw.get("scientific_name", "")),
                    common_name=str(raw.get("common_name", "")),
                ))
            except (TypeError, ValueError) as e:
                raise SpeciesTableError(f"Malformed species record: {e}", species_code=code) from e
        return cls(parsed)

    @classmethod
    def from_json(cls, path: str) -> "SpeciesTable":
        """Build a table from a JSON file holding a list of species records."""
        try:
            with open(path, "r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise SpeciesTableError(f"Invalid JSON in species table {path}: {e}") from e
        if not isinstance(data, list):
            raise SpeciesTableError(f"Species table {path} must hold a list of records")
        return cls.from_records(data)

    def __len__(self):
        return len(self._by_fofem6)

    def __contains__(self, code: str) -> bool:
        return code.upper() in self._by_fofem6

    def get(self, fofem6_code: str) -> Optional[SpeciesRecord]:
        return self._by_fofem6.get(fofem6_code.upper())

    def get_by_fofem5(self, fofem5_code: str) -> Optional[SpeciesRecord]:
        return self._by_fofem5.get(fofem5_code.upper())

    def bark_thickness(self, fofem6_code: str, dbh: float) -> float:
        """Bark thickness (in) of a species; 0 for an unknown code."""
        rec = self.get(fofem6_code)
        if rec is None:
            return 0.0
        return bark_thickness(rec.bark_equation, dbh)

    def mortality_rate(self, fofem6_code: str, dbh: float, bark: float, scorch_ht: float,
                       crown_length_scorched: float, crown_volume_scorched: float) -> float:
        """Mortality probability of a species; 0 for an unknown code."""
        rec = self.get(fofem6_code)
        if rec is None:
            return 0.0
        return mortality_rate(rec.mortality_equation, dbh, bark, scorch_ht,
                              crown_length_scorched, crown_volume_scorched)
