"""
Species formula table for skua egg hatching-time prediction.

Egg density (DE, g/cm³) is an empirical quadratic function of days before
hatching (DBH), fitted separately for each species (Seabird 32-84, Figure 1):

    Arctic Skua: DE = -0.00007345 * DBH² + 0.008618 * DBH + 0.8719
    Great Skua:  DE = -0.00010000 * DBH² + 0.008442 * DBH + 0.8843

Each species also carries the density and DBH envelopes used for
confidence weighting.
"""
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .model_base import ParameterizedModel
from .species import SpeciesCode
from .utils import normalize_species_code

__all__ = [
    'FORMULA_VERSION',
    'SpeciesFormula',
    'SpeciesFormulaModel',
    'get_species_formula',
    'get_all_species_formulas',
    'get_species_ranges',
    'get_formula_coefficients',
    'clear_formula_cache',
]

FORMULA_VERSION = "2.1"


@dataclass(frozen=True)
class SpeciesFormula:
    """Quadratic DE(DBH) regression for one species.

    Attributes:
        species: Species tag ("arctic" or "great")
        name: Published formula name
        a: Quadratic coefficient
        b: Linear coefficient
        c: Constant term (density at hatching, DBH = 0)
        density_range: Typical egg density envelope (g/cm³)
        dbh_range: Valid DBH envelope (days)
        version: Formula version stamped on predictions
    """
    species: str
    name: str
    a: float
    b: float
    c: float
    density_range: Tuple[float, float]
    dbh_range: Tuple[float, float]
    version: str = FORMULA_VERSION

    def density_at(self, dbh: float) -> float:
        """Egg density predicted by the regression for a given DBH."""
        return self.a * dbh * dbh + self.b * dbh + self.c

    @property
    def coefficients(self) -> Dict[str, float]:
        return {'a': self.a, 'b': self.b, 'c': self.c}


class SpeciesFormulaModel(ParameterizedModel):
    """Loads a species' DE(DBH) coefficients and envelopes.

    Uses the base class pattern for loading species-specific coefficients
    from skua_formula_coefficients.json with fallback support.
    """

    COEFFICIENT_FILE = 'skua_formula_coefficients.json'
    COEFFICIENT_KEY = 'species_coefficients'
    FALLBACK_PARAMETERS = {
        'arctic': {
            'name': 'Arctic Skua DE Formula',
            'a': -0.00007345, 'b': 0.008618, 'c': 0.8719,
            'density_range': [0.80, 1.05], 'dbh_range': [0, 35],
        },
        'great': {
            'name': 'Great Skua DE Formula',
            'a': -0.00010000, 'b': 0.008442, 'c': 0.8843,
            'density_range': [0.85, 1.10], 'dbh_range': [0, 35],
        },
    }

    def _load_parameters(self) -> None:
        """Load coefficients and the equation version."""
        super()._load_parameters()
        equation = self.raw_data.get('equation', {}) if self.raw_data else {}
        self.version = str(equation.get('version', FORMULA_VERSION))

    def to_formula(self) -> SpeciesFormula:
        """Build the immutable formula record for this species."""
        coef = self.get_species_coefficients()
        density_min, density_max = coef['density_range']
        dbh_min, dbh_max = coef['dbh_range']
        return SpeciesFormula(
            species=self.species_code,
            name=self.get_coefficient('name', f"{self.species_code.capitalize()} Skua DE Formula"),
            a=float(coef['a']),
            b=float(coef['b']),
            c=float(coef['c']),
            density_range=(float(density_min), float(density_max)),
            dbh_range=(float(dbh_min), float(dbh_max)),
            version=self.version,
        )


# Module-level cache of formula records
_formula_cache: Dict[str, SpeciesFormula] = {}


def get_species_formula(species) -> SpeciesFormula:
    """Get the (cached) formula record for a species.

    Args:
        species: Species tag or SpeciesCode

    Returns:
        SpeciesFormula for the species

    Raises:
        UnknownSpeciesError: If the species has no formula
    """
    key = normalize_species_code(species)
    if key not in _formula_cache:
        _formula_cache[key] = SpeciesFormulaModel(species).to_formula()
    return _formula_cache[key]


def get_all_species_formulas() -> Dict[str, SpeciesFormula]:
    """Formula records for every configured species."""
    return {code.value: get_species_formula(code) for code in SpeciesCode}


def get_species_ranges(species) -> Dict[str, Dict[str, float]]:
    """Density and DBH envelopes for a species.

    Returns:
        {'density': {'min', 'max'}, 'dbh': {'min', 'max'}}
    """
    formula = get_species_formula(species)
    return {
        'density': {'min': formula.density_range[0], 'max': formula.density_range[1]},
        'dbh': {'min': formula.dbh_range[0], 'max': formula.dbh_range[1]},
    }


def get_formula_coefficients() -> Dict[str, Dict[str, Any]]:
    """Name and coefficients of every species formula, for debugging."""
    return {
        species: {'name': formula.name, **formula.coefficients}
        for species, formula in get_all_species_formulas().items()
    }


def clear_formula_cache() -> None:
    """Clear cached formula records."""
    _formula_cache.clear()
