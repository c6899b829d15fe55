"""
Prediction engine facade for SkuaTBH.

Runs the full pipeline for one egg measurement:

    1. egg volume   VE = Kv * l * b² / 1000
    2. egg density  DE = m / VE
    3. DBH          inverse of the species DE(DBH) quadratic
    4. confidence   heuristic reliability score

and stamps the result with the species formula for traceability. Every
stage fails fast; the first error propagates unchanged to the caller.

Usage:
    >>> from skuatbh import MeasurementInput, predict
    >>> result = predict(MeasurementInput(72.3, 50.2, 91.89, species='arctic'))
    >>> print(f"{result.dbh} days, confidence {result.confidence}")
"""
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from .confidence import calculate_confidence
from .density import egg_density as calculate_egg_density
from .exceptions import (
    BatchPredictionError,
    EngineError,
    InvalidMeasurementError,
    UnknownSpeciesError,
    validate_positive,
)
from .formulas import get_species_formula
from .geometry import DEFAULT_SHAPE_CONSTANT, egg_volume as calculate_egg_volume
from .logging_config import get_logger, log_prediction
from .solver import solve_dbh
from .species import SpeciesCode, get_species_code
from .utils import round_half_up

__all__ = [
    'FIELD_ALIASES',
    'MeasurementInput',
    'PredictionResult',
    'predict',
    'predict_batch',
]

logger = get_logger(__name__)

# Accepted spellings for each MeasurementInput field
FIELD_ALIASES = {
    'length': ('length',),
    'breadth': ('breadth',),
    'mass': ('mass',),
    'shape_constant': ('shape_constant', 'shapeConstant', 'kv'),
    'species': ('species', 'speciesType', 'species_type'),
}


@dataclass(frozen=True)
class MeasurementInput:
    """One egg measurement.

    Attributes:
        length: Egg length (mm)
        breadth: Egg breadth (mm)
        mass: Egg mass (g)
        species: Species tag or SpeciesCode
        shape_constant: Egg-shape constant Kv (default 0.507)
    """
    length: float
    breadth: float
    mass: float
    species: Union[SpeciesCode, str]
    shape_constant: float = DEFAULT_SHAPE_CONSTANT

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'MeasurementInput':
        """Build a measurement from a mapping.

        Accepts snake_case keys as well as camelCase ``shapeConstant`` and
        ``speciesType`` and the short ``kv`` alias.

        Raises:
            InvalidMeasurementError: If a required field is missing
        """
        values = {}
        for name, aliases in FIELD_ALIASES.items():
            for alias in aliases:
                if alias in data:
                    values[name] = data[alias]
                    break
        for required in ('length', 'breadth', 'mass'):
            if required not in values:
                raise InvalidMeasurementError(required, None, "is required")
        values.setdefault('species', None)
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'length': self.length,
            'breadth': self.breadth,
            'mass': self.mass,
            'shape_constant': self.shape_constant,
            'species': getattr(self.species, 'value', self.species),
        }


@dataclass(frozen=True)
class PredictionResult:
    """Result of a successful prediction.

    Attributes:
        dbh: Days before hatching, rounded to 2 decimals
        egg_density: Egg density (g/cm³), rounded to 4 decimals
        egg_volume: Egg volume (cm³), rounded to 2 decimals
        confidence: Reliability score in [0.1, 1.0], rounded to 3 decimals
        species: Species the formula was evaluated for
        formula_name: Name of the species formula
        formula_version: Version of the formula table
        coefficients: Quadratic coefficients a, b, c
    """
    dbh: float
    egg_density: float
    egg_volume: float
    confidence: float
    species: SpeciesCode
    formula_name: str
    formula_version: str
    coefficients: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary for serialization."""
        return {
            'dbh': self.dbh,
            'egg_density': self.egg_density,
            'egg_volume': self.egg_volume,
            'confidence': self.confidence,
            'species': self.species.value,
            'formula': {
                'name': self.formula_name,
                'version': self.formula_version,
                'coefficients': dict(self.coefficients),
            },
        }


def _coerce_measurement(measurement) -> MeasurementInput:
    if isinstance(measurement, MeasurementInput):
        return measurement
    if isinstance(measurement, Mapping):
        return MeasurementInput.from_dict(measurement)
    raise InvalidMeasurementError(
        'measurement', type(measurement).__name__,
        "must be a MeasurementInput or a mapping"
    )


def predict(measurement: Union[MeasurementInput, Mapping[str, Any]]) -> PredictionResult:
    """Predict days before hatching for one egg.

    Args:
        measurement: MeasurementInput or a mapping accepted by
            MeasurementInput.from_dict

    Returns:
        PredictionResult with rounded values and formula metadata

    Raises:
        InvalidMeasurementError: non-positive or non-finite input
        UnknownSpeciesError: species has no formula
        ImplausibleMeasurementError: density above 2.0 g/cm³
        UnsolvableFormulaError: negative discriminant
        NoValidRootError: no DBH root within [0, 35] days
        ImplausibleResultError: DBH failed the final sanity bound
    """
    measurement = _coerce_measurement(measurement)

    try:
        validate_positive(measurement.length, 'egg length')
        validate_positive(measurement.breadth, 'egg breadth')
        validate_positive(measurement.mass, 'egg mass')
        validate_positive(measurement.shape_constant, 'shape constant')

        species = get_species_code(measurement.species)
        if species is None:
            raise UnknownSpeciesError(measurement.species, SpeciesCode.values())
        formula = get_species_formula(species)

        volume = calculate_egg_volume(measurement.length, measurement.breadth,
                                      measurement.shape_constant)
        density = calculate_egg_density(measurement.mass, volume)
        dbh = solve_dbh(density, species)
        confidence = calculate_confidence(density, dbh, species)
    except EngineError as e:
        logger.warning("Prediction failed (%s): %s", e.kind, e)
        raise

    log_prediction(logger, species.value, volume, density, dbh, confidence)

    return PredictionResult(
        dbh=round_half_up(dbh, 2),
        egg_density=round_half_up(density, 4),
        egg_volume=round_half_up(volume, 2),
        confidence=round_half_up(confidence, 3),
        species=species,
        formula_name=formula.name,
        formula_version=formula.version,
        coefficients=formula.coefficients,
    )


def predict_batch(measurements: Iterable[Union[MeasurementInput, Mapping[str, Any]]],
                  max_workers: Optional[int] = None) -> List[PredictionResult]:
    """Predict days before hatching for several eggs.

    Each measurement is predicted independently. The first failure (lowest
    index) aborts the batch; no partial results are returned.

    Args:
        measurements: Measurements to predict
        max_workers: If given, evaluate on a thread pool of this size

    Returns:
        Results in input order

    Raises:
        BatchPredictionError: Carries the zero-based ``index`` of the failing
            measurement and the original error as ``cause``
    """
    measurements = list(measurements)

    if not max_workers or max_workers <= 1:
        results = []
        for index, measurement in enumerate(measurements):
            try:
                results.append(predict(measurement))
            except EngineError as e:
                raise BatchPredictionError(index, e) from e
        return results

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(predict, m) for m in measurements]
        results = []
        for index, future in enumerate(futures):
            try:
                results.append(future.result())
            except EngineError as e:
                for pending in futures[index + 1:]:
                    pending.cancel()
                raise BatchPredictionError(index, e) from e
    return results
