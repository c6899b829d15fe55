"""
Input validation for egg measurements.

The validator is a pre-flight check for callers that build user-facing
forms: it never raises, and reports every problem as a message string.
It re-runs the first stages of the prediction pipeline (volume, density,
discriminant, root window) so that a measurement it accepts will not fail
in the solver with UnsolvableFormula or NoValidRoot.

Measurements outside the species-typical bands are accepted with a warning.
"""
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from .config_loader import load_validation_rules
from .engine import FIELD_ALIASES
from .formulas import get_species_formula
from .geometry import DEFAULT_SHAPE_CONSTANT, MM3_PER_CM3
from .logging_config import get_logger
from .solver import quadratic_roots, valid_roots
from .species import SpeciesCode, get_species_code

__all__ = [
    'FieldValidation',
    'ValidationResult',
    'get_validation_rules',
    'validate_egg_length',
    'validate_egg_breadth',
    'validate_egg_mass',
    'validate_shape_constant',
    'validate_species',
    'validate_measurement',
]

logger = get_logger(__name__)

FALLBACK_RULES: Dict[str, Any] = {
    'absolute': {
        'length': {'min': 60.0, 'max': 85.0, 'unit': 'mm'},
        'breadth': {'min': 40.0, 'max': 60.0, 'unit': 'mm'},
        'mass': {'min': 70.0, 'max': 120.0, 'unit': 'g'},
        'shape_constant': {'min': 0.1, 'max': 1.0, 'unit': ''},
    },
    'density': {'min': 0.5, 'max': 1.5},
    'species_typical': {
        'arctic': {
            'length': {'min': 55.0, 'max': 62.0},
            'breadth': {'min': 39.0, 'max': 43.0},
            'mass': {'min': 42.0, 'max': 52.0},
        },
        'great': {
            'length': {'min': 70.0, 'max': 79.0},
            'breadth': {'min': 51.0, 'max': 55.0},
            'mass': {'min': 82.0, 'max': 95.0},
        },
    },
}

_FIELD_LABELS = {
    'length': 'Egg length',
    'breadth': 'Egg breadth',
    'mass': 'Egg mass',
    'shape_constant': 'Kv constant',
}


@dataclass
class FieldValidation:
    """Outcome of validating a single field."""
    valid: bool
    error: Optional[str] = None
    warning: Optional[str] = None


@dataclass
class ValidationResult:
    """Outcome of validating a complete measurement.

    Attributes:
        valid: True when there are no errors
        errors: Messages that make the measurement unusable
        warnings: Messages about unusual but accepted values
    """
    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {'valid': self.valid, 'errors': list(self.errors), 'warnings': list(self.warnings)}


def get_validation_rules() -> Dict[str, Any]:
    """Validation rules from cfg/validation_rules.yaml, or the built-in rules."""
    try:
        return load_validation_rules()
    except FileNotFoundError:
        logger.debug("validation_rules.yaml not found; using built-in rules")
        return FALLBACK_RULES


def _is_positive_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


def _format_band(band: Mapping[str, Any]) -> str:
    return f"{band['min']:g}-{band['max']:g}{band.get('unit', '')}"


def _validate_measurement_field(name: str, value: Any, species=None) -> FieldValidation:
    rules = get_validation_rules()
    label = _FIELD_LABELS[name]

    if not _is_positive_number(value):
        return FieldValidation(False, error=f"{label} must be a positive number (got {value!r})")

    band = rules['absolute'][name]
    if not band['min'] <= value <= band['max']:
        return FieldValidation(
            False, error=f"{label} must be between {_format_band(band)} (got {value})"
        )

    species_code = get_species_code(species) if species is not None else None
    if species_code is not None:
        typical = rules.get('species_typical', {}).get(species_code.value, {}).get(name)
        if typical and not typical['min'] <= value <= typical['max']:
            unit = band.get('unit', '')
            return FieldValidation(
                True,
                warning=(f"{label} {value}{unit} is outside the typical "
                         f"{species_code.display_name} range "
                         f"({typical['min']:g}-{typical['max']:g}{unit}). "
                         f"Please verify measurement.")
            )

    return FieldValidation(True)


def validate_egg_length(length: Any, species=None) -> FieldValidation:
    """Validate egg length (mm), warning when atypical for the species."""
    return _validate_measurement_field('length', length, species)


def validate_egg_breadth(breadth: Any, species=None) -> FieldValidation:
    """Validate egg breadth (mm), warning when atypical for the species."""
    return _validate_measurement_field('breadth', breadth, species)


def validate_egg_mass(mass: Any, species=None) -> FieldValidation:
    """Validate egg mass (g), warning when atypical for the species."""
    return _validate_measurement_field('mass', mass, species)


def validate_shape_constant(shape_constant: Any) -> FieldValidation:
    """Validate the egg-shape constant Kv."""
    return _validate_measurement_field('shape_constant', shape_constant)


def validate_species(species: Any) -> FieldValidation:
    """Validate that a species tag names a supported species."""
    if get_species_code(species) is None:
        supported = ' or '.join(f'"{code}"' for code in SpeciesCode.values())
        return FieldValidation(
            False, error=f"Species type must be either {supported} (got {species!r})"
        )
    return FieldValidation(True)


def _simulate_pipeline(length: float, breadth: float, mass: float,
                       shape_constant: float, species: SpeciesCode) -> List[str]:
    """Re-run volume, density and root finding; return any problems found."""
    errors = []
    rules = get_validation_rules()

    volume = shape_constant * length * breadth ** 2 / MM3_PER_CM3
    density = mass / volume

    density_band = rules['density']
    if not density_band['min'] <= density <= density_band['max']:
        errors.append(
            f"Calculated egg density {density:.4f} g/cm³ is outside reasonable range "
            f"({density_band['min']:g}-{density_band['max']:g} g/cm³)"
        )

    formula = get_species_formula(species)
    discriminant, root1, root2 = quadratic_roots(formula.a, formula.b, formula.c - density)
    if discriminant < 0:
        errors.append(
            f"Input parameters would result in invalid calculation "
            f"(negative discriminant {discriminant:.6f} for density {density:.4f})"
        )
    elif not valid_roots(root1, root2):
        errors.append(
            f"Input parameters would give no hatching time within 0-35 days "
            f"(density {density:.4f}, roots {root1:.2f}, {root2:.2f})"
        )

    return errors


def validate_measurement(measurement: Union[Mapping[str, Any], Any]) -> ValidationResult:
    """Validate a complete measurement before prediction.

    Args:
        measurement: MeasurementInput or a mapping with the same fields
            (camelCase ``shapeConstant``/``speciesType`` and ``kv`` accepted)

    Returns:
        ValidationResult with all errors and warnings found
    """
    if isinstance(measurement, Mapping):
        values = {}
        for name, aliases in FIELD_ALIASES.items():
            values[name] = next((measurement[a] for a in aliases if a in measurement), None)
        # Only an absent key takes the default; an explicit None is rejected like predict does
        if not any(alias in measurement for alias in FIELD_ALIASES['shape_constant']):
            values['shape_constant'] = DEFAULT_SHAPE_CONSTANT
    else:
        values = {name: getattr(measurement, name, None)
                  for name in ('length', 'breadth', 'mass', 'shape_constant', 'species')}

    species = values['species']
    species_code = get_species_code(species) if species is not None else None

    checks = [
        validate_egg_length(values['length'], species_code),
        validate_egg_breadth(values['breadth'], species_code),
        validate_egg_mass(values['mass'], species_code),
        validate_shape_constant(values['shape_constant']),
        validate_species(species),
    ]
    errors = [check.error for check in checks if check.error]
    warnings = [check.warning for check in checks if check.warning]

    if not errors:
        errors.extend(_simulate_pipeline(values['length'], values['breadth'], values['mass'],
                                         values['shape_constant'], species_code))

    if errors:
        logger.debug("Measurement rejected: %s", errors)

    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)
