"""
SkuaTBH: skua egg hatching-time prediction for Python

Predicts Days Before Hatching (DBH) for Arctic and Great Skua eggs from
egg length, breadth and mass, by inverting the species-specific regressions
of egg density on incubation stage.

Quick Start:
    >>> from skuatbh import MeasurementInput, predict
    >>> result = predict(MeasurementInput(72.3, 50.2, 91.89, species='arctic'))
    >>> print(result.dbh, result.confidence)
"""

# =============================================================================
# Package Metadata
# =============================================================================
__version__ = "0.1.0"
__author__ = "SkuaTBH Development Team"

# =============================================================================
# Prediction Engine - Primary API
# =============================================================================
from .engine import MeasurementInput, PredictionResult, predict, predict_batch

# =============================================================================
# Species and Formulas
# =============================================================================
from .species import SpeciesCode, get_species_code
from .formulas import (
    FORMULA_VERSION,
    SpeciesFormula,
    get_species_formula,
    get_all_species_formulas,
    get_species_ranges,
    get_formula_coefficients,
)

# =============================================================================
# Pipeline Stages
# =============================================================================
from .geometry import DEFAULT_SHAPE_CONSTANT, egg_volume
from .density import egg_density
from .solver import solve_dbh, quadratic_roots
from .confidence import calculate_confidence

# =============================================================================
# Validation
# =============================================================================
from .validation import (
    FieldValidation,
    ValidationResult,
    validate_measurement,
    validate_egg_length,
    validate_egg_breadth,
    validate_egg_mass,
    validate_shape_constant,
    validate_species,
)

# =============================================================================
# Configuration and Logging
# =============================================================================
from .config_loader import get_config_loader, load_coefficient_file, load_validation_rules
from .logging_config import get_logger, setup_logging

# =============================================================================
# Utilities
# =============================================================================
from .utils import (
    normalize_code,
    normalize_species_code,
    round_half_up,
    generate_density_curve,
    predictions_to_dataframe,
)

# =============================================================================
# Exceptions
# =============================================================================
from .exceptions import (
    EngineError,
    ConfigurationError,
    InvalidDataError,
    InvalidMeasurementError,
    ImplausibleMeasurementError,
    UnsolvableFormulaError,
    NoValidRootError,
    ImplausibleResultError,
    UnknownSpeciesError,
    BatchPredictionError,
)

# =============================================================================
# Public API Definition
# =============================================================================
__all__ = [
    # Package Metadata
    "__version__",
    "__author__",
    # Prediction Engine
    "MeasurementInput",
    "PredictionResult",
    "predict",
    "predict_batch",
    # Species and Formulas
    "SpeciesCode",
    "get_species_code",
    "FORMULA_VERSION",
    "SpeciesFormula",
    "get_species_formula",
    "get_all_species_formulas",
    "get_species_ranges",
    "get_formula_coefficients",
    # Pipeline Stages
    "DEFAULT_SHAPE_CONSTANT",
    "egg_volume",
    "egg_density",
    "solve_dbh",
    "quadratic_roots",
    "calculate_confidence",
    # Validation
    "FieldValidation",
    "ValidationResult",
    "validate_measurement",
    "validate_egg_length",
    "validate_egg_breadth",
    "validate_egg_mass",
    "validate_shape_constant",
    "validate_species",
    # Configuration and Logging
    "get_config_loader",
    "load_coefficient_file",
    "load_validation_rules",
    "get_logger",
    "setup_logging",
    # Utilities
    "normalize_code",
    "normalize_species_code",
    "round_half_up",
    "generate_density_curve",
    "predictions_to_dataframe",
    # Exceptions
    "EngineError",
    "ConfigurationError",
    "InvalidDataError",
    "InvalidMeasurementError",
    "ImplausibleMeasurementError",
    "UnsolvableFormulaError",
    "NoValidRootError",
    "ImplausibleResultError",
    "UnknownSpeciesError",
    "BatchPredictionError",
]
