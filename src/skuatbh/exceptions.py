"""
Custom exceptions for SkuaTBH.
Provides domain-specific error handling with informative messages.

Every engine failure carries a ``kind`` tag so callers can translate it
into their own transport format without matching on class names.
"""
import math


class EngineError(Exception):
    """Base exception for all SkuaTBH errors."""
    kind = "EngineError"


class ConfigurationError(EngineError):
    """Raised when there are configuration-related issues."""
    kind = "Configuration"


class InvalidDataError(ConfigurationError):
    """Raised when a configuration file is malformed or invalid."""
    def __init__(self, data_description: str, reason: str):
        self.data_description = data_description
        self.reason = reason
        super().__init__(f"Invalid {data_description}: {reason}")


class InvalidMeasurementError(EngineError):
    """Raised when a measurement is non-positive or non-finite."""
    kind = "InvalidMeasurement"

    def __init__(self, param_name: str, value, reason: str = "must be a positive number"):
        self.param_name = param_name
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {param_name}: {value} ({reason})")


class ImplausibleMeasurementError(EngineError):
    """Raised when measurements produce a physically implausible density."""
    kind = "ImplausibleMeasurement"

    def __init__(self, egg_density: float, limit: float):
        self.egg_density = egg_density
        self.limit = limit
        super().__init__(
            f"Egg density {egg_density} is unusually high (>{limit} g/cm³). "
            f"Please verify measurements."
        )


class UnknownSpeciesError(EngineError):
    """Raised when a species tag is not present in the formula table."""
    kind = "UnknownSpecies"

    def __init__(self, species, available=None):
        self.species = species
        self.available = list(available or [])
        message = f"Unknown species type: '{species}'"
        if self.available:
            message += f". Supported species: {self.available}"
        super().__init__(message)


class UnsolvableFormulaError(EngineError):
    """Raised when the species quadratic has no real solution for a density."""
    kind = "UnsolvableFormula"

    def __init__(self, egg_density: float, discriminant: float, species: str):
        self.egg_density = egg_density
        self.discriminant = discriminant
        self.species = species
        super().__init__(
            f"Invalid calculation: discriminant is negative ({discriminant:.6f}). "
            f"Egg density ({egg_density}) is outside the valid range for the "
            f"{species} formula."
        )


class NoValidRootError(EngineError):
    """Raised when no root of the species quadratic falls in the DBH window."""
    kind = "NoValidRoot"

    def __init__(self, egg_density: float, root1: float, root2: float,
                 min_dbh: float, max_dbh: float):
        self.egg_density = egg_density
        self.roots = (root1, root2)
        self.window = (min_dbh, max_dbh)
        super().__init__(
            f"No valid DBH solution found for egg density {egg_density}. "
            f"Roots: {root1:.3f}, {root2:.3f}. "
            f"Expected range: {min_dbh:g}-{max_dbh:g} days."
        )


class ImplausibleResultError(EngineError):
    """Raised when a selected DBH fails the final sanity bound."""
    kind = "ImplausibleResult"

    def __init__(self, dbh: float, reason: str):
        self.dbh = dbh
        self.reason = reason
        super().__init__(f"Invalid result: DBH {dbh:.3f} days {reason}")


class BatchPredictionError(EngineError):
    """Raised when one element of a batch prediction fails.

    Attributes:
        index: Zero-based position of the failing measurement
        cause: The error raised for that measurement
    """
    def __init__(self, index: int, cause: EngineError):
        self.index = index
        self.cause = cause
        self.kind = getattr(cause, "kind", EngineError.kind)
        super().__init__(f"Calculation failed for input {index}: {cause}")


# Validation utilities
def validate_positive(value: float, param_name: str) -> float:
    """Validate that a value is a finite positive number.

    Args:
        value: Value to validate
        param_name: Parameter name for error message

    Returns:
        The validated value

    Raises:
        InvalidMeasurementError: If value is not finite or not positive
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidMeasurementError(param_name, value, "must be a number")
    if not math.isfinite(value) or value <= 0:
        raise InvalidMeasurementError(param_name, value)
    return value
