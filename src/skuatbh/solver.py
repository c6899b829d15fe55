"""
Days-before-hatching solver.

Inverts the species regression DE = a * DBH² + b * DBH + c by solving

    a * DBH² + b * DBH + (c - DE) = 0

with the quadratic formula. Of the two roots only those inside the
incubation window [0, 35] days are kept, and the smaller one is returned.

Checks run in a fixed order so a given bad input always maps to the same
error: non-positive density, implausible density, unknown species,
negative discriminant, no root in the window, implausible result.
"""
import math
from typing import Tuple

from .exceptions import (
    ImplausibleMeasurementError,
    ImplausibleResultError,
    InvalidMeasurementError,
    NoValidRootError,
    UnsolvableFormulaError,
)
from .formulas import get_species_formula
from .logging_config import get_logger

__all__ = [
    'MAX_PLAUSIBLE_DENSITY',
    'MIN_VALID_DBH',
    'MAX_VALID_DBH',
    'MAX_PLAUSIBLE_DBH',
    'quadratic_roots',
    'valid_roots',
    'solve_dbh',
]

logger = get_logger(__name__)

MAX_PLAUSIBLE_DENSITY = 2.0  # g/cm³

# Incubation window for root selection (days)
MIN_VALID_DBH = 0.0
MAX_VALID_DBH = 35.0

MAX_PLAUSIBLE_DBH = 100.0


def quadratic_roots(a: float, b: float, c: float) -> Tuple[float, float, float]:
    """Solve a * x² + b * x + c = 0.

    Args:
        a: Quadratic coefficient (non-zero)
        b: Linear coefficient
        c: Constant term

    Returns:
        (discriminant, root1, root2) where root1 uses +√D and root2 uses -√D.
        Both roots are NaN when the discriminant is negative.
    """
    discriminant = b * b - 4.0 * a * c
    if discriminant < 0:
        return discriminant, math.nan, math.nan
    sqrt_discriminant = math.sqrt(discriminant)
    root1 = (-b + sqrt_discriminant) / (2.0 * a)
    root2 = (-b - sqrt_discriminant) / (2.0 * a)
    return discriminant, root1, root2


def valid_roots(root1: float, root2: float,
                min_dbh: float = MIN_VALID_DBH, max_dbh: float = MAX_VALID_DBH):
    """Roots that fall inside the incubation window, in input order."""
    return [root for root in (root1, root2) if min_dbh <= root <= max_dbh]


def solve_dbh(egg_density: float, species) -> float:
    """Recover days before hatching from egg density.

    Args:
        egg_density: Egg density (g/cm³)
        species: Species tag or SpeciesCode

    Returns:
        Days before hatching (unrounded)

    Raises:
        InvalidMeasurementError: density is not a finite positive number
        ImplausibleMeasurementError: density above 2.0 g/cm³
        UnknownSpeciesError: species has no formula
        UnsolvableFormulaError: negative discriminant
        NoValidRootError: no root within [0, 35] days
        ImplausibleResultError: selected root negative or above 100 days
    """
    if (isinstance(egg_density, bool) or not isinstance(egg_density, (int, float))
            or not math.isfinite(egg_density) or egg_density <= 0):
        raise InvalidMeasurementError('egg density', egg_density, "must be positive")

    if egg_density > MAX_PLAUSIBLE_DENSITY:
        raise ImplausibleMeasurementError(egg_density, MAX_PLAUSIBLE_DENSITY)

    formula = get_species_formula(species)

    discriminant, root1, root2 = quadratic_roots(formula.a, formula.b, formula.c - egg_density)
    if discriminant < 0:
        raise UnsolvableFormulaError(egg_density, discriminant, formula.species)

    candidates = valid_roots(root1, root2)
    if not candidates:
        raise NoValidRootError(egg_density, root1, root2, MIN_VALID_DBH, MAX_VALID_DBH)

    # Smaller root wins when both fall inside the window
    dbh = min(candidates)

    if dbh < 0:
        raise ImplausibleResultError(
            dbh, f"cannot be negative (DE={egg_density}, species={formula.species})"
        )
    if dbh > MAX_PLAUSIBLE_DBH:
        raise ImplausibleResultError(dbh, "is unusually high. Please verify measurements.")

    logger.debug("Solved DBH=%.4f for DE=%.4f (%s), roots %.4f, %.4f",
                 dbh, egg_density, formula.species, root1, root2)
    return dbh
