"""
Confidence scoring for hatching-time predictions.

A heuristic, not a statistical model: the score starts at 1.0 and is
discounted when the egg density or the predicted DBH sit away from the
species' typical envelope. The result is clamped to [0.1, 1.0], so a
prediction is never reported with zero confidence.
"""
from .formulas import get_species_formula

__all__ = [
    'MIN_CONFIDENCE',
    'MAX_CONFIDENCE',
    'LONG_INCUBATION_DAYS',
    'calculate_confidence',
]

MIN_CONFIDENCE = 0.1
MAX_CONFIDENCE = 1.0

OUT_OF_RANGE_DENSITY_FACTOR = 0.6
OUT_OF_RANGE_DBH_FACTOR = 0.7
LONG_INCUBATION_FACTOR = 0.8

# Estimates above this many days are discounted even inside the DBH envelope
LONG_INCUBATION_DAYS = 30.0


def calculate_confidence(egg_density: float, dbh: float, species) -> float:
    """Calculate a 0.1-1.0 reliability score for a prediction.

    Args:
        egg_density: Egg density (g/cm³)
        dbh: Predicted days before hatching
        species: Species tag or SpeciesCode

    Returns:
        Confidence score (unrounded)
    """
    formula = get_species_formula(species)
    density_min, density_max = formula.density_range
    dbh_min, dbh_max = formula.dbh_range

    confidence = 1.0

    if egg_density < density_min or egg_density > density_max:
        confidence *= OUT_OF_RANGE_DENSITY_FACTOR
    else:
        half_width = (density_max - density_min) / 2.0
        distance = abs(egg_density - (density_min + half_width))
        confidence *= 0.9 + 0.1 * (1.0 - distance / half_width)

    if dbh < dbh_min or dbh > dbh_max:
        confidence *= OUT_OF_RANGE_DBH_FACTOR
    elif dbh > LONG_INCUBATION_DAYS:
        confidence *= LONG_INCUBATION_FACTOR

    return max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, confidence))
