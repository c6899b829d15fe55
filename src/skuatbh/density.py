"""
Egg density for SkuaTBH: DE = m / VE.
"""
from .exceptions import validate_positive

__all__ = ['egg_density']


def egg_density(mass: float, egg_volume: float) -> float:
    """Calculate egg density.

    Args:
        mass: Egg mass (g)
        egg_volume: Egg volume (cm³)

    Returns:
        Egg density (g/cm³)

    Raises:
        InvalidMeasurementError: If either input is not a finite positive number
    """
    validate_positive(mass, 'egg mass')
    validate_positive(egg_volume, 'egg volume')
    return mass / egg_volume
