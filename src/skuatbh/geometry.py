"""
Egg geometry for SkuaTBH.

Egg volume follows Hoyt's formula VE = Kv * l * b², where Kv is a
dimensionless egg-shape constant (conventionally 0.507).
"""
from .exceptions import validate_positive

__all__ = [
    'DEFAULT_SHAPE_CONSTANT',
    'MM3_PER_CM3',
    'egg_volume',
]

DEFAULT_SHAPE_CONSTANT = 0.507

MM3_PER_CM3 = 1000.0


def egg_volume(length: float, breadth: float, shape_constant: float = DEFAULT_SHAPE_CONSTANT) -> float:
    """Calculate egg volume.

    Args:
        length: Egg length (mm)
        breadth: Egg breadth (mm)
        shape_constant: Egg-shape constant Kv (dimensionless)

    Returns:
        Egg volume (cm³)

    Raises:
        InvalidMeasurementError: If any input is not a finite positive number
    """
    validate_positive(length, 'egg length')
    validate_positive(breadth, 'egg breadth')
    validate_positive(shape_constant, 'shape constant')

    volume_mm3 = shape_constant * length * breadth ** 2
    return volume_mm3 / MM3_PER_CM3
