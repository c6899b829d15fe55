"""
Utility functions for SkuaTBH.

This module provides common utilities used throughout the codebase.
"""

from .string_utils import normalize_code, normalize_species_code
from .rounding import round_half_up
from .curves import (
    generate_density_curve,
    predictions_to_dataframe,
)

__all__ = [
    "normalize_code",
    "normalize_species_code",
    "round_half_up",
    "generate_density_curve",
    "predictions_to_dataframe",
]
