"""
Species code enumeration for type-safe species handling.

This module provides a SpeciesCode enum that inherits from (str, Enum) allowing
it to be used as a string in places where species tags are expected, while
providing type safety and validation.

Usage:
    from skuatbh.species import SpeciesCode

    # Use enum directly
    species = SpeciesCode.ARCTIC
    print(species.value)  # "arctic"

    # Convert from string
    species = SpeciesCode.from_string("Great Skua")

    # Validate a code
    if SpeciesCode.is_valid("arctic"):
        print("Valid species code")
"""

from enum import Enum
from typing import List, Optional

from .utils import normalize_species_code


class SpeciesCode(str, Enum):
    """
    Skua species supported by the hatching-time formulas.

    Each member's value is the lower-case tag used in the coefficient
    configuration and in measurement records.
    """

    ARCTIC = "arctic"
    """Arctic Skua (Stercorarius parasiticus)."""

    GREAT = "great"
    """Great Skua (Stercorarius skua)."""

    @property
    def display_name(self) -> str:
        """Human-readable species name, e.g. "Arctic Skua"."""
        return f"{self.value.capitalize()} Skua"

    @classmethod
    def from_string(cls, code) -> "SpeciesCode":
        """Convert a string (or enum member) to a SpeciesCode.

        Args:
            code: Species tag, case-insensitive ("arctic", "Great Skua", ...)

        Returns:
            Matching SpeciesCode member

        Raises:
            ValueError: If the tag does not name a supported species
        """
        normalized = normalize_species_code(code)
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(
            f"Invalid species code: '{code}'. Valid codes: {cls.values()}"
        )

    @classmethod
    def is_valid(cls, code) -> bool:
        """Check whether a tag names a supported species."""
        return get_species_code(code) is not None

    @classmethod
    def values(cls) -> List[str]:
        """All supported species tags."""
        return [member.value for member in cls]


def get_species_code(code) -> Optional[SpeciesCode]:
    """Return the SpeciesCode for a tag, or None if it is not supported."""
    try:
        return SpeciesCode.from_string(code)
    except ValueError:
        return None
