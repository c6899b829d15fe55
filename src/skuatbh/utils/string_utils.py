"""
String normalisation helpers for SkuaTBH.
"""
from typing import Any


def normalize_code(code: Any) -> str:
    """Normalise a free-form code to a stripped, lower-case string.

    Args:
        code: Code to normalise (enum members are reduced to their value)

    Returns:
        Normalised code, or an empty string for None
    """
    if code is None:
        return ""
    value = getattr(code, "value", code)
    return str(value).strip().lower()


def normalize_species_code(species: Any) -> str:
    """Normalise a species tag ("Arctic ", "GREAT", SpeciesCode.ARCTIC, ...).

    Trailing "skua" is dropped so "Arctic Skua" maps to "arctic".
    """
    code = normalize_code(species)
    if code.endswith("skua"):
        code = code[: -len("skua")].strip().rstrip("_-").strip()
    return code
