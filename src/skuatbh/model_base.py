"""
Base class for parameterized SkuaTBH models.

Provides common functionality for loading species-specific coefficients
from JSON configuration files with caching and fallback support.

Usage:
    class SpeciesFormulaModel(ParameterizedModel):
        COEFFICIENT_FILE = 'skua_formula_coefficients.json'
        COEFFICIENT_KEY = 'species_coefficients'
        FALLBACK_PARAMETERS = {
            'arctic': {'a': -0.00007345, 'b': 0.008618, 'c': 0.8719}
        }
"""
from abc import ABC
from typing import Any, Dict

from .config_loader import load_coefficient_file
from .exceptions import UnknownSpeciesError
from .utils import normalize_species_code


class ParameterizedModel(ABC):
    """Base class for models with species-specific coefficients.

    Subclasses must define:
        COEFFICIENT_FILE: str - Name of the JSON file containing coefficients
        COEFFICIENT_KEY: str - Key in the JSON file containing species coefficients
        FALLBACK_PARAMETERS: dict - Fallback coefficients by species code

    Unlike a growth model, a species without coefficients is an error here:
    there is no sensible default species for a hatching-time regression.

    Attributes:
        species_code: The normalised species code for this model instance
        coefficients: The loaded coefficients for the species
        raw_data: The complete raw data loaded from the coefficient file
    """

    # Subclasses must override these
    COEFFICIENT_FILE: str = None
    COEFFICIENT_KEY: str = 'species_coefficients'
    FALLBACK_PARAMETERS: Dict[str, Dict[str, Any]] = {}

    def __init__(self, species_code):
        """Initialize the model with species-specific parameters.

        Args:
            species_code: Species tag (e.g., "arctic", "great") or SpeciesCode

        Raises:
            UnknownSpeciesError: If no coefficients exist for the species
        """
        self.species_code = normalize_species_code(species_code)
        self.coefficients: Dict[str, Any] = {}
        self.raw_data: Dict[str, Any] = {}
        self._load_parameters()

        if not self.coefficients:
            raise UnknownSpeciesError(species_code, self.available_species())

    def _get_coefficient_data(self) -> Dict[str, Any]:
        """Load coefficient data from JSON file using ConfigLoader with caching.

        Returns:
            Dictionary containing the full coefficient file data,
            or empty dict if file not found.
        """
        if self.COEFFICIENT_FILE is None:
            raise NotImplementedError(
                f"{self.__class__.__name__} must define COEFFICIENT_FILE class attribute"
            )

        try:
            return load_coefficient_file(self.COEFFICIENT_FILE)
        except FileNotFoundError:
            return {}

    def _load_parameters(self) -> None:
        """Load species-specific parameters from configuration.

        This method:
        1. Loads the coefficient file data (cached)
        2. Extracts species-specific coefficients
        3. Falls back to FALLBACK_PARAMETERS if the file is unavailable
        """
        self.raw_data = self._get_coefficient_data()

        if self.raw_data:
            species_coeffs = self.raw_data.get(self.COEFFICIENT_KEY, {})
            if self.species_code in species_coeffs:
                self.coefficients = dict(species_coeffs[self.species_code])
        else:
            self._load_fallback_parameters()

    def _load_fallback_parameters(self) -> None:
        """Load fallback parameters when the coefficient file is not available."""
        if self.species_code in self.FALLBACK_PARAMETERS:
            self.coefficients = self.FALLBACK_PARAMETERS[self.species_code].copy()
        else:
            self.coefficients = {}

    def available_species(self):
        """Species codes that have coefficients in the active source."""
        if self.raw_data:
            return list(self.raw_data.get(self.COEFFICIENT_KEY, {}).keys())
        return list(self.FALLBACK_PARAMETERS.keys())

    def get_species_coefficients(self) -> Dict[str, Any]:
        """Get the coefficients for this species.

        Returns:
            Dictionary containing species-specific coefficients.
        """
        return self.coefficients.copy()

    def get_coefficient(self, key: str, default: Any = None) -> Any:
        """Get a specific coefficient value.

        Args:
            key: Coefficient key to retrieve
            default: Default value if key not found

        Returns:
            Coefficient value or default
        """
        return self.coefficients.get(key, default)

    def __repr__(self) -> str:
        """Return string representation of the model."""
        return f"{self.__class__.__name__}(species_code='{self.species_code}')"
