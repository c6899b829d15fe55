"""
Shared pytest fixtures for SkuaTBH tests.

This module provides commonly used measurements for testing the prediction
engine, reducing duplication across test files.
"""
import pytest

from skuatbh import MeasurementInput, SpeciesCode
from skuatbh.formulas import clear_formula_cache
from skuatbh.config_loader import get_config_loader


@pytest.fixture(autouse=True)
def clear_caches():
    """Clear formula and configuration caches around each test."""
    clear_formula_cache()
    get_config_loader().clear_cache()
    yield
    clear_formula_cache()
    get_config_loader().clear_cache()


# =============================================================================
# Measurement Fixtures
# =============================================================================

@pytest.fixture
def arctic_sample():
    """Arctic Skua egg from the research spreadsheet.

    Returns a measurement with:
    - Volume: ~92.37 cm³
    - Density: ~0.9948 g/cm³
    - Expected DBH: ~16.6 days
    """
    return MeasurementInput(
        length=72.3, breadth=50.2, mass=91.89,
        species=SpeciesCode.ARCTIC, shape_constant=0.507,
    )


@pytest.fixture
def great_sample():
    """Typical Great Skua egg.

    Returns a measurement with:
    - Volume: ~106.81 cm³
    - Density: ~0.9362 g/cm³
    - Expected DBH: ~6.7 days
    """
    return MeasurementInput(
        length=75.0, breadth=53.0, mass=100.0,
        species=SpeciesCode.GREAT, shape_constant=0.507,
    )


@pytest.fixture
def heavy_sample():
    """Arctic egg with an inflated mass (density ~2.17 g/cm³)."""
    return MeasurementInput(
        length=72.3, breadth=50.2, mass=200.0,
        species=SpeciesCode.ARCTIC, shape_constant=0.507,
    )


@pytest.fixture
def unknown_species_sample():
    """Otherwise valid egg tagged with an unsupported species."""
    return MeasurementInput(
        length=72.3, breadth=50.2, mass=91.89,
        species='pomarine', shape_constant=0.507,
    )
