"""Tests for measurement validation.

The validator reports problems as strings and never raises; measurements it
accepts must never fail in the solver with UnsolvableFormula or NoValidRoot.
"""
import itertools
import math
import pytest

from skuatbh import InvalidMeasurementError, MeasurementInput, predict
from skuatbh.validation import (
    FALLBACK_RULES,
    ValidationResult,
    get_validation_rules,
    validate_egg_breadth,
    validate_egg_length,
    validate_egg_mass,
    validate_measurement,
    validate_shape_constant,
    validate_species,
)


# =============================================================================
# Parametrized Test Data
# =============================================================================

# (field validator, value, expected error fragment)
FIELD_ERROR_CASES = [
    pytest.param(validate_egg_length, -72.3, "Egg length must be a positive number", id="negative_length"),
    pytest.param(validate_egg_length, 0, "Egg length must be a positive number", id="zero_length"),
    pytest.param(validate_egg_length, 90.0, "Egg length must be between 60-85mm", id="long_egg"),
    pytest.param(validate_egg_length, "72", "Egg length must be a positive number", id="string_length"),
    pytest.param(validate_egg_breadth, 35.0, "Egg breadth must be between 40-60mm", id="narrow_egg"),
    pytest.param(validate_egg_breadth, math.inf, "Egg breadth must be a positive number", id="infinite_breadth"),
    pytest.param(validate_egg_mass, math.nan, "Egg mass must be a positive number", id="nan_mass"),
    pytest.param(validate_egg_mass, 150.0, "Egg mass must be between 70-120g", id="heavy_egg"),
    pytest.param(validate_shape_constant, 1.5, "Kv constant must be between 0.1-1", id="large_kv"),
    pytest.param(validate_shape_constant, -0.5, "Kv constant must be a positive number", id="negative_kv"),
]


# =============================================================================
# Field Validators
# =============================================================================

class TestFieldValidators:

    @pytest.mark.parametrize("validator,value,fragment", FIELD_ERROR_CASES)
    def test_field_errors(self, validator, value, fragment):
        result = validator(value)
        assert not result.valid
        assert fragment in result.error

    def test_valid_length_without_species(self):
        result = validate_egg_length(72.3)
        assert result.valid
        assert result.error is None
        assert result.warning is None

    def test_atypical_length_warns(self):
        """72.3 mm is inside the absolute band but long for an Arctic egg."""
        result = validate_egg_length(72.3, "arctic")
        assert result.valid
        assert "Arctic Skua" in result.warning
        assert "55-62mm" in result.warning

    def test_typical_length_does_not_warn(self):
        assert validate_egg_length(75.0, "great").warning is None

    def test_species(self):
        assert validate_species("arctic").valid
        assert validate_species("GREAT").valid
        result = validate_species("pomarine")
        assert not result.valid
        assert 'Species type must be either "arctic" or "great"' in result.error


# =============================================================================
# Complete Measurements
# =============================================================================

class TestValidateMeasurement:

    def test_reference_sample_is_valid(self, arctic_sample):
        result = validate_measurement(arctic_sample)
        assert isinstance(result, ValidationResult)
        assert result.valid
        assert result.errors == []
        # Length, breadth and mass are all large for an Arctic egg
        assert len(result.warnings) == 3

    def test_great_sample_is_valid(self, great_sample):
        result = validate_measurement(great_sample)
        assert result.valid
        assert len(result.warnings) == 1
        assert "Egg mass" in result.warnings[0]

    def test_unknown_species(self, unknown_species_sample):
        result = validate_measurement(unknown_species_sample)
        assert not result.valid
        assert len(result.errors) == 1
        assert "Species type" in result.errors[0]

    def test_collects_every_field_error(self):
        measurement = MeasurementInput(length=-1.0, breadth=100.0, mass=0.0,
                                       species="arctic", shape_constant=2.0)
        result = validate_measurement(measurement)
        assert not result.valid
        assert len(result.errors) == 4

    def test_negative_discriminant_is_reported(self):
        """111 g in a 92 cm³ Arctic egg gives DE ~1.20, beyond the parabola."""
        measurement = MeasurementInput(length=72.3, breadth=50.2, mass=111.0, species="arctic")
        result = validate_measurement(measurement)
        assert not result.valid
        assert any("negative discriminant" in error for error in result.errors)

    def test_no_root_in_window_is_reported(self):
        """A Great egg lighter than its hatching density has no DBH in 0-35 days."""
        measurement = MeasurementInput(length=75.0, breadth=53.0, mass=90.0, species="great")
        result = validate_measurement(measurement)
        assert not result.valid
        assert any("no hatching time" in error for error in result.errors)

    def test_density_outside_reasonable_range(self):
        measurement = MeasurementInput(length=85.0, breadth=60.0, mass=70.0,
                                       species="arctic", shape_constant=1.0)
        result = validate_measurement(measurement)
        assert not result.valid
        assert any("outside reasonable range" in error for error in result.errors)

    def test_accepts_camel_case_mapping(self):
        result = validate_measurement({
            'length': 72.3, 'breadth': 50.2, 'mass': 91.89,
            'kv': 0.507, 'speciesType': 'arctic',
        })
        assert result.valid

    def test_mapping_defaults_shape_constant(self):
        result = validate_measurement({'length': 72.3, 'breadth': 50.2, 'mass': 91.89,
                                       'species': 'arctic'})
        assert result.valid

    @pytest.mark.parametrize("alias", ["kv", "shapeConstant", "shape_constant"])
    def test_explicit_none_shape_constant_is_rejected(self, alias):
        """An explicit None is not replaced by the default Kv."""
        record = {'length': 72.3, 'breadth': 50.2, 'mass': 91.89,
                  alias: None, 'speciesType': 'arctic'}
        result = validate_measurement(record)
        assert not result.valid
        assert any("Kv constant must be a positive number" in e for e in result.errors)
        with pytest.raises(InvalidMeasurementError):
            predict(record)

    def test_empty_mapping_reports_instead_of_raising(self):
        result = validate_measurement({})
        assert not result.valid
        assert len(result.errors) == 4

    def test_to_dict(self, arctic_sample):
        data = validate_measurement(arctic_sample).to_dict()
        assert data['valid'] is True
        assert data['errors'] == []

    def test_rules_file_matches_fallback(self):
        """The packaged YAML rules and the built-in rules agree."""
        assert get_validation_rules() == FALLBACK_RULES


# =============================================================================
# Validator / Solver Agreement
# =============================================================================

class TestValidatorSolverAgreement:

    @pytest.mark.parametrize("species", ["arctic", "great"])
    def test_valid_measurements_always_predict(self, species):
        """Every measurement the validator accepts is predicted successfully."""
        lengths = [60.0, 65.0, 70.0, 72.3, 75.0, 80.0, 85.0]
        breadths = [40.0, 44.0, 48.0, 50.2, 53.0, 56.0, 60.0]
        masses = [70.0, 80.0, 90.0, 91.89, 100.0, 110.0, 120.0]
        shape_constants = [0.45, 0.507, 0.55]

        accepted = 0
        for length, breadth, mass, kv in itertools.product(lengths, breadths, masses, shape_constants):
            measurement = MeasurementInput(length=length, breadth=breadth, mass=mass,
                                           species=species, shape_constant=kv)
            if validate_measurement(measurement).valid:
                accepted += 1
                result = predict(measurement)
                assert 0.0 <= result.dbh <= 35.0

        assert accepted > 0
