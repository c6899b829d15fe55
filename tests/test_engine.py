"""Tests for the prediction engine facade."""
import dataclasses
import logging
import pytest

import skuatbh.engine as engine
from skuatbh import (
    BatchPredictionError,
    ImplausibleMeasurementError,
    InvalidMeasurementError,
    MeasurementInput,
    PredictionResult,
    SpeciesCode,
    UnknownSpeciesError,
    predict,
    predict_batch,
    validate_measurement,
)
from tests.reference_data import REFERENCE_SAMPLES


# =============================================================================
# Single Predictions
# =============================================================================

class TestPredict:

    def test_arctic_reference_sample(self, arctic_sample):
        """72.3 x 50.2 mm, 91.89 g Arctic egg."""
        result = predict(arctic_sample)
        assert isinstance(result, PredictionResult)
        assert result.egg_volume == pytest.approx(92.37, abs=0.01)
        assert result.egg_density == pytest.approx(0.9948, abs=1e-4)
        assert 0.0 <= result.dbh <= 35.0
        assert result.dbh == pytest.approx(16.6, abs=0.05)
        assert result.confidence > 0.5
        assert result.confidence == pytest.approx(0.944, abs=0.001)

    def test_great_sample(self, great_sample):
        result = predict(great_sample)
        assert result.species is SpeciesCode.GREAT
        assert result.egg_volume == pytest.approx(106.81, abs=0.01)
        assert result.dbh == pytest.approx(6.68, abs=0.05)
        assert result.confidence == pytest.approx(0.969, abs=0.001)

    def test_formula_metadata(self, arctic_sample):
        result = predict(arctic_sample)
        assert result.formula_name == "Arctic Skua DE Formula"
        assert result.formula_version == "2.1"
        assert result.coefficients == {'a': -0.00007345, 'b': 0.008618, 'c': 0.8719}

    def test_values_are_rounded(self, arctic_sample):
        result = predict(arctic_sample)
        assert result.dbh == round(result.dbh, 2)
        assert result.egg_density == round(result.egg_density, 4)
        assert result.egg_volume == round(result.egg_volume, 2)
        assert result.confidence == round(result.confidence, 3)

    def test_ties_round_half_up(self, arctic_sample, monkeypatch):
        """Scores exactly on a half-way point round up, not to even."""
        monkeypatch.setattr(engine, "calculate_confidence", lambda density, dbh, species: 0.8125)
        monkeypatch.setattr(engine, "solve_dbh", lambda density, species: 12.125)
        result = predict(arctic_sample)
        assert result.confidence == 0.813
        assert result.dbh == 12.13

    def test_result_is_immutable(self, arctic_sample):
        result = predict(arctic_sample)
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.dbh = 0.0

    def test_to_dict(self, arctic_sample):
        data = predict(arctic_sample).to_dict()
        assert data['species'] == 'arctic'
        assert data['formula']['version'] == '2.1'
        assert set(data['formula']['coefficients']) == {'a', 'b', 'c'}

    @pytest.mark.parametrize("length,breadth,mass,kv,expected_density", REFERENCE_SAMPLES)
    def test_reference_samples(self, length, breadth, mass, kv, expected_density):
        """Spreadsheet samples give plausible hatching times."""
        result = predict(MeasurementInput(length, breadth, mass, "arctic", kv))
        assert 0.0 < result.dbh < 30.0
        assert abs(result.egg_density - expected_density) < 0.1
        assert 0.5 < result.confidence <= 1.0

    def test_density_too_high(self, heavy_sample):
        with pytest.raises(ImplausibleMeasurementError) as exc_info:
            predict(heavy_sample)
        assert exc_info.value.kind == "ImplausibleMeasurement"
        assert exc_info.value.egg_density > 2.0

    def test_unknown_species(self, unknown_species_sample):
        assert not validate_measurement(unknown_species_sample).valid
        with pytest.raises(UnknownSpeciesError, match="pomarine"):
            predict(unknown_species_sample)

    def test_invalid_measurement_before_unknown_species(self):
        measurement = MeasurementInput(length=-72.3, breadth=50.2, mass=91.89, species="pomarine")
        with pytest.raises(InvalidMeasurementError, match="egg length"):
            predict(measurement)

    def test_accepts_mapping(self):
        result = predict({'length': 72.3, 'breadth': 50.2, 'mass': 91.89,
                          'kv': 0.507, 'speciesType': 'arctic'})
        assert result.species is SpeciesCode.ARCTIC

    def test_mapping_without_species(self):
        with pytest.raises(UnknownSpeciesError):
            predict({'length': 72.3, 'breadth': 50.2, 'mass': 91.89})

    def test_mapping_missing_field(self):
        with pytest.raises(InvalidMeasurementError, match="mass"):
            predict({'length': 72.3, 'breadth': 50.2, 'species': 'arctic'})

    def test_rejects_other_types(self):
        with pytest.raises(InvalidMeasurementError):
            predict([72.3, 50.2, 91.89, 'arctic'])

    def test_failure_is_logged(self, heavy_sample, caplog):
        with caplog.at_level(logging.WARNING, logger="skuatbh"):
            with pytest.raises(ImplausibleMeasurementError):
                predict(heavy_sample)
        assert "ImplausibleMeasurement" in caplog.text


# =============================================================================
# Batch Predictions
# =============================================================================

class TestPredictBatch:

    def test_all_good(self, arctic_sample, great_sample):
        results = predict_batch([arctic_sample, great_sample, arctic_sample])
        assert [r.species for r in results] == [SpeciesCode.ARCTIC, SpeciesCode.GREAT, SpeciesCode.ARCTIC]
        assert results[0] == predict(arctic_sample)

    def test_empty_batch(self):
        assert predict_batch([]) == []

    @pytest.mark.parametrize("max_workers", [None, 1, 3])
    def test_failure_index(self, arctic_sample, heavy_sample, max_workers):
        """The failing element's index is reported."""
        with pytest.raises(BatchPredictionError) as exc_info:
            predict_batch([arctic_sample, heavy_sample, arctic_sample], max_workers=max_workers)
        error = exc_info.value
        assert error.index == 1
        assert error.kind == "ImplausibleMeasurement"
        assert isinstance(error.cause, ImplausibleMeasurementError)
        assert error.__cause__ is error.cause
        assert "input 1" in str(error)

    def test_first_failure_wins(self, arctic_sample, heavy_sample, unknown_species_sample):
        with pytest.raises(BatchPredictionError) as exc_info:
            predict_batch([unknown_species_sample, arctic_sample, heavy_sample], max_workers=2)
        assert exc_info.value.index == 0
        assert exc_info.value.kind == "UnknownSpecies"

    def test_threaded_results_keep_order(self, arctic_sample, great_sample):
        measurements = [arctic_sample, great_sample] * 5
        assert predict_batch(measurements, max_workers=4) == predict_batch(measurements)
