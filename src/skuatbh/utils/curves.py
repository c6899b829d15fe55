"""
Density-curve and result-table utilities for SkuaTBH.

The density curve is the forward regression DE(DBH) sampled over the
incubation window; it is what field reports plot measured eggs against.
"""
from typing import Iterable, List, TYPE_CHECKING

import numpy as np
import pandas as pd

if TYPE_CHECKING:
    from ..engine import PredictionResult


def generate_density_curve(
    species,
    max_dbh: float = 35.0,
    step: float = 1.0,
) -> pd.DataFrame:
    """
    Sample the species DE(DBH) regression over the incubation window.

    Args:
        species: Species tag or SpeciesCode
        max_dbh: Last day to sample (inclusive, default 35)
        step: Spacing between samples in days (default 1)

    Returns:
        DataFrame with columns: dbh, egg_density
    """
    # Import here to avoid circular imports
    from ..formulas import get_species_formula

    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")

    formula = get_species_formula(species)
    dbh = np.arange(0.0, max_dbh + step / 2.0, step)
    density = formula.a * dbh ** 2 + formula.b * dbh + formula.c

    return pd.DataFrame({'dbh': dbh, 'egg_density': density})


def predictions_to_dataframe(results: Iterable['PredictionResult']) -> pd.DataFrame:
    """
    Tabulate prediction results, one row per egg.

    Args:
        results: PredictionResult objects (e.g. from predict_batch)

    Returns:
        DataFrame with columns: species, dbh, egg_density, egg_volume,
        confidence, formula_name, formula_version
    """
    columns = ['species', 'dbh', 'egg_density', 'egg_volume',
               'confidence', 'formula_name', 'formula_version']
    records: List[dict] = [
        {
            'species': result.species.value,
            'dbh': result.dbh,
            'egg_density': result.egg_density,
            'egg_volume': result.egg_volume,
            'confidence': result.confidence,
            'formula_name': result.formula_name,
            'formula_version': result.formula_version,
        }
        for result in results
    ]
    return pd.DataFrame(records, columns=columns)
