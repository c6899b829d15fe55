"""
Field Season Report Example

Predicts days before hatching for a small set of nest measurements,
checks each record with the validator first, and prints a hatching
report alongside the species density curves.

Usage:
    python examples/field_season_report.py
"""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from skuatbh import (
    BatchPredictionError,
    MeasurementInput,
    generate_density_curve,
    get_formula_coefficients,
    predict_batch,
    predictions_to_dataframe,
    validate_measurement,
)

console = Console()

NESTS = {
    "Foula A12": {"length": 72.3, "breadth": 50.2, "mass": 91.89, "speciesType": "arctic"},
    "Foula A17": {"length": 70.1, "breadth": 49.6, "mass": 86.40, "speciesType": "arctic"},
    "Hermaness G03": {"length": 75.0, "breadth": 53.0, "mass": 100.0, "speciesType": "great"},
    "Hermaness G08": {"length": 77.4, "breadth": 54.1, "mass": 110.2, "speciesType": "great"},
    "Hermaness G11": {"length": 74.0, "breadth": 52.0, "mass": 250.0, "speciesType": "great"},
}


def show_formulas():
    """Print the coefficients of each species formula."""
    console.print(Panel("[bold]Species Formulas[/bold]"))

    table = Table()
    table.add_column("Species", style="bold")
    table.add_column("Formula")
    table.add_column("a", justify="right")
    table.add_column("b", justify="right")
    table.add_column("c", justify="right")

    for species, coef in get_formula_coefficients().items():
        table.add_row(species, coef["name"], f"{coef['a']:.8f}",
                      f"{coef['b']:.6f}", f"{coef['c']:.4f}")

    console.print(table)
    console.print()


def screen_nests():
    """Validate every nest record and return the ones that pass."""
    console.print(Panel("[bold]Measurement Screening[/bold]"))

    accepted = {}
    for nest, record in NESTS.items():
        report = validate_measurement(record)
        if report.valid:
            accepted[nest] = record
            console.print(f"[green]OK[/green]   {nest}")
        else:
            console.print(f"[red]FAIL[/red] {nest}: {'; '.join(report.errors)}")
        for warning in report.warnings:
            console.print(f"     [yellow]{warning}[/yellow]")

    console.print()
    return accepted


def show_predictions(accepted):
    """Run the batch prediction and print the hatching report."""
    console.print(Panel("[bold]Hatching Report[/bold]"))

    measurements = [MeasurementInput.from_dict(record) for record in accepted.values()]
    try:
        results = predict_batch(measurements)
    except BatchPredictionError as e:
        console.print(f"[red]{e}[/red]")
        return

    frame = predictions_to_dataframe(results)
    frame.insert(0, "nest", list(accepted))

    table = Table()
    table.add_column("Nest", style="bold")
    table.add_column("Species")
    table.add_column("Volume (cm³)", justify="right")
    table.add_column("Density (g/cm³)", justify="right")
    table.add_column("DBH (days)", justify="right")
    table.add_column("Confidence", justify="right")

    for row in frame.itertuples(index=False):
        table.add_row(row.nest, row.species, f"{row.egg_volume:.2f}",
                      f"{row.egg_density:.4f}", f"{row.dbh:.1f}", f"{row.confidence:.3f}")

    console.print(table)
    console.print()


def show_density_curves():
    """Print the density expected at weekly intervals before hatching."""
    console.print(Panel("[bold]Density Curves[/bold]"))

    arctic = generate_density_curve("arctic", step=7.0)
    great = generate_density_curve("great", step=7.0)

    table = Table()
    table.add_column("DBH (days)", justify="right")
    table.add_column("Arctic DE", justify="right")
    table.add_column("Great DE", justify="right")

    for dbh, arctic_de, great_de in zip(arctic["dbh"], arctic["egg_density"], great["egg_density"]):
        table.add_row(f"{dbh:.0f}", f"{arctic_de:.4f}", f"{great_de:.4f}")

    console.print(table)


def main():
    show_formulas()
    accepted = screen_nests()
    show_predictions(accepted)
    show_density_curves()


if __name__ == "__main__":
    main()
