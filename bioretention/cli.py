"""
Bioretention condition EDA command line.

Usage:
    # Clean, join and summarize both sheets, write the CSVs for Tableau
    bioretention-eda run --workbook data/bioretention_condition.xlsx --out-dir analysis/outputs

    # Look at the raw sheets without writing anything
    bioretention-eda inspect --workbook data/bioretention_condition.xlsx
"""

import logging
import sys

import click

from . import config, pipeline
from .inspection import profile_frame, stewardship_counts
from .load import clean_sheet, normalize_columns, read_sheet, sheet_year


def configure_logging(level: str) -> None:
    handlers = [logging.StreamHandler(sys.stdout)]
    if config.LOG_FILE:
        handlers.append(logging.FileHandler(config.LOG_FILE))

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=config.LOG_FORMAT,
        handlers=handlers,
    )


workbook_option = click.option(
    "--workbook", "-w",
    default=config.WORKBOOK_PATH,
    show_default=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Condition assessment workbook (.xlsx)",
)
baseline_option = click.option(
    "--baseline-sheet", default=config.BASELINE_SHEET, show_default=True,
    help="Sheet holding the earlier assessment",
)
followup_option = click.option(
    "--followup-sheet", default=config.FOLLOWUP_SHEET, show_default=True,
    help="Sheet holding the later assessment",
)


@click.group()
@click.option(
    "--log-level",
    default=config.LOG_LEVEL,
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
)
def cli(log_level):
    """Clean, join and summarize bioretention condition assessments."""
    configure_logging(log_level)


@cli.command("run")
@workbook_option
@click.option("--out-dir", "-o", default=config.OUT_DIR, show_default=True, help="Directory for the CSV tables")
@baseline_option
@followup_option
@click.option(
    "--horizon", "horizons", multiple=True, type=int,
    help="Forecast year, repeatable (default: %s)" % ", ".join(str(y) for y in config.FORECAST_YEARS),
)
def run_cmd(workbook, out_dir, baseline_sheet, followup_sheet, horizons):
    """Run the full pipeline and export the five CSV tables."""
    try:
        tables = pipeline.run(workbook, out_dir, baseline_sheet, followup_sheet, list(horizons) or None)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"\n=== Tables saved to {out_dir} ===\n")
    click.echo(tables["summary_by_stewardship"].to_string(index=False))


@cli.command("inspect")
@workbook_option
@baseline_option
@followup_option
def inspect_cmd(workbook, baseline_sheet, followup_sheet):
    """Profile both sheets: columns, missing values, stewardship counts."""
    sheets = [(baseline_sheet, config.BASELINE_YEAR), (followup_sheet, config.FOLLOWUP_YEAR)]
    for sheet, default_year in sheets:
        try:
            raw = read_sheet(workbook, sheet)
            cleaned = clean_sheet(raw, sheet_year(sheet, default_year))
        except ValueError as exc:
            raise click.ClickException(str(exc)) from exc

        click.echo(f"\n=== Sheet {sheet}: {len(raw)} rows, {len(cleaned)} after cleaning ===\n")
        click.echo(profile_frame(normalize_columns(raw)).to_string(index=False))
        click.echo("")
        click.echo(stewardship_counts(cleaned).to_string(index=False))


if __name__ == "__main__":
    cli()
