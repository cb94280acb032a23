"""
End-to-end run over the condition-assessment workbook:
  1) load and clean both yearly sheets
  2) align shared features and stack the years (combined dataset)
  3) pair sites across years and compute changes
  4) summary, distribution and feature-change tables
  5) per-site forecast
  6) export every table to CSV
"""

import logging

import pandas as pd

from . import config
from .export import export_tables
from .features import combine_years, compute_changes, pair_sites, shared_features
from .forecast import forecast_scores
from .load import load_workbook, sheet_year
from .summaries import score_distribution, summarize_by_stewardship, summarize_feature_changes

logger = logging.getLogger(__name__)


def build_tables(
    baseline: pd.DataFrame,
    followup: pd.DataFrame,
    horizons=None,
    baseline_year: int = config.BASELINE_YEAR,
    followup_year: int = config.FOLLOWUP_YEAR,
) -> dict[str, pd.DataFrame]:
    features = shared_features(baseline, followup)
    combined = combine_years(baseline, followup)

    paired = pair_sites(baseline, followup, baseline_year, followup_year)
    changes = compute_changes(paired, features, baseline_year, followup_year)

    return {
        "combined": combined,
        "forecast": forecast_scores(changes, horizons, baseline_year, followup_year),
        "summary_by_stewardship": summarize_by_stewardship(combined),
        "distribution": score_distribution(combined),
        "feature_changes": summarize_feature_changes(changes, features, baseline_year, followup_year),
    }


def run(
    workbook: str = config.WORKBOOK_PATH,
    out_dir: str = config.OUT_DIR,
    baseline_sheet: str = config.BASELINE_SHEET,
    followup_sheet: str = config.FOLLOWUP_SHEET,
    horizons=None,
) -> dict[str, pd.DataFrame]:
    baseline_year = sheet_year(baseline_sheet, config.BASELINE_YEAR)
    followup_year = sheet_year(followup_sheet, config.FOLLOWUP_YEAR)

    baseline, followup = load_workbook(workbook, baseline_sheet, followup_sheet, baseline_year, followup_year)
    tables = build_tables(baseline, followup, horizons, baseline_year, followup_year)

    export_tables(tables, out_dir)
    return tables
