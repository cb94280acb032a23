"""Feature alignment and change computation between the two assessment years.

The yearly extracts do not share an identical set of assessment columns, so
both years are first restricted to the numeric features they have in common.
Paired sites (GRI IDs assessed in both years) are then joined side by side and
every measure gets a ``<measure>_change`` column, follow-up minus baseline.
Lower scores are better, so a negative change is an improvement.
"""

import logging

import numpy as np
import pandas as pd

from . import config
from .config import ID_COL, SCORE_COL, STEWARDSHIP_COL, YEAR_COL

logger = logging.getLogger(__name__)

KEY_COLUMNS = [ID_COL, YEAR_COL, STEWARDSHIP_COL, SCORE_COL]

IMPROVED = "Improved"
DECLINED = "Declined"
NO_CHANGE = "No Change"


def feature_columns(df: pd.DataFrame) -> list[str]:
    """Numeric, non-empty assessment columns other than the key columns."""
    return [
        c for c in df.columns
        if c not in KEY_COLUMNS
        and pd.api.types.is_numeric_dtype(df[c])
        and not pd.api.types.is_bool_dtype(df[c])
        and df[c].notna().any()
    ]


def shared_features(baseline: pd.DataFrame, followup: pd.DataFrame) -> list[str]:
    followup_features = set(feature_columns(followup))
    shared = [c for c in feature_columns(baseline) if c in followup_features]

    dropped = sorted((set(feature_columns(baseline)) | followup_features) - set(shared))
    if dropped:
        logger.info("Features assessed in only one year, left out: %s", dropped)
    return shared


def measure_columns(features: list[str]) -> list[str]:
    return [SCORE_COL] + [f for f in features if f != SCORE_COL]


def align_years(baseline: pd.DataFrame, followup: pd.DataFrame) -> tuple[pd.DataFrame, pd.DataFrame]:
    cols = KEY_COLUMNS + shared_features(baseline, followup)
    return baseline[cols].copy(), followup[cols].copy()


def combine_years(baseline: pd.DataFrame, followup: pd.DataFrame) -> pd.DataFrame:
    """
    Stack both years long on their shared columns.
    Adds:
      - in_both_years: the GRI ID was assessed in both years
    """
    base, follow = align_years(baseline, followup)
    combined = pd.concat([base, follow], ignore_index=True)

    both = set(base[ID_COL]) & set(follow[ID_COL])
    combined["in_both_years"] = combined[ID_COL].isin(both)

    logger.info(
        "Combined dataset: %d rows, %d sites, %d assessed in both years",
        len(combined), combined[ID_COL].nunique(), len(both),
    )
    return combined.sort_values([ID_COL, YEAR_COL], kind="stable").reset_index(drop=True)


def pair_sites(
    baseline: pd.DataFrame,
    followup: pd.DataFrame,
    baseline_year: int = config.BASELINE_YEAR,
    followup_year: int = config.FOLLOWUP_YEAR,
) -> pd.DataFrame:
    """
    Join the two years side by side on GRI ID (inner join).
    Measures get _<year> suffixes; stewardship is the follow-up year's program.
    """
    base, follow = align_years(baseline, followup)
    paired = base.drop(columns=YEAR_COL).merge(
        follow.drop(columns=YEAR_COL),
        on=ID_COL,
        how="inner",
        suffixes=(f"_{baseline_year}", f"_{followup_year}"),
        validate="one_to_one",
    )

    before = f"{STEWARDSHIP_COL}_{baseline_year}"
    after = f"{STEWARDSHIP_COL}_{followup_year}"
    paired.insert(1, STEWARDSHIP_COL, paired[after])
    paired.insert(2, "stewardship_changed", paired[before] != paired[after])

    logger.info("Paired %d sites across %d and %d", len(paired), baseline_year, followup_year)
    return paired


def compute_changes(
    paired: pd.DataFrame,
    features: list[str],
    baseline_year: int = config.BASELINE_YEAR,
    followup_year: int = config.FOLLOWUP_YEAR,
) -> pd.DataFrame:
    changes = paired.copy()
    for measure in measure_columns(features):
        changes[f"{measure}_change"] = changes[f"{measure}_{followup_year}"] - changes[f"{measure}_{baseline_year}"]

    delta = changes[f"{SCORE_COL}_change"]
    changes["condition_trend"] = np.select(
        [delta < 0, delta > 0],
        [IMPROVED, DECLINED],
        default=NO_CHANGE,
    )
    return changes
