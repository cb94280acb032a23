import logging

import numpy as np
import pandas as pd

from . import config
from .config import ALL_STEWARDSHIP, ID_COL, SCORE_COL, STEWARDSHIP_COL, YEAR_COL
from .features import measure_columns

logger = logging.getLogger(__name__)

BAND_COL = "score_band"


def stewardship_order(labels) -> list[str]:
    """Canonical programs first, then any other labels alphabetically, All last."""
    labels = set(labels)
    known = [label for label in config.STEWARDSHIP_LEVELS if label in labels]
    extra = sorted(label for label in labels if label not in config.STEWARDSHIP_LEVELS and label != ALL_STEWARDSHIP)
    tail = [ALL_STEWARDSHIP] if ALL_STEWARDSHIP in labels else []
    return known + extra + tail


def _sort_by_stewardship(df: pd.DataFrame, keys: list[str]) -> pd.DataFrame:
    order = stewardship_order(df[STEWARDSHIP_COL].unique())
    df = df.copy()
    df[STEWARDSHIP_COL] = pd.Categorical(df[STEWARDSHIP_COL], categories=order, ordered=True)
    df = df.sort_values(keys, kind="stable")
    df[STEWARDSHIP_COL] = df[STEWARDSHIP_COL].astype(str)
    return df.reset_index(drop=True)


def _with_all_group(df: pd.DataFrame) -> pd.DataFrame:
    return pd.concat([df, df.assign(**{STEWARDSHIP_COL: ALL_STEWARDSHIP})], ignore_index=True)


def summarize_by_stewardship(combined: pd.DataFrame) -> pd.DataFrame:
    """
    Condition score statistics per year and stewardship program, plus an
    "All" row per year:
      - central tendency (mean, median)
      - spread (std, min, max)
      - share of sites in good (<= GOOD_SCORE_MAX) and poor (>= POOR_SCORE_MIN) condition
    """
    scores = _with_all_group(combined).assign(
        is_good=lambda d: d[SCORE_COL].le(config.GOOD_SCORE_MAX).astype(float),
        is_poor=lambda d: d[SCORE_COL].ge(config.POOR_SCORE_MIN).astype(float),
    )
    stats = (
        scores.groupby([YEAR_COL, STEWARDSHIP_COL])
              .agg(
                  sites=(ID_COL, "nunique"),
                  score_mean=(SCORE_COL, "mean"),
                  score_median=(SCORE_COL, "median"),
                  score_std=(SCORE_COL, "std"),
                  score_min=(SCORE_COL, "min"),
                  score_max=(SCORE_COL, "max"),
                  pct_good=("is_good", "mean"),
                  pct_poor=("is_poor", "mean"),
              )
              .reset_index()
    )
    stats[["pct_good", "pct_poor"]] *= 100
    return _sort_by_stewardship(stats, [YEAR_COL, STEWARDSHIP_COL]).round(3)


def score_distribution(combined: pd.DataFrame) -> pd.DataFrame:
    """
    Site counts per year, stewardship and score band (1..5) on a complete
    grid, so bands with no sites show up as zero rather than missing.
    pct_of_group is the share of the year/stewardship group in each band.
    """
    scores = _with_all_group(combined)
    bands = np.floor(scores[SCORE_COL] + 0.5).clip(config.SCORE_MIN, config.SCORE_MAX).astype(int)
    counts = scores.assign(**{BAND_COL: bands}).groupby([YEAR_COL, STEWARDSHIP_COL, BAND_COL]).size()

    grid = pd.MultiIndex.from_product(
        [
            sorted(scores[YEAR_COL].unique()),
            stewardship_order(scores[STEWARDSHIP_COL].unique()),
            list(range(config.SCORE_MIN, config.SCORE_MAX + 1)),
        ],
        names=[YEAR_COL, STEWARDSHIP_COL, BAND_COL],
    )
    dist = counts.reindex(grid, fill_value=0).rename("sites").reset_index()

    totals = dist.groupby([YEAR_COL, STEWARDSHIP_COL])["sites"].transform("sum")
    dist["pct_of_group"] = (dist["sites"] / totals.where(totals > 0) * 100).fillna(0.0).round(2)
    return dist


def summarize_feature_changes(
    changes: pd.DataFrame,
    features: list[str],
    baseline_year: int = config.BASELINE_YEAR,
    followup_year: int = config.FOLLOWUP_YEAR,
) -> pd.DataFrame:
    """
    Change statistics for the condition score and every shared feature,
    per follow-up stewardship program and for all paired sites together.
    Only sites with a value in both years count towards a feature.
    """
    mean_before, mean_after = f"mean_{baseline_year}", f"mean_{followup_year}"
    columns = [
        "feature", STEWARDSHIP_COL, "paired_sites", mean_before, mean_after,
        "mean_change", "median_change", "improved", "declined", "unchanged", "pct_improved",
    ]

    scopes = [
        (label, changes[changes[STEWARDSHIP_COL] == label])
        for label in stewardship_order(changes[STEWARDSHIP_COL].unique())
    ]
    scopes.append((ALL_STEWARDSHIP, changes))

    rows = []
    for measure in measure_columns(features):
        before, after = f"{measure}_{baseline_year}", f"{measure}_{followup_year}"
        for label, scope in scopes:
            valid = scope.dropna(subset=[before, after])
            if valid.empty:
                continue
            delta = valid[f"{measure}_change"]
            rows.append({
                "feature": measure,
                STEWARDSHIP_COL: label,
                "paired_sites": len(valid),
                mean_before: valid[before].mean(),
                mean_after: valid[after].mean(),
                "mean_change": delta.mean(),
                "median_change": delta.median(),
                "improved": int((delta < 0).sum()),
                "declined": int((delta > 0).sum()),
                "unchanged": int((delta == 0).sum()),
                "pct_improved": (delta < 0).mean() * 100,
            })

    logger.info("Feature change summary: %d rows over %d measures", len(rows), len(measure_columns(features)))
    return pd.DataFrame(rows, columns=columns).round(3)
