import logging

import pandas as pd

from . import config
from .config import ID_COL, SCORE_COL, STEWARDSHIP_COL, YEAR_COL

logger = logging.getLogger(__name__)

OBSERVED = "observed"
FORECAST = "forecast"


def _points(changes: pd.DataFrame, year: int, scores: pd.Series, source: str) -> pd.DataFrame:
    return pd.DataFrame({
        ID_COL: changes[ID_COL].to_numpy(),
        STEWARDSHIP_COL: changes[STEWARDSHIP_COL].to_numpy(),
        YEAR_COL: year,
        SCORE_COL: scores.to_numpy(),
        "source": source,
    })


def forecast_scores(
    changes: pd.DataFrame,
    horizons=None,
    baseline_year: int = config.BASELINE_YEAR,
    followup_year: int = config.FOLLOWUP_YEAR,
) -> pd.DataFrame:
    """
    Extend each paired site's 2-point trend to the horizon years.

    The annual rate is the score change divided by the years between
    assessments; the forecast starts from the follow-up score and is clipped
    to the score scale. Output is long (one row per site and year) with both
    observed points included, so a line chart can draw history and forecast
    from the same table.
    """
    horizons = sorted(set(horizons or config.FORECAST_YEARS))
    if followup_year <= baseline_year:
        raise ValueError(f"Follow-up year {followup_year} must come after baseline year {baseline_year}")
    too_early = [h for h in horizons if h <= followup_year]
    if too_early:
        raise ValueError(f"Forecast years must be after {followup_year}, got {too_early}")

    before = changes[f"{SCORE_COL}_{baseline_year}"]
    after = changes[f"{SCORE_COL}_{followup_year}"]
    rate = (after - before) / (followup_year - baseline_year)

    frames = [
        _points(changes, baseline_year, before, OBSERVED),
        _points(changes, followup_year, after, OBSERVED),
    ]
    for horizon in horizons:
        projected = (after + rate * (horizon - followup_year)).clip(config.SCORE_MIN, config.SCORE_MAX).round(2)
        frames.append(_points(changes, horizon, projected, FORECAST))

    forecast = pd.concat(frames, ignore_index=True)
    logger.info("Forecast %d sites to %s", len(changes), ", ".join(str(h) for h in horizons))
    return forecast.sort_values([ID_COL, YEAR_COL], kind="stable").reset_index(drop=True)
