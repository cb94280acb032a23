import pandas as pd

from .config import STEWARDSHIP_COL


def profile_frame(df: pd.DataFrame) -> pd.DataFrame:
    """One row per column: dtype, non-null, missing and unique counts."""
    missing = df.isna().sum()
    profile = pd.DataFrame({
        "column": df.columns,
        "dtype": [str(t) for t in df.dtypes],
        "non_null": df.notna().sum().to_numpy(),
        "missing": missing.to_numpy(),
        "missing_pct": (missing / len(df) * 100).round(1).to_numpy() if len(df) else 0.0,
        "unique": df.nunique().to_numpy(),
    })
    return profile


def stewardship_counts(df: pd.DataFrame) -> pd.DataFrame:
    return (
        df[STEWARDSHIP_COL].value_counts()
                           .rename_axis(STEWARDSHIP_COL)
                           .reset_index(name="sites")
    )
