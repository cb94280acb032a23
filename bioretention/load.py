import logging
import re

import pandas as pd

from . import config
from .config import ID_COL, SCORE_COL, STEWARDSHIP_COL, YEAR_COL
from .errors import WorkbookError

logger = logging.getLogger(__name__)

# Keys are lowercased labels with punctuation collapsed to single spaces
_STEWARDSHIP_LOOKUP = {
    "": "None",
    "none": "None",
    "na": "None",
    "n a": "None",
    "no": "None",
    "no stewardship": "None",
    "seeding": "Seeding",
    "seed": "Seeding",
    "green streets": "Green Streets",
    "green street": "Green Streets",
    "greenstreets": "Green Streets",
}


def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Lowercase headers and collapse spaces/punctuation to underscores so that
    "GRI ID" and "Gri-ID " both become gri_id, then apply COLUMN_ALIASES.
    Spreadsheet index columns ("Unnamed: 0") are dropped.
    """
    df = df.copy()
    cols = [re.sub(r"[^0-9a-z]+", "_", str(c).strip().lower()).strip("_") for c in df.columns]
    df.columns = [config.COLUMN_ALIASES.get(c, c) for c in cols]

    df = df.loc[:, ~df.columns.str.startswith("unnamed")]
    # An alias can collide with a header that was already canonical
    return df.loc[:, ~df.columns.duplicated()].copy()


def normalize_stewardship(series: pd.Series) -> pd.Series:
    """Map stewardship spellings onto None / Seeding / Green Streets."""
    keys = (
        series.fillna("")
              .astype(str)
              .str.lower()
              .str.replace(r"[^a-z]+", " ", regex=True)
              .str.strip()
    )
    labels = keys.map(_STEWARDSHIP_LOOKUP)

    unknown = labels.isna()
    if unknown.any():
        raw = series[unknown].astype(str).str.strip()
        logger.warning("Unrecognized stewardship labels kept as-is: %s", sorted(raw.unique()))
        labels = labels.where(~unknown, raw.str.title())
    return labels


def sheet_year(sheet: str, default: int) -> int:
    """Sheets named after their assessment year ("2022") carry the year themselves."""
    name = str(sheet).strip()
    return int(name) if name.isdigit() else default


def read_sheet(path, sheet: str) -> pd.DataFrame:
    with pd.ExcelFile(path) as workbook:
        if sheet not in workbook.sheet_names:
            raise WorkbookError(
                f"Sheet {sheet!r} not found in {path}; "
                f"available sheets: {', '.join(workbook.sheet_names)}"
            )
        df = pd.read_excel(workbook, sheet_name=sheet)

    logger.info("Read %d rows x %d columns from sheet %r", len(df), df.shape[1], sheet)
    return df


def _clean_ids(series: pd.Series) -> pd.Series:
    # Numeric IDs come back from Excel as floats when the column has blanks
    ids = series.astype(object).map(
        lambda v: str(int(v)) if isinstance(v, float) and v.is_integer() else str(v),
        na_action="ignore",
    )
    return ids.astype("string").str.strip()


def clean_sheet(df: pd.DataFrame, year: int) -> pd.DataFrame:
    """
    Clean one yearly assessment sheet.
    Keeps:
      - rows with a GRI ID and a condition score inside [SCORE_MIN, SCORE_MAX]
      - the first row of each GRI ID
    Adds:
      - year: the assessment year
      - stewardship: normalized program label (None when the column is absent)
    Every other column whose values all parse as numbers is coerced to numeric;
    text columns with the odd numeric cell are left as text.
    """
    df = normalize_columns(df)

    missing = [c for c in (ID_COL, SCORE_COL) if c not in df.columns]
    if missing:
        raise WorkbookError(f"{year} sheet is missing required column(s): {', '.join(missing)}")

    total = len(df)

    df[ID_COL] = _clean_ids(df[ID_COL])
    has_id = df[ID_COL].fillna("").ne("")
    df = df[has_id].copy()
    df[ID_COL] = df[ID_COL].astype(str)
    logger.info("%d: dropped %d rows without a GRI ID", year, total - len(df))

    df[SCORE_COL] = pd.to_numeric(df[SCORE_COL], errors="coerce")
    in_range = df[SCORE_COL].between(config.SCORE_MIN, config.SCORE_MAX)
    logger.info("%d: dropped %d rows with a missing or out-of-range condition score", year, int((~in_range).sum()))
    df = df[in_range].copy()

    before = len(df)
    df = df.drop_duplicates(subset=ID_COL, keep="first")
    if len(df) < before:
        logger.warning("%d: dropped %d duplicate GRI IDs", year, before - len(df))

    if STEWARDSHIP_COL in df.columns:
        df[STEWARDSHIP_COL] = normalize_stewardship(df[STEWARDSHIP_COL])
    else:
        logger.warning("%d: no stewardship column, treating every site as None", year)
        df[STEWARDSHIP_COL] = "None"

    for col in df.columns.difference([ID_COL, STEWARDSHIP_COL, SCORE_COL, YEAR_COL], sort=False):
        if pd.api.types.is_datetime64_any_dtype(df[col]) or pd.api.types.is_bool_dtype(df[col]):
            continue
        coerced = pd.to_numeric(df[col], errors="coerce")
        if coerced.notna().any() and coerced.notna().sum() == df[col].notna().sum():
            df[col] = coerced

    df[YEAR_COL] = year

    leading = [ID_COL, YEAR_COL, STEWARDSHIP_COL, SCORE_COL]
    rest = [c for c in df.columns if c not in leading]
    logger.info("%d: %d of %d rows kept", year, len(df), total)
    return df[leading + rest].reset_index(drop=True)


def load_workbook(
    path,
    baseline_sheet: str = config.BASELINE_SHEET,
    followup_sheet: str = config.FOLLOWUP_SHEET,
    baseline_year: int = config.BASELINE_YEAR,
    followup_year: int = config.FOLLOWUP_YEAR,
) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Read and clean both assessment sheets."""
    baseline = clean_sheet(read_sheet(path, baseline_sheet), baseline_year)
    followup = clean_sheet(read_sheet(path, followup_sheet), followup_year)
    return baseline, followup
