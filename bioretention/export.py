import logging
import os

import pandas as pd

logger = logging.getLogger(__name__)

# Table name -> CSV file written for Tableau
OUTPUT_FILES = {
    "combined": "combined_clean.csv",
    "forecast": "forecast.csv",
    "summary_by_stewardship": "summary_by_stewardship.csv",
    "distribution": "score_distribution.csv",
    "feature_changes": "feature_change_summary.csv",
}


def export_tables(tables: dict[str, pd.DataFrame], out_dir: str) -> dict[str, str]:
    unknown = sorted(set(tables) - set(OUTPUT_FILES))
    if unknown:
        raise KeyError(f"No output file defined for table(s): {', '.join(unknown)}")

    os.makedirs(out_dir, exist_ok=True)

    written = {}
    for name, table in tables.items():
        path = os.path.join(out_dir, OUTPUT_FILES[name])
        table.to_csv(path, index=False)
        logger.info("Wrote %s (%d rows)", path, len(table))
        written[name] = path
    return written
