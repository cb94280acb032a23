import os

from dotenv import load_dotenv

# -----------------------------
# Paths and sheet layout for the condition-assessment workbook.
# Every value can be overridden from the environment (or a .env file).
# -----------------------------

load_dotenv()

WORKBOOK_PATH = os.getenv("BIORETENTION_WORKBOOK", "data/bioretention_condition.xlsx")
OUT_DIR = os.getenv("BIORETENTION_OUT_DIR", "analysis/outputs")

BASELINE_SHEET = os.getenv("BIORETENTION_BASELINE_SHEET", "2022")
FOLLOWUP_SHEET = os.getenv("BIORETENTION_FOLLOWUP_SHEET", "2024")
BASELINE_YEAR = int(os.getenv("BIORETENTION_BASELINE_YEAR", "2022"))
FOLLOWUP_YEAR = int(os.getenv("BIORETENTION_FOLLOWUP_YEAR", "2024"))

FORECAST_YEARS = [
    int(y) for y in os.getenv("BIORETENTION_FORECAST_YEARS", "2026,2028").split(",") if y.strip()
]

# Condition score: 1 is best, 5 is worst
SCORE_MIN = 1
SCORE_MAX = 5
GOOD_SCORE_MAX = 2
POOR_SCORE_MIN = 4

STEWARDSHIP_LEVELS = ["None", "Seeding", "Green Streets"]
ALL_STEWARDSHIP = "All"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Header spellings seen across the yearly extracts, after normalization
COLUMN_ALIASES = {
    "gri": "gri_id",
    "griid": "gri_id",
    "gri_site_id": "gri_id",
    "site_id": "gri_id",
    "score": "condition_score",
    "condition": "condition_score",
    "overall_condition": "condition_score",
    "overall_condition_score": "condition_score",
    "condition_rating": "condition_score",
    "stewardship_type": "stewardship",
    "stewardship_program": "stewardship",
    "program": "stewardship",
}

ID_COL = "gri_id"
SCORE_COL = "condition_score"
STEWARDSHIP_COL = "stewardship"
YEAR_COL = "year"
