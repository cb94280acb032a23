"""
Pytest fixtures: two small yearly assessment sheets and a workbook holding them.

The 2022 sheet has five valid sites (G-001..G-005) plus one row each that the
cleaning must drop: blank GRI ID, non-numeric score, out-of-range score and a
duplicate GRI ID. The 2024 sheet has five valid sites (G-001..G-004, G-008)
and one row without a score. Four sites are assessed in both years.
"""

import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def raw_2022():
    return pd.DataFrame({
        "GRI ID": ["G-001", "G-002", "G-003", "G-004", "G-005", np.nan, "G-006", "G-007", "G-001"],
        "Stewardship": ["Green Streets", "seeding", np.nan, "None", "green street", "Seeding", "Seeding", "None", "None"],
        "Condition Score": [2, 3, 4, 5, 1, 3, "n/a", 7, 5],
        "Vegetation Cover": [2, 3, 4, 5, 1, 3, 3, 3, 5],
        "Sediment": [1, 2, 3, 4, 1, 2, 2, 2, 4],
        "Inlet Condition": [1, 2, 3, 2, 1, 2, 2, 2, 2],
        "Notes": ["ok", np.nan, "overgrown", np.nan, np.nan, np.nan, np.nan, np.nan, np.nan],
    })


@pytest.fixture
def raw_2024():
    return pd.DataFrame({
        "GRI ID": ["G-001", "G-002", "G-003", "G-004", "G-008", "G-009"],
        "Stewardship Type": ["Green Streets", "Seeding", "Seeding", "None", "Green Streets", "None"],
        "Overall Condition": [1, 3, 5, 4, 2, np.nan],
        "Vegetation Cover": [1, 2, 5, 4, 2, 3],
        "Sediment": [1, 3, 2, 4, 1, 2],
        "Mulch Depth": [3, 2, 1, 1, 2, 2],
    })


@pytest.fixture
def workbook(tmp_path, raw_2022, raw_2024):
    path = tmp_path / "bioretention_condition.xlsx"
    with pd.ExcelWriter(path) as writer:
        raw_2022.to_excel(writer, sheet_name="2022", index=False)
        raw_2024.to_excel(writer, sheet_name="2024", index=False)
    return path


@pytest.fixture
def cleaned(raw_2022, raw_2024):
    from bioretention.load import clean_sheet

    return clean_sheet(raw_2022, 2022), clean_sheet(raw_2024, 2024)
