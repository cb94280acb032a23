"""Tests for feature alignment and change computation."""

import pandas as pd

from bioretention.features import (
    align_years,
    combine_years,
    compute_changes,
    feature_columns,
    pair_sites,
    shared_features,
)


def test_feature_columns_skip_keys_and_text(cleaned):
    baseline, followup = cleaned

    assert feature_columns(baseline) == ["vegetation_cover", "sediment", "inlet_condition"]
    assert feature_columns(followup) == ["vegetation_cover", "sediment", "mulch_depth"]


def test_shared_features_keep_baseline_order(cleaned):
    assert shared_features(*cleaned) == ["vegetation_cover", "sediment"]


def test_empty_feature_is_not_shared():
    baseline = pd.DataFrame({
        "gri_id": ["A"], "year": [2022], "stewardship": ["None"], "condition_score": [3.0],
        "ponding": [float("nan")],
    })
    followup = baseline.assign(year=2024, ponding=2.0)

    assert shared_features(baseline, followup) == []


def test_align_years_uses_identical_columns(cleaned):
    base, follow = align_years(*cleaned)

    assert list(base.columns) == list(follow.columns) == [
        "gri_id", "year", "stewardship", "condition_score", "vegetation_cover", "sediment",
    ]


class TestCombineYears:

    def test_row_and_column_counts(self, cleaned):
        combined = combine_years(*cleaned)

        assert combined.shape == (10, 7)
        assert combined["gri_id"].nunique() == 6

    def test_in_both_years_flag(self, cleaned):
        combined = combine_years(*cleaned)

        flagged = combined.loc[~combined["in_both_years"], "gri_id"].tolist()
        assert sorted(flagged) == ["G-005", "G-008"]
        assert combined["in_both_years"].sum() == 8

    def test_sorted_by_site_then_year(self, cleaned):
        combined = combine_years(*cleaned)

        assert combined.loc[:1, "year"].tolist() == [2022, 2024]
        assert combined.loc[0, "gri_id"] == "G-001"


class TestPairSites:

    def test_inner_join(self, cleaned):
        paired = pair_sites(*cleaned)

        assert paired["gri_id"].tolist() == ["G-001", "G-002", "G-003", "G-004"]
        assert "condition_score_2022" in paired.columns
        assert "condition_score_2024" in paired.columns
        assert "mulch_depth_2024" not in paired.columns

    def test_stewardship_follows_the_later_year(self, cleaned):
        paired = pair_sites(*cleaned).set_index("gri_id")

        assert paired.loc["G-003", "stewardship"] == "Seeding"
        assert paired.loc["G-003", "stewardship_2022"] == "None"
        assert paired["stewardship_changed"].tolist() == [False, False, True, False]


class TestComputeChanges:

    def test_change_is_followup_minus_baseline(self, cleaned):
        changes = compute_changes(pair_sites(*cleaned), shared_features(*cleaned)).set_index("gri_id")

        assert changes["condition_score_change"].tolist() == [-1, 0, 1, -1]
        assert changes.loc["G-002", "vegetation_cover_change"] == -1
        assert changes.loc["G-003", "sediment_change"] == -1

    def test_lower_score_is_an_improvement(self, cleaned):
        changes = compute_changes(pair_sites(*cleaned), shared_features(*cleaned))

        assert changes["condition_trend"].tolist() == ["Improved", "No Change", "Declined", "Improved"]
