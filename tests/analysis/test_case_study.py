from datetime import date

import pandas as pd
import pytest

from tornado_tracks.analysis.case_study import (
    CaseStudyComparison,
    compare_case_study,
    select_event,
    upper_tail_percentage,
)
from tornado_tracks.converters.convert_spc_tornadoes import enrich_events
from tornado_tracks.errors import DataIntegrityError


@pytest.fixture
def enriched(reconciled):
    return enrich_events(reconciled)


class TestUpperTailPercentage:
    def test_third_highest_of_ten(self):
        values = [3.0, 9.0, 1.0, 7.0, 10.0, 2.0, 8.0, 5.0, 4.0, 6.0]
        assert upper_tail_percentage(values, 8.0) == 30.0

    def test_includes_ties(self):
        values = [1, 2, 2, 2, 5]
        assert upper_tail_percentage(values, 2) == 80.0

    def test_maximum_is_single_event(self):
        values = list(range(1, 201))
        assert upper_tail_percentage(values, 200) == pytest.approx(0.5)

    def test_threshold_below_all(self):
        assert upper_tail_percentage([4, 5, 6], 0) == 100.0

    def test_empty_rejected(self):
        with pytest.raises(DataIntegrityError):
            upper_tail_percentage([], 1.0)


class TestSelectEvent:
    def test_selects_case_study(self, enriched):
        event = select_event(enriched, "OH", 5, date(1974, 4, 3))
        assert event["om"] == 118
        assert event["cas"] == 1182

    def test_all_three_conditions_required(self, enriched):
        # Same state and date, but the other OH tornado was rated 0 after imputation
        with pytest.raises(DataIntegrityError, match="found 0"):
            select_event(enriched, "OH", 4, date(1974, 4, 3))

    def test_no_match_raises(self, enriched):
        with pytest.raises(DataIntegrityError, match="found 0"):
            select_event(enriched, "IN", 5, date(1974, 4, 3))

    def test_multiple_matches_raise(self, enriched):
        enriched.loc[1, "mag"] = 5
        with pytest.raises(DataIntegrityError, match="found 2"):
            select_event(enriched, "OH", 5, date(1974, 4, 3))

    def test_falls_back_to_date_field(self, reconciled):
        event = select_event(reconciled, "OH", 5, date(1974, 4, 3))
        assert event["om"] == 118


class TestCompareCaseStudy:
    def test_case_study_ranked_on_both_metrics(self, enriched, run_context):
        comparison = compare_case_study(enriched, run_context)
        assert comparison.label == "Xenia"
        assert comparison.total_events == 6
        # Xenia leads the fixture on both energy and casualties
        assert comparison.energy_upper_tail_pct == pytest.approx(100 / 6)
        assert comparison.casualty_upper_tail_pct == pytest.approx(100 / 6)

    def test_percentage_matches_direct_computation(self, enriched, run_context):
        comparison = compare_case_study(enriched, run_context)
        expected = (enriched["ED"] >= comparison.energy_dissipation).mean() * 100
        assert comparison.energy_upper_tail_pct == pytest.approx(expected)

    def test_exposes_event_values(self, enriched, run_context):
        comparison = compare_case_study(enriched, run_context)
        assert comparison.casualties == 1182
        assert isinstance(comparison.event, pd.Series)

    def test_percentile_is_complement_of_upper_tail(self, enriched, run_context):
        comparison = compare_case_study(enriched, run_context)
        assert comparison.energy_percentile == pytest.approx(100 - 100 / 6)
        assert comparison.casualty_percentile == pytest.approx(100 - 100 / 6)


class TestCaseStudyComparison:
    def test_published_percentile_from_upper_tail(self):
        comparison = CaseStudyComparison(
            label="Xenia",
            event=pd.Series({"ED": 1.0, "cas": 1182}),
            energy_upper_tail_pct=0.61,
            casualty_upper_tail_pct=0.02,
            total_events=60114,
        )
        assert comparison.energy_percentile == pytest.approx(99.39)
        assert comparison.casualty_percentile == pytest.approx(99.98)
