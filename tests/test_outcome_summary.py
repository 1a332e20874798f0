"""OutcomeSummaryCalculator tests"""

import pytest

from outcomes.services import OutcomeSummaryCalculator

from conftest import QUESTIONNAIRE_DEFINITIONS, make_outcome


QUESTIONNAIRES = {q.key: q for q, _ in QUESTIONNAIRE_DEFINITIONS}


@pytest.fixture
def calculator():
    return OutcomeSummaryCalculator(default_mcid=10, nprs_mcid=2)


class TestSummarize:
    def test_odi_improvement_is_meaningful(self, calculator):
        history = [
            make_outcome("odi", "baseline", 40, days=0),
            make_outcome("nprs", "baseline", 6, days=0),
            make_outcome("odi", "followup", 25, days=14),
            make_outcome("nprs", "followup", 5, days=14),
        ]
        summary = calculator.summarize("back", history, QUESTIONNAIRES)

        assert summary.function_questionnaire_key == "odi"
        assert summary.function_change == -15
        assert summary.pain_change == -1
        assert summary.is_meaningful
        assert summary.function_improved is True
        assert summary.baseline_date == history[0].created_at
        assert summary.latest_date == history[2].created_at

    def test_pain_change_alone_can_be_meaningful(self, calculator):
        history = [
            make_outcome("odi", "baseline", 40),
            make_outcome("nprs", "baseline", 6),
            make_outcome("odi", "followup", 36, days=14),
            make_outcome("nprs", "followup", 3, days=14),
        ]
        summary = calculator.summarize("back", history, QUESTIONNAIRES)

        assert summary.function_change == -4
        assert summary.pain_change == -3
        assert summary.is_meaningful

    def test_questionnaire_mcid_overrides_default(self, calculator):
        history = [
            make_outcome("koos", "baseline", 50, condition="knee"),
            make_outcome("koos", "followup", 59, days=10, condition="knee"),
        ]
        with_questionnaire = calculator.summarize("knee", history, QUESTIONNAIRES)
        without_questionnaire = calculator.summarize("knee", history)

        # KOOS MCID is 8, the default is 10
        assert with_questionnaire.is_meaningful
        assert not without_questionnaire.is_meaningful

    def test_koos_higher_is_better(self, calculator):
        history = [
            make_outcome("koos", "baseline", 50, condition="knee"),
            make_outcome("koos", "final", 70, days=30, condition="knee"),
        ]
        summary = calculator.summarize("knee", history, QUESTIONNAIRES)

        assert summary.function_change == 20
        assert summary.function_improved is True

    def test_worsening_odi(self, calculator):
        history = [
            make_outcome("odi", "baseline", 20),
            make_outcome("odi", "followup", 34, days=14),
        ]
        summary = calculator.summarize("back", history)
        assert summary.function_improved is False
        assert summary.is_meaningful

    def test_baseline_only(self, calculator):
        baseline = make_outcome("odi", "baseline", 40)
        summary = calculator.summarize("back", [baseline])

        assert summary.latest_function == baseline
        assert summary.function_change is None
        assert summary.pain_change is None
        assert summary.function_improved is None
        assert not summary.is_meaningful
        assert summary.latest_date is None

    def test_empty_history(self, calculator):
        summary = calculator.summarize("back", [])

        assert summary.baseline_function is None
        assert summary.latest_function is None
        assert summary.function_change is None
        assert not summary.is_meaningful

    def test_latest_followup_and_earliest_baseline_win(self, calculator):
        history = [
            make_outcome("odi", "followup", 30, days=14),
            make_outcome("odi", "baseline", 44, days=1),
            make_outcome("odi", "baseline", 40, days=0),
            make_outcome("odi", "final", 20, days=42),
        ]
        summary = calculator.summarize("back", history)

        assert summary.baseline_function.normalized_score == 40
        assert summary.latest_function.normalized_score == 20
        assert summary.function_change == -20

    def test_other_conditions_ignored(self, calculator):
        history = [
            make_outcome("odi", "baseline", 40),
            make_outcome("koos", "followup", 90, days=5, condition="knee"),
        ]
        summary = calculator.summarize("back", history)
        assert summary.function_change is None

    def test_final_groc_reported(self, calculator):
        groc = make_outcome("groc", "final", 5, days=60)
        summary = calculator.summarize("back", [make_outcome("odi", "baseline", 40), groc])

        assert summary.final_groc == groc
        assert summary.final_date == groc.created_at

    def test_unmapped_condition_tracks_nprs(self, calculator):
        history = [
            make_outcome("nprs", "baseline", 7, condition="hip"),
            make_outcome("nprs", "followup", 4, days=14, condition="hip"),
        ]
        summary = calculator.summarize("hip", history)

        assert summary.function_questionnaire_key == "nprs"
        assert summary.function_change == -3
        assert summary.function_improved is True


class TestCompare:
    def test_threshold_is_inclusive(self, calculator):
        baseline = make_outcome("odi", "baseline", 40)
        latest = make_outcome("odi", "followup", 30, days=14)

        _, _, meaningful = calculator.compare(baseline, latest, None, None, mcid=10)
        assert meaningful

    def test_zero_mcid_uses_default(self, calculator):
        baseline = make_outcome("odi", "baseline", 40)
        latest = make_outcome("odi", "followup", 35, days=14)

        _, _, meaningful = calculator.compare(baseline, latest, None, None, mcid=0)
        assert not meaningful
