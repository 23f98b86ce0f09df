"""
Tests for analyze_source(): the Streamlit-free part of the app runner.
"""

import io

from ui.runner import AnalysisOutcome, analyze_source


def _csv(text: str) -> io.BytesIO:
    return io.BytesIO(text.encode("utf-8"))


class TestAnalyzeSource:

    def test_finds_top_pair(self, sample_csv, today):
        lines = []

        outcome = analyze_source(str(sample_csv), today=today, log_func=lines.append)

        assert outcome.status == "ok"
        assert outcome.result.pair == (143, 218)
        # project 12: 2013-12-01 .. 2014-01-05
        assert outcome.result.total_days == 36
        assert outcome.parsed.rows_discarded == 2
        assert (143, 218) in outcome.spans_by_pair
        assert lines

    def test_unreadable_source(self, today):
        outcome = analyze_source(_csv("<html><body>nope</body></html>"), today=today)

        assert outcome.status == "unreadable"
        assert "HTML" in outcome.error
        assert outcome.record_count == 0

    def test_no_valid_rows(self, today):
        outcome = analyze_source(_csv("EmpID,ProjectID,DateFrom,DateTo\nx,1,2024-01-01,\n"), today=today)

        assert outcome.status == "no_rows"
        assert outcome.parsed.rows_read == 1

    def test_no_pairs(self, today):
        outcome = analyze_source(
            _csv("EmpID,ProjectID,DateFrom,DateTo\n1,1,2024-01-01,2024-01-05\n2,1,2024-02-01,2024-02-05\n"),
            today=today,
        )

        assert outcome.status == "no_pairs"
        assert outcome.record_count == 2
        assert outcome.result is None

    def test_deferred_run_gives_same_result(self, sample_csv, today):
        inline = analyze_source(str(sample_csv), today=today)
        deferred = analyze_source(str(sample_csv), today=today, defer_threshold=1)

        assert inline.result == deferred.result


def test_empty_outcome_status():
    assert AnalysisOutcome().status == "no_rows"
