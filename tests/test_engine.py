"""
Unit tests for the collaboration engine.
"""

import random
from datetime import date, timedelta

import pytest

from logic import CollaborationSpan, collect_spans, find_collaborations, find_top_collaboration
from logic.engine import overlap_days, select_top


class TestOverlapDays:
    """Tests for overlap_days()."""

    def test_partial_overlap_is_inclusive(self, rec, today):
        a = rec(1, 100, "2024-01-01", "2024-01-10")
        b = rec(2, 100, "2024-01-05", "2024-01-20")
        assert overlap_days(a, b, today) == 6

    def test_symmetric(self, rec, today):
        a = rec(1, 100, "2024-01-01", "2024-03-10")
        b = rec(2, 100, "2024-02-05", None)
        assert overlap_days(a, b, today) == overlap_days(b, a, today)

    def test_single_shared_day_counts_as_one(self, rec, today):
        a = rec(1, 100, "2024-01-10", "2024-01-10")
        b = rec(2, 100, "2024-01-10", "2024-01-10")
        assert overlap_days(a, b, today) == 1

    def test_touching_ends_count_as_one(self, rec, today):
        a = rec(1, 100, "2024-01-01", "2024-01-10")
        b = rec(2, 100, "2024-01-10", "2024-01-20")
        assert overlap_days(a, b, today) == 1

    def test_adjacent_but_not_touching_is_zero(self, rec, today):
        a = rec(1, 100, "2024-01-01", "2024-01-09")
        b = rec(2, 100, "2024-01-10", "2024-01-20")
        assert overlap_days(a, b, today) == 0

    def test_open_end_uses_today(self, rec, today):
        a = rec(1, 100, "2024-05-01", None)
        b = rec(2, 100, "2024-05-01", None)
        assert overlap_days(a, b, today) == 32  # May 1 .. June 1

    def test_dst_boundary_has_no_drift(self, rec, today):
        # spans the March and October DST switches in most zones
        a = rec(1, 100, "2024-03-01", "2024-11-30")
        b = rec(2, 100, "2024-03-01", "2024-11-30")
        assert overlap_days(a, b, today) == (date(2024, 11, 30) - date(2024, 3, 1)).days + 1

    def test_end_before_start_overlaps_nothing(self, rec, today):
        a = rec(1, 100, "2024-02-01", "2024-01-01")
        b = rec(2, 100, "2024-01-01", "2024-03-01")
        assert overlap_days(a, b, today) == 0
        assert overlap_days(b, a, today) == 0


class TestFindTopCollaboration:
    """Scenario tests for find_top_collaboration()."""

    def test_two_employees_one_project(self, rec, today):
        records = [
            rec(1, 100, "2024-01-01", "2024-01-10"),
            rec(2, 100, "2024-01-05", "2024-01-20"),
        ]

        top = find_top_collaboration(records, today)

        assert top.pair == (1, 2)
        assert top.total_days == 6
        assert top.spans == (CollaborationSpan(1, 2, 100, 6),)

    def test_staggered_windows_find_nothing(self, rec, today):
        records = [
            rec(1, 100, "2024-01-01", "2024-01-05"),
            rec(2, 100, "2024-01-10", "2024-01-15"),
            rec(3, 100, "2024-01-20", "2024-01-25"),
        ]
        assert find_top_collaboration(records, today) is None

    def test_same_pair_on_two_projects_sums(self, rec, today):
        records = [
            rec(1, 100, "2024-01-01", "2024-01-03"),
            rec(2, 100, "2024-01-01", "2024-01-03"),
            rec(2, 200, "2024-02-01", "2024-02-04"),
            rec(1, 200, "2024-02-01", "2024-02-04"),
        ]

        top = find_top_collaboration(records, today)

        assert top.pair == (1, 2)
        assert top.total_days == 7
        assert [(s.project_id, s.overlap_days) for s in top.spans] == [(100, 3), (200, 4)]

    def test_finite_end_binds_over_open_end(self, rec, today):
        records = [
            rec(1, 100, "2024-01-01", None),
            rec(2, 100, "2024-01-01", "2024-05-01"),
        ]

        top = find_top_collaboration(records, today)

        assert top.total_days == (date(2024, 5, 1) - date(2024, 1, 1)).days + 1

    def test_canonical_order_regardless_of_input_order(self, rec, today):
        records = [
            rec(9, 100, "2024-01-01", "2024-01-10"),
            rec(3, 100, "2024-01-02", "2024-01-10"),
        ]

        top = find_top_collaboration(records, today)

        assert top.pair == (3, 9)
        assert all(s.employee_id_low <= s.employee_id_high for s in top.spans)

    def test_reversed_pair_aggregates_under_one_key(self, rec, today):
        records = [
            rec(5, 100, "2024-01-01", "2024-01-10"),
            rec(4, 100, "2024-01-05", "2024-01-10"),
            rec(4, 200, "2024-01-01", "2024-01-10"),
            rec(5, 200, "2024-01-05", "2024-01-10"),
        ]

        spans = collect_spans(records, today)

        assert list(spans) == [(4, 5)]
        assert len(spans[(4, 5)]) == 2

    def test_best_pair_wins(self, rec, today):
        records = [
            rec(1, 100, "2024-01-01", "2024-01-10"),
            rec(2, 100, "2024-01-01", "2024-01-05"),
            rec(3, 100, "2024-01-01", "2024-01-10"),
        ]

        top = find_top_collaboration(records, today)

        assert top.pair == (1, 3)
        assert top.total_days == 10

    def test_tie_goes_to_first_pair_found(self, rec, today):
        records = [
            rec(7, 300, "2024-01-01", "2024-01-05"),
            rec(8, 300, "2024-01-01", "2024-01-05"),
            rec(1, 100, "2024-01-01", "2024-01-05"),
            rec(2, 100, "2024-01-01", "2024-01-05"),
        ]

        top = find_top_collaboration(records, today)

        # project 300 appears first in the input, so its pair is found first
        assert top.pair == (7, 8)
        assert top.total_days == 5

    @pytest.mark.parametrize("count", [0, 1])
    def test_fewer_than_two_records(self, rec, today, count):
        records = [rec(1, 100, "2024-01-01", "2024-01-10")][:count]
        assert find_top_collaboration(records, today) is None

    def test_single_record_per_project(self, rec, today):
        records = [rec(1, 100, "2024-01-01", None), rec(2, 200, "2024-01-01", None)]
        assert find_top_collaboration(records, today) is None

    def test_same_employee_twice_on_project(self, rec, today):
        # overlapping stints of one person still form a (1, 1) pair
        records = [rec(1, 100, "2024-01-01", "2024-01-10"), rec(1, 100, "2024-01-05", "2024-01-06")]
        top = find_top_collaboration(records, today)
        assert top.pair == (1, 1)
        assert top.total_days == 2

    def test_total_is_sum_of_spans(self, rec, today):
        records = [
            rec(1, p, "2024-01-01", f"2024-01-{p % 20 + 1:02d}") for p in range(1, 8)
        ] + [
            rec(2, p, "2024-01-01", "2024-01-31") for p in range(1, 8)
        ]

        top = find_top_collaboration(records, today)

        assert top.total_days == sum(s.overlap_days for s in top.spans)
        assert len({s.project_id for s in top.spans}) == len(top.spans)

    def test_deterministic(self, rec, today):
        records = [
            rec(i % 13, i % 5, f"2024-{i % 12 + 1:02d}-01", None if i % 4 == 0 else f"2024-12-{i % 28 + 1:02d}")
            for i in range(60)
        ]
        assert find_top_collaboration(records, today) == find_top_collaboration(records, today)

    def test_today_defaults_to_current_date(self, rec):
        start = (date.today() - timedelta(days=2)).isoformat()
        records = [rec(1, 100, start, None), rec(2, 100, start, None)]

        top = find_top_collaboration(records)

        assert top.total_days == 3

    def test_logs_outcome(self, rec, today):
        lines = []
        find_top_collaboration(
            [rec(1, 100, "2024-01-01", "2024-01-10"), rec(2, 100, "2024-01-05", "2024-01-20")],
            today,
            log_func=lines.append,
        )
        assert len(lines) == 1
        assert "1/2" in lines[0]


class TestFindCollaborations:
    """Tests for find_collaborations(), which also returns the per-pair spans."""

    def test_returns_every_pair(self, rec, today):
        records = [
            rec(1, 100, "2024-01-01", "2024-01-10"),
            rec(2, 100, "2024-01-05", "2024-01-20"),
            rec(3, 100, "2024-01-15", "2024-01-16"),
        ]

        top, spans = find_collaborations(records, today)

        assert top.pair == (1, 2)
        assert list(spans) == [(1, 2), (2, 3)]

    def test_no_records(self, today):
        assert find_collaborations([], today) == (None, {})


def test_select_top_empty():
    assert select_top({}) is None


def test_large_input_scales_per_project(rec, today):
    """10,000 records over 50 projects with short windows finish quickly."""
    rng = random.Random(1234)
    base = date(2020, 1, 1)
    records = []
    for i in range(10_000):
        start = base + timedelta(days=rng.randrange(0, 2000))
        end = start + timedelta(days=rng.randrange(0, 30))
        records.append(rec(i, i % 50, start.isoformat(), end.isoformat()))

    top, spans = find_collaborations(records, today)

    assert top is not None
    assert top.total_days == max(sum(s.overlap_days for s in v) for v in spans.values())
