# logic/engine.py

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .parser import AssignmentRecord
from .utils import canonical_pair

Pair = Tuple[int, int]

# -----------------------------------------------------------------------------
# Data classes
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class CollaborationSpan:
    employee_id_low: int
    employee_id_high: int
    project_id: int
    overlap_days: int

    @property
    def pair(self) -> Pair:
        return (self.employee_id_low, self.employee_id_high)

    def to_dict(self) -> dict:
        return {
            "employee_id_low": self.employee_id_low,
            "employee_id_high": self.employee_id_high,
            "project_id": self.project_id,
            "overlap_days": self.overlap_days,
        }


@dataclass(frozen=True)
class TopCollaboration:
    employee_id_low: int
    employee_id_high: int
    total_days: int
    spans: Tuple[CollaborationSpan, ...]

    @property
    def pair(self) -> Pair:
        return (self.employee_id_low, self.employee_id_high)

    def to_dict(self) -> dict:
        return {
            "employee_id_low": self.employee_id_low,
            "employee_id_high": self.employee_id_high,
            "total_days": self.total_days,
            "projects": [s.to_dict() for s in self.spans],
        }


# -----------------------------------------------------------------------------
# Overlap
# -----------------------------------------------------------------------------
def overlap_days(a: AssignmentRecord, b: AssignmentRecord, today: date) -> int:
    """Inclusive number of calendar days both assignments cover (0 if disjoint)."""
    start = max(a.start, b.start)
    end = min(a.effective_end(today), b.effective_end(today))
    if start > end:
        return 0
    return (end - start).days + 1


def _group_by_project(records: Sequence[AssignmentRecord]) -> Dict[int, List[AssignmentRecord]]:
    groups: Dict[int, List[AssignmentRecord]] = defaultdict(list)
    for r in records:
        groups[r.project_id].append(r)
    return groups


def collect_spans(
    records: Sequence[AssignmentRecord],
    today: Optional[date] = None,
) -> Dict[Pair, List[CollaborationSpan]]:
    """
    Sweep every project and collect overlap spans keyed by canonical pair.
    Keys keep insertion order: project first-appearance, then sweep order.
    """
    today = date.today() if today is None else today
    by_pair: Dict[Pair, List[CollaborationSpan]] = {}

    for project_id, group in _group_by_project(records).items():
        if len(group) < 2:
            continue
        group = sorted(group, key=lambda r: r.start)

        for i in range(len(group) - 1):
            a = group[i]
            a_end = a.effective_end(today)
            for j in range(i + 1, len(group)):
                b = group[j]
                # sorted by start: nobody after b can reach back into a
                if b.start > a_end:
                    break
                days = overlap_days(a, b, today)
                if days <= 0:
                    continue
                low, high = canonical_pair(a.employee_id, b.employee_id)
                by_pair.setdefault((low, high), []).append(
                    CollaborationSpan(low, high, project_id, days)
                )

    return by_pair


def pair_totals(spans_by_pair: Dict[Pair, List[CollaborationSpan]]) -> Dict[Pair, int]:
    return {pair: sum(s.overlap_days for s in spans) for pair, spans in spans_by_pair.items()}


def select_top(spans_by_pair: Dict[Pair, List[CollaborationSpan]]) -> Optional[TopCollaboration]:
    """Strictly greatest total wins; on a tie the earlier-inserted pair is kept."""
    best: Optional[TopCollaboration] = None
    for pair, total in pair_totals(spans_by_pair).items():
        if total > (best.total_days if best else 0):
            best = TopCollaboration(pair[0], pair[1], total, tuple(spans_by_pair[pair]))
    return best


# -----------------------------------------------------------------------------
# Public API
# -----------------------------------------------------------------------------
def find_collaborations(
    records: Sequence[AssignmentRecord],
    today: Optional[date] = None,
    log_func: Optional[Callable[[str], None]] = None,
) -> Tuple[Optional[TopCollaboration], Dict[Pair, List[CollaborationSpan]]]:
    """Like find_top_collaboration, but also returns every pair's spans."""
    log = (lambda m: None) if log_func is None else log_func

    if len(records) < 2:
        log(f"ℹ️ {len(records)} record(s): need at least 2 to find a pair.")
        return None, {}

    spans_by_pair = collect_spans(records, today)
    top = select_top(spans_by_pair)
    if top is None:
        log(f"ℹ️ {len(records)} record(s): no overlapping assignments found.")
        return None, spans_by_pair

    log(
        f"✅ {len(spans_by_pair)} collaborating pair(s); top pair "
        f"{top.employee_id_low}/{top.employee_id_high} with {top.total_days} day(s) "
        f"over {len(top.spans)} project(s)."
    )
    return top, spans_by_pair


def find_top_collaboration(
    records: Sequence[AssignmentRecord],
    today: Optional[date] = None,
    log_func: Optional[Callable[[str], None]] = None,
) -> Optional[TopCollaboration]:
    """
    Return the pair of employees with the most days worked together across
    shared projects, or None when no two assignments ever overlap.
    """
    return find_collaborations(records, today, log_func)[0]
