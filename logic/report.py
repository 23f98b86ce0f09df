# logic/report.py

from __future__ import annotations
from typing import Dict, List, Optional, Sequence

import pandas as pd

from .engine import CollaborationSpan, Pair, TopCollaboration
from .parser import AssignmentRecord

SPAN_COLUMNS = ["Employee ID #1", "Employee ID #2", "Project ID", "Days worked"]
PAIR_COLUMNS = ["Employee ID #1", "Employee ID #2", "Projects", "Total days"]
RECORD_COLUMNS = ["EmpID", "ProjectID", "DateFrom", "DateTo"]


def spans_frame(result: Optional[TopCollaboration]) -> pd.DataFrame:
    """Per-project breakdown of the winning pair."""
    if result is None:
        return pd.DataFrame(columns=SPAN_COLUMNS)
    rows = [
        [s.employee_id_low, s.employee_id_high, s.project_id, s.overlap_days]
        for s in result.spans
    ]
    return pd.DataFrame(rows, columns=SPAN_COLUMNS)


def pair_totals_frame(spans_by_pair: Dict[Pair, List[CollaborationSpan]]) -> pd.DataFrame:
    """Every collaborating pair, most days first (ties keep discovery order)."""
    rows = [
        [low, high, len({s.project_id for s in spans}), sum(s.overlap_days for s in spans)]
        for (low, high), spans in spans_by_pair.items()
    ]
    if not rows:
        return pd.DataFrame(columns=PAIR_COLUMNS)
    df = pd.DataFrame(rows, columns=PAIR_COLUMNS)
    return df.sort_values("Total days", ascending=False, kind="stable").reset_index(drop=True)


def records_frame(records: Sequence[AssignmentRecord]) -> pd.DataFrame:
    rows = [
        [r.employee_id, r.project_id, r.start.isoformat(), r.end.isoformat() if r.end else ""]
        for r in records
    ]
    return pd.DataFrame(rows, columns=RECORD_COLUMNS)
