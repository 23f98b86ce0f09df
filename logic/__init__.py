# logic/__init__.py
from .parser import AssignmentRecord, BatchReadError, ParseResult, parse_csv, parse_rows, read_rows
from .engine import (
    CollaborationSpan,
    TopCollaboration,
    collect_spans,
    find_collaborations,
    find_top_collaboration,
)
from .scheduling import DEFAULT_DEFER_THRESHOLD, should_defer, submit_analysis
from .report import pair_totals_frame, records_frame, spans_frame

__all__ = [
    "AssignmentRecord",
    "BatchReadError",
    "ParseResult",
    "parse_csv",
    "parse_rows",
    "read_rows",
    "CollaborationSpan",
    "TopCollaboration",
    "collect_spans",
    "find_collaborations",
    "find_top_collaboration",
    "DEFAULT_DEFER_THRESHOLD",
    "should_defer",
    "submit_analysis",
    "pair_totals_frame",
    "records_frame",
    "spans_frame",
]
