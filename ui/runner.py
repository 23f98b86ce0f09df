# ui/runner.py
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Dict, List, Optional

from logic import (
    BatchReadError,
    CollaborationSpan,
    ParseResult,
    TopCollaboration,
    find_collaborations,
    parse_csv,
    submit_analysis,
)


@dataclass
class AnalysisOutcome:
    """Everything the result sections need to tell the three empty cases apart."""
    parsed: Optional[ParseResult] = None
    result: Optional[TopCollaboration] = None
    spans_by_pair: Dict[tuple, List[CollaborationSpan]] = field(default_factory=dict)
    error: Optional[str] = None
    today: Optional[date] = None

    @property
    def record_count(self) -> int:
        return len(self.parsed.records) if self.parsed else 0

    @property
    def status(self) -> str:
        if self.error is not None:
            return "unreadable"
        if self.record_count == 0:
            return "no_rows"
        if self.result is None:
            return "no_pairs"
        return "ok"


def analyze_source(
    src,
    today: Optional[date] = None,
    defer_threshold: Optional[int] = None,
    log_func: Optional[Callable[[str], None]] = None,
) -> AnalysisOutcome:
    log = (lambda m: None) if log_func is None else log_func
    today = date.today() if today is None else today

    try:
        parsed = parse_csv(src, log_func=log)
    except BatchReadError as e:
        log(f"❌ {e}")
        return AnalysisOutcome(error=str(e), today=today)

    future = submit_analysis(
        parsed.records,
        today,
        defer_threshold=defer_threshold,
        log_func=log,
        analysis=find_collaborations,
    )
    result, spans_by_pair = future.result()
    return AnalysisOutcome(parsed=parsed, result=result, spans_by_pair=spans_by_pair, today=today)


def run_analysis() -> Optional[AnalysisOutcome]:
    import streamlit as st
    from .helpers import append_log, get_settings

    src = st.session_state.get("source")
    if src is None:
        return None
    if hasattr(src, "seek"):
        src.seek(0)

    settings = get_settings()
    append_log(f"▶️ Analysing {st.session_state.get('source_name') or 'input'}")

    # buffered: the worker thread must not touch session_state
    lines: List[str] = []
    if settings["show_loading_spinner"]:
        with st.spinner("Finding the longest-working pair…"):
            outcome = analyze_source(src, defer_threshold=settings["defer_threshold"], log_func=lines.append)
    else:
        outcome = analyze_source(src, defer_threshold=settings["defer_threshold"], log_func=lines.append)
    for line in lines:
        append_log(line)

    st.session_state["outcome"] = outcome
    st.session_state["show_results"] = bool(settings["auto_show_results"])

    if outcome.status == "unreadable":
        st.toast(f"Error processing file: {outcome.error}", icon="❌")
    elif outcome.status == "no_rows":
        st.toast("No valid data found in the file.", icon="⚠️")
    elif outcome.status == "no_pairs":
        st.toast("No employee pairs worked together on common projects.", icon="ℹ️")
    else:
        r = outcome.result
        st.toast(
            f"Employees {r.employee_id_low} and {r.employee_id_high} worked together "
            f"for {r.total_days} days.",
            icon="✅",
        )
    return outcome
