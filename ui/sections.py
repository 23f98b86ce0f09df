from __future__ import annotations
import streamlit as st

from logic import pair_totals_frame, records_frame, spans_frame
from .runner import run_analysis


def _outcome():
    return st.session_state.get("outcome")


# ---------- Recalculate button ----------------------------------------------
def render_recalc_button():
    if st.session_state.get("source") is not None and _outcome() is not None:
        if st.button("🔁 Recalculate"):
            run_analysis()


# ---------- Top pair ---------------------------------------------------------
def render_top_pair():
    outcome = _outcome()
    if outcome is None:
        return
    if not st.session_state.get("show_results"):
        if st.button("📊 Show results"):
            st.session_state["show_results"] = True
            st.rerun()
        return

    st.markdown("## 🤝 Longest-working pair")

    if outcome.status == "unreadable":
        st.error(f"The file could not be read: {outcome.error}")
        return
    if outcome.status == "no_rows":
        st.warning(
            f"No valid rows found ({outcome.parsed.rows_read} row(s) read). "
            "Check the EmpID, ProjectID and DateFrom columns."
        )
        return
    if outcome.status == "no_pairs":
        st.info(
            f"{outcome.record_count} valid record(s), but no two employees worked "
            "on a common project at the same time."
        )
        return

    r = outcome.result
    c1, c2, c3 = st.columns(3)
    c1.metric("Employee ID #1", r.employee_id_low)
    c2.metric("Employee ID #2", r.employee_id_high)
    c3.metric("Total days", r.total_days)

    st.dataframe(spans_frame(r), use_container_width=True, hide_index=True)
    st.caption(
        f"{outcome.record_count} valid record(s), {outcome.parsed.rows_discarded} discarded; "
        f"open-ended assignments counted up to {outcome.today.isoformat()}."
    )
    st.download_button(
        "📥 Download per-project breakdown",
        spans_frame(r).to_csv(index=False).encode("utf-8-sig"),
        file_name="top_pair_projects.csv",
        mime="text/csv",
    )


# ---------- All pairs ----------------------------------------------------------
def render_all_pairs():
    outcome = _outcome()
    if outcome is None or outcome.status != "ok" or not st.session_state.get("show_results"):
        return
    st.markdown("---")
    with st.expander("🔎 All collaborating pairs", expanded=False):
        ranking = pair_totals_frame(outcome.spans_by_pair)
        top_total = outcome.result.total_days
        tied = int((ranking["Total days"] == top_total).sum())
        if tied > 1:
            st.warning(
                f"{tied} pairs share the top total of {top_total} days; "
                "the first one found is shown above."
            )
        st.dataframe(ranking, use_container_width=True, hide_index=True)
        st.download_button(
            "📥 Download all pairs",
            ranking.to_csv(index=False).encode("utf-8-sig"),
            file_name="collaborating_pairs.csv",
            mime="text/csv",
        )


# ---------- Parsed records -----------------------------------------------------
def render_records():
    outcome = _outcome()
    if outcome is None or outcome.parsed is None or not st.session_state.get("show_results"):
        return
    st.markdown("---")
    with st.expander(f"📄 Parsed records ({outcome.record_count})", expanded=False):
        st.dataframe(records_frame(outcome.parsed.records), use_container_width=True, hide_index=True)


# ---------- Logs --------------------------------------------------------------
def render_logs():
    if not st.session_state.get("log_lines"):
        return
    st.markdown("---")
    st.markdown("### 🐞 Analysis Log")

    n = st.slider("Show last N lines", min_value=20, max_value=1000, value=200, step=20)
    tail = st.session_state["log_lines"][-n:]
    st.text_area("Log (compact)", value="\n".join(tail), height=200, label_visibility="collapsed")

    log_bytes = "\n".join(st.session_state["log_lines"]).encode("utf-8-sig")
    st.download_button("📥 Download Log", log_bytes, file_name="analysis.log", mime="text/plain")
