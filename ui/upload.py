import hashlib

import streamlit as st

from .helpers import clear_results, format_file_size, get_settings, validate_upload
from .runner import run_analysis


def source_key(src) -> str:
    """Identity of an input: a new upload under an old file name is a new source."""
    if isinstance(src, str):
        return src
    file_id = getattr(src, "file_id", None)
    if file_id:
        return str(file_id)
    digest = hashlib.sha1(src.getvalue()).hexdigest()
    return f"{getattr(src, 'name', '')}:{digest}"


def _set_source(src, name: str) -> bool:
    """Store ``src`` and drop old results when it is a different source; True if it changed."""
    key = source_key(src)
    if st.session_state.get("source_key") == key:
        return False
    st.session_state["source"] = src
    st.session_state["source_key"] = key
    st.session_state["source_name"] = name
    clear_results()
    return True


def _clear_source() -> None:
    st.session_state["source"] = None
    st.session_state["source_key"] = None
    st.session_state["source_name"] = ""
    clear_results()


def render_uploads():
    st.markdown("### 📁 Upload Employee Assignments")
    settings = get_settings()

    use_link = st.toggle(
        "Use a link instead of file upload",
        key="use_link",
        help="Switch to provide a URL pointing to the CSV file.",
    )

    # Clear previous data when switching modes
    if st.session_state.get("_last_use_link") != use_link:
        _clear_source()
        st.session_state["_last_use_link"] = use_link

    if use_link:
        url = st.text_input(
            "🔗 Assignments CSV URL",
            key="csv_url",
            placeholder="https://example.com/assignments.csv",
        )
        if url:
            _set_source(url.strip(), url.strip())
    else:
        up = st.file_uploader(
            "Assignments CSV",
            type="csv",
            label_visibility="collapsed",
            help="Columns: EmpID, ProjectID, DateFrom, DateTo (DateTo may be empty or NULL).",
        )
        if up is None:
            if st.session_state.get("source") is not None and not isinstance(st.session_state["source"], str):
                _clear_source()
                st.toast("File cleared", icon="🧹")
        else:
            error = validate_upload(up.name, up.size, settings["max_file_size_mb"])
            if error:
                st.error(error)
                _clear_source()
            else:
                if _set_source(up, up.name):
                    st.toast(f"{up.name} uploaded successfully", icon="📄")
                st.caption(f"*{up.name}* · {format_file_size(up.size)}")

    if st.session_state.get("source") is None:
        return

    # Auto run once per source unless manual submit is on
    if settings["manual_submit"]:
        if st.button("▶️ Find longest-working pair", type="primary"):
            run_analysis()
    elif st.session_state.get("outcome") is None:
        run_analysis()
