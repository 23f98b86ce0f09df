import streamlit as st
import sys
from pathlib import Path

# Make sure we can import local packages when running from /pages
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ui.helpers import DEFAULT_SETTINGS, ensure_session_keys, get_settings, reset_settings, update_settings

st.set_page_config(page_title="Settings", layout="wide")
st.title("⚙️ Settings")

ensure_session_keys()
current = get_settings()

with st.form("settings_form"):
    st.subheader("File upload")
    max_mb = st.number_input(
        "Maximum file size (MB)",
        min_value=1,
        max_value=500,
        value=int(current["max_file_size_mb"]),
        step=1,
    )

    st.subheader("Processing")
    show_spinner = st.toggle("Show loading spinner", value=current["show_loading_spinner"])
    manual_submit = st.toggle(
        "Manual submit",
        value=current["manual_submit"],
        help="Wait for a button press instead of analysing as soon as a file is uploaded.",
    )
    defer_threshold = st.number_input(
        "Run in a worker thread above N records",
        min_value=0,
        value=int(current["defer_threshold"]),
        step=500,
    )

    st.subheader("Results")
    auto_show = st.toggle("Show results automatically", value=current["auto_show_results"])

    saved = st.form_submit_button("💾 Save")

if saved:
    update_settings(
        max_file_size_mb=int(max_mb),
        show_loading_spinner=bool(show_spinner),
        manual_submit=bool(manual_submit),
        defer_threshold=int(defer_threshold),
        auto_show_results=bool(auto_show),
    )
    st.toast("Settings saved", icon="💾")

if st.button("↩️ Reset to defaults"):
    reset_settings()
    st.toast("Settings reset", icon="↩️")
    st.rerun()

st.caption(
    "Defaults: "
    + ", ".join(f"{k}={v}" for k, v in DEFAULT_SETTINGS.items())
)
