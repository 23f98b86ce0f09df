import streamlit as st

# --- Ensure local packages (ui/, logic/) are importable ----------------------
import sys
from pathlib import Path
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
# -----------------------------------------------------------------------------

from ui.helpers import ensure_session_keys
from ui.upload import render_uploads
from ui.sections import (
    render_recalc_button,
    render_top_pair,
    render_all_pairs,
    render_records,
    render_logs,
)

st.set_page_config(
    page_title="Employee Pairs",
    layout="wide",
)

st.title("🤝 Pair of Employees Who Worked Together the Longest")

# init session keys
ensure_session_keys()

# Upload (auto-runs unless manual submit is enabled in Settings)
render_uploads()

# Recalculate button
render_recalc_button()

# Sections
render_top_pair()
render_all_pairs()
render_records()
render_logs()
