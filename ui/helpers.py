from __future__ import annotations
import math
from typing import Optional

import streamlit as st

from logic import DEFAULT_DEFER_THRESHOLD

# ----------------- Settings -----------------

DEFAULT_SETTINGS = {
    "max_file_size_mb": 10,
    "show_loading_spinner": True,
    "manual_submit": False,
    "auto_show_results": True,
    "defer_threshold": DEFAULT_DEFER_THRESHOLD,
}

# ----------------- Session helpers -----------------

def ensure_session_keys() -> None:
    """Create all session_state keys used by the app if missing."""
    defaults = [
        ("settings",   dict(DEFAULT_SETTINGS)),
        ("source",     None),      # uploaded file or URL
        ("source_key", None),
        ("source_name", ""),
        ("outcome",    None),      # ui.runner.AnalysisOutcome
        ("show_results", False),
        ("log_lines",  []),
    ]
    for k, v in defaults:
        if k not in st.session_state:
            st.session_state[k] = v


def get_settings() -> dict:
    ensure_session_keys()
    # merge so settings added later always have a value
    return {**DEFAULT_SETTINGS, **st.session_state["settings"]}


def update_settings(**changes) -> dict:
    unknown = set(changes) - set(DEFAULT_SETTINGS)
    if unknown:
        raise KeyError(f"Unknown setting(s): {', '.join(sorted(unknown))}")
    merged = {**get_settings(), **changes}
    st.session_state["settings"] = merged
    return merged


def reset_settings() -> dict:
    st.session_state["settings"] = dict(DEFAULT_SETTINGS)
    return st.session_state["settings"]


def append_log(msg: str) -> None:
    st.session_state.setdefault("log_lines", []).append(msg)


def clear_results() -> None:
    st.session_state["outcome"] = None
    st.session_state["show_results"] = False

# ----------------- Upload helpers -----------------

def format_file_size(num_bytes: int) -> str:
    if num_bytes <= 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    i = min(int(math.floor(math.log(num_bytes, 1024))), len(units) - 1)
    return f"{round(num_bytes / 1024 ** i, 2):g} {units[i]}"


def validate_upload(name: str, size: int, max_mb: float) -> Optional[str]:
    """Return a user-facing error for an unacceptable upload, or None if it is fine."""
    if not str(name).lower().endswith(".csv"):
        return "Please upload a CSV file."
    if size > max_mb * 1024 * 1024:
        return f"File size exceeds {max_mb:g} MB limit."
    if size == 0:
        return "The selected file is empty."
    return None
