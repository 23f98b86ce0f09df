from __future__ import annotations
import re
from datetime import date, datetime as dt
from typing import Dict, Optional

import pandas as pd

# Normalized (trimmed, lower-cased) header names of the input CSV.
EMP_ID_COL = "empid"
PROJECT_ID_COL = "projectid"
DATE_FROM_COL = "datefrom"
DATE_TO_COL = "dateto"

DATE_CACHE_MAX_ENTRIES = 1024

_ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$", re.ASCII)
_WHOLE_NUMBER_RE = re.compile(r"^\+?(\d+)(?:\.0*)?$", re.ASCII)


def _norm_header(x) -> str:
    return str(x).strip().lower()


def _is_blank(v) -> bool:
    if v is None:
        return True
    if isinstance(v, float) and pd.isna(v):
        return True
    return str(v).strip() == ""


def parse_id(v) -> Optional[int]:
    """Return a non-negative integer id, or None when the value is unusable."""
    if _is_blank(v) or isinstance(v, bool):
        return None
    if isinstance(v, int):
        return v if v >= 0 else None
    if isinstance(v, float):
        return int(v) if v.is_integer() and v >= 0 else None
    m = _WHOLE_NUMBER_RE.match(str(v).strip())
    return int(m.group(1)) if m else None


def _parse_date_text(s: str) -> Optional[date]:
    m = _ISO_DATE_RE.match(s)
    if m:
        try:
            return date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
        except ValueError:
            # e.g. 2024-02-30: let the free-form parser have a go
            pass
    try:
        ts = pd.to_datetime(s, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None
    if ts is None or pd.isna(ts):
        return None
    return ts.date()


def parse_date_value(v, cache: Optional["DateParseCache"] = None) -> Optional[date]:
    """
    Resolve a raw cell into a calendar date (no time component).
    Empty cells, NaN and the literal NULL (any case) are treated as absent.
    """
    if _is_blank(v):
        return None
    if isinstance(v, dt):  # also pd.Timestamp
        return None if pd.isna(v) else v.date()
    if isinstance(v, date):
        return v
    s = str(v).strip()
    if s.upper() == "NULL":
        return None
    if cache is not None:
        return cache.get(s)
    return _parse_date_text(s)


class DateParseCache:
    """Memoizes date strings for one parse call; stops growing at max_entries."""

    def __init__(self, max_entries: int = DATE_CACHE_MAX_ENTRIES):
        self.max_entries = max_entries
        self._entries: Dict[str, Optional[date]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, s: str) -> Optional[date]:
        if s in self._entries:
            return self._entries[s]
        parsed = _parse_date_text(s)
        if len(self._entries) < self.max_entries:
            self._entries[s] = parsed
        return parsed

    def clear(self) -> None:
        self._entries.clear()


def canonical_pair(a: int, b: int) -> tuple[int, int]:
    return (a, b) if a <= b else (b, a)
